"""
Layer 0: Spike 事件与脉冲序列

Spike 记录一次发放:
- 源神经元 ID
- 时间戳 (tick 序号)
- 发放时刻的峰值电位 (按峰值约定, 即阈值)

SpikeTrain 是单个神经元的有界脉冲记录器, 用于发放率 / ISI 统计。
"""

from dataclasses import dataclass
from collections import deque
from typing import List, Optional
import numpy as np

from izhneuron.spike.signal_types import SpikeType


# =============================================================================
# Spike 事件
# =============================================================================

@dataclass(frozen=True, slots=True)
class Spike:
    """单个脉冲事件

    frozen=True 确保 Spike 一旦创建不可修改 (事件不可变)。

    Attributes:
        source_id: 发放神经元 ID
        timestamp: 发放 tick 序号
        peak: 报告的峰值电位 (mV)
    """
    source_id: int
    timestamp: int
    peak: float = 30.0
    spike_type: SpikeType = SpikeType.SPIKE

    @property
    def is_active(self) -> bool:
        return self.spike_type.is_active


# =============================================================================
# SpikeTrain — 脉冲序列
# =============================================================================

class SpikeTrain:
    """单个神经元的脉冲序列记录

    时间戳以 tick 为单位, 通过 dt (ms) 换算为物理时间。
    deque(maxlen) 保证内存有界: 超出 capacity 时自动淘汰最旧记录。

    Attributes:
        neuron_id: 所属神经元 ID
        dt: 每个 tick 的时长 (ms)
        capacity: 最大记录长度
    """

    def __init__(self, neuron_id: int = 0, dt: float = 1.0, capacity: int = 1000):
        self.neuron_id = neuron_id
        self.dt = dt
        self.capacity = capacity
        self._timestamps: deque = deque(maxlen=capacity)

    def record(self, spike: Spike) -> None:
        """记录一个脉冲事件"""
        if spike.is_active:
            self._timestamps.append(spike.timestamp)

    def record_spike(self, timestamp: int) -> None:
        """直接记录发放 tick (避免创建 Spike 对象的开销)"""
        self._timestamps.append(timestamp)

    @property
    def last_spike_time(self) -> Optional[int]:
        """最近一次脉冲的 tick, 无记录时返回 None"""
        return self._timestamps[-1] if self._timestamps else None

    @property
    def count(self) -> int:
        return len(self._timestamps)

    def spike_times_ms(self) -> np.ndarray:
        """所有记录脉冲的时间 (ms)"""
        return np.asarray(self._timestamps, dtype=float) * self.dt

    def firing_rate(self, window_ms: float = 1000.0) -> float:
        """以最近一次脉冲为终点, 统计窗口内平均发放率 (Hz)

        Returns:
            发放率 (Hz). 无脉冲返回 0.0.
        """
        if not self._timestamps:
            return 0.0
        times = self.spike_times_ms()
        window_start = times[-1] - window_ms
        count = int(np.count_nonzero(times > window_start))
        return count * 1000.0 / window_ms

    def isi(self) -> np.ndarray:
        """脉冲间隔序列 (ms), 少于两个脉冲时为空数组"""
        return np.diff(self.spike_times_ms())

    def get_recent_times(self, window_ticks: int = 100) -> List[int]:
        """获取最近窗口内的所有脉冲 tick (从早到晚)"""
        if not self._timestamps:
            return []
        window_start = self._timestamps[-1] - window_ticks
        return [t for t in self._timestamps if t > window_start]

    def clear(self) -> None:
        self._timestamps.clear()

    def __len__(self) -> int:
        return len(self._timestamps)

    def __repr__(self) -> str:
        rate = self.firing_rate() if self._timestamps else 0.0
        return (f"SpikeTrain(neuron={self.neuron_id}, "
                f"count={self.count}, rate={rate:.1f}Hz)")
