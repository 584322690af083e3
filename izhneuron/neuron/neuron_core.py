"""
Layer 2: Izhikevich (2003) 神经元核心 — 实时单步计算单元

每个 tick:
  1. 检查 I, v, u 是否有限 (否则 NumericDivergence)
  2. 子步 Euler 积分 (substeps 个 h = dt/substeps):
       dv/dt = 0.04·v² + 5·v + 140 - u + I
       du/dt = a·(b·v - u)
  3. 某个子步后 v ≥ threshold → 跳过剩余子步, v ← c, u ← u + d
  4. 返回 (v_out, spiked)

输出约定 (峰值约定):
  发放 tick 报告 v_out = threshold (干净的脉冲峰), 存储的 v 已经 reset 为 c。
  下一个 tick 从 c 开始积分。

状态机:
  Integrating ──(v ≥ threshold)──▶ JustSpiked ──(下一个 tick)──▶ Integrating
  reset 在检测到越阈的同一 tick 内原子完成,
  JustSpiked 只以返回的 spiked 标志可见, 不是跨 tick 的持久状态。

每个 tick 的计算量由配置 (substeps) 决定, 与数据无关, O(1)。
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from izhneuron.spike.signal_types import SpikeType, NeuronStatus
from izhneuron.spike.spike import Spike, SpikeTrain
from izhneuron.neuron.errors import NumericDivergence
from izhneuron.neuron.params import NeuronParameters


# =============================================================================
# 神经元状态
# =============================================================================

@dataclass(slots=True)
class NeuronState:
    """模型状态 (v, u), 由 NeuronCore 独占

    Attributes:
        v: 膜电位 (mV)
        u: 恢复变量
    """
    v: float
    u: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.v) and math.isfinite(self.u)


# =============================================================================
# 积分器
# =============================================================================

def advance(
    v: float,
    u: float,
    current: float,
    params: NeuronParameters,
) -> Tuple[float, float, bool]:
    """对 (v, u) 做一个 tick 的子步 Euler 积分, 不做 reset

    每个子步中 v 和 u 都使用子步起点的值。
    一旦某个子步后 v ≥ threshold 立即停止, 返回越阈时刻的 (v, u)。

    Returns:
        (v, u, crossed)
    """
    a = params.a
    b = params.b
    h = params.h
    threshold = params.threshold
    for _ in range(params.substeps):
        dv = 0.04 * v * v + 5.0 * v + 140.0 - u + current
        du = a * (b * v - u)
        v = v + h * dv
        u = u + h * du
        if v >= threshold:
            return v, u, True
    return v, u, False


# =============================================================================
# 神经元核心
# =============================================================================

class NeuronCore:
    """单个 Izhikevich 神经元

    同一实例不可并发调用 step(); 不同实例之间没有共享状态。

    Attributes:
        id: 神经元 ID
        params: 当前参数包 (不可变)
        spike_train: 脉冲记录 (record_spikes=True 时存在)
    """

    def __init__(
        self,
        params: Optional[NeuronParameters] = None,
        neuron_id: int = 0,
        record_spikes: bool = False,
        spike_capacity: int = 1000,
    ):
        self.id = neuron_id
        self.params = params or NeuronParameters()
        self._state = NeuronState(self.params.initial_v, self.params.initial_u)
        self._status = NeuronStatus.OK
        self._tick = 0
        self._spike_count = 0

        if record_spikes:
            self.spike_train = SpikeTrain(
                neuron_id=neuron_id, dt=self.params.dt, capacity=spike_capacity
            )
        else:
            self.spike_train = None

    # =========================================================================
    # 核心仿真步骤
    # =========================================================================

    def step(self, current: float) -> Tuple[float, bool]:
        """推进一个 tick

        Args:
            current: 本 tick 的输入电流 I

        Returns:
            (v_out, spiked): 发放时 v_out = threshold, 否则为新的 v

        Raises:
            NumericDivergence: I 或状态非有限。抛出前状态已回到静息 (c, b·c)。
                发散的 tick 同样计入 tick_count, run_simulation 的时间轴依赖这一点。
        """
        p = self.params
        state = self._state

        if not math.isfinite(current):
            self._diverge(current, state.v, state.u, "input")
        if not state.is_finite:
            self._diverge(current, state.v, state.u, "state")

        v, u, crossed = advance(state.v, state.u, current, p)

        if not math.isfinite(u) or (not crossed and not math.isfinite(v)):
            self._diverge(current, v, u, "state")

        if crossed:
            # 原子 reset: 存储的 v 精确等于 c, u 精确等于越阈时刻的 u + d
            state.v = p.c
            state.u = u + p.d
            v_out = p.threshold
            self._spike_count += 1
            if self.spike_train is not None:
                self.spike_train.record_spike(self._tick)
        else:
            state.v = v
            state.u = u
            v_out = v

        self._tick += 1
        self._status = NeuronStatus.OK
        return v_out, crossed

    def step_spike(self, current: float) -> SpikeType:
        """step() 的事件形式: 只返回发放类型"""
        _, spiked = self.step(current)
        return SpikeType.from_flag(spiked)

    def last_spike(self) -> Optional[Spike]:
        """最近一次发放事件 (需 record_spikes=True)"""
        if self.spike_train is None or self.spike_train.last_spike_time is None:
            return None
        return Spike(self.id, self.spike_train.last_spike_time, self.params.threshold)

    # =========================================================================
    # 配置与重置
    # =========================================================================

    def configure(self, params: NeuronParameters, keep_state: bool = False) -> None:
        """两次 tick 之间替换参数包

        默认回到新的初始状态; keep_state=True 时保留 (v, u) 和计数,
        用于宿主 tick 周期变化时只更新 dt / substeps。
        """
        self.params = params
        if self.spike_train is not None:
            self.spike_train.dt = params.dt
        if not keep_state:
            self.reset()

    def reset(self) -> None:
        """重置到配置的初始状态 (restart)"""
        self._state.v = self.params.initial_v
        self._state.u = self.params.initial_u
        self._status = NeuronStatus.OK
        self._tick = 0
        self._spike_count = 0
        if self.spike_train is not None:
            self.spike_train.clear()

    def rest(self) -> None:
        """回到静息状态 (c, b·c)"""
        self._state.v, self._state.u = self.params.resting_state

    def _diverge(self, current: float, v: float, u: float, where: str) -> None:
        tick = self._tick
        self.rest()
        self._status = NeuronStatus.DIVERGED
        self._tick += 1
        raise NumericDivergence(tick, current, v, u, where)

    # =========================================================================
    # 状态查询
    # =========================================================================

    @property
    def state(self) -> NeuronState:
        """当前状态快照 (副本, 修改它不影响神经元)"""
        return NeuronState(self._state.v, self._state.u)

    @property
    def v(self) -> float:
        return self._state.v

    @property
    def u(self) -> float:
        return self._state.u

    @property
    def status(self) -> NeuronStatus:
        return self._status

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def spike_count(self) -> int:
        return self._spike_count

    def __repr__(self) -> str:
        return (
            f"NeuronCore(id={self.id}, "
            f"a={self.params.a}, b={self.params.b}, "
            f"c={self.params.c}, d={self.params.d}, "
            f"v={self._state.v:.2f}mV, u={self._state.u:.2f}, "
            f"status={self._status.name})"
        )
