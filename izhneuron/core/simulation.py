"""
批量仿真驱动 — 用 NumPy 记录 NeuronCore 的输出轨迹

NeuronCore.step() 是逐 tick 的实时接口; 离线实验 / 测试需要整段轨迹。
run_simulation() 按输入电流数组逐 tick 调用 step(), 结果写入预分配的数组。

使用示例:
    core = NeuronCore(REGULAR_SPIKING_PARAMS.replace(dt=0.5))
    trace = run_simulation(core, constant_current(10.0, 1000))
    trace.spike_count, trace.firing_rate()
"""

from dataclasses import dataclass
import numpy as np

from izhneuron.neuron.neuron_core import NeuronCore


# =============================================================================
# 输入电流构造
# =============================================================================

def constant_current(value: float, n_ticks: int) -> np.ndarray:
    """恒定电流 I(t) = value"""
    return np.full(n_ticks, float(value))


def step_current(
    amplitude: float,
    n_ticks: int,
    onset: int = 0,
    offset: int = -1,
    baseline: float = 0.0,
) -> np.ndarray:
    """阶跃电流: [onset, offset) 区间为 amplitude, 其余为 baseline

    offset < 0 表示持续到结束。
    """
    if offset < 0:
        offset = n_ticks
    currents = np.full(n_ticks, float(baseline))
    currents[onset:offset] = amplitude
    return currents


# =============================================================================
# 仿真轨迹
# =============================================================================

@dataclass
class SimulationTrace:
    """一次仿真的完整轨迹 (长度 N)

    Attributes:
        t: 每个 tick 结束时刻 (ms)
        current: 输入电流
        v_out: step() 报告的输出 (发放 tick 为 threshold)
        v: tick 结束后存储的 v (发放 tick 为 c)
        u: tick 结束后存储的 u
        spiked: 是否发放
        dt: tick 时长 (ms)
    """
    t: np.ndarray
    current: np.ndarray
    v_out: np.ndarray
    v: np.ndarray
    u: np.ndarray
    spiked: np.ndarray
    dt: float

    @property
    def n_ticks(self) -> int:
        return len(self.t)

    @property
    def spike_count(self) -> int:
        return int(np.count_nonzero(self.spiked))

    @property
    def spike_ticks(self) -> np.ndarray:
        return np.nonzero(self.spiked)[0]

    @property
    def spike_times(self) -> np.ndarray:
        """发放时刻 (ms)"""
        return self.t[self.spiked]

    @property
    def duration_ms(self) -> float:
        return self.n_ticks * self.dt

    def firing_rate(self) -> float:
        """整段轨迹的平均发放率 (Hz)"""
        if self.n_ticks == 0:
            return 0.0
        return self.spike_count * 1000.0 / self.duration_ms

    def isi(self) -> np.ndarray:
        """脉冲间隔 (ms)"""
        return np.diff(self.spike_times)


# =============================================================================
# 仿真驱动
# =============================================================================

def run_simulation(core: NeuronCore, currents) -> SimulationTrace:
    """按输入电流序列逐 tick 推进神经元

    神经元从当前状态继续, 不会自动 reset。
    NumericDivergence 原样向上传播。

    Args:
        core: 神经元
        currents: 一维数组 (每 tick 一个电流值)

    Returns:
        SimulationTrace
    """
    currents = np.asarray(currents, dtype=float)
    if currents.ndim != 1:
        raise ValueError(f"currents must be 1-D, got shape {currents.shape}")

    n = len(currents)
    dt = core.params.dt
    v_out = np.empty(n)
    v = np.empty(n)
    u = np.empty(n)
    spiked = np.zeros(n, dtype=bool)

    start_tick = core.tick_count
    for i in range(n):
        v_out[i], spiked[i] = core.step(float(currents[i]))
        v[i] = core.v
        u[i] = core.u

    t = (start_tick + np.arange(1, n + 1)) * dt
    return SimulationTrace(
        t=t,
        current=currents.copy(),
        v_out=v_out,
        v=v,
        u=u,
        spiked=spiked,
        dt=dt,
    )
