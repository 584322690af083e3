"""
izhneuron.core — 批量仿真驱动

提供 run_simulation 和 SimulationTrace, 用 NumPy 数组记录整段轨迹。
"""

from izhneuron.core.simulation import (
    SimulationTrace,
    run_simulation,
    constant_current,
    step_current,
)

__all__ = [
    'SimulationTrace',
    'run_simulation',
    'constant_current',
    'step_current',
]
