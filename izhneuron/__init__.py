"""
izhneuron — 实时 Izhikevich (2003) 单神经元

分层结构:
- Layer 0: spike : 脉冲 / 状态原语
- Layer 1: neuron: 参数包与错误类型
- Layer 2: neuron: NeuronCore 单步计算单元
- Layer 3: core  : NumPy 批量仿真驱动
           plugin: 宿主插件适配层
- viz            : matplotlib 可视化 (需单独导入 izhneuron.viz)
"""

from izhneuron.spike import SpikeType, NeuronStatus, Spike, SpikeTrain
from izhneuron.neuron import (
    NeuronCore,
    NeuronState,
    NeuronParameters,
    NeuronError,
    InvalidParameter,
    NumericDivergence,
    PRESETS,
    REGULAR_SPIKING_PARAMS,
)
from izhneuron.core import run_simulation, SimulationTrace

__version__ = "0.1.0"

__all__ = [
    "SpikeType",
    "NeuronStatus",
    "Spike",
    "SpikeTrain",
    "NeuronCore",
    "NeuronState",
    "NeuronParameters",
    "NeuronError",
    "InvalidParameter",
    "NumericDivergence",
    "PRESETS",
    "REGULAR_SPIKING_PARAMS",
    "run_simulation",
    "SimulationTrace",
]
