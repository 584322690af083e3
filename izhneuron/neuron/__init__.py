"""
Layer 1-2: Neuron — Izhikevich (2003) 单神经元

主要组件:
- NeuronCore: 实时单步计算单元 (状态 + 子步 Euler + 原子 reset)
- NeuronState: 模型状态 (v, u)
- NeuronParameters: 不可变参数包
- InvalidParameter / NumericDivergence: 错误类型
"""

from izhneuron.neuron.errors import (
    NeuronError,
    InvalidParameter,
    NumericDivergence,
)

from izhneuron.neuron.params import (
    NeuronParameters,
    REGULAR_SPIKING_PARAMS,
    INTRINSICALLY_BURSTING_PARAMS,
    CHATTERING_PARAMS,
    FAST_SPIKING_PARAMS,
    LOW_THRESHOLD_SPIKING_PARAMS,
    THALAMO_CORTICAL_PARAMS,
    RESONATOR_PARAMS,
    PRESETS,
)

from izhneuron.neuron.neuron_core import (
    NeuronCore,
    NeuronState,
    advance,
)

__all__ = [
    # 神经元
    "NeuronCore",
    "NeuronState",
    "NeuronParameters",
    "advance",
    # 错误
    "NeuronError",
    "InvalidParameter",
    "NumericDivergence",
    # 预定义参数
    "REGULAR_SPIKING_PARAMS",
    "INTRINSICALLY_BURSTING_PARAMS",
    "CHATTERING_PARAMS",
    "FAST_SPIKING_PARAMS",
    "LOW_THRESHOLD_SPIKING_PARAMS",
    "THALAMO_CORTICAL_PARAMS",
    "RESONATOR_PARAMS",
    "PRESETS",
]
