"""
插件描述 — 宿主运行时看到的元数据

宿主通过这些元数据声明端口、内部变量、默认配置和生命周期能力。
端口连线、调度和 GUI 都由宿主负责, 这里只描述契约。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class PluginType(Enum):
    COMPUTATIONAL = "computational"
    STANDARD = "standard"
    DEVICE = "device"


class ExtendableInputs(Enum):
    NONE = "none"
    AUTO = "auto"


@dataclass(frozen=True)
class PluginBehavior:
    """宿主可用的生命周期能力"""
    supports_start_stop: bool = True
    supports_restart: bool = True
    supports_apply: bool = False
    extendable_inputs: ExtendableInputs = ExtendableInputs.NONE
    loads_started: bool = False
    external_window: bool = False
    starts_expanded: bool = True
    start_requires_connected_inputs: Tuple[str, ...] = ()
    start_requires_connected_outputs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PluginDescriptor:
    """插件元数据

    default_vars 是 (键, 默认值) 对, 键与 NeuronParameters.from_config 一致。
    """
    name: str
    kind: str
    plugin_type: PluginType
    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]
    internal_variables: Tuple[str, ...]
    default_vars: Tuple[Tuple[str, float], ...]
    behavior: PluginBehavior = field(default_factory=PluginBehavior)

    def default_config(self) -> dict:
        return dict(self.default_vars)


# 端口名
INPUT_I_SYN = "i_syn"
OUTPUT_V = "Membrane potential (V)"
OUTPUT_MV = "Membrane potential (mV)"
OUTPUT_SPIKE = "Spike"

IZHIKEVICH_2003_DESCRIPTOR = PluginDescriptor(
    name="Izhikevich 2003 Neuron",
    kind="izhikevich_2003_neuron",
    plugin_type=PluginType.COMPUTATIONAL,
    inputs=(INPUT_I_SYN,),
    outputs=(OUTPUT_V, OUTPUT_MV, OUTPUT_SPIKE),
    internal_variables=("v", "u"),
    default_vars=(
        ("v", -65.0),
        ("u", -13.0),
        ("a", 0.02),
        ("b", 0.2),
        ("c", -65.0),
        ("d", 8.0),
    ),
)
