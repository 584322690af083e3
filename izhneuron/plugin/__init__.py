"""
宿主插件适配层

- IZHIKEVICH_2003_DESCRIPTOR: 插件元数据 (端口 / 默认配置 / 生命周期能力)
- Izhikevich2003Plugin: 按 tick 调用的运行时对象
"""

from izhneuron.plugin.descriptor import (
    PluginType,
    ExtendableInputs,
    PluginBehavior,
    PluginDescriptor,
    IZHIKEVICH_2003_DESCRIPTOR,
    INPUT_I_SYN,
    OUTPUT_V,
    OUTPUT_MV,
    OUTPUT_SPIKE,
)

from izhneuron.plugin.runtime import (
    Izhikevich2003Plugin,
    MAX_STEP_MS,
    MIN_SUBSTEPS,
)

__all__ = [
    "PluginType",
    "ExtendableInputs",
    "PluginBehavior",
    "PluginDescriptor",
    "IZHIKEVICH_2003_DESCRIPTOR",
    "INPUT_I_SYN",
    "OUTPUT_V",
    "OUTPUT_MV",
    "OUTPUT_SPIKE",
    "Izhikevich2003Plugin",
    "MAX_STEP_MS",
    "MIN_SUBSTEPS",
]
