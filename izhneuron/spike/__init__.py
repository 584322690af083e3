"""
Layer 0: Spike + Signal — 脉冲与信号原语

不依赖任何其他 izhneuron 模块。

主要组件:
- SpikeType: 发放类型枚举 (NONE/SPIKE)
- NeuronStatus: 实例状态枚举 (OK/CONFIG_ERROR/DIVERGED)
- Spike: 脉冲事件数据结构
- SpikeTrain: 脉冲序列记录器
"""

from izhneuron.spike.signal_types import (
    SpikeType,
    NeuronStatus,
)

from izhneuron.spike.spike import (
    Spike,
    SpikeTrain,
)

__all__ = [
    "SpikeType",
    "NeuronStatus",
    "Spike",
    "SpikeTrain",
]
