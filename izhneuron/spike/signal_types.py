"""
Layer 0: 信号类型枚举

定义 izhneuron 中最底层的信号与状态类型:
- SpikeType: 本 tick 是否发放 (NONE / SPIKE)
- NeuronStatus: 实例对宿主可见的运行状态 (OK / CONFIG_ERROR / DIVERGED)

这些是整个系统最底层的"原子"定义，不依赖任何其他模块。
"""

from enum import IntEnum


# =============================================================================
# 脉冲类型枚举
# =============================================================================

class SpikeType(IntEnum):
    """单个 tick 的发放结果

    Izhikevich 模型只有一种发放事件: v 越过阈值后瞬时 reset。
    JustSpiked 不是跨 tick 的持久状态, 只通过 step() 返回的标志体现。
    """
    NONE = 0
    SPIKE = 1

    @property
    def is_active(self) -> bool:
        """是否有实际脉冲发放"""
        return self != SpikeType.NONE

    @classmethod
    def from_flag(cls, spiked: bool) -> "SpikeType":
        return cls.SPIKE if spiked else cls.NONE


# =============================================================================
# 实例状态枚举
# =============================================================================

class NeuronStatus(IntEnum):
    """神经元实例状态 (对宿主可见)

    - OK:           正常积分
    - CONFIG_ERROR: 参数非法, 实例从未进入积分状态 (持久, 直到重新配置成功)
    - DIVERGED:     上一个 tick 检测到非有限值, 状态已回到静息
    """
    OK = 0
    CONFIG_ERROR = 1
    DIVERGED = 2

    @property
    def is_error(self) -> bool:
        return self != NeuronStatus.OK
