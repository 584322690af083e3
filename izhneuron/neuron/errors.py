"""
Layer 1: 神经元错误类型

两类错误, 都只影响单个神经元实例:
- InvalidParameter:  配置时检测 (非有限参数, dt <= 0, a <= 0 ...), 任何 tick 之前拒绝
- NumericDivergence: tick 时检测 (输入或状态出现 NaN / Inf)
"""

from typing import Optional


class NeuronError(Exception):
    """izhneuron 所有错误的基类"""


class InvalidParameter(NeuronError, ValueError):
    """参数非法, 实例不能进入积分状态"""

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"invalid parameter {name}={value!r}: {reason}")


class NumericDivergence(NeuronError, ArithmeticError):
    """输入或状态变为非有限值

    抛出前 NeuronCore 已将状态回到静息 (c, b*c), 下一个 tick 可以继续。
    """

    def __init__(
        self,
        tick: int,
        current: float,
        v: float,
        u: float,
        where: Optional[str] = None,
    ):
        self.tick = tick
        self.current = current
        self.v = v
        self.u = u
        self.where = where or "state"
        super().__init__(
            f"non-finite {self.where} at tick {tick}: I={current!r}, v={v!r}, u={u!r}"
        )
