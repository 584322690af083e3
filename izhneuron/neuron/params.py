"""
Layer 1: Izhikevich (2003) 参数包

  dv/dt = 0.04·v² + 5·v + 140 - u + I
  du/dt = a·(b·v - u)
  若 v ≥ threshold:  v ← c,  u ← u + d

a, b, c, d 四个参数决定发放模式 (Izhikevich 2003, Fig. 2):
  a: u 的时间尺度 (越小恢复越慢)
  b: u 对 v 亚阈值波动的敏感度
  c: 发放后 v 的 reset 值
  d: 发放后 u 的增量

时间单位为 ms, 电位单位为 mV。
参数在一次运行期间不可变 (frozen); 重新配置只能在两次运行之间通过 replace() 完成。
"""

import math
import numbers
from dataclasses import dataclass, replace as _dc_replace
from typing import Any, Dict, Mapping, Optional

from izhneuron.neuron.errors import InvalidParameter


# =============================================================================
# 参数包
# =============================================================================

@dataclass(frozen=True)
class NeuronParameters:
    """Izhikevich 神经元完整参数包

    只强制 a > 0, dt > 0, substeps ≥ 1 以及所有实数字段有限。
    b, c, d, threshold 可取任意实数: 不同组合对应不同的典型发放模式。

    substeps — 每个 tick 内的 Euler 子步数:
      0.04·v² 项使单步 Euler 在阈值附近容易数值发散,
      把 dt 拆成 substeps 个 dt/substeps 的子步 (固定次数, 与数据无关)。
      默认 2 (两个半步)。
    """
    a: float = 0.02              # 恢复时间尺度 (>0)
    b: float = 0.2               # u 对 v 的敏感度
    c: float = -65.0             # 发放后 v 的 reset 值 (mV)
    d: float = 8.0               # 发放后 u 的增量
    threshold: float = 30.0      # 发放阈值 (mV)
    dt: float = 1.0              # tick 时长 (ms)
    substeps: int = 2            # 每 tick 的 Euler 子步数
    v_init: Optional[float] = None   # 初始 v, 默认 c
    u_init: Optional[float] = None   # 初始 u, 默认 b·v_init

    def __post_init__(self):
        for name in ("a", "b", "c", "d", "threshold", "dt"):
            _require_finite(name, getattr(self, name))
        if self.a <= 0.0:
            raise InvalidParameter("a", self.a, "must be > 0")
        if self.dt <= 0.0:
            raise InvalidParameter("dt", self.dt, "must be > 0")
        if isinstance(self.substeps, bool) or not isinstance(self.substeps, numbers.Integral):
            raise InvalidParameter("substeps", self.substeps, "must be an integer")
        if self.substeps < 1:
            raise InvalidParameter("substeps", self.substeps, "must be >= 1")
        if self.v_init is not None:
            _require_finite("v_init", self.v_init)
        if self.u_init is not None:
            _require_finite("u_init", self.u_init)

    # =========================================================================
    # 派生量
    # =========================================================================

    @property
    def h(self) -> float:
        """子步长 (ms)"""
        return self.dt / self.substeps

    @property
    def initial_v(self) -> float:
        return self.c if self.v_init is None else self.v_init

    @property
    def initial_u(self) -> float:
        return self.b * self.initial_v if self.u_init is None else self.u_init

    @property
    def resting_state(self):
        """发散恢复用的静息状态 (c, b·c)"""
        return self.c, self.b * self.c

    # =========================================================================
    # 重新配置
    # =========================================================================

    def replace(self, **changes) -> "NeuronParameters":
        """返回修改了部分字段的新参数包 (同样经过校验)"""
        return _dc_replace(self, **changes)

    def with_dt(self, dt: float, max_substep: Optional[float] = None,
                min_substeps: int = 1) -> "NeuronParameters":
        """按宿主 tick 周期设置 dt, 并保证子步长不超过 max_substep (ms)"""
        _require_finite("dt", dt)
        if dt <= 0.0:
            raise InvalidParameter("dt", dt, "must be > 0")
        substeps = max(min_substeps, self.substeps)
        if max_substep is not None:
            substeps = max(substeps, math.ceil(dt / max_substep))
        return self.replace(dt=dt, substeps=substeps)

    def to_config(self) -> Dict[str, Any]:
        """导出为宿主配置字典 (键与 from_config 一致)"""
        config = {
            "a": self.a,
            "b": self.b,
            "c": self.c,
            "d": self.d,
            "threshold": self.threshold,
            "dt": self.dt,
            "substeps": self.substeps,
        }
        if self.v_init is not None:
            config["v"] = self.v_init
        if self.u_init is not None:
            config["u"] = self.u_init
        return config

    @classmethod
    def from_config(
        cls,
        config: Mapping[str, Any],
        base: Optional["NeuronParameters"] = None,
    ) -> "NeuronParameters":
        """从宿主配置字典构建参数包

        "v" / "u" 键对应初始状态 (与原插件的 default_vars 一致)。
        未知键忽略; 已知键的值非数值时抛出 InvalidParameter。
        """
        base = base or cls()
        changes: Dict[str, Any] = {}
        for key, value in config.items():
            field_name = _CONFIG_KEYS.get(key)
            if field_name is None:
                continue
            if field_name == "substeps":
                changes[field_name] = _as_int(key, value)
            else:
                changes[field_name] = _as_float(key, value)
        return base.replace(**changes)


# 宿主配置键 → 字段名
_CONFIG_KEYS = {
    "a": "a",
    "b": "b",
    "c": "c",
    "d": "d",
    "threshold": "threshold",
    "dt": "dt",
    "substeps": "substeps",
    "v": "v_init",
    "u": "u_init",
}


def _require_finite(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(name, value, "must be a real number")
    if not math.isfinite(value):
        raise InvalidParameter(name, value, "must be finite")


def _as_float(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameter(name, value, "must be a real number")
    return float(value)


def _as_int(name: str, value) -> int:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameter(name, value, "must be an integer")
    return int(value)


# =============================================================================
# 预定义参数集 (Izhikevich 2003, Fig. 2)
# =============================================================================

REGULAR_SPIKING_PARAMS = NeuronParameters(a=0.02, b=0.2, c=-65.0, d=8.0)
INTRINSICALLY_BURSTING_PARAMS = NeuronParameters(a=0.02, b=0.2, c=-55.0, d=4.0)
CHATTERING_PARAMS = NeuronParameters(a=0.02, b=0.2, c=-50.0, d=2.0)
FAST_SPIKING_PARAMS = NeuronParameters(a=0.1, b=0.2, c=-65.0, d=2.0)
LOW_THRESHOLD_SPIKING_PARAMS = NeuronParameters(a=0.02, b=0.25, c=-65.0, d=2.0)
THALAMO_CORTICAL_PARAMS = NeuronParameters(a=0.02, b=0.25, c=-65.0, d=0.05)
RESONATOR_PARAMS = NeuronParameters(a=0.1, b=0.26, c=-65.0, d=2.0)

PRESETS = {
    "RS": REGULAR_SPIKING_PARAMS,
    "IB": INTRINSICALLY_BURSTING_PARAMS,
    "CH": CHATTERING_PARAMS,
    "FS": FAST_SPIKING_PARAMS,
    "LTS": LOW_THRESHOLD_SPIKING_PARAMS,
    "TC": THALAMO_CORTICAL_PARAMS,
    "RZ": RESONATOR_PARAMS,
}
