"""
宿主适配层 — 把 NeuronCore 包装成按 tick 调用的插件

宿主每个 tick:
  set_input_value("i_syn", I)  →  process_tick(tick, period_seconds)  →  get_output_value(...)

模型方程以 ms 为单位: 配置中没有 "dt" 时 dt = period_seconds * 1000;
显式配置的 dt 优先, tick 周期只用来触发子步数的重新计算。
子步数在周期确定时计算一次: 子步长 ≤ MAX_STEP_MS, 且至少 MIN_SUBSTEPS。

错误处理 (只影响本实例, 不让宿主崩溃):
  - 配置非法   → CONFIG_ERROR, 持久; 不积分, 不发放,
                 输出回到最近一次有效配置的 c (初始为默认 c)
  - 数值发散   → 状态回到静息 (c, b·c), DIVERGED, 记录警告
  - 非有限输入 → 存储值为 0.0; 下一个 tick 按发散处理 (DIVERGED, 静息输出)
"""

import logging
import math
import numbers
from typing import Any, Dict, Mapping, Optional

from izhneuron.spike.signal_types import NeuronStatus
from izhneuron.neuron.errors import InvalidParameter, NumericDivergence
from izhneuron.neuron.params import NeuronParameters
from izhneuron.neuron.neuron_core import NeuronCore
from izhneuron.plugin.descriptor import (
    IZHIKEVICH_2003_DESCRIPTOR,
    INPUT_I_SYN,
    OUTPUT_V,
    OUTPUT_MV,
    OUTPUT_SPIKE,
)

logger = logging.getLogger(__name__)

MAX_STEP_MS = 0.5
MIN_SUBSTEPS = 2


class Izhikevich2003Plugin:
    """Izhikevich 2003 神经元插件

    配置只在运行之间生效: 每次 set_config_value 都会重建参数包,
    神经元回到新配置的初始状态。
    """

    descriptor = IZHIKEVICH_2003_DESCRIPTOR

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        self._config: Dict[str, float] = self.descriptor.default_config()
        self._params: Optional[NeuronParameters] = None
        self._core: Optional[NeuronCore] = None
        self._config_error: Optional[InvalidParameter] = None
        self._period_s: Optional[float] = None

        self._i_syn = 0.0
        self._rejected_input: Optional[float] = None
        self._rest_v = self._config["c"]
        self._v_out = self._rest_v
        self._spiked = False

        if config:
            for key, value in config.items():
                if _is_number(value):
                    self._config[key] = float(value)
        self._apply_config()

    # =========================================================================
    # 配置
    # =========================================================================

    def set_config_value(self, key: str, value: Any) -> None:
        """设置单个配置项; 非数值忽略"""
        if not _is_number(value):
            return
        self._config[key] = float(value)
        self._apply_config()

    def _apply_config(self) -> None:
        try:
            params = NeuronParameters.from_config(self._config)
        except InvalidParameter as exc:
            logger.error("%s: rejected configuration: %s", self.descriptor.kind, exc)
            self._config_error = exc
            self._params = None
            self._core = None
            self._v_out = self._rest_v
            self._spiked = False
            return

        self._config_error = None
        self._params = params
        self._period_s = None
        self._rest_v = params.c
        self._core = NeuronCore(params)
        self._v_out = self._core.v
        self._spiked = False

    @property
    def explicit_dt(self) -> bool:
        """配置中显式给出了 dt (不再由 tick 周期推导)"""
        return "dt" in self._config

    @property
    def config(self) -> Dict[str, float]:
        return dict(self._config)

    @property
    def config_error(self) -> Optional[InvalidParameter]:
        return self._config_error

    # =========================================================================
    # 输入 / tick
    # =========================================================================

    def set_input_value(self, key: str, value: float) -> None:
        if key != INPUT_I_SYN:
            return
        if _is_number(value) and math.isfinite(value):
            self._i_syn = float(value)
            self._rejected_input = None
        else:
            logger.warning("%s: non-finite input %s=%r stored as 0.0",
                           self.descriptor.kind, key, value)
            self._i_syn = 0.0
            self._rejected_input = float(value) if _is_number(value) else math.nan

    def process_tick(self, tick: int, period_seconds: float) -> None:
        """推进一个宿主 tick

        非有限或非正的周期直接忽略。
        上一次 set_input_value 收到非有限值时, 本 tick 把该值交给 NeuronCore,
        由其发散检测报告 DIVERGED; 之后的 tick 使用存储的 0.0。
        """
        if not _is_number(period_seconds) or not math.isfinite(period_seconds) \
                or period_seconds <= 0.0:
            return
        if self._core is None:
            self._rejected_input = None
            self._spiked = False
            return

        if period_seconds != self._period_s:
            dt = self._params.dt if self.explicit_dt else period_seconds * 1000.0
            try:
                params = self._params.with_dt(
                    dt,
                    max_substep=MAX_STEP_MS,
                    min_substeps=MIN_SUBSTEPS,
                )
            except InvalidParameter as exc:
                logger.warning("%s: tick %d ignored: %s", self.descriptor.kind, tick, exc)
                return
            self._core.configure(params, keep_state=True)
            self._period_s = period_seconds
            logger.debug("%s: dt=%.4fms, substeps=%d",
                         self.descriptor.kind, params.dt, params.substeps)

        current = self._i_syn
        if self._rejected_input is not None:
            current, self._rejected_input = self._rejected_input, None
        try:
            self._v_out, self._spiked = self._core.step(current)
        except NumericDivergence as exc:
            logger.warning("%s: %s; state reset to rest", self.descriptor.kind, exc)
            self._v_out = self._core.v
            self._spiked = False

    def restart(self) -> None:
        """回到配置的初始状态"""
        if self._core is None:
            return
        self._core.reset()
        self._v_out = self._core.v
        self._spiked = False

    # =========================================================================
    # 输出
    # =========================================================================

    def get_output_value(self, key: str) -> float:
        if key == OUTPUT_V:
            return self._v_out / 1000.0
        if key == OUTPUT_MV:
            return self._v_out
        if key == OUTPUT_SPIKE:
            return 1.0 if self._spiked else 0.0
        return 0.0

    def get_internal_value(self, key: str) -> Optional[float]:
        if self._core is None:
            return None
        if key == "v":
            return self._core.v
        if key == "u":
            return self._core.u
        return None

    @property
    def status(self) -> NeuronStatus:
        if self._core is None:
            return NeuronStatus.CONFIG_ERROR
        return self._core.status

    @property
    def core(self) -> Optional[NeuronCore]:
        return self._core

    def __repr__(self) -> str:
        return (f"Izhikevich2003Plugin(status={self.status.name}, "
                f"v_out={self._v_out:.2f}mV, i_syn={self._i_syn})")


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)
