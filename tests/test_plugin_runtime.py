"""
宿主插件适配层验证测试

模拟宿主调度: set_input_value → process_tick → get_output_value

测试目标:
  Case 1: 插件元数据 (端口 / 内部变量 / 默认配置 / 生命周期能力)
  Case 2: 1ms tick + 持续输入 → 发放; 输出 mV / V / Spike 一致
  Case 3: tick 周期决定 dt 与子步数 (显式配置的 dt 优先), 非法周期被忽略
  Case 4: 非法配置 → 持久 CONFIG_ERROR, 不发放, 输出回到静息 c; 重新配置后恢复
  Case 5: 非有限输入 → 该 tick 报告 DIVERGED; 极端输入导致的发散被捕获
  Case 6: restart / 未知端口
"""

import sys
import os
import logging

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from izhneuron.spike import NeuronStatus
from izhneuron.plugin import (
    Izhikevich2003Plugin,
    IZHIKEVICH_2003_DESCRIPTOR,
    PluginType,
    ExtendableInputs,
    INPUT_I_SYN,
    OUTPUT_V,
    OUTPUT_MV,
    OUTPUT_SPIKE,
)


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


class _CaptureHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _capture_logs():
    handler = _CaptureHandler()
    logger = logging.getLogger("izhneuron.plugin.runtime")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return logger, handler


def run_ticks(plugin, n_ticks, i_syn, period_s=0.001):
    """按固定周期运行 n_ticks, 返回 (mV 输出列表, Spike 输出列表)"""
    mv, spikes = [], []
    for tick in range(n_ticks):
        plugin.set_input_value(INPUT_I_SYN, i_syn)
        plugin.process_tick(tick, period_s)
        mv.append(plugin.get_output_value(OUTPUT_MV))
        spikes.append(plugin.get_output_value(OUTPUT_SPIKE))
    return mv, spikes


def test_case_1_descriptor():
    """Case 1: 插件元数据"""
    print_header("Case 1: 插件元数据")

    d = Izhikevich2003Plugin.descriptor
    assert d is IZHIKEVICH_2003_DESCRIPTOR
    assert d.name == "Izhikevich 2003 Neuron"
    assert d.kind == "izhikevich_2003_neuron"
    assert d.plugin_type == PluginType.COMPUTATIONAL
    assert d.inputs == ("i_syn",)
    assert d.outputs == ("Membrane potential (V)", "Membrane potential (mV)", "Spike")
    assert d.internal_variables == ("v", "u")
    assert d.default_config() == {"v": -65.0, "u": -13.0, "a": 0.02,
                                  "b": 0.2, "c": -65.0, "d": 8.0}

    b = d.behavior
    assert b.supports_start_stop and b.supports_restart and not b.supports_apply
    assert b.extendable_inputs == ExtendableInputs.NONE
    assert not b.loads_started and not b.external_window and b.starts_expanded
    assert b.start_requires_connected_inputs == ()
    print("  ✅ PASS: 插件元数据")


def test_case_2_spiking_outputs():
    """Case 2: 1ms tick, i_syn=10 → 发放"""
    print_header("Case 2: 发放输出")

    plugin = Izhikevich2003Plugin()
    assert plugin.status == NeuronStatus.OK
    assert plugin.get_output_value(OUTPUT_MV) == -65.0
    assert plugin.get_internal_value("v") == -65.0
    assert plugin.get_internal_value("u") == -13.0

    mv, spikes = run_ticks(plugin, 1000, 10.0)
    n_spikes = int(sum(spikes))
    print(f"  1000ms: {n_spikes} spikes")
    assert n_spikes > 0
    for v, s in zip(mv, spikes):
        if s == 1.0:
            assert v == 30.0, "发放 tick 报告峰值 30mV"
        else:
            assert s == 0.0 and v < 30.0

    assert plugin.get_output_value(OUTPUT_V) == plugin.get_output_value(OUTPUT_MV) / 1000.0
    assert plugin.core.tick_count == 1000
    print(f"  {plugin}")
    print("  ✅ PASS: 发放输出")


def test_case_3_tick_period():
    """Case 3: 周期 → dt / 子步数"""
    print_header("Case 3: tick 周期")

    plugin = Izhikevich2003Plugin()
    plugin.process_tick(0, 0.001)
    assert plugin.core.params.dt == 1.0 and plugin.core.params.substeps == 2

    plugin.process_tick(1, 0.002)
    assert plugin.core.params.dt == 2.0 and plugin.core.params.substeps == 4
    assert plugin.core.tick_count == 2, "周期变化时保留状态与计数"

    for bad in (0.0, -0.001, float("nan"), float("inf")):
        plugin.process_tick(2, bad)
    assert plugin.core.tick_count == 2, "非法周期应被忽略"

    plugin.set_config_value("substeps", 8)
    plugin.process_tick(0, 0.001)
    assert plugin.core.params.substeps == 8
    assert not plugin.explicit_dt

    # 显式配置的 dt 不被 tick 周期覆盖, 子步长仍受 MAX_STEP_MS 约束
    fixed = Izhikevich2003Plugin({"dt": 0.1})
    assert fixed.explicit_dt
    fixed.process_tick(0, 0.001)
    assert fixed.core.params.dt == 0.1, f"使用了 dt={fixed.core.params.dt}"
    assert fixed.core.params.substeps == 2
    assert fixed.core.tick_count == 1
    fixed.process_tick(1, 0.002)
    assert fixed.core.params.dt == 0.1 and fixed.core.tick_count == 2

    coarse = Izhikevich2003Plugin({"dt": 4.0})
    coarse.process_tick(0, 0.001)
    assert coarse.core.params.dt == 4.0 and coarse.core.params.substeps == 8
    print("  ✅ PASS: tick 周期")


def test_case_4_config_error():
    """Case 4: 非法配置 → 持久 CONFIG_ERROR"""
    print_header("Case 4: 配置错误")

    logger, handler = _capture_logs()
    try:
        plugin = Izhikevich2003Plugin()
        plugin.set_config_value("a", -1.0)
        assert plugin.status == NeuronStatus.CONFIG_ERROR
        assert plugin.config_error is not None and plugin.config_error.name == "a"
        assert any(r.levelno == logging.ERROR for r in handler.records)

        mv, spikes = run_ticks(plugin, 500, 10.0)
        assert sum(spikes) == 0, "配置错误的实例不应发放"
        assert all(v == -65.0 for v in mv), "输出应保持上一个有效值"
        assert plugin.get_internal_value("v") is None
        assert plugin.status == NeuronStatus.CONFIG_ERROR, "CONFIG_ERROR 应持久"

        # 非数值配置被忽略
        plugin.set_config_value("a", "fast")
        assert plugin.status == NeuronStatus.CONFIG_ERROR
        assert plugin.config["a"] == -1.0

        plugin.set_config_value("a", 0.02)
        assert plugin.status == NeuronStatus.OK
        _, spikes = run_ticks(plugin, 500, 10.0)
        assert sum(spikes) > 0

        bad = Izhikevich2003Plugin({"dt": 0.0})
        assert bad.status == NeuronStatus.CONFIG_ERROR
        assert bad.get_output_value(OUTPUT_MV) == -65.0

        # 发放 tick 之后配置失效: 输出不能停在 30mV 峰值
        spiking = Izhikevich2003Plugin({"c": -60.0})
        for tick in range(1000):
            spiking.set_input_value(INPUT_I_SYN, 10.0)
            spiking.process_tick(tick, 0.001)
            if spiking.get_output_value(OUTPUT_SPIKE) == 1.0:
                break
        assert spiking.get_output_value(OUTPUT_MV) == 30.0, "应先观察到一次发放"

        spiking.set_config_value("a", -1.0)
        assert spiking.status == NeuronStatus.CONFIG_ERROR
        mv, spikes = run_ticks(spiking, 5, 10.0)
        print(f"  发放后配置失效: {spiking.status.name} {mv}")
        assert mv == [-60.0] * 5, "输出应回到最近一次有效配置的 c"
        assert spikes == [0.0] * 5
        assert spiking.get_output_value(OUTPUT_V) == -0.06
    finally:
        logger.removeHandler(handler)
    print("  ✅ PASS: 配置错误")


def test_case_5_non_finite():
    """Case 5: 非有限输入 / 数值发散"""
    print_header("Case 5: 非有限值")

    logger, handler = _capture_logs()
    try:
        plugin = Izhikevich2003Plugin()
        run_ticks(plugin, 3, 5.0)
        plugin.set_input_value(INPUT_I_SYN, float("nan"))
        plugin.process_tick(3, 0.001)
        print(f"  NaN 输入: {plugin}")
        assert plugin.status != NeuronStatus.OK, "非有限输入不能报告 OK"
        assert plugin.status == NeuronStatus.DIVERGED
        assert plugin.get_output_value(OUTPUT_MV) == -65.0
        assert plugin.get_output_value(OUTPUT_SPIKE) == 0.0
        assert plugin.get_internal_value("v") == -65.0
        assert plugin.get_internal_value("u") == 0.2 * -65.0
        assert plugin.core.tick_count == 4
        assert any(r.levelno == logging.WARNING for r in handler.records)

        # 存储值为 0.0: 下一个 tick 不再重新输入, 正常积分
        plugin.process_tick(4, 0.001)
        assert plugin.status == NeuronStatus.OK
        assert -70.0 < plugin.get_output_value(OUTPUT_MV) < -60.0

        for bad in (float("inf"), float("-inf"), "10"):
            plugin.set_input_value(INPUT_I_SYN, bad)
            plugin.process_tick(5, 0.001)
            assert plugin.status == NeuronStatus.DIVERGED, f"{bad!r} 应报告 DIVERGED"
            plugin.set_input_value(INPUT_I_SYN, 1.0)
            plugin.process_tick(6, 0.001)
            assert plugin.status == NeuronStatus.OK

        # 极端负电流: 第二个子步出现 inf - inf
        diverging = Izhikevich2003Plugin()
        diverging.set_input_value(INPUT_I_SYN, -1.7e308)
        diverging.process_tick(0, 0.0005)
        assert diverging.status == NeuronStatus.DIVERGED
        assert diverging.get_output_value(OUTPUT_MV) == -65.0
        assert diverging.get_output_value(OUTPUT_SPIKE) == 0.0
        assert diverging.get_internal_value("u") == 0.2 * -65.0
        print(f"  {diverging}")

        diverging.set_input_value(INPUT_I_SYN, 0.0)
        diverging.process_tick(1, 0.0005)
        assert diverging.status == NeuronStatus.OK
    finally:
        logger.removeHandler(handler)
    print("  ✅ PASS: 非有限值")


def test_case_6_restart_and_unknown_ports():
    """Case 6: restart / 未知端口"""
    print_header("Case 6: restart")

    plugin = Izhikevich2003Plugin()
    run_ticks(plugin, 200, 10.0)
    plugin.restart()
    assert plugin.get_internal_value("v") == -65.0
    assert plugin.get_internal_value("u") == -13.0
    assert plugin.get_output_value(OUTPUT_SPIKE) == 0.0
    assert plugin.core.tick_count == 0

    plugin.set_input_value("unknown", 5.0)
    assert plugin.get_output_value("unknown") == 0.0
    assert plugin.get_internal_value("w") is None
    print("  ✅ PASS: restart")


def main():
    cases = [
        ("Case 1: 插件元数据", test_case_1_descriptor),
        ("Case 2: 发放输出", test_case_2_spiking_outputs),
        ("Case 3: tick 周期", test_case_3_tick_period),
        ("Case 4: 配置错误", test_case_4_config_error),
        ("Case 5: 非有限值", test_case_5_non_finite),
        ("Case 6: restart", test_case_6_restart_and_unknown_ports),
    ]
    all_pass = True
    for name, fn in cases:
        try:
            fn()
        except AssertionError as exc:
            print(f"  ❌ FAIL: {name}: {exc}")
            all_pass = False
    return all_pass


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
