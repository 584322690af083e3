"""
Izhikevich (2003) 典型发放模式演示

实验 1: 七种预设 (RS/IB/CH/FS/LTS/TC/RZ) 在阶跃电流下的发放统计
实验 2: 子步数对数值解的影响 (dt=1ms, substeps=1 vs 2 vs 8)
实验 3: 插件适配层按 1ms tick 运行 (模拟宿主调度)

运行: python experiments/firing_regimes_demo.py [--save]

依赖: numpy, matplotlib
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

SAVE_FIGS = '--save' in sys.argv

import matplotlib
if SAVE_FIGS:
    matplotlib.use('Agg')
import matplotlib.pyplot as plt

from izhneuron.core import run_simulation, step_current
from izhneuron.neuron import NeuronCore, PRESETS, REGULAR_SPIKING_PARAMS
from izhneuron.plugin import Izhikevich2003Plugin, INPUT_I_SYN, OUTPUT_MV, OUTPUT_SPIKE
from izhneuron.viz import plot_trace, plot_raster
from experiments.utils import (
    print_header,
    regime_stats,
    print_regime_table,
    summarize_outputs,
)


# =============================================================================
# 实验 1: 发放模式
# =============================================================================

def experiment_1_regimes(amplitude: float = 10.0, duration_ms: float = 500.0,
                         dt: float = 0.5):
    print_header("实验 1: 典型发放模式")
    n_ticks = int(duration_ms / dt)
    currents = step_current(amplitude, n_ticks, onset=int(50.0 / dt))

    traces = {}
    for name, params in PRESETS.items():
        traces[name] = run_simulation(NeuronCore(params.replace(dt=dt)), currents)

    print_regime_table({name: regime_stats(t) for name, t in traces.items()})

    plot_raster(traces, duration=duration_ms,
                save_path='regimes_raster.png' if SAVE_FIGS else None)
    plot_trace(traces['RS'], title='Regular spiking (RS)',
               save_path='rs_trace.png' if SAVE_FIGS else None)
    return traces


# =============================================================================
# 实验 2: 子步数
# =============================================================================

def experiment_2_substeps(amplitude: float = 10.0, n_ticks: int = 1000):
    print_header("实验 2: 子步数 (dt=1ms)")
    currents = step_current(amplitude, n_ticks)
    for substeps in (1, 2, 8):
        params = REGULAR_SPIKING_PARAMS.replace(dt=1.0, substeps=substeps)
        trace = run_simulation(NeuronCore(params), currents)
        print(f"  substeps={substeps}: {trace.spike_count:3d} spikes, "
              f"rate={trace.firing_rate():5.1f}Hz")


# =============================================================================
# 实验 3: 宿主调度
# =============================================================================

def experiment_3_plugin(amplitude: float = 10.0, n_ticks: int = 1000,
                        period_s: float = 0.001):
    print_header("实验 3: 插件按 tick 运行")
    plugin = Izhikevich2003Plugin()
    outputs, spikes = [], 0
    for tick in range(n_ticks):
        plugin.set_input_value(INPUT_I_SYN, amplitude)
        plugin.process_tick(tick, period_s)
        outputs.append(plugin.get_output_value(OUTPUT_MV))
        spikes += int(plugin.get_output_value(OUTPUT_SPIKE))
    print(f"  {plugin}")
    print(f"  spikes={spikes}, v_out: {summarize_outputs(outputs)}")


def main():
    experiment_1_regimes()
    experiment_2_substeps()
    experiment_3_plugin()
    if not SAVE_FIGS:
        plt.show()


if __name__ == "__main__":
    main()
