"""
实验辅助工具 — 统计/格式化

提供实验代码共用的工具函数，保持实验代码简洁。
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from typing import Dict, List

import numpy as np

from izhneuron.core import SimulationTrace


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


def regime_stats(trace: SimulationTrace) -> Dict:
    """单条轨迹的发放统计

    Returns:
        {
            'spikes': int,
            'rate_hz': float,
            'first_spike_ms': float | None,
            'isi_min': float | None,
            'isi_max': float | None,
            'adaptation': float | None,   最后一个 ISI / 第一个 ISI
        }
    """
    isi = trace.isi()
    times = trace.spike_times
    return {
        'spikes': trace.spike_count,
        'rate_hz': trace.firing_rate(),
        'first_spike_ms': float(times[0]) if len(times) else None,
        'isi_min': float(isi.min()) if len(isi) else None,
        'isi_max': float(isi.max()) if len(isi) else None,
        'adaptation': float(isi[-1] / isi[0]) if len(isi) >= 2 else None,
    }


def _fmt(value, spec: str = '7.1f') -> str:
    return format(value, spec) if value is not None else '    -  '


def print_regime_table(stats: Dict[str, Dict]) -> None:
    """打印各发放模式统计表"""
    print(f"  {'type':>5s} {'spikes':>7s} {'rate':>7s} {'first':>7s} "
          f"{'ISImin':>7s} {'ISImax':>7s} {'adapt':>7s}")
    for name, s in stats.items():
        print(f"  {name:>5s} {s['spikes']:7d} {s['rate_hz']:7.1f} "
              f"{_fmt(s['first_spike_ms'])} {_fmt(s['isi_min'])} "
              f"{_fmt(s['isi_max'])} {_fmt(s['adaptation'], '7.2f')}")


def summarize_outputs(values: List[float]) -> str:
    arr = np.asarray(values, dtype=float)
    return f"min={arr.min():.2f} max={arr.max():.2f} mean={arr.mean():.2f}"
