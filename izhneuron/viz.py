"""
izhneuron Visualization Tools

Membrane potential traces, phase-plane views and spike rasters
for SimulationTrace results.
"""

import numpy as np
import matplotlib.pyplot as plt


# =============================================================================
# Color scheme for firing regimes
# =============================================================================
REGIME_COLORS = {
    # Excitatory (reds/oranges)
    'RS': '#F44336', 'IB': '#FF9800', 'CH': '#FFC107',
    # Inhibitory (blues)
    'FS': '#2196F3', 'LTS': '#64B5F6',
    # Others
    'TC': '#4CAF50', 'RZ': '#9C27B0',
}

def _get_color(name):
    return REGIME_COLORS.get(name, '#333333')


def _finish(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f'Saved: {save_path}')
    return fig


# =============================================================================
# Membrane potential trace
# =============================================================================
def plot_trace(trace, title=None, show_u=True, show_current=True,
               figsize=(12, 6), save_path=None):
    """
    Plot v_out (and optionally u and the input current) against time.

    Args:
        trace: SimulationTrace
        title: figure title
        show_u: add a panel for the recovery variable
        show_current: add a panel for the input current
        figsize: figure size
        save_path: if provided, save figure to this path
    """
    n_panels = 1 + int(show_u) + int(show_current)
    ratios = [3] + [1] * (n_panels - 1)
    fig, axes = plt.subplots(n_panels, 1, figsize=figsize, sharex=True,
                             squeeze=False,
                             gridspec_kw={'height_ratios': ratios})
    axes = axes[:, 0]

    ax = axes[0]
    ax.plot(trace.t, trace.v_out, lw=0.8, color='#1f77b4')
    ax.plot(trace.spike_times, trace.v_out[trace.spiked], 'v',
            ms=4, color='#d62728', label=f'{trace.spike_count} spikes')
    ax.set_ylabel('v (mV)')
    ax.legend(loc='upper right', fontsize=8, frameon=False)

    panel = 1
    if show_u:
        axes[panel].plot(trace.t, trace.u, lw=0.8, color='#ff7f0e')
        axes[panel].set_ylabel('u')
        panel += 1
    if show_current:
        axes[panel].plot(trace.t, trace.current, lw=0.8, color='#2ca02c')
        axes[panel].set_ylabel('I')

    for a in axes:
        a.spines['top'].set_visible(False)
        a.spines['right'].set_visible(False)
    axes[-1].set_xlabel('Time (ms)')
    fig.suptitle(title or 'Izhikevich neuron', fontsize=12, fontweight='bold')
    return _finish(fig, save_path)


# =============================================================================
# Phase plane
# =============================================================================
def plot_phase_plane(trace, params, v_range=(-80.0, 40.0), figsize=(7, 6),
                     save_path=None):
    """
    Plot the (v, u) trajectory over the v- and u-nullclines.

    v-nullcline: u = 0.04 v^2 + 5 v + 140 + I (I = mean input current)
    u-nullcline: u = b v
    """
    v = np.linspace(v_range[0], v_range[1], 400)
    i_mean = float(np.mean(trace.current)) if trace.n_ticks else 0.0

    fig, ax = plt.subplots(figsize=figsize)
    ax.plot(v, 0.04 * v ** 2 + 5.0 * v + 140.0 + i_mean, '--',
            color='#888888', lw=1, label='dv/dt = 0')
    ax.plot(v, params.b * v, ':', color='#888888', lw=1, label='du/dt = 0')
    ax.plot(trace.v, trace.u, lw=0.8, color='#1f77b4', label='trajectory')
    ax.axvline(params.threshold, color='#d62728', lw=0.8, alpha=0.6)
    ax.set_xlim(*v_range)
    ax.set_xlabel('v (mV)')
    ax.set_ylabel('u')
    ax.legend(loc='upper left', fontsize=8, frameon=False)
    ax.set_title('Phase plane', fontsize=12, fontweight='bold')
    return _finish(fig, save_path)


# =============================================================================
# Spike raster
# =============================================================================
def plot_raster(traces, duration=None, figsize=(12, 4), save_path=None):
    """
    Plot spike times of several runs, one row per run.

    Args:
        traces: dict of {label: SimulationTrace}
        duration: x-axis limit (ms)
        figsize: figure size
        save_path: if provided, save figure to this path
    """
    fig, ax = plt.subplots(figsize=figsize)
    labels = list(traces.keys())
    for row, label in enumerate(labels):
        trace = traces[label]
        times = trace.spike_times
        ax.scatter(times, np.full(len(times), row), marker='|', s=80,
                   c=_get_color(label))
        ax.text(1.01, row, f'{trace.firing_rate():.1f} Hz',
                transform=ax.get_yaxis_transform(), fontsize=7, va='center')

    ax.set_yticks(range(len(labels)))
    ax.set_yticklabels(labels)
    ax.set_ylim(-0.5, len(labels) - 0.5)
    if duration:
        ax.set_xlim(0, duration)
    ax.spines['top'].set_visible(False)
    ax.spines['right'].set_visible(False)
    ax.set_xlabel('Time (ms)')
    fig.suptitle('Spike Raster', fontsize=12, fontweight='bold')
    return _finish(fig, save_path)
