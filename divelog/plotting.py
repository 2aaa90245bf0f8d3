"""Depth profile and model ceiling plot for a played-back dive."""

import matplotlib
matplotlib.use('Agg')  # Headless rendering
import matplotlib.pyplot as plt

from .dive import Dive
from .playback import PlaybackResult


def plot_playback(dive: Dive, result: PlaybackResult, output_path: str) -> str:
    """Plot logged depth and the model ceiling over time, saved as PNG.

    Returns:
        output_path
    """
    times = [s.offset_seconds / 60.0 for s in dive.samples]
    depths = [s.depth for s in dive.samples]

    _fig, ax = plt.subplots(figsize=(12, 5))
    ax.plot(times, depths, "b-", linewidth=1.5, label="Depth")
    ax.fill_between(times, depths, alpha=0.15, color="blue")

    if result.ceilings:
        minutes = [m for m, _, _ in result.ceilings]
        ceilings = [c for _, _, c in result.ceilings]
        ax.plot(minutes, ceilings, "r--", linewidth=1.5, label="Ceiling")

    summary = f"max clearance {result.max_clearance:.1f}ft"
    if result.min_clearance is not None:
        summary += f", min clearance {result.min_clearance:.1f}ft"

    ax.set_xlabel("Time (min)")
    ax.set_ylabel("Depth (ft)")
    ax.set_title(f"Dive {dive.number}: {summary}")
    ax.invert_yaxis()
    ax.grid(True, alpha=0.3)
    ax.legend(loc="lower right")

    plt.tight_layout()
    plt.savefig(output_path, dpi=150)
    plt.close()
    return output_path
