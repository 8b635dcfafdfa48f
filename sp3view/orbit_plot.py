"""
Track plots for one vehicle: SP3 samples and the Lagrange interpolated sweep.

Figures are built with matplotlib's object API (Figure + Agg canvas) so they
render without a display.
"""
import logging
from typing import Optional

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg as FigureCanvas
from matplotlib.figure import Figure

from sp3core.data_models import Dataset
from sp3core.global_config import get_plot_settings
from sp3core.interpolation import interpolate_track
from sp3core.sp3_models import Vehicle
from sp3view.color_def import get_axis_color, get_constellation_color

logger = logging.getLogger(__name__)


def sweep_epochs(dataset: Dataset, step_seconds: float):
    """Regularly spaced epochs from the first to the last epoch of the dataset."""
    first, last = dataset.first_epoch(), dataset.last_epoch()
    if first is None:
        return []
    count = int((last - first) // step_seconds) + 1
    return [first + i * step_seconds for i in range(count)]


def plot_vehicle_track(dataset: Dataset, sv: Vehicle, order: Optional[int] = None,
                       step_seconds: Optional[float] = None) -> Figure:
    """
    Build a figure with one panel per ECEF axis (km versus hours since the
    first epoch) and a bottom panel with the orbit radius.
    """
    settings = get_plot_settings()
    step_seconds = step_seconds or settings['step_seconds']

    fig = Figure(figsize=settings['figsize'], dpi=settings['dpi'], facecolor='#ffffff')
    FigureCanvas(fig)
    axes = fig.subplots(4, 1, sharex=True)
    fig.suptitle(f"{sv} ({dataset.header.agency} {dataset.header.orbit_type})", fontsize=10, fontweight='bold')

    samples = dataset.store.sv_position_series(sv)
    if not samples:
        logger.warning(f"No position samples for {sv}")
        axes[0].text(0.5, 0.5, f"No data for {sv}", ha='center', va='center', transform=axes[0].transAxes)
        return fig

    origin = dataset.first_epoch()
    sample_hours = np.array([(epoch - origin) / 3600.0 for epoch, _ in samples])
    sample_xyz = np.array([value for _, value in samples])

    track = interpolate_track(dataset, sv, sweep_epochs(dataset, step_seconds), order)
    track_hours = np.array([(epoch - origin) / 3600.0 for epoch, _ in track])
    track_xyz = np.array([value for _, value in track]).reshape(-1, 3)

    sys_color = get_constellation_color(sv.constellation)
    for index, axis in enumerate(('x', 'y', 'z')):
        ax = axes[index]
        ax.plot(track_hours, track_xyz[:, index], color=get_axis_color(axis), linewidth=1.0, label='interpolated')
        ax.scatter(sample_hours, sample_xyz[:, index], c=sys_color, s=8, zorder=3, label='samples')
        ax.set_ylabel(f"{axis} (km)")
        ax.grid(True, linestyle='--', alpha=0.5)

    radius_ax = axes[3]
    radius_ax.plot(track_hours, np.linalg.norm(track_xyz, axis=1), color='#616161', linewidth=1.0)
    radius_ax.scatter(sample_hours, np.linalg.norm(sample_xyz, axis=1), c=sys_color, s=8, zorder=3)
    radius_ax.set_ylabel("r (km)")
    radius_ax.set_xlabel("hours since first epoch")
    radius_ax.grid(True, linestyle='--', alpha=0.5)
    axes[0].legend(loc='upper right', fontsize=8)

    fig.subplots_adjust(bottom=0.08, top=0.92, left=0.14, right=0.97, hspace=0.15)
    return fig


def save_track_plot(dataset: Dataset, sv: Vehicle, path, order: Optional[int] = None,
                    step_seconds: Optional[float] = None):
    fig = plot_vehicle_track(dataset, sv, order, step_seconds)
    fig.savefig(path)
    logger.info(f"Saved {sv} track plot to {path}")
