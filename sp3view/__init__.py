"""
Plotting helpers for SP3 datasets.
"""

from sp3view.orbit_plot import plot_vehicle_track, save_track_plot

__all__ = [
    "plot_vehicle_track",
    "save_track_plot",
]
