"""
Lagrange interpolation of SP3 positions and velocities.

For an order N, N + 1 samples of the vehicle's own series are used:

  value(t) = sum_i v_i * prod_{j != i} (t - t_j) / (t_i - t_j)

with t_i measured in real seconds. The window is built around the "center"
sample, the one nearest to t that lies at most one epoch interval away
(the earlier one on ties):

  - odd N:  (N + 1) / 2 samples up to and including the center, (N + 1) / 2 after
  - even N: N / 2 samples up to and including the center, N / 2 + 1 after

Windows that would run past either end of the series are not computed, so no
estimate is available close to the first and last samples.

References:
  - Schenewerk, M. (2003), A brief review of basic GPS orbit interpolation
    strategies, GPS Solutions 6(4)
"""
import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from sp3core.data_models import Dataset
from sp3core.global_config import get_global_config
from sp3core.gnss_time import Epoch
from sp3core.sp3_models import Vehicle

logger = logging.getLogger(__name__)


def window_size(order: int) -> Tuple[int, int]:
    """
    Return (samples up to and including the center, samples after the center).
    """
    if order < 1:
        raise ValueError(f"Interpolation order must be >= 1, got {order}")
    if order % 2:
        half = (order + 1) // 2
        return half, half
    # even orders take the extra sample after the center
    return order // 2, order // 2 + 1


def lagrange_weights(target: float, times: Sequence[float]) -> np.ndarray:
    """
    Lagrange basis weights of `times` (seconds) evaluated at `target` (seconds).
    """
    t = np.asarray(times, dtype=np.float64)
    weights = np.ones(len(t))
    for i in range(len(t)):
        for j in range(len(t)):
            if i != j:
                weights[i] *= (target - t[j]) / (t[i] - t[j])
    return weights


def _nominal_interval(dataset: Dataset, series) -> float:
    interval = dataset.header.epoch_interval.total_seconds()
    if interval > 0:
        return interval
    # unknown interval: use the smallest sampling step of the series
    steps = [b[0] - a[0] for a, b in zip(series, series[1:])]
    steps = [step for step in steps if step > 0]
    return min(steps) if steps else 0.0


def _interpolate(dataset: Dataset, series: List[Tuple[Epoch, tuple]], epoch: Epoch,
                 order: int) -> Optional[np.ndarray]:
    before, after = window_size(order)
    if len(series) < before + after:
        return None

    interval = _nominal_interval(dataset, series)
    deltas = np.array([sample_epoch - epoch for sample_epoch, _ in series])
    distances = np.abs(deltas)
    candidates = np.flatnonzero(distances <= interval)
    if candidates.size == 0:
        return None
    center = int(candidates[np.argmin(distances[candidates])])

    start = center - before + 1
    stop = center + after
    if start < 0 or stop >= len(series):
        logger.debug(f"Interpolation window [{start}, {stop}] out of series bounds for {epoch}")
        return None

    # times relative to the target keep the products well conditioned
    times = deltas[start:stop + 1]
    values = np.array([value for _, value in series[start:stop + 1]], dtype=np.float64)
    weights = lagrange_weights(0.0, times)
    return weights @ values


def interpolate_position(dataset: Dataset, epoch: Epoch, sv: Vehicle,
                         order: Optional[int] = None) -> Optional[np.ndarray]:
    """
    Interpolate the position of a vehicle.

    Args:
        dataset: parsed SP3 dataset
        epoch: target epoch
        sv: vehicle
        order: interpolation order N (N + 1 samples), defaults to the configured order

    Returns:
        np.ndarray [x, y, z] in km, or None when the epoch is not covered
        by a complete window
    """
    order = order if order is not None else get_global_config().interpolation_order
    return _interpolate(dataset, dataset.store.sv_position_series(sv), epoch, order)


def interpolate_velocity(dataset: Dataset, epoch: Epoch, sv: Vehicle,
                         order: Optional[int] = None) -> Optional[np.ndarray]:
    """
    Interpolate the velocity of a vehicle ([vx, vy, vz] in dm/s), same policy as positions.
    """
    order = order if order is not None else get_global_config().interpolation_order
    return _interpolate(dataset, dataset.store.sv_velocity_series(sv), epoch, order)


def interpolate_track(dataset: Dataset, sv: Vehicle, epochs: Iterable[Epoch],
                      order: Optional[int] = None) -> List[Tuple[Epoch, np.ndarray]]:
    """
    Interpolate positions over several epochs, keeping only the feasible ones.
    """
    track = []
    for epoch in epochs:
        position = interpolate_position(dataset, epoch, sv, order)
        if position is not None:
            track.append((epoch, position))
    return track
