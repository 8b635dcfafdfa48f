"""
Time-indexed store for SP3 orbit and clock estimates.

The store keeps the ordered epoch list, the first-seen vehicle list and four
records (position, velocity, clock, clock rate), each mapping
epoch -> vehicle -> value.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from sp3core.gnss_time import Epoch
from sp3core.sp3_models import Vehicle

# (x, y, z): km for positions, dm/s for velocities
Vector = Tuple[float, float, float]
VectorRecord = Dict[Epoch, Dict[Vehicle, Vector]]
# us for clocks, 1e-4 us/s for clock rates
ScalarRecord = Dict[Epoch, Dict[Vehicle, float]]

ABSENT_VECTOR = (0.0, 0.0, 0.0)
# Clock (and clock rate) values at or above this are "no data" (999999.999999 in files)
CLOCK_SENTINEL = 999999.0


def is_absent_vector(value: Vector) -> bool:
    return value[0] == 0.0 and value[1] == 0.0 and value[2] == 0.0


def is_absent_clock(value: float) -> bool:
    return value >= CLOCK_SENTINEL


@dataclass
class TimeSeriesStore:
    """
    Epoch/vehicle indexed records of one SP3 dataset.

    Notes:
    - `epoch` holds every epoch with at least one record, strictly increasing
      once parsing or merging is complete (see `sort_epochs`).
    - Inserting a sentinel value is a no-op, so absent data never shows up
      in the records.
    - Not thread safe: mutate from a single task.
    """
    epoch: List[Epoch] = field(default_factory=list)
    vehicles: List[Vehicle] = field(default_factory=list)
    position: VectorRecord = field(default_factory=dict)
    velocity: VectorRecord = field(default_factory=dict)
    clock: ScalarRecord = field(default_factory=dict)
    clock_rate: ScalarRecord = field(default_factory=dict)
    _epoch_set: Set[Epoch] = field(default_factory=set, compare=False, repr=False)
    _vehicle_set: Set[Vehicle] = field(default_factory=set, compare=False, repr=False)

    def __post_init__(self):
        self._epoch_set = set(self.epoch)
        self._vehicle_set = set(self.vehicles)

    # -----------------------------------------------------
    # Append operations
    # -----------------------------------------------------

    def add_epoch(self, epoch: Epoch) -> bool:
        """Append an epoch if it is not known yet. Returns True when appended."""
        if epoch in self._epoch_set:
            return False
        self._epoch_set.add(epoch)
        self.epoch.append(epoch)
        return True

    def add_vehicle(self, sv: Vehicle) -> bool:
        """Append a vehicle to the first-seen list if it is not known yet."""
        if sv in self._vehicle_set:
            return False
        self._vehicle_set.add(sv)
        self.vehicles.append(sv)
        return True

    def sort_epochs(self):
        self.epoch.sort()

    def insert_position(self, epoch: Epoch, sv: Vehicle, value: Vector) -> bool:
        if is_absent_vector(value):
            return False
        self._insert(self.position, epoch, sv, tuple(value))
        return True

    def insert_velocity(self, epoch: Epoch, sv: Vehicle, value: Vector) -> bool:
        if is_absent_vector(value):
            return False
        self._insert(self.velocity, epoch, sv, tuple(value))
        return True

    def insert_clock(self, epoch: Epoch, sv: Vehicle, value: float) -> bool:
        if is_absent_clock(value):
            return False
        self._insert(self.clock, epoch, sv, value)
        return True

    def insert_clock_rate(self, epoch: Epoch, sv: Vehicle, value: float) -> bool:
        if is_absent_clock(value):
            return False
        self._insert(self.clock_rate, epoch, sv, value)
        return True

    def _insert(self, record, epoch: Epoch, sv: Vehicle, value):
        record.setdefault(epoch, {})[sv] = value
        self.add_epoch(epoch)
        self.add_vehicle(sv)

    # -----------------------------------------------------
    # Queries
    # -----------------------------------------------------

    def nb_epochs(self) -> int:
        return len(self.epoch)

    def first_epoch(self) -> Optional[Epoch]:
        return self.epoch[0] if self.epoch else None

    def last_epoch(self) -> Optional[Epoch]:
        return self.epoch[-1] if self.epoch else None

    def sv(self) -> Iterator[Vehicle]:
        return iter(list(self.vehicles))

    def sv_position(self) -> Iterator[Tuple[Epoch, Vehicle, Vector]]:
        """(epoch, vehicle, (x, y, z) km), in epoch then vehicle order."""
        return self._flatten(self.position)

    def sv_velocity(self) -> Iterator[Tuple[Epoch, Vehicle, Vector]]:
        """(epoch, vehicle, (vx, vy, vz) dm/s), in epoch then vehicle order."""
        return self._flatten(self.velocity)

    def sv_clock(self) -> Iterator[Tuple[Epoch, Vehicle, float]]:
        """(epoch, vehicle, clock offset us), in epoch then vehicle order."""
        return self._flatten(self.clock)

    def sv_clock_rate(self) -> Iterator[Tuple[Epoch, Vehicle, float]]:
        return self._flatten(self.clock_rate)

    def sv_position_series(self, sv: Vehicle) -> List[Tuple[Epoch, Vector]]:
        """Ordered position samples of a single vehicle."""
        return self._series(self.position, sv)

    def sv_velocity_series(self, sv: Vehicle) -> List[Tuple[Epoch, Vector]]:
        return self._series(self.velocity, sv)

    def _flatten(self, record):
        for epoch in sorted(record):
            per_sv = record[epoch]
            for sv in sorted(per_sv):
                yield epoch, sv, per_sv[sv]

    def _series(self, record, sv: Vehicle):
        return [
            (epoch, record[epoch][sv])
            for epoch in sorted(record)
            if sv in record[epoch]
        ]
