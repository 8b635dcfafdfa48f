"""
Data models for a parsed SP3 file: header metadata and the dataset aggregate.
"""
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Iterator, List, Optional, Tuple

from sp3core.data_store import TimeSeriesStore
from sp3core.gnss_time import Epoch, TimeScale
from sp3core.sp3_models import Constellation, DataType, DataUsed, OrbitType, Vehicle, Version


@dataclass
class Header:
    """
    SP3 header metadata.
    """
    version: Version = Version.D
    data_type: DataType = DataType.POSITION
    data_used: DataUsed = field(default_factory=DataUsed)
    coord_system: str = "Unknown"
    orbit_type: OrbitType = OrbitType.FIT
    agency: str = "Unknown"
    constellation: Constellation = Constellation.MIXED
    time_scale: TimeScale = TimeScale.GPST
    week_counter: Tuple[int, float] = (0, 0.0)   # (GPS week, seconds of week)
    mjd_start: Tuple[int, float] = (0, 0.0)      # (MJD, fraction of day)
    epoch_interval: timedelta = timedelta(0)
    comments: List[str] = field(default_factory=list)


@dataclass
class Dataset:
    """
    One SP3 file in memory: a header and the time-series store it describes.

    Built once by the reader, optionally extended by a merge, otherwise used
    read-only by the interpolator and the writer.
    """
    header: Header = field(default_factory=Header)
    store: TimeSeriesStore = field(default_factory=TimeSeriesStore)

    @classmethod
    def from_file(cls, path) -> "Dataset":
        """Parse a (possibly gzip compressed) SP3 file."""
        from sp3core.sp3_reader import from_file
        return from_file(path)

    def to_file(self, path):
        from sp3core.sp3_writer import to_file
        to_file(self, path)

    def merge(self, rhs: "Dataset") -> "Dataset":
        from sp3core.merge import merge
        return merge(self, rhs)

    def merge_mut(self, rhs: "Dataset"):
        from sp3core.merge import merge_mut
        merge_mut(self, rhs)

    def interpolate(self, epoch: Epoch, sv: Vehicle, order: Optional[int] = None):
        from sp3core.interpolation import interpolate_position
        return interpolate_position(self, epoch, sv, order)

    # Store shortcuts

    @property
    def epoch(self) -> List[Epoch]:
        return self.store.epoch

    def nb_epochs(self) -> int:
        return self.store.nb_epochs()

    def first_epoch(self) -> Optional[Epoch]:
        return self.store.first_epoch()

    def last_epoch(self) -> Optional[Epoch]:
        return self.store.last_epoch()

    def sv(self) -> Iterator[Vehicle]:
        return self.store.sv()

    def sv_position(self):
        return self.store.sv_position()

    def sv_velocity(self):
        return self.store.sv_velocity()

    def sv_clock(self):
        return self.store.sv_clock()

    def sv_clock_rate(self):
        return self.store.sv_clock_rate()

    def comments(self) -> Iterator[str]:
        return iter(list(self.header.comments))
