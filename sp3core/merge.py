"""
Merging of two SP3 datasets.

A merge either succeeds completely or raises before anything is modified.
Agency, time scale and coordinate system must match. Other header fields are
reconciled:
  - different constellations collapse to Constellation.MIXED
  - the newest revision wins
  - the earliest MJD start and week counter win
  - the coarsest epoch interval wins
Records are unioned; on (epoch, vehicle) collisions the right-hand side wins.
"""
import copy
import logging

from sp3core.data_models import Dataset
from sp3core.errors import AgencyMismatch, CoordSystemMismatch, TimeScaleMismatch
from sp3core.sp3_models import Constellation, DataType

logger = logging.getLogger(__name__)


def check_compatibility(lhs: Dataset, rhs: Dataset):
    """Raise a MergeError subclass when the two datasets cannot be merged."""
    if lhs.header.agency != rhs.header.agency:
        raise AgencyMismatch(lhs.header.agency, rhs.header.agency)
    if lhs.header.time_scale != rhs.header.time_scale:
        raise TimeScaleMismatch(lhs.header.time_scale, rhs.header.time_scale)
    if lhs.header.coord_system != rhs.header.coord_system:
        raise CoordSystemMismatch(lhs.header.coord_system, rhs.header.coord_system)


def _merge_header(lhs: Dataset, rhs: Dataset):
    header, other = lhs.header, rhs.header
    if header.constellation != other.constellation:
        header.constellation = Constellation.MIXED
    header.version = max(header.version, other.version)
    if other.data_type == DataType.VELOCITY:
        header.data_type = DataType.VELOCITY
    header.mjd_start = min(header.mjd_start, other.mjd_start)
    header.week_counter = min(header.week_counter, other.week_counter)
    header.epoch_interval = max(header.epoch_interval, other.epoch_interval)
    for comment in other.comments:
        if comment not in header.comments:
            header.comments.append(comment)


def _merge_record(record: dict, other: dict):
    for epoch, per_sv in other.items():
        if epoch in record:
            record[epoch].update(per_sv)
        else:
            record[epoch] = dict(per_sv)


def merge_mut(lhs: Dataset, rhs: Dataset):
    """
    Merge `rhs` into `lhs` in place.

    Raises:
        AgencyMismatch, TimeScaleMismatch, CoordSystemMismatch: before `lhs` is modified
    """
    check_compatibility(lhs, rhs)
    _merge_header(lhs, rhs)

    store, other = lhs.store, rhs.store
    for sv in other.vehicles:
        store.add_vehicle(sv)
    for epoch in other.epoch:
        store.add_epoch(epoch)
    _merge_record(store.position, other.position)
    _merge_record(store.velocity, other.velocity)
    _merge_record(store.clock, other.clock)
    _merge_record(store.clock_rate, other.clock_rate)
    store.sort_epochs()

    logger.info(
        f"Merged dataset: {store.nb_epochs()} epochs, {len(store.vehicles)} vehicles"
    )


def merge(lhs: Dataset, rhs: Dataset) -> Dataset:
    """
    Return a new dataset combining `lhs` and `rhs`, both left untouched.
    """
    check_compatibility(lhs, rhs)
    merged = copy.deepcopy(lhs)
    merge_mut(merged, rhs)
    return merged
