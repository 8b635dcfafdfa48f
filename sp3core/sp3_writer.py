"""
Renders a Dataset back into the SP3 fixed-column grammar.

Output is equivalent to the parsed input, not byte identical: accuracy
exponents and %f/%i values are written with default values, and exactly four
comment lines are emitted.
"""
import gzip
import io
import logging
import math
import os
from datetime import datetime, timedelta
from typing import BinaryIO, List, TextIO, Union

from sp3core.data_models import Dataset
from sp3core.data_store import ABSENT_VECTOR
from sp3core.global_config import get_global_config
from sp3core.gnss_time import GNSSTime
from sp3core.sp3_models import DataType

logger = logging.getLogger(__name__)

LINE_LENGTH = 60
VEHICLES_PER_LINE = 17
FILLER_VEHICLE = "  0"
COMMENT_SLOTS = 4
ABSENT_CLOCK = 999999.999999


def format_calendar(dt: datetime) -> str:
    """2019 10 27  0  0  0.00000000"""
    return (
        f"{dt.year:4d} {dt.month:2d} {dt.day:2d} {dt.hour:2d} {dt.minute:2d} "
        f"{dt.second:2d}.{dt.microsecond * 100:08d}"
    )


def _start_datetime(dataset: Dataset) -> datetime:
    first = dataset.first_epoch()
    if first is not None:
        return first.to_time_scale(dataset.header.time_scale).datetime
    # empty dataset: fall back on the week counter
    week, seconds = dataset.header.week_counter
    return GNSSTime.GPS_EPOCH + timedelta(weeks=week, seconds=seconds)


def header_line1(dataset: Dataset) -> str:
    header = dataset.header
    return (
        f"#{str(header.version)}{str(header.data_type)}{format_calendar(_start_datetime(dataset))} "
        f"{dataset.nb_epochs():7d} {str(header.data_used):>5.5} {header.coord_system:>5.5} "
        f"{str(header.orbit_type):>3.3} {header.agency:>4.4}"
    )


def header_line2(dataset: Dataset) -> str:
    header = dataset.header
    week, seconds_of_week = header.week_counter
    mjd, mjd_fraction = header.mjd_start
    interval = header.epoch_interval.total_seconds()
    return f"## {week:4d} {seconds_of_week:15.8f} {interval:14.8f} {mjd:5d} {mjd_fraction:15.13f}"


def vehicle_lines(dataset: Dataset) -> List[str]:
    """'+' lines (17 ids each) followed by as many '++' accuracy lines."""
    ids = [str(sv) for sv in dataset.store.vehicles]
    nb_lines = max(get_global_config().min_vehicle_lines, math.ceil(len(ids) / VEHICLES_PER_LINE))

    lines = []
    for index in range(nb_lines):
        chunk = ids[index * VEHICLES_PER_LINE:(index + 1) * VEHICLES_PER_LINE]
        chunk += [FILLER_VEHICLE] * (VEHICLES_PER_LINE - len(chunk))
        prefix = f"+  {len(ids):3d}   " if index == 0 else "+        "
        lines.append(prefix + "".join(chunk))
    lines += ["++       " + FILLER_VEHICLE * VEHICLES_PER_LINE] * nb_lines
    return lines


def descriptor_lines(dataset: Dataset) -> List[str]:
    header = dataset.header
    token = str(header.time_scale)
    return [
        f"%c {str(header.constellation):<2} cc {token:3} ccc cccc cccc cccc cccc ccccc ccccc ccccc ccccc",
        "%c cc cc ccc ccc cccc cccc cccc cccc ccccc ccccc ccccc ccccc",
        "%f  1.2500000  1.025000000  0.00000000000  0.000000000000000",
        "%f  0.0000000  0.000000000  0.00000000000  0.000000000000000",
        "%i    0    0    0    0      0      0      0      0         0",
        "%i    0    0    0    0      0      0      0      0         0",
    ]


def comment_lines(dataset: Dataset) -> List[str]:
    comments = list(dataset.header.comments)
    if len(comments) > COMMENT_SLOTS:
        logger.warning(f"Only {COMMENT_SLOTS} comment lines are written, dropping {len(comments) - COMMENT_SLOTS}")
        comments = comments[:COMMENT_SLOTS]
    comments += [""] * (COMMENT_SLOTS - len(comments))
    lines = []
    for text in comments:
        line = f"/* {text}"
        if len(line) > LINE_LENGTH:
            logger.warning(f"Comment clipped to {LINE_LENGTH} columns: \"{text}\"")
            line = line[:LINE_LENGTH]
        lines.append(line.ljust(LINE_LENGTH))
    return lines


def _entry(prefix: str, sv, vector, clock) -> str:
    x, y, z = vector
    return f"{prefix}{sv}{x:14.6f}{y:14.6f}{z:14.6f}{clock:14.6f}"


def epoch_block(dataset: Dataset, epoch) -> List[str]:
    store = dataset.store
    with_velocity = dataset.header.data_type == DataType.VELOCITY
    positions = store.position.get(epoch, {})
    clocks = store.clock.get(epoch, {})
    velocities = store.velocity.get(epoch, {})
    clock_rates = store.clock_rate.get(epoch, {})

    lines = ["*  " + format_calendar(epoch.to_time_scale(dataset.header.time_scale).datetime)]
    for sv in store.vehicles:
        if sv in positions or sv in clocks:
            lines.append(_entry(
                "P", sv, positions.get(sv, ABSENT_VECTOR), clocks.get(sv, ABSENT_CLOCK)
            ))
        if with_velocity and (sv in velocities or sv in clock_rates):
            lines.append(_entry(
                "V", sv, velocities.get(sv, ABSENT_VECTOR), clock_rates.get(sv, ABSENT_CLOCK)
            ))
    return lines


def iter_lines(dataset: Dataset):
    yield header_line1(dataset)
    yield header_line2(dataset)
    yield from vehicle_lines(dataset)
    yield from descriptor_lines(dataset)
    yield from comment_lines(dataset)
    for epoch in dataset.epoch:
        yield from epoch_block(dataset, epoch)
    yield "EOF"


def write(dataset: Dataset, sink: Union[BinaryIO, TextIO]):
    """
    Write a dataset to a byte sink, or to a text sink.

    Bytes are encoded with the configured encoding. I/O errors propagate to
    the caller.
    """
    if isinstance(sink, io.TextIOBase):
        for line in iter_lines(dataset):
            sink.write(line + "\n")
        return
    encoding = get_global_config().encoding
    for line in iter_lines(dataset):
        sink.write((line + "\n").encode(encoding))


def to_string(dataset: Dataset) -> str:
    return "".join(line + "\n" for line in iter_lines(dataset))


def to_file(dataset: Dataset, path):
    """Write a dataset to a file, gzip compressed when the suffix asks for it."""
    path = os.fspath(path)
    config = get_global_config()
    if any(path.lower().endswith(suffix) for suffix in config.gzip_suffixes):
        stream = gzip.open(path, "wb")
    else:
        stream = open(path, "wb")
    with stream:
        write(dataset, stream)
    logger.info(f"Wrote {dataset.nb_epochs()} epochs to {path}")
