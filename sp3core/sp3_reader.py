"""
Reads SP3-c / SP3-d precise orbit files.

Parsing is a single forward pass: each stripped line is dispatched to the
first matching (predicate, handler) pair, and the handlers populate a
DatasetBuilder that is finalized into a Dataset at end of input.

Column offsets follow the SP3-d format description (IGS, 2016). All errors
abort the parse, except position/velocity records shorter than 60 columns
which are skipped.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from sp3core import line_classifier as lc
from sp3core.data_models import Dataset, Header
from sp3core.data_store import TimeSeriesStore
from sp3core.errors import (
    ClockError,
    CoordinatesError,
    EpochDayError,
    EpochFractionError,
    EpochHoursError,
    EpochIntervalError,
    EpochMinutesError,
    EpochMonthError,
    EpochSecondsError,
    EpochYearError,
    MalformedDescriptor,
    MalformedHeaderLine1,
    MalformedHeaderLine2,
    MjdError,
    NumberOfEpochsError,
    ParsingError,
    WeekCounterError,
)
from sp3core.gnss_time import Epoch, TimeScale
from sp3core.line_source import iter_lines
from sp3core.sp3_models import Constellation, DataType, DataUsed, OrbitType, Vehicle, Version

logger = logging.getLogger(__name__)

HEADER_LINE_LENGTH = 60
MIN_DESCRIPTOR_LENGTH = 60
MIN_RECORD_LENGTH = 60


def _parse_int(text: str, error):
    try:
        return int(text.strip())
    except ValueError:
        raise error(text) from None


def _parse_float(text: str, error):
    try:
        return float(text.strip())
    except ValueError:
        raise error(text) from None


def parse_calendar(content: str) -> datetime:
    """
    Parse the Gregorian date-time found in epoch lines and header line #1.

    Args:
        content: line content starting at the year column
                 ("2019 10 27  0  0  0.00000000")

    Returns:
        naive datetime, microsecond resolution
    """
    year = _parse_int(content[0:4], EpochYearError)
    month = _parse_int(content[4:7], EpochMonthError)
    day = _parse_int(content[7:10], EpochDayError)
    hours = _parse_int(content[10:13], EpochHoursError)
    minutes = _parse_int(content[13:16], EpochMinutesError)
    seconds = _parse_int(content[16:19], EpochSecondsError)

    fraction = content[20:28].strip()
    if fraction and not fraction.isdigit():
        raise EpochFractionError(content[20:28])
    microseconds = round(int(fraction.ljust(8, "0")) / 100) if fraction else 0

    if year < 1:
        raise EpochYearError(content[0:4])
    if not 1 <= month <= 12:
        raise EpochMonthError(content[4:7])
    if not 0 <= hours <= 23:
        raise EpochHoursError(content[10:13])
    if not 0 <= minutes <= 59:
        raise EpochMinutesError(content[13:16])
    # 60 is tolerated for leap seconds, it rolls over into the next minute
    if not 0 <= seconds <= 60:
        raise EpochSecondsError(content[16:19])
    try:
        date = datetime(year, month, day)
    except ValueError:
        raise EpochDayError(content[7:10]) from None
    return date + timedelta(hours=hours, minutes=minutes, seconds=seconds, microseconds=microseconds)


class DatasetBuilder:
    """
    Accumulates header fields and records while lines are fed in order.
    """

    def __init__(self):
        self.header = Header()
        self.store = TimeSeriesStore()
        self.current_epoch: Optional[Epoch] = None
        self.start_datetime: Optional[datetime] = None
        self.declared_epochs: Optional[int] = None
        self.has_header_line2 = False
        self.descriptor_count = 0
        self.skipped_records = 0
        self.duplicate_epochs = 0

        # Order matters: '##' before '#', '++' before '+'
        self.dispatch = [
            (lc.comment, self.handle_comment),
            (lc.header_line2, self.handle_header_line2),
            (lc.header_line1, self.handle_header_line1),
            (lc.orbit_accuracy, self.handle_orbit_accuracy),
            (lc.vehicle_list, self.handle_vehicle_list),
            (lc.descriptor, self.handle_descriptor),
            (lc.new_epoch, self.handle_new_epoch),
            (lc.position_entry, self.handle_position),
            (lc.velocity_entry, self.handle_velocity),
        ]

    def feed(self, lines: Iterable[str]) -> "DatasetBuilder":
        for raw in lines:
            line = raw.strip()
            if not line:
                continue
            if lc.end_of_file(line):
                break
            for predicate, handler in self.dispatch:
                if predicate(line):
                    handler(line)
                    break
        return self

    # -------------------------------------------------------------------------
    # Header
    # -------------------------------------------------------------------------
    def handle_header_line1(self, line: str):
        """
        #dP2019 10 27  0  0  0.00000000     288 ORBIT IGS14 FIT  IGS
        """
        if len(line) != HEADER_LINE_LENGTH:
            raise MalformedHeaderLine1(line)

        self.header.version = Version.from_str(line[1])
        self.header.data_type = DataType.from_str(line[2])
        self.start_datetime = parse_calendar(line[3:31])
        self.declared_epochs = _parse_int(line[31:39], NumberOfEpochsError)
        self.header.data_used = DataUsed.from_str(line[39:45])
        self.header.coord_system = line[45:51].strip()
        self.header.orbit_type = OrbitType.from_str(line[51:55])
        self.header.agency = line[55:].strip()

    def handle_header_line2(self, line: str):
        """
        ## 2077      0.00000000   300.00000000 58783 0.0000000000000
        """
        if len(line) != HEADER_LINE_LENGTH:
            raise MalformedHeaderLine2(line)

        week = _parse_int(line[2:7], WeekCounterError)
        seconds_of_week = _parse_float(line[7:23], WeekCounterError)
        interval = _parse_float(line[23:38], EpochIntervalError)
        mjd = _parse_int(line[38:44], MjdError)
        mjd_fraction = _parse_float(line[44:], MjdError)

        self.header.week_counter = (week, seconds_of_week)
        self.header.epoch_interval = timedelta(seconds=interval)
        self.header.mjd_start = (mjd, mjd_fraction)
        self.has_header_line2 = True

    def handle_vehicle_list(self, line: str):
        """
        +   32   G01G02G03G04G05G06G07G08G09G10G11G12G13G14G15G16G17
        """
        content = line[9:HEADER_LINE_LENGTH]
        for offset in range(0, len(content), 3):
            slot = content[offset:offset + 3].strip()
            if not slot or (slot.isdigit() and int(slot) == 0):
                continue
            self.store.add_vehicle(Vehicle.from_str(slot))

    def handle_orbit_accuracy(self, line: str):
        # accuracy exponents are not retained
        pass

    def handle_descriptor(self, line: str):
        """
        %c M  cc GPS ccc cccc cccc cccc cccc ccccc ccccc ccccc ccccc
        """
        if len(line) < MIN_DESCRIPTOR_LENGTH:
            raise MalformedDescriptor(line)
        self.descriptor_count += 1
        if self.descriptor_count > 1:
            logger.debug(f"Ignoring %c line #{self.descriptor_count}")
            return
        self.header.constellation = Constellation.from_str(line[3:5])
        self.header.time_scale = TimeScale.from_str(line[9:12])

    def handle_comment(self, line: str):
        text = line[2:]
        if text.startswith(" "):
            text = text[1:]
        # blank comment lines are slot fillers
        if text.strip():
            self.header.comments.append(text)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------
    def handle_new_epoch(self, line: str):
        """
        *  2019 10 27  0  0  0.00000000
        """
        epoch = Epoch(parse_calendar(line[3:]), self.header.time_scale)
        self.current_epoch = epoch
        if not self.store.add_epoch(epoch):
            self.duplicate_epochs += 1
            logger.warning(f"Duplicate epoch marker {epoch}")

    def _parse_entry(self, line: str):
        if self.current_epoch is None:
            raise ParsingError(f"record found before the first epoch marker: \"{line}\"")
        sv = Vehicle.from_str(line[1:4])
        vector = (
            _parse_float(line[4:18], CoordinatesError),
            _parse_float(line[18:32], CoordinatesError),
            _parse_float(line[32:46], CoordinatesError),
        )
        clock_text = line[46:60]
        clock = _parse_float(clock_text, ClockError) if clock_text.strip() else None
        self.store.add_vehicle(sv)
        return sv, vector, clock

    def handle_position(self, line: str):
        """
        PG01 -11044.805800 -10475.672350  21929.418200    189.163300
        """
        if len(line) < MIN_RECORD_LENGTH:
            self.skipped_records += 1
            logger.debug(f"Skipping short position record \"{line}\"")
            return
        sv, position, clock = self._parse_entry(line)
        self.store.insert_position(self.current_epoch, sv, position)
        if clock is not None:
            self.store.insert_clock(self.current_epoch, sv, clock)

    def handle_velocity(self, line: str):
        if len(line) < MIN_RECORD_LENGTH:
            self.skipped_records += 1
            logger.debug(f"Skipping short velocity record \"{line}\"")
            return
        sv, velocity, clock_rate = self._parse_entry(line)
        self.store.insert_velocity(self.current_epoch, sv, velocity)
        if clock_rate is not None:
            self.store.insert_clock_rate(self.current_epoch, sv, clock_rate)

    # -------------------------------------------------------------------------
    # Finalization
    # -------------------------------------------------------------------------
    def build(self) -> Dataset:
        epochs = self.store.epoch
        if any(later <= earlier for earlier, later in zip(epochs, epochs[1:])):
            logger.warning("Epoch markers are not in chronological order, sorting them")
            self.store.sort_epochs()

        if self.declared_epochs is not None and self.declared_epochs != len(epochs):
            logger.warning(
                f"Header declares {self.declared_epochs} epochs, {len(epochs)} found"
            )
        if self.start_datetime is not None and epochs:
            start = Epoch(self.start_datetime, self.header.time_scale)
            if start != epochs[0]:
                logger.warning(f"Header start epoch {start} differs from first epoch {epochs[0]}")
        if self.has_header_line2 and epochs:
            self._check_start_counters(epochs[0])
        if self.skipped_records:
            logger.info(f"Skipped {self.skipped_records} short records")

        return Dataset(header=self.header, store=self.store)

    def _check_start_counters(self, first: Epoch):
        """Warn when header line #2 does not describe the first epoch."""
        week, seconds = first.gps_week_seconds()
        header_week, header_seconds = self.header.week_counter
        if week != header_week or abs(seconds - header_seconds) > 1e-3:
            logger.warning(
                f"Header week counter {header_week} {header_seconds} differs from first epoch ({week} {seconds})"
            )
        mjd, fraction = first.mjd()
        header_mjd, header_fraction = self.header.mjd_start
        if mjd != header_mjd or abs(fraction - header_fraction) > 1e-8:
            logger.warning(
                f"Header MJD start {header_mjd} {header_fraction} differs from first epoch ({mjd} {fraction})"
            )


def parse_lines(lines: Iterable[str]) -> Dataset:
    """Parse SP3 content from an iterable of text lines."""
    return DatasetBuilder().feed(lines).build()


def parse_string(content: str) -> Dataset:
    return parse_lines(content.splitlines())


def from_file(path) -> Dataset:
    """
    Parse an SP3 file, gzip compressed or not.

    Raises:
        ParsingError: on any grammar violation
        OSError: when the file cannot be read
    """
    dataset = parse_lines(iter_lines(path))
    logger.info(
        f"Parsed {path}: {dataset.nb_epochs()} epochs, {len(dataset.store.vehicles)} vehicles"
    )
    return dataset
