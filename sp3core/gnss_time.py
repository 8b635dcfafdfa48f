from datetime import datetime, timedelta
from enum import Enum
from functools import total_ordering

from sp3core.errors import UnknownTimeScale


class TimeScale(Enum):
    """Time scales that may tag an SP3 file.

    The value is the three letter token found in the first `%c` line.
    """
    GPST = "GPS"
    GLONASST = "GLO"
    GST = "GAL"
    BDT = "BDT"
    QZSST = "QZS"
    IRNSST = "IRN"
    TAI = "TAI"
    UTC = "UTC"

    @classmethod
    def from_str(cls, text: str) -> "TimeScale":
        token = text.strip().upper()
        if token == "BDS":
            token = "BDT"
        for scale in cls:
            if scale.value == token or scale.name == token:
                return scale
        raise UnknownTimeScale(text)

    def __str__(self) -> str:
        return self.value


class GNSSTime:
    """Offsets between the GNSS time scales, GPS week and MJD helpers.

    Notes:
    - GPST, GST, QZSST and IRNSST run 19 s behind TAI, BDT 33 s behind TAI.
    - UTC includes leap seconds; this class uses a fixed leap-second offset
      (18s GPS-UTC at time of writing). Epochs before 2017 that are expressed
      in UTC or GLONASS time will be off by the leap seconds introduced since.
    """

    GPS_EPOCH = datetime(1980, 1, 6)
    MJD_EPOCH = datetime(1858, 11, 17)
    LEAP_SECONDS = 18
    TAI_GPS_SECONDS = 19
    SECONDS_PER_WEEK = 7 * 86400

    # Offset of each scale with respect to TAI, in seconds (scale - TAI)
    TAI_OFFSETS = {
        TimeScale.TAI: 0.0,
        TimeScale.GPST: -TAI_GPS_SECONDS,
        TimeScale.GST: -TAI_GPS_SECONDS,
        TimeScale.QZSST: -TAI_GPS_SECONDS,
        TimeScale.IRNSST: -TAI_GPS_SECONDS,
        TimeScale.BDT: -TAI_GPS_SECONDS - 14,
        TimeScale.UTC: -TAI_GPS_SECONDS - LEAP_SECONDS,
        TimeScale.GLONASST: -TAI_GPS_SECONDS - LEAP_SECONDS + 3 * 3600,
    }

    @classmethod
    def tai_offset(cls, time_scale: TimeScale) -> timedelta:
        return timedelta(seconds=cls.TAI_OFFSETS[time_scale])

    @classmethod
    def gps_week_seconds(cls, gps_dt: datetime) -> (int, float):
        """(GPS week, seconds of week) of a GPST calendar datetime."""
        week, seconds = divmod((gps_dt - cls.GPS_EPOCH).total_seconds(), cls.SECONDS_PER_WEEK)
        return int(week), seconds

    @classmethod
    def mjd(cls, dt: datetime) -> (int, float):
        """Return (integer MJD, fraction of day) of a calendar datetime."""
        days = (dt - cls.MJD_EPOCH).total_seconds() / 86400.0
        day = int(days // 1)
        return day, days - day


@total_ordering
class Epoch:
    """A time instant expressed as a calendar datetime in a given time scale.

    Two epochs compare equal when they designate the same physical instant,
    whatever their time scales. Subtracting two epochs yields real seconds.
    """

    __slots__ = ("datetime", "time_scale")

    def __init__(self, dt: datetime, time_scale: TimeScale = TimeScale.GPST):
        if dt.tzinfo is not None:
            dt = dt.replace(tzinfo=None)
        self.datetime = dt
        self.time_scale = time_scale

    @classmethod
    def from_gregorian(cls, year: int, month: int, day: int, hour: int = 0, minute: int = 0,
                       second: int = 0, microsecond: int = 0,
                       time_scale: TimeScale = TimeScale.GPST) -> "Epoch":
        return cls(datetime(year, month, day, hour, minute, second, microsecond), time_scale)

    @classmethod
    def from_str(cls, text: str) -> "Epoch":
        """Parse "2019-10-27T00:00:00[.ffffff] [SCALE]" (GPST when no scale is given)."""
        parts = text.strip().split()
        time_scale = TimeScale.GPST
        if len(parts) == 2:
            time_scale = TimeScale.from_str(parts[1])
        elif len(parts) != 1:
            raise ValueError(f"invalid epoch \"{text}\"")
        return cls(datetime.fromisoformat(parts[0]), time_scale)

    def to_tai(self) -> datetime:
        return self.datetime - GNSSTime.tai_offset(self.time_scale)

    def to_time_scale(self, time_scale: TimeScale) -> "Epoch":
        if time_scale == self.time_scale:
            return self
        return Epoch(self.to_tai() + GNSSTime.tai_offset(time_scale), time_scale)

    def gps_week_seconds(self) -> (int, float):
        return GNSSTime.gps_week_seconds(self.to_time_scale(TimeScale.GPST).datetime)

    def mjd(self) -> (int, float):
        return GNSSTime.mjd(self.datetime)

    def __add__(self, other):
        if isinstance(other, timedelta):
            return Epoch(self.datetime + other, self.time_scale)
        if isinstance(other, (int, float)):
            return Epoch(self.datetime + timedelta(seconds=other), self.time_scale)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Epoch):
            return (self.to_tai() - other.to_tai()).total_seconds()
        if isinstance(other, timedelta):
            return Epoch(self.datetime - other, self.time_scale)
        if isinstance(other, (int, float)):
            return Epoch(self.datetime - timedelta(seconds=other), self.time_scale)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.to_tai() == other.to_tai()

    def __lt__(self, other):
        if not isinstance(other, Epoch):
            return NotImplemented
        return self.to_tai() < other.to_tai()

    def __hash__(self):
        return hash(self.to_tai())

    def __str__(self):
        return f"{self.datetime.isoformat()} {self.time_scale.name}"

    def __repr__(self):
        return f"Epoch({self})"


__all__ = ["TimeScale", "GNSSTime", "Epoch"]
