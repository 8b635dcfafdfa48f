"""
Exceptions raised while reading, merging and writing SP3 files.

All parse-time errors abort the parse. Merge errors are raised before the
destination is touched.
"""


class Sp3Error(Exception):
    """Base class for every error raised by sp3core."""


class ParsingError(Sp3Error, ValueError):
    """The input does not follow the SP3 line grammar."""


# -----------------------------------------------------
# Structural errors
# -----------------------------------------------------

class MalformedHeaderLine1(ParsingError):
    def __init__(self, line: str = ""):
        super().__init__(f"malformed header line #1 (length {len(line)}, expected 60)")
        self.line = line


class MalformedHeaderLine2(ParsingError):
    def __init__(self, line: str = ""):
        super().__init__(f"malformed header line #2 (length {len(line)}, expected 60)")
        self.line = line


class MalformedDescriptor(ParsingError):
    def __init__(self, line: str = ""):
        super().__init__(f"malformed file descriptor line (length {len(line)}, expected >= 60)")
        self.line = line


# -----------------------------------------------------
# Unknown enumerated tokens
# -----------------------------------------------------

class UnknownToken(ParsingError):
    """An enumerated header token is not one we know."""
    what = "token"

    def __init__(self, text: str):
        super().__init__(f"unknown {self.what} \"{text}\"")
        self.text = text


class UnknownVersion(UnknownToken):
    what = "or non supported revision"


class UnknownDataType(UnknownToken):
    what = "data type"


class UnknownOrbitType(UnknownToken):
    what = "orbit type"


class UnknownDataUsed(UnknownToken):
    what = "data used descriptor"


class UnknownConstellation(UnknownToken):
    what = "constellation"


class UnknownTimeScale(UnknownToken):
    what = "time scale"


# -----------------------------------------------------
# Field level numeric errors
# -----------------------------------------------------

class FieldError(ParsingError):
    """A fixed-width numeric field could not be parsed."""
    field = "field"

    def __init__(self, text: str):
        super().__init__(f"failed to parse {self.field} from \"{text}\"")
        self.text = text


class EpochYearError(FieldError):
    field = "epoch year"


class EpochMonthError(FieldError):
    field = "epoch month"


class EpochDayError(FieldError):
    field = "epoch day"


class EpochHoursError(FieldError):
    field = "epoch hours"


class EpochMinutesError(FieldError):
    field = "epoch minutes"


class EpochSecondsError(FieldError):
    field = "epoch seconds"


class EpochFractionError(FieldError):
    field = "epoch fractional seconds"


class NumberOfEpochsError(FieldError):
    field = "number of epochs"


class WeekCounterError(FieldError):
    field = "week counter"


class EpochIntervalError(FieldError):
    field = "epoch interval"


class MjdError(FieldError):
    field = "mjd start"


class VehicleError(FieldError):
    field = "vehicle id"


class CoordinatesError(FieldError):
    field = "(x, y, or z) coordinates"


class ClockError(FieldError):
    field = "clock"


# -----------------------------------------------------
# Merge errors
# -----------------------------------------------------

class MergeError(Sp3Error):
    """Two datasets cannot be combined."""
    what = "header field"

    def __init__(self, lhs, rhs):
        super().__init__(f"cannot merge: {self.what} differs (\"{lhs}\" != \"{rhs}\")")
        self.lhs = lhs
        self.rhs = rhs


class AgencyMismatch(MergeError):
    what = "agency"


class TimeScaleMismatch(MergeError):
    what = "time scale"


class CoordSystemMismatch(MergeError):
    what = "coordinate system"
