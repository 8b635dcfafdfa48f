"""
Enumerated SP3 header tokens and satellite identifiers.

Every token type offers `from_str` (raising the matching "unknown" error on
bad input) and renders back to its file token through `str()`.
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import total_ordering
from typing import Optional, Tuple

from sp3core.errors import (
    UnknownConstellation,
    UnknownDataType,
    UnknownDataUsed,
    UnknownOrbitType,
    UnknownVersion,
    VehicleError,
)


class Version(IntEnum):
    """SP3 format revision. Newer revisions compare greater."""
    C = 3
    D = 4

    @classmethod
    def from_str(cls, text: str) -> "Version":
        token = text.strip().lower()
        if token == "c":
            return cls.C
        if token == "d":
            return cls.D
        raise UnknownVersion(text)

    def __str__(self) -> str:
        return self.name.lower()


class DataType(Enum):
    """Record set carried by the file."""
    POSITION = "P"
    VELOCITY = "V"

    @classmethod
    def from_str(cls, text: str) -> "DataType":
        for data_type in cls:
            if data_type.value == text:
                return data_type
        raise UnknownDataType(text)

    def __str__(self) -> str:
        return self.value


class OrbitType(Enum):
    FIT = "FIT"  # fitted
    EXT = "EXT"  # extrapolated or predicted
    BCT = "BCT"  # broadcast
    BHN = "BHN"  # fitted after Helmert transformation
    HLM = "HLM"  # fitted after applying Helmert transformation

    @classmethod
    def from_str(cls, text: str) -> "OrbitType":
        token = text.strip()
        for orbit_type in cls:
            if orbit_type.value == token:
                return orbit_type
        raise UnknownOrbitType(text)

    def __str__(self) -> str:
        return self.value


class DataUsedUnitary(Enum):
    """One observable combination used to produce the estimates."""
    UNDIFFERENCED_PHASE = "u"
    UNDIFFERENCED_PHASE_DERIVATIVE = "du"
    DUAL_RECEIVER_PHASE = "s"
    DUAL_RECEIVER_PHASE_DERIVATIVE = "ds"
    DUAL_RECEIVER_DUAL_PHASE = "d"
    DUAL_RECEIVER_DUAL_PHASE_DERIVATIVE = "dd"
    UNDIFFERENCED_CODE = "U"
    UNDIFFERENCED_CODE_DERIVATIVE = "dU"
    DUAL_RECEIVER_CODE = "S"
    DUAL_RECEIVER_CODE_DERIVATIVE = "dS"
    DUAL_RECEIVER_DUAL_CODE = "D"
    DUAL_RECEIVER_DUAL_CODE_DERIVATIVE = "dD"
    COMPLEX_MIX = "MIXED"
    ORBIT = "ORBIT"

    @classmethod
    def from_str(cls, text: str) -> "DataUsedUnitary":
        # Single letter codes are case sensitive (u: phase, U: code)
        for unitary in cls:
            if unitary.value == text:
                return unitary
        if text.lower() == "mixed":
            return cls.COMPLEX_MIX
        if text.lower() == "orbit":
            return cls.ORBIT
        raise UnknownDataUsed(text)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DataUsed:
    """The "data used" header descriptor: one tag, or two tags joined by '+'."""
    inner: Tuple[DataUsedUnitary, ...] = (DataUsedUnitary.ORBIT,)

    @classmethod
    def from_str(cls, text: str) -> "DataUsed":
        content = text.strip()
        if content.upper() == "MIXED":
            return cls((DataUsedUnitary.COMPLEX_MIX,))
        if "+" in content:
            first, second = content.split("+", 1)
            try:
                return cls((DataUsedUnitary.from_str(first), DataUsedUnitary.from_str(second)))
            except UnknownDataUsed:
                raise UnknownDataUsed(content) from None
        return cls((DataUsedUnitary.from_str(content),))

    def complex_combination(self) -> bool:
        return self.inner == (DataUsedUnitary.COMPLEX_MIX,)

    def combination(self) -> Optional[Tuple[DataUsedUnitary, DataUsedUnitary]]:
        if len(self.inner) == 2:
            return self.inner[0], self.inner[1]
        return None

    def single(self) -> Optional[DataUsedUnitary]:
        if len(self.inner) == 1:
            return self.inner[0]
        return None

    def __str__(self) -> str:
        return "+".join(str(unitary) for unitary in self.inner)


class Constellation(Enum):
    GPS = "G"
    GLONASS = "R"
    GALILEO = "E"
    BEIDOU = "C"
    QZSS = "J"
    IRNSS = "I"
    SBAS = "S"
    LEO = "L"
    MIXED = "M"

    @classmethod
    def from_str(cls, text: str) -> "Constellation":
        token = text.strip().upper()
        for constellation in cls:
            if constellation.value == token or constellation.name == token:
                return constellation
        raise UnknownConstellation(text)

    def __str__(self) -> str:
        return self.value


@total_ordering
@dataclass(frozen=True, eq=True)
class Vehicle:
    """A satellite: constellation + PRN number, rendered as e.g. "G01"."""
    constellation: Constellation
    prn: int

    @classmethod
    def from_str(cls, text: str) -> "Vehicle":
        """Parse a 3 character vehicle id ("G01", "G 1", or " 1" for early GPS-only files)."""
        raw = text.strip()
        if not raw:
            raise VehicleError(text)
        try:
            if raw[0].isdigit():
                constellation = Constellation.GPS
                number = raw
            else:
                constellation = Constellation.from_str(raw[0])
                number = raw[1:].strip()
            prn = int(number)
        except (UnknownConstellation, ValueError):
            raise VehicleError(text) from None
        if constellation == Constellation.MIXED or prn < 0:
            raise VehicleError(text)
        return cls(constellation, prn)

    def _sort_key(self):
        return self.constellation.value, self.prn

    def __lt__(self, other):
        if not isinstance(other, Vehicle):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return f"{self.constellation.value}{self.prn:02d}"


__all__ = [
    "Version",
    "DataType",
    "OrbitType",
    "DataUsedUnitary",
    "DataUsed",
    "Constellation",
    "Vehicle",
]
