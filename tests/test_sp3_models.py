"""
Tests for header tokens and vehicle identifiers.
"""

import pytest

from sp3core.errors import (
    UnknownConstellation,
    UnknownDataType,
    UnknownDataUsed,
    UnknownOrbitType,
    UnknownVersion,
    VehicleError,
)
from sp3core.sp3_models import (
    Constellation,
    DataType,
    DataUsed,
    DataUsedUnitary,
    OrbitType,
    Vehicle,
    Version,
)


class TestVersion:

    def test_parse_case_insensitive(self):
        assert Version.from_str("c") == Version.C
        assert Version.from_str("D") == Version.D

    def test_newer_compares_greater(self):
        assert Version.D > Version.C
        assert max(Version.C, Version.D) == Version.D

    def test_token(self):
        assert str(Version.D) == "d"

    @pytest.mark.parametrize("text", ["a", "b", "e", ""])
    def test_unknown(self, text):
        with pytest.raises(UnknownVersion):
            Version.from_str(text)


class TestHeaderTokens:

    def test_data_type(self):
        assert DataType.from_str("P") == DataType.POSITION
        assert DataType.from_str("V") == DataType.VELOCITY
        with pytest.raises(UnknownDataType):
            DataType.from_str("X")

    def test_orbit_type(self):
        assert OrbitType.from_str("FIT") == OrbitType.FIT
        assert OrbitType.from_str(" BCT") == OrbitType.BCT
        assert str(OrbitType.HLM) == "HLM"
        with pytest.raises(UnknownOrbitType):
            OrbitType.from_str("XYZ")

    def test_constellation(self):
        assert Constellation.from_str("G ") == Constellation.GPS
        assert Constellation.from_str("M") == Constellation.MIXED
        assert str(Constellation.GALILEO) == "E"
        with pytest.raises(UnknownConstellation):
            Constellation.from_str("X")


class TestDataUsed:

    def test_orbit(self):
        used = DataUsed.from_str("ORBIT")
        assert used.single() == DataUsedUnitary.ORBIT
        assert used.combination() is None
        assert not used.complex_combination()

    def test_mixed(self):
        assert DataUsed.from_str("MIXED").complex_combination()
        assert DataUsed.from_str("mixed").complex_combination()

    def test_combination(self):
        used = DataUsed.from_str("u+U")
        assert used.combination() == (
            DataUsedUnitary.UNDIFFERENCED_PHASE,
            DataUsedUnitary.UNDIFFERENCED_CODE,
        )
        assert str(used) == "u+U"

    def test_case_sensitive_letters(self):
        assert DataUsed.from_str("s").single() == DataUsedUnitary.DUAL_RECEIVER_PHASE
        assert DataUsed.from_str("S").single() == DataUsedUnitary.DUAL_RECEIVER_CODE

    def test_default_is_orbit(self):
        assert str(DataUsed()) == "ORBIT"

    @pytest.mark.parametrize("text", ["xyz", "u+q", "+"])
    def test_unknown(self, text):
        with pytest.raises(UnknownDataUsed):
            DataUsed.from_str(text)


class TestVehicle:

    def test_parse(self):
        sv = Vehicle.from_str("G01")
        assert sv.constellation == Constellation.GPS
        assert sv.prn == 1
        assert str(sv) == "G01"

    def test_legacy_gps_only_id(self):
        assert Vehicle.from_str(" 1") == Vehicle(Constellation.GPS, 1)
        assert Vehicle.from_str("G 5") == Vehicle(Constellation.GPS, 5)

    @pytest.mark.parametrize("text", ["", "X01", "M01", "Gxx", "G-1"])
    def test_invalid(self, text):
        with pytest.raises(VehicleError):
            Vehicle.from_str(text)

    def test_sort_order(self):
        ids = ["R02", "G10", "E01", "G02"]
        assert [str(sv) for sv in sorted(Vehicle.from_str(i) for i in ids)] == [
            "E01", "G02", "G10", "R02",
        ]

    def test_hashable(self):
        assert len({Vehicle.from_str("G01"), Vehicle.from_str("G01")}) == 1
