"""
Tests for time scales and Epoch arithmetic.
"""

from datetime import datetime, timedelta

import pytest

from sp3core.errors import UnknownTimeScale
from sp3core.gnss_time import Epoch, GNSSTime, TimeScale


class TestTimeScale:

    @pytest.mark.parametrize("token, scale", [
        ("GPS", TimeScale.GPST),
        ("GLO", TimeScale.GLONASST),
        ("GAL", TimeScale.GST),
        ("BDT", TimeScale.BDT),
        ("BDS", TimeScale.BDT),
        ("QZS", TimeScale.QZSST),
        ("IRN", TimeScale.IRNSST),
        ("TAI", TimeScale.TAI),
        ("UTC", TimeScale.UTC),
        ("GPST", TimeScale.GPST),
    ])
    def test_from_str(self, token, scale):
        assert TimeScale.from_str(token) == scale

    def test_unknown(self):
        with pytest.raises(UnknownTimeScale):
            TimeScale.from_str("XYZ")


class TestGNSSTime:

    def test_week_seconds(self):
        week, seconds = GNSSTime.gps_week_seconds(datetime(2019, 10, 27, 1, 0, 0))
        assert week == 2077
        assert seconds == pytest.approx(3600.0)

    def test_mjd(self):
        day, fraction = GNSSTime.mjd(datetime(2019, 10, 27, 12, 0, 0))
        assert day == 58783
        assert fraction == pytest.approx(0.5)


class TestEpoch:

    def test_same_instant_across_scales(self):
        gpst = Epoch(datetime(2019, 10, 27, 0, 0, 0), TimeScale.GPST)
        tai = Epoch(datetime(2019, 10, 27, 0, 0, 19), TimeScale.TAI)
        bdt = Epoch(datetime(2019, 10, 26, 23, 59, 46), TimeScale.BDT)
        assert gpst == tai == bdt
        assert hash(gpst) == hash(tai)

    def test_to_time_scale(self):
        gpst = Epoch(datetime(2019, 10, 27, 0, 0, 18), TimeScale.GPST)
        utc = gpst.to_time_scale(TimeScale.UTC)
        assert utc.datetime == datetime(2019, 10, 27)
        assert utc == gpst

    def test_subtraction_is_seconds(self):
        a = Epoch.from_gregorian(2019, 10, 27, 0, 0, 0)
        b = Epoch.from_gregorian(2019, 10, 27, 0, 15, 0)
        assert b - a == pytest.approx(900.0)
        assert a - b == pytest.approx(-900.0)

    def test_add_seconds_and_timedelta(self):
        a = Epoch.from_gregorian(2019, 10, 27)
        assert a + 300 == a + timedelta(minutes=5)
        assert (a + 0.5).datetime.microsecond == 500000
        assert (a + 300) - 300 == a

    def test_ordering(self):
        a = Epoch.from_gregorian(2019, 10, 27)
        assert a < a + 1
        assert sorted([a + 10, a, a + 5]) == [a, a + 5, a + 10]

    def test_from_str(self):
        epoch = Epoch.from_str("2019-10-27T00:02:30 GPST")
        assert epoch.datetime == datetime(2019, 10, 27, 0, 2, 30)
        assert epoch.time_scale == TimeScale.GPST
        assert Epoch.from_str("2019-10-27T00:00:00").time_scale == TimeScale.GPST
        assert Epoch.from_str("2019-10-27T00:00:00 GAL").time_scale == TimeScale.GST

    def test_from_str_invalid(self):
        with pytest.raises(ValueError):
            Epoch.from_str("2019-10-27 00:00:00 GPS extra")

    def test_week_and_mjd(self):
        epoch = Epoch.from_gregorian(2019, 10, 27)
        assert epoch.gps_week_seconds() == (2077, 0.0)
        assert epoch.mjd() == (58783, 0.0)
