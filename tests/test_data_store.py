"""
Tests for the time-series store.
"""

from sp3core.data_store import TimeSeriesStore, is_absent_clock, is_absent_vector
from sp3core.gnss_time import Epoch
from sp3core.sp3_models import Vehicle

G01 = Vehicle.from_str("G01")
E05 = Vehicle.from_str("E05")
T0 = Epoch.from_gregorian(2019, 10, 27)


class TestSentinels:

    def test_absent_vector(self):
        assert is_absent_vector((0.0, 0.0, 0.0))
        assert not is_absent_vector((0.0, 0.0, 1.0))

    def test_absent_clock(self):
        assert is_absent_clock(999999.999999)
        assert is_absent_clock(999999.0)
        assert not is_absent_clock(999998.9)
        assert not is_absent_clock(-999999.999999)


class TestInsert:

    def test_insert_registers_epoch_and_vehicle(self):
        store = TimeSeriesStore()
        assert store.insert_position(T0, G01, (1.0, 2.0, 3.0))
        assert store.epoch == [T0]
        assert store.vehicles == [G01]
        assert store.position[T0][G01] == (1.0, 2.0, 3.0)

    def test_sentinels_are_not_stored(self):
        store = TimeSeriesStore()
        assert not store.insert_position(T0, G01, (0.0, 0.0, 0.0))
        assert not store.insert_velocity(T0, G01, (0.0, 0.0, 0.0))
        assert not store.insert_clock(T0, G01, 999999.999999)
        assert not store.insert_clock_rate(T0, G01, 999999.999999)
        assert store.position == {}
        assert store.velocity == {}
        assert store.clock == {}
        assert store.clock_rate == {}

    def test_epochs_unique(self):
        store = TimeSeriesStore()
        assert store.add_epoch(T0)
        assert not store.add_epoch(T0)
        store.insert_clock(T0, G01, 1.0)
        assert store.nb_epochs() == 1

    def test_vehicles_first_seen_order(self):
        store = TimeSeriesStore()
        store.insert_clock(T0, G01, 1.0)
        store.insert_clock(T0, E05, 2.0)
        store.insert_clock(T0 + 300, G01, 3.0)
        assert list(store.sv()) == [G01, E05]

    def test_overwrite(self):
        store = TimeSeriesStore()
        store.insert_clock(T0, G01, 1.0)
        store.insert_clock(T0, G01, 2.0)
        assert store.clock[T0][G01] == 2.0


class TestQueries:

    def test_empty(self):
        store = TimeSeriesStore()
        assert store.nb_epochs() == 0
        assert store.first_epoch() is None
        assert store.last_epoch() is None
        assert list(store.sv_position()) == []

    def test_sort_epochs(self):
        store = TimeSeriesStore()
        store.add_epoch(T0 + 600)
        store.add_epoch(T0)
        store.add_epoch(T0 + 300)
        store.sort_epochs()
        assert store.epoch == [T0, T0 + 300, T0 + 600]
        assert store.first_epoch() == T0
        assert store.last_epoch() == T0 + 600

    def test_flatten_order(self):
        store = TimeSeriesStore()
        store.insert_clock(T0 + 300, G01, 3.0)
        store.insert_clock(T0, G01, 1.0)
        store.insert_clock(T0, E05, 2.0)
        assert list(store.sv_clock()) == [
            (T0, E05, 2.0),
            (T0, G01, 1.0),
            (T0 + 300, G01, 3.0),
        ]

    def test_series(self):
        store = TimeSeriesStore()
        store.insert_position(T0, G01, (1.0, 1.0, 1.0))
        store.insert_position(T0, E05, (2.0, 2.0, 2.0))
        store.insert_position(T0 + 300, G01, (3.0, 3.0, 3.0))
        assert store.sv_position_series(G01) == [
            (T0, (1.0, 1.0, 1.0)),
            (T0 + 300, (3.0, 3.0, 3.0)),
        ]
        assert store.sv_position_series(E05) == [(T0, (2.0, 2.0, 2.0))]
        assert store.sv_velocity_series(G01) == []

    def test_sets_rebuilt_from_fields(self):
        store = TimeSeriesStore(epoch=[T0], vehicles=[G01])
        assert not store.add_epoch(T0)
        assert not store.add_vehicle(G01)
