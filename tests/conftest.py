"""
Shared pytest fixtures for sp3core tests.

Provides:
- sample_path: the bundled SP3-d file (288 epochs at 300 s, four GPS vehicles)
- sample_dataset: that file parsed
- orbit: analytic circular orbit used both by the sample file and synthetic datasets
- make_dataset: builder of synthetic datasets sampled on that orbit
- fresh config for every test
"""

import math
from datetime import datetime, timedelta
from pathlib import Path

import pytest

import sp3core.global_config as global_config_module
from sp3core.data_models import Dataset, Header
from sp3core.global_config import GlobalConfig
from sp3core.gnss_time import Epoch, TimeScale
from sp3core.sp3_models import Constellation, Vehicle
from sp3core.sp3_reader import from_file

DATA_DIR = Path(__file__).parent / "data"

ORBIT_RADIUS_KM = 26560.0
ORBIT_PERIOD_S = 43080.0
ORBIT_INCLINATION = math.radians(55.0)

# Phase of each vehicle of the sample file at 2019-10-27 00:00:00 GPST
SAMPLE_PHASES = {"G01": 0.0, "G02": 1.0, "G03": 2.0, "G05": 3.0}


def circular_position(seconds, phase):
    """ECEF-like position (km) on the reference circular orbit."""
    u = phase + 2.0 * math.pi / ORBIT_PERIOD_S * seconds
    return (
        ORBIT_RADIUS_KM * math.cos(u),
        ORBIT_RADIUS_KM * math.sin(u) * math.cos(ORBIT_INCLINATION),
        ORBIT_RADIUS_KM * math.sin(u) * math.sin(ORBIT_INCLINATION),
    )


def circular_velocity(seconds, phase):
    """Time derivative of `circular_position`, in dm/s."""
    rate = 2.0 * math.pi / ORBIT_PERIOD_S
    u = phase + rate * seconds
    km_s = (
        -ORBIT_RADIUS_KM * rate * math.sin(u),
        ORBIT_RADIUS_KM * rate * math.cos(u) * math.cos(ORBIT_INCLINATION),
        ORBIT_RADIUS_KM * rate * math.cos(u) * math.sin(ORBIT_INCLINATION),
    )
    return tuple(v * 1.0e4 for v in km_s)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Every test starts from default settings."""
    config = GlobalConfig()
    monkeypatch.setattr(global_config_module, "global_config", config)
    return config


@pytest.fixture
def sample_path():
    return DATA_DIR / "sp3d.txt"


@pytest.fixture
def sample_dataset(sample_path):
    return from_file(sample_path)


@pytest.fixture
def orbit():
    """(position, velocity) functions of (seconds, phase)."""
    return circular_position, circular_velocity


@pytest.fixture
def make_dataset():
    """
    Build a dataset sampled on the circular orbit.

    Args:
        start: first epoch (naive datetime, GPST)
        interval_s: sampling interval in seconds
        count: number of epochs
        vehicles: {"G01": phase, ...}
        velocity: also fill the velocity record
        agency / coord_system / time_scale: header fields
    """
    def _make(start=datetime(2019, 10, 27, 18, 0), interval_s=900.0, count=96,
              vehicles=None, velocity=False, agency="IGS", coord_system="IGS14",
              time_scale=TimeScale.GPST, clock=None):
        vehicles = vehicles or {"G01": 0.0}
        header = Header(
            agency=agency,
            coord_system=coord_system,
            time_scale=time_scale,
            constellation=Constellation.GPS,
            epoch_interval=timedelta(seconds=interval_s),
        )
        dataset = Dataset(header=header)
        for index in range(count):
            seconds = index * interval_s
            epoch = Epoch(start + timedelta(seconds=seconds), time_scale)
            dataset.store.add_epoch(epoch)
            for name, phase in vehicles.items():
                sv = Vehicle.from_str(name)
                dataset.store.insert_position(epoch, sv, circular_position(seconds, phase))
                if velocity:
                    dataset.store.insert_velocity(epoch, sv, circular_velocity(seconds, phase))
                if clock is not None:
                    dataset.store.insert_clock(epoch, sv, clock)
        return dataset

    return _make


@pytest.fixture
def sample_epoch():
    """Epoch of the index-th record block of the sample file."""
    def _epoch(index):
        return Epoch(datetime(2019, 10, 27) + timedelta(seconds=300 * index), TimeScale.GPST)

    return _epoch
