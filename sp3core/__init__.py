"""
sp3core - SP3 precise orbit files: reader, writer, interpolation and merging.
"""

from sp3core.data_models import Dataset, Header
from sp3core.gnss_time import Epoch, TimeScale
from sp3core.sp3_models import (
    Constellation,
    DataType,
    DataUsed,
    DataUsedUnitary,
    OrbitType,
    Vehicle,
    Version,
)

__all__ = [
    "Dataset",
    "Header",
    "Epoch",
    "TimeScale",
    "Constellation",
    "DataType",
    "DataUsed",
    "DataUsedUnitary",
    "OrbitType",
    "Vehicle",
    "Version",
]
