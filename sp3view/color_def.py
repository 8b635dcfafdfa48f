from sp3core.sp3_models import Constellation

# Marker colors per constellation, shared by every track figure
CONSTELLATION_COLORS = {
    Constellation.GPS: '#4CAF50',      # green
    Constellation.GLONASS: '#F44336',  # red
    Constellation.GALILEO: '#2196F3',  # blue
    Constellation.BEIDOU: '#9C27B0',   # purple
    Constellation.QZSS: '#FF9800',     # orange
    Constellation.IRNSS: '#795548',    # brown
    Constellation.SBAS: '#9E9E9E',     # grey
    Constellation.LEO: '#00BCD4',      # cyan
}

AXIS_COLORS = {
    'x': '#1976D2',
    'y': '#E53935',
    'z': '#388E3C',
}


def get_constellation_color(constellation):
    """
    Hex color of a constellation's sample markers (black for MIXED or unknown).
    """
    return CONSTELLATION_COLORS.get(constellation, '#000000')


def get_axis_color(axis):
    """
    Color of the interpolated curve of one ECEF axis ('x', 'y' or 'z').
    """
    return AXIS_COLORS.get(axis, '#9E9E9E')
