"""
Settings shared by the reader, writer, interpolator, plots and CLI.
"""

from typing import Dict, Any, List
from dataclasses import dataclass, field


@dataclass
class GlobalConfig:
    """
    Defaults used wherever a caller does not pass an explicit value.
    """
    # Lagrange interpolation order used when none is requested (order + 1 samples)
    interpolation_order: int = 9

    # Minimum number of '+' vehicle list lines written (SP3-c requires 5)
    min_vehicle_lines: int = 5

    # File suffixes handled as gzip streams by the line source
    gzip_suffixes: List[str] = field(default_factory=lambda: ['.gz', '.gzip'])

    # Text encoding of SP3 files
    encoding: str = 'ascii'

    # Logging level name used by the command line front end
    log_level: str = 'INFO'

    # Plotting related settings
    plot_settings: dict = field(default_factory=lambda: {
        'step_seconds': 60.0,
        'figsize': (8, 6),
        'dpi': 100,
    })

    def update_general_settings(self, settings: Dict[str, Any]) -> None:
        """
        Set known attributes from `settings`, unknown keys are ignored.
        """
        for key, value in settings.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def get_plot_settings(self) -> Dict[str, Any]:
        """Return the plot settings dictionary."""
        return self.plot_settings

    def update_plot_settings(self, settings: Dict[str, Any]) -> None:
        self.plot_settings.update(settings)


# Process wide instance
global_config = GlobalConfig()


def get_global_config() -> GlobalConfig:
    """Return the process wide configuration."""
    return global_config


def update_general_settings(settings: Dict[str, Any]) -> None:
    """Update e.g. interpolation_order or log_level."""
    global_config.update_general_settings(settings)


def get_plot_settings() -> Dict[str, Any]:
    """Convenience function to get plot settings."""
    return global_config.get_plot_settings()


def update_plot_settings(settings: Dict[str, Any]) -> None:
    """Convenience function to update plot settings."""
    global_config.update_plot_settings(settings)
