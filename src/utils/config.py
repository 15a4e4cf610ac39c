"""
Configuration management for the cmap contact-map viewer.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from analysis.distance_matrix import SENTINEL_DISTANCE

__version__ = "0.1.0"


@dataclass
class ContactConfig:
    """Contact definition and threshold stepping."""

    # Distance threshold in Angstroms (C-alpha to C-alpha)
    default_threshold: float = 8.0
    threshold_step: float = 0.5
    min_threshold: float = 0.0

    # Distance reported for pairs involving a residue without coordinates
    missing_distance: float = SENTINEL_DISTANCE

    # Atom used as the residue reference point
    reference_atom: str = "CA"


@dataclass
class NavigationConfig:
    """Pan step sizes, in raster cells."""

    pan_step_x: int = 10
    pan_step_y: int = 5


@dataclass
class DisplayConfig:
    """Terminal display settings."""

    use_colour: bool = True
    # Minimum width of the status strip pad; wider terminals get a wider pad
    status_width: int = 1024
    status_fill: str = "━"
    # Custom colours (curses 0-1000 scale), applied when the terminal can redefine colours
    custom_colours: Dict[int, Tuple[int, int, int]] = field(default_factory=lambda: {
        13: (250, 250, 250),   # medium grey
        10: (945, 769, 59),    # "sun flower"
        11: (204, 286, 369),   # "wet asphalt"
        12: (173, 243, 314),   # "midnight blue"
    })


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "cmap"
    version: str = __version__

    # None selects the first chain declared in the SEQRES records
    default_chain: Optional[str] = None

    contact: ContactConfig = field(default_factory=ContactConfig)
    navigation: NavigationConfig = field(default_factory=NavigationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    @property
    def tool_identity(self) -> str:
        return f"{self.app_name} v{self.version}"


def load_config() -> AppConfig:
    """Load application configuration."""
    return AppConfig()
