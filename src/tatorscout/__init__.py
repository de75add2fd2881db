"""tatorscout: robot match trace encoding and movement analysis."""

from .grid import DEFAULT_GRID, FixedPointGrid
from .result import Result
from .trace import TimePoint, Trace
from .version import get_package_version

__version__ = get_package_version()
__author__ = "tatorscout contributors"
__description__ = "Robot match trace encoding and movement analysis"

__all__ = ["DEFAULT_GRID", "FixedPointGrid", "Result", "TimePoint", "Trace"]
