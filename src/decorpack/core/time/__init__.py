"""Clock abstraction for testing."""

from decorpack.core.time.abc import Time
from decorpack.core.time.real import RealTime

__all__ = ["RealTime", "Time"]
