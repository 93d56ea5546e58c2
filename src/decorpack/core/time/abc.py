"""Time operations abstraction for testing.

Generated files must not depend on the wall clock except where a date is
part of the output (the AssemblyInfo copyright year). Reading the clock
through this ABC keeps those outputs reproducible in tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract time operations for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Current local date and time."""
        ...

    def current_year(self) -> int:
        return self.now().year
