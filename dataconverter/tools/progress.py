"""
Progress reporting shared by the document tools.
"""

from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class ProcessingProgress:
    """Coarse progress of a document operation, as a percentage."""
    current: int
    total: int = 100
    status: str = ""

    @property
    def percent(self) -> float:
        return 100.0 * self.current / self.total if self.total else 0.0


ProgressCallback = Callable[[ProcessingProgress], None]


def report(on_progress: Optional[ProgressCallback], current: int, status: str) -> None:
    if on_progress is not None:
        on_progress(ProcessingProgress(current=current, total=100, status=status))
