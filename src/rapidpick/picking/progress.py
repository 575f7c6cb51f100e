"""
Progress reporting for run-level picking.

The run driver only knows the three-call ProgressReporter protocol.
Reporters never influence picking results.
"""

import logging
from typing import Callable, Optional, Protocol


logger = logging.getLogger(__name__)


class ProgressReporter(Protocol):
    """Receives begin/advance/end notifications from a long operation."""

    def begin(self, total: int, label: str = "") -> None: ...

    def advance(self) -> None: ...

    def end(self) -> None: ...


class NullProgress:
    """Reporter that ignores every notification."""

    def begin(self, total: int, label: str = "") -> None:
        pass

    def advance(self) -> None:
        pass

    def end(self) -> None:
        pass


class CallbackProgress:
    """
    Forward progress to a ``callback(completed, total)`` function.

    Example:
        >>> seen = []
        >>> progress = CallbackProgress(lambda done, total: seen.append((done, total)))
        >>> progress.begin(2)
        >>> progress.advance()
        >>> seen
        [(1, 2)]
    """

    def __init__(self, callback: Callable[[int, int], None]):
        self.callback = callback
        self.total = 0
        self.completed = 0

    def begin(self, total: int, label: str = "") -> None:
        self.total = total
        self.completed = 0

    def advance(self) -> None:
        self.completed += 1
        self.callback(self.completed, self.total)

    def end(self) -> None:
        pass


class LoggingProgress:
    """
    Log progress through the ``logging`` module.

    A line is emitted at begin, every ``step_percent`` percent of the
    total, and at end.
    """

    def __init__(
        self,
        log: Optional[logging.Logger] = None,
        level: int = logging.INFO,
        step_percent: int = 10,
    ):
        if not 0 < step_percent <= 100:
            raise ValueError(f"step_percent must be in (0, 100], got {step_percent}")
        self.log = log or logger
        self.level = level
        self.step_percent = step_percent
        self.label = ""
        self.total = 0
        self.completed = 0
        self._next_report = 0

    def begin(self, total: int, label: str = "") -> None:
        self.label = label or "progress"
        self.total = total
        self.completed = 0
        self._next_report = self.step_percent
        self.log.log(self.level, f"{self.label}: started ({total} items)")

    def advance(self) -> None:
        self.completed += 1
        if self.total <= 0:
            return
        percent = 100 * self.completed // self.total
        if percent >= self._next_report:
            self.log.log(
                self.level,
                f"{self.label}: {self.completed}/{self.total} ({percent}%)"
            )
            while self._next_report <= percent:
                self._next_report += self.step_percent

    def end(self) -> None:
        self.log.log(self.level, f"{self.label}: finished ({self.completed}/{self.total})")
