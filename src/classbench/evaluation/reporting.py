"""
Diagnostic line reporters.

Evaluation functions never print directly; they hand each diagnostic
line to a Reporter together with the verbosity level it belongs to
(1 = summaries, 2 = per-sample explanations, 3 = full dumps).
"""

from abc import ABC, abstractmethod
from typing import List, Optional, TextIO, Tuple
import logging
import sys


class Reporter(ABC):
    """Interface for receiving diagnostic lines."""

    @abstractmethod
    def report(self, level: int, message: str) -> None:
        """
        Emit a diagnostic message.

        Args:
            level: Verbosity level the message belongs to
            message: Text, possibly spanning several lines
        """
        pass


class StreamReporter(Reporter):
    """Write every message as a line to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Args:
            stream: Output stream. Defaults to whatever sys.stdout is at
                report time, so redirected output is honoured.
        """
        self.stream = stream

    def report(self, level: int, message: str) -> None:
        stream = self.stream or sys.stdout
        stream.write(message + "\n")


class LoggingReporter(Reporter):
    """Route messages to a logger: level 1 at INFO, deeper levels at DEBUG."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def report(self, level: int, message: str) -> None:
        self.logger.log(logging.INFO if level <= 1 else logging.DEBUG, message)


class CollectingReporter(Reporter):
    """Keep messages in memory."""

    def __init__(self):
        self.messages: List[Tuple[int, str]] = []

    def report(self, level: int, message: str) -> None:
        self.messages.append((level, message))

    @property
    def lines(self) -> List[str]:
        """Messages without their levels."""
        return [message for _, message in self.messages]

    def clear(self) -> None:
        """Forget all collected messages."""
        self.messages.clear()


def default_reporter(reporter: Optional[Reporter] = None) -> Reporter:
    """Return the given reporter, or a StreamReporter on standard output."""
    return reporter if reporter is not None else StreamReporter()
