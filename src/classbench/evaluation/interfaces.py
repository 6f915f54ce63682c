"""
Collaborator interfaces for the evaluation harness.

The harness only calls the methods listed here, so any object that
provides them can be used without subclassing.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence


class Classifier(ABC):
    """Interface for classifiers under evaluation."""

    @abstractmethod
    def train_batch(self, dataset: Sequence[Any]) -> None:
        """
        Train on a whole dataset at once. Blocks until training is done.

        Args:
            dataset: Samples with ``input`` and ``output`` attributes
        """
        pass

    @abstractmethod
    def classify(self, sample_input: Any, explain: int = 0) -> Any:
        """
        Classify a single input.

        Args:
            sample_input: The sample input
            explain: Level of explanation requested (0 for none)

        Returns:
            A list of classes, or a ``Plain``/``Explained`` outcome
        """
        pass


class OutcomeRecorder(ABC):
    """Interface for accumulators of (expected, actual) label-set pairs."""

    @abstractmethod
    def add_cases(self, expected: List[str], actual: List[Any],
                  log_true_positives: bool = False) -> List[str]:
        """
        Record one sample outcome.

        Returns:
            Human-readable explanation lines (possibly empty)
        """
        pass

    @abstractmethod
    def calculate_stats(self) -> 'OutcomeRecorder':
        """Finalize derived statistics and return self."""
        pass

    @abstractmethod
    def short_stats(self) -> str:
        """One-line summary of the finalized statistics."""
        pass

    @abstractmethod
    def full_stats(self) -> Dict[str, float]:
        """All finalized statistics as a flat dictionary."""
        pass
