"""
Precision/recall statistics for multi-label classification.

Provides:
- PrecisionRecall: accumulates per-sample outcomes and derives accuracy,
  Hamming gain, precision, recall and F1
- MacroSum: additive fold of finalized summaries across repeated runs
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
from dataclasses import dataclass, fields
import logging
import math
import time

import numpy as np

from .interfaces import OutcomeRecorder
from .labels import stringify_class

TIMING_KEYS = ('time_millis', 'time_per_sample_millis')


@dataclass
class EvaluationMetrics:
    """
    Container for finalized statistics.

    Attributes:
        count: Number of samples recorded
        true_positives: Predicted classes that were expected
        false_positives: Predicted classes that were not expected
        false_negatives: Expected classes that were not predicted
        exact_matches: Samples whose predicted set equals the expected set
        accuracy: exact_matches / count
        hamming_loss: (false_negatives + false_positives) / expected labels
        hamming_gain: 1 - hamming_loss
        precision: Precision over all labels
        recall: Recall over all labels
        f1: Harmonic mean of precision and recall
        time_millis: Wall-clock time between creation and finalization
        time_per_sample_millis: time_millis / count
    """
    count: int = 0
    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0
    exact_matches: int = 0
    accuracy: float = 0.0
    hamming_loss: float = 0.0
    hamming_gain: float = 0.0
    precision: float = 0.0
    recall: float = 0.0
    f1: float = 0.0
    time_millis: float = 0.0
    time_per_sample_millis: float = 0.0

    def to_dict(self, include_timing: bool = True) -> Dict[str, float]:
        """Convert metrics to dictionary."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if include_timing or f.name not in TIMING_KEYS
        }


class PrecisionRecall(OutcomeRecorder):
    """
    Accumulate multi-label outcomes and compute precision/recall statistics.

    Expected and actual classes are compared as sets of canonical label
    strings, so ordering and repeated labels do not change the counts.
    """

    def __init__(self):
        """Initialize an empty accumulator."""
        self.count = 0
        self.true_positives = 0
        self.false_positives = 0
        self.false_negatives = 0
        self.exact_matches = 0
        self.metrics: Optional[EvaluationMetrics] = None
        self.logger = logging.getLogger(__name__)
        self._start_time = time.perf_counter()

    def add_cases(
        self,
        expected: Iterable[Any],
        actual: Iterable[Any],
        log_true_positives: bool = False
    ) -> List[str]:
        """
        Record the outcome of one sample.

        Args:
            expected: Expected classes
            actual: Classes returned by the classifier
            log_true_positives: Also explain correct classes

        Returns:
            Explanation lines for false positives and false negatives,
            plus true positives when log_true_positives is set
        """
        actual_classes = list(dict.fromkeys(stringify_class(c) for c in actual))
        expected_classes = list(dict.fromkeys(stringify_class(c) for c in expected))
        expected_set = set(expected_classes)
        actual_set = set(actual_classes)

        explanations = []
        all_true = True

        for actual_class in actual_classes:
            if actual_class in expected_set:
                if log_true_positives:
                    explanations.append(f"\t\t+++ TRUE POSITIVE: {actual_class}")
                self.true_positives += 1
            else:
                explanations.append(f"\t\t--- FALSE POSITIVE: {actual_class}")
                self.false_positives += 1
                all_true = False

        for expected_class in expected_classes:
            if expected_class not in actual_set:
                explanations.append(f"\t\t--- FALSE NEGATIVE: {expected_class}")
                self.false_negatives += 1
                all_true = False

        if all_true:
            if log_true_positives:
                explanations.append("\t\t*** ALL TRUE!")
            self.exact_matches += 1

        self.count += 1
        return explanations

    def calculate_stats(self) -> 'PrecisionRecall':
        """
        Compute derived statistics from the recorded counts.

        Returns:
            self, for chaining
        """
        tp, fp, fn = self.true_positives, self.false_positives, self.false_negatives
        metrics = EvaluationMetrics(
            count=self.count,
            true_positives=tp,
            false_positives=fp,
            false_negatives=fn,
            exact_matches=self.exact_matches,
        )

        metrics.accuracy = self._safe_divide(self.exact_matches, self.count)
        if tp + fn > 0:
            metrics.hamming_loss = (fn + fp) / (tp + fn)
            metrics.hamming_gain = 1.0 - metrics.hamming_loss
        metrics.precision = self._safe_divide(tp, tp + fp)
        metrics.recall = self._safe_divide(tp, tp + fn)
        metrics.f1 = self._calculate_f1(metrics.precision, metrics.recall)

        metrics.time_millis = (time.perf_counter() - self._start_time) * 1000.0
        metrics.time_per_sample_millis = self._safe_divide(metrics.time_millis, self.count)

        self.metrics = metrics
        if self.count == 0:
            self.logger.debug("Calculated statistics over zero samples")
        return self

    def short_stats(self) -> str:
        """One-line summary of the finalized statistics."""
        m = self._require_metrics()
        return (
            f"Accuracy={m.exact_matches}/{m.count}={_percent(m.accuracy)}% "
            f"HammingGain=1-{m.false_negatives + m.false_positives}/"
            f"{m.true_positives + m.false_negatives}={_percent(m.hamming_gain)}% "
            f"Precision={_percent(m.precision)}% "
            f"Recall={_percent(m.recall)}% "
            f"F1={_percent(m.f1)}% "
            f"timePerSample={m.time_per_sample_millis:.0f}[ms]"
        )

    def full_stats(self, include_timing: bool = True) -> Dict[str, float]:
        """All finalized statistics as a flat dictionary."""
        return self._require_metrics().to_dict(include_timing=include_timing)

    def _require_metrics(self) -> EvaluationMetrics:
        if self.metrics is None:
            raise RuntimeError("Statistics not calculated yet, call calculate_stats() first")
        return self.metrics

    @staticmethod
    def _safe_divide(numerator: float, denominator: float) -> float:
        """Safe division that returns 0 if denominator is 0."""
        return numerator / denominator if denominator > 0 else 0.0

    @staticmethod
    def _calculate_f1(precision: float, recall: float) -> float:
        """Calculate F1-score from precision and recall."""
        if precision + recall == 0:
            return 0.0
        return 2 * (precision * recall) / (precision + recall)


def _percent(ratio: float) -> int:
    """Ratio as a percentage rounded half up."""
    return math.floor(ratio * 100 + 0.5)


class MacroSum:
    """
    Sum of finalized summaries across repeated evaluation runs.

    Each merged summary is added key by key into ``totals``. Dividing the
    totals by the number of runs gives the macro-average.
    """

    def __init__(self):
        """Initialize an empty sum."""
        self.totals: Dict[str, float] = {}
        self.runs: List[Dict[str, float]] = []

    @property
    def num_runs(self) -> int:
        """Number of summaries merged so far."""
        return len(self.runs)

    def merge_from(self, summary: Union[Mapping[str, Any], PrecisionRecall]) -> None:
        """
        Add a finalized summary into the running totals.

        Args:
            summary: A full_stats() dictionary or a finalized PrecisionRecall
        """
        if isinstance(summary, PrecisionRecall):
            summary = summary.full_stats()

        run = {}
        for key, value in summary.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            self.totals[key] = self.totals.get(key, 0) + value
            run[key] = value
        self.runs.append(run)

    def averages(self) -> Dict[str, float]:
        """Per-key mean over all merged runs."""
        if not self.runs:
            return {}
        return {key: float(np.mean(self._values(key))) for key in self.totals}

    def std(self) -> Dict[str, float]:
        """Per-key standard deviation over all merged runs."""
        if not self.runs:
            return {}
        return {key: float(np.std(self._values(key))) for key in self.totals}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'num_runs': self.num_runs,
            'totals': dict(self.totals),
            'mean': self.averages(),
            'std': self.std(),
        }

    def _values(self, key: str) -> np.ndarray:
        return np.array([run.get(key, 0) for run in self.runs], dtype=float)
