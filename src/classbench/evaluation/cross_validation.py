"""
K-fold cross-validation built on train_and_test.

Every fold trains a fresh classifier, and its test outcomes are pooled
into one micro-average recorder while its finalized summary is added to
a macro sum.
"""

from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
import logging

import numpy as np

from ..utils.benchmark import timed
from .dataset import Dataset
from .metrics import MacroSum, PrecisionRecall
from .reporting import Reporter, default_reporter
from .train_and_test import ClassifierFactory, train_and_test

logger = logging.getLogger(__name__)


def partitions(dataset: Sequence[Any], num_folds: int) -> Iterator[Tuple[Dataset, Dataset]]:
    """
    Split a dataset into train/test pairs for k-fold cross-validation.

    Fold ``i`` tests on the ``i``-th contiguous slice of size
    ``len(dataset) // num_folds`` and trains on everything else, so any
    leftover samples at the end are always part of the train set.

    Args:
        dataset: Samples to split
        num_folds: Number of folds (at least 2, at most len(dataset))

    Yields:
        (train_set, test_set) tuples
    """
    if num_folds < 2:
        raise ValueError(f"num_folds must be at least 2, got {num_folds}")
    if num_folds > len(dataset):
        raise ValueError(f"num_folds ({num_folds}) exceeds dataset size ({len(dataset)})")

    all_classes = getattr(dataset, 'all_classes', None)
    samples = list(dataset)
    fold_size = len(samples) // num_folds

    for fold in range(num_folds):
        start = fold * fold_size
        end = start + fold_size
        test_set = Dataset(samples[start:end], all_classes=all_classes)
        train_set = Dataset(samples[:start] + samples[end:], all_classes=all_classes)
        yield train_set, test_set


@dataclass
class CrossValidationResult:
    """
    Results of a cross-validation run.

    Attributes:
        micro_average: Recorder pooling every test case of every fold (finalized)
        macro_sum: Sum of the per-fold summaries
        fold_stats: Finalized statistics of each fold, in fold order
    """
    micro_average: PrecisionRecall
    macro_sum: MacroSum
    fold_stats: List[PrecisionRecall] = field(default_factory=list)

    @property
    def num_folds(self) -> int:
        return len(self.fold_stats)

    @property
    def macro_average(self) -> Dict[str, float]:
        """Per-statistic mean over the folds."""
        return self.macro_sum.averages()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'num_folds': self.num_folds,
            'micro_average': self.micro_average.full_stats(),
            'macro_average': self.macro_average,
            'macro_std': self.macro_sum.std(),
            'folds': [stats.full_stats() for stats in self.fold_stats],
        }


@timed(name="cross_validate")
def cross_validate(
    create_classifier: ClassifierFactory,
    dataset: Sequence[Any],
    num_folds: int,
    verbosity: int = 0,
    shuffle: bool = False,
    seed: Optional[int] = None,
    reporter: Optional[Reporter] = None
) -> CrossValidationResult:
    """
    Run k-fold cross-validation of a classifier.

    Args:
        create_classifier: Zero-argument function returning a new, untrained classifier
        dataset: Samples with input and output
        num_folds: Number of folds
        verbosity: Level of detail in the diagnostics (0 = none)
        shuffle: Shuffle the samples before splitting
        seed: Seed for the shuffle
        reporter: Destination of diagnostic lines (defaults to stdout)

    Returns:
        CrossValidationResult with micro and macro averages
    """
    reporter = default_reporter(reporter)
    all_classes = getattr(dataset, 'all_classes', None)
    samples = list(dataset)
    if shuffle:
        order = np.random.default_rng(seed).permutation(len(samples))
        samples = [samples[i] for i in order]
    samples = Dataset(samples, all_classes=all_classes)

    micro_average = PrecisionRecall()
    macro_sum = MacroSum()
    fold_stats = []

    for fold, (train_set, test_set) in enumerate(partitions(samples, num_folds)):
        logger.info(f"Fold {fold + 1}/{num_folds}: {len(train_set)} train, {len(test_set)} test")
        stats = train_and_test(
            create_classifier, train_set, test_set,
            verbosity, micro_average, macro_sum, reporter
        )
        fold_stats.append(stats)

    micro_average.calculate_stats()
    result = CrossValidationResult(
        micro_average=micro_average,
        macro_sum=macro_sum,
        fold_stats=fold_stats
    )

    if verbosity > 0:
        reporter.report(1, f"\nMICRO AVERAGE ({num_folds} folds): " + micro_average.short_stats())
        averages = result.macro_average
        reporter.report(
            1,
            f"MACRO AVERAGE ({num_folds} folds): "
            f"Accuracy={averages['accuracy']:.2%} "
            f"Precision={averages['precision']:.2%} "
            f"Recall={averages['recall']:.2%} "
            f"F1={averages['f1']:.2%}"
        )

    return result
