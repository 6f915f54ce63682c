"""
Evaluation of a trained classifier on a test set.

Runs the classifier over every sample, normalizes the expected labels and
folds each (expected, actual) pair into precision/recall statistics,
optionally also into caller-owned micro and macro accumulators.
"""

from typing import Any, Optional, Sequence
import json
import logging

from .dataset import Sample
from .interfaces import Classifier, OutcomeRecorder
from .labels import normalize_classes, sort_classes
from .metrics import MacroSum, PrecisionRecall
from .outcome import payload, unwrap
from .reporting import Reporter, default_reporter

logger = logging.getLogger(__name__)


def test(
    classifier: Classifier,
    test_set: Sequence[Any],
    verbosity: int = 0,
    micro_average: Optional[OutcomeRecorder] = None,
    macro_sum: Optional[MacroSum] = None,
    reporter: Optional[Reporter] = None
) -> PrecisionRecall:
    """
    Test a trained classifier on a test set.

    Args:
        classifier: A trained classifier
        test_set: Samples with input and output
        verbosity: Level of detail in the diagnostics (0 = none)
        micro_average: Optional recorder that also receives every case
        macro_sum: Optional accumulator the finalized summary is merged into
        reporter: Destination of diagnostic lines (defaults to stdout)

    Returns:
        The finalized statistics of this run
    """
    reporter = default_reporter(reporter)
    current_stats = PrecisionRecall()

    for obj in test_set:
        sample = Sample.coerce(obj)
        expected_classes = normalize_classes(sample.output)
        actual_classes = unwrap(classifier.classify(sample.input))
        explanations = current_stats.add_cases(
            expected_classes, actual_classes, verbosity > 2
        )
        if verbosity > 1 and explanations:
            reporter.report(2, f"\t{sample.input}: \n" + "\n".join(explanations))
        if micro_average is not None:
            micro_average.add_cases(expected_classes, actual_classes)

    current_stats.calculate_stats()
    if macro_sum is not None:
        macro_sum.merge_from(current_stats.full_stats())

    if verbosity > 0 and current_stats.count > 0:
        if verbosity > 2:
            reporter.report(3, "FULL RESULTS:")
            reporter.report(3, json.dumps(current_stats.full_stats(), indent=2))
        reporter.report(1, "SUMMARY: " + current_stats.short_stats())

    logger.debug(f"Tested on {current_stats.count} samples")
    return current_stats


def test_lite(
    classifier: Classifier,
    dataset: Sequence[Any],
    explain: int = 0,
    reporter: Optional[Reporter] = None
) -> PrecisionRecall:
    """
    Test a classifier and report only its mistakes and a one-line summary.

    Args:
        classifier: A trained classifier
        dataset: Samples with input and output
        explain: Level of explanations for mistakes (0 for none)
        reporter: Destination of diagnostic lines (defaults to stdout)

    Returns:
        The finalized statistics
    """
    reporter = default_reporter(reporter)
    current_stats = PrecisionRecall()

    for obj in dataset:
        sample = Sample.coerce(obj)
        expected_classes = normalize_classes(sample.output)
        result = classifier.classify(sample.input, explain)
        actual_classes = sort_classes(unwrap(result))
        if expected_classes != actual_classes:
            got = (
                json.dumps(payload(result), indent="\t", default=str)
                if explain else json.dumps(actual_classes, default=str)
            )
            reporter.report(
                1,
                f"\t{json.dumps(sample.input, default=str)}: expected "
                f"{json.dumps(expected_classes)} but got {got}"
            )
        current_stats.add_cases(expected_classes, actual_classes)

    reporter.report(1, "SUMMARY: " + current_stats.calculate_stats().short_stats())
    return current_stats


# Keep pytest from collecting these when they are imported into test modules.
test.__test__ = False
test_lite.__test__ = False
