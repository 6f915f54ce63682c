"""
Head-to-head comparison of two classifiers on the same dataset.
"""

from enum import Enum
from typing import Any, List, Optional, Sequence
import json
import logging

from .dataset import Sample
from .interfaces import Classifier
from .labels import normalize_classes, sort_classes
from .outcome import payload, unwrap
from .reporting import Reporter, default_reporter

logger = logging.getLogger(__name__)


class Verdict(Enum):
    """Which side is right when two classifiers disagree."""
    CLASSIFIER1_CORRECT = "Classifier1 is correct"
    CLASSIFIER2_CORRECT = "Classifier2 is correct"
    BOTH_INCORRECT = "both are incorrect"


def judge_divergence(
    expected: List[str],
    actual1: List[Any],
    actual2: List[Any]
) -> Verdict:
    """
    Decide which classifier matches the expected classes.

    Classifier 1 is checked first, so if both outputs equal the expected
    classes (which only happens when they do not really diverge) the
    verdict goes to classifier 1.
    """
    if actual1 == expected:
        return Verdict.CLASSIFIER1_CORRECT
    if actual2 == expected:
        return Verdict.CLASSIFIER2_CORRECT
    return Verdict.BOTH_INCORRECT


def compare(
    classifier1: Classifier,
    classifier2: Classifier,
    dataset: Sequence[Any],
    explain: int = 0,
    reporter: Optional[Reporter] = None
) -> None:
    """
    Report the samples on which two classifiers disagree.

    For every divergence, one line shows both outputs and a second line
    tells which classifier, if either, matches the expected classes.
    Samples on which the classifiers agree produce no output.

    Args:
        classifier1, classifier2: Trained classifiers
        dataset: Samples with input and output
        explain: Level of explanations (0 for none), passed to both classifiers
        reporter: Destination of diagnostic lines (defaults to stdout)
    """
    reporter = default_reporter(reporter)
    divergences = 0
    num_samples = 0

    for obj in dataset:
        sample = Sample.coerce(obj)
        num_samples += 1
        expected_classes = normalize_classes(sample.output)
        result1 = classifier1.classify(sample.input, explain)
        result2 = classifier2.classify(sample.input, explain)
        actual_classes1 = sort_classes(unwrap(result1))
        actual_classes2 = sort_classes(unwrap(result2))

        if actual_classes1 == actual_classes2:
            continue

        divergences += 1
        reporter.report(
            1,
            f"\t{json.dumps(sample.input, default=str)}"
            f" : classes1={_render(result1, actual_classes1, explain)}"
            f" ; classes2={_render(result2, actual_classes2, explain)}"
        )
        verdict = judge_divergence(expected_classes, actual_classes1, actual_classes2)
        reporter.report(1, f"\t\t{verdict.value}")

    logger.debug(f"Compared on {num_samples} samples, {divergences} divergences")


def _render(result: Any, actual_classes: List[Any], explain: int) -> str:
    if explain:
        return json.dumps(payload(result), indent="\t", default=str)
    return json.dumps(actual_classes, default=str)
