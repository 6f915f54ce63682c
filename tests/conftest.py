"""
Shared fixtures: stub classifiers and a collecting reporter.
"""

import pytest

from classbench.evaluation.outcome import Explained
from classbench.evaluation.reporting import CollectingReporter
from classbench.utils import clear_timings


class FixedClassifier:
    """Answers the same classes for every input; training does nothing."""

    def __init__(self, classes=(), explanations="fixed answer"):
        self.classes = list(classes)
        self.explanations = explanations
        self.trained_on = None
        self.calls = []

    def train_batch(self, dataset):
        self.trained_on = list(dataset)

    def classify(self, sample_input, explain=0):
        self.calls.append((sample_input, explain))
        if explain:
            return Explained(list(self.classes), self.explanations)
        return list(self.classes)


class LookupClassifier:
    """Memorizes the training samples and answers by exact input lookup."""

    def __init__(self, answers=None):
        self.answers = dict(answers or {})

    def train_batch(self, dataset):
        for sample in dataset:
            output = sample.output
            self.answers[sample.input] = list(output) if isinstance(output, (list, tuple)) else [output]

    def classify(self, sample_input, explain=0):
        classes = list(self.answers.get(sample_input, []))
        if explain:
            return Explained(classes, {'known': sample_input in self.answers})
        return classes


class FailingClassifier:
    """Raises on training or classification."""

    def __init__(self, fail_on='classify'):
        self.fail_on = fail_on

    def train_batch(self, dataset):
        if self.fail_on == 'train':
            raise RuntimeError("training failed")

    def classify(self, sample_input, explain=0):
        raise RuntimeError("classification failed")


@pytest.fixture
def fixed_classifier():
    """The FixedClassifier class."""
    return FixedClassifier


@pytest.fixture
def lookup_classifier():
    """The LookupClassifier class."""
    return LookupClassifier


@pytest.fixture
def failing_classifier():
    """The FailingClassifier class."""
    return FailingClassifier


@pytest.fixture
def reporter():
    """A reporter that keeps every diagnostic line."""
    return CollectingReporter()


@pytest.fixture(autouse=True)
def reset_timings():
    """Start every test with an empty global timing collector."""
    clear_timings()
    yield
    clear_timings()
