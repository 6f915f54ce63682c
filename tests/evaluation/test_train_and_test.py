"""
Tests for train-and-test orchestration.
"""

import importlib
import re

import pytest

# The package re-exports the function ``train_and_test``, which shadows the
# submodule attribute; fetch the module itself.
orchestration = importlib.import_module("classbench.evaluation.train_and_test")
from classbench.evaluation.dataset import Dataset, Sample
from classbench.evaluation.metrics import MacroSum, PrecisionRecall
from classbench.utils import TimingCollector, get_global_collector


@pytest.fixture
def train_set():
    return Dataset([Sample("a", "X"), Sample("b", "Y"), Sample("c", ["X", "Y"])])


@pytest.fixture
def test_set():
    return Dataset([Sample("a", "X"), Sample("d", "Y")])


class TestTrain:
    """Test the timed training step."""

    def test_returns_elapsed_ms(self, fixed_classifier, train_set, reporter):
        classifier = fixed_classifier()
        elapsed = orchestration.train(classifier, train_set, reporter=reporter)
        assert elapsed >= 0
        assert classifier.trained_on == list(train_set)

    def test_records_timing(self, fixed_classifier, train_set, reporter):
        collector = TimingCollector()
        orchestration.train(fixed_classifier(), train_set, reporter=reporter, collector=collector)

        stats = collector.get_statistics("train:FixedClassifier")
        assert stats['count'] == 1
        assert collector.records["train:FixedClassifier"][0].metadata == {'samples': 3}

    def test_training_error_propagates(self, failing_classifier, train_set, reporter):
        with pytest.raises(RuntimeError, match="training failed"):
            orchestration.train(failing_classifier('train'), train_set, reporter=reporter)


class TestTrainAndTest:
    """Test train_and_test."""

    def test_no_op_training(self, fixed_classifier, train_set, test_set, reporter):
        """A classifier that learns nothing still yields valid statistics."""
        stats = orchestration.train_and_test(
            lambda: fixed_classifier([]), train_set, test_set, reporter=reporter
        )

        full = stats.full_stats()
        assert full['count'] == 2
        assert full['accuracy'] == 0.0
        assert full['recall'] == 0.0

    def test_learning_classifier(self, lookup_classifier, train_set, reporter):
        stats = orchestration.train_and_test(lookup_classifier, train_set, train_set, reporter=reporter)
        assert stats.full_stats()['accuracy'] == 1.0

    def test_factory_called_once(self, fixed_classifier, train_set, test_set, reporter):
        created = []

        def factory():
            classifier = fixed_classifier(["X"])
            created.append(classifier)
            return classifier

        orchestration.train_and_test(factory, train_set, test_set, reporter=reporter)

        assert len(created) == 1
        assert created[0].trained_on == list(train_set)
        assert [call[0] for call in created[0].calls] == ["a", "d"]

    def test_training_diagnostics(self, fixed_classifier, train_set, test_set, reporter):
        orchestration.train_and_test(
            lambda: fixed_classifier(["X"]), train_set, test_set, verbosity=1, reporter=reporter
        )

        lines = reporter.lines
        assert lines[0] == "\nstart training on 3 samples, "
        assert re.fullmatch(r"end training on 3 samples, \d+ \[ms\]", lines[1])
        assert lines[2].startswith("SUMMARY: Accuracy=1/2=50%")

    def test_training_diagnostics_with_classes(self, fixed_classifier, test_set, reporter):
        train_set = Dataset([Sample("a", "X"), Sample("b", "Y")], all_classes=["X", "Y", "Z"])

        orchestration.train_and_test(
            lambda: fixed_classifier(["X"]), train_set, test_set, verbosity=1, reporter=reporter
        )

        assert reporter.lines[0] == "\nstart training on 2 samples, 3 classes"
        assert re.fullmatch(r"end training on 2 samples, 3 classes, \d+ \[ms\]", reporter.lines[1])

    def test_train_set_dumped_at_verbosity_three(self, fixed_classifier, train_set, test_set, reporter):
        orchestration.train_and_test(
            lambda: fixed_classifier(["X"]), train_set, test_set, verbosity=3, reporter=reporter
        )
        assert reporter.messages[1] == (3, repr(train_set))

    def test_silent_at_verbosity_zero(self, fixed_classifier, train_set, test_set, reporter):
        orchestration.train_and_test(lambda: fixed_classifier(["X"]), train_set, test_set, reporter=reporter)
        assert reporter.messages == []

    def test_accumulators_forwarded(self, fixed_classifier, train_set, test_set, reporter):
        micro, macro = PrecisionRecall(), MacroSum()

        for _ in range(2):
            orchestration.train_and_test(
                lambda: fixed_classifier(["X"]), train_set, test_set,
                micro_average=micro, macro_sum=macro, reporter=reporter
            )

        assert micro.count == 4
        assert macro.num_runs == 2
        assert macro.totals['exact_matches'] == 2

    def test_timing_in_global_collector(self, fixed_classifier, train_set, test_set, reporter):
        orchestration.train_and_test(lambda: fixed_classifier(), train_set, test_set, reporter=reporter)
        assert get_global_collector().get_statistics("train:FixedClassifier")['count'] == 1

    def test_training_error_aborts(self, failing_classifier, train_set, test_set, reporter):
        with pytest.raises(RuntimeError, match="training failed"):
            orchestration.train_and_test(lambda: failing_classifier('train'), train_set, test_set,
                                         reporter=reporter)


class TestTrainAndCompare:
    """Test train_and_compare."""

    def test_both_trained_and_compared(self, fixed_classifier, train_set, test_set, reporter):
        first, second = fixed_classifier(["X"]), fixed_classifier(["Y"])

        result = orchestration.train_and_compare(
            lambda: first, lambda: second, train_set, test_set, reporter=reporter
        )

        assert result is None
        assert first.trained_on == list(train_set)
        assert second.trained_on == list(train_set)
        assert reporter.lines == [
            '\t"a" : classes1=["X"] ; classes2=["Y"]',
            "\t\tClassifier1 is correct",
            '\t"d" : classes1=["X"] ; classes2=["Y"]',
            "\t\tClassifier2 is correct",
        ]

    def test_each_training_timed(self, fixed_classifier, lookup_classifier, train_set, test_set, reporter):
        orchestration.train_and_compare(
            lambda: fixed_classifier(["X"]), lookup_classifier, train_set, test_set, reporter=reporter
        )

        collector = get_global_collector()
        assert collector.get_statistics("train:FixedClassifier")['count'] == 1
        assert collector.get_statistics("train:LookupClassifier")['count'] == 1

    def test_training_diagnostics(self, fixed_classifier, train_set, test_set, reporter):
        orchestration.train_and_compare(
            lambda: fixed_classifier(["X"]), lambda: fixed_classifier(["X"]),
            train_set, test_set, verbosity=1, reporter=reporter
        )

        lines = reporter.lines
        assert lines[0] == "\nstart training on 3 samples, "
        assert lines[1].startswith("end training on 3 samples, ")
        assert lines[2] == "start training on 3 samples, "
        assert lines[3].startswith("end training on 3 samples, ")
        assert len(lines) == 4

    def test_verbosity_used_as_explain(self, fixed_classifier, train_set, test_set, reporter):
        first, second = fixed_classifier(["X"]), fixed_classifier(["Y"])

        orchestration.train_and_compare(
            lambda: first, lambda: second, train_set, test_set, verbosity=1, reporter=reporter
        )

        assert first.calls == [("a", 1), ("d", 1)]
        assert "\t\tClassifier1 is correct" in reporter.lines
