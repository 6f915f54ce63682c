"""Tests for evaluation package initialization."""


def test_imports():
    """Test that all main classes can be imported."""
    from classbench.evaluation import (
        PrecisionRecall,
        MacroSum,
        EvaluationMetrics,
        ReportGenerator,
        ReportFormat,
        CollectingReporter,
        normalize_classes,
    )

    assert PrecisionRecall is not None
    assert MacroSum is not None
    assert EvaluationMetrics is not None
    assert ReportGenerator is not None
    assert ReportFormat is not None
    assert CollectingReporter is not None
    assert normalize_classes is not None
