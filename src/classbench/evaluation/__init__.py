"""
Evaluation harness for multi-label / multi-class classifiers.

This package provides:
- Label normalization for stable comparison of expected and actual classes
- Precision/recall statistics with micro and macro averaging
- Single-classifier evaluation and head-to-head comparison
- Train-and-test orchestration and k-fold cross-validation
- Report generation (CSV, JSON)
"""

from .labels import normalize_classes, stringify_class, sort_classes
from .outcome import Plain, Explained, unwrap
from .dataset import Sample, Dataset, load_dataset, save_dataset, write_dataset
from .interfaces import Classifier, OutcomeRecorder
from .metrics import PrecisionRecall, EvaluationMetrics, MacroSum
from .reporting import Reporter, StreamReporter, LoggingReporter, CollectingReporter
from .evaluator import test, test_lite
from .comparator import compare, judge_divergence, Verdict
from .train_and_test import train, train_and_test, train_and_compare
from .cross_validation import partitions, cross_validate, CrossValidationResult
from .reporter import ReportGenerator, ReportFormat

__all__ = [
    'normalize_classes',
    'stringify_class',
    'sort_classes',
    'Plain',
    'Explained',
    'unwrap',
    'Sample',
    'Dataset',
    'load_dataset',
    'save_dataset',
    'write_dataset',
    'Classifier',
    'OutcomeRecorder',
    'PrecisionRecall',
    'EvaluationMetrics',
    'MacroSum',
    'Reporter',
    'StreamReporter',
    'LoggingReporter',
    'CollectingReporter',
    'test',
    'test_lite',
    'compare',
    'judge_divergence',
    'Verdict',
    'train',
    'train_and_test',
    'train_and_compare',
    'partitions',
    'cross_validate',
    'CrossValidationResult',
    'ReportGenerator',
    'ReportFormat',
]
