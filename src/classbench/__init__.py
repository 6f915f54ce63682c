"""
classbench: train, test and compare multi-label classifiers.
"""

from .evaluation import (
    normalize_classes,
    Sample,
    Dataset,
    PrecisionRecall,
    MacroSum,
    write_dataset,
    test,
    test_lite,
    compare,
    train_and_test,
    train_and_compare,
    cross_validate,
)
from .exceptions import ClassBenchError, InvalidLabelFormat, ConfigurationError

__version__ = "0.1.0"
__all__ = [
    'normalize_classes',
    'Sample',
    'Dataset',
    'PrecisionRecall',
    'MacroSum',
    'write_dataset',
    'test',
    'test_lite',
    'compare',
    'train_and_test',
    'train_and_compare',
    'cross_validate',
    'ClassBenchError',
    'InvalidLabelFormat',
    'ConfigurationError',
]
