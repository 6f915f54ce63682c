"""
Command-line interface for classbench.

Provides commands for training and testing a classifier, comparing two
classifiers, cross-validation and dumping datasets.
"""

import argparse
import sys
import logging
from typing import Any, Dict, List, Optional

from .config import HarnessConfig, load_config, load_factory
from .evaluation import (
    MacroSum,
    ReportFormat,
    ReportGenerator,
    cross_validate,
    load_dataset,
    test_lite,
    train,
    train_and_compare,
    train_and_test,
    write_dataset,
)
from .exceptions import ClassBenchError, ConfigurationError
from .utils import get_global_collector


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _require(value: Optional[str], option: str) -> str:
    if not value:
        raise ConfigurationError(f"Missing required option {option} (or its config entry)")
    return value


def _write_report(config: HarnessConfig, results, macro_sum: Optional[MacroSum] = None) -> None:
    if not config.output.results_path:
        return
    reporter = ReportGenerator(results, macro_sum)
    reporter.generate_report(
        output_path=config.output.results_path,
        format=ReportFormat(config.output.format)
    )


def cmd_evaluate(config: HarnessConfig) -> None:
    """
    Train a classifier on the train set and test it on the test set.

    Args:
        config: Run configuration
    """
    logger = logging.getLogger(__name__)
    factory = load_factory(_require(config.classifiers.classifier, '--classifier'))
    train_set = load_dataset(_require(config.data.train, '--train'))
    test_set = load_dataset(_require(config.data.test, '--test'))

    logger.info("Starting train and test...")
    stats = train_and_test(factory, train_set, test_set, config.evaluation.verbosity)
    _write_report(config, {'test': stats})


def cmd_compare(config: HarnessConfig) -> None:
    """
    Train two classifiers and report where they disagree.

    Args:
        config: Run configuration
    """
    logger = logging.getLogger(__name__)
    factory1 = load_factory(_require(config.classifiers.classifier, '--classifier'))
    factory2 = load_factory(_require(config.classifiers.other, '--other'))
    train_set = load_dataset(_require(config.data.train, '--train'))
    test_set = load_dataset(_require(config.data.test, '--test'))

    logger.info("Starting train and compare...")
    train_and_compare(factory1, factory2, train_set, test_set, config.evaluation.verbosity)


def cmd_test_lite(config: HarnessConfig) -> None:
    """
    Train a classifier, then list every test sample it gets wrong.

    Args:
        config: Run configuration
    """
    logger = logging.getLogger(__name__)
    factory = load_factory(_require(config.classifiers.classifier, '--classifier'))
    train_set = load_dataset(_require(config.data.train, '--train'))
    test_set = load_dataset(_require(config.data.test, '--test'))

    classifier = factory()
    train(classifier, train_set, config.evaluation.verbosity)
    logger.info("Starting lightweight test...")
    stats = test_lite(classifier, test_set, config.evaluation.explain)
    _write_report(config, {'test': stats})


def cmd_cross_validate(config: HarnessConfig) -> None:
    """
    Cross-validate a classifier on one dataset.

    Args:
        config: Run configuration
    """
    logger = logging.getLogger(__name__)
    factory = load_factory(_require(config.classifiers.classifier, '--classifier'))
    dataset = load_dataset(_require(config.data.dataset, '--dataset'))

    logger.info(f"Starting {config.evaluation.num_folds}-fold cross-validation...")
    result = cross_validate(
        factory, dataset, config.evaluation.num_folds,
        verbosity=config.evaluation.verbosity,
        shuffle=config.evaluation.shuffle,
        seed=config.evaluation.seed
    )

    results = {f'fold_{i + 1}': stats for i, stats in enumerate(result.fold_stats)}
    results['micro_average'] = result.micro_average
    _write_report(config, results, result.macro_sum)


def cmd_write_dataset(config: HarnessConfig) -> None:
    """
    Print a dataset one sample per line.

    Args:
        config: Run configuration
    """
    dataset = load_dataset(_require(config.data.dataset, '--dataset'))
    write_dataset(dataset, config.evaluation.separator)


def build_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect config overrides from command-line arguments."""
    return {
        'evaluation': {
            'verbosity': args.verbosity,
            'explain': getattr(args, 'explain', None),
            'separator': getattr(args, 'separator', None),
            'num_folds': getattr(args, 'folds', None),
            'shuffle': True if getattr(args, 'shuffle', False) else None,
            'seed': getattr(args, 'seed', None),
        },
        'data': {
            'train': getattr(args, 'train', None),
            'test': getattr(args, 'test', None),
            'dataset': getattr(args, 'dataset', None),
        },
        'classifiers': {
            'classifier': getattr(args, 'classifier', None),
            'other': getattr(args, 'other', None),
        },
        'output': {
            'results_path': getattr(args, 'output', None),
            'format': getattr(args, 'format', None),
        },
    }


def create_arg_parser() -> argparse.ArgumentParser:
    """Create argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description='classbench - classifier evaluation harness',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Train and test a classifier
  classbench evaluate \\
      --classifier mypackage.models:NaiveBayes \\
      --train train.json --test test.json --verbosity 2

  # Compare two classifiers
  classbench compare \\
      --classifier mypackage.models:NaiveBayes \\
      --other mypackage.models:Winnow \\
      --train train.json --test test.json

  # 10-fold cross-validation with a CSV report
  classbench cross-validate \\
      --classifier mypackage.models:NaiveBayes \\
      --dataset all.json --folds 10 --output cv.csv --format csv
        """
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--config',
        type=str,
        help='Path to YAML configuration file'
    )
    parser.add_argument(
        '--verbosity',
        type=int,
        help='Level of detail in the diagnostics (0 = none, default: 1)'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    evaluate_parser = subparsers.add_parser(
        'evaluate',
        help='Train a classifier and test it'
    )
    evaluate_parser.add_argument('--classifier', type=str, help='Classifier factory (module:attribute)')
    evaluate_parser.add_argument('--train', type=str, help='Path to training set')
    evaluate_parser.add_argument('--test', type=str, help='Path to test set')
    _add_output_arguments(evaluate_parser)

    compare_parser = subparsers.add_parser(
        'compare',
        help='Train two classifiers and compare them'
    )
    compare_parser.add_argument('--classifier', type=str, help='First classifier factory (module:attribute)')
    compare_parser.add_argument('--other', type=str, help='Second classifier factory (module:attribute)')
    compare_parser.add_argument('--train', type=str, help='Path to training set')
    compare_parser.add_argument('--test', type=str, help='Path to test set')

    lite_parser = subparsers.add_parser(
        'test-lite',
        help='Train a classifier and list its mistakes'
    )
    lite_parser.add_argument('--classifier', type=str, help='Classifier factory (module:attribute)')
    lite_parser.add_argument('--train', type=str, help='Path to training set')
    lite_parser.add_argument('--test', type=str, help='Path to test set')
    lite_parser.add_argument('--explain', type=int, help='Explanation level passed to the classifier (default: 0)')
    _add_output_arguments(lite_parser)

    cv_parser = subparsers.add_parser(
        'cross-validate',
        help='K-fold cross-validation of a classifier'
    )
    cv_parser.add_argument('--classifier', type=str, help='Classifier factory (module:attribute)')
    cv_parser.add_argument('--dataset', type=str, help='Path to dataset')
    cv_parser.add_argument('--folds', type=int, help='Number of folds (default: 5)')
    cv_parser.add_argument('--shuffle', action='store_true', help='Shuffle samples before splitting')
    cv_parser.add_argument('--seed', type=int, help='Random seed for shuffling')
    _add_output_arguments(cv_parser)

    write_parser = subparsers.add_parser(
        'write-dataset',
        help='Print a dataset one sample per line'
    )
    write_parser.add_argument('--dataset', type=str, help='Path to dataset')
    write_parser.add_argument('--separator', type=str, help='Separator between input and output')

    return parser


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--output', type=str, help='Path to save the results report')
    parser.add_argument(
        '--format',
        type=str,
        choices=['csv', 'json'],
        help='Report format (default: json)'
    )


COMMANDS = {
    'evaluate': cmd_evaluate,
    'compare': cmd_compare,
    'test-lite': cmd_test_lite,
    'cross-validate': cmd_cross_validate,
    'write-dataset': cmd_write_dataset,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config, build_overrides(args))
        COMMANDS[args.command](config)
    except (ClassBenchError, ValueError, FileNotFoundError) as e:
        logger.error(str(e))
        return 2

    if args.verbose:
        logger.info("\n" + get_global_collector().report())

    return 0


if __name__ == '__main__':
    sys.exit(main())
