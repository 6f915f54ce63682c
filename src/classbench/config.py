"""Configuration for classbench runs.

Handles loading YAML config and merging it with command-line overrides.
Command-line values have higher priority than config file values.
"""

import importlib
import yaml
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from dataclasses import dataclass, field, asdict

from .exceptions import ConfigurationError


@dataclass
class EvaluationConfig:
    """Evaluation configuration."""
    verbosity: int = 1
    explain: int = 0
    separator: str = "  /  "
    num_folds: int = 5
    shuffle: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.verbosity < 0:
            raise ValueError(f"verbosity must be non-negative, got {self.verbosity}")
        if self.explain < 0:
            raise ValueError(f"explain must be non-negative, got {self.explain}")
        if self.num_folds < 2:
            raise ValueError(f"num_folds must be at least 2, got {self.num_folds}")


@dataclass
class DataConfig:
    """Dataset paths."""
    train: Optional[str] = None
    test: Optional[str] = None
    dataset: Optional[str] = None


@dataclass
class ClassifierConfig:
    """Classifier factories as 'module:attribute' import paths."""
    classifier: Optional[str] = None
    other: Optional[str] = None


@dataclass
class OutputConfig:
    """Result report configuration."""
    results_path: Optional[str] = None
    format: str = "json"

    def __post_init__(self):
        if self.format not in ('json', 'csv'):
            raise ValueError(f"format must be 'json' or 'csv', got {self.format!r}")


@dataclass
class HarnessConfig:
    """Complete run configuration."""
    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    data: DataConfig = field(default_factory=DataConfig)
    classifiers: ClassifierConfig = field(default_factory=ClassifierConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_yaml(cls, config_path: str) -> 'HarnessConfig':
        """Create configuration from a YAML file."""
        return dict_to_config(load_yaml_config(config_path))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def load_yaml_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_file, 'r') as f:
        config_dict = yaml.safe_load(f)

    if config_dict is not None and not isinstance(config_dict, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {config_path}")
    return config_dict or {}


def merge_configs(base_config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override config into base config."""
    merged = base_config.copy()

    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_configs(merged[key], value)
        elif value is not None:  # Only override if value is not None
            merged[key] = value

    return merged


def dict_to_config(config_dict: Dict[str, Any]) -> HarnessConfig:
    """
    Convert dictionary to HarnessConfig dataclass.

    Raises:
        ConfigurationError: On unknown sections or keys
    """
    sections = {
        'evaluation': EvaluationConfig,
        'data': DataConfig,
        'classifiers': ClassifierConfig,
        'output': OutputConfig,
    }
    unknown = set(config_dict) - set(sections)
    if unknown:
        raise ConfigurationError(f"Unknown config sections: {sorted(unknown)}")

    kwargs = {}
    for name, section_cls in sections.items():
        try:
            kwargs[name] = section_cls(**(config_dict.get(name) or {}))
        except TypeError as e:
            raise ConfigurationError(f"Invalid '{name}' section: {e}") from e
    return HarnessConfig(**kwargs)


def load_config(config_path: Optional[str] = None,
                overrides: Optional[Dict[str, Any]] = None) -> HarnessConfig:
    """
    Build the run configuration.

    Priority: overrides > YAML config > defaults
    """
    base = load_yaml_config(config_path) if config_path else {}
    return dict_to_config(merge_configs(base, overrides or {}))


def load_factory(path: str) -> Callable[[], Any]:
    """
    Resolve a 'package.module:attribute' path to a classifier factory.

    The attribute may be a classifier class or any zero-argument callable
    returning a new classifier.

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported
    """
    module_name, sep, attr = path.partition(':')
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Factory path must look like 'module:attribute', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e

    factory = module
    for part in attr.split('.'):
        try:
            factory = getattr(factory, part)
        except AttributeError as e:
            raise ConfigurationError(f"'{module_name}' has no attribute '{attr}'") from e

    if not callable(factory):
        raise ConfigurationError(f"Factory '{path}' is not callable")
    return factory
