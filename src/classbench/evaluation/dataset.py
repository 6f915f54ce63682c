"""
Dataset model and dataset file I/O.

Samples pair an opaque classifier input with its ground-truth labels.
Datasets are plain lists of samples that may also carry the universe of
class labels, used only for diagnostics.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, TextIO, Union
import json
import logging
import sys

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sample:
    """
    A single labeled example.

    Attributes:
        input: Classifier input, passed through untouched
        output: Ground-truth label or collection of labels
    """
    input: Any
    output: Any

    @classmethod
    def coerce(cls, obj: Union['Sample', Mapping[str, Any]]) -> 'Sample':
        """
        Build a Sample from a Sample or a mapping with input/output keys.

        Raises:
            ValueError: If a mapping lacks one of the keys
        """
        if isinstance(obj, Sample):
            return obj
        if isinstance(obj, Mapping):
            if 'input' not in obj or 'output' not in obj:
                raise ValueError(f"Sample must have 'input' and 'output' keys, got {sorted(obj)}")
            return cls(input=obj['input'], output=obj['output'])
        if hasattr(obj, 'input') and hasattr(obj, 'output'):
            return cls(input=obj.input, output=obj.output)
        raise ValueError(f"Cannot interpret {obj!r} as a sample")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'input': self.input, 'output': self.output}


class Dataset(list):
    """
    Ordered list of samples.

    Attributes:
        all_classes: Optional list of every class label in the data,
            reported in training diagnostics only
    """

    def __init__(self, samples: Iterable[Any] = (), all_classes: Optional[List[Any]] = None):
        super().__init__(Sample.coerce(s) for s in samples)
        self.all_classes = list(all_classes) if all_classes is not None else None

    def __getitem__(self, index):
        item = super().__getitem__(index)
        if isinstance(index, slice):
            return Dataset(item, all_classes=self.all_classes)
        return item


def class_count(dataset: Iterable[Any]) -> Optional[int]:
    """Number of classes declared on a dataset, or None if it declares none."""
    all_classes = getattr(dataset, 'all_classes', None)
    return len(all_classes) if all_classes is not None else None


def load_dataset(path: Union[str, Path]) -> Dataset:
    """
    Load a dataset from a JSON or JSON-lines file.

    Supported layouts:
        - a JSON array of {"input": ..., "output": ...} objects
        - a JSON object {"samples": [...], "all_classes": [...]}
        - one JSON sample object per line (a single line included)

    Args:
        path: Path to the dataset file

    Returns:
        Dataset with the loaded samples

    Raises:
        ValueError: If the file matches none of the layouts
    """
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = [json.loads(line) for line in text.splitlines() if line.strip()]

    if isinstance(data, Mapping) and 'samples' in data:
        dataset = Dataset(data['samples'], all_classes=data.get('all_classes'))
    elif isinstance(data, Mapping) and 'input' in data and 'output' in data:
        # A JSON-lines file with a single line
        dataset = Dataset([data])
    elif isinstance(data, list):
        dataset = Dataset(data)
    else:
        raise ValueError(f"Unsupported dataset layout in {path}")

    logger.info(f"Loaded {len(dataset)} samples from {path}")
    return dataset


def save_dataset(dataset: Iterable[Any], path: Union[str, Path]) -> None:
    """
    Save a dataset as a JSON object with samples and all_classes.

    Args:
        dataset: Samples to save
        path: Path to output JSON file
    """
    samples = [Sample.coerce(s).to_dict() for s in dataset]
    data = {'samples': samples}
    all_classes = getattr(dataset, 'all_classes', None)
    if all_classes is not None:
        data['all_classes'] = all_classes

    output_file = Path(path)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    logger.info(f"Saved {len(samples)} samples to {path}")


def format_output(output: Any) -> str:
    """Render a sample output as a bracketed, comma-joined list."""
    if isinstance(output, (list, tuple)):
        parts = [o if isinstance(o, str) else json.dumps(o) for o in output]
    else:
        parts = [output if isinstance(output, str) else json.dumps(output)]
    return "[" + ",".join(parts) + "]"


def write_dataset(dataset: Iterable[Any], separator: str, stream: Optional[TextIO] = None) -> None:
    """
    Write the dataset one sample per line.

    Each line is the JSON-encoded input, the separator, then the outputs
    in brackets.

    Args:
        dataset: Samples to write
        separator: Text placed between input and output
        stream: Output stream (defaults to sys.stdout)
    """
    stream = stream or sys.stdout
    for obj in dataset:
        sample = Sample.coerce(obj)
        stream.write(json.dumps(sample.input) + separator + format_output(sample.output) + "\n")
