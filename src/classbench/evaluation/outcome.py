"""
Classification outcomes.

A classifier may answer with a bare list of classes or with a richer
structure that also carries explanations. Both shapes are modelled here
and ``unwrap`` turns any of them into the plain class list.
"""

from dataclasses import dataclass, field
from typing import Any, List, Mapping


@dataclass
class Plain:
    """Classification result without explanations."""
    classes: List[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'classes': list(self.classes)}


@dataclass
class Explained:
    """
    Classification result with an explanation payload.

    Attributes:
        classes: Predicted classes
        explanations: Classifier-specific description of the decision
    """
    classes: List[Any] = field(default_factory=list)
    explanations: Any = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'classes': list(self.classes), 'explanations': self.explanations}


def unwrap(result: Any) -> List[Any]:
    """
    Extract the predicted classes from a classification result.

    Accepts ``Plain`` and ``Explained`` outcomes, mappings with a
    ``classes`` key, objects with a ``classes`` attribute and bare
    sequences. A scalar result is treated as a single class.

    Returns:
        A new list of the predicted classes, in the order given
    """
    if isinstance(result, (Plain, Explained)):
        classes = result.classes
    elif isinstance(result, Mapping) and 'classes' in result:
        classes = result['classes']
    elif isinstance(result, (list, tuple, set, frozenset)):
        classes = result
    elif hasattr(result, 'classes'):
        classes = result.classes
    else:
        classes = [result]

    if isinstance(classes, (list, tuple, set, frozenset)):
        return list(classes)
    return [classes]


def payload(result: Any) -> Any:
    """Return a JSON-friendly view of a classification result for diagnostics."""
    if isinstance(result, (Plain, Explained)):
        return result.to_dict()
    if isinstance(result, (set, frozenset)):
        return sorted(result, key=str)
    return result
