"""
Label normalization.

Expected and actual labels are compared through their canonical string
forms: strings are kept as they are, anything else is serialized to JSON
with sorted keys so that equal values always give equal strings.
"""

import json
from typing import Any, Iterable, List

from ..exceptions import InvalidLabelFormat

# Containers treated as a collection of labels. Strings and mappings are
# single labels.
LABEL_COLLECTIONS = (list, tuple, set, frozenset)


def stringify_class(label: Any) -> str:
    """
    Return the canonical string form of a single label.

    Args:
        label: A string or any JSON-serializable value

    Returns:
        The label itself if it is a string, its JSON serialization otherwise

    Raises:
        InvalidLabelFormat: If the label cannot be serialized
    """
    if isinstance(label, str):
        return label
    try:
        return json.dumps(label, sort_keys=True, separators=(',', ':'), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise InvalidLabelFormat(label, str(e)) from e


def normalize_classes(labels: Any) -> List[str]:
    """
    Canonicalize a label or a collection of labels.

    A scalar is wrapped in a one-element list, every element is converted
    with ``stringify_class`` and the result is sorted. Duplicates are kept.

    Args:
        labels: A single label or a list/tuple/set of labels

    Returns:
        Sorted list of canonical label strings
    """
    if not isinstance(labels, LABEL_COLLECTIONS):
        labels = [labels]
    return sorted(stringify_class(label) for label in labels)


def sort_classes(classes: Iterable[Any]) -> List[Any]:
    """
    Sort predicted classes by their canonical string form.

    Unlike ``normalize_classes`` the elements themselves are returned
    unchanged, so a classifier answering ``[2, 1]`` gets ``[1, 2]`` back
    rather than ``['1', '2']``.
    """
    return sorted(classes, key=stringify_class)
