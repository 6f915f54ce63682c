"""
Exception classes for classbench.
"""


class ClassBenchError(Exception):
    """Base exception for classbench errors."""
    pass


class InvalidLabelFormat(ClassBenchError, ValueError):
    """
    Raised when a label cannot be converted to its canonical string form.

    A label is valid if it is a string or a value that serializes to JSON.
    The offending value is kept on the ``label`` attribute.
    """

    def __init__(self, label, reason: str = ""):
        self.label = label
        message = f"Cannot canonicalize label {label!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigurationError(ClassBenchError):
    """Raised when configuration or a classifier factory path is invalid."""
    pass
