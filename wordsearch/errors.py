class InvalidArgumentError(ValueError):
    """Bad input: missing value, non-square board, bad minimum length, unusable dictionary."""


class InvalidStateError(RuntimeError):
    """A query was issued before a dictionary was successfully loaded."""
