"""
Error kinds raised by the scoring pipeline.

All of them subclass ValueError and keep the offending values as attributes
so a caller can report them. None are retried or recovered internally.
"""


class InvalidParameter(ValueError):
    """A parameter is outside its allowed range (e.g. k for PCA)."""

    def __init__(self, name, value, reason=""):
        self.name = name
        self.value = value
        msg = f"Invalid value for '{name}': {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class DimensionMismatch(ValueError):
    """Input width (or length) does not match what was fitted or paired."""

    def __init__(self, expected, actual, what="features"):
        self.expected = expected
        self.actual = actual
        self.what = what
        super().__init__(f"Expected {expected} {what}, got {actual}")


class DegenerateRange(ValueError):
    """A reduction produced a range that cannot be normalized."""

    def __init__(self, message, low=None, high=None):
        self.low = low
        self.high = high
        if low is not None or high is not None:
            message = f"{message} (min={low!r}, max={high!r})"
        super().__init__(message)


class InsufficientClassDiversity(ValueError):
    """Evaluation was asked for on a label set holding a single class."""

    def __init__(self, n_positive, n_negative):
        self.n_positive = n_positive
        self.n_negative = n_negative
        super().__init__(
            "ROC evaluation needs both classes; "
            f"got {n_positive} positive and {n_negative} negative labels"
        )
