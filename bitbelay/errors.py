"""Exception hierarchy for bitbelay."""

from __future__ import annotations


class BitbelayError(Exception):
    """Base class for all bitbelay errors."""


class ConfigurationError(BitbelayError, ValueError):
    """A test or suite was constructed with an invalid parameter."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")


class EmptyDataError(ConfigurationError):
    """An avalanche experiment was handed zero bytes of input data."""

    def __init__(self) -> None:
        super().__init__("data", "input data must contain at least one byte")


class BuilderError(BitbelayError):
    """Base class for builder contract violations."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(BuilderError):
    """A required field was never supplied to a builder."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"missing required field: {field}")


class MultipleValuesError(BuilderError):
    """A single-valued field was supplied to a builder more than once."""

    def __init__(self, field: str) -> None:
        super().__init__(field, f"multiple values provided for field: {field}")


class InvariantError(BitbelayError, RuntimeError):
    """Internal misuse that should never happen in a correct program."""
