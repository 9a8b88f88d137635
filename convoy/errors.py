"""Exception types raised by the convoy engine."""

from typing import Iterable, Optional


class ConvoyError(Exception):
    """Base class for every error the engine raises on purpose."""


class ValidationError(ConvoyError, ValueError):
    """One or more vehicle specification fields are missing or invalid.

    All violations are collected in ``errors``; validation never stops at the
    first failure.
    """

    def __init__(self, errors: Iterable[str], subject: Optional[str] = None):
        self.errors = list(errors)
        self.subject = subject
        message = "; ".join(self.errors) or "invalid vehicle"
        if subject:
            message = f"{subject}: {message}"
        super().__init__(message)


class CapacityExceeded(ConvoyError):
    """A cargo operation would push the load above the hold's capacity."""

    def __init__(self, requested: float, available: float):
        self.requested = requested
        self.available = available
        super().__init__(
            f"Not enough cargo space. Available: {available:g}, Required: {requested:g}"
        )


class NotFound(ConvoyError, LookupError):
    """A vehicle, cargo item or convoy id is unknown."""

    def __init__(self, kind: str, key: str):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} not found: {key}")


class InvalidInput(ConvoyError, ValueError):
    """An argument is outside the range an operation can work with."""
