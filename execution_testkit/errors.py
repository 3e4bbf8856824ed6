"""Errors raised by the execution testkit."""


class InvalidInputError(ValueError):
    """Raised when an event log is built from missing or null events."""
