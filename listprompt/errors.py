"""Exceptions raised by list prompts."""

from __future__ import annotations


class ListPromptError(Exception):
    """Base class for list prompt errors."""


class ConfigurationError(ListPromptError, ValueError):
    """The prompt was built with missing or invalid options."""

    @classmethod
    def missing(cls, name: str) -> "ConfigurationError":
        return cls(f"You must provide a `{name}` parameter")


class ChoiceOutOfRange(ListPromptError, IndexError):
    """A selectable ordinal outside ``[0, real_length)`` was requested."""

    def __init__(self, ordinal: int, real_length: int) -> None:
        super().__init__(
            f"Choice ordinal {ordinal} out of range (0..{real_length - 1})"
        )
        self.ordinal = ordinal
        self.real_length = real_length


class ValidationFailure(ListPromptError):
    """A submitted value was rejected by the user-supplied validator."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
