"""Submission values and the validation hook run on submit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Union

from .errors import ValidationFailure

DEFAULT_ERROR_MESSAGE = "Please enter a valid value"

# Returns True to accept, or False / an error message to reject
Validator = Callable[[Any], Union[bool, str]]
Filter = Callable[[Any], Any]


@dataclass(frozen=True)
class Submission:
    """A submitted value, either immediate or produced on demand.

    Use ``Submission.immediate(v)`` or ``Submission.deferred(fn)``;
    ``resolve()`` returns the value, calling the producer if there is one.
    """

    value: Any = None
    producer: Callable[[], Any] | None = None

    @classmethod
    def immediate(cls, value: Any) -> Submission:
        return cls(value=value)

    @classmethod
    def deferred(cls, producer: Callable[[], Any]) -> Submission:
        return cls(producer=producer)

    @property
    def is_deferred(self) -> bool:
        return self.producer is not None

    def resolve(self) -> Any:
        if self.producer is not None:
            return self.producer()
        return self.value


@dataclass
class SubmitValidator:
    """Applies the user's filter and validator to a submission.

    Attributes:
        validate: Called with the filtered value
        filter: Transforms the value before validation and completion
    """

    validate: Validator | None = None
    filter: Filter | None = None

    def check(self, submission: Submission) -> Submission:
        """Resolve, filter and validate ``submission``.

        Returns:
            An immediate Submission holding the filtered value

        Raises:
            ValidationFailure: If the validator rejects the value
        """
        value = submission.resolve()
        if self.filter is not None:
            value = self.filter(value)

        if self.validate is not None:
            outcome = self.validate(value)
            if outcome is not True:
                message = outcome if isinstance(outcome, str) and outcome else None
                raise ValidationFailure(message or DEFAULT_ERROR_MESSAGE)

        return Submission.immediate(value)
