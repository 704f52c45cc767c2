"""Options for a list question."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Iterable, Mapping

from .choices import ChoiceLike, ChoiceSet
from .errors import ConfigurationError
from .paginator import DEFAULT_PAGE_SIZE
from .validation import Filter, Validator

# Called with (current value, key) when a mapped key is pressed
KeyActionHandler = Callable[[Any, str], None]

_ALIASES = {"pageSize": "page_size", "keyAction": "key_action"}


@dataclass
class ListQuestion:
    """Everything a ListPrompt needs to know about one question.

    Attributes:
        message: The question text
        choices: Raw entries or a ready ChoiceSet; required
        default: Selectable ordinal, or the value of the initial choice
        page_size: Rows shown before the list is paginated
        cancelable: Enables Escape/Left to cancel and Right to submit
        key_action: Extra keys mapped to side-effect handlers
        validate: Validator run on submit
        filter: Transform applied to the value before validation
        answers: Earlier answers, passed to callable ``disabled`` fields
    """

    message: str = ""
    choices: ChoiceSet | Iterable[ChoiceLike] | None = None
    default: int | str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    cancelable: bool = False
    key_action: dict[str, KeyActionHandler] = field(default_factory=dict)
    validate: Validator | None = None
    filter: Filter | None = None
    answers: Mapping[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ListQuestion:
        """Build a question from a mapping, accepting camelCase aliases.

        Raises:
            ConfigurationError: On unknown keys or a non-positive page size
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                raise ConfigurationError(f"Unknown list question option: {key!r}")
            kwargs[name] = value

        question = cls(**kwargs)
        if not isinstance(question.page_size, int) or question.page_size < 1:
            raise ConfigurationError(
                f"page_size must be a positive integer, got {question.page_size!r}"
            )
        return question

    def build_choices(self) -> ChoiceSet:
        """Return the choices as a ChoiceSet.

        Raises:
            ConfigurationError: If no choices were given
        """
        if self.choices is None:
            raise ConfigurationError.missing("choices")
        if isinstance(self.choices, ChoiceSet):
            return self.choices
        return ChoiceSet(self.choices, self.answers)
