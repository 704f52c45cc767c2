"""Choice set for list prompts.

This module provides the entries a list prompt selects from:
- Choice: A selectable (or disabled) entry with name, value and short label
- Separator: A non-selectable divider line
- ChoiceSet: Ordered entries with lookups by selectable ordinal
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Union

from .errors import ChoiceOutOfRange

DEFAULT_SEPARATOR_LINE = "─" * 14


@dataclass(frozen=True)
class Separator:
    """A divider row. Never selectable, never counted in ``real_length``."""

    line: str = DEFAULT_SEPARATOR_LINE

    def __str__(self) -> str:
        return self.line


@dataclass(frozen=True)
class Choice:
    """One entry of a list prompt.

    Attributes:
        name: Text shown in the list
        value: Payload returned when the choice is submitted
        short: Compact text shown once the prompt is answered
        disabled: False, True, or a reason string shown next to the name
    """

    name: str
    value: Any
    short: str
    disabled: bool | str = False

    @classmethod
    def from_value(cls, value: Any) -> Choice:
        """Build a choice whose name, value and short label are the same."""
        return cls(name=str(value), value=value, short=str(value))

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, Any], answers: Mapping[str, Any] | None = None
    ) -> Choice:
        """Build a choice from a ``{"name", "value", "short", "disabled"}`` mapping.

        Missing fields fall back on each other: name defaults to value, value
        to name, and short to name. A callable ``disabled`` is evaluated once
        with ``answers``.
        """
        name = data.get("name") or data.get("value")
        value = data["value"] if "value" in data else data.get("name")
        short = data.get("short") or name or value
        disabled = data.get("disabled", False)
        if callable(disabled):
            disabled = disabled(dict(answers or {}))
        if not isinstance(disabled, str):
            disabled = bool(disabled)
        return cls(name=str(name), value=value, short=str(short), disabled=disabled)


Entry = Union[Choice, Separator]
ChoiceLike = Union[Choice, Separator, Mapping[str, Any], str]


def normalize_entry(raw: ChoiceLike, answers: Mapping[str, Any] | None = None) -> Entry:
    """Turn a raw choice definition into a Choice or Separator."""
    if isinstance(raw, (Choice, Separator)):
        return raw
    if isinstance(raw, Mapping):
        if raw.get("type") == "separator":
            return Separator(raw.get("line") or DEFAULT_SEPARATOR_LINE)
        return Choice.from_mapping(raw, answers)
    return Choice.from_value(raw)


class ChoiceSet:
    """Ordered list prompt entries.

    Selectable ordinals skip separators and disabled choices, so
    ``get_choice(0)`` is the first entry the cursor can land on while
    ``index_of()`` reports positions in the full sequence.
    """

    def __init__(
        self,
        choices: Iterable[ChoiceLike],
        answers: Mapping[str, Any] | None = None,
    ) -> None:
        self.choices: list[Entry] = [normalize_entry(c, answers) for c in choices]
        # Raw position of each selectable ordinal
        self._positions: list[int] = [
            i
            for i, c in enumerate(self.choices)
            if isinstance(c, Choice) and not c.disabled
        ]
        self.real_choices: list[Choice] = [self.choices[i] for i in self._positions]  # type: ignore[misc]

    def __len__(self) -> int:
        return len(self.choices)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.choices)

    def __repr__(self) -> str:
        return f"ChoiceSet({self.choices!r})"

    @property
    def real_length(self) -> int:
        """Number of entries the cursor can select."""
        return len(self.real_choices)

    def get_choice(self, ordinal: int) -> Choice:
        """Return the selectable choice at ``ordinal``.

        Raises:
            ChoiceOutOfRange: If ordinal is outside [0, real_length)
        """
        if not 0 <= ordinal < self.real_length:
            raise ChoiceOutOfRange(ordinal, self.real_length)
        return self.real_choices[ordinal]

    def raw_index(self, ordinal: int) -> int:
        """Return the raw position of the selectable choice at ``ordinal``.

        Unlike ``index_of()``, this is exact when the same Choice instance
        appears more than once.
        """
        if not 0 <= ordinal < self.real_length:
            raise ChoiceOutOfRange(ordinal, self.real_length)
        return self._positions[ordinal]

    def index_of(self, choice: Entry) -> int:
        """Return the raw position of ``choice`` in the full sequence."""
        for i, entry in enumerate(self.choices):
            if entry is choice:
                return i
        raise ValueError(f"{choice!r} is not in this choice set")

    def pluck_values(self) -> list[Any]:
        """Return the value of every selectable choice, in order."""
        return [c.value for c in self.real_choices]
