"""Tests for the ListPrompt state machine in listprompt/prompt.py.

Covers:
- Initial cursor from numeric and string defaults
- Up/Down wraparound, number keys, disabled entries
- Submit, validation failure, cancel and the single completion
- Subscription disposal on every termination path
"""

from __future__ import annotations

from typing import Any

import pytest
from rich.text import Text

from listprompt.base import PromptStatus
from listprompt.choices import Choice, ChoiceSet, Separator
from listprompt.errors import ConfigurationError
from listprompt.events import InputEvent, KeyEventSource
from listprompt.prompt import ListPrompt
from listprompt.question import ListQuestion
from listprompt.render import POINTER

UP = InputEvent(key="Up", char=None)
DOWN = InputEvent(key="Down", char=None)
LEFT = InputEvent(key="Left", char=None)
RIGHT = InputEvent(key="Right", char=None)
ESCAPE = InputEvent(key="Escape", char=None)
ENTER = InputEvent(key="Enter", char=None)


def key(char: str) -> InputEvent:
    return InputEvent(key=char, char=char)


class _FakeScreen:
    """Records frames instead of writing to a terminal."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.cursor_visible = True

    def render(self, content: str, bottom: str = "") -> None:
        self.calls.append(("render", (content, bottom)))

    def done(self) -> None:
        self.calls.append(("done", None))

    def hide_cursor(self) -> None:
        self.cursor_visible = False

    def show_cursor(self) -> None:
        self.cursor_visible = True

    @property
    def frames(self) -> list[str]:
        return [Text.from_markup(c[1][0]).plain for c in self.calls if c[0] == "render"]

    @property
    def bottoms(self) -> list[str]:
        return [Text.from_markup(c[1][1]).plain for c in self.calls if c[0] == "render"]


class _Harness:
    """A running prompt wired to a fake screen and an event source."""

    def __init__(self, **options: Any) -> None:
        options.setdefault("message", "Pick")
        self.screen = _FakeScreen()
        self.source = KeyEventSource()
        self.results: list[Any] = []
        self.prompt = ListPrompt(ListQuestion(**options), screen=self.screen)  # type: ignore[arg-type]
        self.prompt.run(self.source, self.results.append)

    def press(self, *events: InputEvent) -> None:
        for event in events:
            self.source.dispatch(event)

    @property
    def selected(self) -> int:
        return self.prompt.selected


class TestConstruction:
    """Tests for configuration errors and the initial cursor."""

    def test_missing_choices_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="choices"):
            ListPrompt(ListQuestion(message="Pick"))

    def test_no_selectable_choice_raises(self) -> None:
        question = ListQuestion(
            message="Pick", choices=[Separator(), {"name": "x", "disabled": True}]
        )
        with pytest.raises(ConfigurationError):
            ListPrompt(question)

    def test_numeric_default(self) -> None:
        assert _Harness(choices=["A", "B", "C"], default=1).selected == 1

    @pytest.mark.parametrize("default", [-1, 3, 99])
    def test_numeric_default_out_of_range_falls_back_to_zero(self, default: int) -> None:
        assert _Harness(choices=["A", "B", "C"], default=default).selected == 0

    def test_bool_default_is_not_a_number(self) -> None:
        assert _Harness(choices=["A", "B"], default=True).selected == 0

    def test_string_default_matches_value(self) -> None:
        h = _Harness(choices=[Separator(), "A", "B"], default="B")
        assert h.selected == 1
        lines = h.screen.frames[0].split("\n")
        assert lines[1] == "  " + "─" * 14
        assert lines[3] == f"{POINTER} B "

    def test_integral_float_default_is_a_number(self) -> None:
        assert _Harness(choices=["A", "B", "C"], default=2.0).selected == 2

    def test_fractional_float_default_falls_back_to_zero(self) -> None:
        assert _Harness(choices=["A", "B", "C"], default=1.5).selected == 0

    def test_unmatched_string_default_falls_back_to_zero(self) -> None:
        assert _Harness(choices=["A", "B"], default="Z").selected == 0

    def test_accepts_prebuilt_choice_set(self) -> None:
        h = _Harness(choices=ChoiceSet(["A", "B"]), default="B")
        assert h.selected == 1


class TestNavigation:
    """Tests for cursor movement."""

    def test_down_then_wrap_then_submit(self) -> None:
        h = _Harness(choices=["A", "B", "C"], default=1)
        h.press(DOWN)
        assert h.selected == 2
        h.press(DOWN)
        assert h.selected == 0
        h.press(ENTER)
        assert h.results == ["A"]

    def test_up_from_first_wraps_to_last(self) -> None:
        h = _Harness(choices=["A", "B", "C"])
        h.press(UP)
        assert h.selected == 2

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_down_full_cycle_returns_to_start(self, count: int) -> None:
        h = _Harness(choices=[f"c{i}" for i in range(count)], default=count - 1)
        h.press(*[DOWN] * count)
        assert h.selected == count - 1

    def test_vim_keys(self) -> None:
        h = _Harness(choices=["A", "B", "C"])
        h.press(key("j"), key("j"), key("k"))
        assert h.selected == 1

    def test_number_key_jumps(self) -> None:
        h = _Harness(choices=["A", "B", "C"])
        h.press(key("3"))
        assert h.selected == 2
        h.press(key("1"))
        assert h.selected == 0

    def test_number_key_past_end_is_ignored(self) -> None:
        h = _Harness(choices=["A", "B", "C"], default=1)
        h.press(key("4"))
        assert h.selected == 1

    def test_every_event_rerenders(self) -> None:
        h = _Harness(choices=["A", "B", "C"])
        h.press(DOWN, UP, key("9"))
        assert len(h.screen.frames) == 4

    def test_disabled_choices_are_skipped(self) -> None:
        h = _Harness(choices=["A", {"name": "B", "disabled": "Nope"}, "C"])
        h.press(DOWN)
        lines = h.screen.frames[-1].split("\n")
        assert lines[2] == "  - B (Nope)"
        assert lines[3] == f"{POINTER} C "
        h.press(ENTER)
        assert h.results == ["C"]

    def test_number_keys_address_selectable_ordinals(self) -> None:
        h = _Harness(choices=[Separator(), "A", {"name": "B", "disabled": True}, "C"])
        h.press(key("2"), ENTER)
        assert h.results == ["C"]


class TestRendering:
    """Tests for the frames the prompt produces."""

    def test_first_frame_has_hint(self) -> None:
        h = _Harness(choices=["A", "B"])
        assert h.screen.frames[0].startswith("? Pick (Use arrow keys: ↑ ↓)\n")

    def test_hint_only_on_first_frame(self) -> None:
        h = _Harness(choices=["A", "B"])
        h.press(DOWN)
        assert h.screen.frames[1].startswith("? Pick \n")

    def test_cancelable_hint_lists_left_and_right(self) -> None:
        h = _Harness(choices=["A"], cancelable=True)
        assert "(Use arrow keys: ↑ ↓ ← →)" in h.screen.frames[0]

    def test_answered_frame_shows_short_label(self) -> None:
        h = _Harness(choices=[{"name": "Long apple", "value": "a", "short": "Apple"}])
        h.press(ENTER)
        assert h.screen.frames[-1] == "? Pick Apple"

    def test_long_list_is_paginated(self) -> None:
        h = _Harness(choices=[f"c{i}" for i in range(20)], page_size=5)
        lines = h.screen.frames[0].split("\n")
        assert len(lines) == 1 + 5 + 1
        assert lines[-1] == "(Move up and down to reveal more choices)"

    def test_window_follows_repeated_choice_instance(self) -> None:
        same = Choice.from_value("dup")
        h = _Harness(
            choices=[same] + [f"c{i}" for i in range(10)] + [same], page_size=5
        )
        h.press(UP)
        assert h.selected == 11
        lines = h.screen.frames[-1].split("\n")
        # Window starts at the last copy, which carries the pointer
        assert lines[1] == f"{POINTER} dup "
        assert lines[2] == "  dup "


class TestSubmit:
    """Tests for submission and validation."""

    def test_submit_resolves_current_value(self) -> None:
        h = _Harness(choices=[{"name": "A", "value": {"id": 1}}, "B"])
        h.press(ENTER)
        assert h.results == [{"id": 1}]
        assert h.prompt.status == PromptStatus.ANSWERED

    def test_submit_uses_cursor_at_time_of_submission(self) -> None:
        h = _Harness(choices=["A", "B", "C"])
        h.press(DOWN, DOWN, UP, ENTER)
        assert h.results == ["B"]

    def test_filter_transforms_result(self) -> None:
        h = _Harness(choices=["a", "b"], filter=str.upper)
        h.press(ENTER)
        assert h.results == ["A"]

    def test_validation_failure_stays_active(self) -> None:
        h = _Harness(
            choices=["A", "B"],
            validate=lambda v: True if v == "B" else "Pick B",
        )
        h.press(ENTER)
        assert h.results == []
        assert h.prompt.status == PromptStatus.ACTIVE
        assert h.screen.bottoms[-1] == ">> Pick B"

        h.press(DOWN)
        h.press(ENTER)
        assert h.results == ["B"]

    def test_validation_false_uses_default_message(self) -> None:
        h = _Harness(choices=["A"], validate=lambda v: False)
        h.press(ENTER)
        assert h.screen.bottoms[-1] == ">> Please enter a valid value"

    def test_validator_errors_propagate(self) -> None:
        def broken(value: Any) -> bool:
            raise KeyError(value)

        h = _Harness(choices=["A"], validate=broken)
        with pytest.raises(KeyError):
            h.press(ENTER)

    def test_submit_finishes_screen_and_restores_cursor(self) -> None:
        h = _Harness(choices=["A"])
        assert not h.screen.cursor_visible
        h.press(ENTER)
        assert h.screen.calls[-1] == ("done", None)
        assert h.screen.cursor_visible

    def test_right_submits_when_cancelable(self) -> None:
        h = _Harness(choices=["A", "B"], cancelable=True)
        h.press(DOWN, RIGHT)
        assert h.results == ["B"]

    def test_right_does_nothing_when_not_cancelable(self) -> None:
        h = _Harness(choices=["A", "B"])
        h.press(RIGHT)
        assert h.results == []
        assert h.prompt.status == PromptStatus.ACTIVE


class TestCancel:
    """Tests for cancelation."""

    @pytest.mark.parametrize("event", [ESCAPE, LEFT])
    def test_cancel_resolves_none(self, event: InputEvent) -> None:
        h = _Harness(choices=["A", "B"], cancelable=True)
        h.press(event)
        assert h.results == [None]
        assert h.prompt.status == PromptStatus.CANCELED
        assert h.screen.frames[-1].endswith("✗")
        assert h.screen.cursor_visible

    @pytest.mark.parametrize("event", [ESCAPE, LEFT])
    def test_cancel_unavailable_when_not_cancelable(self, event: InputEvent) -> None:
        h = _Harness(choices=["A", "B"], default=1)
        h.press(event)
        assert h.results == []
        assert h.prompt.status == PromptStatus.ACTIVE
        assert h.selected == 1


class TestTermination:
    """Tests for what happens after the prompt resolves."""

    @pytest.mark.parametrize("finish", [ENTER, ESCAPE])
    def test_all_subscriptions_released(self, finish: InputEvent) -> None:
        h = _Harness(choices=["A", "B"], cancelable=True)
        assert h.source.listener_count() == 8
        h.press(finish)
        assert h.source.listener_count() == 0

    def test_events_after_submit_are_ignored(self) -> None:
        h = _Harness(choices=["A", "B", "C"], cancelable=True)
        h.press(ENTER, DOWN, key("3"), ENTER, ESCAPE)
        assert h.results == ["A"]
        assert h.selected == 0

    def test_direct_handler_calls_after_cancel_are_noops(self) -> None:
        h = _Harness(choices=["A", "B"], cancelable=True)
        h.press(ESCAPE)
        h.prompt.on_down_key()
        h.prompt.on_line()
        h.prompt.on_cancel()
        assert h.results == [None]
        assert h.selected == 0

    def test_close_releases_without_completing(self) -> None:
        h = _Harness(choices=["A", "B"])
        h.prompt.close()
        assert h.source.listener_count() == 0
        assert h.screen.cursor_visible
        h.prompt.on_line()
        assert h.results == []


class TestKeyAction:
    """Tests for custom key handlers."""

    def test_mapped_key_receives_value_and_key(self) -> None:
        calls: list[tuple[Any, str]] = []
        h = _Harness(
            choices=["A", "B"],
            key_action={"x": lambda value, k: calls.append((value, k))},
        )
        h.press(DOWN, key("x"))
        assert calls == [("B", "x")]
        assert h.selected == 1
        assert h.results == []

    def test_unmapped_key_is_ignored(self) -> None:
        calls: list[Any] = []
        h = _Harness(choices=["A"], key_action={"x": lambda *a: calls.append(a)})
        h.press(key("y"))
        assert calls == []

    def test_key_action_not_called_after_submit(self) -> None:
        calls: list[Any] = []
        h = _Harness(choices=["A"], key_action={"x": lambda *a: calls.append(a)})
        h.press(ENTER, key("x"))
        assert calls == []
