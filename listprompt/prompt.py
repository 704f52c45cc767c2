"""List prompt: pick one choice with the arrow keys.

Navigate with up/down (or j/k), jump with number keys 1-9, submit with
Enter. When the question is cancelable, Right also submits and Left or
Escape cancel. Resolves to the selected value, or None when canceled.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .base import PromptContext, PromptStatus
from .choices import ChoiceSet
from .errors import ConfigurationError, ValidationFailure
from .events import InputEvent, KeyEventSource, Subscription
from .paginator import Paginator
from .question import ListQuestion
from .render import (
    render_answer,
    render_canceled,
    render_choices,
    render_error,
    render_hint,
)
from .screen import ScreenManager
from .validation import Submission, SubmitValidator

logger = logging.getLogger(__name__)

DoneCallback = Callable[[Any], None]


class ListPrompt:
    """Single-selection state machine over a ChoiceSet.

    Lifecycle:
        1. __init__() - resolve choices and the initial cursor
        2. run(source, done) - subscribe to key streams, hide cursor, render
        3. key handlers - mutate the cursor and re-render
        4. submit/cancel - final render, dispose subscriptions, call done once
    """

    def __init__(
        self,
        question: ListQuestion,
        screen: ScreenManager | None = None,
        paginator: Paginator | None = None,
    ) -> None:
        self.question = question
        self.choices: ChoiceSet = question.build_choices()
        if self.choices.real_length == 0:
            raise ConfigurationError("`choices` must contain a selectable choice")

        self.context = PromptContext(
            message=question.message, screen=screen or ScreenManager()
        )
        self.paginator = paginator or Paginator(page_size=question.page_size)
        self.validator = SubmitValidator(
            validate=question.validate, filter=question.filter
        )
        self.selected = self._initial_index(question.default)
        self.first_render = True
        self.error: str | None = None

        self._done: DoneCallback | None = None
        self._subscriptions: list[Subscription] = []

    def _initial_index(self, default: Any) -> int:
        if isinstance(default, bool):
            return 0
        if isinstance(default, float) and default.is_integer():
            default = int(default)
        if isinstance(default, int):
            return default if 0 <= default < self.choices.real_length else 0
        if isinstance(default, str):
            values = self.choices.pluck_values()
            return values.index(default) if default in values else 0
        return 0

    @property
    def status(self) -> PromptStatus:
        return self.context.status

    @property
    def screen(self) -> ScreenManager:
        return self.context.screen

    def get_current_value(self) -> Any:
        return self.choices.get_choice(self.selected).value

    # -- lifecycle --

    def run(self, source: KeyEventSource, done: DoneCallback) -> ListPrompt:
        """Start listening to ``source``; ``done`` receives the result once."""
        self._done = done

        handlers: list[tuple[str, Callable[[Any], None]]] = [
            ("up", self.on_up_key),
            ("down", self.on_down_key),
            ("number", self.on_number_key),
            ("line", self.on_line),
            ("keypress", self.on_key_press),
        ]
        if self.question.cancelable:
            handlers += [
                ("right", self.on_right_key),
                ("escape", self.on_cancel),
                ("left", self.on_cancel),
            ]
        self._subscriptions = [source.subscribe(s, h) for s, h in handlers]

        logger.debug(
            "list prompt started: %d choices, cursor=%d",
            self.choices.real_length,
            self.selected,
        )
        self.screen.hide_cursor()
        self.render()
        return self

    def close(self) -> None:
        """Release subscriptions and restore the cursor without completing."""
        if self._subscriptions:
            self.screen.done()
        if self.context.is_active():
            self.context.status = PromptStatus.CANCELED
        self._done = None
        self._dispose()
        self.screen.show_cursor()

    def _dispose(self) -> None:
        for sub in self._subscriptions:
            sub.dispose()
        self._subscriptions = []

    def _finish(self, status: PromptStatus, value: Any) -> None:
        self.context.status = status
        self.render()
        self.screen.done()
        self.screen.show_cursor()
        self._dispose()

        done, self._done = self._done, None
        if done is not None:
            done(value)

    # -- rendering --

    def render(self) -> None:
        message = self.context.get_question()

        if self.first_render:
            message += render_hint(self.question.cancelable)

        if self.status == PromptStatus.ANSWERED:
            message += render_answer(self.choices.get_choice(self.selected).short)
        elif self.status == PromptStatus.CANCELED:
            message += render_canceled()
        else:
            choices_str = render_choices(self.choices, self.selected)
            index_position = self.choices.raw_index(self.selected)
            message += "\n" + self.paginator.paginate(
                choices_str, index_position, self.question.page_size
            )

        self.first_render = False
        bottom = render_error(self.error) if self.error else ""
        self.screen.render(message, bottom)

    # -- key handlers --

    def on_up_key(self, _: Any = None) -> None:
        if not self.context.is_active():
            return
        length = self.choices.real_length
        self.selected = self.selected - 1 if self.selected > 0 else length - 1
        self.render()

    def on_down_key(self, _: Any = None) -> None:
        if not self.context.is_active():
            return
        length = self.choices.real_length
        self.selected = self.selected + 1 if self.selected < length - 1 else 0
        self.render()

    def on_number_key(self, number: int) -> None:
        if not self.context.is_active():
            return
        if number <= self.choices.real_length:
            self.selected = number - 1
        self.render()

    def on_key_press(self, event: InputEvent) -> None:
        if not self.context.is_active():
            return
        key = event.char
        if key and key in self.question.key_action:
            self.question.key_action[key](self.get_current_value(), key)

    def on_line(self, _: Any = None) -> None:
        self.on_submit(Submission.immediate(self.get_current_value()))

    def on_right_key(self, _: Any = None) -> None:
        self.on_submit(Submission.deferred(self.get_current_value))

    def on_submit(self, submission: Submission) -> None:
        if not self.context.is_active():
            return
        try:
            result = self.validator.check(submission)
        except ValidationFailure as e:
            logger.debug("list prompt validation failed: %s", e.message)
            self.error = e.message
            self.render()
            return

        self.error = None
        value = result.resolve()
        logger.debug("list prompt answered: cursor=%d", self.selected)
        self._finish(PromptStatus.ANSWERED, value)

    def on_cancel(self, _: Any = None) -> None:
        if not self.context.is_active():
            return
        logger.debug("list prompt canceled")
        self.error = None
        self._finish(PromptStatus.CANCELED, None)
