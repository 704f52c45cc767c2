"""Run list prompts against a real terminal using prompt_toolkit.

prompt_toolkit's input system handles the terminal complexity:
- Terminal raw mode management
- Escape sequence parsing (distinguishes ESC from arrow keys)
- Cross-platform support

Example:
    answer = select("Pick a color", ["red", "green", "blue"])

    # or, inside a running event loop
    answer = await prompt(ListQuestion(message="Pick", choices=["a", "b"]))
"""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from prompt_toolkit.input import create_input
from prompt_toolkit.input.vt100 import Vt100Input

from .choices import ChoiceLike
from .events import KeyEventSource
from .prompt import ListPrompt
from .question import ListQuestion
from .screen import ScreenManager

if TYPE_CHECKING:
    from collections.abc import Iterable

    from prompt_toolkit.input import Input
    from rich.console import Console

logger = logging.getLogger(__name__)


@dataclass
class TerminalInput:
    """Feeds key presses from a prompt_toolkit Input into a KeyEventSource.

    Usage:
        terminal = TerminalInput(source)

        async with terminal:
            # Key presses are delivered to source while inside this block
            await something()
        # Terminal restored automatically

    Attributes:
        source: Receives every parsed key press
        input: Input to read from; created from stdin when omitted
        on_error: Receives an exception raised while handling a key press.
            Delivery stops after the first one. Without it the exception
            propagates into prompt_toolkit's reader callback.
    """

    source: KeyEventSource
    input: Input | None = None
    on_error: Callable[[Exception], None] | None = None

    _input: Input | None = field(default=None, init=False, repr=False)
    _running: bool = field(default=False, init=False, repr=False)
    _raw_mode_ctx: Any = field(default=None, init=False, repr=False)
    _attach_ctx: Any = field(default=None, init=False, repr=False)

    def _is_tty(self) -> bool:
        """Check if stdin is a real terminal."""
        try:
            return sys.stdin.isatty()
        except (AttributeError, ValueError):
            return False

    def _on_input_ready(self) -> None:
        """Called by prompt_toolkit when input is available."""
        if not self._input or not self._running:
            return

        key_presses = self._input.read_keys()
        # Force flush the parser so a lone ESC is not held back
        if isinstance(self._input, Vt100Input):
            key_presses += self._input.flush_keys()

        for key_press in key_presses:
            if not self._running:
                break
            try:
                self.source.feed(key_press)
            except Exception as e:
                if self.on_error is None:
                    raise
                logger.debug("key handler raised, stopping input", exc_info=True)
                self._running = False
                self.on_error(e)

    def start(self) -> bool:
        """Start delivering key presses.

        Returns:
            True if started successfully, False if not possible (not a TTY, etc.)
        """
        if self._running:
            return True

        if self.input is None and not self._is_tty():
            return False

        try:
            self._input = self.input or create_input()
            self._raw_mode_ctx = self._input.raw_mode()
            self._raw_mode_ctx.__enter__()
            self._attach_ctx = self._input.attach(self._on_input_ready)
            self._attach_ctx.__enter__()
            self._running = True
            return True
        except (OSError, RuntimeError):
            logger.debug("could not attach to terminal input", exc_info=True)
            self._cleanup()
            return False

    def stop(self) -> None:
        """Stop delivering key presses and restore the terminal."""
        self._running = False
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up contexts in reverse order."""
        if self._attach_ctx:
            self._attach_ctx.__exit__(None, None, None)
            self._attach_ctx = None

        if self._raw_mode_ctx:
            self._raw_mode_ctx.__exit__(None, None, None)
            self._raw_mode_ctx = None

        # Only close inputs we created ourselves
        if self._input is not None and self.input is None:
            self._input.close()
        self._input = None

    async def __aenter__(self) -> "TerminalInput":
        if not self.start():
            raise RuntimeError("List prompts need an interactive terminal")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()


async def prompt(
    question: ListQuestion,
    *,
    input: Input | None = None,
    console: Console | None = None,
) -> Any:
    """Ask ``question`` and wait for the answer.

    Returns:
        The selected value, or None if the prompt was canceled

    Raises:
        RuntimeError: If there is no interactive terminal
        KeyboardInterrupt: If the user pressed Ctrl+C
        Exception: Whatever a validate, filter or key action callback raised,
            other than ValidationFailure
    """
    loop = asyncio.get_running_loop()
    result: asyncio.Future[Any] = loop.create_future()

    source = KeyEventSource()
    list_prompt = ListPrompt(question, screen=ScreenManager(console))

    def on_done(value: Any) -> None:
        if not result.done():
            result.set_result(value)

    def on_interrupt(_: Any) -> None:
        list_prompt.close()
        if not result.done():
            result.set_exception(KeyboardInterrupt())

    def on_error(exc: Exception) -> None:
        list_prompt.close()
        if not result.done():
            result.set_exception(exc)

    interrupt = source.subscribe("interrupt", on_interrupt)
    try:
        async with TerminalInput(source, input, on_error=on_error):
            list_prompt.run(source, on_done)
            return await result
    finally:
        interrupt.dispose()
        list_prompt.close()


def select(
    message: str,
    choices: Iterable[ChoiceLike],
    **options: Any,
) -> Any:
    """Synchronous helper: build a ListQuestion and run it to completion.

    Extra keyword arguments are ListQuestion options (default, page_size,
    cancelable, key_action, validate, filter).
    """
    question = ListQuestion.from_dict({"message": message, "choices": choices, **options})
    return asyncio.run(prompt(question))
