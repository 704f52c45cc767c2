"""Screen writer that redraws a prompt in place.

The previous frame is erased with the same control sequence rich's live
renderer uses (carriage return, then cursor-up and erase-line per row),
so each render replaces the last one instead of scrolling.
"""

from __future__ import annotations

from rich.console import Console
from rich.control import Control
from rich.segment import ControlType
from rich.text import Text


class ScreenManager:
    """Renders prompt frames to a rich Console.

    Attributes:
        console: Target console (stdout by default)
        height: Number of terminal rows the current frame occupies
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)
        self.height = 0
        self.last_frame = ""

    def render(self, content: str, bottom: str = "") -> None:
        """Replace the current frame with ``content`` (and ``bottom`` below it)."""
        self.clean()

        frame = f"{content}\n{bottom}" if bottom else content
        text = Text.from_markup(frame)
        self.height = len(self.console.render_lines(text, pad=False))
        self.last_frame = frame
        self.console.print(text, end="")

    def clean(self) -> None:
        """Erase the rows written by the previous render."""
        if self.height == 0:
            return
        codes: list = [ControlType.CARRIAGE_RETURN, (ControlType.ERASE_IN_LINE, 2)]
        for _ in range(self.height - 1):
            codes.extend([(ControlType.CURSOR_UP, 1), (ControlType.ERASE_IN_LINE, 2)])
        self.console.control(Control(*codes))
        self.height = 0

    def done(self) -> None:
        """Leave the current frame on screen and move below it."""
        if self.height:
            self.console.print()
        self.height = 0

    def hide_cursor(self) -> None:
        self.console.show_cursor(False)

    def show_cursor(self) -> None:
        self.console.show_cursor(True)
