"""Windowing for long choice lists."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_PAGE_SIZE = 7
MORE_CHOICES_HINT = "[dim](Move up and down to reveal more choices)[/dim]"


@dataclass
class Paginator:
    """Shows a fixed-height window over rendered choice lines.

    The list is treated as infinite (repeated above and below itself) so
    wrapping from the last choice to the first scrolls smoothly. The active
    line drifts down to at most ``MAX_POINTER`` rows from the top, and only
    when the user moves downwards.
    """

    MAX_POINTER = 3

    page_size: int = DEFAULT_PAGE_SIZE
    pointer: int = field(default=0, init=False)
    last_index: int = field(default=0, init=False)

    def paginate(self, output: str, active: int, page_size: int | None = None) -> str:
        """Return the visible window of ``output`` for the active line index."""
        size = page_size or self.page_size
        lines = output.split("\n")

        if len(lines) <= size + 2:
            return output

        step = active - self.last_index
        if self.pointer < self.MAX_POINTER and 0 < step < 9:
            self.pointer = min(self.MAX_POINTER, self.pointer + step)
        self.last_index = active

        infinite = lines * 3
        top = max(0, active + len(lines) - self.pointer)
        section = "\n".join(infinite[top : top + size])
        return f"{section}\n{MORE_CHOICES_HINT}"
