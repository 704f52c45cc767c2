"""Rendering helpers for list prompts.

All functions return rich markup. User supplied text (messages, choice
names, error messages) is escaped so brackets are shown literally.
"""

from __future__ import annotations

from rich.markup import escape

from .choices import ChoiceSet, Separator

POINTER = "❯"
CROSS = "✗"


def render_question(message: str) -> str:
    """Return the question line prefix: ``? message ``."""
    return f"[green]?[/green] [bold]{escape(message)}[/bold] "


def render_hint(cancelable: bool) -> str:
    keys = "↑ ↓ ← →" if cancelable else "↑ ↓"
    return f"[dim](Use arrow keys: {keys})[/dim]"


def render_answer(short: str) -> str:
    return f"[cyan]{escape(short)}[/cyan]"


def render_canceled() -> str:
    return f"[yellow]{CROSS}[/yellow]"


def render_error(message: str) -> str:
    return f"[red]>>[/red] {escape(message)}"


def render_choices(choices: ChoiceSet, pointer: int) -> str:
    """Render every entry of ``choices`` with the cursor on ``pointer``.

    ``pointer`` is a selectable ordinal. Separators and disabled entries
    each shift the raw index, so a row is active when its raw index minus
    the rows skipped before it equals the pointer.
    """
    lines: list[str] = []
    offset = 0

    for i, choice in enumerate(choices):
        if isinstance(choice, Separator):
            offset += 1
            lines.append(f"  [dim]{escape(choice.line)}[/dim]")
            continue

        if choice.disabled:
            offset += 1
            reason = choice.disabled if isinstance(choice.disabled, str) else "Disabled"
            lines.append(f"  - {escape(choice.name)} ({escape(reason)})")
            continue

        if i - offset == pointer:
            lines.append(f"[cyan]{POINTER} {escape(choice.name)}[/cyan] ")
        else:
            lines.append(f"  {escape(choice.name)} ")

    return "\n".join(lines)
