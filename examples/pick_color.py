"""Pick Color Example: list prompt with separators, a default and key actions."""

from __future__ import annotations

import asyncio

from rich.console import Console

from listprompt import ListQuestion, Separator, prompt

console = Console()
asked_about: list[str] = []


def remember(value: str, key: str) -> None:
    asked_about.append(value)


async def main() -> None:
    question = ListQuestion(
        message="Pick a color",
        choices=[
            "red",
            "green",
            Separator(),
            {"name": "Blue (sky)", "value": "blue", "short": "Blue"},
            {"name": "Ultraviolet", "value": "uv", "disabled": "Not visible"},
        ],
        default="green",
        cancelable=True,
        key_action={"?": remember},
        validate=lambda value: value != "red" or "Red is reserved",
    )
    answer = await prompt(question, console=console)
    console.print(f"You picked: {answer!r}")
    if asked_about:
        console.print(f"[dim]You asked about: {', '.join(asked_about)}[/dim]")


if __name__ == "__main__":
    asyncio.run(main())
