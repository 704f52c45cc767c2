"""Interactive single-selection list prompts for the terminal.

Usage:
    from listprompt import Separator, select

    color = select(
        "Pick a color",
        ["red", "green", Separator(), {"name": "Blue", "value": "blue"}],
        default="green",
        cancelable=True,
    )

    # Driving the state machine yourself
    from listprompt import KeyEventSource, ListPrompt, ListQuestion

    source = KeyEventSource()
    prompt = ListPrompt(ListQuestion(message="Pick", choices=["a", "b"]))
    prompt.run(source, done=print)
"""

from .base import PromptContext, PromptStatus
from .choices import Choice, ChoiceSet, Separator
from .errors import (
    ChoiceOutOfRange,
    ConfigurationError,
    ListPromptError,
    ValidationFailure,
)
from .events import InputEvent, KeyEventSource, Subscription
from .paginator import Paginator
from .prompt import ListPrompt
from .question import ListQuestion
from .runner import TerminalInput, prompt, select
from .screen import ScreenManager
from .validation import Submission, SubmitValidator

__version__ = "0.1.0"

__all__ = [
    # Choices
    "Choice",
    "ChoiceSet",
    "Separator",
    # Prompt
    "ListPrompt",
    "ListQuestion",
    "PromptContext",
    "PromptStatus",
    # Events
    "InputEvent",
    "KeyEventSource",
    "Subscription",
    # Rendering
    "Paginator",
    "ScreenManager",
    # Validation
    "Submission",
    "SubmitValidator",
    # Running
    "TerminalInput",
    "prompt",
    "select",
    # Errors
    "ListPromptError",
    "ConfigurationError",
    "ChoiceOutOfRange",
    "ValidationFailure",
]
