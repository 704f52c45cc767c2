"""Shared prompt lifecycle state.

This module provides the pieces every prompt carries regardless of what it
asks for:
- PromptStatus: Where a prompt is in its lifecycle
- PromptContext: Question text, screen handle and status

Prompts hold a PromptContext rather than inheriting from a base prompt.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .render import render_question
from .screen import ScreenManager


class PromptStatus(Enum):
    """Status of a prompt."""

    ACTIVE = "active"  # Waiting for input
    ANSWERED = "answered"  # Resolved with a value
    CANCELED = "canceled"  # Resolved with None


@dataclass
class PromptContext:
    """Lifecycle collaborator injected into a prompt.

    Attributes:
        message: The question shown before the choices
        screen: Where frames are rendered
        status: Current status; only ACTIVE prompts accept input
    """

    message: str
    screen: ScreenManager = field(default_factory=ScreenManager)
    status: PromptStatus = PromptStatus.ACTIVE

    def get_question(self) -> str:
        return render_question(self.message)

    def is_active(self) -> bool:
        return self.status == PromptStatus.ACTIVE
