"""Classified key event streams.

Raw key presses are turned into an InputEvent and routed to named streams
(up, down, left, right, number, escape, line, interrupt, keypress). Each
listener registration is a Subscription that can be disposed on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from prompt_toolkit.keys import Keys

if TYPE_CHECKING:
    from prompt_toolkit.key_binding import KeyPress

STREAMS = (
    "up",
    "down",
    "left",
    "right",
    "number",
    "escape",
    "line",
    "interrupt",
    "keypress",
)

_NAMED_KEYS = {
    Keys.Up: "Up",
    Keys.Down: "Down",
    Keys.Left: "Left",
    Keys.Right: "Right",
    Keys.Escape: "Escape",
    Keys.ControlM: "Enter",
    Keys.ControlJ: "Enter",
    Keys.Backspace: "Backspace",
    Keys.Tab: "Tab",
}


@dataclass
class InputEvent:
    """A keyboard input event."""

    key: str  # 'Enter', 'Escape', 'Backspace', 'Up', 'Down', or the character
    char: str | None  # Printable character or None
    ctrl: bool = False


def from_key_press(key_press: KeyPress) -> InputEvent:
    """Convert a prompt_toolkit KeyPress into an InputEvent."""
    key = key_press.key
    if isinstance(key, Keys):
        if key in _NAMED_KEYS:
            return InputEvent(key=_NAMED_KEYS[key], char=None)
        name = key.value
        if name.startswith("c-") and len(name) == 3:
            return InputEvent(key=name, char=name[2], ctrl=True)
        return InputEvent(key=name, char=None)
    return InputEvent(key=key, char=key_press.data or key)


def classify(event: InputEvent) -> list[tuple[str, Any]]:
    """Return the (stream, payload) pairs an event is delivered to.

    ``keypress`` always comes last so stream handlers that end a prompt
    run before generic key actions.
    """
    char = event.char
    plain = None if event.ctrl else char
    routed: list[tuple[str, Any]] = []

    if event.key == "Up" or plain == "k" or (event.ctrl and char == "p"):
        routed.append(("up", None))
    elif event.key == "Down" or plain == "j" or (event.ctrl and char == "n"):
        routed.append(("down", None))
    elif event.key == "Left":
        routed.append(("left", None))
    elif event.key == "Right":
        routed.append(("right", None))
    elif event.key == "Escape":
        routed.append(("escape", None))
    elif event.key == "Enter":
        routed.append(("line", None))
    elif event.ctrl and char == "c":
        routed.append(("interrupt", None))
    elif plain is not None and len(plain) == 1 and plain in "123456789":
        routed.append(("number", int(plain)))

    routed.append(("keypress", event))
    return routed


@dataclass(eq=False)
class Subscription:
    """A listener registered on one stream of a KeyEventSource."""

    stream: str
    handler: Callable[[Any], None]
    _source: KeyEventSource | None = field(default=None, repr=False)

    @property
    def disposed(self) -> bool:
        return self._source is None

    def dispose(self) -> None:
        """Stop delivering events to the handler. Safe to call twice."""
        if self._source is not None:
            self._source._remove(self)
            self._source = None


class KeyEventSource:
    """Named, independently subscribable key event streams.

    Usage:
        source = KeyEventSource()
        sub = source.subscribe("down", lambda _: move_down())
        source.dispatch(InputEvent(key="Down", char=None))
        sub.dispose()
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Subscription]] = {s: [] for s in STREAMS}

    def subscribe(self, stream: str, handler: Callable[[Any], None]) -> Subscription:
        if stream not in self._listeners:
            raise ValueError(f"Unknown event stream: {stream!r}")
        sub = Subscription(stream=stream, handler=handler, _source=self)
        self._listeners[stream].append(sub)
        return sub

    def listener_count(self, stream: str | None = None) -> int:
        """Number of live subscriptions on one stream, or on all of them."""
        if stream is not None:
            return len(self._listeners[stream])
        return sum(len(subs) for subs in self._listeners.values())

    def emit(self, stream: str, payload: Any = None) -> None:
        # Handlers may dispose other subscriptions while we iterate
        for sub in list(self._listeners[stream]):
            if not sub.disposed:
                sub.handler(payload)

    def dispatch(self, event: InputEvent) -> None:
        """Deliver one input event to every stream it belongs to."""
        for stream, payload in classify(event):
            self.emit(stream, payload)

    def feed(self, key_press: KeyPress) -> None:
        """Deliver a prompt_toolkit key press."""
        self.dispatch(from_key_press(key_press))

    def _remove(self, sub: Subscription) -> None:
        listeners = self._listeners[sub.stream]
        if sub in listeners:
            listeners.remove(sub)
