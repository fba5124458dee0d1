"""Input classifier — global key-down hook → domain events.

Listens with a pynput keyboard.Listener (daemon thread) and sorts every
key-down into one of three paths:

  timer keys   Enter, 0-9         → DomainEvent sent on the EventChannel
  arrow keys   up/down/left/right → dropped
  hotkeys      F7 / F8 / F9       → macro spawned on the player, no event
  anything else                   → DomainEvent.RESET

The classifier owns its channel sender and macro table; nothing is
captured from module state.  A closed channel means the render loop has
exited, so the listener stops itself.
"""
from __future__ import annotations

from typing import Callable, Mapping, Optional

from src.core.channel import ChannelClosed, EventChannel
from src.core.events import DomainEvent

LogFn = Callable[[str, str], None]       # (level, message)

# ---------------------------------------------------------------------------
# Classification table
# ---------------------------------------------------------------------------

TIMER_KEYS: dict[str, DomainEvent] = {
    "enter": DomainEvent.TRIGGER,
    "1":     DomainEvent.ARM,
    **{d: DomainEvent.IGNORE for d in "023456789"},
}

DROPPED_KEYS: frozenset = frozenset({"up", "down", "left", "right"})


def classify(name: Optional[str]) -> Optional[DomainEvent]:
    """Map a key name to its DomainEvent; None means "drop silently"."""
    if name in DROPPED_KEYS:
        return None
    return TIMER_KEYS.get(name, DomainEvent.RESET)


# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

class InputClassifier:
    """Routes key names to the event channel or to macro playback.

    Parameters
    ----------
    sender : EventChannel
        Producer side of the render loop's channel.
    player : MacroPlayer
        Receives ``spawn(invocation)`` for hotkeys.
    hotkeys : mapping
        Key name → invocation (see src.core.invocations).
    """

    def __init__(
        self,
        sender:  EventChannel,
        player,
        hotkeys: Mapping[str, object],
        log_fn:  LogFn | None = None,
    ) -> None:
        self._sender   = sender
        self._player   = player
        self._hotkeys  = dict(hotkeys)
        self._log      = log_fn or (lambda level, msg: None)
        self._listener = None

    # ------------------------------------------------------------------

    def observe(self, name: Optional[str]) -> Optional[DomainEvent]:
        """Handle one key-down.  Returns the event sent, if any.

        Raises ChannelClosed when the consumer is gone.
        """
        invocation = self._hotkeys.get(name) if name else None
        if invocation is not None:
            self._player.spawn(invocation)
            return None

        event = classify(name)
        if event is not None:
            self._sender.send(event)
        return event

    def _on_press(self, key) -> Optional[bool]:
        from src.core.keys import key_name
        try:
            self.observe(key_name(key))
        except ChannelClosed:
            self._log("ERROR", "event channel closed; input listener stopping")
            return False
        return None

    # ------------------------------------------------------------------

    @property
    def is_listening(self) -> bool:
        return self._listener is not None and self._listener.running

    def start(self) -> None:
        """Start the global key-down hook."""
        if self._listener is not None:
            return
        from pynput import keyboard

        self._listener = keyboard.Listener(on_press=self._on_press)
        self._listener.daemon = True
        self._listener.start()
        self._log("INFO", f"input listener started ({', '.join(sorted(self._hotkeys))} bound)")

    def stop(self) -> None:
        if self._listener is not None:
            self._listener.stop()
            self._listener = None
            self._log("INFO", "input listener stopped")
