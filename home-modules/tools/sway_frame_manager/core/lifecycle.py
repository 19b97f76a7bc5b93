"""Lifecycle of windows dedicated to a single piece of content.

When the client creates a window just to show one piece of content (and no
existing window could be reused), the window is marked Dedicated to that
content. Two things can happen afterwards:

- The user repurposes the window: it splits into several display regions,
  or shows something else. Dedication is dropped and the window is never
  destroyed automatically.
- The content is dismissed through a closing action (quit, bury) while the
  window is still dedicated. The window is destroyed so throwaway popups do
  not pile up.

transition() is the pure state machine; DedicatedWindowLifecycle applies
its results to the WindowMetadataStore and runs the side effects.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .config import DEFAULT_CLOSING_ACTIONS
from .metadata import WindowMetadataStore, get_store


logger = logging.getLogger('swayframe.lifecycle')


class Cause(str, Enum):
    """Classification of what triggered a configuration change."""
    CLOSING = "closing"
    OTHER = "other"


# States

@dataclass(frozen=True)
class Free:
    """Window is not dedicated to anything."""
    pass


@dataclass(frozen=True)
class Dedicated:
    """Window exclusively hosts content_id."""
    content_id: Any


@dataclass(frozen=True)
class Destroyed:
    """Terminal state: the window has been destroyed."""
    pass


LifecycleState = Union[Free, Dedicated, Destroyed]


# Events

@dataclass(frozen=True)
class Dedicate:
    """Window was created to host content_id."""
    content_id: Any


@dataclass(frozen=True)
class ConfigurationChanged:
    """Window layout or contents changed.

    Attributes:
        regions: Content shown, one entry per display region
        cause: Whether a closing action caused the change
    """
    regions: Tuple[Any, ...]
    cause: Cause = Cause.OTHER


LifecycleEvent = Union[Dedicate, ConfigurationChanged]


# Effects

@dataclass(frozen=True)
class DestroyWindow:
    """Destroy the window the event was about."""
    pass


def classify_cause(action: Optional[str], closing_actions: Iterable[str] = DEFAULT_CLOSING_ACTIONS) -> Cause:
    """Classify the action that caused a change.

    Examples:
        >>> classify_cause("quit-window")
        <Cause.CLOSING: 'closing'>
        >>> classify_cause("split-window")
        <Cause.OTHER: 'other'>
    """
    if action is not None and action in set(closing_actions):
        return Cause.CLOSING
    return Cause.OTHER


def transition(state: LifecycleState, event: LifecycleEvent) -> Tuple[LifecycleState, List[Any]]:
    """Compute the next state and side effects for event.

    The closing check comes first: a closing action changes the displayed
    content itself, so checking for repurposing first would always revoke
    dedication before the window could be destroyed.
    """
    if isinstance(state, Destroyed):
        return state, []

    if isinstance(event, Dedicate):
        if isinstance(state, Free):
            return Dedicated(event.content_id), []
        return state, []

    if isinstance(event, ConfigurationChanged):
        if not isinstance(state, Dedicated):
            return state, []
        if event.cause == Cause.CLOSING:
            return Destroyed(), [DestroyWindow()]
        if tuple(event.regions) != (state.content_id,):
            return Free(), []
        return state, []

    raise TypeError(f"Unsupported lifecycle event: {event!r}")


# Notification delivery

NotificationCallback = Callable[[Any, LifecycleEvent], Any]


class NotificationHub:
    """In-process NotificationSource.

    The client calls publish() from its window-configuration hook; every
    subscriber receives (handle, event).
    """

    def __init__(self):
        self._subscribers: Dict[int, NotificationCallback] = {}
        self._next_token = 0

    def subscribe(self, callback: NotificationCallback) -> Callable[[], None]:
        """Register callback; returns a function that unsubscribes it."""
        token = self._next_token
        self._next_token += 1
        self._subscribers[token] = callback

        def unsubscribe() -> None:
            self._subscribers.pop(token, None)

        return unsubscribe

    def publish(self, handle: Any, event: LifecycleEvent) -> None:
        for callback in list(self._subscribers.values()):
            callback(handle, event)


class DedicatedWindowLifecycle:
    """Apply lifecycle transitions to the metadata store.

    Args:
        destroyer: Called with the handle when a window must be destroyed
        store: Metadata store (default: process-wide store)
        closing_actions: Action names treated as closing actions
    """

    def __init__(
        self,
        destroyer: Callable[[Any], Any],
        store: Optional[WindowMetadataStore] = None,
        closing_actions: Iterable[str] = DEFAULT_CLOSING_ACTIONS
    ):
        self.destroyer = destroyer
        self.store = store if store is not None else get_store()
        self.closing_actions = list(closing_actions)

    def state_of(self, handle: Any) -> LifecycleState:
        entry = self.store.get(handle)
        if entry is None or entry.dedicated_to is None:
            return Free()
        if entry.destroying:
            return Destroyed()
        return Dedicated(entry.dedicated_to)

    def dedicate(self, handle: Any, content_id: Any) -> LifecycleState:
        """Record that handle was created to host content_id."""
        return self.handle_event(handle, Dedicate(content_id))

    def notify(
        self,
        handle: Any,
        regions: Sequence[Any],
        action: Optional[str] = None
    ) -> LifecycleState:
        """Report a configuration change caused by action (if known)."""
        cause = classify_cause(action, self.closing_actions)
        return self.handle_event(handle, ConfigurationChanged(tuple(regions), cause))

    def handle_event(self, handle: Any, event: LifecycleEvent) -> LifecycleState:
        """Run one transition for handle and apply its effects."""
        state = self.state_of(handle)
        new_state, effects = transition(state, event)

        if new_state != state:
            logger.debug(f"Window {handle!r}: {state} -> {new_state}")

        if isinstance(new_state, Dedicated):
            self.store.set_dedication(handle, new_state.content_id)
        elif isinstance(new_state, Free):
            self.store.clear_dedication(handle)

        for effect in effects:
            if isinstance(effect, DestroyWindow):
                logger.info(f"Destroying window {handle!r} dedicated to {state.content_id!r}")
                # Notifications fired from inside the destroyer see Destroyed
                entry = self.store.ensure(handle)
                entry.destroying = True
                try:
                    self.destroyer(handle)
                except Exception:
                    entry.destroying = False
                    raise
                self.store.forget(handle)

        return new_state

    def attach(self, source: NotificationHub) -> Callable[[], None]:
        """Subscribe to a notification source; returns the unsubscribe function."""
        return source.subscribe(self.handle_event)
