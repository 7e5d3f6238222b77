"""
Event registry and dispatch for the mock DOM.

Listeners live in a side table keyed by target identity, so any object
that supports weak references can be an event target.
"""

import logging
import weakref
from typing import Any, Callable, Dict, List, Optional

from .node import NodeType

logger = logging.getLogger(__name__)

_listeners: 'weakref.WeakKeyDictionary[Any, Dict[str, List[Callable]]]' = weakref.WeakKeyDictionary()


class Event:
    """
    A DOM event.

    Bubbling and cancelation flags are honored by ``dispatch_event``.
    """

    def __init__(self, event_type: str, bubbles: bool = False, cancelable: bool = False,
                 composed: bool = False, detail: Any = None):
        """
        Initialize an event.

        Args:
            event_type: The event type, e.g. "click"
            bubbles: Whether the event propagates to ancestors
            cancelable: Whether prevent_default() has an effect
            composed: Whether the event crosses shadow root boundaries
            detail: Optional payload, as on CustomEvent
        """
        self.type = event_type
        self.bubbles = bubbles
        self.cancelable = cancelable
        self.composed = composed
        self.detail = detail

        self.target: Any = None
        self.current_target: Any = None
        self.default_prevented = False
        self.cancel_bubble = False
        self._stop_immediate = False

    def __repr__(self) -> str:
        return f"<Event {self.type}>"

    def prevent_default(self) -> None:
        if self.cancelable:
            self.default_prevented = True

    def stop_propagation(self) -> None:
        self.cancel_bubble = True

    def stop_immediate_propagation(self) -> None:
        self.cancel_bubble = True
        self._stop_immediate = True

    preventDefault = prevent_default
    stopPropagation = stop_propagation
    stopImmediatePropagation = stop_immediate_propagation


def add_event_listener(target: Any, event_type: str, handler: Callable) -> None:
    """
    Register a handler for an event type on a target.

    Registering the same handler twice for the same type has no effect.
    """
    handlers = _listeners.setdefault(target, {}).setdefault(event_type, [])
    if handler not in handlers:
        handlers.append(handler)


def remove_event_listener(target: Any, event_type: str, handler: Callable) -> None:
    """Unregister a handler. Unknown handlers are ignored."""
    handlers = _listeners.get(target, {}).get(event_type)
    if handlers and handler in handlers:
        handlers.remove(handler)


def get_event_listeners(target: Any, event_type: str) -> List[Callable]:
    return list(_listeners.get(target, {}).get(event_type, []))


def _trigger_event_listeners(target: Any, event: Event) -> None:
    for handler in get_event_listeners(target, event.type):
        if event._stop_immediate:
            break
        event.current_target = target
        handler(event)


def _propagation_parent(target: Any) -> Optional[Any]:
    if getattr(target, 'node_type', None) == NodeType.DOCUMENT_NODE:
        return getattr(target, 'default_view', None)
    return getattr(target, 'parent_node', None)


def dispatch_event(target: Any, event: Event) -> bool:
    """
    Dispatch an event at a target.

    Handlers on the target run first; if the event bubbles, handlers on each
    ancestor run in turn until propagation is stopped. Exceptions raised by
    handlers propagate to the caller.

    Args:
        target: The event target
        event: The event to dispatch

    Returns:
        False if a handler called prevent_default() on a cancelable event
    """
    logger.debug(f"Dispatching {event.type} event at {target!r}")
    event.target = target

    current = target
    while current is not None:
        _trigger_event_listeners(current, event)
        if not event.bubbles or event.cancel_bubble:
            break
        current = _propagation_parent(current)

    event.current_target = None
    return not event.default_prevented
