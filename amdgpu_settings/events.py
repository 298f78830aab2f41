#!/usr/bin/env python3
"""
Simple event system for reporting control-file writes.

The applier and reset publish events; the CLI subscribes to report progress.

Events:
    control_written      {"step": str, "path": str, "value": str}
    feature_unavailable  {"step": str, "path": str}
"""

from typing import Dict, List, Callable, Any


class EventBus:
    """
    Simple event bus that allows components to publish and subscribe to events.

    Events are identified by a string name and can carry an arbitrary payload.
    """
    _instance = None

    def __new__(cls):
        """Singleton pattern to ensure only one event bus exists."""
        if cls._instance is None:
            cls._instance = super(EventBus, cls).__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance

    def subscribe(self, event_name: str, callback: Callable[[Any], None]) -> None:
        """
        Subscribe to an event.

        Args:
            event_name: Name of the event to subscribe to
            callback: Function to call when the event is published
        """
        self._subscribers.setdefault(event_name, []).append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[Any], None]) -> None:
        """Remove a callback previously passed to subscribe()."""
        callbacks = self._subscribers.get(event_name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def publish(self, event_name: str, payload: Any = None) -> None:
        """
        Publish an event with optional payload.

        Args:
            event_name: Name of the event to publish
            payload: Data to send with the event
        """
        for callback in list(self._subscribers.get(event_name, [])):
            callback(payload)


# Global event bus instance
event_bus = EventBus()
