"""Event Bus / Observer used for user-facing notifications.

Event names:
  notify.success -> payload {"title": str, "description": str}
  notify.error   -> payload {"title": str, "description": str, "status": int | None}
  notify.warning -> payload {"title": str, "description": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
NOTIFY_SUCCESS = "notify.success"
NOTIFY_ERROR = "notify.error"
NOTIFY_WARNING = "notify.warning"

ALL_NOTIFICATIONS = (NOTIFY_SUCCESS, NOTIFY_ERROR, NOTIFY_WARNING)

Listener = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Listener):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Listener):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any = None):
		# A failing listener must not stop delivery to the others
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# Process-wide bus (the web layer subscribes its observer here)
GLOBAL_EVENT_BUS = EventBus()


def publish(event_name: str, payload: Any = None) -> None:
	"""Publish an event on the global bus."""
	GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'publish', 'Listener',
	'NOTIFY_SUCCESS', 'NOTIFY_ERROR', 'NOTIFY_WARNING', 'ALL_NOTIFICATIONS'
]
