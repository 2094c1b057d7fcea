"""Web-facing observer for notification events.

Subscribes to the GLOBAL_EVENT_BUS for notify.success / notify.error /
notify.warning and keeps a ring buffer of recent notifications that the web
layer serves at /api/notifications, so pages can show transient "toast"
messages by polling.

Each notification gets an auto-increment id (cursor); clients pass
since=<last_id_seen> to receive only newer ones. The buffer is capped at
MAX_NOTIFICATIONS and guarded by a lock (sync FastAPI routes run in a
thread pool).
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone
import logging

from mealdesk.utilities.constants import MAX_NOTIFICATIONS
from .Event_Bus import GLOBAL_EVENT_BUS, ALL_NOTIFICATIONS

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    payload = payload if isinstance(payload, dict) else {'description': str(payload or '')}
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name.split('.', 1)[-1],
            'ts': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'title': payload.get('title', ''),
            'description': payload.get('description', ''),
        }
        if payload.get('status') is not None:
            evt['status'] = payload['status']
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_NOTIFICATIONS:
            del _events[: len(_events) - MAX_NOTIFICATIONS]


def start():
    """Idempotent start: subscribe the recorder once."""
    global _started
    if _started:
        return
    for name in ALL_NOTIFICATIONS:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True
    logger.debug("Notification observer subscribed")


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return notifications newer than 'since' (exclusive).

    If since is None, returns everything still buffered. next_cursor is the
    largest id seen so far.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def reset():
    """Drop buffered notifications (used when the user signs out)."""
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'reset']
