"""Notification helpers.

Every user-visible outcome of a backend call goes through one of these:

    from mealdesk.events.event_helpers import notify_success, notify_error, notify_warning
"""
from __future__ import annotations
from typing import Optional
from .Event_Bus import publish, NOTIFY_SUCCESS, NOTIFY_ERROR, NOTIFY_WARNING

__all__ = ['notify_success', 'notify_error', 'notify_warning']


def notify_success(description: str, title: str = "Success"):
    publish(NOTIFY_SUCCESS, {'title': title, 'description': description})


def notify_error(description: str, title: str = "Error", status: Optional[int] = None):
    publish(NOTIFY_ERROR, {'title': title, 'description': description, 'status': status})


def notify_warning(description: str, title: str = "Warning"):
    publish(NOTIFY_WARNING, {'title': title, 'description': description})
