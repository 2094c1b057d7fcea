"""Signed-in user session and its JSON persistence.

The session is an explicit object handed to whoever needs the current user;
SessionStore.load()/save() are the only places it touches disk.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from mealdesk.domain.User import User
from mealdesk.utilities.config import SESSION_FILE

logger = logging.getLogger(__name__)


class NotAuthenticatedError(Exception):
    """Raised when an action needs a signed-in user and there is none."""


class Session:
    def __init__(self, user: Optional[User] = None):
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def set_user(self, user: Optional[User]) -> None:
        self.user = user

    def logout(self) -> None:
        self.user = None

    def require_user(self) -> User:
        if self.user is None:
            raise NotAuthenticatedError("You must be signed in")
        return self.user

    def to_dict(self):
        return {
            "user": self.user.to_dict() if self.user else None,
            "isAuthenticated": self.is_authenticated,
        }

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        user_data = d.get("user")
        return Session(User.from_dict(user_data) if isinstance(user_data, dict) else None)


class SessionStore:
    def __init__(self, path: Path = SESSION_FILE):
        self.path = Path(path)

    def load(self) -> Session:
        """Read the persisted session; a missing or unreadable file means signed out."""
        if not self.path.exists():
            return Session()
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f) or {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return Session()
        return Session.from_dict(stored.get("state", {}))

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".session_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump({"state": session.to_dict(), "version": 0}, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def clear(self) -> None:
        """Persist a signed-out session."""
        self.save(Session())
