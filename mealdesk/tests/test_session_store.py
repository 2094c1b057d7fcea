import json

import pytest

from mealdesk.domain.User import User
from mealdesk.infra.Session_Store import NotAuthenticatedError, Session, SessionStore


def test_missing_file_means_signed_out(tmp_path):
    session = SessionStore(tmp_path / "auth-storage.json").load()
    assert not session.is_authenticated
    with pytest.raises(NotAuthenticatedError):
        session.require_user()


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "auth-storage.json"
    store = SessionStore(path)
    store.save(Session(User(3, "ivan", "ivan@example.com")))

    stored = json.loads(path.read_text(encoding="utf-8"))
    assert stored["state"]["isAuthenticated"] is True
    assert stored["version"] == 0

    session = store.load()
    assert session.is_authenticated
    assert session.require_user() == User(3, "ivan", "ivan@example.com")
    # no temp files left behind
    assert [p.name for p in path.parent.iterdir()] == ["auth-storage.json"]


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "auth-storage.json"
    path.write_text("{not json", encoding="utf-8")
    assert not SessionStore(path).load().is_authenticated


def test_clear_and_logout(tmp_path):
    store = SessionStore(tmp_path / "auth-storage.json")
    session = Session(User(1, "maria", "maria@example.com"))
    store.save(session)
    session.logout()
    assert session.user is None
    store.clear()
    assert not store.load().is_authenticated
