"""Tests for the file-backed auth session storage."""

import asyncio
import json

from meubles.infrastructure.persistence.json_session_storage import (
    SESSION_LIFETIME_SECONDS,
    JsonSessionStorage,
)
from tests.fakes import FakeClock


def test_creates_file_on_first_use(tmp_path):
    path = tmp_path / "nested" / "session.json"
    JsonSessionStorage(path)
    assert json.loads(path.read_text()) == {}


def test_item_survives_a_restart(tmp_path):
    path = tmp_path / "session.json"
    clock = FakeClock()
    asyncio.run(JsonSessionStorage(path, clock=clock).set_item("token", "abc"))

    reopened = JsonSessionStorage(path, clock=clock)

    assert asyncio.run(reopened.get_item("token")) == "abc"


def test_item_expires_after_lifetime(tmp_path):
    path = tmp_path / "session.json"
    clock = FakeClock()
    storage = JsonSessionStorage(path, clock=clock)
    asyncio.run(storage.set_item("token", "abc"))

    clock.advance(SESSION_LIFETIME_SECONDS - 1)
    assert asyncio.run(storage.get_item("token")) == "abc"

    clock.advance(1)
    assert asyncio.run(storage.get_item("token")) is None
    assert "token" not in json.loads(path.read_text())


def test_remove_item(tmp_path):
    storage = JsonSessionStorage(tmp_path / "session.json")
    asyncio.run(storage.set_item("token", "abc"))
    asyncio.run(storage.remove_item("token"))
    asyncio.run(storage.remove_item("missing"))
    assert asyncio.run(storage.get_item("token")) is None


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")
    storage = JsonSessionStorage(path)
    assert asyncio.run(storage.get_item("token")) is None
