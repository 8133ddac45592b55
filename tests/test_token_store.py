import json

import pytest

from bibbox_core.errors import AccessDenied
from bibbox_core.token_store import JsonFileStorage, MemoryStorage, TokenStore


class Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def test_token_valid_until_expiry():
    clock = Clock(1000)
    store = TokenStore(MemoryStorage(), "A", clock=clock)
    store.store("T1", 1100)
    assert store.get() == "T1"

    clock.now = 1101
    assert store.get() is None


def test_token_expired_at_exact_expiry():
    clock = Clock(1000)
    store = TokenStore(MemoryStorage(), "A", clock=clock)
    store.store("T1", 1100)

    clock.now = 1099.9
    assert store.get() == "T1"
    clock.now = 1100
    assert store.get() is None


def test_store_records_owner_and_overwrites():
    storage = MemoryStorage()
    store = TokenStore(storage, "A", clock=Clock(0))
    store.store("T1", 100)
    store.store("T2", 200)
    assert storage.items == {"token": "T2", "expire": "200", "uniqueId": "A"}


def test_opening_for_other_configuration_clears_token():
    storage = MemoryStorage({"token": "T1", "expire": "5000", "uniqueId": "A"})
    store = TokenStore(storage, "B", clock=Clock(0))
    assert storage.items == {}
    assert store.get() is None


def test_opening_for_same_configuration_keeps_token():
    storage = MemoryStorage({"token": "T1", "expire": "5000", "uniqueId": "A"})
    store = TokenStore(storage, "A", clock=Clock(0))
    assert store.get() == "T1"


def test_token_without_owner_is_discarded():
    storage = MemoryStorage({"token": "T1", "expire": "5000"})
    store = TokenStore(storage, "A", clock=Clock(0))
    assert store.get() is None


@pytest.mark.parametrize("expire", [None, "", "soon", "NaN"])
def test_unparsable_expiry_is_absent(expire):
    storage = MemoryStorage({"token": "T1", "uniqueId": "A"})
    if expire is not None:
        storage.items["expire"] = expire
    store = TokenStore(storage, "A", clock=Clock(0))
    assert store.get() is None


def test_require_raises_access_denied_without_token():
    store = TokenStore(MemoryStorage(), "A", clock=Clock(0))
    with pytest.raises(AccessDenied):
        store.require()


def test_clear_removes_all_entries():
    storage = MemoryStorage()
    store = TokenStore(storage, "A", clock=Clock(0))
    store.store("T1", 100)
    store.clear()
    assert storage.items == {}
    assert store.get() is None


def test_json_file_storage_survives_restart(tmp_path):
    path = tmp_path / "session.json"
    TokenStore(JsonFileStorage(path), "A", clock=Clock(0)).store("T1", 100)

    reopened = TokenStore(JsonFileStorage(path), "A", clock=Clock(50))
    assert reopened.get() == "T1"

    TokenStore(JsonFileStorage(path), "B", clock=Clock(50))
    assert JsonFileStorage(path).items == {}


def test_json_file_storage_ignores_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json")
    store = TokenStore(JsonFileStorage(path), "A", clock=Clock(0))
    assert store.get() is None


class CountingFileStorage(JsonFileStorage):
    def __init__(self, path):
        self.writes = 0
        super().__init__(path)

    def _write(self):
        self.writes += 1
        super()._write()


def test_store_and_clear_each_write_the_file_once(tmp_path):
    path = tmp_path / "session.json"
    storage = CountingFileStorage(path)
    store = TokenStore(storage, "A", clock=Clock(0))
    assert storage.writes == 0

    store.store("T1", 100)
    assert storage.writes == 1
    assert json.loads(path.read_text()) == {"token": "T1", "expire": "100", "uniqueId": "A"}

    store.clear()
    assert storage.writes == 2
    assert json.loads(path.read_text()) == {}
