"""
TokenStore — the session token, its expiry and the box configuration it belongs to.

Three key/value entries (token, expire, uniqueId) that are always written
and cleared together. The storage medium is injected:
  JsonFileStorage → session.json next to the client config (production)
  MemoryStorage   → plain dict (tests)
"""

import json
import math
import time

from .config import log
from .errors import AccessDenied

KEY_TOKEN = "token"
KEY_EXPIRE = "expire"
KEY_UNIQUE_ID = "uniqueId"


# ─── Storage media ───────────────────────────────────────────────

class MemoryStorage:
    """In-memory key/value storage."""

    def __init__(self, items=None):
        self.items = dict(items or {})

    def get_item(self, key):
        return self.items.get(key)

    def set_item(self, key, value):
        self.items[key] = str(value)

    def set_items(self, values):
        """Set several keys as one change."""
        for key, value in values.items():
            self.items[key] = str(value)

    def remove_item(self, key):
        self.items.pop(key, None)

    def remove_items(self, keys):
        for key in keys:
            self.items.pop(key, None)


class JsonFileStorage(MemoryStorage):
    """Key/value storage persisted as a small JSON file (rewritten on every change)."""

    def __init__(self, path):
        self._path = path
        super().__init__(self._read())

    def _read(self):
        try:
            if self._path.exists():
                data = json.loads(self._path.read_text(encoding="utf-8"))
                if isinstance(data, dict):
                    return data
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Session file unreadable (%s) — starting empty", e)
        return {}

    def _write(self):
        try:
            self._path.write_text(json.dumps(self.items), encoding="utf-8")
        except OSError as e:
            log.warning("Failed to persist session file: %s", e)

    def set_item(self, key, value):
        super().set_item(key, value)
        self._write()

    def set_items(self, values):
        super().set_items(values)
        self._write()

    def remove_item(self, key):
        if key in self.items:
            super().remove_item(key)
            self._write()

    def remove_items(self, keys):
        if any(key in self.items for key in keys):
            super().remove_items(keys)
            self._write()


# ─── Token store ─────────────────────────────────────────────────

class TokenStore:
    """
    Token persistence scoped to one box configuration.

    Opening the store for a different uniqueId than the one that owns the
    stored token clears it first, so a token never leaks across machines.
    """

    def __init__(self, storage, unique_id, clock=time.time):
        self._storage = storage
        self._unique_id = unique_id
        self._clock = clock

        owner = storage.get_item(KEY_UNIQUE_ID)
        if owner != unique_id:
            if owner is not None:
                log.info("Stored token belongs to %s, not %s — discarding", owner, unique_id)
            self.clear()

    @property
    def unique_id(self):
        return self._unique_id

    def get(self):
        """Return the token if present and not expired, else None."""
        try:
            expire = int(self._storage.get_item(KEY_EXPIRE))
        except (TypeError, ValueError):
            return None

        now = math.floor(self._clock())
        if expire <= now:
            return None

        return self._storage.get_item(KEY_TOKEN)

    def require(self):
        """Return the valid token or raise AccessDenied."""
        token = self.get()
        if token is None:
            raise AccessDenied()
        return token

    def store(self, token, expire):
        self._storage.set_items({
            KEY_TOKEN: token,
            KEY_EXPIRE: expire,
            KEY_UNIQUE_ID: self._unique_id,
        })
        log.info("Token stored for %s (expires %s)", self._unique_id, expire)

    def clear(self):
        self._storage.remove_items((KEY_TOKEN, KEY_EXPIRE, KEY_UNIQUE_ID))
