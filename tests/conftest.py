import os
import tempfile

# Keep config/log/session files out of the source tree.
os.environ.setdefault("BIBBOX_HOME", tempfile.mkdtemp(prefix="bibbox-test-"))

import pytest

from bibbox_core.channel import Channel
from bibbox_core.idle import IdleMonitor
from bibbox_core.relay import ActionRelay
from bibbox_core.session import SessionNegotiator
from bibbox_core.state import SessionState
from bibbox_core.token_store import MemoryStorage, TokenStore

EPOCH = 1_700_000_000


class FakeChannel(Channel):
    """In-memory channel that records every client→server message."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def emit(self, event, payload):
        self.sent.append((event, payload))

    def events(self):
        return [event for event, _ in self.sent]


class FakeScheduler:
    """Tk-like after/after_cancel driven by a manual millisecond clock."""

    def __init__(self):
        self.now_ms = 0
        self.armed = 0
        self._timers = {}
        self._next_handle = 0

    def clock(self):
        return self.now_ms / 1000.0

    def time(self):
        return EPOCH + self.now_ms / 1000.0

    def after(self, ms, callback):
        self._next_handle += 1
        self.armed += 1
        self._timers[self._next_handle] = (self.now_ms + ms, callback)
        return self._next_handle

    def after_cancel(self, handle):
        self._timers.pop(handle, None)

    @property
    def pending(self):
        return len(self._timers)

    def advance(self, ms):
        target = self.now_ms + ms
        while True:
            due = sorted((when, handle) for handle, (when, _) in self._timers.items() if when <= target)
            if not due:
                break
            when, handle = due[0]
            self.now_ms = when
            _, callback = self._timers.pop(handle)
            callback()
        self.now_ms = target


class Kiosk:
    """The client-side session core wired against fakes."""

    def __init__(self, unique_id="A", storage=None, on_change=None):
        self.unique_id = unique_id
        self.scheduler = FakeScheduler()
        self.channel = FakeChannel()
        self.storage = storage if storage is not None else MemoryStorage()
        self.token_store = TokenStore(self.storage, unique_id, clock=self.scheduler.time)
        self.state = SessionState()
        self.denied = []
        self.idle = IdleMonitor(
            self.scheduler, self.state, self.token_store, self.channel,
            self.denied.append, clock=self.scheduler.clock,
        )
        self.relay = ActionRelay(self.channel, self.token_store, self.idle, self.denied.append)
        self.negotiator = SessionNegotiator(
            self.channel, self.token_store, self.state, self.idle, self.denied.append,
            on_change=on_change,
        )
        self.negotiator.start()

    def give_token(self, token="T1", ttl=3600):
        self.token_store.store(token, EPOCH + self.scheduler.now_ms // 1000 + ttl)

    def configure(self, **overrides):
        data = {"uniqueId": self.unique_id, "defaultLanguageCode": "en", "inactivityTimeOut": 10000}
        data.update(overrides)
        self.channel.dispatch("Configuration", data)

    def update_state(self, step="initial", **extra):
        data = {"step": step}
        data.update(extra)
        self.channel.dispatch("UpdateState", data)


@pytest.fixture
def kiosk():
    return Kiosk()


@pytest.fixture
def scheduler():
    return FakeScheduler()
