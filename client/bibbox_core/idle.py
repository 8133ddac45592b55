"""
IdleMonitor — resets the kiosk to its initial step after a period of inactivity.

Two states: ACTIVE (deadline armed) and IDLE (deadline fired, waiting for
activity). Exactly one deadline is pending at a time; it is armed through
a scheduler exposing Tk's after(ms, callback) / after_cancel(handle).

Activity pulses (state updates, outgoing actions, real input) are cheap:
a pulse within IDLE_DEBOUNCE_SEC of the last re-arm only records its
timestamp. When the deadline fires before a full timeout has passed since
the last pulse, it re-arms for the remainder, so the deadline stays exact.
"""

import time

from .config import log
from .constants import IDLE_DEBOUNCE_SEC
from .errors import AccessDenied

ACTIVE = "ACTIVE"
IDLE = "IDLE"


class IdleMonitor:

    def __init__(self, scheduler, session_state, token_store, channel,
                 notify_access_denied, clock=time.monotonic,
                 debounce_sec=IDLE_DEBOUNCE_SEC):
        self._scheduler = scheduler
        self._session_state = session_state
        self._token_store = token_store
        self._channel = channel
        self._notify_access_denied = notify_access_denied
        self._clock = clock
        self._debounce_sec = debounce_sec

        self._timeout_sec = None
        self._handle = None
        self._armed_at = 0.0
        self._last_activity = clock()
        self.state = ACTIVE

    @property
    def running(self):
        return self._timeout_sec is not None

    @property
    def pending(self):
        return self._handle is not None

    # ─── Control ─────────────────────────────────────────────

    def start(self, timeout_ms):
        """(Re)start monitoring with a new timeout; counts as activity."""
        self._timeout_sec = timeout_ms / 1000.0
        log.info("Idle monitor started (timeout=%dms)", timeout_ms)
        self._last_activity = self._clock()
        self.state = ACTIVE
        self._arm(self._timeout_sec)

    def stop(self):
        self._cancel()
        self._timeout_sec = None

    def activity(self):
        """Record a qualifying activity pulse and restart the countdown."""
        now = self._clock()
        self._last_activity = now
        self.state = ACTIVE
        if self._timeout_sec is None:
            return
        if self._handle is not None and (now - self._armed_at) < self._debounce_sec:
            return  # coalesced; _on_deadline re-arms for the remainder
        self._arm(self._timeout_sec)

    # ─── Deadline ────────────────────────────────────────────

    def _arm(self, delay_sec):
        self._cancel()
        self._armed_at = self._clock()
        self._handle = self._scheduler.after(max(1, round(delay_sec * 1000)), self._on_deadline)

    def _cancel(self):
        if self._handle is not None:
            self._scheduler.after_cancel(self._handle)
            self._handle = None

    def _on_deadline(self):
        self._handle = None
        if self._timeout_sec is None:
            return

        remaining_ms = round((self._last_activity + self._timeout_sec - self._clock()) * 1000)
        if remaining_ms > 0:
            self._arm(remaining_ms / 1000.0)
            return

        self.state = IDLE
        self._handle_idle()

    def _handle_idle(self):
        machine_state = self._session_state.machine_state
        if machine_state is None or machine_state.is_initial:
            # Already home: nothing to reset, keep counting.
            log.debug("Idle at initial step — restarting countdown")
            self.state = ACTIVE
            self._last_activity = self._clock()
            self._arm(self._timeout_sec)
            return

        try:
            token = self._token_store.require()
        except AccessDenied as e:
            log.error("Idle reset aborted: %s", e)
            self._notify_access_denied(e)
            return

        log.info("Idle timeout at step '%s' — sending reset", machine_state.step)
        self._channel.send_reset(token)
