"""
KioskApp — the main Tkinter application.

Session negotiation, idle reset, action relay and barcode handling all run
inside Tkinter's event loop via root.after(). Zero busy-wait loops.

Background threads: ONLY the socket.io client + pynput listeners.
None of them touch Tkinter or the session; they feed queues.
"""

import queue
import tkinter as tk

from .constants import CLIENT_VERSION, CHANNEL_POLL_MS, INPUT_POLL_MS
from .config import log, safe_print, SESSION_FILE
from .state import SessionState
from .token_store import TokenStore, JsonFileStorage
from .channel import SocketIOChannel
from .idle import IdleMonitor
from .relay import ActionRelay
from .session import SessionNegotiator
from .barcode import BarcodeScanner, BarcodeHandler
from .listeners import InputListeners
from .notice import AccessDeniedNotice
from .screen import KioskScreen
from . import http_client


class KioskApp:
    """
    Owns the Tk main loop. Schedules everything via root.after():
      _poll_channel()    — dispatches socket.io events              (every 50ms)
      _poll_input()      — drains pynput queue, activity + scanner  (every 200ms)
      _check_listeners() — restarts dead pynput listeners           (every 30s)

    The idle deadline is armed on the same root (root.after/after_cancel).
    """

    def __init__(self, config):
        self._config = config
        self.state = SessionState()
        self._token_store = TokenStore(JsonFileStorage(SESSION_FILE), config["uniqueId"])
        self._channel = SocketIOChannel(config["serverUrl"], http_session=http_client.http)
        self._input_queue = queue.Queue()
        self._listeners = InputListeners(self._input_queue)
        self._root = None
        self._screen = None
        self._notice = None
        self._idle = None
        self._relay = None
        self._scanner = None
        self._login = None

    def run(self):
        """Start the kiosk. Blocks on Tk mainloop. Call from main thread."""
        self._root = tk.Tk()
        self._screen = KioskScreen(self._root, on_select_login_method=self._select_login_method)
        self._notice = AccessDeniedNotice(self._root, self.state)

        self._idle = IdleMonitor(
            self._root, self.state, self._token_store, self._channel, self._on_access_denied,
        )
        self._relay = ActionRelay(self._channel, self._token_store, self._idle, self._on_access_denied)
        barcode_handler = BarcodeHandler(self._relay, self.state)
        self._login = barcode_handler.login
        self._scanner = BarcodeScanner(barcode_handler)
        SessionNegotiator(
            self._channel, self._token_store, self.state, self._idle,
            self._on_access_denied, on_change=self._on_session_change,
        ).start()

        self._screen.render(self.state)
        self._listeners.start()
        self._channel.start()

        self._root.after(CHANNEL_POLL_MS, self._poll_channel)
        self._root.after(INPUT_POLL_MS, self._poll_input)
        self._root.after(30000, self._check_listeners)

        log.info("v%s started (box=%s, engine=%s)",
                 CLIENT_VERSION, self._config["uniqueId"], self._config["serverUrl"])
        safe_print("Kiosk running.\n")

        try:
            self._root.mainloop()
        finally:
            self._listeners.stop()
            self._channel.stop()
            log.info("KioskApp shut down.")

    # ─── Channel polling (every 50ms) ────────────────────────

    def _poll_channel(self):
        try:
            self._channel.poll()
        except Exception as e:
            log.error("_poll_channel error: %s", e, exc_info=True)
        self._root.after(CHANNEL_POLL_MS, self._poll_channel)

    # ─── Input polling (every 200ms) ─────────────────────────

    def _poll_input(self):
        try:
            self._drain_input()
        except Exception as e:
            log.error("_poll_input error: %s", e, exc_info=True)
        self._root.after(INPUT_POLL_MS, self._poll_input)

    def _drain_input(self):
        had_input = False
        batch = 0
        while batch < 200:
            try:
                event = self._input_queue.get_nowait()
            except queue.Empty:
                break
            batch += 1
            had_input = True
            if event[0] == "key":
                _, key, pressed_at = event
                if not self._login.on_key(key):
                    self._scanner.on_key(key, pressed_at)

        if had_input:
            self._idle.activity()

    # ─── Session callbacks ───────────────────────────────────

    def _on_session_change(self, state):
        self._login.sync()
        if not state.access_denied:
            self._notice.hide()
        self._screen.render(state)

    def _on_access_denied(self, error):
        self.state.access_denied = True
        self._notice.show(error)

    def _select_login_method(self, method):
        self._login.select_method(method)

    # ─── Listener watchdog (every 30s) ───────────────────────

    def _check_listeners(self):
        try:
            self._listeners.check_and_restart()
        except Exception as e:
            log.error("Listener watchdog error: %s", e)
        self._root.after(30000, self._check_listeners)
