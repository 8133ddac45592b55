"""
State channel — the message contract between the kiosk client and the engine.

Channel          → handler registry + typed senders for the fixed vocabulary
SocketIOChannel  → python-socketio transport (connect/reconnect/emit)

socket.io callbacks run on the client's background threads. They never
call handlers directly: every event is queued and dispatched by poll(),
which the app calls from the Tkinter main thread (via root.after).
"""

import queue
import threading

import socketio
from socketio.exceptions import SocketIOError, ConnectionError as SocketIOConnectionError

from .config import log
from .constants import (
    MSG_GET_TOKEN, MSG_TOKEN, MSG_CLIENT_READY, MSG_CONFIGURATION,
    MSG_UPDATE_STATE, MSG_CLIENT_EVENT, EVENT_NAME_ACTION, EVENT_NAME_RESET,
    EVENT_CONNECT, EVENT_RECONNECT, EVENT_DISCONNECT,
    RECONNECT_DELAY_SEC, RECONNECT_DELAY_MAX_SEC,
)

SERVER_MESSAGES = (MSG_TOKEN, MSG_CONFIGURATION, MSG_UPDATE_STATE)


class Channel:
    """Handler registration and the client→server message vocabulary."""

    def __init__(self):
        self._handlers = {}

    def on(self, event, handler):
        self._handlers.setdefault(event, []).append(handler)

    def dispatch(self, event, data=None):
        """Run the handlers registered for event, in registration order."""
        handlers = self._handlers.get(event, ())
        if not handlers:
            log.debug("No handler for %s", event)
        for handler in handlers:
            handler(data)

    def emit(self, event, payload):
        raise NotImplementedError

    # ─── Client → server messages ────────────────────────────

    def request_token(self, unique_id):
        self.emit(MSG_GET_TOKEN, {"uniqueId": unique_id})

    def client_ready(self, token):
        self.emit(MSG_CLIENT_READY, {"token": token})

    def send_action(self, token, action, data=None):
        self.emit(MSG_CLIENT_EVENT, {
            "name": EVENT_NAME_ACTION,
            "action": action,
            "token": token,
            "data": data,
        })

    def send_reset(self, token):
        self.emit(MSG_CLIENT_EVENT, {"name": EVENT_NAME_RESET, "token": token})


class SocketIOChannel(Channel):
    """
    Channel over a python-socketio client.

    The first successful connection is surfaced as "connect", every later
    one (after socket.io's own reconnection) as "reconnect". Sends are
    fire-and-forget: a send while disconnected is logged and dropped.
    """

    def __init__(self, server_url, http_session=None):
        super().__init__()
        self._server_url = server_url
        self._events = queue.Queue()
        self._connected_once = False
        self._sio = socketio.Client(
            reconnection=True,
            reconnection_attempts=0,
            reconnection_delay=RECONNECT_DELAY_SEC,
            reconnection_delay_max=RECONNECT_DELAY_MAX_SEC,
            http_session=http_session,
            handle_sigint=False,
        )
        self._sio.on("connect", self._on_connect)
        self._sio.on("disconnect", self._on_disconnect)
        for name in SERVER_MESSAGES:
            self._sio.on(name, self._make_receiver(name))

    @property
    def connected(self):
        return self._sio.connected

    # ─── Background-thread callbacks (queue only) ────────────

    def _on_connect(self):
        event = EVENT_RECONNECT if self._connected_once else EVENT_CONNECT
        self._connected_once = True
        log.info("Channel %s to %s", "reconnected" if event == EVENT_RECONNECT else "connected",
                 self._server_url)
        self._events.put((event, None))

    def _on_disconnect(self, *args):
        log.warning("Channel disconnected%s", f" ({args[0]})" if args else "")
        self._events.put((EVENT_DISCONNECT, None))

    def _make_receiver(self, name):
        def receive(data=None):
            self._events.put((name, data))
        return receive

    # ─── Lifecycle ───────────────────────────────────────────

    def start(self):
        """Connect in a daemon thread. socket.io keeps retrying until it succeeds."""
        def do_connect():
            try:
                self._sio.connect(self._server_url, retry=True)
            except SocketIOConnectionError as e:
                log.error("Channel connect to %s failed: %s", self._server_url, e)

        threading.Thread(target=do_connect, daemon=True).start()

    def stop(self):
        try:
            self._sio.disconnect()
        except SocketIOError as e:
            log.warning("Channel disconnect error: %s", e)

    # ─── Main-thread side ────────────────────────────────────

    def poll(self, max_batch=100):
        """Dispatch queued events on the calling (main) thread. Returns count."""
        handled = 0
        while handled < max_batch:
            try:
                event, data = self._events.get_nowait()
            except queue.Empty:
                break
            handled += 1
            self.dispatch(event, data)
        return handled

    def emit(self, event, payload):
        try:
            self._sio.emit(event, payload)
            log.debug("Sent %s", event)
        except SocketIOError as e:
            log.warning("Send %s dropped (channel not connected): %s", event, e)
