"""
SessionNegotiator — establishes, resumes and re-establishes the engine session.

  connect        → GetToken (no valid token) or ClientReady (token found)
  Token          → store it, then ClientReady
  reconnect      → ClientReady, or access denied if the token is gone
  Configuration  → replace box config, load translations, start idle monitor
  UpdateState    → replace machine state, restart idle countdown

Nothing is retried here; socket.io's reconnection is the only recovery.
"""

from .config import log, set_debug
from .constants import (
    EVENT_CONNECT, EVENT_RECONNECT, EVENT_DISCONNECT,
    MSG_TOKEN, MSG_CONFIGURATION, MSG_UPDATE_STATE,
)
from .errors import AccessDenied
from .state import MachineConfiguration, MachineState
from . import translations


class SessionNegotiator:

    def __init__(self, channel, token_store, session_state, idle_monitor,
                 notify_access_denied, on_change=None,
                 load_catalog=translations.load_catalog):
        self._channel = channel
        self._token_store = token_store
        self._session_state = session_state
        self._idle_monitor = idle_monitor
        self._notify_access_denied = notify_access_denied
        self._on_change = on_change
        self._load_catalog = load_catalog

    def start(self):
        """Register handlers on the channel."""
        self._channel.on(EVENT_CONNECT, self.on_connect)
        self._channel.on(EVENT_RECONNECT, self.on_reconnect)
        self._channel.on(EVENT_DISCONNECT, self.on_disconnect)
        self._channel.on(MSG_TOKEN, self.on_token)
        self._channel.on(MSG_CONFIGURATION, self.on_configuration)
        self._channel.on(MSG_UPDATE_STATE, self.on_update_state)

    # ─── Token handshake ─────────────────────────────────────

    def on_connect(self, _data=None):
        token = self._token_store.get()
        if token is None:
            log.info("No valid token — requesting one for %s", self._token_store.unique_id)
            self._channel.request_token(self._token_store.unique_id)
        else:
            # Token that was not expired was found locally; the client is ready.
            log.info("Resuming session with stored token")
            self._channel.client_ready(token)

    def on_token(self, data):
        data = data or {}
        token = data.get("token")
        if not token:
            log.error("Token message without token: %r", data)
            return
        self._token_store.store(token, data.get("expire"))
        self._session_state.access_denied = False
        self._channel.client_ready(token)
        self._changed()

    def on_reconnect(self, _data=None):
        try:
            token = self._token_store.require()
        except AccessDenied as e:
            log.error("Reconnected without a valid token: %s", e)
            self._notify_access_denied(e)
            return
        self._channel.client_ready(token)

    def on_disconnect(self, _data=None):
        log.info("Session suspended until the channel reconnects")

    # ─── Server snapshots ────────────────────────────────────

    def on_configuration(self, data):
        configuration = MachineConfiguration.from_dict(data)
        self._session_state.configuration = configuration
        log.info("Configuration received: %s (language=%s, timeout=%dms)",
                 configuration.name or configuration.unique_id,
                 configuration.default_language_code,
                 configuration.inactivity_timeout_ms)

        set_debug(configuration.debug_enabled)

        language, messages = self._load_catalog(configuration.default_language_code)
        self._session_state.language = language
        self._session_state.messages = messages

        self._idle_monitor.start(configuration.inactivity_timeout_ms)
        self._changed()

    def on_update_state(self, data):
        machine_state = MachineState.from_dict(data)
        self._session_state.machine_state = machine_state
        log.debug("Machine state: step=%s", machine_state.step)
        self._idle_monitor.activity()
        self._changed()

    def _changed(self):
        if self._on_change is not None:
            self._on_change(self._session_state)
