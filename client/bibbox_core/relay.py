"""
ActionRelay — forwards user actions to the engine with the current token.
"""

from .config import log
from .constants import ACTION_RESET
from .errors import AccessDenied


class ActionRelay:
    """
    As the machine state can only be changed by the engine, every user
    request goes through send(). Each successful send restarts the idle
    countdown.
    """

    def __init__(self, channel, token_store, idle_monitor, notify_access_denied):
        self._channel = channel
        self._token_store = token_store
        self._idle_monitor = idle_monitor
        self._notify_access_denied = notify_access_denied

    def send(self, action, data=None):
        """Send an action. Returns True if a message was emitted."""
        try:
            token = self._token_store.require()
        except AccessDenied as e:
            log.error("Action '%s' not sent: %s", action, e)
            self._notify_access_denied(e)
            return False

        self._idle_monitor.activity()

        if action == ACTION_RESET:
            self._channel.send_reset(token)
        else:
            self._channel.send_action(token, action, data)
        log.info("Action sent: %s", action)
        return True

    # Allows passing the relay itself wherever an action callback is expected.
    __call__ = send
