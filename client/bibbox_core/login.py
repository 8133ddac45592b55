"""
Patron login from the kiosk: method choice, card scan and PIN entry.

LoginFlow is driven from the Tkinter main thread only:
  on_scan(code)   non-command barcode seen by the scanner
  on_key(key)     raw keystroke, consumed while a PIN is being typed
  select_method() patron picked a login method on the screen
"""

from .config import log
from .constants import (
    ACTION_LOGIN, ACTION_SELECT_LOGIN_METHOD, LOGIN_METHOD_STEPS,
    STEP_LOGIN_SCAN_USERNAME, STEP_LOGIN_SCAN_USERNAME_PASSWORD,
)


def offered_login_methods(configuration):
    """Login steps the box configuration offers, in display order."""
    if configuration is None:
        return []
    methods = configuration.login_session_methods
    return [step for method, step in LOGIN_METHOD_STEPS if method in methods]


class LoginFlow:

    def __init__(self, send_action, session_state):
        self._send_action = send_action
        self._session_state = session_state
        self._username = None
        self._password = []

    @property
    def step(self):
        machine_state = self._session_state.machine_state
        return machine_state.step if machine_state is not None else None

    @property
    def awaiting_password(self):
        return self._username is not None and self.step == STEP_LOGIN_SCAN_USERNAME_PASSWORD

    def sync(self):
        """Forget a half-entered login once the machine has left the password step."""
        if self._username is not None and self.step != STEP_LOGIN_SCAN_USERNAME_PASSWORD:
            self._clear()

    def _clear(self):
        self._username = None
        self._password = []

    # ─── Method choice ───────────────────────────────────────

    def methods(self):
        return offered_login_methods(self._session_state.configuration)

    def select_method(self, method):
        if method not in self.methods():
            log.warning("Login method %s is not offered by this box", method)
            return False
        return self._send_action(ACTION_SELECT_LOGIN_METHOD, {"loginMethod": method})

    # ─── Card scan and PIN ───────────────────────────────────

    def on_scan(self, code):
        """A library card was scanned. Returns True if it was used."""
        self.sync()
        step = self.step
        if step == STEP_LOGIN_SCAN_USERNAME:
            return self._send_action(ACTION_LOGIN, {"username": code})
        if step == STEP_LOGIN_SCAN_USERNAME_PASSWORD:
            self._username = code
            self._password = []
            log.info("Card scanned, waiting for PIN")
            return True
        log.debug("Scanned non-command barcode outside login (%d chars)", len(code))
        return False

    def on_key(self, key):
        """Collect the PIN. Returns True if the key was consumed."""
        self.sync()
        if not self.awaiting_password:
            return False

        if key == "enter":
            username, password = self._username, "".join(self._password)
            self._clear()
            self._send_action(ACTION_LOGIN, {"username": username, "password": password})
        elif key == "backspace":
            if self._password:
                self._password.pop()
        elif len(key) == 1:
            self._password.append(key)
        return True
