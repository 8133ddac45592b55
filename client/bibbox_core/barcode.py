"""
Barcode scanner input: hand scanners type the code as fast keystrokes
followed by Enter.

BarcodeScanner  → assembles keystrokes into codes (gap > timeout restarts)
BarcodeHandler  → turns command codes into relayed actions, card scans into logins
"""

import time

from .config import log
from .constants import (
    BARCODE_SCANNING_TIMEOUT_SEC, BARCODE_COMMAND_LENGTH, BARCODE_COMMANDS,
    STEP_BARCODE_ACTIONS, ACTION_RESET,
)
from .login import LoginFlow


class BarcodeScanner:
    """Collects characters; calls on_code(code) when Enter ends a scan."""

    def __init__(self, on_code, timeout_sec=BARCODE_SCANNING_TIMEOUT_SEC, clock=time.monotonic):
        self._on_code = on_code
        self._timeout_sec = timeout_sec
        self._clock = clock
        self._buffer = []
        self._last_key_time = 0.0

    def on_key(self, key, pressed_at=None):
        """Feed one key: a single character, or "enter".

        pressed_at is the monotonic time of the key press, when the caller
        recorded it. Otherwise the scanner clock is read.
        """
        now = self._clock() if pressed_at is None else pressed_at
        if self._buffer and (now - self._last_key_time) > self._timeout_sec:
            # Gap too long for a scanner; start over.
            self._buffer = []
        self._last_key_time = now

        if key == "enter":
            code = "".join(self._buffer)
            self._buffer = []
            if code:
                self._on_code(code)
            return

        if len(key) == 1:
            self._buffer.append(key)


class BarcodeHandler:
    """
    Maps command barcodes to actions allowed in the current step. Any other
    code is a library card and goes to the login flow.
    """

    def __init__(self, send_action, session_state, login=None):
        self._send_action = send_action
        self._session_state = session_state
        self.login = login if login is not None else LoginFlow(send_action, session_state)

    def allowed_actions(self):
        machine_state = self._session_state.machine_state
        step = machine_state.step if machine_state is not None else None
        return STEP_BARCODE_ACTIONS.get(step, (ACTION_RESET,))

    def __call__(self, code):
        if len(code) != BARCODE_COMMAND_LENGTH:
            return self.login.on_scan(code)

        action = BARCODE_COMMANDS.get(code)
        if action is None:
            log.info("Unknown barcode command %s", code)
            return False

        if action not in self.allowed_actions():
            log.info("Barcode command %s (%s) ignored in this step", code, action)
            return False

        return self._send_action(action)
