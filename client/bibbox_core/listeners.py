"""
Mouse/keyboard input listeners (pynput → queue, only bg threads).
PRIVACY: Only activity pulses and scanner keystrokes — nothing is stored.

Events put on the queue:
  ("pointer",)     any mouse move (throttled), click or scroll
  ("key", name, t)  a key press: single character, "enter" or a key name,
                   with the monotonic time it was pressed
"""

import time

from pynput import mouse, keyboard

from .config import log
from .constants import MOVE_THROTTLE_SEC


def key_name(key):
    """Normalize a pynput key to a single character or a lowercase name."""
    if key == keyboard.Key.enter:
        return "enter"
    char = getattr(key, "char", None)
    if char:
        return char
    name = getattr(key, "name", None)
    return name or ""


class InputListeners:
    """Owns the pynput listeners. The main loop drains the queue."""

    def __init__(self, input_queue):
        self._queue = input_queue
        self._mouse = None
        self._keyboard = None
        self._last_move_time = 0.0

    # ── Callbacks (pynput threads) ───────────────────────────

    def _on_move(self, x, y):
        now = time.monotonic()
        if (now - self._last_move_time) < MOVE_THROTTLE_SEC:
            return
        self._last_move_time = now
        self._queue.put(("pointer",))

    def _on_click(self, x, y, button, pressed):
        if pressed:
            self._queue.put(("pointer",))

    def _on_scroll(self, x, y, dx, dy):
        self._queue.put(("pointer",))

    def _on_press(self, key):
        self._queue.put(("key", key_name(key), time.monotonic()))

    # ── Lifecycle (main thread) ──────────────────────────────

    def _start_mouse(self):
        self._mouse = mouse.Listener(
            on_move=self._on_move, on_click=self._on_click, on_scroll=self._on_scroll,
        )
        self._mouse.daemon = True
        self._mouse.start()

    def _start_keyboard(self):
        self._keyboard = keyboard.Listener(on_press=self._on_press)
        self._keyboard.daemon = True
        self._keyboard.start()

    def start(self):
        self._start_mouse()
        self._start_keyboard()
        log.info("Input listeners started (activity + barcode scanner)")

    def stop(self):
        for listener in (self._mouse, self._keyboard):
            if listener is not None:
                listener.stop()

    def check_and_restart(self):
        """Restart listeners that died silently."""
        if self._mouse is not None and not self._mouse.is_alive():
            log.warning("Mouse listener died — restarting")
            self._start_mouse()
        if self._keyboard is not None and not self._keyboard.is_alive():
            log.warning("Keyboard listener died — restarting")
            self._start_keyboard()
