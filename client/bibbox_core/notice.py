"""
AccessDeniedNotice — blocking fullscreen notice shown when the kiosk has no valid token.

Created and managed EXCLUSIVELY on the Tkinter main thread. There is no
dismiss button: an operator has to re-provision the kiosk or restart it.
"""

import tkinter as tk

from .constants import THEME
from .config import log
from .translations import message


class AccessDeniedNotice:

    def __init__(self, root, session_state):
        self._root = root
        self._session_state = session_state
        self._toplevel = None

    @property
    def is_visible(self):
        return self._toplevel is not None

    def show(self, error=None):
        """Show the notice. Repeated calls while visible are ignored."""
        if self._toplevel is not None:
            return
        try:
            self._build_ui(error)
            log.info("Access denied notice shown")
        except tk.TclError as e:
            log.error("Failed to build access denied notice: %s", e, exc_info=True)
            self._toplevel = None

    def hide(self):
        if self._toplevel is not None:
            try:
                self._toplevel.destroy()
            except tk.TclError:
                pass
            self._toplevel = None

    def _build_ui(self, error):
        messages = self._session_state.messages
        top = tk.Toplevel(self._root)
        self._toplevel = top
        top.title(message(messages, "access-denied-title", "Access denied"))
        top.configure(bg=THEME["bg_darkest"])
        top.attributes("-fullscreen", True)
        top.attributes("-topmost", True)
        top.protocol("WM_DELETE_WINDOW", lambda: None)

        header = tk.Frame(top, bg=THEME["error"], height=80)
        header.pack(fill="x")
        header.pack_propagate(False)
        tk.Label(
            header, text="⛔  " + message(messages, "access-denied-title", "Access denied"),
            font=("Segoe UI", 20, "bold"), fg="white", bg=THEME["error"],
        ).pack(expand=True)

        body = tk.Frame(top, bg=THEME["bg_darkest"], padx=60, pady=40)
        body.pack(fill="both", expand=True)
        tk.Label(
            body,
            text=message(messages, "access-denied-text",
                         "This kiosk is not authorized. Please contact a librarian."),
            font=("Segoe UI", 16), fg=THEME["text_primary"], bg=THEME["bg_darkest"],
            wraplength=900, justify="center",
        ).pack(pady=(0, 20))
        if error is not None:
            tk.Label(
                body, text=str(error), font=("Segoe UI", 11),
                fg=THEME["text_muted"], bg=THEME["bg_darkest"],
            ).pack()

        top.grab_set()
