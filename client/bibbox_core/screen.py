"""
KioskScreen — fullscreen status view of the current machine state.

Shows the translated header/subheader for the current step and, when a
patron is logged in, the counts of their loans, reservations and
materials ready for pickup. Rendered only on the Tkinter main thread.
"""

import tkinter as tk

from .constants import THEME, STEP_CHANGE_LOGIN_METHOD
from .login import offered_login_methods
from .translations import message


class KioskScreen:

    def __init__(self, root, on_select_login_method=None):
        self._root = root
        self._on_select_login_method = on_select_login_method
        self._choices = None
        root.title("Bibbox")
        root.configure(bg=THEME["bg_darkest"])
        root.attributes("-fullscreen", True)

        header = tk.Frame(root, bg=THEME["header_bg"], height=120)
        header.pack(fill="x")
        header.pack_propagate(False)
        self._header = tk.Label(header, text="", font=("Segoe UI", 26, "bold"),
                                fg="white", bg=THEME["header_bg"])
        self._header.pack(expand=True)

        body = tk.Frame(root, bg=THEME["bg_darkest"], padx=60, pady=30)
        body.pack(fill="both", expand=True)
        self._subheader = tk.Label(body, text="", font=("Segoe UI", 16),
                                   fg=THEME["text_secondary"], bg=THEME["bg_darkest"])
        self._subheader.pack(anchor="w", pady=(0, 24))
        self._details = tk.Label(body, text="", font=("Segoe UI", 14),
                                 fg=THEME["text_primary"], bg=THEME["bg_darkest"],
                                 justify="left")
        self._details.pack(anchor="w")
        self._choice_frame = tk.Frame(body, bg=THEME["bg_darkest"])
        self._choice_frame.pack(anchor="w", pady=(24, 0))

    def render(self, session_state):
        messages = session_state.messages
        machine_state = session_state.machine_state
        if not session_state.ready:
            self._header.config(text=message(messages, "loading", "Loading..."))
            self._subheader.config(text="")
            self._details.config(text="")
            self._show_choices(messages, [])
            return

        step = machine_state.step
        self._header.config(text=message(messages, f"step-{step}-header", step))
        self._subheader.config(text=message(messages, f"step-{step}-subheader", ""))

        lines = []
        if machine_state.user:
            lines = [
                "%s: %d" % (message(messages, "status-header-current-loans"),
                            len(machine_state.loaned_items)),
                "%s: %d" % (message(messages, "status-header-reservations"),
                            len(machine_state.unavailable_hold_items)),
                "%s: %d" % (message(messages, "status-header-ready-for-pickup"),
                            len(machine_state.hold_items)),
            ]
            if machine_state.fine_items:
                lines.append(message(messages, "status-banner-header-fined-book"))
            if machine_state.overdue_items or machine_state.recall_items:
                lines.append(message(messages, "status-banner-header-overdue-book"))
        self._details.config(text="\n".join(lines))

        choices = []
        if step == STEP_CHANGE_LOGIN_METHOD:
            choices = offered_login_methods(session_state.configuration)
        self._show_choices(messages, choices)

    def _show_choices(self, messages, choices):
        """One button per login method; rebuilt only when the offer changes."""
        choices = tuple(choices)
        if (choices, messages) == self._choices:
            return
        self._choices = (choices, messages)
        for child in self._choice_frame.winfo_children():
            child.destroy()

        for method in choices:
            if len(choices) > 1:
                label = message(messages, f"change-login-method-{method}", method)
            else:
                label = message(messages, "change-login-method-start-here", "Start here")
            tk.Button(
                self._choice_frame, text=label, font=("Segoe UI", 16, "bold"),
                bg=THEME["primary"], fg="white", activebackground=THEME["primary_hover"],
                relief="flat", padx=30, pady=14, cursor="hand2",
                command=lambda m=method: self._select(m),
            ).pack(side="left", padx=(0, 24))

    def _select(self, method):
        if self._on_select_login_method is not None:
            self._on_select_login_method(method)
