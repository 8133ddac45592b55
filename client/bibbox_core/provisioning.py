"""
Kiosk provisioning: engine reachability check + first-run GUI setup dialog.

An operator enters the engine URL and the box configuration's unique id
(shown in the admin's box configuration list). Both are saved to
config.json; the session token itself is negotiated over the channel.
"""

import tkinter as tk
import requests

from .constants import CLIENT_VERSION, PROBE_TIMEOUT_SEC, THEME
from .config import log, save_config
from . import http_client


# ─── Engine probe + provisioning ─────────────────────────────────

def probe_engine(server_url):
    """Check that a socket.io endpoint answers at server_url. Raises on failure."""
    url = f"{server_url.rstrip('/')}/socket.io/"
    resp = http_client.http.get(
        url, params={"EIO": "4", "transport": "polling"}, timeout=PROBE_TIMEOUT_SEC,
    )
    resp.raise_for_status()
    log.info("Engine reachable at %s", server_url)


def provision(server_url, unique_id):
    """Validate, probe and persist a kiosk config. Returns config dict."""
    server_url = (server_url or "").strip().rstrip("/")
    unique_id = (unique_id or "").strip()
    if not server_url:
        raise ValueError("Engine URL is required.")
    if not unique_id:
        raise ValueError("Box configuration id is required.")

    log.info("Provisioning kiosk for box %s at %s ...", unique_id, server_url)
    probe_engine(server_url)

    config = {
        "serverUrl": server_url,
        "uniqueId": unique_id,
        "clientVersion": CLIENT_VERSION,
    }
    save_config(config)
    log.info("Provisioned successfully! Box configuration: %s", unique_id)
    return config


# ─── GUI Setup Dialog ────────────────────────────────────────────

def gui_provision():
    """Show a GUI dialog for first-time setup. Returns config or None."""
    result = {"config": None}

    root = tk.Tk()
    root.title("Bibbox — Setup")
    root.geometry("460x400")
    root.resizable(False, False)
    root.configure(bg=THEME["bg_darkest"])
    root.attributes("-topmost", True)

    # Center on screen
    root.update_idletasks()
    x = (root.winfo_screenwidth() // 2) - 230
    y = (root.winfo_screenheight() // 2) - 200
    root.geometry(f"460x400+{x}+{y}")

    # ─── Header ──────────────────────────────
    header = tk.Frame(root, bg=THEME["header_bg"], height=80)
    header.pack(fill="x")
    header.pack_propagate(False)
    tk.Label(header, text="Bibbox Kiosk Setup",
             font=("Segoe UI", 14, "bold"), fg="white",
             bg=THEME["header_bg"]).pack(expand=True)

    # ─── Body ─────────────────────────────────
    body = tk.Frame(root, bg=THEME["bg_darkest"], padx=35, pady=25)
    body.pack(fill="both", expand=True)

    def field(label, initial=""):
        tk.Label(body, text=label, font=("Segoe UI", 11, "bold"),
                 bg=THEME["bg_darkest"], fg=THEME["text_primary"]).pack(anchor="w")
        var = tk.StringVar(value=initial)
        tk.Entry(body, textvariable=var, font=("Segoe UI", 12),
                 bg=THEME["bg_input"], fg=THEME["text_primary"],
                 insertbackground=THEME["text_primary"],
                 relief="solid", borderwidth=1,
                 highlightbackground=THEME["border"],
                 highlightcolor=THEME["primary"]).pack(fill="x", pady=(4, 14))
        return var

    url_var = field("Engine URL", "http://localhost:3010")
    id_var = field("Box configuration ID")

    status = tk.Label(body, text="", font=("Segoe UI", 10), bg=THEME["bg_darkest"])
    status.pack(pady=(0, 10))

    def on_connect():
        status.config(text="Connecting...", fg=THEME["primary"])
        root.update()

        try:
            result["config"] = provision(url_var.get(), id_var.get())
            status.config(text="Saved! Starting kiosk...", fg=THEME["success"])
            root.after(800, root.quit)
        except ValueError as e:
            status.config(text=str(e), fg=THEME["error"])
        except requests.ConnectionError:
            status.config(text=f"Cannot connect to {url_var.get().strip()}. Check network.",
                          fg=THEME["error"])
        except requests.RequestException as e:
            status.config(text=f"Error: {str(e)[:80]}", fg=THEME["error"])

    tk.Button(body, text="Connect & Start", font=("Segoe UI", 12, "bold"),
              bg=THEME["primary"], fg="white",
              activebackground=THEME["primary_hover"],
              activeforeground="white",
              relief="flat", padx=20, pady=10, cursor="hand2",
              command=on_connect).pack(fill="x")

    root.protocol("WM_DELETE_WINDOW", root.quit)
    root.mainloop()

    try:
        root.destroy()
    except tk.TclError:
        pass

    return result["config"]
