"""
Bibbox — Self-service Library Kiosk Client
===========================================
Connects to the bibbox engine over socket.io, negotiates a session token
for this box configuration, shows the machine state, relays patron
actions and resets the kiosk after the configured inactivity timeout.

Usage:
    python bibbox.py
"""

import os
import sys

# ─── SSL CA bundle fix (must run before requests is imported) ────
# PyInstaller builds unpack certifi's bundle into a temp dir; point
# requests at it explicitly so HTTPS to the engine verifies.
if getattr(sys, "frozen", False) and not os.environ.get("REQUESTS_CA_BUNDLE"):
    import certifi
    os.environ["REQUESTS_CA_BUNDLE"] = certifi.where()

from bibbox_core.runner import run_with_auto_restart


if __name__ == "__main__":
    run_with_auto_restart()
