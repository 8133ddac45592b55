"""
Entry point and auto-restart wrapper.

SSL CA bundle fix happens in bibbox.py (before imports).
"""

import sys
import time

from .constants import CLIENT_VERSION
from .config import log, safe_print, load_config
from . import http_client
from .provisioning import gui_provision
from .app import KioskApp


def main():
    """Primary kiosk client entry point."""
    safe_print("Bibbox kiosk client v" + CLIENT_VERSION)
    safe_print()

    config = load_config()

    if not config:
        config = gui_provision()
        if not config:
            sys.exit(1)
    else:
        log.info("Loaded config for box %s (engine: %s)", config["uniqueId"], config["serverUrl"])

    KioskApp(config).run()


def run_with_auto_restart():
    """
    Wrapper that auto-restarts on crash. Never gives up.
    Crash counter resets if the client ran for 2+ minutes (not a boot-loop).
    """
    crash_count = 0
    crash_window = 120
    max_rapid_crashes = 10

    while True:
        start_time = time.time()
        try:
            main()
            break
        except KeyboardInterrupt:
            safe_print("\nKiosk client stopped by user.")
            break
        except SystemExit as e:
            if str(e) == "0":
                break
            log.error("Kiosk client SystemExit: %s", e)
            break
        except Exception as e:
            elapsed = time.time() - start_time
            log.error("Kiosk client crashed after %.0fs: %s", elapsed, e, exc_info=True)

            if elapsed > crash_window:
                crash_count = 0
            crash_count += 1

            if crash_count >= max_rapid_crashes:
                wait = 120
                log.warning("Many rapid crashes (%d). Waiting %ds...", crash_count, wait)
            else:
                wait = min(10 * crash_count, 60)

            log.info("Restarting in %ds (crash %d)...", wait, crash_count)
            time.sleep(wait)

            http_client.http = http_client.reset_session(http_client.http)
