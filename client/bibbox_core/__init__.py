"""
bibbox_core — Self-service Library Kiosk Client v1.0
====================================================
Architecture: Tkinter main-thread event loop. Zero busy-wait.

  constants.py    → Version, wire messages, actions, barcode commands, theme
  config.py       → Paths, logging, config load/save, helpers
  http_client.py  → HTTP session with retry/pooling + SSL fix
  errors.py       → AccessDenied
  state.py        → MachineConfiguration, MachineState, SessionState
  token_store.py  → TokenStore (token + expiry scoped to a box configuration)
  translations.py → Language bundle loader (lang/*.json)
  channel.py      → Channel message contract + python-socketio transport
  idle.py         → IdleMonitor (single cancellable deadline, debounced)
  relay.py        → ActionRelay (user actions → engine, with token)
  session.py      → SessionNegotiator (token handshake, config, state)
  login.py        → LoginFlow (method choice, card scan, PIN entry)
  barcode.py      → BarcodeScanner + BarcodeHandler (command cards, card scans)
  listeners.py    → InputListeners (pynput → queue, only bg threads)
  notice.py       → AccessDeniedNotice (blocking Toplevel)
  screen.py       → KioskScreen (status view, login method buttons)
  provisioning.py → Engine probe + first-run setup dialog
  app.py          → KioskApp (Tk main loop, root.after scheduling)
  runner.py       → main() + auto-restart wrapper
"""
