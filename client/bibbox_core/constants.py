"""
Constants, wire message names, action names, barcode commands, and theme.
"""

CLIENT_VERSION = "1.0.0"

# ─── Wire vocabulary (socket.io event names used by the engine) ──
MSG_GET_TOKEN = "GetToken"          # C→S {uniqueId}
MSG_TOKEN = "Token"                 # S→C {token, expire}
MSG_CLIENT_READY = "ClientReady"    # C→S {token}
MSG_CONFIGURATION = "Configuration" # S→C full box configuration
MSG_UPDATE_STATE = "UpdateState"    # S→C full machine state
MSG_CLIENT_EVENT = "ClientEvent"    # C→S {name: Action|Reset, token, ...}

EVENT_NAME_ACTION = "Action"
EVENT_NAME_RESET = "Reset"

# Transport-level events surfaced by the channel
EVENT_CONNECT = "connect"
EVENT_RECONNECT = "reconnect"
EVENT_DISCONNECT = "disconnect"

# ─── Actions ─────────────────────────────────────────────────────
ACTION_RESET = "reset"
ACTION_CHANGE_FLOW_CHECKIN = "changeFlowCheckIn"
ACTION_CHANGE_FLOW_CHECKOUT = "changeFlowCheckOut"
ACTION_CHANGE_FLOW_STATUS = "changeFlowStatus"
ACTION_PRINT = "print"
ACTION_LOGIN = "login"
ACTION_SELECT_LOGIN_METHOD = "selectLoginMethod"

INITIAL_STEP = "initial"
STEP_CHANGE_LOGIN_METHOD = "changeLoginMethod"
STEP_LOGIN_SCAN_USERNAME = "loginScanUsername"
STEP_LOGIN_SCAN_USERNAME_PASSWORD = "loginScanUsernamePassword"

# Login session methods offered by the box configuration, and the login
# step each one leads to. Listed in the order they are offered.
LOGIN_METHOD_STEPS = (
    ("login_barcode_password", STEP_LOGIN_SCAN_USERNAME_PASSWORD),
    ("login_barcode", STEP_LOGIN_SCAN_USERNAME),
)

# ─── Thresholds ──────────────────────────────────────────────────
DEFAULT_INACTIVITY_TIMEOUT_MS = 180_000   # Used when the box config has none
IDLE_DEBOUNCE_SEC = 0.5        # Coalesce activity pulses (max ~2 re-arms per second)
MOVE_THROTTLE_SEC = 0.5        # Only record mouse move every 500ms (saves CPU)
CHANNEL_POLL_MS = 50           # Drain socket events on the main loop
INPUT_POLL_MS = 200            # Drain pynput events on the main loop

# ─── Network ─────────────────────────────────────────────────────
PROBE_TIMEOUT_SEC = 10         # Engine reachability check during setup
RECONNECT_DELAY_SEC = 1
RECONNECT_DELAY_MAX_SEC = 10

# ─── Languages ───────────────────────────────────────────────────
SUPPORTED_LANGUAGE_CODES = ("da", "en")
BASELINE_LANGUAGE_CODE = "en"

# ─── Barcode scanner ─────────────────────────────────────────────
BARCODE_SCANNING_TIMEOUT_SEC = 0.5   # Max gap between keystrokes of one scan
BARCODE_COMMAND_LENGTH = 5

# Printed command cards placed next to the kiosk.
BARCODE_COMMANDS = {
    "03009": ACTION_RESET,
    "03010": ACTION_CHANGE_FLOW_STATUS,
    "03011": ACTION_CHANGE_FLOW_CHECKOUT,
    "03012": ACTION_CHANGE_FLOW_CHECKIN,
    "03013": ACTION_PRINT,
}

# Commands each step reacts to. Steps not listed accept only reset.
STEP_BARCODE_ACTIONS = {
    "initial": (
        ACTION_CHANGE_FLOW_CHECKIN, ACTION_CHANGE_FLOW_CHECKOUT, ACTION_CHANGE_FLOW_STATUS,
    ),
    "status": (
        ACTION_CHANGE_FLOW_CHECKIN, ACTION_CHANGE_FLOW_CHECKOUT, ACTION_RESET, ACTION_PRINT,
    ),
    "checkOutItems": (
        ACTION_CHANGE_FLOW_CHECKIN, ACTION_CHANGE_FLOW_STATUS, ACTION_RESET, ACTION_PRINT,
    ),
    "checkInItems": (
        ACTION_CHANGE_FLOW_CHECKOUT, ACTION_CHANGE_FLOW_STATUS, ACTION_RESET, ACTION_PRINT,
    ),
}

# ─── Kiosk theme colors ──────────────────────────────────────────
THEME = {
    "bg_darkest":    "#020617",   # fullscreen background
    "bg_input":      "#0f172a",   # input field bg
    "header_bg":     "#0a2c54",   # header background
    "primary":       "#3b82f6",   # blue button
    "primary_hover": "#2563eb",   # button hover
    "text_primary":  "#f1f5f9",   # white text
    "text_secondary":"#cbd5e1",   # light gray
    "text_muted":    "#94a3b8",   # muted text
    "border":        "#374151",   # borders
    "success":       "#22c55e",   # green
    "error":         "#ef4444",   # red
}
