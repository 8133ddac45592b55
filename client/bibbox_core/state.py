"""
Box configuration, machine state, and SessionState (single source of truth).

MachineConfiguration and MachineState are immutable snapshots built from
the engine's payloads and replaced wholesale on every message.
SessionState is mutated only on the Tkinter main thread. No locks needed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .constants import (
    BASELINE_LANGUAGE_CODE, DEFAULT_INACTIVITY_TIMEOUT_MS, INITIAL_STEP,
)


def _int(value, default):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class MachineConfiguration:
    unique_id: str
    name: str = ""
    default_language_code: str = BASELINE_LANGUAGE_CODE
    inactivity_timeout_ms: int = DEFAULT_INACTIVITY_TIMEOUT_MS
    login_method: str = ""
    login_session_methods: Tuple[str, ...] = ()
    login_session_timeout: int = 0
    has_touch: bool = False
    has_keyboard: bool = False
    has_printer: bool = False
    sound_enabled: bool = False
    debug_enabled: bool = False
    reserved_material_instruction: str = ""
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data):
        data = data or {}
        timeout = _int(data.get("inactivityTimeOut"), DEFAULT_INACTIVITY_TIMEOUT_MS)
        if timeout <= 0:
            timeout = DEFAULT_INACTIVITY_TIMEOUT_MS
        return cls(
            unique_id=str(data.get("uniqueId", "")),
            name=data.get("name") or "",
            default_language_code=data.get("defaultLanguageCode") or BASELINE_LANGUAGE_CODE,
            inactivity_timeout_ms=timeout,
            login_method=data.get("loginMethod") or "",
            login_session_methods=tuple(data.get("loginSessionMethods") or ()),
            login_session_timeout=_int(data.get("loginSessionTimeout"), 0),
            has_touch=bool(data.get("hasTouch")),
            has_keyboard=bool(data.get("hasKeyboard")),
            has_printer=bool(data.get("hasPrinter")),
            sound_enabled=bool(data.get("soundEnabled")),
            debug_enabled=bool(data.get("debugEnabled")),
            reserved_material_instruction=data.get("reservedMaterialInstruction") or "",
            raw=dict(data),
        )


@dataclass(frozen=True)
class MachineState:
    step: str = INITIAL_STEP
    user: Optional[Dict[str, Any]] = None
    items: Tuple[Dict[str, Any], ...] = ()
    charged_items: Tuple[Dict[str, Any], ...] = ()
    fine_items: Tuple[Dict[str, Any], ...] = ()
    overdue_items: Tuple[Dict[str, Any], ...] = ()
    recall_items: Tuple[Dict[str, Any], ...] = ()
    hold_items: Tuple[Dict[str, Any], ...] = ()
    unavailable_hold_items: Tuple[Dict[str, Any], ...] = ()
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data):
        data = data or {}

        def items(key):
            return tuple(data.get(key) or ())

        return cls(
            step=data.get("step") or INITIAL_STEP,
            user=data.get("user"),
            items=items("items"),
            charged_items=items("chargedItems"),
            fine_items=items("fineItems"),
            overdue_items=items("overdueItems"),
            recall_items=items("recallItems"),
            hold_items=items("holdItems"),
            unavailable_hold_items=items("unavailableHoldItems"),
            raw=dict(data),
        )

    @property
    def is_initial(self) -> bool:
        return self.step == INITIAL_STEP

    @property
    def loaned_items(self):
        """Everything the patron currently holds, problem items first."""
        return self.fine_items + self.overdue_items + self.recall_items + self.charged_items


@dataclass
class SessionState:
    # ── Server snapshots (replaced wholesale) ─────────────────
    configuration: Optional[MachineConfiguration] = None
    machine_state: Optional[MachineState] = None

    # ── Translations ──────────────────────────────────────────
    language: str = BASELINE_LANGUAGE_CODE
    messages: Dict[str, str] = field(default_factory=dict)

    # ── Session health ────────────────────────────────────────
    access_denied: bool = False

    @property
    def ready(self) -> bool:
        """Both configuration and machine state have arrived."""
        return self.configuration is not None and self.machine_state is not None
