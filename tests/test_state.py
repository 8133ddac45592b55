import dataclasses

import pytest

from bibbox_core.state import MachineConfiguration, MachineState, SessionState


def test_configuration_from_engine_payload():
    config = MachineConfiguration.from_dict({
        "uniqueId": "abc123",
        "name": "Main library",
        "defaultLanguageCode": "da",
        "inactivityTimeOut": "30000",
        "loginSessionMethods": ["login_barcode", "login_barcode_password"],
        "hasTouch": 1,
        "soundEnabled": True,
        "debugEnabled": False,
    })
    assert config.unique_id == "abc123"
    assert config.default_language_code == "da"
    assert config.inactivity_timeout_ms == 30000
    assert config.login_session_methods == ("login_barcode", "login_barcode_password")
    assert config.has_touch is True
    assert config.has_keyboard is False
    assert config.raw["name"] == "Main library"


@pytest.mark.parametrize("timeout", [None, 0, -5, "never"])
def test_configuration_timeout_defaults(timeout):
    config = MachineConfiguration.from_dict({"uniqueId": "a", "inactivityTimeOut": timeout})
    assert config.inactivity_timeout_ms == 180000


def test_configuration_is_immutable():
    config = MachineConfiguration.from_dict({"uniqueId": "a"})
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.name = "changed"


def test_machine_state_defaults_to_initial_step():
    machine_state = MachineState.from_dict({})
    assert machine_state.is_initial
    assert machine_state.charged_items == ()


def test_loaned_items_lists_problem_items_first():
    machine_state = MachineState.from_dict({
        "step": "status",
        "chargedItems": [{"id": "c"}],
        "fineItems": [{"id": "f"}],
        "overdueItems": [{"id": "o"}],
        "recallItems": [{"id": "r"}],
    })
    assert [item["id"] for item in machine_state.loaned_items] == ["f", "o", "r", "c"]


def test_session_ready_needs_configuration_and_state():
    state = SessionState()
    assert not state.ready
    state.configuration = MachineConfiguration.from_dict({"uniqueId": "a"})
    assert not state.ready
    state.machine_state = MachineState()
    assert state.ready
