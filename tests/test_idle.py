from conftest import Kiosk

from bibbox_core.idle import ACTIVE, IDLE


def ready_kiosk(step="status", timeout=10000, token=True):
    kiosk = Kiosk()
    if token:
        kiosk.give_token("T1")
    kiosk.configure(inactivityTimeOut=timeout)
    kiosk.update_state(step)
    return kiosk


def test_reset_sent_after_timeout_away_from_initial_step():
    kiosk = ready_kiosk("status")

    kiosk.scheduler.advance(9999)
    assert kiosk.channel.sent == []

    kiosk.scheduler.advance(1)
    assert kiosk.channel.sent == [("ClientEvent", {"name": "Reset", "token": "T1"})]
    assert kiosk.idle.state == IDLE


def test_no_reset_at_initial_step_and_countdown_restarts():
    kiosk = ready_kiosk("initial")

    kiosk.scheduler.advance(10000)
    assert kiosk.channel.sent == []
    assert kiosk.idle.state == ACTIVE
    assert kiosk.idle.pending

    kiosk.scheduler.advance(50000)
    assert kiosk.channel.sent == []


def test_single_reset_per_idle_period():
    kiosk = ready_kiosk("checkOutItems")

    kiosk.scheduler.advance(100000)
    assert kiosk.channel.events() == ["ClientEvent"]
    assert not kiosk.idle.pending


def test_reset_result_rearms_countdown_at_initial_step():
    kiosk = ready_kiosk("status")
    kiosk.scheduler.advance(10000)
    assert len(kiosk.channel.sent) == 1

    # Engine answers the reset with the initial step.
    kiosk.update_state("initial")
    assert kiosk.idle.state == ACTIVE
    kiosk.scheduler.advance(30000)
    assert len(kiosk.channel.sent) == 1


def test_new_idle_period_after_activity_can_reset_again():
    kiosk = ready_kiosk("status")
    kiosk.scheduler.advance(10000)
    kiosk.update_state("status")
    kiosk.scheduler.advance(10000)
    assert kiosk.channel.events() == ["ClientEvent", "ClientEvent"]


def test_activity_pulses_are_coalesced_without_moving_the_deadline():
    kiosk = ready_kiosk("status")
    armed_before = kiosk.scheduler.armed

    for _ in range(40):
        kiosk.scheduler.advance(10)
        kiosk.idle.activity()

    # 400ms of pulses right after arming: no re-arm at all.
    assert kiosk.scheduler.armed == armed_before

    # Deadline still lands one full timeout after the last pulse (t=400ms).
    kiosk.scheduler.advance(9999)
    assert kiosk.channel.sent == []
    kiosk.scheduler.advance(1)
    assert kiosk.channel.events() == ["ClientEvent"]


def test_pulses_rearm_at_most_twice_per_second():
    kiosk = ready_kiosk("status")
    armed_before = kiosk.scheduler.armed

    for _ in range(100):
        kiosk.scheduler.advance(20)
        kiosk.idle.activity()

    # 2 seconds of pulses every 20ms.
    assert kiosk.scheduler.armed - armed_before <= 4


def test_action_just_before_deadline_defers_by_full_timeout():
    kiosk = ready_kiosk("status")

    kiosk.scheduler.advance(9900)
    assert kiosk.relay.send("print") is True

    kiosk.scheduler.advance(9999)
    assert kiosk.channel.events() == ["ClientEvent"]
    assert kiosk.channel.sent[0][1]["name"] == "Action"

    kiosk.scheduler.advance(1)
    assert kiosk.channel.sent[-1] == ("ClientEvent", {"name": "Reset", "token": "T1"})


def test_idle_without_token_denies_access_and_sends_nothing():
    kiosk = ready_kiosk("status", token=False)

    kiosk.scheduler.advance(10000)
    assert kiosk.channel.sent == []
    assert len(kiosk.denied) == 1


def test_monitor_waits_for_configuration(kiosk):
    kiosk.give_token()
    kiosk.update_state("status")
    kiosk.scheduler.advance(10 * 60 * 1000)
    assert kiosk.channel.sent == []
    assert not kiosk.idle.running


def test_new_configuration_applies_new_timeout():
    kiosk = ready_kiosk("status", timeout=10000)
    kiosk.scheduler.advance(5000)
    kiosk.configure(inactivityTimeOut=60000)

    kiosk.scheduler.advance(59999)
    assert kiosk.channel.sent == []
    kiosk.scheduler.advance(1)
    assert kiosk.channel.events() == ["ClientEvent"]


def test_stop_cancels_pending_deadline():
    kiosk = ready_kiosk("status")
    kiosk.idle.stop()
    assert not kiosk.idle.pending
    kiosk.scheduler.advance(60000)
    assert kiosk.channel.sent == []
