from __future__ import annotations

import asyncio

import pytest

from engine import ManualClock, Stepper, StepperState


STEPS = ["s0", "s1", "s2", "s3"]


@pytest.fixture
def stepper(clock: ManualClock) -> Stepper:
    return Stepper(scheduler=clock)


def test_starts_idle(stepper: Stepper) -> None:
    assert stepper.state is StepperState.IDLE
    assert stepper.cursor == -1
    assert stepper.current_step is None
    assert stepper.step_forward() is False
    assert stepper.step_back() is False
    stepper.play()
    assert stepper.is_playing is False


def test_start_shows_first_step(stepper: Stepper) -> None:
    stepper.start(STEPS)
    assert stepper.cursor == 0
    assert stepper.current_step == "s0"
    assert stepper.state is StepperState.PAUSED
    assert stepper.can_step_forward and not stepper.can_step_back


def test_manual_navigation_is_bounded(stepper: Stepper) -> None:
    stepper.start(STEPS)
    assert stepper.step_back() is False
    assert [stepper.step_forward() for _ in range(4)] == [True, True, True, False]
    assert stepper.cursor == 3
    assert stepper.state is StepperState.FINISHED
    assert stepper.step_back() is True
    assert stepper.current_step == "s2"
    assert stepper.goto_step(9) is False
    assert stepper.goto_step(0) is True and stepper.cursor == 0


def test_manual_steps_are_ignored_while_playing(stepper: Stepper, clock: ManualClock) -> None:
    stepper.start(STEPS)
    stepper.step_forward()
    stepper.play()
    assert stepper.can_step_forward is False and stepper.can_step_back is False
    assert stepper.step_forward() is False
    assert stepper.step_back() is False
    assert stepper.goto_step(3) is False
    assert stepper.cursor == 1
    assert stepper.state is StepperState.PLAYING

    clock.advance_to(0.5)
    assert stepper.cursor == 2
    stepper.pause()
    assert stepper.step_back() is True and stepper.cursor == 1


def test_empty_sequence_stays_idle(stepper: Stepper) -> None:
    stepper.start([])
    assert stepper.state is StepperState.IDLE
    assert stepper.total_steps == 0


def test_autoplay_advances_once_per_interval(stepper: Stepper, clock: ManualClock) -> None:
    stepper.start(STEPS)
    stepper.toggle_play()
    assert stepper.state is StepperState.PLAYING

    clock.advance_to(0.499)
    assert stepper.cursor == 0
    clock.advance_to(0.5)
    assert stepper.cursor == 1
    clock.advance_to(1.0)
    assert stepper.cursor == 2


def test_autoplay_stops_on_last_step(stepper: Stepper, clock: ManualClock) -> None:
    stepper.start(STEPS)
    stepper.play()
    clock.advance(10)
    assert stepper.cursor == 3
    assert stepper.is_playing is False
    assert stepper.state is StepperState.FINISHED
    assert clock.pending() == 0
    stepper.toggle_play()
    assert stepper.is_playing is False


def test_pause_cancels_pending_tick(stepper: Stepper, clock: ManualClock) -> None:
    stepper.start(STEPS)
    stepper.play()
    stepper.pause()
    assert clock.pending() == 0
    clock.advance(5)
    assert stepper.cursor == 0


def test_reset_while_playing_cancels_timer(stepper: Stepper, clock: ManualClock) -> None:
    stepper.start(STEPS)
    stepper.play()
    stepper.reset()
    assert clock.pending() == 0
    clock.advance(5)
    assert stepper.state is StepperState.IDLE
    assert stepper.steps == ()


def test_restart_while_playing_drops_old_ticks(stepper: Stepper, clock: ManualClock) -> None:
    stepper.start(STEPS)
    stepper.play()
    clock.advance(0.5)
    stepper.start(["n0", "n1"])
    assert stepper.is_playing is False
    clock.advance(5)
    assert stepper.current_step == "n0"


def test_stale_tick_is_ignored_even_if_it_fires(stepper: Stepper) -> None:
    stepper.start(STEPS)
    stepper.play()
    stale_generation = stepper._generation
    stepper.start(["n0", "n1"])
    stepper.play()
    stepper._tick(stale_generation)
    assert stepper.cursor == 0


def test_set_speed_clamps_and_accepts_presets(stepper: Stepper) -> None:
    assert stepper.set_speed(20) == 100
    assert stepper.set_speed(5000) == 1000
    assert stepper.set_speed("fast") == 200
    assert stepper.set_speed(350.7) == 350
    with pytest.raises(ValueError, match="preset"):
        stepper.set_speed("warp")
    with pytest.raises(ValueError):
        stepper.set_speed(True)


def test_speed_change_while_playing_rearms(stepper: Stepper, clock: ManualClock) -> None:
    stepper.start(STEPS)
    stepper.play()
    clock.advance_to(0.4)
    stepper.set_speed(1000)
    assert clock.pending() == 1
    clock.advance_to(1.0)
    assert stepper.cursor == 0
    clock.advance_to(1.4)
    assert stepper.cursor == 1


def test_on_step_sees_every_change(clock: ManualClock) -> None:
    seen: list = []
    stepper = Stepper(scheduler=clock, on_step=seen.append)
    stepper.start(STEPS)
    stepper.step_forward()
    stepper.step_back()
    stepper.reset()
    assert seen == ["s0", "s1", "s0", None]


def test_snapshot_mirrors_state(stepper: Stepper) -> None:
    stepper.start(STEPS)
    stepper.step_forward()
    snap = stepper.snapshot()
    assert snap.cursor == 1
    assert snap.current_step == "s1"
    assert snap.total_steps == 4
    assert snap.state is StepperState.PAUSED
    assert snap.can_step_back and snap.can_step_forward
    assert snap.speed_ms == 500


@pytest.mark.asyncio
async def test_runs_on_an_asyncio_loop() -> None:
    loop = asyncio.get_running_loop()
    done = asyncio.Event()
    stepper = Stepper(
        scheduler=loop,
        on_step=lambda step: step == "s3" and done.set(),
        speed_ms=1,
        min_speed_ms=1,
    )
    stepper.start(STEPS)
    stepper.play()
    await asyncio.wait_for(done.wait(), timeout=2)
    assert stepper.cursor == 3
    assert stepper.is_playing is False
