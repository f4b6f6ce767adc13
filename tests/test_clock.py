from __future__ import annotations

from engine import ManualClock


def test_callbacks_fire_in_deadline_order(clock: ManualClock) -> None:
    fired: list = []
    clock.call_later(0.3, lambda: fired.append("c"))
    clock.call_later(0.1, lambda: fired.append("a"))
    clock.call_later(0.2, lambda: fired.append("b"))
    assert clock.advance(0.25) == 2
    assert fired == ["a", "b"]
    assert clock.now == 0.25
    assert clock.pending() == 1
    assert clock.next_deadline() == 0.3


def test_equal_deadlines_keep_scheduling_order(clock: ManualClock) -> None:
    fired: list = []
    for name in "xyz":
        clock.call_later(1, lambda name=name: fired.append(name))
    clock.advance(1)
    assert fired == ["x", "y", "z"]


def test_cancelled_handles_never_fire(clock: ManualClock) -> None:
    fired: list = []
    handle = clock.call_later(0.1, lambda: fired.append(1))
    handle.cancel()
    assert clock.pending() == 0
    assert clock.next_deadline() is None
    assert clock.advance(1) == 0
    assert fired == []


def test_callbacks_scheduled_while_advancing_fire_in_the_same_window(clock: ManualClock) -> None:
    times: list = []

    def tick() -> None:
        times.append(clock.now)
        if len(times) < 5:
            clock.call_later(0.5, tick)

    clock.call_later(0.5, tick)
    assert clock.advance_to(1.6) == 3
    assert times == [0.5, 1.0, 1.5]
    assert clock.now == 1.6


def test_advance_to_the_past_is_a_no_op() -> None:
    clock = ManualClock(start=10.0)
    assert clock.advance_to(5.0) == 0
    assert clock.now == 10.0
    clock.call_later(-3, lambda: None)
    assert clock.next_deadline() == 10.0
