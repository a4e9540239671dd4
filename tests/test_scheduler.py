from __future__ import annotations

import asyncio
import math

import pytest

from games.lights_out.scheduler import TimingScheduler


def test_sequence_runs_steps_in_order_one_at_a_time(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[tuple[str, float]] = []

    handle = scheduler.schedule_sequence([
        (0.5, lambda: fired.append(("a", loop.now))),
        (0.8, lambda: fired.append(("b", loop.now))),
        (0.3, lambda: fired.append(("c", loop.now))),
    ])

    # Only the first step is posted; the rest wait for their predecessor.
    assert len(loop.scheduled) == 1
    assert handle.remaining == 2

    loop.advance(0.5)
    assert fired == [("a", 0.5)]
    assert len(loop.scheduled) == 1

    loop.advance(2.0)
    assert [name for name, _ in fired] == ["a", "b", "c"]
    assert fired[1][1] == pytest.approx(1.3)
    assert fired[2][1] == pytest.approx(1.6)
    assert handle.done
    assert not handle.active
    assert scheduler.pending == 0


def test_zero_delay_is_deferred_to_next_tick(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[int] = []

    scheduler.schedule_sequence([(0, lambda: fired.append(1))])
    assert fired == []

    loop.advance(0)
    assert fired == [1]


@pytest.mark.parametrize("delay", [-0.1, math.nan, math.inf])
def test_invalid_delay_is_rejected_before_scheduling(loop, delay: float) -> None:
    scheduler = TimingScheduler(loop)

    with pytest.raises(ValueError):
        scheduler.schedule_sequence([(0.1, lambda: None), (delay, lambda: None)])

    assert loop.scheduled == []
    assert scheduler.pending == 0


def test_cancel_stops_remaining_steps_and_keeps_fired_ones(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[str] = []
    handle = scheduler.schedule_sequence([
        (1.0, lambda: fired.append("a")),
        (1.0, lambda: fired.append("b")),
    ])

    loop.advance(1.0)
    scheduler.cancel(handle)
    loop.advance(10.0)

    assert fired == ["a"]
    assert handle.cancelled
    assert handle.remaining == 0
    assert scheduler.pending == 0


def test_cancel_is_idempotent_and_tolerates_unknown_handles(loop) -> None:
    scheduler = TimingScheduler(loop)
    handle = scheduler.schedule_go(0.1, lambda: None)
    loop.advance(1.0)
    assert handle.done

    scheduler.cancel(handle)
    scheduler.cancel(handle)
    scheduler.cancel(None)
    assert scheduler.pending == 0


def test_schedule_go_fires_once(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[float] = []

    scheduler.schedule_go(3.2, lambda: fired.append(loop.now))
    loop.advance(100.0)

    assert fired == [pytest.approx(3.2)]


def test_stale_callback_of_cancelled_chain_is_discarded(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[str] = []
    handle = scheduler.schedule_go(1.0, lambda: fired.append("go"))

    loop.fire_cancelled = True
    scheduler.cancel(handle)
    loop.advance(2.0)

    assert fired == []


def test_action_may_cancel_its_own_chain(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[str] = []
    holder: dict = {}

    def first() -> None:
        fired.append("first")
        scheduler.cancel(holder["handle"])

    holder["handle"] = scheduler.schedule_sequence([(0.1, first), (0.1, lambda: fired.append("second"))])
    loop.advance(1.0)

    assert fired == ["first"]
    assert loop.scheduled == []


def test_failing_action_drops_rest_of_chain(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[str] = []

    def boom() -> None:
        raise RuntimeError("boom")

    handle = scheduler.schedule_sequence([(0.1, boom), (0.1, lambda: fired.append("after"))])
    loop.advance(1.0)

    assert fired == []
    assert handle.cancelled
    assert scheduler.pending == 0


def test_cancel_all_clears_every_live_chain(loop) -> None:
    scheduler = TimingScheduler(loop)
    fired: list[str] = []
    scheduler.schedule_go(1.0, lambda: fired.append("a"))
    scheduler.schedule_go(2.0, lambda: fired.append("b"))
    assert scheduler.pending == 2

    scheduler.cancel_all()
    loop.advance(5.0)

    assert fired == []
    assert scheduler.pending == 0


def test_default_loop_is_the_running_asyncio_loop() -> None:
    fired: list[str] = []

    async def scenario() -> None:
        scheduler = TimingScheduler()
        scheduler.schedule_sequence([(0, lambda: fired.append("a")), (0.01, lambda: fired.append("b"))])
        assert fired == []
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert fired == ["a", "b"]
