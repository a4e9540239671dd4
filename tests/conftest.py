from __future__ import annotations

import pytest


class _Timer:
    def __init__(self, loop: "FakeLoop", when: float, seq: int, callback, args) -> None:
        self._loop = loop
        self.when = when
        self.seq = seq
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        # Simulates a timer that slips through cancellation
        if not self._loop.fire_cancelled:
            self.cancelled = True


class FakeLoop:
    """Simulated-time stand-in for asyncio's call_later."""

    def __init__(self) -> None:
        self.now = 0.0
        self.fire_cancelled = False
        self._timers: list[_Timer] = []
        self._seq = 0

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback, *args) -> _Timer:
        timer = _Timer(self, self.now + delay, self._seq, callback, args)
        self._seq += 1
        self._timers.append(timer)
        return timer

    @property
    def scheduled(self) -> list[_Timer]:
        return [t for t in self._timers if not t.cancelled]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self._timers if not t.cancelled and t.when <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: (t.when, t.seq))
            self._timers.remove(timer)
            self.now = max(self.now, timer.when)
            timer.callback(*timer.args)
        self.now = target


class FixedRandom:
    def __init__(self, value: float) -> None:
        self.value = value
        self.calls: list[tuple[float, float]] = []

    def uniform(self, a: float, b: float) -> float:
        self.calls.append((a, b))
        return self.value


@pytest.fixture
def loop() -> FakeLoop:
    return FakeLoop()
