"""
games/lights_out/scheduler.py

Timing scheduler for the lights sequence:
- Runs an ordered chain of delayed actions on a single event loop.
- Step i+1 is posted only after step i's action has run.
- A whole chain can be cancelled at once through its SequenceHandle.
"""
import asyncio
import math
from collections import deque
from typing import Any, Callable, Iterable, Optional

from config import logger

Action = Callable[[], None]
Step = tuple[float, Action]


class SequenceHandle:
    """Opaque cancellation token for one chain of delayed actions."""

    def __init__(self, steps: Iterable[Step], name: str = "sequence"):
        self._steps: deque[Step] = deque(steps)
        self._timer: Any = None
        self._cancelled = False
        self.name = name

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return not self._steps and self._timer is None

    @property
    def active(self) -> bool:
        return not self._cancelled and not self.done

    @property
    def remaining(self) -> int:
        return 0 if self._cancelled else len(self._steps)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else ("done" if self.done else "active")
        return f"<SequenceHandle {self.name} {state} remaining={self.remaining}>"


def _validate_delay(delay: float) -> float:
    delay = float(delay)
    if not math.isfinite(delay) or delay < 0:
        raise ValueError(f"Scheduling delay must be a non-negative finite number, got {delay!r}")
    return delay


class TimingScheduler:
    """
    Posts delayed actions back onto the event loop.

    The loop only needs `call_later(delay, callback)` returning an object
    with `cancel()`; by default the running asyncio loop is used.
    The scheduler holds no game state.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop
        self._handles: set[SequenceHandle] = set()

    @property
    def loop(self):
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @property
    def pending(self) -> int:
        return len(self._handles)

    def schedule_sequence(self, steps: Iterable[Step], name: str = "sequence") -> SequenceHandle:
        """
        Registers an ordered chain of (delay, action) steps.

        All delays are validated before anything is scheduled. A zero delay
        is still deferred to the next loop iteration.
        """
        checked = [(_validate_delay(delay), action) for delay, action in steps]
        handle = SequenceHandle(checked, name=name)
        if checked:
            self._handles.add(handle)
            self._post_next(handle)
        return handle

    def schedule_go(self, after: float, action: Action) -> SequenceHandle:
        """Single-shot chain for the go-signal."""
        return self.schedule_sequence([(after, action)], name="go")

    def cancel(self, handle: Optional[SequenceHandle]) -> None:
        """Stops every not-yet-fired step of the chain. Idempotent."""
        if handle is None or handle._cancelled or handle.done:
            return
        handle._cancelled = True
        if handle._timer is not None:
            handle._timer.cancel()
            handle._timer = None
        handle._steps.clear()
        if handle in self._handles:
            self._handles.discard(handle)
            logger.debug(f"Cancelled {handle!r}")

    def cancel_all(self) -> None:
        for handle in list(self._handles):
            self.cancel(handle)

    def _post_next(self, handle: SequenceHandle) -> None:
        delay, action = handle._steps.popleft()
        handle._timer = self.loop.call_later(delay, self._fire, handle, action)

    def _fire(self, handle: SequenceHandle, action: Action) -> None:
        handle._timer = None
        if handle._cancelled:
            # Таймер скасованого ланцюжка не мав би спрацювати взагалі
            logger.warning(f"Discarding stale callback of {handle!r}")
            return

        try:
            action()
        except Exception as e:
            logger.error(f"Action of {handle!r} failed, dropping the rest of the chain: {e}", exc_info=True)
            handle._cancelled = True
            handle._steps.clear()
            self._handles.discard(handle)
            return

        # Дія могла сама скасувати ланцюжок (наприклад, через reset())
        if handle._cancelled:
            return
        if handle._steps:
            self._post_next(handle)
        else:
            self._handles.discard(handle)
