"""
Машина станів для гри "Lights Out".

Єдине джерело істини про стан гри: послідовність вогнів, пауза перед стартом,
фіксація моменту старту та вимірювання часу реакції.
Відображення (Telegram-повідомлення) лише підписується на зміни стану.
"""
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from config import logger
from games.lights_out.scheduler import SequenceHandle, TimingScheduler
from games.lights_out.timing import LIGHTS_TOTAL, TimingConfig


@dataclass(frozen=True)
class Ready:
    pass


@dataclass(frozen=True)
class Signaling:
    lit_count: int = 0


@dataclass(frozen=True)
class Waiting:
    pass


@dataclass(frozen=True)
class TapNow:
    go_timestamp: float


@dataclass(frozen=True)
class Result:
    reaction_millis: float


GameState = Union[Ready, Signaling, Waiting, TapNow, Result]


class Phase(str, Enum):
    READY = "ready"
    SIGNALING = "signaling"
    WAITING = "waiting"
    TAP_NOW = "tap_now"
    RESULT = "result"


_PHASES = {
    Ready: Phase.READY,
    Signaling: Phase.SIGNALING,
    Waiting: Phase.WAITING,
    TapNow: Phase.TAP_NOW,
    Result: Phase.RESULT,
}


@dataclass(frozen=True)
class GameSnapshot:
    """Знімок стану гри тільки для читання (для рендерингу)."""
    phase: Phase
    lights: tuple[bool, ...]
    reaction_millis: Optional[float] = None

    @property
    def lit_count(self) -> int:
        return sum(self.lights)

    @property
    def reaction_ms(self) -> Optional[int]:
        if self.reaction_millis is None:
            return None
        return int(round(self.reaction_millis))


Listener = Callable[[GameSnapshot], None]


class LightsOutGame:
    """
    Керує одним раундом: Ready → Signaling → Waiting → TapNow → Result.

    Некоректні виклики (start() під час раунду, tap() до старту) нічого
    не змінюють і не кидають винятків.
    """

    def __init__(
        self,
        timing: Optional[TimingConfig] = None,
        scheduler: Optional[TimingScheduler] = None,
        clock: Callable[[], float] = time.monotonic,
        rng=None,
    ):
        self.timing = timing or TimingConfig()
        self._scheduler = scheduler or TimingScheduler()
        self._clock = clock
        self._rng = rng or random
        self._state: GameState = Ready()
        self._round = 0
        self._sequence: Optional[SequenceHandle] = None
        self._go: Optional[SequenceHandle] = None
        self._listeners: list[Listener] = []

    # --- Читання стану ---
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return _PHASES[type(self._state)]

    @property
    def round_id(self) -> int:
        return self._round

    @property
    def is_running(self) -> bool:
        return isinstance(self._state, (Signaling, Waiting, TapNow))

    def snapshot(self) -> GameSnapshot:
        state = self._state
        lit = state.lit_count if isinstance(state, Signaling) else 0
        lights = tuple(i < lit for i in range(LIGHTS_TOTAL))
        reaction = state.reaction_millis if isinstance(state, Result) else None
        return GameSnapshot(self.phase, lights, reaction)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Команди ---
    def start(self) -> bool:
        if not isinstance(self._state, Ready):
            logger.debug(f"start() ignored in phase {self.phase.value}")
            return False

        self._round += 1
        round_id = self._round

        steps = [
            (delay, lambda: self._advance_light(round_id))
            for delay in self.timing.light_steps()
        ]
        steps.append((self.timing.hold_delay, lambda: self._extinguish_all(round_id)))
        self._sequence = self._scheduler.schedule_sequence(steps, name=f"lights#{round_id}")
        self._set_state(Signaling(0))
        logger.info(f"Round {round_id}: lights sequence started")
        return True

    def tap(self) -> Optional[float]:
        state = self._state
        if not isinstance(state, TapNow):
            logger.debug(f"tap() ignored in phase {self.phase.value}")
            return None

        reaction_millis = (self._clock() - state.go_timestamp) * 1000.0
        self._go = None
        self._set_state(Result(reaction_millis))
        logger.info(f"Round {self._round}: reaction time {reaction_millis:.1f} ms")
        return reaction_millis

    def reset(self) -> None:
        # Спочатку скасовуємо таймери, потім змінюємо стан
        self._scheduler.cancel(self._sequence)
        self._scheduler.cancel(self._go)
        self._sequence = None
        self._go = None
        if not isinstance(self._state, Ready):
            logger.info(f"Round {self._round}: reset from phase {self.phase.value}")
            self._set_state(Ready())

    # --- Внутрішні кроки, які викликає планувальник ---
    def _is_stale(self, round_id: int, expected: type, step: str) -> bool:
        if round_id != self._round or not isinstance(self._state, expected):
            logger.warning(
                f"Discarding stale {step} for round {round_id} "
                f"(current round {self._round}, phase {self.phase.value})"
            )
            return True
        return False

    def _advance_light(self, round_id: int) -> None:
        if self._is_stale(round_id, Signaling, "advance_light"):
            return
        lit = self._state.lit_count
        if lit >= LIGHTS_TOTAL:
            logger.warning(f"Round {round_id}: all {LIGHTS_TOTAL} lights are already lit")
            return
        self._set_state(Signaling(lit + 1))

    def _extinguish_all(self, round_id: int) -> None:
        if self._is_stale(round_id, Signaling, "extinguish_all"):
            return
        self._sequence = None
        delay = self.timing.draw_go_delay(self._rng)
        logger.debug(f"Round {round_id}: go-signal in {delay:.2f}s")
        # Таймер ставиться до сповіщення слухачів, щоб reset() з них його скасував
        self._go = self._scheduler.schedule_go(delay, lambda: self._signal_go(round_id))
        self._set_state(Waiting())

    def _signal_go(self, round_id: int) -> None:
        if self._is_stale(round_id, Waiting, "signal_go"):
            return
        go_timestamp = self._clock()
        self._set_state(TapNow(go_timestamp))
        logger.info(f"Round {round_id}: GO at {go_timestamp}")

    def _set_state(self, state: GameState) -> None:
        self._state = state
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Game listener {listener!r} failed: {e}", exc_info=True)
