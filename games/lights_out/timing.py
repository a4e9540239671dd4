"""
Налаштування таймінгів для гри "Lights Out".

Всі значення задаються в секундах.
"""
import math
import random
from dataclasses import dataclass

import config

LIGHTS_TOTAL = 5


@dataclass(frozen=True)
class TimingConfig:
    """
    Паузи послідовності вогнів та інтервал випадкової затримки перед стартом.
    """
    initial_delay: float = 0.5   # від start() до першого вогню
    light_interval: float = 0.8  # між сусідніми вогнями
    hold_delay: float = 0.5      # п'ятий вогонь горить перед вимкненням
    announce_gap: float = 0.3    # від вимкнення до сигналу "старт"
    min_go_delay: float = 2.0
    max_go_delay: float = 5.0
    randomize_go: bool = True

    def __post_init__(self) -> None:
        for name in ("initial_delay", "light_interval", "hold_delay",
                     "announce_gap", "min_go_delay", "max_go_delay"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be a non-negative number, got {value!r}")
        if self.min_go_delay > self.max_go_delay:
            raise ValueError(
                f"min_go_delay ({self.min_go_delay}) must not exceed "
                f"max_go_delay ({self.max_go_delay})"
            )

    @classmethod
    def from_env(cls) -> "TimingConfig":
        """Будує конфігурацію зі змінних середовища, завантажених у `config`."""
        return cls(
            initial_delay=config.LIGHTS_INITIAL_DELAY,
            light_interval=config.LIGHTS_INTERVAL,
            hold_delay=config.LIGHTS_HOLD_DELAY,
            announce_gap=config.LIGHTS_ANNOUNCE_GAP,
            min_go_delay=config.GO_DELAY_MIN,
            max_go_delay=config.GO_DELAY_MAX,
            randomize_go=config.GO_DELAY_RANDOMIZED,
        )

    def light_steps(self) -> list[float]:
        """Затримки перед кожним із п'яти вогнів."""
        return [self.initial_delay] + [self.light_interval] * (LIGHTS_TOTAL - 1)

    def draw_go_delay(self, rng=random) -> float:
        """
        Затримка від вимкнення вогнів до сигналу "старт".

        Випадкова складова робить момент старту непередбачуваним;
        без неї лишається лише фіксована пауза `announce_gap`.
        """
        if not self.randomize_go:
            return self.announce_gap
        return self.announce_gap + rng.uniform(self.min_go_delay, self.max_go_delay)
