import logging
import os
from dotenv import load_dotenv

# === НАЛАШТУВАННЯ ЛОГУВАННЯ ===
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
)
logger = logging.getLogger(__name__)

# === ЗАВАНТАЖЕННЯ ЗМІННИХ СЕРЕДОВИЩА ===
load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Некоректне значення {name}={raw!r}, використовую {default}")
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


TELEGRAM_BOT_TOKEN: str = os.getenv("TELEGRAM_BOT_TOKEN", "")
ADMIN_USER_ID: int = int(os.getenv("ADMIN_USER_ID", "0"))

# === ТАЙМІНГИ "LIGHTS OUT" (секунди) ===
LIGHTS_INITIAL_DELAY: float = _env_float("LIGHTS_INITIAL_DELAY", 0.5)
LIGHTS_INTERVAL: float = _env_float("LIGHTS_INTERVAL", 0.8)
LIGHTS_HOLD_DELAY: float = _env_float("LIGHTS_HOLD_DELAY", 0.5)
LIGHTS_ANNOUNCE_GAP: float = _env_float("LIGHTS_ANNOUNCE_GAP", 0.3)

# Випадкова пауза перед сигналом "старт"
GO_DELAY_MIN: float = _env_float("GO_DELAY_MIN", 2.0)
GO_DELAY_MAX: float = _env_float("GO_DELAY_MAX", 5.0)
GO_DELAY_RANDOMIZED: bool = _env_bool("GO_DELAY_RANDOMIZED", True)

# === КОНСТАНТИ ===
BOT_TITLE: str = "ReactNow"
BOT_TAGLINE: str = "Lights Out and Away We Go!"
