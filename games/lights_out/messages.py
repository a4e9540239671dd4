"""
Централізоване сховище текстових повідомлень для гри "Lights Out".
Тексти відокремлені від логіки, тож їх легко змінювати
без змін у машині станів чи обробниках.
"""
from config import BOT_TAGLINE, BOT_TITLE
from games.lights_out.state_machine import GameSnapshot, Phase

LIGHT_ON = "🔴"
LIGHT_OFF = "⚫️"
SEPARATOR = " "

# === ЗАГАЛЬНІ ПОВІДОМЛЕННЯ ===
MSG_GAME_TITLE = f"<b>{BOT_TITLE}</b>"
MSG_TAGLINE = f"<i>{BOT_TAGLINE}</i>"
MSG_MENU = (
    f"{MSG_GAME_TITLE}\n{MSG_TAGLINE}\n\n"
    "П'ять червоних вогнів загоряться один за одним. "
    "Коли всі згаснуть, чекай на сигнал і тисни якомога швидше!"
)
MSG_ERROR_NO_MESSAGE = "Помилка: не вдалося отримати повідомлення."
MSG_PREPARE = "Приготуйся..."
MSG_TOO_EARLY = "Зарано! Чекай на сигнал 🏁"
MSG_ALREADY_RUNNING = "Раунд уже триває."
MSG_GAME_OVER = "Гра вже закінчилась або неактивна."
MSG_RESET = "Гру скинуто."


# === ІГРОВИЙ ПРОЦЕС ===
def get_lights_row(lights: tuple[bool, ...]) -> str:
    return SEPARATOR.join(LIGHT_ON if lit else LIGHT_OFF for lit in lights)


def get_result_text(time_ms: int) -> str:
    return (
        f"{MSG_GAME_TITLE}\n\n"
        "Твій час реакції:\n"
        f"<b>{time_ms} мс</b>"
    )


def get_user_time_answer(time_ms: int) -> str:
    return f"Твій час: {time_ms} мс"


def render_snapshot(snapshot: GameSnapshot) -> str:
    """Текст повідомлення для поточного стану гри."""
    if snapshot.phase is Phase.READY:
        return MSG_MENU
    if snapshot.phase is Phase.SIGNALING:
        return f"{MSG_GAME_TITLE}\n\n{get_lights_row(snapshot.lights)}"
    if snapshot.phase is Phase.WAITING:
        return f"{MSG_GAME_TITLE}\n\n{get_lights_row(snapshot.lights)}\n\n{MSG_PREPARE}"
    if snapshot.phase is Phase.TAP_NOW:
        return f"{MSG_GAME_TITLE}\n\n<b>ТИСНИ ЗАРАЗ!</b>\n\n🏁"
    return get_result_text(snapshot.reaction_ms or 0)
