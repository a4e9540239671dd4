"""
Клавіатури для гри "Lights Out".
"""
from aiogram.types import InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from games.lights_out.state_machine import GameSnapshot, Phase

CB_START = "lights_out_start"
CB_TAP = "lights_out_tap"
CB_RESET = "lights_out_reset"


def create_lights_out_keyboard(snapshot: GameSnapshot) -> InlineKeyboardMarkup:
    """
    Створює клавіатуру для поточної фази гри.

    Args:
        snapshot: Знімок стану гри.

    Returns:
        Клавіатура для відповідного стану гри.
    """
    builder = InlineKeyboardBuilder()

    if snapshot.phase is Phase.READY:
        builder.button(text="🚦 Почати", callback_data=CB_START)
    elif snapshot.phase in (Phase.SIGNALING, Phase.WAITING):
        # Кнопка доступна і до старту: ранні натискання просто ігноруються
        builder.button(text="⚫️", callback_data=CB_TAP)
        builder.button(text="✖️ Скинути", callback_data=CB_RESET)
    elif snapshot.phase is Phase.TAP_NOW:
        builder.button(text="🟢 ТИСНИ!", callback_data=CB_TAP)
        builder.button(text="✖️ Скинути", callback_data=CB_RESET)
    else:
        builder.button(text="🔄 Грати ще", callback_data=CB_START)

    builder.adjust(1)
    return builder.as_markup()
