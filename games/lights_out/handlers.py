"""
Обробники для гри на реакцію "Lights Out".
"""
from aiogram import Bot, F, Router, types

from config import logger
from games.lights_out.keyboards import CB_RESET, CB_START, CB_TAP, create_lights_out_keyboard
from games.lights_out.messages import (MSG_ALREADY_RUNNING, MSG_ERROR_NO_MESSAGE,
                                       MSG_GAME_OVER, MSG_MENU,
                                       MSG_PREPARE, MSG_RESET, MSG_TOO_EARLY,
                                       get_user_time_answer)
from games.lights_out.renderer import MessageRenderer
from games.lights_out.state_machine import GameSnapshot, LightsOutGame, Phase
from games.lights_out.timing import LIGHTS_TOTAL, TimingConfig

# Активні ігри: (chat_id, message_id) -> гра
active_games: dict[tuple[int, int], LightsOutGame] = {}
lights_out_router = Router()


def _game_key(message: types.Message) -> tuple[int, int]:
    return message.chat.id, message.message_id


def get_or_create_game(bot: Bot, message: types.Message) -> LightsOutGame:
    """Повертає гру, прив'язану до повідомлення, або створює нову."""
    key = _game_key(message)
    game = active_games.get(key)
    if game is None:
        game = LightsOutGame(timing=TimingConfig.from_env())
        game.add_listener(MessageRenderer(bot, message.chat.id, message.message_id, last_text=MSG_MENU))
        active_games[key] = game
        logger.debug(f"Game {key}: created")
    return game


async def send_game_menu(message: types.Message) -> None:
    """Надсилає стартове меню гри."""
    snapshot = GameSnapshot(Phase.READY, (False,) * LIGHTS_TOTAL)
    await message.answer(MSG_MENU, reply_markup=create_lights_out_keyboard(snapshot))


async def start_lights_out(callback_query: types.CallbackQuery, bot: Bot):
    """Запускає новий раунд: вогні загоряються один за одним."""
    message = callback_query.message
    if not message:
        await callback_query.answer(MSG_ERROR_NO_MESSAGE, show_alert=True)
        return

    game = get_or_create_game(bot, message)
    if game.start():
        logger.info(f"Game {_game_key(message)}: started by user {callback_query.from_user.id}")
        await callback_query.answer(MSG_PREPARE)
    else:
        await callback_query.answer(MSG_ALREADY_RUNNING)


async def tap_lights_out(callback_query: types.CallbackQuery):
    """Обробляє натискання кнопки під час раунду."""
    message = callback_query.message
    game = active_games.get(_game_key(message)) if message else None
    if game is None:
        await callback_query.answer(MSG_GAME_OVER, show_alert=True)
        return

    reaction_millis = game.tap()
    if reaction_millis is not None:
        # Раунд завершено, результат уже передано рендереру
        active_games.pop(_game_key(message), None)
        await callback_query.answer(get_user_time_answer(int(round(reaction_millis))))
    elif game.phase in (Phase.SIGNALING, Phase.WAITING):
        # Фальстарт не штрафується, натискання просто ігнорується
        await callback_query.answer(MSG_TOO_EARLY)
    else:
        await callback_query.answer(MSG_GAME_OVER)


async def reset_lights_out(callback_query: types.CallbackQuery):
    """Скидає раунд до початкового меню."""
    message = callback_query.message
    game = active_games.pop(_game_key(message), None) if message else None
    if game is None:
        await callback_query.answer(MSG_GAME_OVER, show_alert=True)
        return

    game.reset()
    await callback_query.answer(MSG_RESET)


def shutdown_games() -> None:
    """Скидає всі активні ігри та скасовує їхні таймери."""
    for game in active_games.values():
        game.reset()
    active_games.clear()


def register_lights_out_handlers(dp: Router):
    """Реєструє всі обробники для гри 'Lights Out'."""
    dp.callback_query.register(start_lights_out, F.data == CB_START)
    dp.callback_query.register(tap_lights_out, F.data == CB_TAP)
    dp.callback_query.register(reset_lights_out, F.data == CB_RESET)
    logger.info("✅ Обробники для гри 'Lights Out' зареєстровано.")
