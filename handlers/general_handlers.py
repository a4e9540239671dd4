"""
Головний модуль обробників загального призначення.

Цей файл містить логіку для:
- Обробки стартових команд (/start, /help, /play).
- Глобальної обробки помилок.
- Встановлення списку команд для меню бота.
"""
import html

from aiogram import Bot, Dispatcher, Router, types
from aiogram.filters import Command, CommandStart
from aiogram.types import BotCommand, BotCommandScopeDefault, Message
from aiogram.exceptions import TelegramAPIError

from config import BOT_TAGLINE, BOT_TITLE, logger
from games.lights_out.handlers import send_game_menu

general_router = Router()


# === ФУНКЦІЯ ДЛЯ ВСТАНОВЛЕННЯ КОМАНД БОТА ===
async def set_bot_commands(bot: Bot):
    commands = [
        BotCommand(command="start", description="🏁 Перезапустити бота"),
        BotCommand(command="play", description="🚦 Нова гра на реакцію"),
        BotCommand(command="help", description="❓ Як грати"),
    ]
    try:
        await bot.set_my_commands(commands, BotCommandScopeDefault())
        logger.info("✅ Список команд бота успішно оновлено.")
    except TelegramAPIError as e:
        logger.error(f"Помилка під час оновлення команд бота: {e}", exc_info=True)


# === ДОПОМІЖНІ ФУНКЦІЇ ===
def get_user_display_name(user: types.User | None) -> str:
    if not user:
        return "друже"
    if user.first_name and user.first_name.strip():
        return html.escape(user.first_name.strip())
    elif user.username and user.username.strip():
        return html.escape(user.username.strip())
    else:
        return "друже"


# === ЗАГАЛЬНІ ОБРОБНИКИ КОМАНД ===
@general_router.message(CommandStart())
async def cmd_start(message: Message):
    """Вітає користувача та показує меню гри."""
    name = get_user_display_name(message.from_user)
    await message.answer(f"Привіт, {name}! 👋\n\n<b>{BOT_TITLE}</b>: {BOT_TAGLINE}")
    await send_game_menu(message)


@general_router.message(Command("play"))
async def cmd_play(message: Message):
    await send_game_menu(message)


@general_router.message(Command("help"))
async def cmd_help(message: Message):
    await message.answer(
        "<b>Як грати</b>\n\n"
        "1. Натисни «Почати».\n"
        "2. П'ять червоних вогнів загоряться по черзі, потім усі згаснуть.\n"
        "3. Після випадкової паузи з'явиться сигнал 🏁, тисни кнопку!\n\n"
        "Натискання до сигналу ігноруються."
    )


# === ГЛОБАЛЬНА ОБРОБКА ПОМИЛОК ===
async def error_handler(event: types.ErrorEvent, bot: Bot):
    logger.error(f"Глобальна помилка: {event.exception}", exc_info=event.exception)
    chat_id, user_name = None, "друже"
    update = event.update
    if update.message:
        chat_id = update.message.chat.id
        user_name = get_user_display_name(update.message.from_user)
    elif update.callback_query and update.callback_query.message:
        chat_id = update.callback_query.message.chat.id
        user_name = get_user_display_name(update.callback_query.from_user)
        try:
            await update.callback_query.answer("Сталася помилка...", show_alert=False)
        except TelegramAPIError:
            logger.debug("Не вдалося відповісти на callback після помилки.")

    error_message_text = f"Вибач, {user_name}, сталася непередбачена помилка 😔"
    if isinstance(event.exception, TelegramAPIError):
        error_message_text = f"Упс, {user_name}, проблема з Telegram API 📡 Спробуй ще раз."

    if chat_id:
        try:
            await bot.send_message(chat_id, error_message_text)
        except TelegramAPIError as e:
            logger.error(f"Не вдалося надіслати повідомлення про помилку в чат {chat_id}: {e}")


# === РЕЄСТРАЦІЯ ОБРОБНИКІВ ===
def register_general_handlers(dp: Dispatcher):
    """Реєструє загальні обробники команд."""
    dp.include_router(general_router)
    logger.info("🚀 Загальні обробники команд успішно зареєстровано.")
