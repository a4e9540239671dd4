import asyncio
import os
from datetime import datetime, timezone

from aiogram import Bot, Dispatcher, types
from aiogram.enums import ParseMode
from aiogram.client.default import DefaultBotProperties
from aiogram.exceptions import TelegramAPIError

# Імпорти з проєкту
from config import ADMIN_USER_ID, BOT_TITLE, TELEGRAM_BOT_TOKEN, logger
from games.lights_out.handlers import register_lights_out_handlers, shutdown_games
from games.lights_out.timing import TimingConfig
from handlers.general_handlers import (
    register_general_handlers,
    set_bot_commands,
    error_handler as general_error_handler,
)

BOT_VERSION = "v1.0.0"


async def notify_admin(bot: Bot, username: str | None) -> None:
    """Надсилає адміну повідомлення про запуск."""
    timing = TimingConfig.from_env()
    launch_time = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S %Z')
    admin_message_lines = [
        f"🤖 <b>{BOT_TITLE} {BOT_VERSION} запущено!</b>",
        "",
        f"🆔 @{username}",
        f"⏰ {launch_time}",
        f"🚦 Пауза перед стартом: {timing.min_go_delay}–{timing.max_go_delay} с"
        + ("" if timing.randomize_go else " (вимкнено)"),
        "🟢 Готовий до роботи!"
    ]
    try:
        await bot.send_message(str(ADMIN_USER_ID), "\n".join(admin_message_lines))
        logger.info(f"Повідомлення про запуск надіслано адміну ID: {ADMIN_USER_ID}")
    except TelegramAPIError as e:
        logger.warning(f"Не вдалося надіслати повідомлення про запуск адміну (ID: {ADMIN_USER_ID}): {e}", exc_info=True)


async def main() -> None:
    """Головна функція запуску бота."""
    logger.info(f"🚀 Запуск {BOT_TITLE} {BOT_VERSION}... (PID: {os.getpid()})")

    if not TELEGRAM_BOT_TOKEN:
        logger.critical("❌ TELEGRAM_BOT_TOKEN повинен бути встановлений в .env файлі")
        raise RuntimeError("❌ Встанови TELEGRAM_BOT_TOKEN в .env файлі")

    # Невалідні таймінги мають зупинити запуск одразу, а не посеред гри
    TimingConfig.from_env()

    bot = Bot(token=TELEGRAM_BOT_TOKEN, default=DefaultBotProperties(parse_mode=ParseMode.HTML))
    dp = Dispatcher()

    await set_bot_commands(bot)

    # --- РЕЄСТРАЦІЯ ВСІХ РОУТЕРІВ ---
    register_lights_out_handlers(dp)
    register_general_handlers(dp)

    # Реєстрація глобального обробника помилок
    @dp.errors()
    async def global_error_handler_wrapper(event: types.ErrorEvent):
        logger.debug(f"Global error wrapper caught exception: {event.exception} in update: {event.update}")
        await general_error_handler(event, bot)

    try:
        bot_info = await bot.get_me()
        logger.info(f"✅ Бот @{bot_info.username} (ID: {bot_info.id}) успішно авторизований!")
        if ADMIN_USER_ID:
            await notify_admin(bot, bot_info.username)

        logger.info("Розпочинаю polling...")
        await bot.delete_webhook(drop_pending_updates=True)
        await dp.start_polling(bot)
    except KeyboardInterrupt:
        logger.info("👋 Бот зупинено користувачем (KeyboardInterrupt).")
    except Exception as e:
        logger.critical(f"Непередбачена критична помилка під час запуску або роботи: {e}", exc_info=True)
    finally:
        logger.info("🛑 Зупинка бота та закриття сесій...")
        shutdown_games()
        if bot.session:
            try:
                await bot.session.close()
                logger.info("Сесію HTTP клієнта Bot закрито.")
            except Exception as e:
                logger.error(f"Помилка під час закриття сесії HTTP клієнта Bot: {e}", exc_info=True)

        logger.info("👋 Бот остаточно зупинено.")

if __name__ == "__main__":
    asyncio.run(main())
