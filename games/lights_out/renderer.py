"""
Відображення стану гри у Telegram-повідомленні.

`MessageRenderer` підписується на зміни стану `LightsOutGame` і редагує
ігрове повідомлення. Редагування виконуються строго по черзі.
"""
import asyncio

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError

from config import logger
from games.lights_out.keyboards import create_lights_out_keyboard
from games.lights_out.messages import render_snapshot
from games.lights_out.state_machine import GameSnapshot


class MessageRenderer:
    """Слухач гри, що оновлює одне повідомлення в чаті."""

    def __init__(self, bot: Bot, chat_id: int, message_id: int, last_text: str | None = None):
        self._bot = bot
        self._chat_id = chat_id
        self._message_id = message_id
        self._lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()
        self._last_text = last_text

    def __call__(self, snapshot: GameSnapshot) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"Game ({self._message_id}): no running loop, skipping render of {snapshot.phase.value}")
            return
        task = loop.create_task(self._render(snapshot))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def drain(self) -> None:
        """Чекає, доки всі заплановані редагування завершаться."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def _render(self, snapshot: GameSnapshot) -> None:
        text = render_snapshot(snapshot)
        # asyncio.Lock будить очікувачів у порядку FIFO
        async with self._lock:
            if text == self._last_text:
                return
            try:
                await self._bot.edit_message_text(
                    text=text,
                    chat_id=self._chat_id,
                    message_id=self._message_id,
                    reply_markup=create_lights_out_keyboard(snapshot),
                )
                self._last_text = text
            except TelegramAPIError as e:
                logger.warning(
                    f"Game ({self._message_id}): could not render phase "
                    f"{snapshot.phase.value}: {e}"
                )
