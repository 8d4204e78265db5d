import html
import logging
from typing import List, Optional

import telegram.error
from telegram import Bot
from telegram.constants import ParseMode

from icpc_scoreboard import settings
from icpc_scoreboard.types import RankChangeEvent

logger = logging.getLogger(__name__)

_MESSAGE_SIZE_LIMIT = 4096


def _format_code(code: str) -> str:
    return f"<code>{html.escape(code)}</code>"


def _get_rank_change_summary(event: RankChangeEvent) -> str:
    problems = "1 problem" if event.solved_count == 1 else f"{event.solved_count} problems"
    return (f"Team {_format_code(event.team)} climbed from #{event.old_rank} to <b>#{event.new_rank}</b>, "
            f"passing {_format_code(event.displaced_team)} with {problems} in {event.penalty} minutes")


class TelegramNotifier:
    """Broadcasts rank changes revealed while scrolling to a single Telegram chat."""

    _bot: Bot
    _chat_id: int
    _initialized: bool = False

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self._bot = bot
        self._chat_id = chat_id

    @staticmethod
    def from_settings() -> Optional["TelegramNotifier"]:
        if not settings.TELEGRAM_BOT_TOKEN or not settings.TELEGRAM_CHAT_ID:
            logger.debug("Telegram is not configured, rank changes will not be broadcast")
            return None
        return TelegramNotifier(Bot(settings.TELEGRAM_BOT_TOKEN), settings.TELEGRAM_CHAT_ID)

    async def start_running(self) -> None:
        await self._bot.initialize()
        self._initialized = True

    async def stop_running(self) -> None:
        if self._initialized:
            await self._bot.shutdown()
            self._initialized = False

    async def notify_rank_changes(self, events: List[RankChangeEvent]) -> None:
        if not events:
            return
        await self.send_message("\n".join(map(_get_rank_change_summary, events)))

    async def send_message(self, text: str) -> None:
        if len(text) > _MESSAGE_SIZE_LIMIT:
            logger.debug(f"Shortening long message from {len(text)} to {_MESSAGE_SIZE_LIMIT} characters")
            text = f"{text[:_MESSAGE_SIZE_LIMIT - 3]}..."

        try:
            await self._bot.send_message(chat_id=self._chat_id, text=text, parse_mode=ParseMode.HTML)
        except telegram.error.Forbidden:
            logger.info(f"Blocked by chat {self._chat_id}, rank changes will not be delivered")
        except telegram.error.TelegramError:
            logger.exception("Could not send Telegram message")
