"""
Tests for broadcasting rank changes to Telegram
"""
import asyncio
from unittest.mock import AsyncMock

import telegram.error
from telegram.constants import ParseMode

from icpc_scoreboard.telegram_notifier import TelegramNotifier
from icpc_scoreboard.types import RankChangeEvent


def _event(team: str = "Alpha", displaced: str = "Beta") -> RankChangeEvent:
    return RankChangeEvent(team=team, displaced_team=displaced, solved_count=2, penalty=130, old_rank=3, new_rank=1)


def test_notify_rank_changes_sends_html_message():
    bot = AsyncMock()
    notifier = TelegramNotifier(bot, chat_id=42)

    asyncio.run(notifier.notify_rank_changes([_event(), _event("<Gamma>", "Alpha")]))

    bot.send_message.assert_awaited_once()
    kwargs = bot.send_message.await_args.kwargs
    assert kwargs["chat_id"] == 42
    assert kwargs["parse_mode"] == ParseMode.HTML
    lines = kwargs["text"].split("\n")
    assert lines[0] == ("Team <code>Alpha</code> climbed from #3 to <b>#1</b>, "
                        "passing <code>Beta</code> with 2 problems in 130 minutes")
    assert "<code>&lt;Gamma&gt;</code>" in lines[1]


def test_no_message_without_events():
    bot = AsyncMock()
    asyncio.run(TelegramNotifier(bot, chat_id=42).notify_rank_changes([]))
    bot.send_message.assert_not_awaited()


def test_long_messages_are_shortened():
    bot = AsyncMock()
    asyncio.run(TelegramNotifier(bot, chat_id=1).send_message("x" * 5000))
    text = bot.send_message.await_args.kwargs["text"]
    assert len(text) == 4096
    assert text.endswith("...")


def test_delivery_errors_are_logged(caplog):
    bot = AsyncMock()
    bot.send_message.side_effect = telegram.error.NetworkError("down")
    asyncio.run(TelegramNotifier(bot, chat_id=1).send_message("hello"))
    assert "Could not send Telegram message" in caplog.text

    bot.send_message.side_effect = telegram.error.Forbidden("blocked")
    asyncio.run(TelegramNotifier(bot, chat_id=1).send_message("hello"))


def test_start_and_stop_manage_the_bot():
    bot = AsyncMock()
    notifier = TelegramNotifier(bot, chat_id=1)
    asyncio.run(notifier.stop_running())
    bot.shutdown.assert_not_awaited()

    async def lifecycle():
        await notifier.start_running()
        await notifier.stop_running()

    asyncio.run(lifecycle())
    bot.initialize.assert_awaited_once()
    bot.shutdown.assert_awaited_once()
