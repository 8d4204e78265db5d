import asyncio
import logging
import sys
from typing import Optional, TextIO

from icpc_scoreboard import settings
from icpc_scoreboard.parser import parse_command
from icpc_scoreboard.parser_types import NotACommandError
from icpc_scoreboard.runner import ScoreboardRunner
from icpc_scoreboard.telegram_notifier import TelegramNotifier

logger = logging.getLogger(__name__)


async def start(
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
        notifier: Optional[TelegramNotifier] = None,
) -> None:
    logging.basicConfig(level=logging.INFO)
    logging.getLogger('icpc_scoreboard').setLevel(settings.LOG_LEVEL)

    if notifier is None:
        notifier = TelegramNotifier.from_settings()
    if notifier:
        await notifier.start_running()

    runner = ScoreboardRunner()
    try:
        while True:
            # Blocking read, kept off the event loop
            line = await asyncio.to_thread(input_stream.readline)
            if not line:
                break

            try:
                command = parse_command(line)
            except NotACommandError as e:
                if line.strip():
                    logger.warning(f"Skipping line {line.strip()!r}: {e}")
                continue

            result = runner.execute(command)
            for output_line in result.lines:
                output_stream.write(f"{output_line}\n")
            output_stream.flush()

            if notifier and result.events:
                await notifier.notify_rank_changes(result.events)
            if result.ended:
                break
    finally:
        if notifier:
            await notifier.stop_running()


def _setup_cloud_logging() -> None:
    # Delay import so the client is only required when enabled
    import google.cloud.logging
    client = google.cloud.logging.Client()
    client.setup_logging()


def main() -> None:
    if settings.USE_CLOUD_LOGGING:
        _setup_cloud_logging()
    try:
        asyncio.run(start())
    except KeyboardInterrupt:
        pass
