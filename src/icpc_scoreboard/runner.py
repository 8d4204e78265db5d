import logging
from dataclasses import dataclass, field
from typing import List, Optional

from icpc_scoreboard import formatter
from icpc_scoreboard.parser_types import (
    AddTeamCommand, Command, EndCommand, FlushCommand, FreezeCommand, QueryRankingCommand, QuerySubmissionCommand,
    ScrollCommand, StartCommand, SubmitCommand,
)
from icpc_scoreboard.scoreboard import Scoreboard
from icpc_scoreboard.types import RankChangeEvent, ScoreboardError, SubmissionNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    lines: List[str] = field(default_factory=list)
    events: List[RankChangeEvent] = field(default_factory=list)
    ended: bool = False


class ScoreboardRunner:
    """Executes parsed commands against a scoreboard and renders their output."""

    def __init__(self, scoreboard: Optional[Scoreboard] = None) -> None:
        self.scoreboard = scoreboard or Scoreboard()

    def execute(self, command: Command) -> CommandResult:
        if isinstance(command, AddTeamCommand):
            return self._run("add_team", self._add_team, command)
        if isinstance(command, StartCommand):
            return self._run("start", self._start, command)
        if isinstance(command, SubmitCommand):
            return self._run("submit", self._submit, command)
        if isinstance(command, FlushCommand):
            self.scoreboard.refresh()
            return CommandResult(lines=[formatter.FLUSH_OK])
        if isinstance(command, FreezeCommand):
            return self._run("freeze", self._freeze, command)
        if isinstance(command, ScrollCommand):
            return self._run("scroll", self._scroll, command)
        if isinstance(command, QueryRankingCommand):
            return self._run("query_rank", self._query_rank, command)
        if isinstance(command, QuerySubmissionCommand):
            return self._run("query_last_submission", self._query_submission, command)
        if isinstance(command, EndCommand):
            return CommandResult(lines=[formatter.END_OK], ended=True)
        raise TypeError(f"Unsupported command {command!r}")

    def _run(self, operation: str, handler, command: Command) -> CommandResult:
        try:
            return handler(command)
        except ScoreboardError as e:
            logger.debug(f"{operation} was rejected: {e}")
            return CommandResult(lines=[formatter.format_error(operation, e)])

    def _add_team(self, command: AddTeamCommand) -> CommandResult:
        self.scoreboard.add_team(command.name)
        return CommandResult(lines=[formatter.ADD_TEAM_OK])

    def _start(self, command: StartCommand) -> CommandResult:
        self.scoreboard.start(command.duration, command.problem_count)
        return CommandResult(lines=[formatter.START_OK])

    def _submit(self, command: SubmitCommand) -> CommandResult:
        # Submissions are silent in the protocol
        self.scoreboard.submit(command.problem, command.team, command.verdict, command.time)
        return CommandResult()

    def _freeze(self, _: FreezeCommand) -> CommandResult:
        self.scoreboard.freeze()
        return CommandResult(lines=[formatter.FREEZE_OK])

    def _scroll(self, _: ScrollCommand) -> CommandResult:
        result = self.scoreboard.scroll()
        lines = [formatter.SCROLL_OK]
        lines.extend(formatter.format_scoreboard(result.before))
        lines.extend(formatter.format_rank_change(event) for event in result.events)
        lines.extend(formatter.format_scoreboard(result.after))
        return CommandResult(lines=lines, events=list(result.events))

    def _query_rank(self, command: QueryRankingCommand) -> CommandResult:
        query = self.scoreboard.query_rank(command.team)
        return CommandResult(lines=formatter.format_rank_query(query))

    def _query_submission(self, command: QuerySubmissionCommand) -> CommandResult:
        try:
            submission = self.scoreboard.query_last_submission(command.team, command.problem, command.verdict)
        except SubmissionNotFoundError:
            return CommandResult(lines=[formatter.QUERY_SUBMISSION_OK, formatter.NO_SUBMISSION_FOUND])
        return CommandResult(lines=[formatter.QUERY_SUBMISSION_OK, formatter.format_submission(submission)])
