from typing import Callable, Dict, List, Optional, Tuple

from icpc_scoreboard.parser_types import (
    AddTeamCommand, Command, EndCommand, FlushCommand, FreezeCommand, NotACommandError, QueryRankingCommand,
    QuerySubmissionCommand, ScrollCommand, StartCommand, SubmitCommand,
)


ANY_FILTER = "ALL"

_PROBLEM_FILTER_PREFIX = "PROBLEM="
_STATUS_FILTER_PREFIX = "STATUS="


def _expect_keyword(tokens: List[str], idx: int, keyword: str) -> None:
    if tokens[idx] != keyword:
        raise NotACommandError(f"Expected {keyword} but found {tokens[idx]}")


def _parse_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise NotACommandError(f"Expected an integer but found {text}")
    if value < 0:
        raise NotACommandError(f"Expected a non-negative integer but found {text}")
    return value


def _parse_filter(text: str, prefix: str) -> Optional[str]:
    if not text.startswith(prefix):
        raise NotACommandError(f"Expected {prefix} but found {text}")
    value = text[len(prefix):]
    if not value:
        raise NotACommandError(f"Missing value for {prefix}")
    return None if value == ANY_FILTER else value


def _parse_add_team(tokens: List[str]) -> Command:
    return AddTeamCommand(name=tokens[1])


def _parse_start(tokens: List[str]) -> Command:
    # START DURATION <duration> PROBLEM <count>
    _expect_keyword(tokens, 1, "DURATION")
    _expect_keyword(tokens, 3, "PROBLEM")
    return StartCommand(duration=_parse_int(tokens[2]), problem_count=_parse_int(tokens[4]))


def _parse_submit(tokens: List[str]) -> Command:
    # SUBMIT <problem> BY <team> WITH <verdict> AT <time>
    _expect_keyword(tokens, 2, "BY")
    _expect_keyword(tokens, 4, "WITH")
    _expect_keyword(tokens, 6, "AT")
    return SubmitCommand(problem=tokens[1], team=tokens[3], verdict=tokens[5], time=_parse_int(tokens[7]))


def _parse_query_ranking(tokens: List[str]) -> Command:
    return QueryRankingCommand(team=tokens[1])


def _parse_query_submission(tokens: List[str]) -> Command:
    # QUERY_SUBMISSION <team> WHERE PROBLEM=<problem> AND STATUS=<verdict>
    _expect_keyword(tokens, 2, "WHERE")
    _expect_keyword(tokens, 4, "AND")
    return QuerySubmissionCommand(
        team=tokens[1],
        problem=_parse_filter(tokens[3], _PROBLEM_FILTER_PREFIX),
        verdict=_parse_filter(tokens[5], _STATUS_FILTER_PREFIX),
    )


# Command name -> (token count, parser)
_PARSERS: Dict[str, Tuple[int, Callable[[List[str]], Command]]] = {
    "ADDTEAM": (2, _parse_add_team),
    "START": (5, _parse_start),
    "SUBMIT": (8, _parse_submit),
    "FLUSH": (1, lambda _: FlushCommand()),
    "FREEZE": (1, lambda _: FreezeCommand()),
    "SCROLL": (1, lambda _: ScrollCommand()),
    "QUERY_RANKING": (2, _parse_query_ranking),
    "QUERY_SUBMISSION": (6, _parse_query_submission),
    "END": (1, lambda _: EndCommand()),
}


def parse_command(line: str) -> Command:
    """Parses one line of the scoreboard protocol into a command."""
    tokens = line.split()
    if not tokens:
        raise NotACommandError("Empty line")

    name = tokens[0]
    if name not in _PARSERS:
        raise NotACommandError(f"Unknown command {name}")

    token_count, parse = _PARSERS[name]
    if len(tokens) != token_count:
        raise NotACommandError(f"{name} expects {token_count - 1} arguments but got {len(tokens) - 1}")
    return parse(tokens)
