"""
Tests for the line protocol parser
"""
import pytest

from icpc_scoreboard.parser import parse_command
from icpc_scoreboard.parser_types import (
    AddTeamCommand,
    EndCommand,
    FlushCommand,
    FreezeCommand,
    NotACommandError,
    QueryRankingCommand,
    QuerySubmissionCommand,
    ScrollCommand,
    StartCommand,
    SubmitCommand,
)


@pytest.mark.parametrize("line, expected", [
    ("ADDTEAM Gators", AddTeamCommand(name="Gators")),
    ("START DURATION 300 PROBLEM 12", StartCommand(duration=300, problem_count=12)),
    ("SUBMIT C BY Gators WITH Wrong_Answer AT 45",
     SubmitCommand(problem="C", team="Gators", verdict="Wrong_Answer", time=45)),
    ("FLUSH", FlushCommand()),
    ("FREEZE", FreezeCommand()),
    ("SCROLL", ScrollCommand()),
    ("QUERY_RANKING Gators", QueryRankingCommand(team="Gators")),
    ("END", EndCommand()),
])
def test_parse_command(line, expected):
    assert parse_command(line) == expected


def test_parse_tolerates_surrounding_whitespace():
    assert parse_command("  SUBMIT A BY t1 WITH Accepted AT 0 \n") == SubmitCommand(
        problem="A", team="t1", verdict="Accepted", time=0)


def test_parse_query_submission_filters():
    command = parse_command("QUERY_SUBMISSION Gators WHERE PROBLEM=ALL AND STATUS=Accepted")
    assert command == QuerySubmissionCommand(team="Gators", problem=None, verdict="Accepted")

    command = parse_command("QUERY_SUBMISSION Gators WHERE PROBLEM=B AND STATUS=ALL")
    assert command == QuerySubmissionCommand(team="Gators", problem="B", verdict=None)


@pytest.mark.parametrize("line", [
    "",
    "   ",
    "HELLO world",
    "ADDTEAM",
    "ADDTEAM two names",
    "START DURATION abc PROBLEM 3",
    "START DURATION -5 PROBLEM 3",
    "START TIME 300 PROBLEM 3",
    "SUBMIT A FROM t1 WITH Accepted AT 3",
    "SUBMIT A BY t1 WITH Accepted AT",
    "QUERY_SUBMISSION t1 WHERE TEAM=A AND STATUS=ALL",
    "QUERY_SUBMISSION t1 WHERE PROBLEM= AND STATUS=ALL",
    "flush",
])
def test_parse_rejects_malformed_lines(line):
    with pytest.raises(NotACommandError):
        parse_command(line)
