from dataclasses import dataclass
from typing import Optional, Union


class NotACommandError(Exception):
    pass


@dataclass(frozen=True)
class AddTeamCommand:
    name: str


@dataclass(frozen=True)
class StartCommand:
    duration: int
    problem_count: int


@dataclass(frozen=True)
class SubmitCommand:
    problem: str
    team: str
    verdict: str
    time: int


@dataclass(frozen=True)
class FlushCommand:
    pass


@dataclass(frozen=True)
class FreezeCommand:
    pass


@dataclass(frozen=True)
class ScrollCommand:
    pass


@dataclass(frozen=True)
class QueryRankingCommand:
    team: str


@dataclass(frozen=True)
class QuerySubmissionCommand:
    team: str
    # None means any problem / any verdict
    problem: Optional[str]
    verdict: Optional[str]


@dataclass(frozen=True)
class EndCommand:
    pass


Command = Union[
    AddTeamCommand,
    StartCommand,
    SubmitCommand,
    FlushCommand,
    FreezeCommand,
    ScrollCommand,
    QueryRankingCommand,
    QuerySubmissionCommand,
    EndCommand,
]
