import enum
from dataclasses import dataclass, field
from typing import List, Optional


ACCEPTED_VERDICT = "Accepted"

WRONG_ATTEMPT_PENALTY = 20

FIRST_PROBLEM = "A"

MAX_PROBLEMS = 26


@enum.unique
class ErrorCode(enum.Enum):
    ALREADY_STARTED = "already_started"
    DUPLICATE_NAME = "duplicate_name"
    ALREADY_FROZEN = "already_frozen"
    NOT_FROZEN = "not_frozen"
    UNKNOWN_TEAM = "unknown_team"
    NOT_FOUND = "not_found"
    NOT_STARTED = "not_started"
    UNKNOWN_PROBLEM = "unknown_problem"
    INVALID_PROBLEM_COUNT = "invalid_problem_count"


class ScoreboardError(Exception):
    code: ErrorCode


class AlreadyStartedError(ScoreboardError):
    code = ErrorCode.ALREADY_STARTED


class DuplicateNameError(ScoreboardError):
    code = ErrorCode.DUPLICATE_NAME


class AlreadyFrozenError(ScoreboardError):
    code = ErrorCode.ALREADY_FROZEN


class NotFrozenError(ScoreboardError):
    code = ErrorCode.NOT_FROZEN


class UnknownTeamError(ScoreboardError):
    code = ErrorCode.UNKNOWN_TEAM


class SubmissionNotFoundError(ScoreboardError):
    code = ErrorCode.NOT_FOUND


class NotStartedError(ScoreboardError):
    code = ErrorCode.NOT_STARTED


class UnknownProblemError(ScoreboardError):
    code = ErrorCode.UNKNOWN_PROBLEM


class InvalidProblemCountError(ScoreboardError):
    code = ErrorCode.INVALID_PROBLEM_COUNT


@dataclass(frozen=True)
class Submission:
    problem: str
    team: str
    verdict: str
    time: int

    @property
    def is_accepted(self) -> bool:
        return self.verdict == ACCEPTED_VERDICT


@dataclass
class ProblemStatus:
    solved: bool = False
    # Only counts attempts judged while live and before the problem was solved
    wrong_attempts: int = 0
    solve_time: Optional[int] = None
    pending: List[Submission] = field(default_factory=list)

    @property
    def pending_count(self) -> int:
        return len(self.pending)


@dataclass
class Team:
    name: str
    solved_count: int = 0
    penalty: int = 0
    # Descending, one entry per solved problem
    solve_times: List[int] = field(default_factory=list)
    problems: List[ProblemStatus] = field(default_factory=list)
    submissions: List[Submission] = field(default_factory=list)
    rank: int = 0

    @property
    def has_pending(self) -> bool:
        return any(problem.pending_count for problem in self.problems)


@dataclass(frozen=True)
class RankChangeEvent:
    team: str
    displaced_team: str
    solved_count: int
    penalty: int
    old_rank: int
    new_rank: int


@enum.unique
class CellKind(enum.Enum):
    UNATTEMPTED = "unattempted"
    SOLVED = "solved"
    PENDING = "pending"
    FAILED = "failed"


@dataclass(frozen=True)
class ProblemCell:
    kind: CellKind
    wrong_attempts: int = 0
    pending_count: int = 0

    @staticmethod
    def from_status(status: ProblemStatus) -> "ProblemCell":
        if status.solved and not status.pending_count:
            return ProblemCell(kind=CellKind.SOLVED, wrong_attempts=status.wrong_attempts)
        if status.pending_count:
            return ProblemCell(kind=CellKind.PENDING, wrong_attempts=status.wrong_attempts,
                               pending_count=status.pending_count)
        if status.wrong_attempts:
            return ProblemCell(kind=CellKind.FAILED, wrong_attempts=status.wrong_attempts)
        return ProblemCell(kind=CellKind.UNATTEMPTED)


@dataclass(frozen=True)
class ScoreboardRow:
    team: str
    rank: int
    solved_count: int
    penalty: int
    cells: List[ProblemCell]


@dataclass(frozen=True)
class RankQuery:
    team: str
    rank: int
    provisional: bool


@dataclass(frozen=True)
class ScrollResult:
    before: List[ScoreboardRow]
    events: List[RankChangeEvent]
    after: List[ScoreboardRow]
