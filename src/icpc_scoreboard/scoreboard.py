import logging
from typing import Dict, List, Optional, Tuple

from icpc_scoreboard.ranking import assign_ranks, insert_solve_time, prospective_rank, sort_teams
from icpc_scoreboard.types import (
    FIRST_PROBLEM, MAX_PROBLEMS, WRONG_ATTEMPT_PENALTY, AlreadyFrozenError, AlreadyStartedError, DuplicateNameError,
    InvalidProblemCountError, NotFrozenError, NotStartedError, ProblemCell, ProblemStatus, RankChangeEvent, RankQuery,
    ScoreboardRow, ScrollResult, Submission, SubmissionNotFoundError, Team, UnknownProblemError, UnknownTeamError,
)

logger = logging.getLogger(__name__)


def _judge(team: Team, status: ProblemStatus, submission: Submission) -> None:
    """Applies a visible verdict to an unsolved problem."""
    if submission.is_accepted:
        status.solved = True
        status.solve_time = submission.time
        team.solved_count += 1
        team.penalty += WRONG_ATTEMPT_PENALTY * status.wrong_attempts + submission.time
        insert_solve_time(team.solve_times, submission.time)
    else:
        status.wrong_attempts += 1


class Scoreboard:
    """Live ICPC scoreboard with freeze and scroll support.

    Teams are registered before the contest starts. While frozen, submissions to unsolved problems
    are kept as pending and only judged when the scoreboard is scrolled.
    """

    def __init__(self) -> None:
        self._teams: Dict[str, Team] = {}
        # Ranked order as of the last sort, ordering[i].rank == i + 1
        self._ordering: List[Team] = []
        self._started = False
        self._frozen = False
        self._duration = 0
        self._problem_count = 0

    @property
    def started(self) -> bool:
        return self._started

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def problem_count(self) -> int:
        return self._problem_count

    @property
    def problem_names(self) -> List[str]:
        return [chr(ord(FIRST_PROBLEM) + idx) for idx in range(self._problem_count)]

    @property
    def teams(self) -> List[Team]:
        return list(self._ordering)

    def add_team(self, name: str) -> Team:
        if self._started:
            raise AlreadyStartedError(f"Cannot add team {name}, the contest has started")
        if name in self._teams:
            raise DuplicateNameError(f"Team {name} already exists")

        team = Team(name=name)
        self._teams[name] = team
        self._ordering.append(team)
        self.refresh()
        logger.debug(f"Added team {name}")
        return team

    def start(self, duration: int, problem_count: int) -> None:
        if self._started:
            raise AlreadyStartedError("The contest has already started")
        if not 0 < problem_count <= MAX_PROBLEMS:
            raise InvalidProblemCountError(
                f"Problem count must be between 1 and {MAX_PROBLEMS}, got {problem_count}")

        self._started = True
        self._duration = duration
        self._problem_count = problem_count
        for team in self._teams.values():
            team.problems = [ProblemStatus() for _ in range(problem_count)]
        self.refresh()
        logger.info(f"Contest started with {len(self._teams)} teams and {problem_count} problems "
                    f"for {duration} minutes")

    def submit(self, problem: str, team_name: str, verdict: str, time: int) -> Submission:
        if not self._started:
            raise NotStartedError("Cannot submit before the contest starts")
        team = self._get_team(team_name)
        status = team.problems[self._problem_index(problem)]

        submission = Submission(problem=problem, team=team_name, verdict=verdict, time=time)
        team.submissions.append(submission)

        if status.solved:
            # Anything after the first acceptance is ignored
            return submission
        if self._frozen:
            status.pending.append(submission)
        else:
            _judge(team, status, submission)
        return submission

    def refresh(self) -> None:
        self._ordering = sort_teams(self._ordering)
        assign_ranks(self._ordering)

    def freeze(self) -> None:
        if not self._started:
            raise NotStartedError("Cannot freeze before the contest starts")
        if self._frozen:
            raise AlreadyFrozenError("The scoreboard is already frozen")
        self._frozen = True
        logger.info("Scoreboard frozen")

    def scroll(self) -> ScrollResult:
        """Reveals every pending submission, reporting each team that climbs.

        The lowest ranked team with pending submissions has its earliest problem resolved first, then
        the scoreboard is sorted again, until nothing is pending.
        """
        if not self._frozen:
            raise NotFrozenError("The scoreboard is not frozen")

        logger.info("Scrolling the scoreboard")
        self.refresh()
        before = self.snapshot()

        events: List[RankChangeEvent] = []
        while True:
            target = self._next_pending()
            if not target:
                break

            team, problem_idx = target
            old_rank = team.rank
            self._resolve(team, team.problems[problem_idx])

            # Must be computed against the ordering before the sort to know who gets displaced
            new_rank = prospective_rank(team, self._ordering)
            displaced: Optional[Team] = None
            if new_rank < old_rank:
                displaced = self._ordering[new_rank - 1]

            self.refresh()

            if displaced:
                event = RankChangeEvent(team=team.name, displaced_team=displaced.name,
                                        solved_count=team.solved_count, penalty=team.penalty,
                                        old_rank=old_rank, new_rank=new_rank)
                logger.debug(f"Team {team.name} climbed from #{old_rank} to #{new_rank} over {displaced.name}")
                events.append(event)

        self._frozen = False
        logger.info(f"Scoreboard unfrozen after {len(events)} rank changes")
        return ScrollResult(before=before, events=events, after=self.snapshot())

    def query_rank(self, team_name: str) -> RankQuery:
        team = self._get_team(team_name)
        return RankQuery(team=team.name, rank=team.rank, provisional=self._frozen)

    def query_last_submission(
            self,
            team_name: str,
            problem: Optional[str] = None,
            verdict: Optional[str] = None,
    ) -> Submission:
        """Finds the most recent submission of the team, None filters match anything."""
        team = self._get_team(team_name)
        for submission in reversed(team.submissions):
            if problem is not None and submission.problem != problem:
                continue
            if verdict is not None and submission.verdict != verdict:
                continue
            return submission
        raise SubmissionNotFoundError(f"Team {team_name} has no matching submission")

    def snapshot(self) -> List[ScoreboardRow]:
        return [
            ScoreboardRow(
                team=team.name,
                rank=team.rank,
                solved_count=team.solved_count,
                penalty=team.penalty,
                cells=[ProblemCell.from_status(status) for status in team.problems],
            )
            for team in self._ordering
        ]

    def _get_team(self, team_name: str) -> Team:
        team = self._teams.get(team_name)
        if not team:
            raise UnknownTeamError(f"Team {team_name} does not exist")
        return team

    def _problem_index(self, problem: str) -> int:
        idx = ord(problem) - ord(FIRST_PROBLEM) if len(problem) == 1 else -1
        if not 0 <= idx < self._problem_count:
            raise UnknownProblemError(f"Problem {problem} is not part of the contest")
        return idx

    def _next_pending(self) -> Optional[Tuple[Team, int]]:
        for team in reversed(self._ordering):
            if not team.has_pending:
                continue
            for idx, status in enumerate(team.problems):
                if status.pending_count:
                    return team, idx
        return None

    def _resolve(self, team: Team, status: ProblemStatus) -> None:
        for submission in status.pending:
            if status.solved:
                break
            _judge(team, status, submission)
        status.pending.clear()
