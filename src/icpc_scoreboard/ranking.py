import bisect
from functools import cmp_to_key
from typing import Iterable, List

from icpc_scoreboard.types import Team


def compare_teams(a: Team, b: Team) -> int:
    """Compares two teams under ICPC rules, negative when `a` ranks better than `b`.

    The chain is: more solved problems, less penalty, smaller latest solve times compared
    position by position, more solve times and finally the team name, so two different
    teams never compare equal.
    """
    if a.solved_count != b.solved_count:
        return -1 if a.solved_count > b.solved_count else 1
    if a.penalty != b.penalty:
        return -1 if a.penalty < b.penalty else 1

    for a_time, b_time in zip(a.solve_times, b.solve_times):
        if a_time != b_time:
            return -1 if a_time < b_time else 1
    # Unreachable while solve_times matches solved_count, kept so the order stays total
    if len(a.solve_times) != len(b.solve_times):
        return -1 if len(a.solve_times) > len(b.solve_times) else 1

    if a.name != b.name:
        return -1 if a.name < b.name else 1
    return 0


def outranks(a: Team, b: Team) -> bool:
    return compare_teams(a, b) < 0


def sort_teams(teams: Iterable[Team]) -> List[Team]:
    return sorted(teams, key=cmp_to_key(compare_teams))


def assign_ranks(ordering: List[Team]) -> None:
    for idx, team in enumerate(ordering):
        team.rank = idx + 1


def prospective_rank(team: Team, ordering: Iterable[Team]) -> int:
    """Rank the team would get after a full sort, without touching the current ordering."""
    return 1 + sum(1 for other in ordering if other is not team and outranks(other, team))


def insert_solve_time(solve_times: List[int], time: int) -> None:
    # First position whose value is <= time keeps the list descending
    position = bisect.bisect_left(solve_times, -time, key=lambda t: -t)
    solve_times.insert(position, time)
