"""
Tests for the ICPC ranking order
"""
import itertools
import random
from typing import List, Optional

from icpc_scoreboard.ranking import (
    assign_ranks,
    compare_teams,
    insert_solve_time,
    outranks,
    prospective_rank,
    sort_teams,
)
from icpc_scoreboard.types import Team


def _team(name: str, solve_times: List[int] = (), penalty: Optional[int] = None) -> Team:
    times = sorted(solve_times, reverse=True)
    return Team(
        name=name,
        solved_count=len(times),
        penalty=sum(times) if penalty is None else penalty,
        solve_times=times,
    )


def test_more_solved_ranks_better():
    a = _team("a", [100, 200])
    b = _team("b", [10])
    assert outranks(a, b)
    assert not outranks(b, a)


def test_less_penalty_ranks_better():
    a = _team("a", [10, 30])
    b = _team("b", [10, 20])
    assert compare_teams(b, a) < 0


def test_smaller_latest_solve_time_ranks_better():
    # Same count and penalty, b solved its last problem earlier
    a = _team("a", [50, 10])
    b = _team("b", [40, 20])
    assert a.penalty == b.penalty
    assert outranks(b, a)


def test_solve_times_compared_position_by_position():
    a = _team("a", [50, 30, 10], penalty=90)
    b = _team("b", [50, 20, 20], penalty=90)
    assert outranks(b, a)


def test_longer_solve_time_list_ranks_better_when_prefix():
    # Not reachable through submissions, the order must still be total
    a = Team(name="a", solved_count=2, penalty=60, solve_times=[50])
    b = Team(name="b", solved_count=2, penalty=60, solve_times=[50, 10])
    assert outranks(b, a)


def test_name_breaks_ties():
    a = _team("alpha", [10])
    b = _team("beta", [10])
    assert outranks(a, b)
    assert compare_teams(a, a) == 0


def test_sort_and_assign_ranks():
    teams = [_team("c"), _team("b", [30]), _team("a"), _team("d", [20])]
    ordering = sort_teams(teams)
    assign_ranks(ordering)
    assert [t.name for t in ordering] == ["d", "b", "a", "c"]
    assert [t.rank for t in ordering] == [1, 2, 3, 4]


def test_prospective_rank_ignores_the_team_itself():
    ordering = sort_teams([_team("a", [10]), _team("b"), _team("c")])
    climber = ordering[-1]
    climber.solved_count = 2
    climber.penalty = 50
    climber.solve_times = [40, 10]
    assert prospective_rank(climber, ordering) == 1
    assert prospective_rank(ordering[1], ordering) == 3


def test_insert_solve_time_keeps_descending_order():
    times: List[int] = []
    for time in [30, 10, 50, 30, 0, 50]:
        insert_solve_time(times, time)
    assert times == [50, 50, 30, 30, 10, 0]


def _random_team(rng: random.Random, idx: int) -> Team:
    solved = rng.randint(0, 3)
    times = sorted((rng.randint(0, 5) for _ in range(solved)), reverse=True)
    penalty = sum(times) + 20 * rng.randint(0, 1)
    return Team(name=f"team{idx:02d}", solved_count=solved, penalty=penalty, solve_times=times)


def test_order_is_total_and_transitive():
    rng = random.Random(7)
    teams = [_random_team(rng, idx) for idx in range(25)]

    for a, b in itertools.permutations(teams, 2):
        assert outranks(a, b) != outranks(b, a)

    for a, b, c in itertools.permutations(teams, 3):
        if outranks(a, b) and outranks(b, c):
            assert outranks(a, c)


def test_sort_is_consistent_with_comparator():
    rng = random.Random(11)
    teams = [_random_team(rng, idx) for idx in range(40)]
    ordering = sort_teams(teams)
    for better, worse in zip(ordering, ordering[1:]):
        assert outranks(better, worse)
