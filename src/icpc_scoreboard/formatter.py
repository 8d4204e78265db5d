from typing import List

from icpc_scoreboard.types import (
    CellKind, ErrorCode, ProblemCell, RankChangeEvent, RankQuery, ScoreboardError, ScoreboardRow, Submission,
)


ADD_TEAM_OK = "[Info]Add successfully."
START_OK = "[Info]Competition starts."
FLUSH_OK = "[Info]Flush scoreboard."
FREEZE_OK = "[Info]Freeze scoreboard."
SCROLL_OK = "[Info]Scroll scoreboard."
QUERY_RANKING_OK = "[Info]Complete query ranking."
QUERY_SUBMISSION_OK = "[Info]Complete query submission."
END_OK = "[Info]Competition ends."
FROZEN_RANK_WARNING = "[Warning]Scoreboard is frozen. The ranking may be inaccurate until it were scrolled."
NO_SUBMISSION_FOUND = "Cannot find any submission."

_ADD_TEAM_ERRORS = {
    ErrorCode.ALREADY_STARTED: "[Error]Add failed: competition has started.",
    ErrorCode.DUPLICATE_NAME: "[Error]Add failed: duplicated team name.",
}
_START_ERRORS = {
    ErrorCode.ALREADY_STARTED: "[Error]Start failed: competition has started.",
    ErrorCode.INVALID_PROBLEM_COUNT: "[Error]Start failed: invalid problem count.",
}
_FREEZE_ERRORS = {
    ErrorCode.ALREADY_FROZEN: "[Error]Freeze failed: scoreboard has been frozen.",
    ErrorCode.NOT_STARTED: "[Error]Freeze failed: competition has not started.",
}
_SCROLL_ERRORS = {
    ErrorCode.NOT_FROZEN: "[Error]Scroll failed: scoreboard has not been frozen.",
}
_SUBMIT_ERRORS = {
    ErrorCode.NOT_STARTED: "[Error]Submit failed: competition has not started.",
    ErrorCode.UNKNOWN_TEAM: "[Error]Submit failed: cannot find the team.",
    ErrorCode.UNKNOWN_PROBLEM: "[Error]Submit failed: cannot find the problem.",
}
_QUERY_RANKING_ERRORS = {
    ErrorCode.UNKNOWN_TEAM: "[Error]Query ranking failed: cannot find the team.",
}
_QUERY_SUBMISSION_ERRORS = {
    ErrorCode.UNKNOWN_TEAM: "[Error]Query submission failed: cannot find the team.",
}

ERRORS_BY_OPERATION = {
    "add_team": _ADD_TEAM_ERRORS,
    "start": _START_ERRORS,
    "freeze": _FREEZE_ERRORS,
    "scroll": _SCROLL_ERRORS,
    "submit": _SUBMIT_ERRORS,
    "query_rank": _QUERY_RANKING_ERRORS,
    "query_last_submission": _QUERY_SUBMISSION_ERRORS,
}


def format_error(operation: str, error: ScoreboardError) -> str:
    messages = ERRORS_BY_OPERATION.get(operation, {})
    return messages.get(error.code, f"[Error]{error}")


def format_cell(cell: ProblemCell) -> str:
    """Renders a problem cell as `.`, `+`, `+w`, `0/p`, `-w/p` or `-w`."""
    if cell.kind == CellKind.SOLVED:
        return f"+{cell.wrong_attempts}" if cell.wrong_attempts else "+"
    if cell.kind == CellKind.PENDING:
        if cell.wrong_attempts:
            return f"-{cell.wrong_attempts}/{cell.pending_count}"
        return f"0/{cell.pending_count}"
    if cell.kind == CellKind.FAILED:
        return f"-{cell.wrong_attempts}"
    return "."


def format_row(row: ScoreboardRow) -> str:
    parts = [row.team, str(row.rank), str(row.solved_count), str(row.penalty)]
    parts.extend(format_cell(cell) for cell in row.cells)
    return " ".join(parts)


def format_scoreboard(rows: List[ScoreboardRow]) -> List[str]:
    return [format_row(row) for row in rows]


def format_rank_change(event: RankChangeEvent) -> str:
    return f"{event.team} {event.displaced_team} {event.solved_count} {event.penalty}"


def format_rank_query(query: RankQuery) -> List[str]:
    lines = [QUERY_RANKING_OK]
    if query.provisional:
        lines.append(FROZEN_RANK_WARNING)
    lines.append(f"{query.team} NOW AT RANKING {query.rank}")
    return lines


def format_submission(submission: Submission) -> str:
    return f"{submission.team} {submission.problem} {submission.verdict} {submission.time}"
