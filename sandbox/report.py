from __future__ import annotations
from typing import Any, Dict, List, Optional
import datetime
import logging
import os

from chemistry.constants import TOTAL_QUESTIONS

from .challenges import QuizChallenge, all_challenges

logger = logging.getLogger(__name__)

RULE = "━" * 54


def ensure_parent_dir(path: str) -> None:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)


def progress_stats(snapshot: Dict[str, Any], total_questions: int = TOTAL_QUESTIONS) -> Dict[str, int]:
    """
    Headline numbers for a session snapshot. Wrong answers are estimated as
    attempts beyond the number of completed challenges.
    """
    completed = len(snapshot.get("completed_challenges", []))
    wrong = max(0, snapshot.get("attempts", 0) - completed)
    percent = round(completed / total_questions * 100) if total_questions else 0
    return {
        "points": snapshot.get("score", 0),
        "completed": completed,
        "wrong": wrong,
        "total": total_questions,
        "percent": percent,
    }


def _challenge_line(mark: str, challenge: QuizChallenge) -> str:
    return f"  {mark}  Q{challenge.level} - {challenge.description} [{challenge.difficulty.upper()}]"


def generate_progress_report(snapshot: Dict[str, Any],
                             challenges: Optional[List[QuizChallenge]] = None,
                             total_questions: int = TOTAL_QUESTIONS,
                             now: Optional[datetime.datetime] = None) -> str:
    """
    Build a plain-text student progress report from SandboxSession.snapshot().
    """
    if challenges is None:
        challenges = all_challenges()
    now = now or datetime.datetime.now()
    stats = progress_stats(snapshot, total_questions)
    done = set(snapshot.get("completed_challenges", []))

    correct = [_challenge_line("[x]", c) for c in challenges if c.level in done]
    pending = [_challenge_line("[ ]", c) for c in challenges if c.level not in done]

    lines = [
        "SANDBOX CHEMISTRY - STUDENT PROGRESS REPORT",
        "",
        f"Report generated: {now.strftime('%A, %B %d, %Y')} at {now.strftime('%H:%M')}",
        "",
        RULE,
        "  SCORE SUMMARY",
        RULE,
        f"  Points Earned     {stats['points']} pts",
        f"  Score             {stats['completed']} / {stats['total']} ({stats['percent']}%)",
        f"  Questions Correct {stats['completed']}",
        f"  Questions Wrong   {stats['wrong']}",
        "",
        RULE,
        "  QUESTIONS ANSWERED CORRECTLY",
        RULE,
        *(correct or ["  None completed yet"]),
        "",
        RULE,
        "  QUESTIONS NOT YET COMPLETED",
        RULE,
        *(pending or ["  All questions answered correctly!"]),
        "",
    ]
    return "\n".join(lines)


def export_progress_report(snapshot: Dict[str, Any], out_path: str, **kwargs) -> str:
    """
    Write the progress report to out_path (UTF-8). Returns the path written.
    """
    report = generate_progress_report(snapshot, **kwargs)
    ensure_parent_dir(out_path)
    with open(out_path, "w", encoding="utf-8") as fh:
        fh.write(report)
    logger.info(f"Exported progress report to {out_path}")
    return out_path
