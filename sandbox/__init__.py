# sandbox/__init__.py
from .challenges import QuizChallenge, load_challenges, all_challenges, first_challenge, get_challenge, next_challenge
from .session import SandboxSession, points_for_attempts, diagnose_answer, challenge_progress
from .report import generate_progress_report, export_progress_report

__all__ = [
    "QuizChallenge", "load_challenges", "all_challenges", "first_challenge", "get_challenge", "next_challenge",
    "SandboxSession", "points_for_attempts", "diagnose_answer", "challenge_progress",
    "generate_progress_report", "export_progress_report",
]
