from __future__ import annotations
from pathlib import Path
import json
import logging
from typing import Dict, Any, List, Optional, Union

from chemistry.formula import formula_from_counts, parse_formula

logger = logging.getLogger(__name__)

CHALLENGES_JSON: Path = Path(__file__).parent / "data" / "quiz_challenges.json"

DIFFICULTIES = ("easy", "medium", "hard")

# In-memory cache, ordered by level
QUIZ_LEVELS: List["QuizChallenge"] = []


class QuizChallenge:
    """
    One quiz target: build `target_formula` from exactly `required_atoms`.
    """

    def __init__(self,
                 level: int,
                 title: str,
                 description: str,
                 target_formula: str,
                 required_atoms: Dict[str, int],
                 hint: str,
                 difficulty: str = "easy"):
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty {difficulty!r} for level {level}")
        self.level = int(level)
        self.title = title
        self.description = description
        self.target_formula = target_formula
        self.required_atoms = dict(required_atoms)
        self.hint = hint
        self.difficulty = difficulty

    @classmethod
    def from_dict(cls, row: Dict[str, Any]) -> "QuizChallenge":
        return cls(
            level=row["level"],
            title=row["title"],
            description=row["description"],
            target_formula=row["target_formula"],
            required_atoms=row["required_atoms"],
            hint=row["hint"],
            difficulty=row.get("difficulty", "easy"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "title": self.title,
            "description": self.description,
            "target_formula": self.target_formula,
            "required_atoms": dict(self.required_atoms),
            "hint": self.hint,
            "difficulty": self.difficulty,
        }

    def __repr__(self) -> str:
        return f"<QuizChallenge level={self.level} target={self.target_formula}>"


def _check_challenge(challenge: QuizChallenge) -> None:
    """
    A challenge is only winnable when its target is the canonical formula of
    its required atoms.
    """
    counts = parse_formula(challenge.target_formula)
    if counts != challenge.required_atoms:
        raise ValueError(
            f"Level {challenge.level}: target {challenge.target_formula} does not match "
            f"required atoms {challenge.required_atoms}"
        )
    canonical = formula_from_counts(counts)
    if canonical != challenge.target_formula:
        raise ValueError(
            f"Level {challenge.level}: target {challenge.target_formula} is not canonical (expected {canonical})"
        )


def load_challenges(path: Union[Path, str] = None) -> List[QuizChallenge]:
    """
    Load and validate the quiz table into QUIZ_LEVELS, sorted by level.

    Raises:
        RuntimeError: if the file cannot be read or a row is inconsistent.
    """
    global QUIZ_LEVELS
    if path is None:
        path = CHALLENGES_JSON

    try:
        path = Path(path)
        with open(path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
        rows = raw["challenges"] if isinstance(raw, dict) else raw
        challenges = sorted((QuizChallenge.from_dict(r) for r in rows), key=lambda c: c.level)

        levels = [c.level for c in challenges]
        if len(set(levels)) != len(levels):
            raise ValueError(f"Duplicate quiz levels in {levels}")
        for challenge in challenges:
            _check_challenge(challenge)
    except Exception as e:
        logger.exception(f"Failed to load quiz challenges from {path}: {e}")
        raise RuntimeError(f"Failed to load quiz challenges from {path}") from e

    QUIZ_LEVELS = challenges
    logger.info(f"Loaded {len(QUIZ_LEVELS)} quiz challenges from {path}")
    return QUIZ_LEVELS


def all_challenges() -> List[QuizChallenge]:
    if not QUIZ_LEVELS:
        load_challenges()
    return list(QUIZ_LEVELS)


def first_challenge() -> Optional[QuizChallenge]:
    """Lowest-level challenge, or None for an empty table."""
    levels = all_challenges()
    return levels[0] if levels else None


def get_challenge(level: int) -> Optional[QuizChallenge]:
    for challenge in all_challenges():
        if challenge.level == level:
            return challenge
    return None


def next_challenge(current: QuizChallenge) -> Optional[QuizChallenge]:
    """The challenge at level current.level + 1, or None when the quiz is over."""
    return get_challenge(current.level + 1)
