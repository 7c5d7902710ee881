from __future__ import annotations
from typing import List, Dict, Optional, Any, Union
import logging

from chemistry.atoms import PlacedAtom
from chemistry.bonds import Bond, detect_bonds, validate_bond
from chemistry.constants import (
    MODE_FREE_PLAY,
    MODE_QUIZ,
    GAME_MODES,
    BASE_POINTS,
    BONUS_PER_SPARE_ATTEMPT,
    MAX_BONUS_ATTEMPTS,
    SEVERITY_INFO,
    SEVERITY_SUCCESS,
    SEVERITY_WARNING,
    SEVERITY_ERROR,
)
from chemistry.elements_data import Element
from chemistry.feedback import EMPTY_SANDBOX_MESSAGE, generate_feedback
from chemistry.formula import compute_formula, count_symbols

from .challenges import QuizChallenge, first_challenge, get_challenge, next_challenge

logger = logging.getLogger(__name__)


# -----------------------
# Scoring and diagnostics
# -----------------------

def points_for_attempts(attempts: int) -> int:
    """
    Points for completing a challenge after `attempts` failed submissions:
    100 plus 25 for each of the first three attempts left unused.
    """
    return BASE_POINTS + (MAX_BONUS_ATTEMPTS - min(MAX_BONUS_ATTEMPTS, attempts)) * BONUS_PER_SPARE_ATTEMPT


def challenge_progress(challenge: QuizChallenge, atoms: List[PlacedAtom]) -> Dict[str, Dict[str, Any]]:
    """Per required symbol: how many are placed, how many are needed, and whether that is enough."""
    counts = count_symbols(atoms)
    return {
        sym: {"have": counts.get(sym, 0), "need": need, "ok": counts.get(sym, 0) >= need}
        for sym, need in challenge.required_atoms.items()
    }


def diagnose_answer(challenge: QuizChallenge, atoms: List[PlacedAtom], formula: str) -> str:
    """
    Explain why the placed atoms do not make the target: every required
    symbol whose count is off, every placed symbol that is not required,
    then the challenge hint.
    """
    counts = count_symbols(atoms)
    wrong = [(sym, need) for sym, need in challenge.required_atoms.items() if counts.get(sym, 0) != need]
    extra = list(dict.fromkeys(a.symbol for a in atoms if a.symbol not in challenge.required_atoms))

    diag = f"Not quite! Current: {formula or '-'}, Target: {challenge.target_formula}."
    if wrong:
        diag += " " + ", ".join(f"Need {need}×{sym}" for sym, need in wrong) + "."
    if extra:
        diag += f" Remove: {', '.join(extra)}."
    diag += f" Hint: {challenge.hint}"
    return diag


# -----------------------
# SandboxSession
# -----------------------

class SandboxSession:
    """
    Session state for one player: placed atoms plus everything derived from
    them, and the quiz progress.

    Usage:
        session = SandboxSession()
        session.set_mode("quiz")
        session.drop_atom("H", 100, 100)
        session.drop_atom("H", 110, 100)   # completes level 1 (H2)

    Every mutation recomputes bonds, formula and feedback from scratch.
    """

    def __init__(self, mode: str = MODE_FREE_PLAY):
        self.mode: str = MODE_FREE_PLAY
        self.score: int = 0
        self.level: int = 1
        self.atoms: List[PlacedAtom] = []
        self.bonds: List[Bond] = []
        self.formula: str = ""
        self.feedback: str = EMPTY_SANDBOX_MESSAGE
        self.feedback_type: str = SEVERITY_INFO
        self.current_challenge: Optional[QuizChallenge] = None
        self.completed_challenges: List[int] = []
        self.attempts: int = 0
        self.atom_count: int = 0

        if mode != MODE_FREE_PLAY:
            self.set_mode(mode)

        logger.info(f"SandboxSession initialized: mode={self.mode}")

    # -----------------------
    # Internal helpers
    # -----------------------
    def _set_feedback(self, message: str, severity: str) -> None:
        self.feedback = message
        self.feedback_type = severity

    def _recompute(self) -> None:
        """Bond inference, then formula, then feedback; always a full recompute."""
        self.bonds = detect_bonds(self.atoms)
        self.formula = compute_formula(self.atoms)
        fb = generate_feedback(self.atoms, self.bonds, self.formula)
        self._set_feedback(fb["message"], fb["severity"])

    def _reset_sandbox(self) -> None:
        self.atoms = []
        self.bonds = []
        self.formula = ""
        self.attempts = 0

    def _find_atom(self, uid: str) -> PlacedAtom:
        for atom in self.atoms:
            if atom.uid == uid:
                return atom
        raise KeyError(f"No placed atom with id {uid!r}")

    def _complete_challenge(self, challenge: QuizChallenge, points: int) -> None:
        self.score += points
        if challenge.level not in self.completed_challenges:
            self.completed_challenges.append(challenge.level)
        self.level += 1
        self.attempts = 0
        self.current_challenge = next_challenge(challenge)
        logger.info(
            f"Challenge {challenge.level} ({challenge.target_formula}) completed: +{points} pts, "
            f"score={self.score}, next={self.current_challenge.level if self.current_challenge else None}"
        )

    # -----------------------
    # Mode and level
    # -----------------------
    def set_mode(self, mode: str) -> None:
        """
        Switch between free play and quiz. Clears the sandbox and attempts;
        quiz mode starts again from the lowest level.
        """
        if mode not in GAME_MODES:
            raise ValueError(f"Unknown game mode {mode!r}; expected one of {GAME_MODES}")

        self.mode = mode
        self._reset_sandbox()
        if mode == MODE_QUIZ:
            self.current_challenge = first_challenge()
            if self.current_challenge is not None:
                self.level = self.current_challenge.level
                self._set_feedback(f"Quiz Mode: {self.current_challenge.description}", SEVERITY_INFO)
            else:
                self._set_feedback("Quiz Mode: no challenges available.", SEVERITY_WARNING)
        else:
            self.current_challenge = None
            self._set_feedback("Free Play - explore any combination!", SEVERITY_INFO)
        logger.info(f"Mode set to {mode}")

    def set_level(self, level: int) -> None:
        """Jump to a quiz level with an empty sandbox ("play again" is set_level(1))."""
        challenge = get_challenge(level)
        if challenge is None:
            raise ValueError(f"No quiz challenge at level {level}")
        self.level = level
        self.current_challenge = challenge
        self._reset_sandbox()
        self._set_feedback(f"Quiz Mode: {challenge.description}", SEVERITY_INFO)
        logger.info(f"Quiz level set to {level}")

    # -----------------------
    # Atom mutations
    # -----------------------
    def drop_atom(self, element: Union[Element, str], x: float, y: float, uid: Optional[str] = None) -> Optional[PlacedAtom]:
        """
        Place an atom and recompute. Returns the new atom, or None when quiz
        mode rejects the placement (noble gases).

        In quiz mode a drop that makes the target formula completes the
        challenge immediately.

        Raises:
            ValueError: for an unknown symbol, or a uid already in the sandbox.
        """
        if uid is not None and any(a.uid == uid for a in self.atoms):
            raise ValueError(f"An atom with id {uid!r} is already placed")
        atom = PlacedAtom(element, x, y, uid=uid)

        if self.mode != MODE_FREE_PLAY:
            for placed in self.atoms:
                check = validate_bond(atom.element, placed.element)
                if not check["valid"]:
                    logger.warning(f"Placement of {atom.symbol} rejected: {check['reason']}")
                    self._set_feedback(check["reason"], SEVERITY_WARNING)
                    return None

        self.atoms.append(atom)
        self.atom_count += 1
        self._recompute()

        challenge = self.current_challenge
        if self.mode == MODE_QUIZ and challenge is not None and self.formula == challenge.target_formula:
            points = points_for_attempts(self.attempts)
            self._complete_challenge(challenge, points)
            self._set_feedback(f"Correct! {challenge.description} solved! +{points} pts", SEVERITY_SUCCESS)

        return atom

    def remove_atom(self, uid: str) -> PlacedAtom:
        atom = self._find_atom(uid)
        self.atoms.remove(atom)
        self._recompute()
        return atom

    def move_atom(self, uid: str, x: float, y: float) -> PlacedAtom:
        """Reposition an atom in place; its id is kept."""
        atom = self._find_atom(uid)
        atom.move_to(x, y)
        self._recompute()
        return atom

    def clear(self) -> None:
        self._reset_sandbox()
        self._set_feedback("Sandbox cleared. Start building!", SEVERITY_INFO)

    # -----------------------
    # Manual quiz check
    # -----------------------
    def submit_answer(self) -> Dict[str, Any]:
        """
        Check the sandbox against the active challenge on request.

        Returns {"correct": bool, "message": str, "points": int}. A wrong
        answer counts as an attempt; a right one scores, advances and
        clears the sandbox for the next level.
        """
        challenge = self.current_challenge
        if self.mode != MODE_QUIZ:
            return {"correct": False, "message": "Switch to quiz mode to check answers.", "points": 0}
        if challenge is None:
            return {"correct": False, "message": f"All challenges complete! Score: {self.score}", "points": 0}

        if self.formula == challenge.target_formula:
            points = points_for_attempts(self.attempts)
            message = f"Correct! {challenge.description} - +{points} pts"
            self._complete_challenge(challenge, points)
            self.atoms = []
            self.bonds = []
            self.formula = ""
            self._set_feedback(message, SEVERITY_SUCCESS)
            return {"correct": True, "message": message, "points": points}

        self.attempts += 1
        if not self.atoms:
            message = "No atoms placed! Drag atoms from the periodic table into the sandbox first."
        else:
            message = diagnose_answer(challenge, self.atoms, self.formula)
        logger.debug(f"Wrong answer for level {challenge.level} (attempt {self.attempts}): {self.formula!r}")
        self._set_feedback(message, SEVERITY_ERROR)
        return {"correct": False, "message": message, "points": 0}

    def progress(self) -> Dict[str, Dict[str, Any]]:
        """Atom checklist for the active challenge ({} when there is none)."""
        if self.current_challenge is None:
            return {}
        return challenge_progress(self.current_challenge, self.atoms)

    # -----------------------
    # Snapshot
    # -----------------------
    def snapshot(self) -> Dict[str, Any]:
        """JSON-serialisable copy of the session state."""
        return {
            "mode": self.mode,
            "score": self.score,
            "level": self.level,
            "atoms": [a.to_dict() for a in self.atoms],
            "bonds": [b.to_dict() for b in self.bonds],
            "formula": self.formula,
            "feedback": self.feedback,
            "feedback_type": self.feedback_type,
            "current_challenge": self.current_challenge.to_dict() if self.current_challenge else None,
            "completed_challenges": list(self.completed_challenges),
            "attempts": self.attempts,
            "atom_count": self.atom_count,
        }

    def __repr__(self) -> str:
        return f"<SandboxSession mode={self.mode} atoms={len(self.atoms)} formula={self.formula!r} score={self.score}>"
