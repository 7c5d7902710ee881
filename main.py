import sys
import json
import logging
import argparse
from typing import List, Tuple

from chemistry.constants import LOGGING_LEVEL, LOGGING_FORMAT, MODE_QUIZ
from chemistry.elements_data import periodic_grid
from chemistry.formula import parse_formula
from chemistry.summary import describe_molecule
from sandbox.session import SandboxSession
from sandbox.report import export_progress_report


def parse_atom_specs(spec: str) -> List[Tuple[str, float, float]]:
    """
    Parse "H@100,100;O@150,100" into [("H", 100.0, 100.0), ("O", 150.0, 100.0)].
    """
    out = []
    for chunk in spec.split(";"):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            symbol, coords = chunk.split("@")
            x, y = coords.split(",")
            out.append((symbol.strip(), float(x), float(y)))
        except ValueError:
            raise ValueError(f"Invalid atom spec {chunk!r}; expected SYMBOL@X,Y")
    return out


def layout_formula(formula: str, spacing: float = 60.0) -> List[Tuple[str, float, float]]:
    """Place the atoms of a formula in a row, `spacing` units apart."""
    out = []
    for sym, count in parse_formula(formula).items():
        for _ in range(count):
            out.append((sym, 100.0 + spacing * len(out), 100.0))
    return out


def print_grid() -> None:
    rows = {}
    for el, row, col in periodic_grid():
        rows.setdefault(row, {})[col] = el.symbol
    for row in sorted(rows):
        print(" ".join(f"{rows[row].get(col, ''):>3}" for col in range(1, 19)))


def run_sandbox_cli(argv=None) -> int:
    """
    Run the chemistry sandbox from the command line with options:
    --atoms / --formula, --quiz, --submit, --summary, --report, --grid
    """
    parser = argparse.ArgumentParser(description="Place atoms and infer bonds, formula and feedback.")
    parser.add_argument("--atoms", type=str, default=None, help="Semicolon-separated placements, e.g. 'H@100,100;H@110,100'")
    parser.add_argument("--formula", type=str, default=None, help="Place the atoms of a formula in a row instead of --atoms")
    parser.add_argument("--spacing", type=float, default=60.0, help="Distance between atoms placed with --formula")
    parser.add_argument("--quiz", action="store_true", help="Run in quiz mode (auto-completes matching challenges)")
    parser.add_argument("--submit", action="store_true", help="Submit the sandbox as a quiz answer after placing atoms")
    parser.add_argument("--summary", action="store_true", help="Print a molecule summary")
    parser.add_argument("--report", type=str, default=None, help="Write a progress report to this path")
    parser.add_argument("--grid", action="store_true", help="Print the periodic table layout and exit")
    parser.add_argument("--log-level", type=str, default=LOGGING_LEVEL, help="DEBUG, INFO, WARNING or ERROR")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format=LOGGING_FORMAT)

    if args.grid:
        print_grid()
        return 0

    try:
        if args.formula:
            placements = layout_formula(args.formula, args.spacing)
        else:
            placements = parse_atom_specs(args.atoms or "")
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 1

    session = SandboxSession()
    if args.quiz:
        session.set_mode(MODE_QUIZ)

    for symbol, x, y in placements:
        try:
            atom = session.drop_atom(symbol, x, y)
        except ValueError as e:
            print(f"[ERROR] {e}")
            return 1
        if atom is None:
            print(f"[WARN] {session.feedback}")

    result = {
        "formula": session.formula,
        "bonds": [b.to_dict() for b in session.bonds],
        "feedback": {"message": session.feedback, "severity": session.feedback_type},
    }
    if args.summary:
        result["summary"] = describe_molecule(session.atoms, session.bonds, session.formula)
    if args.submit:
        result["submission"] = session.submit_answer()
    if args.quiz:
        result["score"] = session.score
        result["completed_challenges"] = list(session.completed_challenges)

    print(json.dumps(result, indent=2, ensure_ascii=False))

    if args.report:
        export_progress_report(session.snapshot(), args.report)
        print(f"[INFO] Progress report written to {args.report}")
    return 0


if __name__ == "__main__":
    sys.exit(run_sandbox_cli())
