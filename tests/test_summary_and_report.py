import datetime
from chemistry.atoms import PlacedAtom
from chemistry.bonds import detect_bonds
from chemistry.summary import describe_molecule, extract_connected_components, lewis_dots
from chemistry.elements_data import get_element
from sandbox.session import SandboxSession
from sandbox.report import generate_progress_report, export_progress_report, progress_stats


def test_describe_water():
    atoms = [PlacedAtom("H", 0, 0), PlacedAtom("O", 100, 0), PlacedAtom("H", 200, 0)]
    bonds = detect_bonds(atoms)
    info = describe_molecule(atoms, bonds)
    assert info["formula"] == "H2O"
    assert info["num_atoms"] == 3
    assert info["num_bonds"] == 2
    assert info["bond_types"] == {"covalent": 2}
    assert info["compound"] == {"name": "Water", "geometry": "Bent", "bond_angle": "104.5°"}
    assert info["molecules"] == ["H2O"]
    assert [entry["symbol"] for entry in info["lewis"]] == ["H", "O", "H"]


def test_separate_molecules():
    atoms = [
        PlacedAtom("H", 0, 0, uid="h1"),
        PlacedAtom("O", 500, 0, uid="o1"),
        PlacedAtom("H", 10, 0, uid="h2"),
        PlacedAtom("O", 510, 0, uid="o2"),
    ]
    bonds = detect_bonds(atoms)
    components = extract_connected_components(atoms, bonds)
    assert [[a.uid for a in comp_atoms] for comp_atoms, _ in components] == [["h1", "h2"], ["o1", "o2"]]
    info = describe_molecule(atoms, bonds)
    assert info["molecules"] == ["H2", "O2"]
    assert info["formula"] == "H2O2"


def test_describe_empty():
    info = describe_molecule([], [])
    assert info["formula"] == ""
    assert info["compound"] is None
    assert info["molecules"] == []


def test_lewis_dots():
    assert lewis_dots(get_element("O"))["dots"] == [True] * 6 + [False] * 2
    # Pd carries 10 valence electrons; only 8 positions exist
    assert lewis_dots(get_element("Pd"))["dots"] == [True] * 8
    assert lewis_dots(get_element("Cu"))["dots"] == [True] + [False] * 7


def test_progress_stats():
    snap = {"score": 350, "completed_challenges": [1, 2], "attempts": 4}
    assert progress_stats(snap) == {"points": 350, "completed": 2, "wrong": 2, "total": 30, "percent": 7}
    assert progress_stats({"attempts": 0, "completed_challenges": [1]})["wrong"] == 0


def test_progress_report_text():
    session = SandboxSession()
    session.set_mode("quiz")
    session.drop_atom("H", 0, 0)
    session.drop_atom("H", 10, 0)
    report = generate_progress_report(session.snapshot(), now=datetime.datetime(2024, 3, 5, 14, 30))
    assert "Report generated: Tuesday, March 05, 2024 at 14:30" in report
    assert "Points Earned     175 pts" in report
    assert "[x]  Q1 - Build Hydrogen Gas (H₂) [EASY]" in report
    assert "[ ]  Q2 - Build Oxygen Gas (O₂) [EASY]" in report
    assert "None completed yet" not in report


def test_export_progress_report(tmp_path):
    out = tmp_path / "reports" / "progress.txt"
    path = export_progress_report(SandboxSession().snapshot(), str(out))
    assert path == str(out)
    text = out.read_text(encoding="utf-8")
    assert "None completed yet" in text
    assert "Questions Wrong   0" in text
