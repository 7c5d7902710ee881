import json
from main import run_sandbox_cli, parse_atom_specs, layout_formula


def test_parse_atom_specs():
    assert parse_atom_specs("H@100,100; O@150.5,100") == [("H", 100.0, 100.0), ("O", 150.5, 100.0)]
    assert parse_atom_specs("") == []


def test_layout_formula():
    assert layout_formula("H2O", spacing=50) == [("H", 100.0, 100.0), ("H", 150.0, 100.0), ("O", 200.0, 100.0)]


def test_cli_nacl(capsys):
    assert run_sandbox_cli(["--atoms", "Na@0,0;Cl@50,0", "--summary"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["formula"] == "NaCl"
    assert out["bonds"][0]["type"] == "ionic"
    assert out["feedback"]["severity"] == "success"
    assert out["summary"]["compound"]["geometry"] == "Ionic Crystal"


def test_cli_quiz_and_report(capsys, tmp_path):
    report = tmp_path / "report.txt"
    assert run_sandbox_cli(["--quiz", "--formula", "H2", "--report", str(report)]) == 0
    out = capsys.readouterr().out
    data = json.loads(out[: out.rindex("}") + 1])
    assert data["score"] == 175
    assert data["completed_challenges"] == [1]
    assert report.exists()


def test_cli_bad_input(capsys):
    assert run_sandbox_cli(["--atoms", "H100,100"]) == 1
    assert run_sandbox_cli(["--atoms", "Qq@0,0"]) == 1
    assert "[ERROR]" in capsys.readouterr().out


def test_cli_grid(capsys):
    assert run_sandbox_cli(["--grid"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["H", "He"]
    assert len(lines) == 9
