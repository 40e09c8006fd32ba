# tests/test_cli.py
"""
End-to-end tests for the numnotation command line.

Run: pytest -v
"""

from __future__ import annotations

import faulthandler
import sys

import pytest

from numnotation import cli, runtime
from numnotation.workspace import workspace_dir


@pytest.fixture(autouse=True)
def plain_streams(monkeypatch):
    # Leave sys.stdout/sys.stderr as the capture fixtures installed them
    monkeypatch.setattr(cli, "colorama_init", lambda *a, **k: None)
    monkeypatch.setattr(faulthandler, "enable", lambda *a, **k: None)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)


def run(capsys, *argv):
    code = cli.main(["--no-color", *argv])
    out, err = capsys.readouterr()
    return code, out, err


TEST_CASES = [
    ("12", "12 → 2²×3"),
    ("1000000", "1000000 → 2⁶×5⁶"),
    ("1,024", "1,024 → 2¹⁰"),
    ("0.5", "0.5 → 0"),
    ("-12", "-12 → -2²×3"),
    ("inf", "inf → Primefinity?"),
    ("999.99999999999999999", "999.99999999999999999 → 3³×37"),
]


@pytest.mark.parametrize("value,expected", TEST_CASES)
def test_default_notation(capsys, value, expected):
    code, out, _ = run(capsys, value)
    assert code == 0
    assert out.strip() == expected


def test_tower_output(capsys):
    code, out, _ = run(capsys, "1e20000")
    assert code == 0
    assert out.strip().endswith("^(2×3×11×19)")


def test_several_values(capsys):
    code, out, _ = run(capsys, "12", "10^3")
    assert code == 0
    assert out.splitlines() == ["12 → 2²×3", "10^3 → 2³×5³"]


def test_all_notations(capsys):
    code, out, _ = run(capsys, "--all", "1000000")
    assert code == 0
    lines = out.splitlines()
    assert "1000000 → Prime: 2⁶×5⁶" in lines
    assert "1000000 → Engineering: 1.00e6" in lines
    assert "1000000 → Greek Letters: 1.00 β" in lines
    assert "1000000 → Binary: 11110100001001000000" in lines
    assert "1000000 → Cancer: 1.00🎂" in lines


def test_notation_and_places(capsys):
    code, out, _ = run(capsys, "-n", "engineering", "--places", "3", "12345678")
    assert code == 0
    assert out.strip() == "12345678 → 12.346e6"


def test_profile_changes_default_notation(capsys):
    code, out, _ = run(capsys, "--profile", "plain", "12345678")
    assert code == 0
    assert out.strip() == "12345678 → 12.346e6"


@pytest.mark.parametrize("argv,message", [
    (["abc"], "Invalid input"),
    (["-n", "roman", "5"], "unknown notation"),
    ([], "no value given"),
    (["--profile", "nope", "5"], "nope"),
    (["1/0"], "not a finite number"),
    (["1e99999999999999999999"], "too large to represent"),
])
def test_user_errors_exit_2(capsys, argv, message):
    code, out, err = run(capsys, *argv)
    assert code == 2
    assert message in err
    assert out == ""


def test_output_file(capsys, tmp_path):
    target = tmp_path / "out" / "results.txt"
    code, out, _ = run(capsys, "--quiet", "--output", str(target), "12", "360")
    assert code == 0
    assert out == ""
    assert target.read_text(encoding="utf-8") == "12 → 2²×3\n360 → 2³×3²×5\n"
    run(capsys, "--quiet", "--output", str(target), "7")
    assert target.read_text(encoding="utf-8").endswith("360 → 2³×3²×5\n7 → 7\n")


def test_relative_output_goes_to_workspace(capsys, isolated_workspace):
    code, out, _ = run(capsys, "--output", "r.txt", "12")
    assert code == 0
    assert out.strip() == "12 → 2²×3"
    assert (isolated_workspace / "r.txt").read_text(encoding="utf-8") == "12 → 2²×3\n"


def test_list(capsys):
    code, out, _ = run(capsys, "list")
    assert code == 0
    for key in ("prime", "engineering", "greek_letters", "cancer", "binary"):
        assert key in out
    assert "Profiles:" in out
    assert "plain" in out


def test_where(capsys):
    code, out, _ = run(capsys, "where")
    assert code == 0
    assert str(workspace_dir()) in out


def test_init_seeds_workspace(capsys, isolated_workspace):
    code, out, _ = run(capsys, "init")
    assert code == 0
    assert (isolated_workspace / "profiles" / "default.toml").is_file()
    assert (isolated_workspace / "notations").is_dir()
    assert "profiles" in out
    # second run copies nothing
    code, out, _ = run(capsys, "init")
    assert code == 0
    assert "0 file(s)" in out


def test_init_overwrite_needs_dev_flag(capsys, monkeypatch, isolated_workspace):
    code, _, err = run(capsys, "init", "overwrite")
    assert code == 2
    assert "NUMNOTATION_DEV" in err

    run(capsys, "init")
    custom = isolated_workspace / "profiles" / "default.toml"
    custom.write_text("[PRIME]\nFACTOR_BOUND = 5\n", encoding="utf-8")
    monkeypatch.setenv("NUMNOTATION_DEV", "1")
    code, _, _ = run(capsys, "init", "overwrite")
    assert code == 0
    assert "FACTOR_BOUND = 10000" in custom.read_text(encoding="utf-8")


def test_workspace_profile_is_used(capsys, isolated_workspace):
    prof = isolated_workspace / "profiles"
    prof.mkdir(parents=True)
    (prof / "default.toml").write_text("[PRIME]\nFACTOR_BOUND = 10\n", encoding="utf-8")
    code, out, _ = run(capsys, "2431")
    assert code == 0
    assert out.strip() == "2431 → 2431"


def test_debug_reports_regime(capsys):
    code, out, err = run(capsys, "--debug", "1e500000000000000000")
    assert code == 0
    assert out.count("^") == 1
    assert "regime TOWER3" in err
    assert "tower levels" in err
    assert "PRIME.FACTOR_BOUND" in err


def test_debug_flags_composite_residual(capsys):
    code, _, err = run(capsys, "--debug", "9007199254740991")
    assert code == 0
    assert "regime DIRECT" in err
    assert "composite" in err


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert "numnotation" in capsys.readouterr().out


def test_missing_gmpy2_is_reported(capsys, monkeypatch):
    monkeypatch.setattr(runtime, "find_spec", lambda name: None)
    code, out, _ = run(capsys, "12")
    assert code == 1
    assert "Missing dependencies" in out
    assert "pip install gmpy2" in out
