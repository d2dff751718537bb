"""Tests for the build/validate command line."""

import pytest

from studylog.cli import main

from conftest import write_log


def run(argv):
    with pytest.raises(SystemExit) as exc:
        main(argv)
    return exc.value.code


def test_validate_success(logs_dir, capsys):
    write_log(logs_dir, "202401/2024-01-10.json", {"date": "2024-01-10"})
    assert run(["validate", "--logs-dir", str(logs_dir)]) == 0
    assert "Validation passed: 1 log file(s)" in capsys.readouterr().out


def test_validate_failure_lists_every_error(logs_dir, capsys):
    write_log(logs_dir, "202401/2024-01-01.json", {"date": "2024-01-01", "x": 1})
    write_log(logs_dir, "202401/2024-01-02.json", {"date": "2024-01-01"})
    assert run(["validate", "--logs-dir", str(logs_dir)]) == 1
    err = capsys.readouterr().err
    lines = [line for line in err.splitlines() if line.startswith("- ")]
    assert len(lines) == 3
    assert any("has unknown field: x" in line for line in lines)
    assert any("duplicate date 2024-01-01" in line for line in lines)
    assert "3 error(s) in 2 file(s)" in err


def test_validate_missing_dir(tmp_path, capsys):
    assert run(["validate", "--logs-dir", str(tmp_path / "missing")]) == 1
    assert "Missing directory" in capsys.readouterr().err


def test_build_prints_page_count(logs_dir, tmp_path, capsys):
    write_log(logs_dir, "202401/2024-01-10.json", {"date": "2024-01-10", "details": ["x"]})
    write_log(logs_dir, "202401/2024-01-11.json", "nope")
    out_dir = tmp_path / "_site"
    code = run(["build", "--logs-dir", str(logs_dir), "--out", str(out_dir), "--today", "2024-01-10"])
    assert code == 0
    captured = capsys.readouterr()
    assert f"Built 4 page(s) into {out_dir}" in captured.out
    assert "2024-01-11.json" in captured.err
    assert (out_dir / "day" / "2024-01-10" / "index.html").is_file()


def test_build_rejects_bad_today(logs_dir, tmp_path):
    assert run(["build", "--logs-dir", str(logs_dir), "--today", "2024-02-30"]) == 2


def test_build_fails_when_output_cannot_be_created(logs_dir, tmp_path, capsys):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    code = run(["build", "--logs-dir", str(logs_dir), "--out", str(blocker / "_site"),
                "--today", "2024-01-10"])
    assert code == 1
    assert "ビルドに失敗しました" in capsys.readouterr().err
