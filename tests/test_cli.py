from __future__ import annotations

import re
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


def _run(args: list[str], capsys) -> tuple[int, str, str]:
    from specguard.cli import main

    code = main(args)
    out, err = capsys.readouterr()
    return code, out, err


def test_success_exits_zero(capsys):
    code, out, _ = _run(["--specguard-folder-name", "specs", str(FIXTURES / "success")], capsys)
    assert code == 0
    assert "Searching for specs files in:" in out
    assert "success/unit/auth.test.ts" in out
    assert re.search(r"Passed:.*1", out)
    assert re.search(r"Failed:.*0", out)


@pytest.mark.parametrize("case", ["missing-steps", "wrong-order", "extra-steps"])
def test_mismatch_cases_exit_one(case: str, capsys):
    code, out, _ = _run(["--specguard-folder-name", "specs", str(FIXTURES / case)], capsys)
    assert code == 1
    assert "(steps mismatch)" in out
    assert re.search(r"Failed:.*1", out)


def test_missing_file_reports_not_implemented(capsys):
    code, out, _ = _run(["--specguard-folder-name", "specs", str(FIXTURES / "missing-file")], capsys)
    assert code == 1
    assert "missing-file/unit/auth.* (not implemented)" in out
    assert re.search(r"Not implemented:.*1", out)


def test_verbose_groups_steps_under_scenarios(capsys):
    code, out, _ = _run(
        ["--verbose", "--specguard-folder-name", "specs", str(FIXTURES / "indentation")],
        capsys,
    )
    assert code == 0
    assert "(verbose mode enabled)" in out

    lines = out.splitlines()
    scenario_lines = [l for l in lines if "Scenario" in l and "Step" not in l]
    step_lines = [l for l in lines if "Step " in l]
    assert len(scenario_lines) == 3
    assert len(step_lines) == 6
    assert all(re.match(r"^  \S", l) for l in scenario_lines)
    assert all(re.match(r"^    \S", l) for l in step_lines)
    assert out.index("First Scenario") < out.index("Step one of first scenario")
    assert out.index("Step one of first scenario") < out.index("Second Scenario")


def test_verbose_shows_missing_and_found_steps(capsys):
    _, out, _ = _run(["-v", "--specguard-folder-name", "specs", str(FIXTURES / "missing-steps")], capsys)
    assert "✓ Validate input parameters" in out
    assert "✗ Verify password hash (missing)" in out

    _, out, _ = _run(["-v", "--specguard-folder-name", "specs", str(FIXTURES / "wrong-order")], capsys)
    assert "✗ Check user exists in database" in out
    assert "Found: Verify password hash" in out

    _, out, _ = _run(["-v", "--specguard-folder-name", "specs", str(FIXTURES / "extra-steps")], capsys)
    assert "+ Log authentication event (extra)" in out

    _, out, _ = _run(["-v", "--specguard-folder-name", "specs", str(FIXTURES / "missing-file")], capsys)
    assert "File does not exist" in out
    assert "○ Create session token" in out


def test_skipped_spec_file_warning(tmp_path: Path, capsys):
    spec = tmp_path / "specguard" / "draft.md"
    spec.parent.mkdir()
    spec.write_text("## Draft\n\nlevels: unit\n", encoding="utf-8")

    code, out, _ = _run([str(tmp_path)], capsys)
    assert code == 0
    assert "draft.md: No scenarios defined, skipping" in out
    assert re.search(r"Total test files:\s+0", out)


def test_folder_name_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("SPECGUARD_FOLDER_NAME", "specs")
    code, out, _ = _run([str(FIXTURES / "success")], capsys)
    assert code == 0
    assert "Searching for specs files" in out


def test_missing_root_is_fatal(tmp_path: Path, capsys):
    code, _, err = _run([str(tmp_path / "nope")], capsys)
    assert code == 1
    assert "Error:" in err
    assert "not a directory" in err


def test_folder_name_requires_value(capsys):
    from specguard.cli import main

    with pytest.raises(SystemExit) as exc:
        main(["--specguard-folder-name"])
    assert exc.value.code == 2


def test_unknown_option_is_rejected(capsys):
    from specguard.cli import main

    with pytest.raises(SystemExit) as exc:
        main(["--bogus"])
    assert exc.value.code == 2


def test_help_lists_options(capsys):
    from specguard.cli import main

    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "usage: specguard" in out
    assert "--verbose" in out
    assert "--specguard-folder-name" in out


def test_invalid_jobs_and_log_level(capsys):
    from specguard.cli import main

    with pytest.raises(SystemExit):
        main(["--jobs", "0", str(FIXTURES)])
    with pytest.raises(SystemExit):
        main(["--log-level", "chatty", str(FIXTURES)])


def test_version(capsys):
    code, out, _ = _run(["--version"], capsys)
    assert code == 0
    assert out.strip()


def test_empty_folder_name_is_rejected(capsys):
    from specguard.cli import main

    with pytest.raises(SystemExit) as exc:
        main(["--specguard-folder-name", "", str(FIXTURES / "success")])
    assert exc.value.code == 2
    assert "non-empty" in capsys.readouterr().err


def test_unreadable_implementation_file_is_fatal(tmp_path: Path, monkeypatch, capsys):
    spec = tmp_path / "specguard" / "a.md"
    spec.parent.mkdir()
    spec.write_text("## A\nlevels: unit\n```specguard\nx\n```\n", encoding="utf-8")
    impl = tmp_path / "unit" / "a.py"
    impl.parent.mkdir()
    impl.write_text('# step("x")\n', encoding="utf-8")

    original = Path.read_text

    def read_text(self, *args, **kwargs):
        if self.name == "a.py":
            raise PermissionError(13, "Permission denied", str(self))
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Path, "read_text", read_text)

    code, out, err = _run([str(tmp_path)], capsys)
    assert code == 1
    assert "Error:" in err
    assert "Permission denied" in err
    assert "Summary:" not in out
