import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from suitekit import __version__
from suitekit.cli.main import cli

EMPTY_TESTS = """
from suitekit import BasicSetup, TestSuite, disabled, message, require

empty_tests = TestSuite("empty_tests", fixture=BasicSetup, enabled=disabled())


@empty_tests.case()
def empty_test_case_1(fixture):
    message("Hello world!")


checks = TestSuite("checks")


@checks.case()
def arithmetic():
    require(1 + 1 == 2, "arithmetic")


def register(registry):
    registry.add_suite(empty_tests)
    registry.add_suite(checks)
"""


def _write_module(tmp_path: Path, body: str = EMPTY_TESTS) -> Path:
    path = tmp_path / "empty_tests.py"
    path.write_text(textwrap.dedent(body), encoding="utf-8")
    return path


def test_cli_help_short_flag() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    assert "Usage:" in result.output
    assert "run" in result.output


def test_cli_version() -> None:
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert f"suitekit {__version__}" in result.output


def test_cli_run_module_reports_skipped_suite(tmp_path: Path) -> None:
    module = _write_module(tmp_path)
    result = CliRunner().invoke(cli, ["run", str(module), "--no-color"])
    assert result.exit_code == 0, result.output
    assert "empty_tests/empty_test_case_1 -> SKIPPED" in result.output
    assert "reason: suite 'empty_tests' is disabled" in result.output
    assert "checks/arithmetic -> PASSED" in result.output
    assert "Hello world!" not in result.output


def test_cli_enable_runs_disabled_suite_and_shows_messages(tmp_path: Path) -> None:
    module = _write_module(tmp_path)
    result = CliRunner().invoke(
        cli,
        ["run", str(module), "--enable", "empty_tests", "--select", "empty_tests/*", "--messages", "--no-color"],
    )
    assert result.exit_code == 0, result.output
    assert "empty_tests/empty_test_case_1 -> PASSED" in result.output
    assert "message: Hello world!" in result.output
    assert "deselected=1" in result.output


def test_cli_failure_sets_exit_code(tmp_path: Path) -> None:
    module = _write_module(tmp_path, EMPTY_TESTS.replace("1 + 1 == 2", "1 + 1 == 3"))
    result = CliRunner().invoke(cli, ["run", str(module), "--no-color"])
    assert result.exit_code == 1
    assert "checks/arithmetic -> FAILED" in result.output
    assert "error: arithmetic" in result.output


def test_cli_list(tmp_path: Path) -> None:
    module = _write_module(tmp_path)
    result = CliRunner().invoke(cli, ["run", str(module), "--list"])
    assert result.exit_code == 0
    assert result.output.splitlines() == ["empty_tests/empty_test_case_1", "checks/arithmetic"]


def test_cli_plan_json_report(tmp_path: Path) -> None:
    _write_module(tmp_path)
    plan = tmp_path / "plan.yaml"
    plan.write_text("modules: [empty_tests.py]\nreport: {format: json, path: report.json}\n", encoding="utf-8")
    report_path = tmp_path / "override.json"

    result = CliRunner().invoke(cli, ["run", "--plan", str(plan), "--report-path", str(report_path)])

    assert result.exit_code == 0, result.output
    payload = json.loads(report_path.read_text(encoding="utf-8"))
    assert payload["summary"]["passed"] == 1
    assert payload["summary"]["skipped"] == 1
    assert not (tmp_path / "report.json").exists()


def test_cli_requires_modules_or_plan() -> None:
    result = CliRunner().invoke(cli, ["run"])
    assert result.exit_code == 2
    assert "Provide test modules or --plan" in result.output


def test_cli_invalid_plan_is_reported(tmp_path: Path) -> None:
    plan = tmp_path / "plan.yaml"
    plan.write_text("modules: []\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["run", "--plan", str(plan)])
    assert result.exit_code == 1
    assert "Plan schema validation failed" in result.output


def test_cli_duplicate_registration_is_reported(tmp_path: Path) -> None:
    module = _write_module(
        tmp_path,
        """
        def noop():
            pass

        def register(registry):
            registry.register("dup", "case", noop)
            registry.register("dup", "case", noop)
        """,
    )
    result = CliRunner().invoke(cli, ["run", str(module)])
    assert result.exit_code == 1
    assert "already registered" in result.output


def test_cli_invalid_registration_is_reported(tmp_path: Path) -> None:
    module = _write_module(
        tmp_path,
        """
        def register(registry):
            registry.register("s", "", lambda: None)
        """,
    )
    result = CliRunner().invoke(cli, ["run", str(module)])
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Registering" in result.output
    assert "ValueError: test name must be a non-empty string" in result.output
