from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from suitekit.core.errors import PlanError
from suitekit.plan import PlanOptions, default_plan, load_plan, merge_options


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "plan.yaml"
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_load_full_plan(tmp_path: Path) -> None:
    plan_path = _write(
        tmp_path,
        """
        modules: [suites/db_tests.py, pkg.tests]
        select: ["db/*"]
        tags: smoke
        skip_tags: [slow]
        enable: ["empty_tests"]
        fail_fast: true
        timeout: 2.5
        report:
          format: json
          path: out/report.json
          color: false
          messages: true
        """,
    )
    plan = load_plan(str(plan_path))
    assert plan.modules == ("suites/db_tests.py", "pkg.tests")
    assert plan.plan_dir == tmp_path.resolve()
    assert plan.select == ("db/*",)
    assert plan.tags == ("smoke",)
    assert plan.skip_tags == ("slow",)
    assert plan.enable == ("empty_tests",)
    assert plan.fail_fast is True
    assert plan.timeout == 2.5
    assert plan.report.format == "json"
    assert plan.report.path == (tmp_path / "out" / "report.json").resolve()
    assert plan.report.color is False
    assert plan.report.messages is True


def test_minimal_plan_uses_defaults(tmp_path: Path) -> None:
    plan = load_plan(_write(tmp_path, "modules: [tests.py]\n"))
    assert plan.select == ()
    assert plan.fail_fast is False
    assert plan.timeout is None
    assert plan.report.format == "terminal"
    assert plan.report.path is None
    assert plan.report.color is True


def test_report_may_be_a_format_string(tmp_path: Path) -> None:
    plan = load_plan(_write(tmp_path, "modules: [tests.py]\nreport: json\n"))
    assert plan.report.format == "json"


@pytest.mark.parametrize(
    ("content", "fragment"),
    [
        ("select: [a]\n", "modules"),
        ("modules: []\n", "modules"),
        ("modules: [a.py]\nunknown: 1\n", "unknown"),
        ("modules: [a.py]\ntimeout: 0\n", "timeout"),
        ("modules: [a.py]\nreport: {format: xml}\n", "report"),
        ("modules: [a.py]\nfail_fast: maybe\n", "fail_fast"),
    ],
)
def test_schema_errors_are_reported(tmp_path: Path, content: str, fragment: str) -> None:
    with pytest.raises(PlanError) as exc:
        load_plan(_write(tmp_path, content))
    assert "Plan schema validation failed" in str(exc.value)
    assert fragment in str(exc.value)


def test_top_level_must_be_a_mapping(tmp_path: Path) -> None:
    with pytest.raises(PlanError, match="mapping"):
        load_plan(_write(tmp_path, "- a.py\n"))


def test_invalid_yaml_is_reported(tmp_path: Path) -> None:
    with pytest.raises(PlanError, match="not valid YAML"):
        load_plan(_write(tmp_path, "modules: [a.py\n"))


def test_missing_plan_file(tmp_path: Path) -> None:
    with pytest.raises(PlanError, match="Cannot read plan file"):
        load_plan(tmp_path / "absent.yaml")


def test_default_plan_requires_modules(tmp_path: Path) -> None:
    plan = default_plan(["a.py"], tmp_path)
    assert plan.modules == ("a.py",)
    assert plan.plan_dir == tmp_path.resolve()
    with pytest.raises(PlanError):
        default_plan([])


def test_options_override_plan_values(tmp_path: Path) -> None:
    plan = load_plan(
        _write(
            tmp_path,
            """
            modules: [a.py]
            select: ["x/*"]
            enable: ["off"]
            fail_fast: true
            timeout: 10
            report: {format: terminal, color: true}
            """,
        )
    )
    merged = merge_options(
        plan,
        PlanOptions(
            modules=("b.py",),
            select=("y/*",),
            enable=("other",),
            timeout=1.0,
            report_format="json",
            report_path=str(tmp_path / "r.json"),
            color=False,
        ),
    )
    assert merged.modules == ("a.py", "b.py")
    assert merged.select == ("y/*",)
    assert merged.enable == ("off", "other")
    assert merged.fail_fast is True
    assert merged.timeout == 1.0
    assert merged.report.format == "json"
    assert merged.report.path == (tmp_path / "r.json").resolve()
    assert merged.report.color is False
