"""CLI entry point for suitekit."""
from __future__ import annotations

import contextlib
import logging
import signal
import sys
from typing import Any, Iterator, Optional, Tuple

import click

from suitekit import __version__, bootstrap
from suitekit.core.abort import AbortSignal
from suitekit.core.errors import HarnessError
from suitekit.plan import PlanOptions, default_plan, load_plan, merge_options, run_plan


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool) -> None:
        self.verbose = verbose


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"suitekit {__version__}")
    raise click.exceptions.Exit()


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the suitekit version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Top level CLI group for suitekit."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    bootstrap()
    ctx.obj = CliState(verbose=verbose)


@cli.command()
@click.argument("modules", nargs=-1)
@click.option(
    "--plan",
    "plan_path",
    type=click.Path(exists=True, dir_okay=False),
    help="YAML run plan file.",
)
@click.option("--select", "select_filters", type=str, help="Comma-separated suite/test patterns (supports globs).")
@click.option("--tags", "tag_filters", type=str, help="Comma-separated tags to include.")
@click.option("--skip-tags", "skip_tag_filters", type=str, help="Comma-separated tags to skip.")
@click.option("--enable", "enable_filters", type=str, help="Comma-separated patterns to run even when disabled.")
@click.option("--fail-fast", is_flag=True, help="Skip remaining cases after the first failure.")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="Abort the run after this many seconds.")
@click.option("--list", "list_only", is_flag=True, help="List matched cases without running.")
@click.option(
    "--report",
    "report_format",
    type=click.Choice(["terminal", "json"]),
    help="Report format (terminal by default).",
)
@click.option("--report-path", type=str, help="When --report json, write to this path.")
@click.option("--messages", is_flag=True, help="Show diagnostic messages of passing cases too.")
@click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output.")
@click.pass_obj
def run(
    state: CliState,
    modules: Tuple[str, ...],
    plan_path: Optional[str],
    select_filters: Optional[str],
    tag_filters: Optional[str],
    skip_tag_filters: Optional[str],
    enable_filters: Optional[str],
    fail_fast: bool,
    timeout: Optional[float],
    list_only: bool,
    report_format: Optional[str],
    report_path: Optional[str],
    messages: bool,
    no_color: bool,
) -> None:
    """Register test modules and run their suites."""

    if not modules and not plan_path:
        raise click.UsageError("Provide test modules or --plan.")
    options = PlanOptions(
        modules=modules if plan_path else (),
        select=_split_csv(select_filters),
        tags=_split_csv(tag_filters),
        skip_tags=_split_csv(skip_tag_filters),
        enable=_split_csv(enable_filters),
        fail_fast=True if fail_fast else None,
        timeout=timeout,
        report_format=report_format,
        report_path=report_path,
        color=False if no_color else None,
        messages=True if messages else None,
        list_only=list_only,
    )
    try:
        plan = load_plan(plan_path) if plan_path else default_plan(modules)
        abort = AbortSignal(timeout=merge_options(plan, options).timeout)
        with _interrupt_requests_abort(abort):
            exit_code = run_plan(plan, options, abort=abort)
    except HarnessError as exc:
        raise click.ClickException(str(exc)) from exc
    raise click.exceptions.Exit(exit_code)


@contextlib.contextmanager
def _interrupt_requests_abort(abort: AbortSignal) -> Iterator[None]:
    """First Ctrl-C stops the run after the current case; the second one is fatal."""

    def handler(signum: int, frame: Any) -> None:
        if abort.reason is not None:
            raise KeyboardInterrupt
        abort.request("interrupted")

    try:
        previous = signal.signal(signal.SIGINT, handler)
    except ValueError:  # pragma: no cover - not in the main thread
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="suitekit", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


def _split_csv(value: Optional[str]) -> Tuple[str, ...]:
    if not value:
        return tuple()
    parts = [part.strip() for part in value.split(",") if part.strip()]
    return tuple(parts)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
