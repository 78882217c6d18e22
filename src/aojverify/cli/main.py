"""CLI entry point for aoj-verify."""
from __future__ import annotations

import functools
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

import click

from aojverify import __version__
from aojverify.config import Settings, load_settings
from aojverify.core import Verifier
from aojverify.core.results import Summary
from aojverify.errors import VerifyError
from aojverify.logging_config import setup_logging
from aojverify.problem import TestcaseFetcher, cache_dir_for, extract_problem_id, read_annotation
from aojverify.reporting import JsonReporter, ReportManager, Reporter, TerminalReporter

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


class CliState:
    """Holds global CLI state."""

    def __init__(self, verbose: bool, config_path: Optional[str]) -> None:
        self.verbose = verbose
        self.config_path = config_path

    def settings(self, *, time_limit: Optional[float] = None) -> Settings:
        return load_settings(self.config_path).with_overrides(time_limit=time_limit)


def _print_version(_: click.Context, __: click.Parameter, value: bool) -> None:
    if not value or click.get_current_context().resilient_parsing:
        return
    click.echo(f"aoj-verify {__version__}")
    raise click.exceptions.Exit()


def _translate_errors(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except VerifyError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group(context_settings=CONTEXT_SETTINGS)
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Settings file (defaults to ./.aoj-verify.yaml when present).",
)
@click.option(
    "--version",
    is_flag=True,
    callback=_print_version,
    expose_value=False,
    is_eager=True,
    help="Show the aoj-verify version and exit.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Optional[str]) -> None:
    """Verify competitive-programming solutions against AOJ test data."""

    setup_logging(verbose)
    ctx.obj = CliState(verbose=verbose, config_path=config_path)


def _report_options(func: Callable) -> Callable:
    options = [
        click.option("--time-limit", type=click.FloatRange(min=0, min_open=True), help="Per-case time limit in seconds (enables TLE)."),
        click.option(
            "--report",
            "report_format",
            type=click.Choice(["terminal", "json"]),
            default="terminal",
            show_default=True,
            help="Report format (terminal by default).",
        ),
        click.option("--report-path", type=str, help="When --report json, write to this path."),
        click.option("--no-color", is_flag=True, help="Disable ANSI colors in terminal output."),
        click.option("--strict", is_flag=True, help="Exit with status 1 unless every case is accepted."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
@_translate_errors
def fetch(state: CliState, source: str) -> None:
    """Download the test cases of the problem annotated in SOURCE."""

    settings = state.settings()
    cache_dir = _fetch_testcases(settings, Path(source))
    click.echo(str(cache_dir))


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--cases",
    "cases_dir",
    type=click.Path(exists=True, file_okay=False),
    required=True,
    help="Directory holding <name>.in / <name>.out pairs.",
)
@_report_options
@click.pass_obj
@_translate_errors
def verify(
    state: CliState,
    source: str,
    cases_dir: str,
    time_limit: Optional[float],
    report_format: str,
    report_path: Optional[str],
    no_color: bool,
    strict: bool,
) -> None:
    """Build SOURCE and judge it against an existing test-case directory."""

    settings = state.settings(time_limit=time_limit)
    reporter = _make_reporter(report_format, report_path, use_color=not no_color)
    summary = _run_verification(settings, Path(source), Path(cases_dir), reporter)
    _exit_for(summary, strict)


@cli.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@_report_options
@click.pass_obj
@_translate_errors
def run(
    state: CliState,
    source: str,
    time_limit: Optional[float],
    report_format: str,
    report_path: Optional[str],
    no_color: bool,
    strict: bool,
) -> None:
    """Fetch the annotated problem's test cases, then verify SOURCE."""

    settings = state.settings(time_limit=time_limit)
    cache_dir = _fetch_testcases(settings, Path(source))
    reporter = _make_reporter(report_format, report_path, use_color=not no_color)
    summary = _run_verification(settings, Path(source), cache_dir, reporter)
    _exit_for(summary, strict)


def _fetch_testcases(settings: Settings, source: Path) -> Path:
    annotation = read_annotation(source)
    problem_id = extract_problem_id(annotation.problem_url)
    cache_dir = cache_dir_for(settings.work_dir, annotation.problem_url)
    logger.info("problem %s -> %s", problem_id, cache_dir)
    with TestcaseFetcher(api_base_url=settings.api_base_url, interval=settings.fetch_interval) as fetcher:
        fetcher.sync(problem_id, cache_dir)
    return cache_dir


def _make_reporter(report_format: str, report_path: Optional[str], *, use_color: bool) -> Reporter:
    if report_format == "json":
        return JsonReporter(report_path)
    return TerminalReporter(use_color=use_color)


def _run_verification(settings: Settings, source: Path, cases_dir: Path, reporter: Reporter) -> Summary:
    manager = ReportManager([reporter])
    verifier = Verifier(settings.toolchain, work_dir=settings.work_dir, time_limit=settings.time_limit)
    manager.start(source, cases_dir)
    summary = verifier.verify(source, cases_dir, on_result=manager.handle_result)
    manager.complete(summary)
    return summary


def _exit_for(summary: Summary, strict: bool) -> None:
    if strict and not summary.all_accepted:
        raise click.exceptions.Exit(1)


def main(argv: Optional[list[str]] = None) -> int:
    """Program entry point for console_scripts shim."""

    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=argv, prog_name="aoj-verify", standalone_mode=True)
    except click.ClickException as err:  # pragma: no cover - click handles display
        err.show()
        return err.exit_code
    except SystemExit as exc:  # click may raise exit code
        return int(exc.code or 0)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
