"""CLI interface for cleanmypc."""

from __future__ import annotations

import logging
import sys
from datetime import date
from pathlib import Path

import click

from cleanmypc import __version__
from cleanmypc.core.engine import LARGE_FILES, TASK_ORDER, CleanupEngine
from cleanmypc.models.context import TaskContext
from cleanmypc.models.task_result import TaskResult
from cleanmypc.platforms import HostEnvironment
from cleanmypc.report import write_report
from cleanmypc.settings import create_default_config_file, default_config_path, load_config
from cleanmypc.utils import bytes_to_human

log = logging.getLogger(__name__)


def _setup_logging(verbosity: int, silent: bool) -> None:
    level = logging.WARNING
    if silent:
        level = logging.ERROR
    elif verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


@click.command()
@click.version_option(__version__, prog_name="cleanmypc")
@click.option("-d", "--dry-run", is_flag=True, help="Show what would be cleaned without actually doing it")
@click.option("-s", "--silent", is_flag=True, help="Run without prompts (use for automation)")
@click.option(
    "-r", "--report", "report_path", type=click.Path(dir_okay=False, path_type=Path),
    help="Save cleanup report to file (.json for JSON, anything else for text)",
)
@click.option(
    "-c", "--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
    help="Use custom config file",
)
@click.option("--init-config", is_flag=True, help="Write the default config file and exit")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.option("--temp", is_flag=True, help="Clean temporary files only")
@click.option("--cache", is_flag=True, help="Clean cache files only")
@click.option("--browsers", is_flag=True, help="Clean browser caches only")
@click.option("--trash", is_flag=True, help="Empty trash/recycle bin only")
@click.option("--downloads", is_flag=True, help="Organize downloads folder only")
@click.option("--large-files", is_flag=True, help="Find large files only")
def main(
    dry_run: bool,
    silent: bool,
    report_path: Path | None,
    config_path: Path | None,
    init_config: bool,
    verbose: int,
    temp: bool,
    cache: bool,
    browsers: bool,
    trash: bool,
    downloads: bool,
    large_files: bool,
) -> None:
    """cleanmypc: clean temp files, caches, browser caches and trash."""
    _setup_logging(verbose, silent)

    flags = {
        "temp": temp,
        "cache": cache,
        "browsers": browsers,
        "trash": trash,
        "downloads": downloads,
        LARGE_FILES: large_files,
    }
    selected = [task_id for task_id in TASK_ORDER if flags[task_id]]

    try:
        host = HostEnvironment.detect()
        config_path = config_path or default_config_path(host.home)

        if init_config:
            if create_default_config_file(config_path, host):
                click.echo(f"Wrote default config to {config_path}")
            else:
                click.echo(f"Config file already exists: {config_path}")
            return

        config = load_config(config_path, host)
        context = TaskContext(config=config, host=host, dry_run=dry_run)
        engine = CleanupEngine(context, on_result=None if silent else _print_result)

        if not silent:
            click.echo(f"\n{click.style('🚀', bold=True)} cleanmypc on {host.platform.value}\n")
            if dry_run:
                click.echo(click.style("DRY RUN — no files will be deleted or moved\n", fg="yellow"))

        if selected:
            engine.run(selected)
        elif silent:
            engine.run_all()
        else:
            report_path = _interactive(engine, report_path)
            if report_path is None and not engine.results:
                return

        if not silent:
            _print_summary(engine)

        if report_path is not None:
            write_report(engine.results, report_path)
            if not silent:
                click.echo(f"Report saved to: {report_path}")
    except (click.Abort, click.ClickException):
        raise
    except Exception as exc:
        log.debug("Run failed", exc_info=True)
        click.echo(f"{click.style('Error:', fg='red')} {exc}", err=True)
        sys.exit(1)


# ── output ───────────────────────────────────────────────────────────────

def _print_result(result: TaskResult) -> None:
    label = result.task.replace("_", " ")
    if result.large_files is not None and not result.files_deleted:
        detail = f"{len(result.large_files):,} large files found"
    elif result.files_organized is not None:
        detail = f"{result.files_organized:,} files organized"
    else:
        detail = f"{result.files_deleted:,} files, {bytes_to_human(result.space_saved)} freed"

    if result.errors:
        click.echo(
            f"  {click.style('!', fg='yellow')} {label:15s} — {detail}, "
            f"{click.style(f'{len(result.errors)} warning(s)', fg='yellow')}"
        )
        for error in result.errors:
            log.warning(error)
    else:
        click.echo(f"  {click.style('✓', fg='green')} {label:15s} — {click.style(detail, fg='green', bold=True)}")


def _print_summary(engine: CleanupEngine) -> None:
    summary = engine.summary()
    click.echo(f"\n{click.style('📊 CLEANUP SUMMARY', fg='blue', bold=True)}\n")
    click.echo(f"  Total files cleaned:   {summary.total_files:,}")
    click.echo(f"  Total space freed:     {click.style(bytes_to_human(summary.total_space), fg='green', bold=True)}")
    click.echo(f"  Total files organized: {summary.total_organized:,}")
    if summary.total_errors:
        click.echo(f"  Total warnings:        {click.style(str(summary.total_errors), fg='yellow')}")
    click.echo()


# ── interactive mode ─────────────────────────────────────────────────────

def _interactive(engine: CleanupEngine, report_path: Path | None) -> Path | None:
    """Ask which tasks to run, run them, and offer a report.

    Returns the report path to write, if any.
    """
    tasks = list(engine.registry)
    for task in tasks:
        click.echo(f"  {click.style(task.id, fg='cyan', bold=True):25s}  {task.description}")
    click.echo()

    choice = click.prompt("Run all tasks? [y/N/select]", default="n", show_default=False)
    match choice.lower():
        case "y" | "yes":
            task_ids = [t.id for t in tasks]
        case "select":
            task_ids = _interactive_select(tasks)
            if not task_ids:
                click.echo("Nothing selected.")
                return report_path
        case _:
            click.echo("Aborted.")
            return report_path

    click.echo()
    for task_id in task_ids:
        result = engine.run_task(task_id)
        if task_id == LARGE_FILES and result.large_files:
            _offer_large_file_deletion(engine, result)

    if report_path is None and click.confirm("\nWould you like to generate a cleanup report?", default=False):
        fmt = click.prompt("Report format", type=click.Choice(["txt", "json"]), default="txt")
        report_path = Path(f"cleanmypc-report-{date.today().isoformat()}.{fmt}")
    return report_path


def _interactive_select(tasks: list) -> list[str]:
    """Let the user pick which tasks to run."""
    click.echo("\nSelect tasks to run (enter numbers, comma-separated):\n")
    for i, task in enumerate(tasks, 1):
        click.echo(f"  [{i}] {task.name}")
    click.echo()
    raw = click.prompt("Selection", default="", show_default=False)
    selected = _parse_selection(raw, len(tasks))
    return [tasks[i].id for i in selected]


def _offer_large_file_deletion(engine: CleanupEngine, result: TaskResult) -> None:
    click.echo(f"\n{click.style('Large files found:', fg='blue', bold=True)}")
    for i, found in enumerate(result.large_files, 1):
        click.echo(f"  [{i}] {found.path} ({bytes_to_human(found.size)})")
    click.echo()

    raw = click.prompt(
        "Select files to delete (numbers, comma-separated, empty to skip)", default="", show_default=False
    )
    picked = [result.large_files[i].path for i in _parse_selection(raw, len(result.large_files))]
    if not picked:
        return
    if not click.confirm(click.style(f"Are you sure you want to delete {len(picked)} file(s)?", fg="red"), default=False):
        return
    engine.delete_large_files(picked)


def _parse_selection(raw: str, count: int) -> list[int]:
    """Turn "1, 3" into sorted zero-based indexes below *count*."""
    selected: set[int] = set()
    for part in raw.split(","):
        part = part.strip()
        if part.isdigit():
            idx = int(part) - 1
            if 0 <= idx < count:
                selected.add(idx)
    return sorted(selected)
