"""covimport import command - import JaCoCo reports for a project."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from covimport.config import load_config
from covimport.core.errors import ConfigError
from covimport.core.logging import clear_run_id, configure_logging, get_logger, set_run_id
from covimport.coverage import (
    CoverageApplier,
    CoverageImporter,
    CoverageStore,
    ImportSummary,
    PathResolver,
    ReportLocator,
)
from covimport.files import list_project_files


def _build_table(summary: ImportSummary, store: CoverageStore) -> Table:
    table = Table(title="JaCoCo coverage import", title_justify="left")
    table.add_column("Report", overflow="fold")
    table.add_column("Status")
    table.add_column("Files", justify="right")
    table.add_column("Skipped", justify="right")
    table.add_column("Invalid", justify="right")

    for outcome in summary.outcomes:
        if not outcome.imported:
            status = "[red]unreadable[/red]"
        elif outcome.scheme.stripped_root_prefix:
            status = "[green]imported[/green] (root package stripped)"
        else:
            status = "[green]imported[/green]"
        table.add_row(
            str(outcome.location),
            status,
            str(len(outcome.files_imported)),
            str(outcome.files_skipped),
            str(len(outcome.failures)),
        )

    stats = store.summary()
    table.caption = (
        f"{summary.reports_imported}/{summary.reports_found} report(s) imported, "
        f"{stats.files} file(s), line coverage {stats.line_rate:.1%}, "
        f"branch coverage {stats.branch_rate:.1%}"
    )
    return table


@click.command()
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option(
    "-r",
    "--report",
    "reports",
    multiple=True,
    help="Report path or glob, relative to PATH. Repeatable. Overrides configured paths.",
)
@click.option(
    "-s",
    "--source-dir",
    "source_dirs",
    multiple=True,
    help="Source root relative to PATH. Repeatable. Overrides configured roots.",
)
@click.option("-w", "--workers", type=int, default=None, help="Reports processed in parallel")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: PATH/.covimport.yaml)",
)
@click.option("--json", "as_json", is_flag=True, help="Output summary as JSON")
@click.pass_context
def import_command(
    ctx: click.Context,
    path: Path,
    reports: tuple[str, ...],
    source_dirs: tuple[str, ...],
    workers: int | None,
    config_path: Path | None,
    as_json: bool,
) -> None:
    """Import JaCoCo XML coverage reports for the project at PATH.

    Reports that cannot be read and files whose coverage is invalid are
    reported and skipped; the remaining reports are still imported.
    """
    project_root = path.resolve()

    overrides: dict[str, dict[str, object]] = {}
    if reports:
        overrides["reports"] = {"paths": list(reports)}
    if source_dirs:
        overrides["project"] = {"source_dirs": list(source_dirs)}
    if workers is not None:
        overrides["importer"] = {"max_workers": workers}
    if ctx.obj and ctx.obj.get("verbose"):
        overrides["logging"] = {"level": "DEBUG"}

    try:
        config = load_config(project_root, config_path=config_path, **overrides)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    configure_logging(config=config.logging)
    log = get_logger("covimport.cli")
    set_run_id()
    try:
        files = list_project_files(
            project_root,
            source_dirs=config.project.source_dirs,
            exclude=config.project.exclude,
        )
        log.debug("cli.project_indexed", project=str(project_root), files=len(files))

        store = CoverageStore()
        importer = CoverageImporter(
            ReportLocator(project_root, config.reports.paths),
            PathResolver(files),
            CoverageApplier(store),
            max_workers=config.importer.max_workers,
        )
        summary = importer.import_reports()
    finally:
        clear_run_id()

    if as_json:
        click.echo(json.dumps(summary.to_dict(), indent=2))
        return

    console = Console()
    if not summary.outcomes:
        console.print("No coverage report found, nothing imported.")
        return
    console.print(_build_table(summary, store))
