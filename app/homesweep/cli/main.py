"""Main CLI application entry point.

Defines the homesweep command: inspect the subdirectories of a parent
directory, report candidates, and optionally delete them after asking.

Exit codes:
    0    success
    1    ACL backend unavailable, invalid settings, or a failed deletion
    100  help page displayed
    101  parent path could not be resolved
    102  no candidate directories found
"""

import logging
import sys
from typing import Annotated

import typer
from rich.markup import escape

from homesweep import __version__
from homesweep.cli.display import (
    create_candidates_table,
    create_debug_table,
    print_candidates_json,
    print_deletion_summary,
)
from homesweep.cli.types import OutputFormat, parse_switch
from homesweep.core.debug import DebugCollector
from homesweep.core.paths import PathResolutionError, resolve_parent_path
from homesweep.core.settings import SettingsError, load_settings
from homesweep.maintenance.confirm import DeletionConfirmer, TerminalPrompter
from homesweep.maintenance.models import RunMode, SelectionMode
from homesweep.maintenance.operator import DirectoryOperator
from homesweep.maintenance.policy import select_candidates
from homesweep.maintenance.scanner import DirectoryInspector, list_subdirectories
from homesweep.security.acl import PowerShellAclReader
from homesweep.security.sids import SidClassifier, powershell_translator
from homesweep.utils.formatting import console, print_error, print_info

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_HELP = 100
EXIT_PATH_NOT_FOUND = 101
EXIT_NO_CANDIDATES = 102

app = typer.Typer(
    name="homesweep",
    help="Find empty or orphaned home directories and clean them up.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": []},
)


def help_callback(ctx: typer.Context, value: bool) -> None:
    """Print the help page and exit with the help status code."""
    if not value or ctx.resilient_parsing:
        return
    text = ctx.get_help()
    if text:
        typer.echo(text)
    raise typer.Exit(code=EXIT_HELP)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"homesweep version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


@app.command()
def main(
    mode: Annotated[
        RunMode | None,
        typer.Option(
            "-mode",
            "--mode",
            help="maintain, show, or 'show all'.",
            case_sensitive=False,
        ),
    ] = None,
    parent_path: Annotated[
        str | None,
        typer.Option(
            "-parentPath",
            "--parent-path",
            help="Directory whose subdirectories are inspected. Defaults to the current directory.",
        ),
    ] = None,
    prompt: Annotated[
        str | None,
        typer.Option(
            "-prompt",
            "--prompt",
            metavar="BOOL",
            help="Ask before deleting in maintain mode (true/false).",
        ),
    ] = None,
    empty_directories: Annotated[
        SelectionMode | None,
        typer.Option(
            "-emptyDirectories",
            "--empty-directories",
            help="retain: only flag unresolved SIDs. delete: also flag empty directories.",
            case_sensitive=False,
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "-format",
            "--format",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    debug: Annotated[
        bool,
        typer.Option("-debug", "--debug", help="Show collected debug records."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-verbose", "--verbose", "-v", help="Enable debug logging."),
    ] = False,
    show_help: Annotated[
        bool,
        typer.Option(
            "-help",
            "--help",
            "-h",
            callback=help_callback,
            is_eager=True,
            expose_value=False,
            help="Show this message and exit.",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Inspect home directories for emptiness and orphaned ACL entries.

    Every immediate subdirectory of the parent path is checked. ACL
    entries for Everyone, SYSTEM and Administrators are ignored; any
    other entry whose SID no longer maps to an account marks the
    directory as orphaned.
    """
    _configure_logging(verbose)

    try:
        settings = load_settings()
    except SettingsError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_FAILURE) from e

    run_mode = mode if mode is not None else settings.mode
    selection_mode = (
        empty_directories if empty_directories is not None else settings.empty_directories
    )
    ask = parse_switch(prompt) if prompt is not None else settings.prompt
    raw_path = parent_path if parent_path is not None else settings.parent_path

    try:
        base = resolve_parent_path(raw_path)
        subdirs = list_subdirectories(base)
    except PathResolutionError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=EXIT_PATH_NOT_FOUND) from e

    acl_reader = PowerShellAclReader(timeout=settings.powershell_timeout)
    if not acl_reader.is_available():
        print_error("Windows PowerShell not found; ACL inspection is not possible on this host.")
        raise typer.Exit(code=EXIT_FAILURE)

    collector = DebugCollector()
    classifier = SidClassifier(powershell_translator(settings.powershell_timeout), debug=collector)
    inspector = DirectoryInspector(acl_reader, classifier, debug=collector)

    logger.debug("Inspecting %d directories under %s", len(subdirs), base)
    records = list(inspector.inspect_all(subdirs))

    if run_mode == RunMode.SHOW_ALL:
        shown = records
        title = f"All Directories in {base}"
    else:
        shown = select_candidates(records, selection_mode)
        title = f"Candidate Directories in {base} ({selection_mode.value} empty)"

    if not shown:
        print_info("No candidate directories found.")
        _print_debug(collector, debug)
        raise typer.Exit(code=EXIT_NO_CANDIDATES)

    if output_format == OutputFormat.JSON:
        print_candidates_json(shown)
    else:
        console.print(create_candidates_table(shown, escape(title)))

    if run_mode != RunMode.MAINTAIN or not ask:
        _print_debug(collector, debug)
        return

    confirmer = DeletionConfirmer(DirectoryOperator(), TerminalPrompter(), debug=collector)
    results = confirmer.run(shown)
    print_deletion_summary(results)
    _print_debug(collector, debug)

    if any(not r.success for r in results):
        raise typer.Exit(code=EXIT_FAILURE)


def _print_debug(collector: DebugCollector, enabled: bool) -> None:
    if not enabled:
        return
    if not len(collector):
        print_info("No debug records.")
        return
    console.print(create_debug_table(collector.records))


if __name__ == "__main__":
    app()
