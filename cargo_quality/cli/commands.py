"""
Command-line interface for cargo-quality.

This module provides CLI commands for checking, fixing, formatting and
previewing fixes of Rust sources.
"""

import sys
import click
import logging
from typing import List, Optional
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from .. import __version__
from ..core.analyzer import Analyzer
from ..core.analyzers import find_analyzers
from ..core.differ import DiffResult, apply_entries, generate_diff
from ..core.errors import ConfigError, FormatterError, QualityError
from ..core.files import collect_rust_files
from ..core.fixer import QualityFixer
from ..core.issue import AnalysisResult, Fix, Issue
from ..core.mod_rs import ModRsResult, find_mod_rs_issues, fix_all_mod_rs
from ..core.report import GlobalReport, Report, analyze_file
from ..core.rustfmt import format_code
from ..display.grid import calculate_columns, render_grid
from ..display.render import render_analyzer_blocks, render_compact_blocks, render_verbose_blocks
from ..display.views import show_full, show_interactive, show_summary

# Initialize Rich console for CLI output
console = Console()

# Configure logging
logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

MOD_RS_ANALYZER = "mod_rs"


@click.group()
@click.version_option(version=__version__, prog_name="cargo-quality")
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def main(verbose):
    """cargo-quality - Code quality checks and fixes for Rust sources."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        console.print("[dim]Verbose mode enabled[/dim]")


@main.command()
@click.argument('path', default='.', type=click.Path(exists=True))
@click.option('--verbose', '-v', is_flag=True, help='Show one block per file, clean files included')
@click.option('--analyzer', '-a', help='Only run the named analyzer')
@click.option('--color', '-c', is_flag=True, help='Colorize output')
@click.option('--width', type=click.IntRange(min=1), help='Terminal width for the grid layout')
def check(path, verbose, analyzer, color, width):
    """Check Rust files for quality issues."""
    analyzers = select_analyzers(analyzer)
    if analyzers is None:
        return

    global_report = GlobalReport()
    failures = 0
    try:
        if analyzer in (None, MOD_RS_ANALYZER):
            add_mod_rs_to_report(find_mod_rs_issues(path), global_report)

        if analyzer != MOD_RS_ANALYZER:
            files = collect_rust_files(path)
            with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                          console=console, transient=True) as progress:
                task = progress.add_task("Analyzing files...", total=len(files))
                for file_path in files:
                    progress.update(task, description=f"Analyzing {file_path.name}...")
                    try:
                        report = analyze_file(str(file_path), analyzers)
                    except QualityError as e:
                        print_error(e)
                        failures += 1
                        continue
                    finally:
                        progress.advance(task)

                    if report.total_issues() or verbose:
                        global_report.add_report(report)
    except QualityError as e:
        print_error(e)
        sys.exit(1)

    if analyzer is not None:
        blocks = render_analyzer_blocks(global_report, analyzer)
    elif verbose:
        blocks = render_verbose_blocks(global_report)
    else:
        blocks = render_compact_blocks(global_report)

    if blocks:
        render_grid(blocks, calculate_columns(blocks, width or console.width), color=color)

    if global_report.total_issues():
        console.print(f"[bold yellow]Total: {global_report.total_issues()} issues "
                      f"({global_report.total_fixable()} fixable)[/bold yellow]")
    else:
        console.print("[green]No issues found[/green]")

    if failures:
        console.print(f"[red]{failures} file(s) could not be checked[/red]")
        sys.exit(1)


@main.command()
@click.argument('path', default='.', type=click.Path(exists=True))
@click.option('--dry-run', '-d', is_flag=True, help='Show what would be fixed without making changes')
@click.option('--analyzer', '-a', help='Only apply fixes of the named analyzer')
@click.option('--backup/--no-backup', default=True, help='Create backups before fixing')
def fix(path, dry_run, analyzer, backup):
    """Fix quality issues in place."""
    run_fix(path, dry_run, analyzer, backup)


@main.command()
@click.argument('path', default='.', type=click.Path(exists=True))
def format(path):
    """Apply every available fix (same as fix with all analyzers)."""
    run_fix(path, dry_run=False, analyzer=None, backup=True)


@main.command()
def fmt():
    """Run cargo +nightly fmt with the project formatting defaults."""
    console.print("[bold blue]Running:[/bold blue] cargo +nightly fmt")
    try:
        format_code()
    except FormatterError as e:
        console.print(f"[red]cargo fmt failed: {escape(e.message)}[/red]")
        sys.exit(e.returncode or 1)
    except QualityError as e:
        print_error(e)
        sys.exit(1)
    console.print("[green]Code formatted successfully[/green]")


@main.command()
@click.argument('path', default='.', type=click.Path(exists=True))
@click.option('--summary', '-s', is_flag=True, help='Show per-file counts only')
@click.option('--interactive', '-i', is_flag=True, help='Choose which fixes to apply')
@click.option('--apply', 'apply_changes', is_flag=True, help='Apply all shown changes')
@click.option('--analyzer', '-a', help='Only preview fixes of the named analyzer')
@click.option('--color', '-c', is_flag=True, help='Colorize output')
@click.option('--width', type=click.IntRange(min=1), help='Terminal width for the grid layout')
@click.option('--backup/--no-backup', default=True, help='Create backups before applying')
def diff(path, summary, interactive, apply_changes, analyzer, color, width, backup):
    """Show the changes fixes would make."""
    analyzers = select_analyzers(analyzer, allow_mod_rs=False)
    if analyzers is None:
        return

    result = DiffResult()
    failures = 0
    try:
        for file_path in collect_rust_files(path):
            try:
                result.add_file(generate_diff(file_path, analyzers))
            except QualityError as e:
                print_error(e)
                failures += 1
    except QualityError as e:
        print_error(e)
        sys.exit(1)

    if result.total_changes() == 0:
        console.print("No changes proposed")
    elif summary:
        show_summary(result, color=color)
    elif interactive:
        selected = show_interactive(result, color=color)
        failures += apply_diff(selected, backup)
    else:
        show_full(result, width or console.width, color=color)
        if apply_changes:
            failures += apply_diff(result, backup)

    if failures:
        sys.exit(1)


@main.command(name='mod-rs')
@click.argument('path', default='.', type=click.Path(exists=True))
@click.option('--fix', 'apply_fix', is_flag=True, help='Move mod.rs files to the modern layout')
def mod_rs(path, apply_fix):
    """Find mod.rs files that should use the name.rs layout."""
    try:
        result = find_mod_rs_issues(path)
        if result.is_empty:
            console.print("No mod.rs files found")
            return

        if apply_fix:
            fixed = fix_all_mod_rs(path)
            console.print(f"[green]Fixed {fixed} mod.rs files[/green]")
            return
    except QualityError as e:
        print_error(e)
        sys.exit(1)

    console.print(f"Found {len(result)} mod.rs files:")
    for issue in result.issues:
        console.print(f"  {escape(str(issue.path))} -> {escape(str(issue.suggested))}")
    console.print("\n[dim]Run with --fix to apply changes[/dim]")


@main.command()
@click.argument('filepath', type=click.Path(exists=True))
def restore(filepath):
    """Restore a file from backup."""
    console.print(f"[bold orange1]Restoring:[/bold orange1] {escape(filepath)}")

    fixer = QualityFixer([])
    try:
        success = fixer.restore_from_backup(filepath)
    except QualityError as e:
        print_error(e)
        sys.exit(1)

    if success:
        console.print(f"[green]Successfully restored {escape(filepath)} from backup[/green]")
    else:
        console.print(f"[red]Failed to restore {escape(filepath)} - no backup found[/red]")
        sys.exit(1)


def print_error(error: QualityError):
    """Report a library error to the user."""
    logger.debug(f"{type(error).__name__}: {error}")
    console.print(f"[red]Error: {escape(str(error))}[/red]")


def select_analyzers(name: Optional[str], allow_mod_rs: bool = True) -> Optional[List[Analyzer]]:
    """
    Resolve the --analyzer option.

    Returns:
        Selected analyzers (empty for the mod_rs pseudo-analyzer), or None
        after reporting an unknown name
    """
    if allow_mod_rs and name == MOD_RS_ANALYZER:
        return []

    try:
        return find_analyzers(name)
    except ConfigError as e:
        console.print(f"[red]{escape(e.message)}. Available analyzers:[/red]")
        for valid in e.valid_names:
            console.print(f"  - {valid}")
        if allow_mod_rs:
            console.print(f"  - {MOD_RS_ANALYZER}")
        return None


def add_mod_rs_to_report(mod_rs_result: ModRsResult, global_report: GlobalReport):
    """Add one report per mod.rs file, fixable by moving it to the suggested path."""
    for issue in mod_rs_result.issues:
        report = Report(str(issue.path))
        fix = Fix.simple(str(issue.suggested))
        report.add_result(MOD_RS_ANALYZER, AnalysisResult.from_issues([
            Issue(issue.line, issue.column, issue.message, fix),
        ]))
        global_report.add_report(report)


def run_fix(path: str, dry_run: bool, analyzer: Optional[str], backup: bool):
    """Fix pass shared by the fix and format commands."""
    analyzers = select_analyzers(analyzer)
    if analyzers is None:
        return

    if dry_run:
        console.print("[dim]Running in dry-run mode - no changes will be made[/dim]")

    failures = 0
    try:
        if analyzer in (None, MOD_RS_ANALYZER):
            mod_rs_result = find_mod_rs_issues(path)
            if dry_run:
                for issue in mod_rs_result.issues:
                    console.print(f"Would fix: {escape(str(issue.path))} -> {escape(str(issue.suggested))}")
            elif not mod_rs_result.is_empty:
                console.print(f"[green]Fixed {fix_all_mod_rs(path)} mod.rs files[/green]")

        if analyzer == MOD_RS_ANALYZER:
            return

        fixer = QualityFixer(analyzers, backup_enabled=backup)
        for file_path in collect_rust_files(path):
            try:
                result = fixer.fix_file(str(file_path), dry_run=dry_run)
            except QualityError as e:
                print_error(e)
                failures += 1
                continue

            if result.fixes_applied:
                verb = "Would fix" if dry_run else "Fixed"
                console.print(f"{verb} {result.fixes_applied} issues in {escape(str(file_path))}")
    except QualityError as e:
        print_error(e)
        sys.exit(1)

    if failures:
        sys.exit(1)


def apply_diff(result: DiffResult, backup: bool) -> int:
    """Write the entries of ``result`` to disk; returns the number of files that failed."""
    fixer = QualityFixer([], backup_enabled=backup)
    failures = 0
    for file_diff in result.files:
        try:
            changed = apply_entries(file_diff.path, file_diff.entries, backup=fixer.create_backup)
        except QualityError as e:
            print_error(e)
            failures += 1
            continue
        console.print(f"[green]Applied {changed} changes to {escape(file_diff.path)}[/green]")
    return failures


if __name__ == '__main__':
    main()
