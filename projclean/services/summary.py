from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from projclean.models.cleanup import CleanupResult
from projclean.models.enums import ProposalOutcome
from projclean.models.report import AnalysisReport, FileFinding
from projclean.services.formatting import format_bytes, format_date, relative_path


def _trim(path: str, root_prefix: str) -> str:
    return escape(relative_path(path, root_prefix))


def _analysis_panel(report: AnalysisReport) -> Panel:
    body = (
        f"Files: [bold]{report.total_files}[/bold]\n"
        f"Directories analyzed: [bold]{len(report.directory_stats)}[/bold]\n"
        f"Duplicate sets: [bold]{len(report.duplicates)}[/bold]\n"
        f"Special entries skipped: [bold]{report.skipped_special}[/bold]\n"
        f"Access Errors: [bold]{report.access_errors}[/bold]"
    )
    return Panel(body, title="Project Structure Analysis", border_style="blue")


def _directory_table(report: AnalysisReport) -> Table:
    table = Table(title="Directory Statistics", header_style="bold cyan")
    table.add_column("Directory")
    table.add_column("Files", justify="right")
    table.add_column("Directories", justify="right")
    table.add_column("Size", justify="right")
    for name in sorted(report.directory_stats):
        stats = report.directory_stats[name]
        table.add_row(escape(name), str(stats.files), str(stats.directories), format_bytes(stats.size_bytes))
    return table


def _file_types_table(report: AnalysisReport) -> Table:
    table = Table(title="File Types", header_style="bold magenta")
    table.add_column("Extension")
    table.add_column("Files", justify="right")
    for ext, count in report.sorted_file_types():
        table.add_row(escape(ext), str(count))
    return table


def _findings_table(title: str, findings: list[FileFinding], show_accessed: bool) -> Table:
    table = Table(title=title, header_style="bold yellow")
    table.add_column("Path")
    table.add_column("Size", justify="right")
    if show_accessed:
        table.add_column("Last accessed", justify="right")
    for item in findings:
        row = [escape(item.path), format_bytes(item.size_bytes)]
        if show_accessed:
            row.append(format_date(item.accessed_ts))
        table.add_row(*row)
    return table


def render_analysis(console: Console, report: AnalysisReport) -> None:
    console.print(_analysis_panel(report))
    for missing in report.missing_directories:
        console.print(f"[yellow]Directory does not exist:[/yellow] {escape(missing)}")

    console.print(_directory_table(report))
    console.print(_file_types_table(report))

    if report.duplicates:
        table = Table(title="Potential Duplicate Files", header_style="bold red")
        table.add_column("Set", justify="right")
        table.add_column("Files")
        for idx, group in enumerate(report.duplicates, start=1):
            table.add_row(str(idx), "\n".join(escape(p) for p in group.paths))
        console.print(table)

    if report.naming_issues:
        table = Table(title="Naming Convention Issues", header_style="bold yellow")
        table.add_column("File")
        table.add_column("Issue")
        for issue in report.naming_issues:
            table.add_row(escape(issue.path), escape(issue.message))
        console.print(table)

    if report.unused_files:
        console.print(_findings_table("Potentially Unused Files", report.unused_files, show_accessed=True))

    if report.large_files:
        console.print(_findings_table("Large Files", report.large_files, show_accessed=False))


_OUTCOME_STYLE = {
    ProposalOutcome.PROPOSED: "cyan",
    ProposalOutcome.DELETED: "green",
    ProposalOutcome.KEPT: "yellow",
    ProposalOutcome.FAILED: "red",
}


def render_cleanup(console: Console, result: CleanupResult, root_prefix: str = "") -> None:
    title = "Cleanup Plan (dry run)" if result.dry_run else "Cleanup Results"
    table = Table(title=title, header_style="bold cyan")
    table.add_column("Path")
    table.add_column("Type", justify="center")
    table.add_column("Reason")
    table.add_column("Outcome")
    for proposal in result.proposals:
        style = _OUTCOME_STYLE[proposal.outcome]
        table.add_row(
            _trim(str(proposal.path), root_prefix),
            "DIR" if proposal.is_dir else "FILE",
            proposal.reason.label,
            f"[{style}]{proposal.outcome.value}[/{style}]",
        )
    console.print(table)

    deleted = len(result.with_outcome(ProposalOutcome.DELETED))
    body = (
        f"Proposals: [bold]{len(result.proposals)}[/bold]\n"
        f"Deleted: [bold]{deleted}[/bold]\n"
        f"Kept: [bold]{len(result.with_outcome(ProposalOutcome.KEPT))}[/bold]\n"
        f"Essential skipped: [bold]{result.skipped_essential}[/bold]\n"
        f"Special entries skipped: [bold]{result.skipped_special}[/bold]\n"
        f"Errors: [bold]{result.errors}[/bold]\n"
        f"Expired backups: [bold]{len(result.removed_partitions)}[/bold]"
    )
    console.print(Panel(body, title="Summary", border_style="blue"))

    if result.dry_run:
        console.print("This was a dry run. No files were actually deleted.")
        console.print("Run with --delete to perform actual deletions.")
