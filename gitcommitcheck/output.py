"""Human-readable rendering of analysis results."""
from typing import Optional

from rich.console import Console
from rich.markup import escape

from .models import AnalysisResult, Severity, Validation, ValidationConfig
from .text import pluralize

SEVERITY_STYLES = {
    Severity.ERROR: ("[error]", "red"),
    Severity.WARNING: ("[warn]", "yellow"),
    Severity.INFO: ("[info]", "blue"),
    Severity.IGNORE: ("", "dim"),
}


def severity_prefix(severity: Severity) -> str:
    return SEVERITY_STYLES[severity][0]


def format_summary(result: AnalysisResult) -> str:
    """One-line summary of the flagged commits, pluralized by count."""
    return (
        f"Found {pluralize(len(result.flagged), 'commit')} with issues "
        f"({pluralize(result.error_count, 'error')}, "
        f"{pluralize(result.warning_count, 'warning')}) "
        f"(threshold: {result.config.threshold} chars):"
    )


def print_results(result: AnalysisResult, console: Optional[Console] = None) -> None:
    """Print an analysis result."""
    console = console or Console()

    if result.skipped:
        branch = result.branch or "detached HEAD"
        console.print(
            f"[dim]Skipping analysis: branch '{escape(branch)}' does not match "
            "the configured branch patterns.[/dim]"
        )
        return

    if result.total_commits == 0:
        console.print("No commits found in repository.")
        return

    if not result.flagged:
        console.print("[green]Commit messages are adequately executed.[/green]")
        return

    location = str(result.path) if result.path is not None else "."
    console.print(
        f"Analyzed {result.analyzed_count} of "
        f"{pluralize(result.total_commits, 'total commit')} on path {escape(location)}\n"
    )
    console.print(escape(format_summary(result)) + "\n")

    for report in result.flagged:
        console.print(
            f"  [bold]{report.commit.short_hash}[/bold]: \"{escape(report.commit.subject)}\""
        )
        for issue in report.issues:
            prefix, style = SEVERITY_STYLES[issue.severity]
            console.print(
                f"    [{style}]{escape(prefix)}[/{style}] {escape(issue.message)}"
            )

    if not result.passed:
        if result.error_count:
            reason = "errors"
        else:
            reason = "warnings in strict mode"
        console.print(f"\n[red]Failed: {reason} found.[/red]")


def print_config(
    config: ValidationConfig,
    console: Optional[Console] = None,
    config_path: Optional[str] = None,
) -> None:
    """Print the effective configuration, one row per validation."""
    console = console or Console()

    console.print("\n[bold]Current Configuration Settings:[/bold]")
    if config_path:
        console.print(f"[dim]Config file: {escape(config_path)}[/dim]")
    else:
        console.print("[dim]Using default values (no config file found)[/dim]")

    console.print(f"\n{'threshold':<20} {config.threshold}")
    console.print(f"{'strict':<20} {config.strict}")

    console.print(f"\n{'Validation':<20} {'Severity':<10} {'Enabled':<8} Aliases")
    console.print("-" * 60)
    for validation in Validation:
        enabled = "yes" if config.is_enabled(validation) else "no"
        aliases = ", ".join(validation.aliases)
        console.print(
            f"{validation.value:<20} {str(config.severity_for(validation)):<10} "
            f"{enabled:<8} {aliases}"
        )
