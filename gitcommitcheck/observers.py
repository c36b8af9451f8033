"""Observer pattern for analysis runs."""

from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console

from .models import AnalysisResult, CommitReport
from .text import pluralize


class AnalysisObserver(ABC):
    """Abstract base class for analysis observers."""

    @abstractmethod
    def on_commit_analyzed(self, report: CommitReport) -> None:
        """Called after every rule has run for a commit."""
        pass

    @abstractmethod
    def on_analysis_completed(self, result: AnalysisResult) -> None:
        """Called once the overall outcome is known."""
        pass


class ConsoleLogObserver(AnalysisObserver):
    """Observer that logs analysis progress to the console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def on_commit_analyzed(self, report: CommitReport) -> None:
        if report.has_issues:
            self.console.print(
                f"[dim]Checked {report.commit.short_hash}: "
                f"{pluralize(len(report.issues), 'issue')}[/dim]"
            )
        else:
            self.console.print(f"[dim]Checked {report.commit.short_hash}: ok[/dim]")

    def on_analysis_completed(self, result: AnalysisResult) -> None:
        status = "[green]passed[/green]" if result.passed else "[red]failed[/red]"
        self.console.print(
            f"[dim]Analysis of {pluralize(result.analyzed_count, 'commit')}[/dim] {status}"
        )


class FileLogObserver(AnalysisObserver):
    """Observer that logs analysis runs to a file."""

    def __init__(self, log_file: str):
        self.log_file = Path(log_file)
        # Ensure the parent directory exists
        self.log_file.parent.mkdir(parents=True, exist_ok=True)

    def _log(self, message: str) -> None:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with self.log_file.open("a", encoding="utf-8") as f:
            f.write(f"{timestamp} - {message}\n")

    def on_commit_analyzed(self, report: CommitReport) -> None:
        if not report.has_issues:
            self._log(f"{report.commit.short_hash} ok")
            return
        for issue in report.issues:
            self._log(
                f"{report.commit.short_hash} {issue.severity} "
                f"{issue.validation.value}: {issue.message}"
            )

    def on_analysis_completed(self, result: AnalysisResult) -> None:
        status = "Passed" if result.passed else "Failed"
        self._log(
            f"{status}: {len(result.flagged)} of "
            f"{pluralize(result.analyzed_count, 'commit')} flagged"
        )
