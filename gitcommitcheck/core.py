"""Core analysis for git-commit-check."""
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .models import AnalysisResult, CommitReport, Commit, Issue, Severity, ValidationConfig
from .observers import AnalysisObserver
from .validation import CommitValidator


def is_failing(issue: Issue, strict: bool) -> bool:
    """Errors always fail a run; warnings only fail it in strict mode."""
    if issue.severity == Severity.ERROR:
        return True
    return strict and issue.severity == Severity.WARNING


def outcome_passed(reports: Iterable[CommitReport], strict: bool) -> bool:
    return not any(
        is_failing(issue, strict)
        for report in reports
        for issue in report.issues
    )


def aggregate(
    reports: Sequence[CommitReport],
    total_commits: int,
    config: ValidationConfig,
    path: Optional[Path] = None,
    branch: Optional[str] = None,
) -> AnalysisResult:
    """Reduce per-commit reports into the final result.

    Strict mode is read from ``config`` and never rewrites stored
    severities: a warning stays a warning in the report.
    """
    reports = tuple(reports)
    return AnalysisResult(
        reports=reports,
        total_commits=total_commits,
        config=config,
        passed=outcome_passed(reports, config.strict),
        path=path,
        branch=branch,
    )


def skipped_result(
    config: ValidationConfig,
    total_commits: int,
    path: Optional[Path] = None,
    branch: Optional[str] = None,
) -> AnalysisResult:
    """Result for a run that was skipped because the branch did not match."""
    return AnalysisResult(
        reports=(),
        total_commits=total_commits,
        config=config,
        passed=True,
        path=path,
        branch=branch,
        skipped=True,
    )


class CommitAnalyzer:
    """Runs the enabled validations against an ordered sequence of commits."""

    def __init__(self, config: Optional[ValidationConfig] = None):
        self.config = config or ValidationConfig()
        self.validator = CommitValidator(self.config)
        self.observers: List[AnalysisObserver] = []

    def add_observer(self, observer: AnalysisObserver) -> None:
        """Add an observer to be notified as commits are analyzed."""
        self.observers.append(observer)

    def remove_observer(self, observer: AnalysisObserver) -> None:
        """Remove an observer from the notification list."""
        self.observers.remove(observer)

    def analyze_commit(self, commit: Commit) -> CommitReport:
        return CommitReport(commit=commit, issues=self.validator.validate(commit))

    def analyze(self, commits: Iterable[Commit]) -> List[CommitReport]:
        """Analyze every commit, preserving input order.

        Commits without issues are kept so that counts stay accurate.
        """
        reports = []
        for commit in commits:
            report = self.analyze_commit(commit)
            for observer in self.observers:
                observer.on_commit_analyzed(report)
            reports.append(report)
        return reports

    def run(
        self,
        commits: Sequence[Commit],
        total_commits: Optional[int] = None,
        path: Optional[Path] = None,
        branch: Optional[str] = None,
    ) -> AnalysisResult:
        """Analyze ``commits`` and aggregate them into an ``AnalysisResult``."""
        reports = self.analyze(commits)
        result = aggregate(
            reports,
            total_commits if total_commits is not None else len(reports),
            self.config,
            path=path,
            branch=branch,
        )
        for observer in self.observers:
            observer.on_analysis_completed(result)
        return result
