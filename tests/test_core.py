import pytest

from gitcommitcheck.core import CommitAnalyzer, aggregate, is_failing, skipped_result
from gitcommitcheck.models import (
    CommitReport,
    Issue,
    Severity,
    Validation,
    ValidationConfig,
)
from gitcommitcheck.observers import AnalysisObserver


class RecordingObserver(AnalysisObserver):
    def __init__(self):
        self.reports = []
        self.results = []

    def on_commit_analyzed(self, report):
        self.reports.append(report)

    def on_analysis_completed(self, result):
        self.results.append(result)


def _report(make_commit, *severities):
    issues = tuple(
        Issue(Validation.SHORT_COMMIT, severity, "too short") for severity in severities
    )
    return CommitReport(commit=make_commit("subject"), issues=issues)


@pytest.mark.parametrize("severity,strict,expected", [
    (Severity.ERROR, False, True),
    (Severity.ERROR, True, True),
    (Severity.WARNING, False, False),
    (Severity.WARNING, True, True),
    (Severity.INFO, False, False),
    (Severity.INFO, True, False),
])
def test_is_failing(severity, strict, expected):
    issue = Issue(Validation.SHORT_COMMIT, severity, "message")
    assert is_failing(issue, strict) is expected


def test_aggregate_warnings_pass_without_strict(make_commit):
    result = aggregate([_report(make_commit, Severity.WARNING)], 1, ValidationConfig())
    assert result.passed
    assert result.exit_code == 0
    assert result.warning_count == 1


def test_aggregate_strict_fails_on_warning_without_rewriting(make_commit):
    config = ValidationConfig(strict=True)
    result = aggregate([_report(make_commit, Severity.WARNING)], 1, config)

    assert not result.passed
    assert result.exit_code == 1
    # the stored severity stays a warning
    assert result.reports[0].issues[0].severity == Severity.WARNING
    assert result.error_count == 0


def test_aggregate_info_never_fails(make_commit):
    config = ValidationConfig(strict=True)
    result = aggregate([_report(make_commit, Severity.INFO)], 1, config)
    assert result.passed
    assert result.info_count == 1


def test_aggregate_counts_commits_not_issues(make_commit):
    reports = [
        _report(make_commit, Severity.ERROR, Severity.ERROR),
        _report(make_commit, Severity.WARNING),
        _report(make_commit),
    ]
    result = aggregate(reports, 10, ValidationConfig())

    assert result.error_count == 1
    assert result.warning_count == 1
    assert len(result.flagged) == 2
    assert result.analyzed_count == 3
    assert result.total_commits == 10
    assert len(list(result.iter_issues())) == 3
    assert not result.passed


def test_aggregate_empty():
    result = aggregate([], 0, ValidationConfig())
    assert result.passed
    assert result.flagged == []


def test_skipped_result_passes():
    result = skipped_result(ValidationConfig(), 5, branch="main")
    assert result.skipped
    assert result.passed
    assert result.reports == ()


def test_analyzer_preserves_commit_order(make_commit):
    commits = [
        make_commit("WIP: tmp", hash="1" * 40),
        make_commit("feat(api): add pagination to list endpoint #7", hash="2" * 40),
        make_commit("Added new feature", hash="3" * 40),
    ]
    result = CommitAnalyzer(ValidationConfig()).run(commits)

    assert [r.commit.hash for r in result.reports] == ["1" * 40, "2" * 40, "3" * 40]
    assert [r.commit.hash for r in result.flagged] == ["1" * 40, "3" * 40]
    assert result.total_commits == 3
    assert not result.passed


def test_analyzer_notifies_observers(make_commit):
    observer = RecordingObserver()
    analyzer = CommitAnalyzer()
    analyzer.add_observer(observer)

    result = analyzer.run([make_commit("Added new feature")], total_commits=4)

    assert len(observer.reports) == 1
    assert observer.results == [result]
    assert result.total_commits == 4

    analyzer.remove_observer(observer)
    analyzer.run([make_commit("Added new feature")])
    assert len(observer.reports) == 1


def test_analyzer_with_everything_disabled_passes(make_commit):
    config = ValidationConfig(disabled=frozenset(Validation))
    result = CommitAnalyzer(config).run([make_commit("WIP")])
    assert result.passed
    assert result.flagged == []
