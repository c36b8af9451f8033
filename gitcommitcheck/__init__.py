"""Check git commit messages against a configurable set of quality rules."""

__version__ = "0.3.0"

from .api import analyze_commits, fetch_commits, load_settings
from .config import Settings
from .core import CommitAnalyzer, aggregate
from .errors import (
    ConfigError,
    GitCommitCheckError,
    NotARepositoryError,
    PathNotFoundError,
    RepositoryError,
)
from .models import (
    AnalysisResult,
    Commit,
    CommitReport,
    Issue,
    Severity,
    Validation,
    ValidationConfig,
)
from .resolver import resolve_config

__all__ = [
    "AnalysisResult",
    "Commit",
    "CommitAnalyzer",
    "CommitReport",
    "ConfigError",
    "GitCommitCheckError",
    "Issue",
    "NotARepositoryError",
    "PathNotFoundError",
    "RepositoryError",
    "Settings",
    "Severity",
    "Validation",
    "ValidationConfig",
    "aggregate",
    "analyze_commits",
    "fetch_commits",
    "load_settings",
    "resolve_config",
]
