"""Exceptions raised by git-commit-check.

Validation findings are never raised; they are returned as issues. These
exceptions cover the cases where the tool could not run at all.
"""
from pathlib import Path

EXIT_CONFIG_ERROR = 2
EXIT_REPOSITORY_ERROR = 3


class GitCommitCheckError(Exception):
    """Base class for errors that stop an analysis run."""

    exit_code = 1


class ConfigError(GitCommitCheckError):
    """Invalid configuration: unknown rule alias, bad severity or threshold."""

    exit_code = EXIT_CONFIG_ERROR


class RepositoryError(GitCommitCheckError):
    """The commit source could not be read."""

    exit_code = EXIT_REPOSITORY_ERROR


class PathNotFoundError(RepositoryError):
    def __init__(self, path: Path):
        super().__init__(f"Path '{path}' does not exist")
        self.path = path


class NotARepositoryError(RepositoryError):
    def __init__(self, path: Path):
        super().__init__(f"Path '{path}' is not a git repository")
        self.path = path


class GitCommandError(RepositoryError):
    def __init__(self, message: str):
        super().__init__(f"Git command failed: {message}")
