"""Reading commits from a git repository."""
from pathlib import Path
from typing import List, Optional, Union

import git
from git import Repo

from .errors import GitCommandError, NotARepositoryError, PathNotFoundError
from .models import Commit


def validate_repo_path(path: Union[str, Path]) -> Path:
    """Check that ``path`` exists and is the root of a git repository."""
    path = Path(path)
    if not path.exists():
        raise PathNotFoundError(path)
    if not (path / ".git").exists():
        raise NotARepositoryError(path)
    return path


class GitRepository:
    """Commit source backed by GitPython.

    Commits are yielded newest first, the order ``git log`` uses. Without a
    ``repo_path`` the repository enclosing the working directory is used, the
    way ``git`` itself finds it.
    """

    def __init__(self, repo_path: Optional[Union[str, Path]] = None):
        if repo_path is None:
            try:
                self.repo = Repo(".", search_parent_directories=True)
            except (git.InvalidGitRepositoryError, git.NoSuchPathError):
                raise NotARepositoryError(Path.cwd()) from None
            self.repo_path = Path(self.repo.working_tree_dir or self.repo.git_dir)
            return

        self.repo_path = validate_repo_path(repo_path)
        try:
            self.repo = Repo(self.repo_path)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError):
            raise NotARepositoryError(self.repo_path) from None

    def has_commits(self) -> bool:
        return self.repo.head.is_valid()

    def count_commits(self) -> int:
        """Total number of commits reachable from HEAD."""
        if not self.has_commits():
            return 0
        try:
            return int(self.repo.git.rev_list('--count', 'HEAD'))
        except git.GitCommandError as e:
            raise GitCommandError(str(e.stderr or e).strip()) from e
        except ValueError:
            raise GitCommandError("Failed to parse commit count") from None

    def fetch_commits(self, limit: Optional[int] = None) -> List[Commit]:
        """Return up to ``limit`` commits, newest first."""
        if limit == 0 or not self.has_commits():
            return []
        try:
            return [
                self._to_commit(c)
                for c in self.repo.iter_commits('HEAD', max_count=limit)
            ]
        except git.GitCommandError as e:
            raise GitCommandError(str(e.stderr or e).strip()) from e

    def current_branch(self) -> Optional[str]:
        """Name of the checked-out branch, or None for a detached HEAD."""
        try:
            return self.repo.active_branch.name
        except TypeError:
            return None

    @staticmethod
    def _to_commit(git_commit) -> Commit:
        message = git_commit.message
        if isinstance(message, bytes):
            message = message.decode('utf-8', errors='replace')
        return Commit.from_message(
            hash=git_commit.hexsha,
            author_name=git_commit.author.name or "",
            author_email=git_commit.author.email or "",
            message=message.strip("\n"),
        )
