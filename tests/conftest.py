import pytest
from pathlib import Path
from git import Actor, Repo

from gitcommitcheck.models import Commit

AUTHOR = Actor("Test Author", "test@example.com")


def commit_messages(repo: Repo, messages):
    """Create one commit per message, oldest first."""
    work_dir = Path(repo.working_tree_dir)
    for i, message in enumerate(messages):
        test_file = work_dir / "test.txt"
        test_file.write_text(f"content {i}\n")
        repo.index.add(["test.txt"])
        repo.index.commit(message, author=AUTHOR, committer=AUTHOR)


@pytest.fixture
def make_repo(tmp_path):
    """Factory creating a git repository whose history has the given messages."""
    def _make(messages, name="repo"):
        repo_dir = tmp_path / name
        repo_dir.mkdir()
        repo = Repo.init(repo_dir)
        commit_messages(repo, messages)
        return repo_dir

    return _make


@pytest.fixture
def temp_git_repo(make_repo):
    """A repository with one good and one bad commit (newest last)."""
    return make_repo([
        "feat(parser): handle empty input gracefully #42",
        "WIP: tmp",
    ])


@pytest.fixture
def empty_git_repo(tmp_path):
    """A repository without any commits."""
    repo_dir = tmp_path / "empty"
    repo_dir.mkdir()
    Repo.init(repo_dir)
    return repo_dir


@pytest.fixture
def make_commit():
    def _make(subject: str, body: str = "", hash: str = "a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5f6a1b2"):
        message = f"{subject}\n\n{body}" if body else subject
        return Commit.from_message(
            hash=hash,
            author_name="Test Author",
            author_email="test@example.com",
            message=message,
        )

    return _make


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings from the caller's environment out of the tests."""
    for name in ("GIT_COMMIT_CHECK_THRESHOLD", "GIT_COMMIT_CHECK_STRICT", "GIT_COMMIT_CHECK_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
