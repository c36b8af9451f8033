"""Entry points for embedding git-commit-check in other tools."""
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from rich.console import Console

from .branches import matches_any_pattern
from .config import ConfigFile, Settings
from .core import CommitAnalyzer, skipped_result
from .errors import ConfigError
from .models import AnalysisResult, Commit, ValidationConfig
from .observers import AnalysisObserver, FileLogObserver
from .output import print_results
from .repository import GitRepository
from .resolver import NameList, build_config, resolve_config

PathLike = Union[str, Path]


def load_settings(
    repo_path: PathLike = ".",
    config_path: Optional[PathLike] = None,
    no_config: bool = False,
) -> Tuple[Settings, Optional[ConfigFile]]:
    """Load file settings for ``repo_path``.

    ``config_path`` skips discovery and reads that file; ``no_config`` skips
    the file layer altogether.
    """
    if no_config:
        return Settings(), None
    if config_path is not None:
        config_file = ConfigFile(Path(config_path))
        return Settings.load(config_file), config_file
    return Settings.discover(Path(repo_path))


def fetch_commits(path: Optional[PathLike] = None, limit: Optional[int] = None) -> List[Commit]:
    """Return raw commits, newest first, without validating them.

    Raises:
        RepositoryError: If ``path`` is missing or not a git repository, or,
            without a ``path``, the working directory is not inside one
    """
    _check_limit(limit)
    return GitRepository(path).fetch_commits(limit)


def analyze_commits(
    path: Optional[PathLike] = None,
    limit: Optional[int] = None,
    threshold: Optional[int] = None,
    quiet: bool = False,
    strict: bool = False,
    config: Optional[ValidationConfig] = None,
    no_config: bool = False,
    config_path: Optional[PathLike] = None,
    error: NameList = None,
    warn: NameList = None,
    ignore: NameList = None,
    disable: NameList = None,
    branches: Optional[Sequence[str]] = None,
    log_file: Optional[PathLike] = None,
    console: Optional[Console] = None,
    observers: Iterable[AnalysisObserver] = (),
) -> AnalysisResult:
    """Analyze the recent commits of a repository.

    When ``config`` is given it is used as-is (apart from an explicit
    ``threshold`` and ``strict``) and no configuration file is read.
    Otherwise the configuration is resolved from the discovered file and the
    explicit overrides.

    Output is written to ``console``; in quiet mode nothing is written unless
    an issue is reported.

    Raises:
        ConfigError: For invalid configuration, before any commit is read
        RepositoryError: If the repository cannot be read
    """
    _check_limit(limit)
    repo_path = Path(path) if path is not None else Path(".")

    if config is not None:
        settings = None
        validation_config = build_config(
            threshold=config.threshold if threshold is None else threshold,
            severities=dict(config.severities),
            disabled=config.disabled,
            strict=strict or config.strict,
        )
    else:
        settings, _ = load_settings(repo_path, config_path, no_config)
        validation_config = resolve_config(
            settings,
            threshold=threshold,
            error=error,
            warn=warn,
            ignore=ignore,
            disable=disable,
            strict=strict,
        )

    repository = GitRepository(path)
    console = console or Console()

    patterns = list(branches or [])
    if settings is not None:
        patterns.extend(settings.branches)
    branch = repository.current_branch()
    total_commits = repository.count_commits()

    if not matches_any_pattern(branch, patterns):
        result = skipped_result(validation_config, total_commits, repo_path, branch)
    else:
        analyzer = CommitAnalyzer(validation_config)
        for observer in observers:
            analyzer.add_observer(observer)
        log_path = log_file or (settings.get_log_file() if settings else None)
        if log_path:
            analyzer.add_observer(FileLogObserver(str(log_path)))

        commits = repository.fetch_commits(limit)
        result = analyzer.run(commits, total_commits, path=repo_path, branch=branch)

    if not quiet or result.flagged:
        print_results(result, console)
    return result


def _check_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise ConfigError(f"invalid limit: {limit} (must be >= 0)")
