#!/usr/bin/env python3
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape

from .api import analyze_commits, load_settings
from .config import DEFAULT_CONFIG_FILENAME, Settings
from .errors import GitCommitCheckError, PathNotFoundError
from .models import DEFAULT_SEVERITIES, DEFAULT_THRESHOLD
from .observers import ConsoleLogObserver
from .output import print_config
from .resolver import resolve_config

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

EXIT_INTERRUPTED = 130

VALIDATIONS_HELP = (
    "Comma-separated validations (repeatable). Names: ShortCommit, WipCommit, "
    "NonImperative, VagueLanguage, MissingReference, InvalidFormat; "
    "aliases: short, wip, imperative, vague, ref, format"
)


def write_default_config(repo_path: Path) -> Optional[Path]:
    """Create the dedicated config file with default values.

    Returns the new file, or None if one already exists.
    """
    if not repo_path.is_dir():
        raise PathNotFoundError(repo_path)
    if (repo_path / DEFAULT_CONFIG_FILENAME).exists():
        return None
    defaults = Settings(
        threshold=DEFAULT_THRESHOLD,
        strict=False,
        severity={v.value: str(s) for v, s in DEFAULT_SEVERITIES.items()},
    )
    return defaults.save(repo_path)


@click.command()
@click.option(
    "-p",
    "--path",
    help="Path to git repository (defaults to the repository containing the current directory)",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
)
@click.option(
    "-l", "--limit", type=click.IntRange(min=0), help="Maximum number of commits to analyze"
)
@click.option(
    "-t",
    "--threshold",
    type=click.IntRange(min=0),
    help=f"Minimum subject length in characters (default: {DEFAULT_THRESHOLD})",
)
@click.option("-q", "--quiet", is_flag=True, help="Suppress output unless issues are found")
@click.option(
    "--strict", is_flag=True, help="Treat warnings as errors (exit non-zero on any warning)"
)
@click.option("--error", "error_names", multiple=True, help=f"Report as errors. {VALIDATIONS_HELP}")
@click.option("--warn", "warn_names", multiple=True, help="Report as warnings")
@click.option("--ignore", "ignore_names", multiple=True, help="Run but never report")
@click.option(
    "--disable", "disable_names", multiple=True, help="Skip these validations entirely"
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Read settings from this file instead of discovering {DEFAULT_CONFIG_FILENAME} or pyproject.toml",
)
@click.option("--no-config", is_flag=True, help="Ignore configuration files")
@click.option(
    "-b",
    "--branch",
    "branches",
    multiple=True,
    help="Only analyze when the current branch matches this glob (repeatable)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Append a record of the run to this file (overrides config setting)",
)
@click.option("-v", "--verbose", is_flag=True, help="Log every analyzed commit")
@click.option(
    "--config-list", is_flag=True, help="Display the effective configuration and exit"
)
@click.option(
    "--init-config",
    is_flag=True,
    help=f"Create {DEFAULT_CONFIG_FILENAME} with default values and exit",
)
@click.option("--version", is_flag=True, help="Display version information and exit")
@click.pass_context
def main(
    ctx: click.Context,
    path: Optional[Path],
    limit: Optional[int],
    threshold: Optional[int],
    quiet: bool,
    strict: bool,
    error_names: Tuple[str, ...],
    warn_names: Tuple[str, ...],
    ignore_names: Tuple[str, ...],
    disable_names: Tuple[str, ...],
    config_path: Optional[Path],
    no_config: bool,
    branches: Tuple[str, ...],
    log_file: Optional[Path],
    verbose: bool,
    config_list: bool,
    init_config: bool,
    version: bool,
):
    """
    Check git commit messages against quality rules.

    Exits with 0 when no commit has an error (or, with --strict, a warning),
    1 when problems were found, 2 on configuration errors and 3 when the
    repository cannot be read.

    Configuration can be set in .gitcommitcheck.toml or in the
    [tool.gitcommitcheck] section of pyproject.toml. Command line options
    override configuration file settings.
    """
    try:
        if version:
            from .version import display_version_info

            display_version_info(console)
            return

        repo_path = (path or Path(".")).absolute()

        if init_config:
            created = write_default_config(repo_path)
            if created is None:
                console.print(
                    f"[yellow]{DEFAULT_CONFIG_FILENAME} already exists, leaving it unchanged[/yellow]"
                )
            else:
                console.print(f"[green]Created config file:[/green] {created}")
            return

        if config_list:
            settings, config_file = load_settings(repo_path, config_path, no_config)
            config = resolve_config(
                settings,
                threshold=threshold,
                error=error_names,
                warn=warn_names,
                ignore=ignore_names,
                disable=disable_names,
                strict=strict,
            )
            print_config(
                config,
                console,
                str(config_file.path) if config_file is not None else None,
            )
            return

        observers = [ConsoleLogObserver(console)] if verbose else []
        result = analyze_commits(
            path=path,
            limit=limit,
            threshold=threshold,
            quiet=quiet,
            strict=strict,
            no_config=no_config,
            config_path=config_path,
            error=error_names,
            warn=warn_names,
            ignore=ignore_names,
            disable=disable_names,
            branches=branches,
            log_file=log_file,
            console=console,
            observers=observers,
        )
        exit_code = result.exit_code
    except GitCommitCheckError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        exit_code = e.exit_code
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")
        exit_code = EXIT_INTERRUPTED

    ctx.exit(exit_code)


if __name__ == "__main__":
    main()
