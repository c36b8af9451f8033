"""Configuration file discovery and loading for git-commit-check."""
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import tomli
import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

DEFAULT_CONFIG_FILENAME = ".gitcommitcheck.toml"
PYPROJECT_FILENAME = "pyproject.toml"
TOOL_SECTION = "gitcommitcheck"


@dataclass(frozen=True)
class ConfigFile:
    """A discovered configuration file.

    ``pyproject.toml`` keeps its settings under ``[tool.gitcommitcheck]``,
    the dedicated file keeps them at the top level.
    """

    path: Path

    @property
    def is_pyproject(self) -> bool:
        return self.path.name == PYPROJECT_FILENAME


def find_config_file(start_dir: Path) -> Optional[ConfigFile]:
    """Walk up from ``start_dir`` and return the nearest configuration file.

    In each directory the dedicated file takes precedence over
    ``pyproject.toml``.
    """
    try:
        start = Path(start_dir).resolve()
    except OSError:
        start = Path(start_dir)

    for directory in (start, *start.parents):
        dedicated = directory / DEFAULT_CONFIG_FILENAME
        if dedicated.is_file():
            return ConfigFile(dedicated)
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file():
            return ConfigFile(pyproject)
    return None


class Settings(BaseModel):
    """Raw settings for git-commit-check.

    Values that are ``None`` were not set by the file or the environment and
    fall back to the built-in defaults when the configuration is resolved.
    """

    model_config = ConfigDict(extra="forbid")

    threshold: Optional[int] = Field(
        default=None,
        ge=0,
        strict=True,
        description="Minimum subject length in characters"
    )

    strict: Optional[bool] = Field(
        default=None,
        description="Treat warnings as errors"
    )

    disable: List[str] = Field(
        default_factory=list,
        description="Validations to skip entirely (names or aliases)"
    )

    severity: Dict[str, str] = Field(
        default_factory=dict,
        description="Severity overrides keyed by validation name or alias"
    )

    branches: List[str] = Field(
        default_factory=list,
        description="Only analyze when the current branch matches one of these globs"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to a log file recording each analysis run"
    )

    def __init__(self, **data):
        """Initialize settings with environment variable support."""
        env_data = {}

        env_mapping = {
            'GIT_COMMIT_CHECK_THRESHOLD': 'threshold',
            'GIT_COMMIT_CHECK_STRICT': 'strict',
            'GIT_COMMIT_CHECK_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var].strip()

                if field_name == 'strict':
                    value = value.lower() in ['true', '1', 'yes', 'on']
                elif field_name == 'threshold':
                    value = _parse_env_int(env_var, value)

                env_data[field_name] = value

        merged_data = {**env_data, **data}

        try:
            super().__init__(**merged_data)
        except ValidationError as e:
            raise ConfigError(_describe_validation_error(e)) from e

    @staticmethod
    def _is_safe_path(path: str) -> bool:
        """Check that a configured path stays inside the repository."""
        if not path:
            return False

        if '..' in Path(path).parts or os.path.isabs(path) or '\\' in path:
            return False

        dangerous_patterns = [r'^/etc/', r'^/var/', r'^/usr/', r'^/bin/', r'^/sbin/']
        return not any(re.search(p, path) for p in dangerous_patterns)

    @classmethod
    def load(cls, config_file: ConfigFile) -> 'Settings':
        """Load settings from a configuration file.

        Args:
            config_file: The file to read

        Returns:
            Settings: Values from the file, merged over the environment

        Raises:
            ConfigError: If the file cannot be read, is not valid TOML, or
                holds invalid values
        """
        try:
            with config_file.path.open('rb') as f:
                config_data = tomli.load(f)
        except OSError as e:
            raise ConfigError(f"failed to read config file {config_file.path}: {e}") from e
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"invalid TOML syntax in {config_file.path}: {e}") from e

        if config_file.is_pyproject:
            tool = config_data.get('tool', {})
            if not isinstance(tool, dict):
                raise ConfigError(f"[tool] in {config_file.path} must be a table")
            config_data = tool.get(TOOL_SECTION, {})

        if not isinstance(config_data, dict):
            raise ConfigError(f"[tool.{TOOL_SECTION}] in {config_file.path} must be a table")

        log_file = config_data.get('log_file')
        if isinstance(log_file, str) and not cls._is_safe_path(log_file):
            raise ConfigError(f"unsafe log file path '{log_file}' in {config_file.path}")

        return cls(**config_data)

    @classmethod
    def discover(cls, start_dir: Path) -> Tuple['Settings', Optional[ConfigFile]]:
        """Find and load the nearest configuration file, if there is one."""
        config_file = find_config_file(start_dir)
        if config_file is None:
            return cls(), None
        return cls.load(config_file), config_file

    def save(self, repo_path: Path) -> Path:
        """Write these settings to the dedicated config file in ``repo_path``.

        Returns:
            Path: The file that was written
        """
        config_path = Path(repo_path) / DEFAULT_CONFIG_FILENAME
        config_dict = {k: v for k, v in self.model_dump().items() if v is not None}

        with config_path.open('wb') as f:
            tomli_w.dump(config_dict, f)
        return config_path

    def get_log_file(self) -> Optional[Path]:
        return Path(self.log_file) if self.log_file else None


def _describe_validation_error(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "settings"
        problems.append(f"{location}: {item['msg']}")
    return "invalid configuration: " + "; ".join(problems)


def _parse_env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(
            f"invalid threshold in {name}: '{value}' (must be a non-negative integer)"
        ) from None
