"""Shared models for git-commit-check."""
from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ConfigError

SHORT_HASH_LENGTH = 7
DEFAULT_THRESHOLD = 30

EXIT_OK = 0
EXIT_ISSUES_FOUND = 1


@dataclass(frozen=True)
class Commit:
    """One commit as yielded by the commit source."""

    hash: str
    author_name: str
    author_email: str
    subject: str
    message: str = ""

    @property
    def short_hash(self) -> str:
        return self.hash[:SHORT_HASH_LENGTH]

    @property
    def body(self) -> str:
        """Everything after the subject line, without surrounding blank lines."""
        _, _, rest = self.full_message.partition("\n")
        return rest.strip("\n")

    @property
    def full_message(self) -> str:
        return self.message or self.subject

    @classmethod
    def from_message(
        cls, hash: str, author_name: str, author_email: str, message: str
    ) -> "Commit":
        """Build a commit whose subject is the first line of ``message``."""
        subject = message.split("\n", 1)[0].rstrip("\r")
        return cls(
            hash=hash,
            author_name=author_name,
            author_email=author_email,
            subject=subject,
            message=message,
        )


class Validation(str, Enum):
    """Message-quality rules, in the order they are evaluated."""

    SHORT_COMMIT = "ShortCommit"
    WIP_COMMIT = "WipCommit"
    NON_IMPERATIVE = "NonImperative"
    VAGUE_LANGUAGE = "VagueLanguage"
    MISSING_REFERENCE = "MissingReference"
    INVALID_FORMAT = "InvalidFormat"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def aliases(self) -> Tuple[str, ...]:
        return _SHORT_ALIASES[self]

    def __str__(self) -> str:
        return self.description

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __repr__(self) -> str:
        return f"Validation.{self.value}"

    @classmethod
    def from_alias(cls, name: str) -> "Validation":
        """Resolve a canonical name or alias, ignoring case, dashes and underscores."""
        key = _normalize_alias(name)
        try:
            return _ALIAS_TABLE[key]
        except KeyError:
            valid = ", ".join(sorted({a for v in cls for a in v.aliases}))
            raise ConfigError(
                f"invalid validation name: '{name}' (valid: {valid})"
            ) from None


_DESCRIPTIONS = {
    Validation.SHORT_COMMIT: "Short commit message",
    Validation.WIP_COMMIT: "Work-in-progress commit (e.g., 'WIP', 'fixup!')",
    Validation.NON_IMPERATIVE: "Non-imperative mood (use 'Add' not 'Added')",
    Validation.VAGUE_LANGUAGE: "Vague language (e.g., 'fix bug', 'update code')",
    Validation.MISSING_REFERENCE: "Missing issue reference (e.g., #123)",
    Validation.INVALID_FORMAT: "Invalid format (expected: type(scope): description)",
}

_SHORT_ALIASES = {
    Validation.SHORT_COMMIT: ("short",),
    Validation.WIP_COMMIT: ("wip",),
    Validation.NON_IMPERATIVE: ("imperative",),
    Validation.VAGUE_LANGUAGE: ("vague",),
    Validation.MISSING_REFERENCE: ("reference", "ref"),
    Validation.INVALID_FORMAT: ("format",),
}


def _normalize_alias(name: str) -> str:
    return "".join(ch for ch in name.strip().lower() if ch not in "-_ ")


def _build_alias_table() -> Dict[str, Validation]:
    table: Dict[str, Validation] = {}
    for validation in Validation:
        for alias in (validation.value, *validation.aliases):
            key = _normalize_alias(alias)
            if table.setdefault(key, validation) is not validation:
                raise ValueError(f"alias '{alias}' maps to more than one validation")
    return table


_ALIAS_TABLE = _build_alias_table()


class Severity(IntEnum):
    """How a finding is treated. Ordered so that ``IGNORE < INFO < WARNING < ERROR``."""

    IGNORE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def __repr__(self) -> str:
        return f"Severity.{self.name.capitalize()}"

    @classmethod
    def parse(cls, value: str) -> "Severity":
        key = str(value).strip().lower()
        if key == "warn":
            key = "warning"
        for severity in cls:
            if str(severity) == key:
                return severity
        raise ConfigError(
            f"invalid severity: '{value}' (valid: error, warning, info, ignore)"
        )


DEFAULT_SEVERITIES: Dict[Validation, Severity] = {
    Validation.SHORT_COMMIT: Severity.WARNING,
    Validation.WIP_COMMIT: Severity.ERROR,
    Validation.NON_IMPERATIVE: Severity.WARNING,
    Validation.VAGUE_LANGUAGE: Severity.WARNING,
    Validation.MISSING_REFERENCE: Severity.INFO,
    Validation.INVALID_FORMAT: Severity.INFO,
}


class ValidationConfig(BaseModel):
    """Effective, already-resolved settings read by every rule.

    ``severities`` always holds an entry for every validation; missing keys
    are filled from the defaults and the mapping is read-only. A disabled
    validation never runs, while a validation at ``Severity.IGNORE`` runs but
    is never reported.
    """

    model_config = ConfigDict(frozen=True)

    threshold: int = Field(
        default=DEFAULT_THRESHOLD,
        ge=0,
        strict=True,
        description="Minimum subject length in characters"
    )

    severities: Mapping[Validation, Severity] = Field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_SEVERITIES)),
        description="Severity for each validation"
    )

    disabled: FrozenSet[Validation] = Field(
        default_factory=frozenset,
        description="Validations that are skipped entirely"
    )

    strict: bool = Field(
        default=False,
        description="Treat warnings as failures when computing the outcome"
    )

    @field_validator("severities")
    @classmethod
    def _fill_defaults(cls, value: Mapping[Validation, Severity]) -> Mapping[Validation, Severity]:
        return MappingProxyType({**DEFAULT_SEVERITIES, **value})

    def severity_for(self, validation: Validation) -> Severity:
        return self.severities[validation]

    def is_enabled(self, validation: Validation) -> bool:
        return validation not in self.disabled

    def enabled_validations(self) -> List[Validation]:
        """Enabled validations in evaluation order."""
        return [v for v in Validation if self.is_enabled(v)]


@dataclass(frozen=True)
class Issue:
    """A single validation failing for a single commit."""

    validation: Validation
    severity: Severity
    message: str


@dataclass(frozen=True)
class CommitReport:
    """A commit paired with the issues reported for it, in rule order."""

    commit: Commit
    issues: Tuple[Issue, ...] = ()

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def has_severity(self, severity: Severity) -> bool:
        return any(issue.severity == severity for issue in self.issues)


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one analysis run.

    Built once by the aggregator; ``passed`` and ``exit_code`` are fixed at
    construction time.
    """

    reports: Tuple[CommitReport, ...]
    total_commits: int
    config: ValidationConfig
    passed: bool
    path: Optional[Path] = None
    branch: Optional[str] = None
    skipped: bool = False

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.passed else EXIT_ISSUES_FOUND

    @property
    def analyzed_count(self) -> int:
        return len(self.reports)

    @property
    def flagged(self) -> List[CommitReport]:
        return [report for report in self.reports if report.has_issues]

    def iter_issues(self) -> Iterator[Issue]:
        for report in self.reports:
            yield from report.issues

    def count_commits_with(self, severity: Severity) -> int:
        return sum(1 for report in self.reports if report.has_severity(severity))

    @property
    def error_count(self) -> int:
        return self.count_commits_with(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count_commits_with(Severity.WARNING)

    @property
    def info_count(self) -> int:
        return self.count_commits_with(Severity.INFO)
