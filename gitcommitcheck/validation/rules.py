"""Commit message quality rules.

Every rule is a plain function ``(Commit, ValidationConfig) -> Optional[Issue]``
with no side effects. ``RULES`` lists them in evaluation order, one per
``Validation`` member.
"""
import re
from typing import Callable, Optional, Tuple

from ..models import Commit, Issue, Validation, ValidationConfig
from ..text import pluralize

Rule = Callable[[Commit, ValidationConfig], Optional[Issue]]

CONVENTIONAL_TYPES = (
    "feat", "fix", "docs", "style", "refactor", "perf",
    "test", "build", "ci", "chore", "revert",
)

_TYPES = "|".join(CONVENTIONAL_TYPES)

# type(scope)!: description
CONVENTIONAL_COMMIT_REGEX = re.compile(rf"^(?:{_TYPES})(?:\([^()]+\))?!?: .+")

# Optional conventional prefix, case-insensitive so "FIX: Fixed ..." still finds the verb
_CONVENTIONAL_PREFIX = rf"(?:(?:{_TYPES})(?:\([^)]*\))?!?:\s*)?"

REFERENCE_REGEX = re.compile(r"#\d+|\b[Gg][Hh]-\d+\b|\b[A-Z][A-Z0-9]+-\d+\b")

WIP_COMMIT_REGEX = re.compile(
    r"^wip\b|^\[wip\]|^(?:fixup|squash|amend)!|\bwork.?in.?progress\b"
    r"|\bdo\s*not\s*merge\b|\bdon'?t\s*merge\b|\bwip\s*$",
    re.IGNORECASE,
)

# Closed list: the past-tense and -ing forms of the verbs that open most commits.
NON_IMPERATIVE_VERBS = (
    "added", "removed", "fixed", "updated", "changed", "implemented",
    "created", "deleted", "modified", "refactored", "improved", "resolved",
    "merged", "moved", "renamed", "replaced", "cleaned", "enabled",
    "disabled", "converted", "introduced", "integrated", "adjusted",
    "corrected", "enhanced", "extended", "optimized", "simplified",
    "upgraded", "migrated", "bumped", "tweaked",
    "adding", "removing", "fixing", "updating", "changing", "implementing",
    "creating", "deleting", "modifying", "refactoring", "improving",
    "resolving", "merging", "moving", "renaming", "replacing", "cleaning",
    "enabling", "disabling", "converting", "introducing", "integrating",
    "adjusting", "correcting", "enhancing", "extending", "optimizing",
    "simplifying", "upgrading", "migrating", "bumping", "tweaking",
)

NON_IMPERATIVE_REGEX = re.compile(
    rf"^{_CONVENTIONAL_PREFIX}({'|'.join(NON_IMPERATIVE_VERBS)})\b",
    re.IGNORECASE,
)

VAGUE_PHRASES = frozenset({
    "fix bug",
    "fix bugs",
    "update code",
    "misc changes",
    "misc fixes",
    "various fixes",
    "various changes",
    "minor changes",
    "minor fixes",
    "small fixes",
    "small changes",
    "some changes",
    "some fixes",
    "more changes",
    "more fixes",
    "stuff",
})

VAGUE_PHRASE_REGEX = re.compile(
    r"\b(?:"
    + "|".join(re.escape(p) for p in sorted(VAGUE_PHRASES, key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)

# verb + placeholder object, e.g. "fixed it", "change things", "tweak code"
VAGUE_LANGUAGE_REGEX = re.compile(
    r"\b(?:fix(?:ed|es|ing)?|update[ds]?|change[ds]?|modif(?:y|ied|ies)"
    r"|tweak(?:ed|s)?|adjust(?:ed|s)?)\s+"
    r"(?:it|this|that|things?|stuff|code|bugs?|issues?|errors?|problems?)\b",
    re.IGNORECASE,
)


def has_reference(message: str) -> bool:
    """Check for an issue reference such as ``#123``, ``GH-45`` or ``PROJ-456``."""
    return REFERENCE_REGEX.search(message) is not None


def has_conventional_format(subject: str) -> bool:
    return CONVENTIONAL_COMMIT_REGEX.match(subject) is not None


def find_vague_language(subject: str) -> Optional[str]:
    """Return the first vague phrase found in the subject, if any."""
    match = VAGUE_PHRASE_REGEX.search(subject) or VAGUE_LANGUAGE_REGEX.search(subject)
    return match.group(0).lower() if match else None


def is_wip_commit(subject: str) -> bool:
    return WIP_COMMIT_REGEX.search(subject.strip()) is not None


def find_non_imperative_verb(subject: str) -> Optional[str]:
    """Return the opening verb when it is a past-tense or -ing form."""
    match = NON_IMPERATIVE_REGEX.match(subject.strip())
    return match.group(1) if match else None


def _issue(validation: Validation, config: ValidationConfig, message: str) -> Issue:
    return Issue(validation=validation, severity=config.severity_for(validation), message=message)


def check_short_commit(commit: Commit, config: ValidationConfig) -> Optional[Issue]:
    length = len(commit.subject)
    if length >= config.threshold:
        return None
    missing = config.threshold - length
    return _issue(
        Validation.SHORT_COMMIT,
        config,
        f"Subject is {pluralize(missing, 'character')} short "
        f"({length}/{config.threshold})",
    )


def check_wip_commit(commit: Commit, config: ValidationConfig) -> Optional[Issue]:
    if not is_wip_commit(commit.subject):
        return None
    return _issue(
        Validation.WIP_COMMIT,
        config,
        "Work-in-progress commit should be squashed before it is pushed",
    )


def check_non_imperative(commit: Commit, config: ValidationConfig) -> Optional[Issue]:
    verb = find_non_imperative_verb(commit.subject)
    if verb is None:
        return None
    return _issue(
        Validation.NON_IMPERATIVE,
        config,
        f"Subject starts with '{verb}'; use the imperative mood (e.g. 'Add' not 'Added')",
    )


def check_vague_language(commit: Commit, config: ValidationConfig) -> Optional[Issue]:
    phrase = find_vague_language(commit.subject)
    if phrase is None:
        return None
    return _issue(
        Validation.VAGUE_LANGUAGE,
        config,
        f"Subject uses vague language: '{phrase}'",
    )


def check_missing_reference(commit: Commit, config: ValidationConfig) -> Optional[Issue]:
    if has_reference(commit.full_message):
        return None
    return _issue(
        Validation.MISSING_REFERENCE,
        config,
        "Message has no issue reference (e.g. #123 or PROJ-456)",
    )


def check_invalid_format(commit: Commit, config: ValidationConfig) -> Optional[Issue]:
    if has_conventional_format(commit.subject):
        return None
    return _issue(
        Validation.INVALID_FORMAT,
        config,
        "Subject does not follow 'type(scope): description' "
        f"(types: {', '.join(CONVENTIONAL_TYPES)})",
    )


RULES: Tuple[Tuple[Validation, Rule], ...] = (
    (Validation.SHORT_COMMIT, check_short_commit),
    (Validation.WIP_COMMIT, check_wip_commit),
    (Validation.NON_IMPERATIVE, check_non_imperative),
    (Validation.VAGUE_LANGUAGE, check_vague_language),
    (Validation.MISSING_REFERENCE, check_missing_reference),
    (Validation.INVALID_FORMAT, check_invalid_format),
)
