"""Commit message validation package."""

from .rules import (
    CONVENTIONAL_TYPES,
    RULES,
    find_non_imperative_verb,
    find_vague_language,
    has_conventional_format,
    has_reference,
    is_wip_commit,
)
from .validator import CommitValidator

__all__ = [
    'CONVENTIONAL_TYPES',
    'RULES',
    'CommitValidator',
    'find_non_imperative_verb',
    'find_vague_language',
    'has_conventional_format',
    'has_reference',
    'is_wip_commit',
]
