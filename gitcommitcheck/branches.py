"""Branch name pattern matching.

Patterns are globs where ``*`` matches within one path segment, ``**``
matches across segments and ``?`` matches a single character other than
``/``.
"""
import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern


@lru_cache(maxsize=128)
def _compile(pattern: str) -> Pattern:
    parts = []
    i = 0
    while i < len(pattern):
        if pattern.startswith('**', i):
            parts.append('.*')
            i += 2
        elif pattern[i] == '*':
            parts.append('[^/]*')
            i += 1
        elif pattern[i] == '?':
            parts.append('[^/]')
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return re.compile(''.join(parts) + r'\Z')


def glob_match(pattern: str, branch: str) -> bool:
    return _compile(pattern).match(branch) is not None


def matches_any_pattern(branch: Optional[str], patterns: Iterable[str]) -> bool:
    """Check ``branch`` against ``patterns``; an empty pattern list matches everything.

    A detached HEAD (``branch is None``) never matches a non-empty list.
    """
    patterns = list(patterns)
    if not patterns:
        return True
    if branch is None:
        return False
    return any(glob_match(pattern, branch) for pattern in patterns)
