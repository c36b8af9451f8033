"""Small text helpers shared by rule messages and the report."""
from typing import Optional


def pluralize(count: int, singular: str, plural: Optional[str] = None) -> str:
    """Return ``"<count> <word>"`` with the word inflected for ``count``.

    >>> pluralize(1, "character")
    '1 character'
    >>> pluralize(3, "commit")
    '3 commits'
    """
    if count == 1:
        word = singular
    else:
        word = plural or f"{singular}s"
    return f"{count} {word}"
