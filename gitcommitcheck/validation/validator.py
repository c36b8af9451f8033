"""Commit message validation."""
from typing import List, Tuple

from ..models import Commit, Issue, Severity, ValidationConfig
from .rules import RULES


class CommitValidator:
    """Runs the enabled rules, in declaration order, against single commits."""

    def __init__(self, config: ValidationConfig):
        self.config = config
        self.rules = [
            (validation, rule)
            for validation, rule in RULES
            if config.is_enabled(validation)
        ]

    def evaluate(self, commit: Commit) -> List[Issue]:
        """Return every finding, including those at ``Severity.IGNORE``."""
        findings = []
        for _, rule in self.rules:
            issue = rule(commit, self.config)
            if issue is not None:
                findings.append(issue)
        return findings

    def validate(self, commit: Commit) -> Tuple[Issue, ...]:
        """Return the findings that should be reported for ``commit``."""
        return tuple(
            issue for issue in self.evaluate(commit)
            if issue.severity != Severity.IGNORE
        )
