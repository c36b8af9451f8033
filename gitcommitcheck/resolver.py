"""Resolution of the effective validation configuration.

The layers are applied in a fixed order, each one overriding the previous
one field by field:

1. built-in defaults
2. settings from the configuration file (and environment)
3. explicit overrides: threshold, then the error, warn and ignore lists,
   then the disable list
4. the strict flag, which is only stored here and is interpreted by the
   aggregator
"""
from typing import Dict, FrozenSet, Iterable, List, Optional, Set, Union

from pydantic import ValidationError

from .config import Settings
from .errors import ConfigError
from .models import (
    DEFAULT_SEVERITIES,
    DEFAULT_THRESHOLD,
    Severity,
    Validation,
    ValidationConfig,
)

NameList = Union[str, Iterable[str], None]


def parse_validation_names(names: NameList) -> List[Validation]:
    """Parse validation names given as an iterable or a comma-separated string.

    Items may themselves be comma-separated, so ``["short,wip", "ref"]`` is
    accepted. Empty items are skipped.

    Raises:
        ConfigError: If a name does not resolve to a validation
    """
    if names is None:
        return []
    if isinstance(names, str):
        names = [names]

    validations = []
    for item in names:
        for name in str(item).split(','):
            if name.strip():
                validations.append(Validation.from_alias(name))
    return validations


def _apply_severity(
    severities: Dict[Validation, Severity], names: NameList, severity: Severity
) -> None:
    for validation in parse_validation_names(names):
        severities[validation] = severity


def resolve_config(
    settings: Optional[Settings] = None,
    *,
    threshold: Optional[int] = None,
    error: NameList = None,
    warn: NameList = None,
    ignore: NameList = None,
    disable: NameList = None,
    strict: bool = False,
) -> ValidationConfig:
    """Build the effective ``ValidationConfig``.

    Args:
        settings: Settings loaded from a configuration file, if any
        threshold: Explicit threshold, overrides the file
        error: Validations to report as errors
        warn: Validations to report as warnings
        ignore: Validations to run but never report
        disable: Validations to skip entirely
        strict: Explicit strict flag; strict mode is on when either this or
            the file enables it

    Raises:
        ConfigError: On unknown validation names, invalid severities or a
            negative threshold
    """
    severities: Dict[Validation, Severity] = dict(DEFAULT_SEVERITIES)
    disabled: Set[Validation] = set()
    effective_threshold = DEFAULT_THRESHOLD
    effective_strict = False

    if settings is not None:
        if settings.threshold is not None:
            effective_threshold = settings.threshold
        if settings.strict is not None:
            effective_strict = settings.strict
        disabled.update(parse_validation_names(settings.disable))
        for name, value in settings.severity.items():
            severities[Validation.from_alias(name)] = Severity.parse(value)

    if threshold is not None:
        effective_threshold = threshold

    _apply_severity(severities, error, Severity.ERROR)
    _apply_severity(severities, warn, Severity.WARNING)
    _apply_severity(severities, ignore, Severity.IGNORE)
    disabled.update(parse_validation_names(disable))

    return build_config(
        threshold=effective_threshold,
        severities=severities,
        disabled=frozenset(disabled),
        strict=strict or effective_strict,
    )


def build_config(
    threshold: int,
    severities: Dict[Validation, Severity],
    disabled: FrozenSet[Validation],
    strict: bool,
) -> ValidationConfig:
    try:
        return ValidationConfig(
            threshold=threshold,
            severities=severities,
            disabled=disabled,
            strict=strict,
        )
    except ValidationError as e:
        raise ConfigError(
            f"invalid threshold: {threshold!r} (must be a non-negative integer)"
        ) from e
