"""
Input checks for clinical records.

Two tiers:
- undefined terms (always checked): non-finite numbers and non-positive lung
  function values, whose logarithms the models take.
- documented clinical ranges (strict mode only).
"""

import math

from cfmortality.domain.errors import InvalidInputError
from cfmortality.domain.models import ClinicalRecord

MAX_PERCENT_PREDICTED = 150.0

_NUMERIC_FIELDS = (
    "age",
    "fvc_percent_predicted",
    "fev1_percent_predicted",
    "fev1_percent_predicted_last_year",
    "age_at_diagnosis",
)

_LOG_FIELDS = (
    "fvc_percent_predicted",
    "fev1_percent_predicted",
    "fev1_percent_predicted_last_year",
)


def find_violations(record: ClinicalRecord, strict: bool = True) -> list[str]:
    """Return a description of every problem found in ``record``."""
    violations: list[str] = []

    for name in _NUMERIC_FIELDS:
        value = getattr(record, name)
        if not math.isfinite(value):
            violations.append(f"{name} must be a finite number, got {value}")

    for name in _LOG_FIELDS:
        value = getattr(record, name)
        if math.isfinite(value) and value <= 0:
            violations.append(f"{name} must be greater than 0, got {value}")

    if not strict:
        return violations

    if record.age <= 0:
        violations.append(f"age must be greater than 0, got {record.age}")
    for name in _LOG_FIELDS:
        value = getattr(record, name)
        if value > MAX_PERCENT_PREDICTED:
            violations.append(f"{name} must be at most {MAX_PERCENT_PREDICTED:g}, got {value}")
    if record.hospitalizations_last_year < 0:
        violations.append(
            f"hospitalizations_last_year must be non-negative, got {record.hospitalizations_last_year}"
        )
    if record.age_at_diagnosis < 0:
        violations.append(f"age_at_diagnosis must be non-negative, got {record.age_at_diagnosis}")
    elif record.age_at_diagnosis > record.age:
        violations.append(
            f"age_at_diagnosis ({record.age_at_diagnosis}) cannot exceed age ({record.age})"
        )

    return violations


def validate_record(record: ClinicalRecord, strict: bool = True) -> None:
    """Raise InvalidInputError listing every violation in ``record``."""
    violations = find_violations(record, strict=strict)
    if violations:
        raise InvalidInputError(violations)
