"""
1- and 2-year CF mortality prediction.

Both horizons use the same survival form and differ only in coefficients:

    lnS = (1 / -B) * (1 / Y)^B * (exp(B) - 1)

where Y = exp(lnY) and B = exp(lnB) are log-linear in the clinical covariates
(see ``cfmortality.domain.coefficients``). Survival percentages are rounded
half-up to 2 decimals. The 2-year and overall estimates are only reported when
1-year survival is at least 80.00%.
"""

import math
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import structlog

from cfmortality.config import PredictorConfig, get_config
from cfmortality.domain.coefficients import (
    ONE_YEAR,
    SURVIVAL_CONFIDENCE_THRESHOLD,
    TWO_YEAR,
    SubModelCoefficients,
)
from cfmortality.domain.errors import InvalidInputError
from cfmortality.domain.models import (
    ClinicalRecord,
    FullPrediction,
    PartialPrediction,
    PredictionResult,
)
from cfmortality.domain.validation import find_violations

logger = structlog.get_logger(__name__)

_HUNDREDTH = Decimal("0.01")


def round_percent(value: float) -> float:
    """Round half-up to 2 decimals, working on the shortest decimal repr of ``value``."""
    return float(Decimal(repr(value)).quantize(_HUNDREDTH, rounding=ROUND_HALF_UP))


def _log_percent(name: str, value: float) -> float:
    if value <= 0:
        raise InvalidInputError([f"{name} must be greater than 0, got {value}"])
    return math.log(value / 100.0)


def linear_predictors(
    record: ClinicalRecord, coefficients: SubModelCoefficients
) -> tuple[float, float]:
    """Return ``(lnY, lnB)`` for one horizon."""
    c = coefficients
    ln_fvc = _log_percent("fvc_percent_predicted", record.fvc_percent_predicted)
    ln_fev1 = _log_percent("fev1_percent_predicted", record.fev1_percent_predicted)
    ln_fev1_last_year = _log_percent(
        "fev1_percent_predicted_last_year", record.fev1_percent_predicted_last_year
    )
    # Only a drop in FEV1 counts; improvement contributes nothing.
    fev1_decline = ln_fev1_last_year - ln_fev1 if record.has_fev1_decline else 0.0

    ln_y = (
        c.ln_y_intercept
        + c.ln_y_male * record.is_male
        + c.ln_y_fvc * ln_fvc
        + c.ln_y_fev1 * ln_fev1
        + c.ln_y_underweight * record.is_underweight
        + c.ln_y_b_cepacia * record.has_b_cepacia
        + c.ln_y_age * record.age
        + c.ln_y_hospitalizations * record.hospitalizations_last_year
    )
    ln_b = (
        c.ln_b_intercept
        + c.ln_b_hospitalizations * record.hospitalizations_last_year
        + c.ln_b_fev1_decline * fev1_decline
        + c.ln_b_fev1 * ln_fev1
        + c.ln_b_pancreatic_insufficiency * record.is_pancreatic_insufficient
        + c.ln_b_cf_related_diabetes * record.has_cf_related_diabetes
        + c.ln_b_age_at_diagnosis * record.age_at_diagnosis
    )
    return ln_y, ln_b


def _log_growth(b: float) -> float:
    """log((exp(b) - 1) / b), finite for every b >= 0."""
    if b == 0.0:
        return 0.0
    if b > 1.0:
        return b + math.log1p(-math.exp(-b)) - math.log(b)
    return math.log(math.expm1(b) / b)


def survival_probability(record: ClinicalRecord, coefficients: SubModelCoefficients) -> float:
    """
    Unrounded probability of surviving the horizon, in [0, 1].

    Evaluated in log space as ``S = exp(-exp(-B * lnY) * (exp(B) - 1) / B)`` so
    that extreme but valid covariates saturate towards 0 or 1 instead of
    dividing by an underflowed Y.
    """
    try:
        ln_y, ln_b = linear_predictors(record, coefficients)
        b = math.exp(ln_b)
    except OverflowError as e:
        raise InvalidInputError(
            [f"{coefficients.horizon_years}-year model is numerically undefined: {e}"]
        ) from e

    log_cumulative_hazard = -b * ln_y + _log_growth(b)
    try:
        probability = math.exp(-math.exp(log_cumulative_hazard))
    except OverflowError:
        return 0.0
    if not math.isfinite(probability):
        raise InvalidInputError(
            [f"{coefficients.horizon_years}-year model is numerically undefined"]
        )
    return probability


class MortalityPredictor:
    """
    Evaluates the 1- and 2-year models for one record at a time.

    Holds only immutable configuration, so one instance can be shared freely.
    """

    def __init__(self, config: PredictorConfig | None = None) -> None:
        self.config = config or PredictorConfig()
        self.logger = logger.bind(component="mortality_predictor")

    def predict(self, record: ClinicalRecord | Mapping[str, Any]) -> PredictionResult:
        """
        Predict survival for ``record``.

        Mappings are validated into a ClinicalRecord first and may use either the
        Python field names or the published argument names.

        Raises:
            InvalidInputError: the record cannot be evaluated.
            pydantic.ValidationError: a mapping has missing or wrongly typed fields.
        """
        if not isinstance(record, ClinicalRecord):
            record = ClinicalRecord.model_validate(record)

        violations = find_violations(record, strict=self.config.strict_ranges)
        if violations:
            self.logger.warning("invalid_clinical_record", violations=violations)
            raise InvalidInputError(violations)

        first_year = round_percent(survival_probability(record, ONE_YEAR) * 100)

        result: PredictionResult
        if first_year >= SURVIVAL_CONFIDENCE_THRESHOLD:
            second_year = round_percent(survival_probability(record, TWO_YEAR) * 100)
            result = FullPrediction(
                first_year_survival_percent=first_year,
                second_year_survival_percent=second_year,
                overall_two_year_survival_percent=round_percent(first_year * second_year / 100),
            )
        else:
            result = PartialPrediction(first_year_survival_percent=first_year)

        self.logger.debug("prediction_computed", **result.model_dump())
        return result


def predict(record: ClinicalRecord | Mapping[str, Any]) -> PredictionResult:
    """Predict with the predictor settings from the application config."""
    return MortalityPredictor(get_config().predictor).predict(record)
