"""
Evaluation of several patients in one call.

Each record is evaluated independently; an invalid record yields an error
Result in its slot instead of aborting the whole batch.
"""

import time
from collections.abc import Iterable, Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from cfmortality.config import get_config
from cfmortality.domain.errors import InvalidInputError
from cfmortality.domain.models import ClinicalRecord, PredictionResult
from cfmortality.result import Result
from cfmortality.services.predictor import MortalityPredictor

logger = structlog.get_logger(__name__)


def _as_invalid_input(error: ValidationError) -> InvalidInputError:
    """Malformed mapping reported in the same shape as a domain violation."""
    invalid = InvalidInputError(
        [
            f"{'.'.join(str(part) for part in detail['loc']) or 'record'}: {detail['msg']}"
            for detail in error.errors()
        ]
    )
    invalid.__cause__ = error
    return invalid


def predict_many(
    records: Iterable[ClinicalRecord | Mapping[str, Any]],
    predictor: MortalityPredictor | None = None,
) -> list[Result[PredictionResult, InvalidInputError]]:
    """
    Predict every record, preserving input order.

    Without an explicit predictor, the predictor settings from the application
    config are used, as for ``predict``. Mappings with missing or wrongly typed
    fields are reported as InvalidInputError in their slot.
    """
    predictor = predictor or MortalityPredictor(get_config().predictor)
    log = logger.bind(component="batch_predictor")

    start_time = time.perf_counter()
    results: list[Result[PredictionResult, InvalidInputError]] = []
    for index, record in enumerate(records):
        try:
            results.append(Result.ok(predictor.predict(record)))
        except ValidationError as e:
            invalid = _as_invalid_input(e)
            log.info("record_rejected", index=index, violations=invalid.violations)
            results.append(Result.err(invalid))
        except InvalidInputError as e:
            log.info("record_rejected", index=index, violations=e.violations)
            results.append(Result.err(e))

    failed = sum(1 for r in results if r.is_err())
    log.info(
        "batch_prediction_completed",
        total=len(results),
        succeeded=len(results) - failed,
        failed=failed,
        duration_seconds=round(time.perf_counter() - start_time, 3),
    )
    return results
