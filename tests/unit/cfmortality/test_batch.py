"""Tests for batch evaluation, the Result container and report rendering."""

from collections.abc import Iterator
from typing import Any

import pytest
from rich.console import Console
from structlog.testing import capture_logs

from cfmortality.config import PredictorConfig, get_config
from cfmortality.domain.errors import InvalidInputError
from cfmortality.domain.models import FullPrediction, PartialPrediction
from cfmortality.result import Result
from cfmortality.services.batch import predict_many
from cfmortality.services.predictor import MortalityPredictor
from cfmortality.services.report import build_prediction_table

HEALTHY: dict[str, Any] = {
    "age": 16, "male": 0, "fvc": 66.7, "fev1": 47.4, "fev1LastYear": 80.5,
    "bcepacia": 0, "underweight": 0, "nHosp": 0, "pancreaticInsufficient": 1,
    "CFRelatedDiabetes": 0, "ageAtDiagnosis": 0.9,
}
SEVERE: dict[str, Any] = {
    "age": 40.4, "male": 1, "fvc": 25.7, "fev1": 19.2, "fev1LastYear": 20,
    "bcepacia": 1, "underweight": 1, "nHosp": 6, "pancreaticInsufficient": 0,
    "CFRelatedDiabetes": 0, "ageAtDiagnosis": 27.2,
}


class TestResult:
    """Test the Result type for explicit error handling."""

    def test_result_ok_creates_successful_result(self) -> None:
        result: Result[str, Exception] = Result.ok("success")
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "success"

    def test_result_error_creates_failed_result(self) -> None:
        error = InvalidInputError(["fev1_percent_predicted must be greater than 0, got 0"])
        result: Result[str, InvalidInputError] = Result.err(error)
        assert not result.is_ok()
        assert result.is_err()
        assert result.unwrap_or("default") == "default"
        assert result.unwrap_err() is error

    def test_unwrap_raises_on_error_result(self) -> None:
        result: Result[str, ValueError] = Result.err(ValueError("test error"))

        with pytest.raises(ValueError, match="test error"):
            result.unwrap()

    def test_unwrap_err_on_ok_value_raises(self) -> None:
        with pytest.raises(ValueError, match="unwrap_err"):
            Result.ok(1).unwrap_err()

    def test_result_needs_exactly_one_of_value_or_error(self) -> None:
        with pytest.raises(ValueError):
            Result()
        with pytest.raises(ValueError):
            Result(value=1, error=ValueError("both"))


class TestPredictMany:
    @pytest.fixture(autouse=True)
    def default_config(self, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
        monkeypatch.delenv("STRICT_RANGE_VALIDATION", raising=False)
        get_config.cache_clear()
        yield
        get_config.cache_clear()

    def test_malformed_record_does_not_stop_the_batch(self) -> None:
        results = predict_many([HEALTHY, {**HEALTHY, "fvc": "abc"}, SEVERE])

        assert [r.is_ok() for r in results] == [True, False, True]
        error = results[1].unwrap_err()
        assert isinstance(error, InvalidInputError)
        assert "fvc" in error.violations[0]

    def test_missing_field_is_reported_in_its_slot(self) -> None:
        incomplete = {k: v for k, v in HEALTHY.items() if k != "nHosp"}

        results = predict_many([incomplete, HEALTHY])

        assert results[0].is_err()
        violations = results[0].unwrap_err().violations
        assert any("hospitalizations_last_year" in v or "nHosp" in v for v in violations)
        assert results[1].is_ok()

    def test_default_predictor_follows_app_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        out_of_range = {**HEALTHY, "fvc": 160}
        assert predict_many([out_of_range])[0].is_err()

        monkeypatch.setenv("STRICT_RANGE_VALIDATION", "false")
        get_config.cache_clear()

        assert predict_many([out_of_range])[0].is_ok()

    def test_results_follow_input_order(self) -> None:
        results = predict_many([HEALTHY, SEVERE])

        assert [type(r.unwrap()) for r in results] == [FullPrediction, PartialPrediction]
        assert results[1].unwrap().first_year_survival_percent == 8.45

    def test_invalid_record_does_not_stop_the_batch(self) -> None:
        results = predict_many([HEALTHY, {**HEALTHY, "fev1": 0}, SEVERE])

        assert [r.is_ok() for r in results] == [True, False, True]
        assert isinstance(results[1].unwrap_err(), InvalidInputError)

    def test_uses_supplied_predictor(self) -> None:
        lenient = MortalityPredictor(PredictorConfig(strict_ranges=False))
        out_of_range = {**HEALTHY, "fvc": 170}

        assert predict_many([out_of_range])[0].is_err()
        assert predict_many([out_of_range], lenient)[0].is_ok()

    def test_empty_batch(self) -> None:
        assert predict_many([]) == []

    def test_summary_is_logged(self) -> None:
        with capture_logs() as logs:
            predict_many([HEALTHY, {**HEALTHY, "fvc": -1}])

        summary = next(log for log in logs if log["event"] == "batch_prediction_completed")
        assert summary["total"] == 2
        assert summary["succeeded"] == 1
        assert summary["failed"] == 1


class TestPredictionTable:
    def _render(self, rows: list[tuple[str, Any]]) -> str:
        console = Console(record=True, width=160)
        console.print(build_prediction_table(rows))
        return console.export_text()

    def test_full_and_partial_rows(self) -> None:
        predictor = MortalityPredictor()
        text = self._render(
            [("healthy", predictor.predict(HEALTHY)), ("severe", predictor.predict(SEVERE))]
        )

        assert "99.01%" in text
        assert "97.49%" in text
        assert "96.52%" in text
        assert "8.45%" in text
        assert "91.55%" in text

    def test_gated_columns_show_a_dash(self) -> None:
        table = build_prediction_table([("severe", PartialPrediction(first_year_survival_percent=8.45))])

        assert table.row_count == 1
        assert list(table.columns[2].cells) == ["-"]
        assert list(table.columns[3].cells) == ["-"]
