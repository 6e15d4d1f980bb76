"""Tabular rendering of predictions for terminals and notebooks."""

from collections.abc import Iterable

from rich.table import Table

from cfmortality.domain.models import FullPrediction, PredictionResult

MISSING = "-"


def _pct(value: float) -> str:
    return f"{value:.2f}%"


def build_prediction_table(
    rows: Iterable[tuple[str, PredictionResult]], title: str = "CF mortality prediction"
) -> Table:
    """One row per patient; 2-year columns show a dash when gated out."""
    table = Table(title=title)
    table.add_column("Patient", style="cyan")
    table.add_column("1-year survival", justify="right")
    table.add_column("2-year survival", justify="right")
    table.add_column("Overall 2-year survival", justify="right")
    table.add_column("1-year mortality", justify="right", style="red")

    for label, result in rows:
        if isinstance(result, FullPrediction):
            second = _pct(result.second_year_survival_percent)
            overall = _pct(result.overall_two_year_survival_percent)
        else:
            second = overall = MISSING
        table.add_row(
            label,
            _pct(result.first_year_survival_percent),
            second,
            overall,
            _pct(result.first_year_mortality_percent),
        )

    return table
