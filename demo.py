"""
Walk-through of the documented example patients.

Evaluates the three examples published with the model, then a small batch
that includes an invalid record, and prints the results as tables.

Run with: uv run python demo.py
"""

from rich.console import Console
from rich.panel import Panel

from cfmortality import ClinicalRecord, predict, predict_many
from cfmortality.config import get_config, print_config_summary
from cfmortality.logging_config import configure_logging
from cfmortality.services import MortalityPredictor, build_prediction_table

console = Console()

EXAMPLE_PATIENTS: dict[str, dict[str, float]] = {
    "16y female, FEV1 decline": {
        "age": 16, "male": 0, "fvc": 66.7, "fev1": 47.4, "fev1LastYear": 80.5,
        "bcepacia": 0, "underweight": 0, "nHosp": 0, "pancreaticInsufficient": 1,
        "CFRelatedDiabetes": 0, "ageAtDiagnosis": 0.9,
    },
    "40y male, severe disease": {
        "age": 40.4, "male": 1, "fvc": 25.7, "fev1": 19.2, "fev1LastYear": 20,
        "bcepacia": 1, "underweight": 1, "nHosp": 6, "pancreaticInsufficient": 0,
        "CFRelatedDiabetes": 0, "ageAtDiagnosis": 27.2,
    },
    "44y male, underweight": {
        "age": 44, "male": 1, "fvc": 72.95, "fev1": 55.5, "fev1LastYear": 52.5,
        "bcepacia": 0, "underweight": 1, "nHosp": 0, "pancreaticInsufficient": 0,
        "CFRelatedDiabetes": 0, "ageAtDiagnosis": 29,
    },
}


def show_examples() -> None:
    console.print(Panel("Documented example patients", style="blue"))
    rows = [(label, predict(ClinicalRecord.model_validate(values)))
            for label, values in EXAMPLE_PATIENTS.items()]
    console.print(build_prediction_table(rows))


def show_batch() -> None:
    console.print(Panel("Batch with an invalid record", style="blue"))
    records = list(EXAMPLE_PATIENTS.values())
    records.append({**records[0], "fev1": 0})
    labels = [*EXAMPLE_PATIENTS, "FEV1 recorded as 0"]

    results = predict_many(records, MortalityPredictor(get_config().predictor))

    console.print(build_prediction_table(
        (label, result.unwrap()) for label, result in zip(labels, results) if result.is_ok()
    ))
    for label, result in zip(labels, results):
        if result.is_err():
            console.print(f"[red]{label}: {result.unwrap_err()}[/red]")


if __name__ == "__main__":
    configure_logging(get_config().logging)
    print_config_summary()
    show_examples()
    show_batch()
