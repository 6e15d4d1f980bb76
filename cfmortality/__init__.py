"""1- and 2-year mortality prediction for people with cystic fibrosis.

Example:
    >>> from cfmortality import predict
    >>> predict({"age": 44, "male": 1, "fvc": 72.95, "fev1": 55.5, "fev1LastYear": 52.5,
    ...          "bcepacia": 0, "underweight": 1, "nHosp": 0, "pancreaticInsufficient": 0,
    ...          "CFRelatedDiabetes": 0, "ageAtDiagnosis": 29}).overall_two_year_survival_percent
    87.26
"""

from cfmortality.domain.errors import InvalidInputError
from cfmortality.domain.models import (
    ClinicalRecord,
    FullPrediction,
    PartialPrediction,
    PredictionResult,
)
from cfmortality.result import Result
from cfmortality.services import MortalityPredictor, predict, predict_many

__all__ = [
    "ClinicalRecord",
    "FullPrediction",
    "PartialPrediction",
    "PredictionResult",
    "InvalidInputError",
    "MortalityPredictor",
    "Result",
    "predict",
    "predict_many",
]

__version__ = "0.1.0"
