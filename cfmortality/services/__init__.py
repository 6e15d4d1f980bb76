"""
Prediction services.

Single-record evaluation, batch evaluation and report rendering.
"""

from .batch import predict_many
from .predictor import (
    MortalityPredictor,
    linear_predictors,
    predict,
    round_percent,
    survival_probability,
)
from .report import build_prediction_table

__all__ = [
    "MortalityPredictor",
    "predict",
    "predict_many",
    "linear_predictors",
    "survival_probability",
    "round_percent",
    "build_prediction_table",
]
