"""
Domain models for CF mortality prediction.

Records are immutable pydantic models. Field names are Pythonic, but every
field also accepts the argument name used in the published R function
(``fev1LastYear``, ``nHosp``...) so existing call sites and data exports can be
loaded without renaming.
"""

from typing import Annotated, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator

from cfmortality.domain.coefficients import SURVIVAL_CONFIDENCE_THRESHOLD


def _alias(name: str, published: str) -> AliasChoices:
    return AliasChoices(name, published)


class ClinicalRecord(BaseModel):
    """Clinical covariates for a single patient at a single annual review."""

    model_config = ConfigDict(frozen=True)

    age: float = Field(description="Patient age in years")
    is_male: bool = Field(validation_alias=_alias("is_male", "male"))
    fvc_percent_predicted: float = Field(
        validation_alias=_alias("fvc_percent_predicted", "fvc"),
        description="FVC percent predicted in the current year (0-150)",
    )
    fev1_percent_predicted: float = Field(
        validation_alias=_alias("fev1_percent_predicted", "fev1"),
        description="FEV1 percent predicted in the current year (0-150)",
    )
    fev1_percent_predicted_last_year: float = Field(
        validation_alias=_alias("fev1_percent_predicted_last_year", "fev1LastYear"),
        description="FEV1 percent predicted in the preceding year (0-150)",
    )
    has_b_cepacia: bool = Field(
        validation_alias=_alias("has_b_cepacia", "bcepacia"),
        description="B. cepacia complex infection",
    )
    is_underweight: bool = Field(
        validation_alias=_alias("is_underweight", "underweight"),
        description="BMI < 18.5 if age >= 19, BMI percentile <= 12% if age < 19",
    )
    hospitalizations_last_year: int = Field(
        validation_alias=_alias("hospitalizations_last_year", "nHosp"),
        description="Number of hospitalizations in the preceding year",
    )
    is_pancreatic_insufficient: bool = Field(
        validation_alias=_alias("is_pancreatic_insufficient", "pancreaticInsufficient"),
    )
    has_cf_related_diabetes: bool = Field(
        validation_alias=_alias("has_cf_related_diabetes", "CFRelatedDiabetes"),
    )
    age_at_diagnosis: float = Field(
        validation_alias=_alias("age_at_diagnosis", "ageAtDiagnosis"),
        description="Age at CF diagnosis in years",
    )

    @property
    def has_fev1_decline(self) -> bool:
        """True when FEV1 fell since the preceding year."""
        return self.fev1_percent_predicted_last_year > self.fev1_percent_predicted


Percent = Annotated[float, Field(ge=0.0, le=100.0)]


def _mortality(survival_percent: float) -> float:
    return round(100.0 - survival_percent, 2)


class PartialPrediction(BaseModel):
    """
    Prediction for a patient whose 1-year survival is below the threshold.

    The 2-year sub-model is not considered reliable for these patients, so only
    the 1-year estimate is reported.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["partial"] = "partial"
    first_year_survival_percent: Percent

    @model_validator(mode="after")
    def below_threshold(self) -> "PartialPrediction":
        if self.first_year_survival_percent >= SURVIVAL_CONFIDENCE_THRESHOLD:
            raise ValueError(
                f"1-year survival {self.first_year_survival_percent} requires a full prediction"
            )
        return self

    @property
    def first_year_mortality_percent(self) -> float:
        return _mortality(self.first_year_survival_percent)

    def to_legacy_dict(self) -> dict[str, float]:
        """Result in the shape returned by the R package."""
        return {"first_year_survival": self.first_year_survival_percent}


class FullPrediction(BaseModel):
    """Prediction with 1-year, 2-year and overall 2-year survival."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["full"] = "full"
    first_year_survival_percent: Percent
    second_year_survival_percent: Percent
    overall_two_year_survival_percent: Percent

    @model_validator(mode="after")
    def at_or_above_threshold(self) -> "FullPrediction":
        if self.first_year_survival_percent < SURVIVAL_CONFIDENCE_THRESHOLD:
            raise ValueError(
                f"1-year survival {self.first_year_survival_percent} is below "
                f"{SURVIVAL_CONFIDENCE_THRESHOLD}; 2-year estimates are not reported"
            )
        return self

    @property
    def first_year_mortality_percent(self) -> float:
        return _mortality(self.first_year_survival_percent)

    @property
    def overall_two_year_mortality_percent(self) -> float:
        return _mortality(self.overall_two_year_survival_percent)

    def to_legacy_dict(self) -> dict[str, float]:
        """Result in the shape returned by the R package."""
        return {
            "first_year_survival": self.first_year_survival_percent,
            "second_year_survival": self.second_year_survival_percent,
            "overall_survival": self.overall_two_year_survival_percent,
        }


PredictionResult = Annotated[FullPrediction | PartialPrediction, Field(discriminator="kind")]
