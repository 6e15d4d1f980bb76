"""
Published coefficients of the 1- and 2-year CF mortality models.

Source: 1- and 2-year mortality prediction models in cystic fibrosis,
European Respiratory Journal, 2019.
https://erj.ersjournals.com/content/early/2019/05/08/13993003.00224-2019

These are fitted constants. Do not tune them.
"""

from dataclasses import dataclass

# 2-year estimates are only reported when 1-year survival reaches this value
SURVIVAL_CONFIDENCE_THRESHOLD = 80.00

SOURCE_URL = "https://erj.ersjournals.com/content/early/2019/05/08/13993003.00224-2019"


@dataclass(frozen=True)
class SubModelCoefficients:
    """
    Coefficients of one horizon.

    The ``ln_y_*`` terms form the log scale predictor, the ``ln_b_*`` terms the
    log shape predictor. ``ln_y_age`` and ``ln_y_hospitalizations`` are zero for
    the 2-year model, which does not use them.
    """

    horizon_years: int

    ln_y_intercept: float
    ln_y_male: float
    ln_y_fvc: float
    ln_y_fev1: float
    ln_y_underweight: float
    ln_y_b_cepacia: float
    ln_y_age: float
    ln_y_hospitalizations: float

    ln_b_intercept: float
    ln_b_hospitalizations: float
    ln_b_fev1_decline: float
    ln_b_fev1: float
    ln_b_pancreatic_insufficiency: float
    ln_b_cf_related_diabetes: float
    ln_b_age_at_diagnosis: float


ONE_YEAR = SubModelCoefficients(
    horizon_years=1,
    ln_y_intercept=5.702963,
    ln_y_male=-0.0162938,
    ln_y_fvc=0.7360137,
    ln_y_fev1=0.7899955,
    ln_y_underweight=-0.7302478,
    ln_y_b_cepacia=-0.4588687,
    ln_y_age=-0.0398486,
    ln_y_hospitalizations=-0.2818584,
    ln_b_intercept=0.1146547,
    ln_b_hospitalizations=-0.0792965,
    ln_b_fev1_decline=-0.5616525,
    ln_b_fev1=0.2554754,
    ln_b_pancreatic_insufficiency=0.6058589,
    ln_b_cf_related_diabetes=0.2340407,
    ln_b_age_at_diagnosis=0.0079757,
)

# The decline term is positive here and negative at 1 year, as published.
TWO_YEAR = SubModelCoefficients(
    horizon_years=2,
    ln_y_intercept=4.55962,
    ln_y_male=0.3189947,
    ln_y_fvc=0.5809873,
    ln_y_fev1=0.8404154,
    ln_y_underweight=-0.4187824,
    ln_y_b_cepacia=-0.9285728,
    ln_y_age=0.0,
    ln_y_hospitalizations=0.0,
    ln_b_intercept=0.1863934,
    ln_b_hospitalizations=-0.1263516,
    ln_b_fev1_decline=0.1858131,
    ln_b_fev1=0.4353779,
    ln_b_pancreatic_insufficiency=0.1927758,
    ln_b_cf_related_diabetes=-0.172767,
    ln_b_age_at_diagnosis=0.0012487,
)
