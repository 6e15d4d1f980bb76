"""Error types raised by the mortality models."""


class InvalidInputError(ValueError):
    """
    A clinical record cannot be evaluated.

    Raised for values that make a model term undefined (log of a non-positive
    lung function measurement, non-finite numbers, float overflow) and, when
    strict range validation is enabled, for values outside the documented
    clinical ranges. All violations found in a record are reported together.
    """

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        super().__init__("; ".join(self.violations) or "invalid clinical record")
