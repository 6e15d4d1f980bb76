"""
Per-patient outcome of an evaluation.

A batch of clinical records routinely contains a few that cannot be scored
(a missing FEV1, a mistyped field). Those are expected outcomes, so batch
evaluation returns one Result per record instead of raising on the first one.
"""

from typing import Generic, TypeVar

ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """Either a prediction (``ok``) or the reason the record was rejected (``err``)."""

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    def __repr__(self) -> str:
        if self._error is not None:
            return f"Result.err({self._error!r})"
        return f"Result.ok({self._value!r})"

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        """The prediction; re-raises the rejection error for a failed record."""
        if self._error is not None:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        """The prediction, or ``default`` for a rejected record."""
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        """The rejection error; a successful record has none."""
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error
