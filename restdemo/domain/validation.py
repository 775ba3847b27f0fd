"""
Request validation - declarative constraints evaluated over payloads.

Constraints are plain descriptors attached to a payload type. A single
generic routine runs all of them, with no early exit, so every violation
in a request surfaces together.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, Protocol

from .failures import BodyValidationFailed, ParameterValidationFailed, ValidationError


class Constraint(Protocol):
    """Port for a single field constraint."""

    field: str

    def check(self, value: Any, today: date | None) -> str | None:
        """Return the violation message, or None when the value is acceptable."""
        ...


@dataclass(frozen=True)
class Required:
    """Value must be present and, for strings, not blank."""

    field: str
    message: str | None = None

    def check(self, value: Any, today: date | None) -> str | None:
        if value is None or (isinstance(value, str) and value.strip() == ""):
            return self.message or f"{self.field} is required"
        return None


@dataclass(frozen=True)
class FutureOrPresent:
    """Date must be today or later. Absent dates pass."""

    field: str
    message: str = "Due date must not be in the past"

    def check(self, value: Any, today: date | None) -> str | None:
        if value is not None and value < (today or date.today()):
            return self.message
        return None


@dataclass(frozen=True)
class Minimum:
    """Integer parameter must be greater than or equal to a bound."""

    field: str
    bound: int

    def check(self, value: Any, today: date | None) -> str | None:
        if value is not None and value < self.bound:
            return f"Parameter '{self.field}' must be greater than or equal to {self.bound}"
        return None


@dataclass(frozen=True)
class Maximum:
    """Integer parameter must be less than or equal to a bound."""

    field: str
    bound: int

    def check(self, value: Any, today: date | None) -> str | None:
        if value is not None and value > self.bound:
            return f"Parameter '{self.field}' must be less than or equal to {self.bound}"
        return None


def validate(
    payload: Mapping[str, Any], constraints: Sequence[Constraint], today: date | None = None
) -> list[ValidationError]:
    """
    Evaluate every constraint against the payload.

    Args:
        payload: Field values keyed by their external (JSON) names
        constraints: Descriptors in declaration order
        today: Reference date for temporal constraints (defaults to the local date)

    Returns:
        Violations in constraint order; empty when the payload is valid
    """
    errors = []
    for constraint in constraints:
        value = payload.get(constraint.field)
        message = constraint.check(value, today)
        if message is not None:
            errors.append(ValidationError(message=message, field=constraint.field, rejected_value=value))
    return errors


def format_error(error: ValidationError, detailed: bool) -> str:
    """Render a violation as 'Field ...: ... (rejected value: ...)' or as its bare message."""
    if not detailed or error.field is None:
        return error.message
    rejected = "null" if error.rejected_value is None else error.rejected_value
    return f"Field '{error.field}': {error.message} (rejected value: {rejected})"


def validate_body(
    target: str,
    payload: Mapping[str, Any],
    constraints: Sequence[Constraint],
    today: date,
    detailed: bool = True,
) -> BodyValidationFailed | None:
    """Validate a request body, returning a failure naming the payload type."""
    errors = validate(payload, constraints, today)
    if not errors:
        return None
    return BodyValidationFailed(target=target, errors=tuple(format_error(e, detailed) for e in errors))


def validate_parameters(
    params: Mapping[str, Any], constraints: Sequence[Constraint], today: date | None = None
) -> ParameterValidationFailed | None:
    """Validate query parameters. Parameter messages already name the parameter."""
    errors = validate(params, constraints, today)
    if not errors:
        return None
    return ParameterValidationFailed(errors=tuple(e.message for e in errors))
