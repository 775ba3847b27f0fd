"""
Failure variants - tagged results produced by the request guards.

Validators return one of these instead of raising. The API boundary
matches on the variant to choose the HTTP status and error code.
"""

from dataclasses import dataclass
from typing import Any, Union

MISSING_HEADER_PREFIX = "Missing required header: "
MISSING_HEADERS_PREFIX = "Missing required headers: "


@dataclass(frozen=True)
class ValidationError:
    """A single constraint violation."""

    message: str
    field: str | None = None  # None for header or object-level errors
    rejected_value: Any = None


@dataclass(frozen=True)
class MissingHeader:
    """A single header rejected by the framework binding layer."""

    name: str

    @property
    def message(self) -> str:
        return MISSING_HEADER_PREFIX + self.name


@dataclass(frozen=True)
class MissingHeaders:
    """One or more headers missing or blank, in declaration order."""

    names: tuple[str, ...]

    @property
    def message(self) -> str:
        return MISSING_HEADERS_PREFIX + " ".join(self.names)


@dataclass(frozen=True)
class BodyValidationFailed:
    """Request body violated one or more field constraints."""

    target: str  # Type name of the validated payload
    errors: tuple[str, ...]


@dataclass(frozen=True)
class ParameterValidationFailed:
    """Query parameters violated one or more bounds."""

    errors: tuple[str, ...]

    @property
    def message(self) -> str:
        return "; ".join(self.errors)


@dataclass(frozen=True)
class NotFound:
    """Referenced entity does not exist."""

    message: str


@dataclass(frozen=True)
class InternalError:
    """Uncategorized failure. The message never carries internal details."""

    message: str = "An unexpected error occurred"


Failure = Union[
    MissingHeader,
    MissingHeaders,
    BodyValidationFailed,
    ParameterValidationFailed,
    NotFound,
    InternalError,
]
