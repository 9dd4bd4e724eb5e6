"""
Typed results returned by application services.

Each domain call returns either Ok(value) or a Failure tagged with
exactly one FailureKind. Callers dispatch on the kind instead of
catching exceptions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Mapping, TypeVar, Union

T = TypeVar("T")

FieldErrors = Mapping[str, tuple[str, ...]]


class FailureKind(Enum):
    """The closed set of recoverable failures a shop action can produce."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    NOT_CREATED = "not_created"
    NOT_UPDATED = "not_updated"
    NOT_DELETED = "not_deleted"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the produced value."""

    value: T


@dataclass(frozen=True)
class Failure:
    """Failed outcome.

    Attributes:
        kind: Which failure happened.
        detail: Human readable description of the underlying cause.
        field_errors: Field name to messages, for VALIDATION_FAILED.
    """

    kind: FailureKind
    detail: str = ""
    field_errors: FieldErrors = field(default_factory=dict)

    @classmethod
    def validation(cls, field_errors: FieldErrors) -> "Failure":
        return cls(
            kind=FailureKind.VALIDATION_FAILED,
            detail="Validation failed",
            field_errors={name: tuple(msgs) for name, msgs in field_errors.items()},
        )


Result = Union[Ok[T], Failure]
