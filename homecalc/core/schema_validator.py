"""Schema Validator: checks candidate data against a declared Pydantic shape.

Invariants:
    - Returns the candidate re-typed to the shape, or raises error_cls naming
      the first violated field (dotted path)
    - Validating an already-valid instance returns an equal instance and has
      no side effects
    - Unknown top-level fields are rejected (shapes declare extra="forbid")
"""

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from homecalc.core.errors import (
    ErrorContext,
    RequestValidationError,
    ResponseValidationError,
)

M = TypeVar("M", bound=BaseModel)

ValidationFailure = type[RequestValidationError] | type[ResponseValidationError]


def validate(
    model_cls: type[M],
    candidate: Any,
    *,
    error_cls: ValidationFailure,
    context: ErrorContext | None = None,
) -> M:
    """Validate candidate (mapping or model instance) against model_cls."""
    if isinstance(candidate, BaseModel):
        candidate = candidate.model_dump(by_alias=True)
    elif not isinstance(candidate, Mapping):
        raise error_cls(
            f"Expected an object for {model_cls.__name__}, "
            f"got {type(candidate).__name__}",
            field="$", context=context,
        )

    try:
        return model_cls.model_validate(candidate)
    except ValidationError as e:
        field, message = first_violation(e)
        raise error_cls(
            f"{model_cls.__name__}.{field}: {message}",
            field=field, context=context,
        ) from e


def validate_request(
    model_cls: type[M], candidate: Any, context: ErrorContext | None = None,
) -> M:
    return validate(
        model_cls, candidate, error_cls=RequestValidationError, context=context,
    )


def validate_response(
    model_cls: type[M], candidate: Any, context: ErrorContext | None = None,
) -> M:
    return validate(
        model_cls, candidate, error_cls=ResponseValidationError, context=context,
    )


def first_violation(error: ValidationError) -> tuple[str, str]:
    """(dotted field path, message) of the first reported error."""
    errors = error.errors()
    if not errors:
        return "$", str(error)
    first = errors[0]
    path = ".".join(str(loc) for loc in first.get("loc", ())) or "$"
    return path, first.get("msg", "invalid value")
