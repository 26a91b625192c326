"""
Payload validation - checks raw request bodies against the resource models
without raising, so callers branch on the result instead of catching
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class FieldError:
    """A single field-level validation failure"""
    field: str
    message: str
    type: str = "value_error"


@dataclass
class ValidationResult:
    """Tagged outcome of validate_payload: either value or errors is meaningful"""
    success: bool
    value: Optional[Dict[str, Any]] = None
    errors: List[FieldError] = field(default_factory=list)


def _field_errors(exc: ValidationError) -> List[FieldError]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "body"
        errors.append(FieldError(
            field=location,
            message=error.get("msg", "Invalid value"),
            type=error.get("type", "value_error"),
        ))
    return errors


def validate_payload(model: Type[BaseModel], payload: Any) -> ValidationResult:
    """
    Validate an untyped payload against a model

    Args:
        model: Pydantic model describing the accepted shape
        payload: Decoded JSON body, any type

    Returns:
        ValidationResult holding only the fields the caller supplied
        (unset optional fields are not reported), or the field errors
    """
    if not isinstance(payload, dict):
        return ValidationResult(
            success=False,
            errors=[FieldError(field="body", message="Expected a JSON object", type="dict_type")],
        )

    try:
        parsed = model.model_validate(payload)
    except ValidationError as e:
        errors = _field_errors(e)
        logger.info(f"{model.__name__} rejected: {[error.field for error in errors]}")
        return ValidationResult(success=False, errors=errors)

    return ValidationResult(success=True, value=parsed.model_dump(exclude_unset=True))
