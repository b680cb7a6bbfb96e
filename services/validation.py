"""
Explicit request validation.

Routers validate a payload with ``validate_payload`` and hand the resulting
schema instance to a service; services call ``ensure_valid`` on whatever
they receive so that direct callers get the same checks.
"""
from dataclasses import dataclass, field
from typing import Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from exceptions import ValidationError


@dataclass
class ValidationResult:
     """Outcome of validating a payload: ``value`` when ok, field errors otherwise."""
     ok: bool
     value: Optional[BaseModel] = None
     errors: dict = field(default_factory=dict)


def field_errors(exc: PydanticValidationError) -> dict:
     """Flatten pydantic errors into ``{"field": "message"}`` (first message wins)."""
     errors = {}
     for error in exc.errors():
          key = ".".join(str(part) for part in error["loc"]) or "__root__"
          errors.setdefault(key, error["msg"])
     return errors


def validate_payload(schema: Type[BaseModel], data) -> ValidationResult:
     if isinstance(data, schema):
          return ValidationResult(ok=True, value=data)
     if isinstance(data, BaseModel):
          data = data.model_dump(exclude_unset=True)
     try:
          value = schema.model_validate(data or {})
     except PydanticValidationError as exc:
          return ValidationResult(ok=False, errors=field_errors(exc))
     return ValidationResult(ok=True, value=value)


def ensure_valid(schema: Type[BaseModel], data) -> BaseModel:
     """Validate ``data`` against ``schema`` or raise ValidationError."""
     result = validate_payload(schema, data)
     if not result.ok:
          raise ValidationError(result.errors)
     return result.value


def clean_form(**values) -> dict:
     """Drop form fields that were not submitted; an empty string clears a field."""
     return {
          name: (None if value == "" else value)
          for name, value in values.items()
          if value is not None
     }
