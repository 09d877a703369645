from dataclasses import dataclass, field
from typing import Any

from jsonschema import Draft202012Validator


def format_schema_error(error: Any) -> str:
    path = ".".join([str(part) for part in error.path])
    return f"{error.message} at {path}" if path else str(error.message)


@dataclass(frozen=True)
class ValidationResult:
    success: bool
    errors: list[str] = field(default_factory=list)

    @property
    def error(self) -> str | None:
        return "; ".join(self.errors) if self.errors else None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(success=True)

    @classmethod
    def failed(cls, *errors: str) -> "ValidationResult":
        return cls(success=False, errors=list(errors))


def validate_schema(schema: dict[str, Any], value: Any) -> ValidationResult:
    validator = Draft202012Validator(schema)
    errors = sorted(
        validator.iter_errors(value),
        key=lambda item: [str(part) for part in item.path],
    )
    if not errors:
        return ValidationResult.ok()
    return ValidationResult.failed(*[format_schema_error(error) for error in errors])
