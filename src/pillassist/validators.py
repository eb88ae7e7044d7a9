from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class Violation:
    """One violated field constraint, addressed by dotted path (e.g. "medications.1")."""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}" if self.field else self.message


@dataclass
class ValidationError(ValueError):
    message: str
    violations: list[Violation] = field(default_factory=list)

    def __str__(self) -> str:
        return self.message


def extract_first_json_object(text: str) -> str:
    """
    Extract the first JSON object from a string.

    Many models add extra words or wrap the answer in markdown fences. We extract
    the first {...} block with proper brace matching for nested objects.
    """
    s = (text or "").strip()

    start = s.find("{")
    if start == -1:
        raise ValidationError("No JSON object found in model output.")

    depth = 0
    in_string = False
    escape_next = False

    for i, char in enumerate(s[start:], start=start):
        if escape_next:
            escape_next = False
            continue

        if char == "\\":
            escape_next = True
            continue

        if char == '"':
            in_string = not in_string
            continue

        if in_string:
            continue

        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return s[start : i + 1]

    raise ValidationError("No valid JSON object found (unmatched braces).")


def parse_json_strict(text: str) -> dict[str, Any]:
    """
    Parse a single JSON object from a model output string.

    Raises ValidationError if JSON is missing/invalid or if the top-level is not an object.
    """
    raw = extract_first_json_object(text)
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}") from e

    if not isinstance(obj, dict):
        raise ValidationError("Expected a single JSON object (dictionary).")
    return obj


def _public_name(schema: Type[BaseModel], name: str) -> str:
    info = schema.model_fields.get(name)
    if info is not None and info.alias:
        return info.alias
    return name


def collect_violations(schema: Type[BaseModel], error: PydanticValidationError) -> list[Violation]:
    """
    Flatten every pydantic error into a Violation.

    A schema may map (field, error type) pairs to friendlier wording through a
    `violation_messages` class attribute; anything unmapped keeps pydantic's message.
    """
    overrides: dict[tuple[str, str], str] = getattr(schema, "violation_messages", {}) or {}
    violations = []
    for err in error.errors():
        loc = [str(part) for part in err.get("loc", ())]
        if loc:
            loc[0] = _public_name(schema, loc[0])
        top = loc[0] if loc else ""
        message = overrides.get((top, err["type"]), err["msg"])
        violations.append(Violation(field=".".join(loc), message=message))
    return violations


def validate_model(schema: Type[M], value: Any) -> M:
    """
    Validate a candidate value against a contract model.

    Accepts a mapping, a JSON string, or another model instance (re-validated from
    its dumped form). Raises ValidationError listing every violated constraint.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True)
    try:
        if isinstance(value, (str, bytes)):
            return schema.model_validate_json(value)
        return schema.model_validate(value)
    except PydanticValidationError as e:
        violations = collect_violations(schema, e)
        summary = "; ".join(str(v) for v in violations)
        raise ValidationError(f"{schema.__name__} is invalid: {summary}", violations) from e
