"""
Shared field types for the guidance contracts.

Every query model inherits from ContractModel: immutable, populated either by
the Python attribute name or by the camelCase wire name.
"""
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic_core import PydanticCustomError

from ..prompt_loader import neutralize

MIN_AGE = 1
MAX_AGE = 120


def _as_prompt_text(value: Any) -> Any:
    # The stored value is exactly what gets interpolated into the prompt.
    return neutralize(value) if isinstance(value, str) else value


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("int_type", "Input should be a valid integer")
    return value


PromptText = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1),
    BeforeValidator(_as_prompt_text),
]

MedicationName = PromptText

# Ordered; order is kept for rendering but carries no ranking.
MedicationList = Annotated[list[MedicationName], Field(min_length=1)]

# Numeric strings are still coerced ("65" -> 65), booleans are not.
PatientAge = Annotated[int, Field(ge=MIN_AGE, le=MAX_AGE), BeforeValidator(_reject_bool)]

MEDICATION_MESSAGES = {
    ("medications", "missing"): "At least one medication is required.",
    ("medications", "too_short"): "At least one medication is required.",
    ("medications", "string_too_short"): "Medication name is required.",
    ("medications", "string_type"): "Medication name is required.",
}

AGE_MESSAGES = {
    ("age", "missing"): "Age is required.",
    ("age", "int_type"): "Age must be a number.",
    ("age", "int_parsing"): "Age must be a number.",
    ("age", "int_from_float"): "Age must be a whole number.",
    ("age", "greater_than_equal"): f"Age must be at least {MIN_AGE}.",
    ("age", "less_than_equal"): "Please enter a valid age.",
}


class ContractModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    violation_messages: ClassVar[dict[tuple[str, str], str]] = {}
