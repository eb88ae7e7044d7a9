"""
Pydantic schemas for alternative-medication suggestions.
"""
from typing import Any, ClassVar

from pydantic import Field, field_validator

from .common import MEDICATION_MESSAGES, ContractModel, MedicationList, PromptText


class AlternativesQuery(ContractModel):
    """
    Input schema for alternative suggestions.

    `medications` is a structured list like everywhere else; a comma-joined
    string ("Warfarin, Aspirin") is still accepted and split here.
    """

    medications: MedicationList = Field(
        description="List of medications the patient is taking."
    )
    interactions: PromptText = Field(
        description="The detected harmful interactions between the medications."
    )

    violation_messages: ClassVar[dict[tuple[str, str], str]] = {
        **MEDICATION_MESSAGES,
        ("interactions", "missing"): "A description of the interactions is required.",
        ("interactions", "string_too_short"): "A description of the interactions is required.",
        ("interactions", "string_type"): "A description of the interactions is required.",
    }

    @field_validator("medications", mode="before")
    @classmethod
    def split_comma_joined(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part for part in value.split(",") if part.strip()]
        return value


class AlternativesResult(ContractModel):
    """Output schema. Keys: alternatives"""

    alternatives: str = Field(
        description="Suggested alternative medications to avoid the harmful interactions."
    )
