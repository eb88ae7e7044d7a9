"""
Pydantic schemas for age-specific dosage guidance.
"""
from typing import ClassVar, Optional

from pydantic import ConfigDict, Field

from .common import AGE_MESSAGES, ContractModel, MedicationName, PatientAge


class DosageQuery(ContractModel):
    """Input schema: one medication and the patient's age."""

    medication_name: MedicationName = Field(
        alias="medicationName",
        description="The name of the medication.",
    )
    age: PatientAge = Field(description="The age of the patient in years.")

    violation_messages: ClassVar[dict[tuple[str, str], str]] = {
        ("medicationName", "missing"): "Medication name is required.",
        ("medicationName", "string_too_short"): "Medication name is required.",
        ("medicationName", "string_type"): "Medication name is required.",
        **AGE_MESSAGES,
    }


class DosageResult(ContractModel):
    """
    Output schema for a dosage recommendation.

    Keys: dosage, unit, notes (optional)
    """

    dosage: str = Field(
        description="The recommended dosage for the given medication and age."
    )
    unit: str = Field(description="The units used for the dosage.")
    notes: Optional[str] = Field(
        default=None,
        description="Important notes/considerations for this dosage.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "dosage": "500",
                "unit": "mg twice daily",
                "notes": "Take with meals to reduce stomach upset.",
            }
        }
    )
