"""
Pydantic schemas for drug-interaction analysis.

InteractionResult fields are free-text paragraphs. Their content is opaque
here; the contract only guarantees that all three are present as strings.
"""
from typing import ClassVar

from pydantic import ConfigDict, Field

from .common import (
    AGE_MESSAGES,
    MEDICATION_MESSAGES,
    ContractModel,
    MedicationList,
    PatientAge,
)


class InteractionQuery(ContractModel):
    """Input schema for interaction analysis."""

    medications: MedicationList = Field(
        description="A list of medications to analyze for interactions."
    )
    age: PatientAge = Field(description="The age of the patient.")

    violation_messages: ClassVar[dict[tuple[str, str], str]] = {**MEDICATION_MESSAGES, **AGE_MESSAGES}


class InteractionResult(ContractModel):
    """
    Output schema for interaction analysis.

    Keys: analysisResults, dosageRecommendation, alternativeMedications
    """

    analysis_results: str = Field(
        alias="analysisResults",
        description="The analysis results of potential drug interactions.",
    )
    dosage_recommendation: str = Field(
        alias="dosageRecommendation",
        description="Dosage recommendations based on patient age.",
    )
    alternative_medications: str = Field(
        alias="alternativeMedications",
        description="Suggestions for alternative medications.",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "analysisResults": "Warfarin and Aspirin together raise the risk of bleeding.",
                "dosageRecommendation": "Use the lowest effective aspirin dose and monitor INR closely.",
                "alternativeMedications": "Acetaminophen may be used for pain relief instead of aspirin.",
            }
        }
    )
