from __future__ import annotations

from .capability import ModelCapability
from .invocation import GuidanceOperation
from .prompt_loader import describe_output, fill_prompt, load_prompt, neutralize
from .schemas import DosageQuery, DosageResult

OPERATION_NAME = "ageSpecificDosageGuidance"
PROMPT_FILE = "dosage_prompt_v1.txt"


def render_dosage_prompt(query: DosageQuery, prompt_file: str = PROMPT_FILE) -> str:
    template = load_prompt(prompt_file)

    return fill_prompt(
        template,
        {
            "MEDICATION_NAME": neutralize(query.medication_name),
            "AGE": query.age,
            "OUTPUT_FORMAT": describe_output(DosageResult),
        },
    )


def dosage_guidance_operation(
    capability: ModelCapability,
) -> GuidanceOperation[DosageQuery, DosageResult]:
    return GuidanceOperation(
        name=OPERATION_NAME,
        input_schema=DosageQuery,
        output_schema=DosageResult,
        render=render_dosage_prompt,
        capability=capability,
    )


async def get_dosage_recommendation(
    capability: ModelCapability,
    medication_name: str,
    age: int,
) -> DosageResult:
    """
    Recommend a dosage for one medication at the given patient age.

    Returns DosageResult with keys: dosage, unit, notes (optional)
    """
    operation = dosage_guidance_operation(capability)
    return await operation.invoke({"medicationName": medication_name, "age": age})
