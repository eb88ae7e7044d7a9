from __future__ import annotations

from typing import Sequence, Union

from .capability import ModelCapability
from .invocation import GuidanceOperation
from .prompt_loader import describe_output, fill_prompt, join_list, load_prompt, neutralize
from .schemas import AlternativesQuery, AlternativesResult

OPERATION_NAME = "suggestAlternativeMeds"
PROMPT_FILE = "alternatives_prompt_v1.txt"


def render_alternatives_prompt(query: AlternativesQuery, prompt_file: str = PROMPT_FILE) -> str:
    template = load_prompt(prompt_file)

    return fill_prompt(
        template,
        {
            "MEDICATIONS": join_list(query.medications),
            "INTERACTIONS": neutralize(query.interactions),
            "OUTPUT_FORMAT": describe_output(AlternativesResult),
        },
    )


def alternative_medications_operation(
    capability: ModelCapability,
) -> GuidanceOperation[AlternativesQuery, AlternativesResult]:
    return GuidanceOperation(
        name=OPERATION_NAME,
        input_schema=AlternativesQuery,
        output_schema=AlternativesResult,
        render=render_alternatives_prompt,
        capability=capability,
    )


async def suggest_alternative_meds(
    capability: ModelCapability,
    medications: Union[Sequence[str], str],
    interactions: str,
) -> AlternativesResult:
    """
    Suggest safer alternatives given the medications and their known interactions.

    `medications` may be a list or a comma-joined string.
    """
    if not isinstance(medications, str):
        medications = list(medications)
    operation = alternative_medications_operation(capability)
    return await operation.invoke({"medications": medications, "interactions": interactions})
