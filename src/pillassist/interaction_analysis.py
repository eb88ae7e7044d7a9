from __future__ import annotations

from typing import Sequence

from .capability import ModelCapability
from .invocation import GuidanceOperation
from .prompt_loader import describe_output, fill_prompt, join_list, load_prompt
from .schemas import InteractionQuery, InteractionResult

OPERATION_NAME = "drugInteractionAnalysis"
PROMPT_FILE = "interaction_prompt_v1.txt"


def render_interaction_prompt(query: InteractionQuery, prompt_file: str = PROMPT_FILE) -> str:
    """
    Render the interaction-analysis prompt.

    Medications appear comma-separated in input order, followed by the age and
    the JSON keys the answer must contain.
    """
    template = load_prompt(prompt_file)

    return fill_prompt(
        template,
        {
            "AGE": query.age,
            "MEDICATIONS": join_list(query.medications),
            "OUTPUT_FORMAT": describe_output(InteractionResult),
        },
    )


def interaction_analysis_operation(
    capability: ModelCapability,
) -> GuidanceOperation[InteractionQuery, InteractionResult]:
    return GuidanceOperation(
        name=OPERATION_NAME,
        input_schema=InteractionQuery,
        output_schema=InteractionResult,
        render=render_interaction_prompt,
        capability=capability,
    )


async def analyze_interactions(
    capability: ModelCapability,
    medications: Sequence[str],
    age: int,
) -> InteractionResult:
    """Analyze a medication list for interactions, age-appropriate dosing and alternatives."""
    operation = interaction_analysis_operation(capability)
    return await operation.invoke({"medications": list(medications), "age": age})
