"""
Orchestration entry point consumed by the UI caller.

Every failure becomes a ResultEnvelope; no exception crosses this boundary.
Input problems are reported field by field so the caller can fix them. Any
other failure is logged with its cause and reported with one generic message.
"""
from __future__ import annotations

import logging
from typing import Any

from .errors import InvalidInput
from .invocation import GuidanceOperation
from .registry import GuidanceRegistry
from .schemas import InteractionQuery, InteractionResult, ResultEnvelope

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "An unexpected error occurred while analyzing medications. Please try again later."
)


def invalid_input_message(error: InvalidInput) -> str:
    details = "; ".join(str(v) for v in error.violations) or "the request is malformed"
    return f"Please correct the following: {details}"


async def run_enveloped(operation: GuidanceOperation, raw_input: Any) -> ResultEnvelope:
    try:
        data = await operation.invoke(raw_input)
    except InvalidInput as e:
        logger.info("%s rejected input: %s", operation.name, e)
        return ResultEnvelope.fail(invalid_input_message(e))
    except Exception:
        logger.exception("Error during %s", operation.name)
        return ResultEnvelope.fail(GENERIC_ERROR_MESSAGE)
    return ResultEnvelope.ok(data)


class AnalysisService:
    """
    Interaction analysis for the form caller.

    Only the interaction operation runs here; dosage and alternatives are not
    chained after it.
    """

    def __init__(self, interaction: GuidanceOperation[InteractionQuery, InteractionResult]) -> None:
        self.interaction = interaction

    @classmethod
    def from_registry(cls, registry: GuidanceRegistry) -> "AnalysisService":
        return cls(registry.interaction)

    async def perform_analysis(self, raw_input: Any) -> ResultEnvelope[InteractionResult]:
        """
        Analyze {"medications": [...], "age": n}.

        Returns {success: True, data: InteractionResult} or
        {success: False, error: message}; never raises.
        """
        return await run_enveloped(self.interaction, raw_input)
