"""
Named guidance operations, built once at process start and handed to callers
explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass

from .alternative_medications import alternative_medications_operation
from .capability import ModelCapability
from .dosage_guidance import dosage_guidance_operation
from .interaction_analysis import interaction_analysis_operation
from .invocation import GuidanceOperation
from .schemas import (
    AlternativesQuery,
    AlternativesResult,
    DosageQuery,
    DosageResult,
    InteractionQuery,
    InteractionResult,
)


@dataclass(frozen=True)
class GuidanceRegistry:
    dosage: GuidanceOperation[DosageQuery, DosageResult]
    interaction: GuidanceOperation[InteractionQuery, InteractionResult]
    alternatives: GuidanceOperation[AlternativesQuery, AlternativesResult]

    def by_name(self, name: str) -> GuidanceOperation:
        for operation in (self.dosage, self.interaction, self.alternatives):
            if operation.name == name:
                return operation
        raise KeyError(f"Unknown guidance operation: {name}")


def build_registry(capability: ModelCapability) -> GuidanceRegistry:
    """All three operations share one capability (and so one loaded model)."""
    return GuidanceRegistry(
        dosage=dosage_guidance_operation(capability),
        interaction=interaction_analysis_operation(capability),
        alternatives=alternative_medications_operation(capability),
    )
