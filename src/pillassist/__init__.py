"""
PillAssist - medication interaction, dosage and alternatives guidance.

Caller input is validated against Pydantic contracts, rendered into a
pharmacist prompt, and answered by a language model whose reply must fit a
declared output schema. The entry point turns every failure into a
ResultEnvelope instead of raising.
"""

from .analysis import AnalysisService, GENERIC_ERROR_MESSAGE, run_enveloped
from .capability import (
    ConstrainedGenerationCapability,
    ModelCapability,
    ModelCapabilityError,
    TextGenerationCapability,
    build_capability,
)
from .config import Settings, load_env
from .errors import (
    CapabilityError,
    EmptyOutput,
    InvalidInput,
    InvocationError,
    OutputSchemaMismatch,
)
from .invocation import GuidanceOperation
from .registry import GuidanceRegistry, build_registry
from .dosage_guidance import get_dosage_recommendation, render_dosage_prompt
from .interaction_analysis import analyze_interactions, render_interaction_prompt
from .alternative_medications import render_alternatives_prompt, suggest_alternative_meds
from .schemas import (
    AlternativesQuery,
    AlternativesResult,
    DosageQuery,
    DosageResult,
    InteractionQuery,
    InteractionResult,
    ResultEnvelope,
)
from .validators import ValidationError, Violation, parse_json_strict, validate_model

__all__ = [
    "AnalysisService",
    "GENERIC_ERROR_MESSAGE",
    "run_enveloped",
    "ConstrainedGenerationCapability",
    "ModelCapability",
    "ModelCapabilityError",
    "TextGenerationCapability",
    "build_capability",
    "Settings",
    "load_env",
    "CapabilityError",
    "EmptyOutput",
    "InvalidInput",
    "InvocationError",
    "OutputSchemaMismatch",
    "GuidanceOperation",
    "GuidanceRegistry",
    "build_registry",
    "get_dosage_recommendation",
    "render_dosage_prompt",
    "analyze_interactions",
    "render_interaction_prompt",
    "render_alternatives_prompt",
    "suggest_alternative_meds",
    "AlternativesQuery",
    "AlternativesResult",
    "DosageQuery",
    "DosageResult",
    "InteractionQuery",
    "InteractionResult",
    "ResultEnvelope",
    "ValidationError",
    "Violation",
    "parse_json_strict",
    "validate_model",
]
