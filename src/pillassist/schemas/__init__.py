"""
Pydantic contracts for PillAssist.

Query models validate caller input before any prompt is rendered; result
models declare the exact JSON shape the model must answer with and are used
both to steer generation and to re-check what comes back.
"""
from .common import MAX_AGE, MIN_AGE, ContractModel, MedicationList, PatientAge
from .dosage import DosageQuery, DosageResult
from .interaction import InteractionQuery, InteractionResult
from .alternatives import AlternativesQuery, AlternativesResult
from .envelope import ResultEnvelope

__all__ = [
    "MIN_AGE",
    "MAX_AGE",
    "ContractModel",
    "MedicationList",
    "PatientAge",
    "DosageQuery",
    "DosageResult",
    "InteractionQuery",
    "InteractionResult",
    "AlternativesQuery",
    "AlternativesResult",
    "ResultEnvelope",
]
