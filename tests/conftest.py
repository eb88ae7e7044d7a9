"""
Shared pytest fixtures for PillAssist tests.
"""
from __future__ import annotations

from typing import Any, Optional

import pytest



class StubCapability:
    """
    Deterministic stand-in for the model capability.

    Returns `result` (or raises `error`) and records every call.
    """

    def __init__(self, result: Any = None, error: Optional[BaseException] = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, type]] = []

    async def run_prompt(self, prompt_text, output_schema):
        self.calls.append((prompt_text, output_schema))
        if self.error is not None:
            raise self.error
        return self.result

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture
def interaction_output():
    return {
        "analysisResults": "A",
        "dosageRecommendation": "B",
        "alternativeMedications": "C",
    }


@pytest.fixture
def interaction_input():
    return {"medications": ["Warfarin", "Aspirin"], "age": 65}


@pytest.fixture
def make_capability():
    """Factory: make_capability(result=..., error=...)."""
    return StubCapability


@pytest.fixture
def interaction_capability(interaction_output):
    return StubCapability(result=interaction_output)

