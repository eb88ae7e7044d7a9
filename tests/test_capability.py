"""
Tests for pillassist.capability module.
"""
from __future__ import annotations

import asyncio
import time
from unittest.mock import MagicMock, patch

import pytest

from pillassist.capability import (
    ConstrainedGenerationCapability,
    ModelCapability,
    ModelCapabilityError,
    TextGenerationCapability,
    build_capability,
)
from pillassist.config import Settings
from pillassist.errors import CapabilityError
from pillassist.interaction_analysis import interaction_analysis_operation
from pillassist.schemas import AlternativesResult, InteractionResult


class TestTextGenerationCapability:
    """Tests for TextGenerationCapability."""

    def test_sends_rendered_prompt_unchanged(self):
        client = MagicMock()
        client.generate.return_value = '{"alternatives": "Acetaminophen"}'
        capability = TextGenerationCapability(client)

        asyncio.run(capability.run_prompt("Suggest alternatives.", AlternativesResult))

        client.generate.assert_called_once_with("Suggest alternatives.")

    def test_parses_json_from_chatty_reply(self):
        client = MagicMock()
        client.generate.return_value = 'Sure! Here it is:\n{"alternatives": "Acetaminophen"}\nStay safe.'
        capability = TextGenerationCapability(client)

        result = asyncio.run(capability.run_prompt("p", AlternativesResult))

        assert result == {"alternatives": "Acetaminophen"}

    def test_blank_reply_is_none(self):
        client = MagicMock()
        client.generate.return_value = "   "
        capability = TextGenerationCapability(client)

        assert asyncio.run(capability.run_prompt("p", AlternativesResult)) is None

    def test_non_json_reply_raises(self):
        client = MagicMock()
        client.generate.return_value = "I cannot help with that."
        capability = TextGenerationCapability(client)

        with pytest.raises(ModelCapabilityError, match="not a JSON object"):
            asyncio.run(capability.run_prompt("p", AlternativesResult))

    def test_times_out(self):
        client = MagicMock()
        client.generate.side_effect = lambda prompt: time.sleep(0.5) or "{}"
        capability = TextGenerationCapability(client, timeout_s=0.05)

        with pytest.raises(asyncio.TimeoutError):
            asyncio.run(capability.run_prompt("p", AlternativesResult))

    def test_timeout_surfaces_as_capability_error(self):
        client = MagicMock()
        client.generate.side_effect = lambda prompt: time.sleep(0.5) or "{}"
        operation = interaction_analysis_operation(TextGenerationCapability(client, timeout_s=0.05))

        with pytest.raises(CapabilityError):
            asyncio.run(operation.invoke({"medications": ["Warfarin"], "age": 65}))

    def test_end_to_end_with_operation(self):
        client = MagicMock()
        client.generate.return_value = (
            '```json\n{"analysisResults": "A", "dosageRecommendation": "B", '
            '"alternativeMedications": "C"}\n```'
        )
        operation = interaction_analysis_operation(TextGenerationCapability(client))

        result = asyncio.run(operation.invoke({"medications": ["Warfarin", "Aspirin"], "age": 65}))

        assert result == InteractionResult(
            analysisResults="A", dosageRecommendation="B", alternativeMedications="C"
        )

    def test_satisfies_protocol(self):
        assert isinstance(TextGenerationCapability(MagicMock()), ModelCapability)


class TestConstrainedGenerationCapability:
    """Tests for ConstrainedGenerationCapability."""

    def test_passes_schema_and_prompt(self):
        client = MagicMock()
        client.generate.return_value = '{"alternatives": "X"}'
        capability = ConstrainedGenerationCapability(client)

        result = asyncio.run(capability.run_prompt("prompt text", AlternativesResult))

        client.generate.assert_called_once_with(AlternativesResult, "prompt text")
        assert result == '{"alternatives": "X"}'

    def test_propagates_client_errors(self):
        client = MagicMock()
        client.generate.side_effect = RuntimeError("CUDA out of memory")
        capability = ConstrainedGenerationCapability(client)

        with pytest.raises(RuntimeError, match="out of memory"):
            asyncio.run(capability.run_prompt("p", AlternativesResult))


class TestBuildCapability:
    """Tests for build_capability function."""

    @patch("pillassist.llm_client.HFTextClient")
    def test_text_backend(self, mock_client_cls):
        settings = Settings(model_id="test/model", device="cpu", timeout_s=5, max_new_tokens=64)

        capability = build_capability(settings)

        assert isinstance(capability, TextGenerationCapability)
        assert capability.timeout_s == 5
        kwargs = mock_client_cls.call_args.kwargs
        assert kwargs["model_id"] == "test/model"
        assert kwargs["device"] == "cpu"
        assert kwargs["gen_cfg"].max_new_tokens == 64

    @patch("pillassist.structured_client.StructuredLLMClient")
    def test_structured_backend(self, mock_client_cls):
        settings = Settings(model_id="test/model", backend="structured", max_new_tokens=64)

        capability = build_capability(settings)

        assert isinstance(capability, ConstrainedGenerationCapability)
        assert capability.client is mock_client_cls.return_value
        assert mock_client_cls.call_args.kwargs["config"].max_new_tokens == 64
