"""
The model capability: "given a prompt and an output schema, return a value
conforming to the schema, or fail".

Invocation wrappers only see the ModelCapability protocol, so tests swap in a
deterministic stub. The two concrete capabilities adapt the blocking clients
to async and bound every call with a timeout.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Protocol, Type, runtime_checkable

from pydantic import BaseModel

from .config import Settings
from .validators import ValidationError, parse_json_strict

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 90.0


class ModelCapabilityError(RuntimeError):
    pass


@runtime_checkable
class ModelCapability(Protocol):
    async def run_prompt(self, prompt_text: str, output_schema: Type[BaseModel]) -> Any:
        ...


async def _run_bounded(fn: Callable[..., Any], *args: Any, timeout_s: float) -> Any:
    # The worker thread cannot be killed; the caller stops waiting for it.
    return await asyncio.wait_for(asyncio.to_thread(fn, *args), timeout=timeout_s)


class TextGenerationCapability:
    """
    Prompt-engineered structured output over a free-text client.

    The rendered prompt already lists the JSON keys to return; the first JSON
    object is pulled from the reply. Blank text means no output (None).
    """

    def __init__(self, client: Any, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.client = client
        self.timeout_s = timeout_s

    async def run_prompt(self, prompt_text: str, output_schema: Type[BaseModel]) -> Any:
        raw = await _run_bounded(self.client.generate, prompt_text, timeout_s=self.timeout_s)
        if not (raw or "").strip():
            return None
        try:
            return parse_json_strict(raw)
        except ValidationError as e:
            logger.debug("Unparseable model reply: %.200s", raw)
            raise ModelCapabilityError(f"Model reply is not a JSON object: {e}") from e


class ConstrainedGenerationCapability:
    """Schema-guided generation: the client constrains decoding to the schema."""

    def __init__(self, client: Any, timeout_s: float = DEFAULT_TIMEOUT_S) -> None:
        self.client = client
        self.timeout_s = timeout_s

    async def run_prompt(self, prompt_text: str, output_schema: Type[BaseModel]) -> Any:
        return await _run_bounded(
            self.client.generate, output_schema, prompt_text, timeout_s=self.timeout_s
        )


def build_capability(settings: Settings) -> ModelCapability:
    """Load the model named in settings behind the configured backend."""
    if settings.backend == "structured":
        from .structured_client import StructuredGenerationConfig, StructuredLLMClient

        client = StructuredLLMClient(
            model_id=settings.model_id,
            device=settings.device,
            config=StructuredGenerationConfig(max_new_tokens=settings.max_new_tokens),
        )
        return ConstrainedGenerationCapability(client, timeout_s=settings.timeout_s)

    from .llm_client import GenerationConfig, HFTextClient

    client = HFTextClient(
        model_id=settings.model_id,
        device=settings.device,
        gen_cfg=GenerationConfig(max_new_tokens=settings.max_new_tokens),
    )
    return TextGenerationCapability(client, timeout_s=settings.timeout_s)
