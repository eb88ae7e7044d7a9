"""
Schema-constrained generation using the outlines library.

Token generation is constrained at the logit level so the model can only emit
JSON matching the requested Pydantic schema.

Key difference from HFTextClient:
- HFTextClient: generate free text -> extract JSON -> validate
- StructuredLLMClient: constrain generation -> always schema-shaped JSON

Requires: pip install "pillassist[structured]"
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Type

from pydantic import BaseModel
from transformers import AutoModelForCausalLM, AutoTokenizer

try:
    import outlines
    OUTLINES_AVAILABLE = True
except ImportError:
    OUTLINES_AVAILABLE = False

from .config import DEFAULT_MODEL_ID
from .llm_client import pick_device, pick_dtype

logger = logging.getLogger(__name__)


@dataclass
class StructuredGenerationConfig:
    max_new_tokens: int = 512


class StructuredLLMClient:
    """
    Hugging Face model wrapped by outlines for schema-guided generation.

    Example:
        client = StructuredLLMClient()
        raw = client.generate(InteractionResult, prompt)
        # raw is a JSON string shaped like InteractionResult
    """

    def __init__(
        self,
        model_id: str = DEFAULT_MODEL_ID,
        device: Optional[str] = None,
        config: Optional[StructuredGenerationConfig] = None,
    ) -> None:
        if not OUTLINES_AVAILABLE:
            raise RuntimeError(
                "outlines library not installed. Install with: pip install 'pillassist[structured]'"
            )

        self.model_id = model_id
        self.device = pick_device(device)
        self.config = config or StructuredGenerationConfig()
        self._lock = threading.Lock()

        logger.info("Loading %s via outlines on %s", model_id, self.device)
        hf_model = AutoModelForCausalLM.from_pretrained(
            model_id,
            torch_dtype=pick_dtype(self.device),
        ).to(self.device)
        tokenizer = AutoTokenizer.from_pretrained(model_id)
        self.model = outlines.from_transformers(hf_model, tokenizer)

        # One compiled generator per schema; building the constraint is the slow part.
        self._generators: dict = {}

    def _get_generator(self, schema: Type[BaseModel]):
        schema_name = schema.__name__

        if schema_name not in self._generators:
            logger.debug("Creating generator for %s", schema_name)
            self._generators[schema_name] = outlines.Generator(self.model, schema)

        return self._generators[schema_name]

    def generate(self, schema: Type[BaseModel], prompt: str) -> str:
        """Generate a JSON string constrained to `schema`."""
        # Serialized per client, as in HFTextClient.generate.
        with self._lock:
            generator = self._get_generator(schema)
            return generator(prompt, max_new_tokens=self.config.max_new_tokens)
