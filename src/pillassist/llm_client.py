"""
Hugging Face text-generation client for PillAssist.

Blocking and local: the async capability layer runs it in a worker thread.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import torch
from transformers import AutoModelForCausalLM, AutoTokenizer

from .config import DEFAULT_MODEL_ID

logger = logging.getLogger(__name__)


def pick_device(prefer: Optional[str] = None) -> torch.device:
    """
    Pick a device with sensible defaults:
      - If prefer is set (e.g., "cuda" or "mps"), use it if available.
      - Else prefer CUDA, then MPS, then CPU.
    """
    prefer = (prefer or "").strip().lower()

    if prefer == "cpu":
        return torch.device("cpu")

    if prefer == "cuda" and torch.cuda.is_available():
        return torch.device("cuda")

    if prefer == "mps" and getattr(torch.backends, "mps", None) and torch.backends.mps.is_available():
        return torch.device("mps")

    if torch.cuda.is_available():
        return torch.device("cuda")

    if getattr(torch.backends, "mps", None) and torch.backends.mps.is_available():
        return torch.device("mps")

    return torch.device("cpu")


def pick_dtype(device: torch.device) -> torch.dtype:
    """
    Conservative dtype selection for stability.

    MPS needs float32 to avoid NaN issues during generation. Only CUDA uses float16.
    """
    if device.type == "cuda":
        return torch.float16
    return torch.float32


@dataclass
class GenerationConfig:
    """
    Generation defaults biased toward determinism (greedy decoding).

    Three free-text paragraphs wrapped in JSON need more room than a one-liner,
    hence the larger max_new_tokens.
    """
    max_new_tokens: int = 512
    do_sample: bool = False
    temperature: float = 0.0
    top_p: float = 1.0


class HFTextClient:
    """
    Minimal, reliable Hugging Face client for instruction-tuned chat models.

    Returns only the newly generated text; the prompt is never echoed back.

    Calls to generate() are serialized per client. A caller that times out
    stops waiting, but its generation still runs to completion and the next
    call queues behind it.
    """

    def __init__(
        self,
        model_id: str = DEFAULT_MODEL_ID,
        device: Optional[str] = None,
        gen_cfg: Optional[GenerationConfig] = None,
    ) -> None:
        self.model_id = model_id
        self.device = pick_device(device)
        self.dtype = pick_dtype(self.device)
        self.gen_cfg = gen_cfg or GenerationConfig()
        self._lock = threading.Lock()

        logger.info("Loading %s on %s (%s)", model_id, self.device, self.dtype)
        self.tokenizer = AutoTokenizer.from_pretrained(self.model_id, use_fast=True)
        self.model = AutoModelForCausalLM.from_pretrained(
            self.model_id,
            torch_dtype=self.dtype,
            device_map=None,  # keep explicit control
        ).to(self.device)
        self.model.eval()

        # Pad token safety: use EOS as pad if not defined.
        if self.tokenizer.pad_token_id is None and self.tokenizer.eos_token_id is not None:
            self.tokenizer.pad_token_id = self.tokenizer.eos_token_id

    @torch.no_grad()
    def generate(self, prompt: str) -> str:
        """Run one chat-templated generation and return the response text."""
        with self._lock:
            return self._generate(prompt)

    def _generate(self, prompt: str) -> str:
        messages = [{"role": "user", "content": prompt}]
        formatted_prompt = self.tokenizer.apply_chat_template(
            messages,
            tokenize=False,
            add_generation_prompt=True,
        )

        inputs = self.tokenizer(formatted_prompt, return_tensors="pt")
        inputs = {k: v.to(self.device) for k, v in inputs.items()}

        gen_kwargs = dict(
            max_new_tokens=self.gen_cfg.max_new_tokens,
            pad_token_id=self.tokenizer.pad_token_id,
        )
        # MPS is unstable when sampling; force greedy there.
        if self.gen_cfg.do_sample and self.device.type != "mps":
            gen_kwargs["do_sample"] = True
            gen_kwargs["temperature"] = self.gen_cfg.temperature
            gen_kwargs["top_p"] = self.gen_cfg.top_p
        else:
            gen_kwargs["do_sample"] = False
            gen_kwargs["num_beams"] = 1

        outputs = self.model.generate(**inputs, **gen_kwargs)

        prompt_len = inputs["input_ids"].shape[-1]
        text = self.tokenizer.decode(outputs[0][prompt_len:], skip_special_tokens=True)
        return text.strip()
