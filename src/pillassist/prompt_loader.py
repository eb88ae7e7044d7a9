from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterable, Mapping, Type

from pydantic import BaseModel

_PLACEHOLDER_RE = re.compile(r"\{\{([A-Z][A-Z0-9_]*)\}\}")
_BRACE_RUN_RE = re.compile(r"\{{2,}|\}{2,}")
_WHITESPACE_RE = re.compile(r"\s+")

LIST_DELIMITER = ", "


@dataclass(frozen=True)
class PromptRef:
    """Reference to a prompt file shipped in the package's prompts/ folder."""
    filename: str  # e.g., "interaction_prompt_v1.txt"


def prompts_dir() -> Path:
    return Path(__file__).resolve().parent / "prompts"


@lru_cache(maxsize=64)
def load_prompt(prompt: PromptRef | str) -> str:
    """
    Load a prompt template from prompts/ and return it as a string.

    Example:
        txt = load_prompt("dosage_prompt_v1.txt")
    """
    filename = prompt.filename if isinstance(prompt, PromptRef) else str(prompt)
    path = prompts_dir() / filename
    if not path.exists():
        raise FileNotFoundError(f"Prompt not found: {path}")
    return path.read_text(encoding="utf-8")


def fill_prompt(template: str, variables: Mapping[str, object]) -> str:
    """
    Substitute {{VARNAME}} placeholders in the template.

    Substitution is a single pass over the template, so placeholder syntax inside
    a substituted value is never expanded. Unknown placeholders are left as-is.
    """

    def _sub(match: re.Match) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        return str(variables[key])

    return _PLACEHOLDER_RE.sub(_sub, template)


def neutralize(value: object) -> str:
    """
    Make a user-supplied string safe to interpolate into a template.

    Control characters and line breaks become single spaces (a value cannot start
    a new instruction line), and runs of braces collapse to one brace.
    """
    text = "".join(
        " " if unicodedata.category(ch).startswith("C") else ch for ch in str(value)
    )
    text = _BRACE_RUN_RE.sub(lambda m: m.group(0)[0], text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def join_list(items: Iterable[object]) -> str:
    """Render a list as "a, b, c": input order, no trailing delimiter."""
    return LIST_DELIMITER.join(neutralize(item) for item in items)


def describe_output(schema: Type[BaseModel]) -> str:
    """
    Render an output model as a bullet list of JSON keys for the prompt, e.g.

        - "dosage" (string): The recommended dosage for the given medication and age.
        - "notes" (string, optional): Important notes/considerations for this dosage.
    """
    js = schema.model_json_schema(by_alias=True)
    required = set(js.get("required", []))
    lines = []
    for key, prop in js.get("properties", {}).items():
        kind = prop.get("type")
        if kind is None:
            kind = "/".join(
                option["type"]
                for option in prop.get("anyOf", [])
                if option.get("type") and option.get("type") != "null"
            ) or "value"
        if key not in required:
            kind += ", optional"
        description = prop.get("description", "")
        lines.append(f'- "{key}" ({kind}): {description}'.rstrip(": "))
    return "\n".join(lines)
