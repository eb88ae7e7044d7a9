"""
Command-line caller for PillAssist.

Usage:
    pillassist analyze Warfarin Aspirin --age 65
    pillassist dosage Ibuprofen --age 8
    pillassist alternatives Warfarin Aspirin --interactions "Increased bleeding risk"
"""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from .analysis import AnalysisService, run_enveloped
from .capability import build_capability
from .config import Settings, load_env
from .registry import GuidanceRegistry, build_registry
from .schemas import ResultEnvelope

logger = logging.getLogger(__name__)

NO_INFORMATION = "No information provided."


def split_paragraphs(text: Optional[str]) -> list[str]:
    """One paragraph per non-blank line."""
    if not text:
        return []
    return [line.strip() for line in text.split("\n") if line.strip()]


def format_sections(sections: Sequence[tuple[str, Optional[str]]]) -> str:
    blocks = []
    for title, content in sections:
        paragraphs = split_paragraphs(content) or [NO_INFORMATION]
        blocks.append("\n".join([title, "=" * len(title), *paragraphs]))
    return "\n\n".join(blocks)


def sections_for(command: str, data) -> list[tuple[str, Optional[str]]]:
    if command == "analyze":
        return [
            ("Potential Drug Interactions", data.analysis_results),
            ("Age-Specific Dosage Guidance", data.dosage_recommendation),
            ("Alternative Medication Suggestions", data.alternative_medications),
        ]
    if command == "dosage":
        return [
            ("Dosage", f"{data.dosage} {data.unit}".strip()),
            ("Notes", data.notes),
        ]
    return [("Alternative Medication Suggestions", data.alternatives)]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pillassist",
        description="Medication interaction, dosage and alternatives guidance.",
    )
    parser.add_argument("--env-file", default=None, help="Load settings from this .env file")
    parser.add_argument("--json", action="store_true", help="Print the result envelope as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Check a medication list for interactions")
    analyze.add_argument("medications", nargs="+")
    analyze.add_argument("--age", type=int, required=True)

    dosage = sub.add_parser("dosage", help="Age-specific dosage for one medication")
    dosage.add_argument("medication")
    dosage.add_argument("--age", type=int, required=True)

    alternatives = sub.add_parser("alternatives", help="Suggest safer alternatives")
    alternatives.add_argument("medications", nargs="+")
    alternatives.add_argument("--interactions", required=True)

    return parser


async def run_command(args: argparse.Namespace, registry: GuidanceRegistry) -> ResultEnvelope:
    if args.command == "analyze":
        service = AnalysisService.from_registry(registry)
        return await service.perform_analysis({"medications": args.medications, "age": args.age})
    if args.command == "dosage":
        return await run_enveloped(
            registry.dosage, {"medicationName": args.medication, "age": args.age}
        )
    return await run_enveloped(
        registry.alternatives,
        {"medications": args.medications, "interactions": args.interactions},
    )


def main(argv: Optional[Sequence[str]] = None, registry: Optional[GuidanceRegistry] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    load_env(args.env_file)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if registry is None:
        try:
            registry = build_registry(build_capability(settings))
        except Exception as e:
            logger.exception("Could not load model %s", settings.model_id)
            print(f"Could not load model {settings.model_id}: {e}", file=sys.stderr)
            return 2

    envelope = asyncio.run(run_command(args, registry))

    if args.json:
        print(json.dumps(envelope.to_dict(), indent=2))
    elif envelope.success:
        print(format_sections(sections_for(args.command, envelope.data)))
    else:
        print(f"Analysis failed: {envelope.error}", file=sys.stderr)

    return 0 if envelope.success else 1
