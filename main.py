# main.py
"""
Entry point / Orchestrator.

This file wires together the end-to-end workflow:
1) Load questionnaire answers from a JSON file
2) Normalize them (security flags always resolve to "yes"/"no")
3) Run the decision tree (deterministic: guardrails, role, skills, stack)
4) Optionally ask the LLM for the four creative sections (falls back to templates on any failure)
5) Assemble the config document
6) Package the document and one SKILL.md per skill into a directory and/or zip

Design principle:
- "Determinism-first": the LLM can only rewrite Role, Project Context,
  Behavioral Directives and Build Sequence; everything audit-relevant is derived.
- "Observability": token usage and latency are logged in configkit.llm.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import click
from dotenv import load_dotenv

from configkit.answers import normalize_answers
from configkit.assembler import assemble_config
from configkit.decision_tree import DecisionTreeResult, run_partial_decision_tree
from configkit.enhance import generate_ai_sections
from configkit.logging_utils import setup_logging
from configkit.packager import (
    BundleError,
    build_bundle,
    estimate_bundle_size,
    write_bundle_dir,
    write_bundle_zip,
    write_result_json,
)
from configkit.schema import AISections

# Load configuration from .env (API key, gateway URL, model, AI toggle).
load_dotenv()


class AnswersFileError(RuntimeError):
    pass


def load_answers(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise AnswersFileError(f"Cannot read answers file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise AnswersFileError(f"Answers file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AnswersFileError(f"Answers file {path} must contain a JSON object.")
    return data


def ai_enabled_by_default() -> bool:
    return os.environ.get("CONFIGKIT_AI", "0") == "1"


def run_pipeline(
    raw_answers: Dict[str, Any],
    use_ai: bool = False,
    model: Optional[str] = None,
) -> Tuple[Dict[str, Any], Optional[DecisionTreeResult], Optional[AISections]]:
    """
    Returns: (answers, result, ai_sections)
    result is None while the answers lack a project type.
    """
    answers = normalize_answers(raw_answers)
    result = run_partial_decision_tree(answers)
    if result is None:
        return answers, None, None

    ai_sections = generate_ai_sections(answers, result, model=model) if use_ai else None
    return answers, result, ai_sections


@click.command()
@click.option(
    "--answers", "answers_path",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="JSON file with the questionnaire answers",
)
@click.option(
    "--out", "out_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("outputs"),
    show_default=True,
    help="Directory the bundle is written to",
)
@click.option("--zip/--no-zip", "make_zip", default=False, help="Also write configkit-output.zip")
@click.option("--ai/--no-ai", "use_ai", default=ai_enabled_by_default, help="Generate the creative sections with the LLM")
@click.option("--model", default=None, help="LLM model id (default: CONFIGKIT_MODEL or gpt-4.1-mini)")
@click.option("--print-config", is_flag=True, help="Print the assembled config document to stdout")
@click.option(
    "--result-json",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the decision tree result as JSON",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Optional log file (in addition to stdout)",
)
def main(
    answers_path: Path,
    out_dir: Path,
    make_zip: bool,
    use_ai: bool,
    model: Optional[str],
    print_config: bool,
    result_json: Optional[Path],
    log_file: Optional[Path],
) -> None:
    """ConfigKit: derive an AI-assistant project config from questionnaire answers."""
    setup_logging(level=os.environ.get("LOG_LEVEL", "INFO"), log_file=log_file)

    try:
        raw = load_answers(answers_path)
    except AnswersFileError as e:
        click.echo(f"\nERROR: {e}", err=True)
        sys.exit(1)

    answers, result, ai_sections = run_pipeline(raw, use_ai=use_ai, model=model)
    if result is None:
        click.echo("\nERROR: answers are missing 'projectType'; nothing to generate.", err=True)
        sys.exit(1)

    click.echo(f"\nGuardrail tier:  {result.guardrail_tier} ({result.guardrail_label})")
    click.echo(f"Resolved stack:  {', '.join(map(str, result.resolved_stack)) or '-'}")
    click.echo(f"Skills selected: {result.meta['skill_count']}")
    click.echo(f"Output file:     {result.output_file}")
    if use_ai:
        click.echo(f"AI sections:     {'applied' if ai_sections else 'unavailable, using templates'}")

    if print_config:
        click.echo("\n" + assemble_config(answers, result, ai_sections))

    bundle = build_bundle(answers, result, ai_sections)
    try:
        root = write_bundle_dir(bundle, out_dir)
        click.echo(f"\nBundle written to {root} ({estimate_bundle_size(result)})")
        if make_zip:
            zip_path = write_bundle_zip(bundle, out_dir / f"{bundle.root}.zip")
            click.echo(f"Zip archive written to {zip_path}")
        if result_json is not None:
            write_result_json(result, result_json)
            click.echo(f"Decision tree result written to {result_json}")
    except (BundleError, OSError) as e:
        click.echo(f"\nERROR: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
