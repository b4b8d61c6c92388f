# src/configkit/assembler.py
"""
Config document assembler (deterministic).

Purpose:
- Turn the decision tree result into the final config document (Markdown).
- Keep rendering side-effect free: no network, no LLM calls. Generated text
  only arrives here as an optional override record.

Output structure (fixed order, joined by a horizontal-rule divider):
- header comment (date | output file | guardrail tier [| AI-Enhanced])
- Role                    (overridable)
- Project Context         (overridable)
- Tech Stack              (always deterministic)
- Behavioral Directives   (overridable)
- Security Guardrails     (always deterministic)
- Skill Packs Loaded      (always deterministic)
- Build Sequence          (overridable)
"""
from __future__ import annotations

from datetime import date
from typing import Any, Dict, Mapping, Optional, Union

from configkit.answers import (
    DEPLOYMENT,
    STACK_APPROACH,
    AnswerSet,
    Deployment,
    ProjectType,
    StackApproach,
    get_description,
    project_type_of,
)
from configkit.build_sequence import build_sequence, render_build_sequence
from configkit.decision_tree import DecisionTreeResult
from configkit.schema import OVERRIDE_KEYS, AISections
from configkit.stack import stack_label

DIVIDER = "\n\n---\n\n"

Overrides = Union[AISections, Mapping[str, Any], None]

PROJECT_TYPE_LABELS: Dict[ProjectType, str] = {
    ProjectType.WEB_APP: "Web Application",
    ProjectType.CLI_TOOL: "CLI Tool",
    ProjectType.API_BACKEND: "API / Backend Service",
    ProjectType.DATA_PIPELINE: "Data Pipeline",
    ProjectType.BOT: "Bot (Discord / Slack)",
    ProjectType.MOBILE_APP: "Mobile Application",
    ProjectType.OTHER: "Software Project",
}

DEFAULT_PROJECT_TYPE_LABEL = "Software Project"

DEPLOYMENT_LABELS: Dict[Deployment, str] = {
    Deployment.VERCEL: "Vercel",
    Deployment.AWS: "AWS",
    Deployment.GCP: "GCP",
    Deployment.LOCAL_ONLY: "Local only (not deployed)",
    Deployment.NOT_SURE: "Deployment target TBD",
}


def coerce_overrides(overrides: Overrides) -> Optional[AISections]:
    """Accept an AISections, a plain mapping, or None; unknown keys are ignored."""
    if overrides is None:
        return None
    if isinstance(overrides, AISections):
        return overrides
    return AISections.model_validate({k: v for k, v in overrides.items() if k in OVERRIDE_KEYS})


def _override(ai: Optional[AISections], field: str) -> Optional[str]:
    if ai is None:
        return None
    return getattr(ai, field)


# ---------- Section builders ----------

def section_role(result: DecisionTreeResult) -> str:
    return f"## Role\n\n{result.role}"


def section_project_context(answers: AnswerSet) -> str:
    type_label = PROJECT_TYPE_LABELS.get(project_type_of(answers), DEFAULT_PROJECT_TYPE_LABEL)
    deployment = Deployment.coerce(answers.get(DEPLOYMENT))

    lines = [
        "## Project Context",
        "",
        get_description(answers) or "_No description provided._",
        "",
        f"- **Type:** {type_label}",
    ]
    if deployment is not None:
        lines.append(f"- **Deployment:** {DEPLOYMENT_LABELS[deployment]}")
    return "\n".join(lines)


def section_tech_stack(answers: AnswerSet, result: DecisionTreeResult) -> str:
    stack = result.resolved_stack
    if not stack:
        return "## Tech Stack\n\n_Stack to be determined._"

    # Unknown ids are listed raw rather than dropped.
    lines = "\n".join(f"- {stack_label(t) or t}" for t in stack)
    note = ""
    if StackApproach.coerce(answers.get(STACK_APPROACH)) is StackApproach.RECOMMEND:
        note = "\n\n> Stack was auto-selected by ConfigKit based on project type."
    return f"## Tech Stack\n\n{lines}{note}"


def section_behavioral_directives(result: DecisionTreeResult) -> str:
    lines = "\n".join(f"- {d}" for d in result.behavioral_directives)
    return f"## Behavioral Directives\n\n{lines}"


def section_guardrails(result: DecisionTreeResult) -> str:
    header = f"## Security Guardrails (Tier {result.guardrail_tier}: {result.guardrail_label})"
    lines = "\n".join(f"- {i}" for i in result.guardrail_instructions)
    return f"{header}\n\n{lines}"


def section_skill_packs(result: DecisionTreeResult) -> str:
    if not result.skills:
        return "## Skill Packs Loaded\n\n_No skill packs selected._"
    lines = "\n".join(f"- skills/{s}/SKILL.md" for s in result.skills)
    return f"## Skill Packs Loaded\n\n{lines}"


def section_build_sequence(answers: AnswerSet, result: DecisionTreeResult) -> str:
    steps = render_build_sequence(build_sequence(answers, result.guardrail_tier))
    return f"## Build Sequence\n\nApproach this project in the following order:\n\n{steps}"


def header_comment(result: DecisionTreeResult, generated_on: date, ai_enhanced: bool) -> str:
    marker = " | AI-Enhanced" if ai_enhanced else ""
    return (
        "<!-- Generated by ConfigKit -->\n"
        f"<!-- {generated_on.isoformat()} | {result.output_file} | "
        f"Guardrail Tier {result.guardrail_tier}: {result.guardrail_label}{marker} -->"
    )


# ---------- Assembly ----------

def assemble_config_sections(
    answers: AnswerSet,
    result: DecisionTreeResult,
    overrides: Overrides = None,
) -> Dict[str, str]:
    """
    The seven sections by name, in document order.
    Override text replaces only the body; the heading stays the same.
    """
    ai = coerce_overrides(overrides)

    def pick(text: Optional[str], heading: str, fallback: str) -> str:
        return f"## {heading}\n\n{text}" if text else fallback

    return {
        "role": pick(_override(ai, "role"), "Role", section_role(result)),
        "context": pick(_override(ai, "context"), "Project Context", section_project_context(answers)),
        "techStack": section_tech_stack(answers, result),
        "directives": pick(_override(ai, "directives"), "Behavioral Directives", section_behavioral_directives(result)),
        "guardrails": section_guardrails(result),
        "skillPacks": section_skill_packs(result),
        "buildSeq": pick(_override(ai, "build_seq"), "Build Sequence", section_build_sequence(answers, result)),
    }


def assemble_config(
    answers: AnswerSet,
    result: DecisionTreeResult,
    overrides: Overrides = None,
    generated_on: Optional[date] = None,
) -> str:
    """
    Render the complete config document.

    The header date is the only non-derived input; pass generated_on to pin it.
    """
    ai = coerce_overrides(overrides)
    sections = assemble_config_sections(answers, result, ai)
    header = header_comment(result, generated_on or date.today(), ai is not None and ai.has_any())
    return DIVIDER.join([header, *sections.values()])
