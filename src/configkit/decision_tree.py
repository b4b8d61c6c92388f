# src/configkit/decision_tree.py
"""
Decision tree orchestrator.

Runs the derivation components in dependency order and bundles their output
into one result consumed by the assembler, the preview, and the packager:

1) Guardrails (the tier feeds skill selection and the build sequence)
2) Role and skills (independent of each other)
3) Output filename
4) Resolved stack

Every field is a pure function of the answers: calling this twice on the same
input yields equal results. Nothing is cached between calls.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from configkit.answers import LLM_TARGET, PROJECT_TYPE, AnswerSet, LLMTarget
from configkit.guardrails import determine_guardrails
from configkit.role import RoleResult, build_role_components
from configkit.skills import select
from configkit.stack import resolve_stack

logger = logging.getLogger("configkit.decision_tree")

OUTPUT_FILES: Dict[LLMTarget, str] = {
    LLMTarget.CLAUDE_CODE: "CLAUDE.md",
    LLMTarget.GEMINI_CLI: "GEMINI.txt",
    LLMTarget.CURSOR: ".cursorrules",
    LLMTarget.WINDSURF: ".windsurfrules",
    LLMTarget.OTHER: "PROJECT_CONFIG.md",
}

DEFAULT_OUTPUT_FILE = "PROJECT_CONFIG.md"

# Universal, emitted for every project regardless of answers.
BEHAVIORAL_DIRECTIVES = (
    "Write production-ready code by default; no placeholders, no TODO stubs unless explicitly asked",
    "Prefer editing existing files over creating new ones; avoid file bloat",
    "Read files before modifying them; understand existing patterns before suggesting changes",
    "Use the minimum complexity that satisfies the requirement; resist over-engineering",
    "All clickable elements need cursor-pointer and visible hover feedback",
    "Never skip error handling at system boundaries (user input, external APIs, file I/O)",
    "Ask before taking irreversible or high-blast-radius actions (deleting files, force pushing)",
)


@dataclass(frozen=True)
class DecisionTreeResult:
    role: str
    role_components: RoleResult
    skills: List[str]
    skills_by_track: Dict[str, List[str]]
    guardrail_tier: int
    guardrail_label: str
    guardrail_color: str
    guardrail_instructions: List[str]
    guardrail_by_tier: List[List[str]]
    behavioral_directives: List[str]
    output_file: str
    resolved_stack: List[str]
    meta: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def output_file_for(answers: AnswerSet) -> str:
    target = LLMTarget.coerce(answers.get(LLM_TARGET))
    if target is None:
        return DEFAULT_OUTPUT_FILE
    return OUTPUT_FILES.get(target, DEFAULT_OUTPUT_FILE)


def run_decision_tree(answers: AnswerSet) -> DecisionTreeResult:
    guardrails = determine_guardrails(answers)

    role_components = build_role_components(answers)
    selection = select(answers, guardrails.tier)

    output_file = output_file_for(answers)
    resolved_stack = resolve_stack(answers)

    by_track = selection.by_track
    meta = {
        "skill_count": len(selection.skills),
        "core_skills": len(by_track["core"]),
        "stack_skills": len(by_track["stack"]),
        "guardrail_skills": len(by_track["guardrail"]),
        "deploy_skills": len(by_track["deployment"]),
        "guardrail_tier": guardrails.tier,
    }

    logger.debug(
        "decision_tree tier=%s skills=%d output_file=%s",
        guardrails.tier,
        len(selection.skills),
        output_file,
    )

    return DecisionTreeResult(
        role=role_components.full,
        role_components=role_components,
        skills=selection.skills,
        skills_by_track=by_track,
        guardrail_tier=guardrails.tier,
        guardrail_label=guardrails.label,
        guardrail_color=guardrails.color,
        guardrail_instructions=guardrails.instructions,
        guardrail_by_tier=guardrails.by_tier,
        behavioral_directives=list(BEHAVIORAL_DIRECTIVES),
        output_file=output_file,
        resolved_stack=resolved_stack,
        meta=meta,
    )


def run_partial_decision_tree(answers: AnswerSet) -> Optional[DecisionTreeResult]:
    """
    Safe to call on every input change while the questionnaire is in progress.
    Returns None (not ready) until a project type has been answered.
    """
    project_type = answers.get(PROJECT_TYPE)
    if not project_type or (isinstance(project_type, str) and not project_type.strip()):
        return None
    return run_decision_tree(answers)
