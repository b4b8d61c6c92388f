# src/configkit/enhance.py
"""
LLM section generation (optional enhancement stage).

Purpose:
- Ask the model for project-specific versions of the four "creative" sections:
  Role, Project Context, Behavioral Directives, Build Sequence.
- Never touch Tech Stack, Guardrails or Skill Packs: those stay deterministic.

Key guardrails:
- JSON-only output + Pydantic validation (AISections).
- Graceful degradation: any failure here (no credentials, gateway error,
  malformed reply) is logged and turned into None, so the assembler falls back
  to its templates and derivation of the other sections is never blocked.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from openai import OpenAIError
from pydantic import ValidationError

from configkit.answers import (
    DEPLOYMENT,
    HAS_AUTH,
    HAS_PAYMENTS,
    HAS_SENSITIVE_DATA,
    STORES_DATA,
    AnswerSet,
    Deployment,
    get_description,
    is_yes,
    project_type_of,
)
from configkit.assembler import DEPLOYMENT_LABELS, PROJECT_TYPE_LABELS
from configkit.decision_tree import DecisionTreeResult
from configkit.llm import LLMError, chat_json, default_model
from configkit.schema import AISections
from configkit.stack import stack_label

logger = logging.getLogger("configkit.enhance")

ChatFn = Callable[..., Dict[str, Any]]

# System prompt is the policy layer: project-specific content only, strict JSON shape.
SYSTEM_PROMPT = """You write configuration files for AI coding assistants.
Rules:
- Every line must be specific to the described project; no generic advice or platitudes.
- Reference concrete libraries and commands from the given stack.
- Do not restate security guardrails, tech stack or skill lists; those are generated separately.
Return ONLY valid JSON matching the requested schema. No extra text.
"""

SECURITY_CONCERNS = (
    (HAS_AUTH, "User authentication"),
    (STORES_DATA, "Persistent data storage"),
    (HAS_PAYMENTS, "Payment processing"),
    (HAS_SENSITIVE_DATA, "Sensitive data"),
)


def _deployment_text(answers: AnswerSet) -> str:
    raw = answers.get(DEPLOYMENT)
    target = Deployment.coerce(raw)
    if target is not None:
        return DEPLOYMENT_LABELS[target]
    return str(raw) if raw else "Not specified"


def build_prompt(answers: AnswerSet, result: DecisionTreeResult) -> str:
    stack = [stack_label(t) or str(t) for t in result.resolved_stack]
    project_type = project_type_of(answers)
    type_text = PROJECT_TYPE_LABELS.get(project_type) or str(answers.get("projectType") or "Not specified")
    concerns = [label for flag, label in SECURITY_CONCERNS if is_yes(answers, flag)]

    return f"""Generate the project-specific sections of a {result.output_file} config for a coding assistant.

PROJECT:
- description: {get_description(answers) or "Not provided."}
- type: {type_text}
- stack: {", ".join(stack) if stack else "Not specified"}
- deploy: {_deployment_text(answers)}
- security: {", ".join(concerns) if concerns else "None"}
- guardrail tier: {result.guardrail_tier} ({result.guardrail_label})

SCHEMA:
{{
  "role": "2-3 sentences: who the assistant is, what they are building, which stack, what priorities",
  "context": "3-5 sentences: what it does, who uses it, key technical decisions, what success looks like",
  "directives": "8-10 markdown bullets starting with '- ': exact library choices, code organisation, anti-patterns",
  "buildSeq": "6-8 numbered steps from scratch; scaffolding first, testing or deployment last"
}}
"""


def generate_ai_sections(
    answers: AnswerSet,
    result: DecisionTreeResult,
    model: Optional[str] = None,
    chat: ChatFn = chat_json,
) -> Optional[AISections]:
    """
    Returns validated AISections, or None when generation failed or produced
    nothing usable. Never raises for gateway or parsing problems.
    """
    model = model or default_model()
    try:
        raw = chat(
            model=model,
            system=SYSTEM_PROMPT,
            user=build_prompt(answers, result),
            temperature=0.3,
            operation="generate_sections",
        )
        sections = AISections.model_validate(raw)
    except (LLMError, OpenAIError, ValidationError) as e:
        logger.warning("AI section generation failed, using templates: %s", e)
        return None

    if not sections.has_any():
        logger.warning("AI section generation returned no usable sections, using templates")
        return None
    return sections
