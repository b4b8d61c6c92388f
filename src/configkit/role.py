# src/configkit/role.py
"""
Role builder.

Output format:
  "You are a {base role}, specializing in {stack}, with deep expertise in {security}."

Clauses with nothing to list are dropped entirely. A project description,
when given, is appended as a labeled paragraph so the assistant is anchored
to the specific project rather than a generic one.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence

from configkit.answers import (
    HAS_AUTH,
    HAS_PAYMENTS,
    HAS_SENSITIVE_DATA,
    AnswerSet,
    ProjectType,
    get_description,
    is_yes,
    project_type_of,
)
from configkit.stack import resolve_stack, stack_label

BASE_ROLES: Dict[ProjectType, str] = {
    ProjectType.WEB_APP: "Senior Full-Stack Engineer",
    ProjectType.CLI_TOOL: "Senior Backend Engineer and Systems Developer",
    ProjectType.API_BACKEND: "Senior Backend Engineer and API Architect",
    ProjectType.DATA_PIPELINE: "Senior Data Engineer and Pipeline Architect",
    ProjectType.BOT: "Senior Backend Engineer and Bot Developer",
    ProjectType.MOBILE_APP: "Senior Mobile Engineer",
    ProjectType.OTHER: "Senior Software Engineer",
}

DEFAULT_BASE_ROLE = "Senior Software Engineer"

# storesData has no specialization of its own; order follows flag declaration.
SECURITY_SPECS = (
    (HAS_AUTH, "secure authentication and session management"),
    (HAS_PAYMENTS, "PCI-DSS-aware payment integration patterns"),
    (HAS_SENSITIVE_DATA, "sensitive data handling and privacy-first architecture"),
)


@dataclass(frozen=True)
class RoleResult:
    base_role: str
    stack_specs: List[str]
    sec_specs: List[str]
    full: str


def join_natural(items: Sequence[str]) -> str:
    """
    ["React"] -> "React"
    ["React", "Go"] -> "React and Go"
    ["React", "Node.js", "PostgreSQL"] -> "React, Node.js, and PostgreSQL"
    """
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    if len(items) == 2:
        return f"{items[0]} and {items[1]}"
    return f"{', '.join(items[:-1])}, and {items[-1]}"


def base_role_for(answers: AnswerSet) -> str:
    return BASE_ROLES.get(project_type_of(answers), DEFAULT_BASE_ROLE)


def build_stack_specs(answers: AnswerSet) -> List[str]:
    # Unmapped ids are dropped silently.
    labels = (stack_label(t) for t in resolve_stack(answers))
    return [label for label in labels if label]


def build_security_specs(answers: AnswerSet) -> List[str]:
    return [phrase for flag, phrase in SECURITY_SPECS if is_yes(answers, flag)]


def _compose(base_role: str, stack_specs: List[str], sec_specs: List[str], description: str) -> str:
    parts = [f"You are a {base_role}"]
    if stack_specs:
        parts.append(f"specializing in {join_natural(stack_specs)}")
    if sec_specs:
        parts.append(f"with deep expertise in {join_natural(sec_specs)}")

    role = ", ".join(parts) + "."
    if description:
        role += f"\n\n**Project:** {description}"
    return role


def build_role(answers: AnswerSet) -> str:
    return build_role_components(answers).full


def build_role_components(answers: AnswerSet) -> RoleResult:
    """Role sentence plus the parts it was built from (for preview panels)."""
    base_role = base_role_for(answers)
    stack_specs = build_stack_specs(answers)
    sec_specs = build_security_specs(answers)
    return RoleResult(
        base_role=base_role,
        stack_specs=stack_specs,
        sec_specs=sec_specs,
        full=_compose(base_role, stack_specs, sec_specs, get_description(answers)),
    )
