# src/configkit/stack.py
"""
Stack resolution.

The effective technology list is either what the user picked ("choose") or,
in "recommend" mode, a curated list for the project type. In recommend mode
any user selection is ignored entirely.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from configkit.answers import (
    STACK_APPROACH,
    STACK_TECH,
    AnswerSet,
    ProjectType,
    StackApproach,
    StackTech,
    project_type_of,
)

# Human-readable label per technology (also used for the role sentence).
STACK_LABELS: Dict[StackTech, str] = {
    StackTech.REACT: "React",
    StackTech.NEXTJS: "Next.js",
    StackTech.VUE: "Vue",
    StackTech.SVELTE: "Svelte",
    StackTech.NODEJS: "Node.js",
    StackTech.PYTHON: "Python",
    StackTech.GO: "Go",
    StackTech.JAVA: "Java",
    StackTech.POSTGRES: "PostgreSQL",
    StackTech.MYSQL: "MySQL",
    StackTech.MONGODB: "MongoDB",
    StackTech.REDIS: "Redis",
    StackTech.DOCKER: "Docker",
    StackTech.STRIPE: "Stripe",
    StackTech.SUPABASE: "Supabase",
    StackTech.PRISMA: "Prisma ORM",
}

RECOMMENDED_STACKS: Dict[ProjectType, List[StackTech]] = {
    ProjectType.WEB_APP: [StackTech.REACT, StackTech.NEXTJS, StackTech.POSTGRES, StackTech.PRISMA],
    ProjectType.CLI_TOOL: [StackTech.NODEJS, StackTech.PYTHON],
    ProjectType.API_BACKEND: [StackTech.NODEJS, StackTech.POSTGRES],
    ProjectType.DATA_PIPELINE: [StackTech.PYTHON, StackTech.POSTGRES],
    ProjectType.BOT: [StackTech.NODEJS],
    ProjectType.MOBILE_APP: [StackTech.REACT],
    ProjectType.OTHER: [StackTech.NODEJS],
}

DEFAULT_RECOMMENDED_STACK: List[StackTech] = [StackTech.NODEJS]


def resolve_stack(answers: AnswerSet) -> List[str]:
    """
    Return the effective stack as a fresh list of technology ids.
    Never raises: a missing or non-list stackTech resolves to [].
    """
    if StackApproach.coerce(answers.get(STACK_APPROACH)) is StackApproach.RECOMMEND:
        curated = RECOMMENDED_STACKS.get(project_type_of(answers), DEFAULT_RECOMMENDED_STACK)
        return [t.value for t in curated]

    chosen = answers.get(STACK_TECH)
    if not isinstance(chosen, list):
        return []
    return list(chosen)


def stack_label(tech_id: str) -> Optional[str]:
    """Label for a known technology id, None for ids outside the lookup."""
    tech = StackTech.coerce(tech_id)
    if tech is None:
        return None
    return STACK_LABELS.get(tech)


def has_any(stack: List[str], *techs: StackTech) -> bool:
    # Same matching rule as stack_label: ids are coerced, not compared raw.
    return any(StackTech.coerce(t) in techs for t in stack)
