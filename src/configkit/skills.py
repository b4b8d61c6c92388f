# src/configkit/skills.py
"""
Skill selection (deterministic, five tracks).

Purpose:
- Compute the ordered, deduplicated list of skill ids for an answer set.
- One skill id maps to one SKILL.md document in the output bundle.

Tracks, applied in this fixed order into a single accumulator:
1) Core        - by project type
2) Stack       - by each resolved technology, in stack order
3) Guardrail   - by tier AND the flag that caused the escalation
4) Description - keyword inference over the free-text description
5) Deployment  - by deployment target

Design principles:
- First occurrence wins position; an id never appears twice (OrderedSkillSet).
- The grouped view is a display partition from SKILL_METADATA and never re-sorts the flat list.
- Unknown ids are tolerated: anything missing from the metadata groups as "core".
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, NamedTuple, Optional, Tuple

from configkit.answers import (
    DEPLOYMENT,
    HAS_AUTH,
    HAS_PAYMENTS,
    HAS_SENSITIVE_DATA,
    AnswerSet,
    Deployment,
    ProjectType,
    StackTech,
    get_description,
    is_yes,
    project_type_of,
)
from configkit.stack import resolve_stack

TRACKS = ("core", "stack", "guardrail", "deployment")
DEFAULT_TRACK = "core"

# Track 1
PROJECT_TYPE_SKILLS: Dict[ProjectType, Tuple[str, ...]] = {
    ProjectType.WEB_APP: ("building-web-apps", "structuring-components", "integrating-apis"),
    ProjectType.CLI_TOOL: ("building-cli-tools", "handling-io-streams", "error-handling-patterns"),
    ProjectType.API_BACKEND: ("designing-rest-apis", "request-validation", "api-error-handling"),
    ProjectType.DATA_PIPELINE: ("building-data-pipelines", "transformation-logic", "idempotency-patterns"),
    ProjectType.BOT: ("building-cli-tools", "handling-io-streams", "error-handling-patterns"),
    ProjectType.MOBILE_APP: ("building-web-apps", "structuring-components", "integrating-apis"),
    ProjectType.OTHER: ("error-handling-patterns", "integrating-apis"),
}

# Track 2
STACK_SKILLS: Dict[StackTech, Tuple[str, ...]] = {
    StackTech.REACT: ("managing-react-state", "structuring-react-components"),
    StackTech.NEXTJS: ("nextjs-routing-patterns", "ssr-and-data-fetching"),
    StackTech.VUE: ("managing-vue-state", "structuring-vue-components"),
    StackTech.SVELTE: ("svelte-component-patterns",),
    StackTech.NODEJS: ("nodejs-async-patterns", "express-middleware"),
    StackTech.PYTHON: ("python-project-structure", "dependency-management"),
    StackTech.GO: ("go-project-structure", "go-concurrency-patterns"),
    StackTech.JAVA: ("java-project-structure", "spring-patterns"),
    StackTech.POSTGRES: ("database-query-patterns", "migration-management"),
    StackTech.MYSQL: ("database-query-patterns", "migration-management"),
    StackTech.MONGODB: ("mongodb-schema-patterns", "aggregation-pipeline"),
    StackTech.REDIS: ("redis-caching-patterns",),
    StackTech.DOCKER: ("containerisation-patterns",),
    StackTech.STRIPE: ("stripe-integration-patterns",),
    StackTech.SUPABASE: ("supabase-patterns",),
    StackTech.PRISMA: ("prisma-schema-patterns",),
}

# Track 3
VALIDATION_SKILL = "validating-user-input"
AUTH_SKILL = "implementing-auth-patterns"
CORS_SKILL = "managing-cors-policy"
SECRETS_SKILL = "managing-secrets-and-env"
PAYMENT_SECURITY_SKILL = "handling-payment-security"
ENCRYPTION_SKILL = "data-encryption-patterns"

# CORS only matters where a browser talks to the service.
WEB_FACING_TYPES = frozenset({ProjectType.WEB_APP, ProjectType.API_BACKEND, ProjectType.MOBILE_APP})

# Track 4. Order is significant; every entry fires independently.
DESCRIPTION_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("payment", "stripe", "checkout", "billing", "subscription", "purchase"), "stripe-integration-patterns"),
    (("cache", "caching", "redis"), "redis-caching-patterns"),
    (("supabase",), "supabase-patterns"),
    (("prisma", " orm"), "prisma-schema-patterns"),
    (("docker", "container", "kubernetes", "k8s"), "containerisation-patterns"),
    (("auth", "login", "jwt", "oauth", "sso", "sign in", "sign up"), AUTH_SKILL),
    (("real-time", "realtime", "live update", "websocket"), "redis-caching-patterns"),
    (("secret", "api key", "credential", ".env"), SECRETS_SKILL),
    (("encrypt", "encryption", "at rest"), ENCRYPTION_SKILL),
    (("mongodb", "mongo"), "mongodb-schema-patterns"),
)

# Track 5. Local-only and undecided targets load nothing.
DEPLOYMENT_SKILLS: Dict[Deployment, Tuple[str, ...]] = {
    Deployment.VERCEL: ("deploying-to-vercel",),
    Deployment.AWS: ("deploying-to-aws",),
    Deployment.GCP: ("deploying-to-gcp",),
    Deployment.LOCAL_ONLY: (),
    Deployment.NOT_SURE: (),
}


class SkillMeta(NamedTuple):
    label: str
    track: str


SKILL_METADATA: Dict[str, SkillMeta] = {
    # Web
    "building-web-apps": SkillMeta("Building Web Apps", "core"),
    "structuring-components": SkillMeta("Structuring Components", "core"),
    "integrating-apis": SkillMeta("Integrating APIs", "core"),
    # CLI
    "building-cli-tools": SkillMeta("Building CLI Tools", "core"),
    "handling-io-streams": SkillMeta("Handling IO Streams", "core"),
    "error-handling-patterns": SkillMeta("Error Handling", "core"),
    # API
    "designing-rest-apis": SkillMeta("Designing REST APIs", "core"),
    "request-validation": SkillMeta("Request Validation", "core"),
    "api-error-handling": SkillMeta("API Error Handling", "core"),
    # Data
    "building-data-pipelines": SkillMeta("Building Data Pipelines", "core"),
    "transformation-logic": SkillMeta("Transformation Logic", "core"),
    "idempotency-patterns": SkillMeta("Idempotency Patterns", "core"),
    # React / Next
    "managing-react-state": SkillMeta("React State", "stack"),
    "structuring-react-components": SkillMeta("React Components", "stack"),
    "nextjs-routing-patterns": SkillMeta("Next.js Routing", "stack"),
    "ssr-and-data-fetching": SkillMeta("SSR & Data Fetching", "stack"),
    # Vue / Svelte
    "managing-vue-state": SkillMeta("Vue State", "stack"),
    "structuring-vue-components": SkillMeta("Vue Components", "stack"),
    "svelte-component-patterns": SkillMeta("Svelte Patterns", "stack"),
    # Runtimes
    "nodejs-async-patterns": SkillMeta("Node.js Async", "stack"),
    "express-middleware": SkillMeta("Express Middleware", "stack"),
    "python-project-structure": SkillMeta("Python Structure", "stack"),
    "dependency-management": SkillMeta("Dependency Management", "stack"),
    "go-project-structure": SkillMeta("Go Structure", "stack"),
    "go-concurrency-patterns": SkillMeta("Go Concurrency", "stack"),
    "java-project-structure": SkillMeta("Java Structure", "stack"),
    "spring-patterns": SkillMeta("Spring Patterns", "stack"),
    # Databases
    "database-query-patterns": SkillMeta("Query Patterns", "stack"),
    "migration-management": SkillMeta("DB Migrations", "stack"),
    "mongodb-schema-patterns": SkillMeta("MongoDB Schemas", "stack"),
    "aggregation-pipeline": SkillMeta("Aggregation Pipeline", "stack"),
    "redis-caching-patterns": SkillMeta("Redis Caching", "stack"),
    "prisma-schema-patterns": SkillMeta("Prisma Schema", "stack"),
    "supabase-patterns": SkillMeta("Supabase", "stack"),
    # Infrastructure
    "containerisation-patterns": SkillMeta("Containerisation", "stack"),
    "stripe-integration-patterns": SkillMeta("Stripe Integration", "stack"),
    # Guardrail
    VALIDATION_SKILL: SkillMeta("Input Validation", "guardrail"),
    AUTH_SKILL: SkillMeta("Auth Patterns", "guardrail"),
    CORS_SKILL: SkillMeta("CORS Policy", "guardrail"),
    SECRETS_SKILL: SkillMeta("Secrets & Env", "guardrail"),
    PAYMENT_SECURITY_SKILL: SkillMeta("Payment Security", "guardrail"),
    ENCRYPTION_SKILL: SkillMeta("Data Encryption", "guardrail"),
    # Deployment
    "deploying-to-vercel": SkillMeta("Deploy → Vercel", "deployment"),
    "deploying-to-aws": SkillMeta("Deploy → AWS", "deployment"),
    "deploying-to-gcp": SkillMeta("Deploy → GCP", "deployment"),
}


class OrderedSkillSet:
    """Insertion-ordered set of skill ids. Re-adding an id is a no-op."""

    def __init__(self, initial: Iterable[str] = ()):
        self._seen: set = set()
        self._items: List[str] = []
        self.extend(initial)

    def add(self, skill_id: str) -> bool:
        if skill_id in self._seen:
            return False
        self._seen.add(skill_id)
        self._items.append(skill_id)
        return True

    def extend(self, skill_ids: Iterable[str]) -> "OrderedSkillSet":
        for skill_id in skill_ids:
            self.add(skill_id)
        return self

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._seen

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def to_list(self) -> List[str]:
        return list(self._items)


@dataclass(frozen=True)
class SkillSelection:
    skills: List[str]
    by_track: Dict[str, List[str]]


def skill_track(skill_id: str) -> str:
    meta = SKILL_METADATA.get(skill_id)
    return meta.track if meta else DEFAULT_TRACK


def core_skills(answers: AnswerSet) -> Tuple[str, ...]:
    return PROJECT_TYPE_SKILLS.get(project_type_of(answers), ())


def stack_skills(stack: List[str]) -> Iterator[str]:
    for tech_id in stack:
        tech = StackTech.coerce(tech_id)
        if tech is None:
            continue
        yield from STACK_SKILLS.get(tech, ())


def guardrail_skills(answers: AnswerSet, tier: int) -> List[str]:
    """
    Tier alone over-selects, so each tier-gated skill also needs the flag
    (or project shape) that makes it relevant.
    """
    out: List[str] = []
    if tier >= 1:
        out.append(VALIDATION_SKILL)
    if tier >= 2:
        if is_yes(answers, HAS_AUTH):
            out.append(AUTH_SKILL)
        if project_type_of(answers) in WEB_FACING_TYPES:
            out.append(CORS_SKILL)
    if tier >= 3:
        out.append(SECRETS_SKILL)
        if is_yes(answers, HAS_PAYMENTS):
            out.append(PAYMENT_SECURITY_SKILL)
        if is_yes(answers, HAS_SENSITIVE_DATA):
            out.append(ENCRYPTION_SKILL)
    return out


def select_from_description(description: Optional[str]) -> List[str]:
    """Case-insensitive substring scan of the description against DESCRIPTION_KEYWORDS."""
    if not description:
        return []
    lower = description.lower()
    return [skill for keywords, skill in DESCRIPTION_KEYWORDS if any(kw in lower for kw in keywords)]


def deployment_skills(answers: AnswerSet) -> Tuple[str, ...]:
    target = Deployment.coerce(answers.get(DEPLOYMENT))
    if target is None:
        return ()
    return DEPLOYMENT_SKILLS.get(target, ())


def select_skills(answers: AnswerSet, tier: int = 0) -> List[str]:
    """Ordered, deduplicated skill ids for the answers and guardrail tier."""
    acc = OrderedSkillSet()
    acc.extend(core_skills(answers))
    acc.extend(stack_skills(resolve_stack(answers)))
    acc.extend(guardrail_skills(answers, tier))
    acc.extend(select_from_description(get_description(answers)))
    acc.extend(deployment_skills(answers))
    return acc.to_list()


def group_by_track(skills: Iterable[str]) -> Dict[str, List[str]]:
    groups: Dict[str, List[str]] = {track: [] for track in TRACKS}
    for skill_id in skills:
        groups.setdefault(skill_track(skill_id), []).append(skill_id)
    return groups


def select_skills_by_track(answers: AnswerSet, tier: int = 0) -> Dict[str, List[str]]:
    return group_by_track(select_skills(answers, tier))


def select(answers: AnswerSet, tier: int = 0) -> SkillSelection:
    skills = select_skills(answers, tier)
    return SkillSelection(skills=skills, by_track=group_by_track(skills))
