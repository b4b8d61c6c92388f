# src/configkit/answers.py
"""
Answer model (input contract).

Purpose:
- Name every questionnaire id the derivation engine reads.
- Provide closed enums for the string-tagged answers so the rule tables
  can be keyed by known values instead of raw strings.
- Normalize a raw answer mapping so the four security flags always resolve
  to "yes"/"no" before the guardrail engine runs.

Design principles:
- Read-only: nothing here mutates the caller's mapping, every helper returns a new dict.
- Fallback-on-unknown: coercion never raises, unrecognized values map to a documented default.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

AnswerSet = Mapping[str, Any]

# Question ids
LLM_TARGET = "llmTarget"
PROJECT_TYPE = "projectType"
STACK_APPROACH = "stackApproach"
STACK_TECH = "stackTech"
DEPLOYMENT = "deployment"
PROJECT_DESCRIPTION = "projectDescription"
SECURITY_FLAGS = "securityFlags"

HAS_AUTH = "hasAuth"
STORES_DATA = "storesData"
HAS_PAYMENTS = "hasPayments"
HAS_SENSITIVE_DATA = "hasSensitiveData"

# Declaration order matters: role specializations follow it.
SECURITY_FLAG_IDS = (HAS_AUTH, STORES_DATA, HAS_PAYMENTS, HAS_SENSITIVE_DATA)

YES = "yes"
NO = "no"


class _Coercible(str, Enum):
    @classmethod
    def coerce(cls, value: Any):
        """Return the member for value, or None when it is not a known option."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


class ProjectType(_Coercible):
    WEB_APP = "web-app"
    CLI_TOOL = "cli-tool"
    API_BACKEND = "api-backend"
    DATA_PIPELINE = "data-pipeline"
    BOT = "discord-slack-bot"
    MOBILE_APP = "mobile-app"
    OTHER = "other"
    # Missing or unrecognized answer. Not an option the questionnaire offers.
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value: Any) -> "ProjectType":
        member = super().coerce(value)
        return member if member is not None else cls.UNKNOWN


class StackApproach(_Coercible):
    CHOOSE = "choose"
    RECOMMEND = "recommend"


class StackTech(_Coercible):
    REACT = "react"
    NEXTJS = "nextjs"
    VUE = "vue"
    SVELTE = "svelte"
    NODEJS = "nodejs"
    PYTHON = "python"
    GO = "go"
    JAVA = "java"
    POSTGRES = "postgres"
    MYSQL = "mysql"
    MONGODB = "mongodb"
    REDIS = "redis"
    DOCKER = "docker"
    STRIPE = "stripe"
    SUPABASE = "supabase"
    PRISMA = "prisma"


class Deployment(_Coercible):
    VERCEL = "vercel"
    AWS = "aws"
    GCP = "gcp"
    LOCAL_ONLY = "local-only"
    NOT_SURE = "not-sure"


class LLMTarget(_Coercible):
    CLAUDE_CODE = "claude-code"
    GEMINI_CLI = "gemini-cli"
    CURSOR = "cursor"
    WINDSURF = "windsurf"
    OTHER = "other"


def is_yes(answers: AnswerSet, flag: str) -> bool:
    # Anything other than an explicit "yes" (including a missing key) counts as "no".
    return answers.get(flag) == YES


def get_description(answers: AnswerSet) -> str:
    """Return the trimmed free-text description, or "" when absent or not text."""
    value = answers.get(PROJECT_DESCRIPTION)
    if not isinstance(value, str):
        return ""
    return value.strip()


def project_type_of(answers: AnswerSet) -> ProjectType:
    return ProjectType.coerce(answers.get(PROJECT_TYPE))


def _flags_from_selection(selection: Any) -> Dict[str, str]:
    selected: List[str] = list(selection) if isinstance(selection, (list, tuple, set)) else []
    return {flag: (YES if flag in selected else NO) for flag in SECURITY_FLAG_IDS}


def normalize_answers(raw: Optional[AnswerSet]) -> Dict[str, Any]:
    """
    Return a copy of raw with the four security flags resolved to "yes"/"no".

    - Flags default to "no" when unanswered.
    - If the securityFlags multi-select is present it is authoritative:
      each flag becomes "yes" iff it is listed.
    - Flag values other than "yes" are normalized to "no".
    """
    out: Dict[str, Any] = dict(raw or {})

    if SECURITY_FLAGS in out:
        out.update(_flags_from_selection(out[SECURITY_FLAGS]))
        return out

    for flag in SECURITY_FLAG_IDS:
        out[flag] = YES if out.get(flag) == YES else NO
    return out


def with_answer(answers: AnswerSet, question_id: str, value: Any) -> Dict[str, Any]:
    """
    Pure incremental update used by interactive callers on every input change.
    Setting securityFlags re-derives the individual flag answers.
    """
    nxt = dict(answers)
    nxt[question_id] = value
    if question_id == SECURITY_FLAGS:
        nxt.update(_flags_from_selection(value))
    return nxt
