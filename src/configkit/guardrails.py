# src/configkit/guardrails.py
"""
Guardrail engine (deterministic).

Purpose:
- Compute the security tier (0-3) from the four security flags.
- Return the additive instruction set for that tier.

Tier rules:
- Tier 3: hasPayments or hasSensitiveData is "yes" (checked first, wins over the count rule)
- Tier 2: two or more flags are "yes"
- Tier 1: at least one flag is "yes"
- Tier 0: baseline, always applied

Tiers are additive: the instructions for tier N are buckets 0..N concatenated in order.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from configkit.answers import (
    HAS_PAYMENTS,
    HAS_SENSITIVE_DATA,
    SECURITY_FLAG_IDS,
    AnswerSet,
    is_yes,
)

TIER_INSTRUCTIONS: Tuple[Tuple[str, ...], ...] = (
    # Tier 0: universal baseline
    (
        "Never hardcode credentials, API keys, tokens, or secrets anywhere in source code",
        "Store all configuration and secrets in environment variables; document required vars in .env.example",
        "Implement proper error handling on every async operation; no silent failures or swallowed exceptions",
        "Never log sensitive data (tokens, passwords, personal info) to the console or log files",
    ),
    # Tier 1: any user-facing surface
    (
        "Validate and sanitise all user-supplied input before processing or persisting it",
        "Never store sensitive data in localStorage, sessionStorage, or client-side cookies without encryption",
        "Enforce HTTPS for all network communication; reject plain HTTP in production",
        "Apply basic rate limiting to all public-facing API endpoints",
    ),
    # Tier 2: auth and data in play
    (
        "Use httpOnly, Secure, SameSite cookies for session tokens; never expose tokens to JavaScript",
        "Implement token rotation and short expiry windows; handle refresh token revocation",
        "Define an explicit CORS policy; never use wildcard (*) origins in production",
        "Apply parameterised queries or an ORM throughout; never concatenate user input into SQL",
        "Escape all output rendered to HTML to prevent XSS; use a Content Security Policy header",
    ),
    # Tier 3: payments and/or sensitive personal data
    (
        "Encrypt sensitive fields at rest (use AES-256 or equivalent); never store plaintext PII or payment data",
        "Implement audit logging for all data access and mutations to sensitive records",
        "Apply principle of least privilege to all database roles and service accounts",
        "Never log, cache, or transmit raw PII, payment card data, or health records",
        "Enforce strict secret rotation practices with documented rotation schedules",
    ),
)

TIER_LABELS = ("BASELINE", "ELEVATED", "HARDENED", "MAXIMUM")

TIER_COLORS = ("comment", "yellow", "orange", "red")

MAX_TIER = len(TIER_INSTRUCTIONS) - 1


@dataclass(frozen=True)
class GuardrailResult:
    tier: int
    label: str
    color: str
    instructions: List[str]
    by_tier: List[List[str]]
    yes_count: int


def count_security_yes(answers: AnswerSet) -> int:
    return sum(1 for flag in SECURITY_FLAG_IDS if is_yes(answers, flag))


def determine_tier(answers: AnswerSet) -> int:
    """Numeric guardrail tier (0-3). Total over any answer set."""
    # Escalation runs before the count rule: three flags including payments is tier 3, not 2.
    if is_yes(answers, HAS_PAYMENTS) or is_yes(answers, HAS_SENSITIVE_DATA):
        return 3

    yes_count = count_security_yes(answers)
    if yes_count >= 2:
        return 2
    if yes_count >= 1:
        return 1
    return 0


def instructions_for_tier(tier: int) -> List[str]:
    """Flat additive instruction list for tiers 0..tier."""
    tier = max(0, min(tier, MAX_TIER))
    return [line for bucket in TIER_INSTRUCTIONS[: tier + 1] for line in bucket]


def determine_guardrails(answers: AnswerSet) -> GuardrailResult:
    tier = determine_tier(answers)
    return GuardrailResult(
        tier=tier,
        label=TIER_LABELS[tier],
        color=TIER_COLORS[tier],
        instructions=instructions_for_tier(tier),
        by_tier=[list(bucket) for bucket in TIER_INSTRUCTIONS[: tier + 1]],
        yes_count=count_security_yes(answers),
    )
