# src/configkit/skill_docs.py
"""
Skill documents (SKILL.md content).

Each selected skill id materializes as one document in the output bundle.
The content library is keyed by skill id; ids without an entry get a generic
document derived from the id, so selection never has to check the library.

Document format:
  front matter (name, description), title, When to use, Workflow,
  Instructions, Anti-patterns
"""
from __future__ import annotations

from typing import Dict, List, NamedTuple, Sequence


class SkillDoc(NamedTuple):
    description: str
    title: str
    when_to_use: List[str]
    workflow: List[str]
    instructions: List[str]
    anti_patterns: List[str]


def render_skill(
    name: str,
    description: str,
    title: str,
    when_to_use: Sequence[str],
    workflow: Sequence[str],
    instructions: Sequence[str],
    anti_patterns: Sequence[str],
) -> str:
    def bullets(items: Sequence[str]) -> str:
        return "\n".join(f"- {x}" for x in items)

    numbered = "\n".join(f"{i}. {step}" for i, step in enumerate(workflow, start=1))
    return (
        f"---\nname: {name}\ndescription: {description}\n---\n\n"
        f"# {title}\n\n"
        f"## When to use this skill\n{bullets(when_to_use)}\n\n"
        f"## Workflow\n{numbered}\n\n"
        f"## Instructions\n{bullets(instructions)}\n\n"
        f"## Anti-patterns\n{bullets(anti_patterns)}"
    )


# Guardrail skills: the ones the tier logic can select on its own.
SKILL_LIBRARY: Dict[str, SkillDoc] = {
    "validating-user-input": SkillDoc(
        "Use when implementing validation for any user-supplied data: form fields, API parameters, "
        "file uploads, URL parameters, or query strings. Must run before any data is processed or persisted.",
        "Validating User Input",
        [
            "Before processing any data submitted by a user",
            "Adding a new form field or API parameter",
            "Implementing a public endpoint that accepts input",
        ],
        [
            "Define the schema using a validation library (Zod, Joi, Yup, or Pydantic)",
            "Validate at the boundary, the first point where external data enters the system",
            "Return field-level error messages: which field, what the constraint is, what was received",
            "Sanitise after validation: trim strings, normalise case, strip HTML where appropriate",
            "Log validation failures with the field names but never the field values",
        ],
        [
            "Treat all user input as untrusted regardless of source (form, API, webhooks, query params)",
            "Use allowlist validation (permit known-good values) over denylist validation",
            "Never pass unsanitised user input to a database query, shell command, or HTML output",
        ],
        [
            "Checking only the presence of required fields and skipping format validation",
            "Trusting client-side validation as the only safeguard",
            "Validating after the data has already been used in a query or stored",
        ],
    ),
    "implementing-auth-patterns": SkillDoc(
        "Use when implementing authentication, authorisation, session management, or token handling.",
        "Implementing Auth Patterns",
        [
            "Adding a login, registration, or session management flow",
            "Protecting routes or API endpoints with authentication",
            "Managing JWTs, refresh tokens, or session tokens",
        ],
        [
            "Choose the auth strategy: JWT (stateless) or session tokens (stateful, server-managed)",
            "Store session tokens in httpOnly, Secure, SameSite=Strict cookies, never in localStorage",
            "Implement token rotation: short-lived access tokens plus long-lived refresh tokens",
            "Invalidate all sessions on password change and on suspicious activity",
            "Rate-limit authentication endpoints",
        ],
        [
            "Hash passwords with bcrypt (work factor 12 or more) or Argon2id",
            "Never log passwords, tokens, or session IDs",
            "Check resource ownership on every request",
            "Use a battle-tested auth library rather than rolling your own",
        ],
        [
            "Storing JWT tokens in localStorage",
            "Trusting user-supplied user IDs without verifying them against the session",
            "Hiding endpoints instead of enforcing access control",
        ],
    ),
    "managing-cors-policy": SkillDoc(
        "Use when configuring CORS for an API or web server that is accessed from a browser.",
        "Managing CORS Policy",
        [
            "Configuring CORS for a web API",
            "Debugging a CORS error in development",
        ],
        [
            "Define an explicit ALLOWED_ORIGINS list from environment variables",
            "Apply different CORS policies for development and production environments",
            "Specify allowed headers, exposed headers, and methods explicitly",
            "Test CORS in a real browser",
        ],
        [
            "Never use a wildcard origin in production if the API handles authentication or user data",
            "Restrict allowed methods to only those the API actually uses",
            "Use a CORS middleware library instead of setting Access-Control headers manually",
        ],
        [
            "Wildcard origin combined with credentials",
            "Relying on CORS as a security boundary for server-to-server calls",
        ],
    ),
    "managing-secrets-and-env": SkillDoc(
        "Use when handling environment variables, secrets, API keys, or sensitive configuration.",
        "Managing Secrets & Environment Variables",
        [
            "Adding a new API key, token, or secret to a project",
            "Setting up environment configuration for a new environment",
            "Reviewing code for potential credential leaks before committing",
        ],
        [
            "Document all required secrets in .env.example with descriptions but no real values",
            "Use a secrets manager for production instead of .env files",
            "Add .env and .env.*.local to .gitignore on project creation",
            "Rotate any secret that was committed to source control",
        ],
        [
            "Separate secrets by environment; dev, staging, and production get different values",
            "Never log environment variable values at startup or in error messages",
            "Validate that all required variables are present at startup, not at first use",
        ],
        [
            "Hardcoding secrets or API keys anywhere in source code",
            "Using the production secret key in local development",
        ],
    ),
    "handling-payment-security": SkillDoc(
        "Use whenever implementing payment flows, handling financial data, or integrating with payment processors.",
        "Handling Payment Security",
        [
            "Implementing any payment, billing, or checkout feature",
            "Handling refunds, disputes, or subscription changes",
        ],
        [
            "Never handle raw card data; use a PCI-compliant processor and its hosted fields",
            "Compute all prices and amounts server-side",
            "Verify webhook signatures before processing any payment event",
            "Make all payment-related operations idempotent (idempotency keys)",
        ],
        [
            "Store only the processor's customer and payment method IDs, not card details",
            "Audit-log all payment state changes with timestamps and user IDs",
            "Test declined cards, network failures, webhook replay, and refunds",
        ],
        [
            "Storing CVV codes",
            "Trusting client-side price calculations for the payment amount",
        ],
    ),
    "data-encryption-patterns": SkillDoc(
        "Use when encrypting sensitive data at rest, implementing field-level encryption, or managing keys.",
        "Data Encryption Patterns",
        [
            "Storing health records, financial data, private messages, or PII",
            "Setting up encryption key management for a production system",
        ],
        [
            "Classify data sensitivity first: encrypt, hash, or store plain",
            "Use AES-256-GCM for symmetric encryption of sensitive fields",
            "Keep encryption keys in a KMS, never next to the encrypted data",
            "Use a unique IV for every encryption operation",
            "Version keys so they can be rotated without downtime",
        ],
        [
            "Hash passwords; do not encrypt them",
            "Use authenticated encryption modes only",
            "Store the key version alongside the ciphertext",
        ],
        [
            "Rolling your own cipher",
            "Using ECB mode or a static IV",
        ],
    ),
}


def title_from_id(skill_id: str) -> str:
    return " ".join(w[:1].upper() + w[1:] for w in skill_id.split("-") if w)


def get_skill_document(skill_id: str) -> str:
    """SKILL.md text for skill_id; unknown ids get a generic document."""
    doc = SKILL_LIBRARY.get(skill_id)
    if doc is not None:
        return render_skill(skill_id, *doc)

    topic = skill_id.replace("-", " ")
    return render_skill(
        skill_id,
        f"Use this skill when working on {topic} related tasks.",
        title_from_id(skill_id),
        [f"Working on a task related to {topic}"],
        [
            "Review the existing code in this area before making changes",
            "Follow established patterns in the codebase",
            "Test your changes thoroughly",
        ],
        [
            "Follow project conventions",
            "Write clean, readable code",
            "Handle errors appropriately",
        ],
        [
            "Introducing patterns inconsistent with the rest of the codebase",
            "Skipping error handling",
        ],
    )
