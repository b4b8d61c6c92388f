# src/configkit/build_sequence.py
"""
Build sequence generator (deterministic).

Produces the ordered list of steps that tells the assistant how to approach
the project from scratch:

1) Scaffold      - by project type, then by detected sub-stack
2) Structure     - by project type (web apps: only with a UI framework)
3) Data layer    - only when a database, ORM, or BaaS is in the stack
4) Middle steps  - project-type phrases, then auth flow, then payment flow
5) Security pass - only from tier 1 up, composed from the applicable concerns
6) Testing       - always
7) Deployment    - unless the project is local-only

Omitted steps shift the numbering; the rendered list never has gaps.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from configkit.answers import (
    DEPLOYMENT,
    HAS_AUTH,
    HAS_PAYMENTS,
    AnswerSet,
    Deployment,
    ProjectType,
    StackTech,
    is_yes,
    project_type_of,
)
from configkit.stack import has_any, resolve_stack

logger = logging.getLogger("configkit.build_sequence")

TESTING_STEP = (
    "Write unit tests for all business logic and integration tests for external boundaries "
    "before marking any feature complete"
)


def build_scaffold_step(project_type: ProjectType, stack: List[str]) -> str:
    has_react = has_any(stack, StackTech.REACT)
    has_nextjs = has_any(stack, StackTech.NEXTJS)
    has_node = has_any(stack, StackTech.NODEJS)
    has_python = has_any(stack, StackTech.PYTHON)
    has_go = has_any(stack, StackTech.GO)

    if project_type is ProjectType.WEB_APP:
        if has_nextjs:
            return ("Scaffold the project with `npx create-next-app@latest` using the App Router; "
                    "configure TypeScript, ESLint, and Tailwind at setup")
        if has_react:
            return ("Scaffold the project with `npm create vite@latest` (React + TypeScript template); "
                    "set up ESLint, Prettier, and path aliases immediately")
        return ("Scaffold the frontend project; configure the build tool, linter, and code formatter "
                "before writing any feature code")

    if project_type is ProjectType.API_BACKEND:
        if has_node:
            return ("Initialise the Node.js project (`npm init`); install Express/Fastify, set up TypeScript, "
                    "and configure the project structure (routes/, controllers/, services/, middleware/)")
        if has_python:
            return ("Create a Python virtual environment; install FastAPI/Flask with uvicorn; set up "
                    "pyproject.toml and the package structure (api/, services/, models/)")
        if has_go:
            return ("Initialise the Go module (`go mod init`); create the cmd/ and internal/ directory "
                    "structure; set up the main entry point and dependency injection wiring")
        return ("Scaffold the API project; establish the directory structure and dependency management "
                "before any route implementation")

    if project_type is ProjectType.CLI_TOOL:
        if has_node:
            return ("Initialise the Node.js project; install commander or yargs; set up the bin/ entry point "
                    "and src/ module structure")
        if has_python:
            return ("Set up the Python project with pyproject.toml; install Click or Typer; configure the "
                    "package entry point and src/ layout")
        return "Scaffold the CLI project; set up the build system and entry point configuration"

    if project_type is ProjectType.DATA_PIPELINE:
        if has_python:
            return ("Set up the Python project with pyproject.toml; install pipeline dependencies "
                    "(pandas, SQLAlchemy, etc.); create the pipeline/, transformers/, and connectors/ "
                    "directory structure")
        return ("Scaffold the data pipeline project; set up the runtime, dependency management, and stage "
                "directory structure")

    if project_type is ProjectType.BOT:
        if has_node:
            return ("Initialise the Node.js project; install the bot SDK (discord.js / @slack/bolt); set up "
                    "the commands/, events/, and middleware/ directory structure")
        return "Scaffold the bot project; install the platform SDK and set up the event handler structure"

    if project_type is ProjectType.MOBILE_APP:
        return ("Scaffold the project with the appropriate CLI (Expo, React Native CLI, or Flutter); "
                "configure the development environment and emulator targets")

    # other / unknown
    return ("Scaffold the project; configure the build system, linter, and directory structure before "
            "writing any feature code")


def build_structure_step(project_type: ProjectType, stack: List[str]) -> str:
    if project_type is ProjectType.WEB_APP and has_any(stack, StackTech.REACT, StackTech.NEXTJS):
        return ("Build the design system foundation first: global CSS variables/tokens, base layout "
                "components (Navbar, Footer, Page), and the reusable UI primitive components (Button, Card, "
                "Input) before any feature pages")
    if project_type is ProjectType.API_BACKEND:
        return ("Define the data models and API contract (OpenAPI spec or TypeScript interfaces) before "
                "implementing any routes; this contract is the source of truth for all subsequent work")
    if project_type is ProjectType.DATA_PIPELINE:
        return ("Define the source and target schemas as typed interfaces/dataclasses before implementing "
                "any transformation logic; document the expected data shape at each pipeline stage")
    return ("Define the core data models and module boundaries before implementing any features; establish "
            "naming conventions and file organisation patterns the whole codebase will follow")


def needs_data_layer(stack: List[str]) -> bool:
    return has_any(
        stack,
        StackTech.POSTGRES,
        StackTech.MYSQL,
        StackTech.MONGODB,
        StackTech.PRISMA,
        StackTech.SUPABASE,
    )


def build_data_layer_step(stack: List[str]) -> str:
    # First match wins: ORM, then BaaS, then document DB, then the generic relational step.
    if has_any(stack, StackTech.PRISMA):
        return ("Define the Prisma schema (prisma/schema.prisma) with all models, relations, and indexes; "
                "run `prisma migrate dev` to create the initial migration; implement the singleton Prisma "
                "client module")
    if has_any(stack, StackTech.SUPABASE):
        return ("Set up the Supabase project; enable Row Level Security on every table immediately; define "
                "RLS policies for each operation (SELECT, INSERT, UPDATE, DELETE) before writing any queries")
    if has_any(stack, StackTech.MONGODB):
        return ("Define Mongoose schemas with validation rules and indexes for every collection; create a "
                "database connection singleton; add indexes for all query fields before any data operations")
    return ("Set up the database connection and ORM; define the initial schema migration; verify the "
            "connection and run the first migration before building any data access logic")


def build_middle_steps(project_type: ProjectType, answers: AnswerSet, stack: List[str]) -> List[str]:
    steps: List[str] = []

    if project_type is ProjectType.WEB_APP:
        if has_any(stack, StackTech.NEXTJS):
            steps.append("Build the route structure with App Router layouts; implement loading.jsx and "
                         "error.jsx for every data-fetching route before adding content")
            steps.append("Build each page as a Server Component by default; only add \"use client\" to "
                         "components that require interactivity or browser APIs")
        elif has_any(stack, StackTech.REACT):
            steps.append("Set up the router and implement the page shell components with placeholder content; "
                         "verify navigation works before building page content")
            steps.append("Implement the data fetching layer (service modules or React Query); connect to real "
                         "data before polishing UI")
        steps.append("Build all user-facing features; implement loading states, error states, and empty states "
                     "for every async operation")

    elif project_type is ProjectType.API_BACKEND:
        steps.append("Implement the route structure with placeholder handlers; verify the server starts and all "
                     "routes respond with 200 before adding logic")
        steps.append("Build each feature from the data layer up: repository → service → controller; test each "
                     "layer independently")
        steps.append("Implement request validation middleware (Zod/Joi/Pydantic) before wiring any handler to "
                     "real business logic")

    elif project_type is ProjectType.DATA_PIPELINE:
        steps.append("Build and test each pipeline stage independently with a small sample dataset before "
                     "chaining them")
        steps.append("Implement idempotency checks and checkpointing; running the pipeline twice must produce "
                     "the same result")
        steps.append("Add structured logging and metrics (records processed, failed, duration) to every stage")

    elif project_type is ProjectType.CLI_TOOL:
        steps.append("Implement the command surface (argument parsing, help text, --version) before any "
                     "business logic")
        steps.append("Build the core logic as pure, testable functions; connect them to the CLI layer only "
                     "after unit tests pass")

    elif project_type is ProjectType.BOT:
        steps.append("Register commands and verify the bot connects and responds to a basic ping before "
                     "implementing any handlers")
        steps.append("Implement each command handler in isolation; test with the bot in a private test server "
                     "channel")

    # mobile-app, other and unknown have no type-specific middle steps.

    if is_yes(answers, HAS_AUTH):
        steps.append("Implement the authentication flow (registration, login, session management) and route "
                     "protection middleware before building any authenticated features")
    if is_yes(answers, HAS_PAYMENTS):
        steps.append("Integrate the payment provider in test mode first; implement and test the complete payment "
                     "flow (create session → confirm → webhook → fulfil) end-to-end before writing any UI for it")

    return steps


def build_security_step(answers: AnswerSet, tier: int) -> str:
    items = ["input validation on all user-facing fields"]
    if is_yes(answers, HAS_AUTH):
        items.append("auth middleware protecting all authenticated routes")
    if tier >= 2:
        items.append("CORS policy configuration and security headers (Helmet/equivalents)")
    if tier >= 3:
        items.append("secrets audit (no hardcoded values), encryption for sensitive fields")
    return f"Security hardening pass: verify {', '.join(items)}; run a dependency audit before deploying"


def build_deploy_step(deployment: Optional[Deployment]) -> str:
    if deployment is Deployment.VERCEL:
        return ("Connect the repository to Vercel; configure environment variables in the Vercel dashboard; "
                "verify the Preview deployment for the main branch before enabling production")
    if deployment is Deployment.AWS:
        return ("Define infrastructure as code (CDK or Terraform); deploy to a staging environment first; "
                "verify health checks pass before routing production traffic")
    if deployment is Deployment.GCP:
        return ("Build and push the container image to Artifact Registry; deploy to Cloud Run with the correct "
                "service account and Secret Manager bindings; verify the health endpoint before going live")
    return ("Configure the deployment pipeline; deploy to a staging environment first and verify all critical "
            "paths before production")


def build_sequence(answers: AnswerSet, tier: int) -> List[str]:
    """Ordered build steps (unnumbered) for the answers and guardrail tier."""
    stack = resolve_stack(answers)
    project_type = project_type_of(answers)

    steps: List[str] = [
        build_scaffold_step(project_type, stack),
        build_structure_step(project_type, stack),
    ]
    if needs_data_layer(stack):
        steps.append(build_data_layer_step(stack))

    steps.extend(build_middle_steps(project_type, answers, stack))

    if tier >= 1:
        steps.append(build_security_step(answers, tier))

    steps.append(TESTING_STEP)

    # No deployment answer means no deploy step; an unrecognized one gets the generic step.
    raw_deployment = answers.get(DEPLOYMENT)
    deployment = Deployment.coerce(raw_deployment)
    if raw_deployment and deployment is not Deployment.LOCAL_ONLY:
        steps.append(build_deploy_step(deployment))

    logger.debug("build_sequence type=%s tier=%s steps=%d", project_type.value, tier, len(steps))
    return steps


def render_build_sequence(steps: List[str]) -> str:
    return "\n".join(f"{i}. {step}" for i, step in enumerate(steps, start=1))
