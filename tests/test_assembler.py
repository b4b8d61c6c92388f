"""Tests for the config document assembler."""

from datetime import date

import pytest

from configkit.assembler import DIVIDER, assemble_config, assemble_config_sections
from configkit.decision_tree import run_decision_tree
from configkit.schema import AISections

PINNED = date(2026, 1, 15)

SECTION_HEADINGS = [
    "## Role",
    "## Project Context",
    "## Tech Stack",
    "## Behavioral Directives",
    "## Security Guardrails",
    "## Skill Packs Loaded",
    "## Build Sequence",
]


@pytest.fixture
def answers(api_backend_answers):
    return dict(api_backend_answers, projectDescription="Billing API for a SaaS product.")


@pytest.fixture
def result(answers):
    return run_decision_tree(answers)


class TestAssembleConfig:
    def test_header_and_section_order(self, answers, result):
        parts = assemble_config(answers, result, generated_on=PINNED).split(DIVIDER)
        assert parts[0] == (
            "<!-- Generated by ConfigKit -->\n"
            "<!-- 2026-01-15 | CLAUDE.md | Guardrail Tier 1: ELEVATED -->"
        )
        assert len(parts) == 8
        for part, heading in zip(parts[1:], SECTION_HEADINGS):
            assert part.startswith(heading)

    def test_deterministic_with_pinned_date(self, answers, result):
        assert assemble_config(answers, result, generated_on=PINNED) == assemble_config(
            answers, run_decision_tree(answers), generated_on=PINNED
        )

    def test_ai_marker_only_when_an_override_applies(self, answers, result):
        doc = assemble_config(answers, result, {"role": "Custom role."}, generated_on=PINNED)
        assert "| AI-Enhanced -->" in doc.split(DIVIDER)[0]
        blank = assemble_config(answers, result, {"role": "  "}, generated_on=PINNED)
        assert "AI-Enhanced" not in blank


class TestSections:
    def test_role_override_leaves_deterministic_sections(self, answers, result):
        templated = assemble_config_sections(answers, result)
        overridden = assemble_config_sections(answers, result, {"role": "You are the billing lead."})
        assert overridden["role"] == "## Role\n\nYou are the billing lead."
        for key in ("context", "techStack", "directives", "guardrails", "skillPacks", "buildSeq"):
            assert overridden[key] == templated[key]

    def test_all_four_overrides(self, answers, result):
        ai = AISections(role="R", context="C", directives="- D", buildSeq="1. B")
        sections = assemble_config_sections(answers, result, ai)
        assert sections["role"] == "## Role\n\nR"
        assert sections["context"] == "## Project Context\n\nC"
        assert sections["directives"] == "## Behavioral Directives\n\n- D"
        assert sections["buildSeq"] == "## Build Sequence\n\n1. B"

    def test_extra_override_keys_are_ignored(self, answers, result):
        templated = assemble_config_sections(answers, result)
        sections = assemble_config_sections(answers, result, {"guardrails": "none!", "techStack": "x"})
        assert sections == templated

    def test_override_text_is_kept_verbatim(self, answers, result):
        role = "  You are the billing lead.\n\n"
        sections = assemble_config_sections(answers, result, {"role": role})
        assert sections["role"] == "## Role\n\n" + role

    def test_python_field_name_is_not_an_override_key(self, answers, result):
        templated = assemble_config_sections(answers, result)
        sections = assemble_config_sections(answers, result, {"build_seq": "1. x"})
        assert sections["buildSeq"] == templated["buildSeq"]
        assert "AI-Enhanced" not in assemble_config(answers, result, {"build_seq": "1. x"}, generated_on=PINNED)

    def test_project_context(self, answers, result):
        context = assemble_config_sections(answers, result)["context"]
        assert context == (
            "## Project Context\n\n"
            "Billing API for a SaaS product.\n\n"
            "- **Type:** API / Backend Service\n"
            "- **Deployment:** AWS"
        )

    def test_project_context_without_description_or_deployment(self):
        answers = {"projectType": "spaceship"}
        context = assemble_config_sections(answers, run_decision_tree(answers))["context"]
        assert "_No description provided._" in context
        assert "- **Type:** Software Project" in context
        assert "Deployment" not in context

    def test_tech_stack_labels_and_raw_fallback(self):
        answers = {"projectType": "other", "stackTech": ["postgres", "elixir"]}
        stack = assemble_config_sections(answers, run_decision_tree(answers))["techStack"]
        assert stack == "## Tech Stack\n\n- PostgreSQL\n- elixir"

    def test_tech_stack_recommend_note(self):
        answers = {"projectType": "mobile-app", "stackApproach": "recommend"}
        stack = assemble_config_sections(answers, run_decision_tree(answers))["techStack"]
        assert stack.startswith("## Tech Stack\n\n- React")
        assert stack.endswith("> Stack was auto-selected by ConfigKit based on project type.")

    def test_empty_stack_placeholder(self):
        answers = {"projectType": "other"}
        stack = assemble_config_sections(answers, run_decision_tree(answers))["techStack"]
        assert stack == "## Tech Stack\n\n_Stack to be determined._"

    def test_guardrails_section(self, answers, result):
        guardrails = assemble_config_sections(answers, result)["guardrails"]
        lines = guardrails.split("\n")
        assert lines[0] == "## Security Guardrails (Tier 1: ELEVATED)"
        assert lines[2:] == [f"- {i}" for i in result.guardrail_instructions]

    def test_skill_packs_section(self, answers, result):
        packs = assemble_config_sections(answers, result)["skillPacks"]
        assert "- skills/designing-rest-apis/SKILL.md" in packs
        assert packs.count("\n- ") == len(result.skills)

    def test_skill_packs_placeholder(self):
        answers = {"projectType": "spaceship"}
        packs = assemble_config_sections(answers, run_decision_tree(answers))["skillPacks"]
        assert packs == "## Skill Packs Loaded\n\n_No skill packs selected._"

    def test_build_sequence_numbered(self, answers, result):
        seq = assemble_config_sections(answers, result)["buildSeq"]
        assert seq.startswith("## Build Sequence\n\nApproach this project in the following order:\n\n1. ")
        assert "\n10. " in seq
