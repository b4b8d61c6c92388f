"""Tests for stack resolution and the role builder."""

import pytest

from configkit.role import build_role, build_role_components, join_natural
from configkit.stack import RECOMMENDED_STACKS, resolve_stack
from configkit.answers import ProjectType


class TestResolveStack:
    @pytest.mark.parametrize("project_type", [pt for pt in RECOMMENDED_STACKS])
    def test_recommend_replaces_user_selection(self, project_type):
        answers = {
            "projectType": project_type.value,
            "stackApproach": "recommend",
            "stackTech": ["go", "java"],
        }
        assert resolve_stack(answers) == [t.value for t in RECOMMENDED_STACKS[project_type]]

    def test_recommend_unknown_type_falls_back_to_node(self):
        assert resolve_stack({"projectType": "spaceship", "stackApproach": "recommend"}) == ["nodejs"]

    def test_choose_returns_selection_in_order(self):
        answers = {"stackApproach": "choose", "stackTech": ["postgres", "react"]}
        assert resolve_stack(answers) == ["postgres", "react"]

    def test_choose_without_list_is_empty(self):
        assert resolve_stack({"stackApproach": "choose", "stackTech": "react"}) == []
        assert resolve_stack({}) == []

    def test_returns_a_copy(self):
        chosen = ["react"]
        resolve_stack({"stackTech": chosen}).append("vue")
        assert chosen == ["react"]


class TestJoinNatural:
    def test_joins(self):
        assert join_natural([]) == ""
        assert join_natural(["A"]) == "A"
        assert join_natural(["A", "B"]) == "A and B"
        assert join_natural(["A", "B", "C"]) == "A, B, and C"


class TestBuildRole:
    def test_full_sentence(self):
        answers = {
            "projectType": "web-app",
            "stackTech": ["react", "nodejs", "postgres"],
            "hasAuth": "yes",
            "hasPayments": "yes",
        }
        assert build_role(answers) == (
            "You are a Senior Full-Stack Engineer, specializing in React, Node.js, and PostgreSQL, "
            "with deep expertise in secure authentication and session management and "
            "PCI-DSS-aware payment integration patterns."
        )

    def test_clauses_omitted_when_empty(self):
        assert build_role({"projectType": "cli-tool"}) == "You are a Senior Backend Engineer and Systems Developer."

    def test_unknown_type_and_unmapped_stack_ids(self):
        role = build_role({"projectType": "spaceship", "stackTech": ["cobol", "go"]})
        assert role == "You are a Senior Software Engineer, specializing in Go."

    def test_stores_data_has_no_specialization(self):
        components = build_role_components({"projectType": "other", "storesData": "yes"})
        assert components.sec_specs == []

    def test_security_specs_follow_flag_order(self):
        components = build_role_components(
            {"projectType": "other", "hasSensitiveData": "yes", "hasAuth": "yes"}
        )
        assert components.sec_specs == [
            "secure authentication and session management",
            "sensitive data handling and privacy-first architecture",
        ]

    def test_description_appended_as_project_paragraph(self):
        role = build_role({"projectType": "other", "projectDescription": "  A todo app.  "})
        assert role.endswith(".\n\n**Project:** A todo app.")

    def test_blank_description_ignored(self):
        assert "**Project:**" not in build_role({"projectType": "other", "projectDescription": "   "})

    def test_components_match_full(self):
        answers = {"projectType": "data-pipeline", "stackApproach": "recommend"}
        components = build_role_components(answers)
        assert components.base_role == "Senior Data Engineer and Pipeline Architect"
        assert components.stack_specs == ["Python", "PostgreSQL"]
        assert components.full == build_role(answers)

    def test_does_not_mutate_answers(self):
        answers = {"projectType": "web-app", "stackTech": ["react"]}
        snapshot = dict(answers)
        build_role(answers)
        build_role(answers)
        assert answers == snapshot


def test_every_project_type_has_a_recommendation():
    known = [pt for pt in ProjectType if pt is not ProjectType.UNKNOWN]
    assert set(known) == set(RECOMMENDED_STACKS)
