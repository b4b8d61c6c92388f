"""Tests for the decision tree orchestrator."""

import json

import pytest

from configkit.decision_tree import (
    BEHAVIORAL_DIRECTIVES,
    run_decision_tree,
    run_partial_decision_tree,
)


class TestRunDecisionTree:
    def test_api_backend_scenario(self, api_backend_answers):
        result = run_decision_tree(api_backend_answers)
        assert result.guardrail_tier == 1
        assert result.guardrail_label == "ELEVATED"
        assert result.guardrail_color == "yellow"
        assert result.output_file == "CLAUDE.md"
        assert result.resolved_stack == ["nodejs", "postgres"]
        assert result.role == result.role_components.full
        assert result.behavioral_directives == list(BEHAVIORAL_DIRECTIVES)

    def test_meta_counts(self, api_backend_answers):
        result = run_decision_tree(api_backend_answers)
        assert result.meta == {
            "skill_count": 9,
            "core_skills": 3,
            "stack_skills": 4,
            "guardrail_skills": 1,
            "deploy_skills": 1,
            "guardrail_tier": 1,
        }

    def test_referentially_transparent(self, make_answers):
        answers = make_answers(
            projectType="web-app",
            stackApproach="recommend",
            hasSensitiveData="yes",
            projectDescription="Patient portal with login",
            deployment="gcp",
        )
        assert run_decision_tree(answers) == run_decision_tree(answers)

    def test_payments_only_scenario(self, make_answers):
        result = run_decision_tree(make_answers(hasPayments="yes"))
        assert result.guardrail_tier == 3
        assert len(result.guardrail_instructions) == 18

    @pytest.mark.parametrize(
        "target,expected",
        [
            ("claude-code", "CLAUDE.md"),
            ("gemini-cli", "GEMINI.txt"),
            ("cursor", ".cursorrules"),
            ("windsurf", ".windsurfrules"),
            ("other", "PROJECT_CONFIG.md"),
            ("copilot", "PROJECT_CONFIG.md"),
            (None, "PROJECT_CONFIG.md"),
        ],
    )
    def test_output_file(self, make_answers, target, expected):
        assert run_decision_tree(make_answers(llmTarget=target)).output_file == expected

    def test_to_dict_is_json_serialisable(self, api_backend_answers):
        data = run_decision_tree(api_backend_answers).to_dict()
        assert json.loads(json.dumps(data))["role_components"]["base_role"] == (
            "Senior Backend Engineer and API Architect"
        )

    def test_never_raises_on_garbage(self):
        result = run_decision_tree({"projectType": 7, "stackTech": {"a": 1}, "deployment": []})
        assert result.skills == []
        assert result.guardrail_tier == 0


class TestPartialDecisionTree:
    def test_none_until_project_type(self):
        assert run_partial_decision_tree({}) is None
        assert run_partial_decision_tree({"projectType": ""}) is None
        assert run_partial_decision_tree({"projectType": "   "}) is None

    def test_runs_once_project_type_present(self):
        result = run_partial_decision_tree({"projectType": "cli-tool"})
        assert result is not None
        assert result.skills[0] == "building-cli-tools"
