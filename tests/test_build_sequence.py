"""Tests for the build sequence generator."""

from configkit.build_sequence import (
    TESTING_STEP,
    build_data_layer_step,
    build_scaffold_step,
    build_security_step,
    build_sequence,
    render_build_sequence,
)
from configkit.answers import ProjectType
from configkit.decision_tree import run_decision_tree
from configkit.guardrails import determine_tier


def _steps(answers):
    return build_sequence(answers, determine_tier(answers))


class TestScaffoldStep:
    def test_web_app_prefers_nextjs_over_react(self):
        step = build_scaffold_step(ProjectType.WEB_APP, ["react", "nextjs"])
        assert "create-next-app" in step

    def test_web_app_react_uses_vite(self):
        assert "vite" in build_scaffold_step(ProjectType.WEB_APP, ["react"])

    def test_padded_stack_ids_match_like_skills_and_labels(self, make_answers):
        answers = make_answers(projectType="web-app", stackTech=[" react ", "prisma "])
        steps = _steps(answers)
        assert "vite" in steps[0]
        assert any("Prisma" in s for s in steps)
        assert "managing-react-state" in run_decision_tree(answers).skills

    def test_api_backend_sub_stacks(self):
        assert "npm init" in build_scaffold_step(ProjectType.API_BACKEND, ["nodejs", "python"])
        assert "FastAPI" in build_scaffold_step(ProjectType.API_BACKEND, ["python"])
        assert "go mod init" in build_scaffold_step(ProjectType.API_BACKEND, ["go"])
        assert build_scaffold_step(ProjectType.API_BACKEND, []).startswith("Scaffold the API project")

    def test_unknown_type_gets_generic_scaffold(self):
        step = build_scaffold_step(ProjectType.UNKNOWN, ["nextjs"])
        assert step.startswith("Scaffold the project; configure the build system")


class TestDataLayerStep:
    def test_priority_orm_then_baas_then_document_db(self):
        assert "Prisma" in build_data_layer_step(["mongodb", "supabase", "prisma"])
        assert "Supabase" in build_data_layer_step(["mongodb", "supabase"])
        assert "Mongoose" in build_data_layer_step(["mongodb", "postgres"])
        assert build_data_layer_step(["mysql"]).startswith("Set up the database connection and ORM")

    def test_omitted_without_database(self, make_answers):
        steps = _steps(make_answers(stackTech=["nodejs", "redis"]))
        assert not any("migration" in s.lower() and "schema" in s.lower() for s in steps)
        assert len(steps) == 2 + 3 + 1  # scaffold, structure, 3 api steps, testing


class TestSecurityStep:
    def test_tier_1_with_auth(self, make_answers):
        step = build_security_step(make_answers(hasAuth="yes"), 1)
        assert "input validation" in step
        assert "auth middleware" in step
        assert "CORS" not in step
        assert "encryption" not in step

    def test_tier_3_includes_everything_applicable(self, make_answers):
        step = build_security_step(make_answers(hasPayments="yes"), 3)
        assert "CORS policy" in step
        assert "encryption for sensitive fields" in step
        assert "auth middleware" not in step

    def test_absent_at_tier_0(self, make_answers):
        assert not any(s.startswith("Security hardening") for s in _steps(make_answers()))


class TestBuildSequence:
    def test_api_backend_scenario(self, api_backend_answers):
        steps = _steps(api_backend_answers)
        assert "npm init" in steps[0]
        assert steps[1].startswith("Define the data models and API contract")
        assert steps[2].startswith("Set up the database connection")
        assert steps[6].startswith("Implement the authentication flow")
        security = [s for s in steps if s.startswith("Security hardening")]
        assert len(security) == 1
        assert "CORS" not in security[0]
        assert "encryption" not in security[0]
        assert steps[-2] == TESTING_STEP
        assert "staging" in steps[-1] and "CDK or Terraform" in steps[-1]
        assert len(steps) == 10

    def test_auth_step_precedes_payment_step(self, make_answers):
        steps = _steps(make_answers(hasAuth="yes", hasPayments="yes"))
        auth = next(i for i, s in enumerate(steps) if s.startswith("Implement the authentication flow"))
        pay = next(i for i, s in enumerate(steps) if s.startswith("Integrate the payment provider"))
        assert auth < pay

    def test_local_only_has_no_deploy_step(self, make_answers):
        assert _steps(make_answers(deployment="local-only"))[-1] == TESTING_STEP

    def test_missing_deployment_has_no_deploy_step(self, make_answers):
        answers = make_answers()
        answers.pop("deployment")
        assert _steps(answers)[-1] == TESTING_STEP

    def test_not_sure_gets_generic_deploy_step(self, make_answers):
        assert _steps(make_answers(deployment="not-sure"))[-1].startswith("Configure the deployment pipeline")

    def test_web_app_without_ui_framework_uses_generic_structure(self, make_answers):
        steps = _steps(make_answers(projectType="web-app", stackTech=["nodejs"]))
        assert steps[1].startswith("Define the core data models and module boundaries")

    def test_web_app_nextjs_middle_steps(self, make_answers):
        steps = _steps(make_answers(projectType="web-app", stackTech=["nextjs"]))
        assert steps[1].startswith("Build the design system foundation")
        assert steps[2].startswith("Build the route structure with App Router")
        assert steps[4].startswith("Build all user-facing features")

    def test_mobile_app_has_no_type_specific_middle_steps(self, make_answers):
        steps = _steps(make_answers(projectType="mobile-app", deployment="local-only"))
        assert len(steps) == 3


def test_render_numbers_without_gaps():
    assert render_build_sequence(["a", "b", "c"]) == "1. a\n2. b\n3. c"
