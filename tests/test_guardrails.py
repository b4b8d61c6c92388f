"""Tests for the guardrail tier engine."""

import itertools

import pytest

from configkit.guardrails import (
    TIER_INSTRUCTIONS,
    count_security_yes,
    determine_guardrails,
    determine_tier,
    instructions_for_tier,
)

FLAGS = ("hasAuth", "storesData", "hasPayments", "hasSensitiveData")


def _answers(*yes_flags):
    return {flag: ("yes" if flag in yes_flags else "no") for flag in FLAGS}


class TestDetermineTier:
    def test_no_flags_is_baseline(self):
        assert determine_tier(_answers()) == 0

    def test_missing_flags_behave_as_no(self):
        assert determine_tier({}) == 0

    @pytest.mark.parametrize("flag", ["hasAuth", "storesData"])
    def test_single_non_escalating_flag_is_tier_1(self, flag):
        assert determine_tier(_answers(flag)) == 1

    def test_two_flags_is_tier_2(self):
        assert determine_tier(_answers("hasAuth", "storesData")) == 2

    def test_escalation_wins_over_count(self):
        # Three flags including payments satisfies both rules; escalation is checked first.
        assert determine_tier(_answers("hasAuth", "storesData", "hasPayments")) == 3

    def test_payments_or_sensitive_data_always_tier_3(self):
        for combo in itertools.product(["yes", "no"], repeat=2):
            for escalator in ("hasPayments", "hasSensitiveData"):
                answers = {"hasAuth": combo[0], "storesData": combo[1], escalator: "yes"}
                assert determine_tier(answers) == 3


class TestInstructions:
    def test_lower_tier_is_prefix_of_higher_tier(self):
        for low, high in itertools.combinations(range(4), 2):
            lo, hi = instructions_for_tier(low), instructions_for_tier(high)
            assert hi[: len(lo)] == lo

    def test_tier_0_is_first_bucket(self):
        assert instructions_for_tier(0) == list(TIER_INSTRUCTIONS[0])

    def test_result_fields_for_payments_only(self):
        result = determine_guardrails(_answers("hasPayments"))
        assert result.tier == 3
        assert result.label == "MAXIMUM"
        assert result.color == "red"
        assert result.yes_count == 1
        assert len(result.instructions) == sum(len(b) for b in TIER_INSTRUCTIONS)
        assert len(result.by_tier) == 4

    def test_by_tier_flattens_to_instructions(self):
        result = determine_guardrails(_answers("hasAuth", "storesData"))
        assert [line for bucket in result.by_tier for line in bucket] == result.instructions
        assert result.label == "HARDENED"


def test_count_security_yes():
    assert count_security_yes(_answers("hasAuth", "hasSensitiveData")) == 2
