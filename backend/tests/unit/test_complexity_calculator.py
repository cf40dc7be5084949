"""
Unit tests for ComplexityCalculator.

Tests tier classification per axis, modifiers, coarse factors,
explanations and agreement between the basic and enhanced results.
"""

import pytest

from clonescope.skills.complexity_calculator import (
    ComplexityCalculator,
    ComplexityLevel,
    ComplexityResult,
    EnhancedComplexityResult,
    TierRule,
    calculate_complexity,
    calculate_enhanced_complexity,
)


@pytest.fixture
def calculator():
    return ComplexityCalculator()


class TestReferenceScenarios:
    """Tests for the canonical stacks."""

    def test_no_code_stack_clamps_to_one(self, calculator, make_techs):
        """Webflow alone scores 0 on every axis and clamps to 1."""
        result = calculator.calculate_enhanced_complexity(make_techs("Webflow"))

        assert result.breakdown.frontend.score == 0
        assert result.score == 1
        assert "no-code" in result.explanation
        assert result.factors.custom_code is False
        assert result.factors.framework_complexity == ComplexityLevel.LOW

    def test_react_and_node(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("React", "Node.js"))

        assert result.breakdown.frontend.score == 2
        assert result.breakdown.backend.score == 3
        assert result.breakdown.infrastructure.score == 0
        assert result.score == 5
        assert result.factors.framework_complexity == ComplexityLevel.HIGH
        assert result.factors.custom_code is True

    def test_enterprise_stack_reaches_maximum(self, calculator, make_techs):
        """Angular + Django + Kubernetes: 3 + 4 + 3 = 10."""
        result = calculator.calculate_enhanced_complexity(make_techs("Angular", "Django", "Kubernetes"))

        assert result.breakdown.frontend.score == 3
        assert result.breakdown.backend.score == 4
        assert result.breakdown.infrastructure.score == 3
        assert result.score == 10
        assert result.factors.infrastructure_complexity == ComplexityLevel.HIGH

    def test_commercial_license_adds_one(self, calculator, make_techs):
        alone = calculator.calculate_enhanced_complexity(make_techs("Oracle"))
        with_react = calculator.calculate_enhanced_complexity(make_techs("React", "Oracle"))

        assert alone.factors.licensing_complexity is True
        assert alone.score == 1
        assert with_react.score == 3
        assert "licens" in with_react.explanation.lower()


class TestTierOverlap:
    """Tests pinning which tier wins when names overlap."""

    def test_react_native_is_modern_framework(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("React Native"))
        assert result.breakdown.frontend.score == 2

    @pytest.mark.parametrize("name", ["Next.js 13.4.1", "react 18.2.0", "VUE.JS"])
    def test_versioned_and_cased_names_match(self, calculator, make_techs, name):
        result = calculator.calculate_enhanced_complexity(make_techs(name))
        assert result.breakdown.frontend.score == 2

    def test_highest_tier_wins(self, calculator, make_techs):
        """A static generator next to a complex framework scores as the complex one."""
        result = calculator.calculate_enhanced_complexity(make_techs("Gatsby", "Angular"))
        assert result.breakdown.frontend.score == 3

    def test_docker_is_backend_tooling_not_orchestration(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("Docker"))

        assert result.breakdown.backend.score == 4
        assert result.breakdown.infrastructure.score == 0
        assert result.factors.infrastructure_complexity == ComplexityLevel.HIGH

    def test_aws_lambda_counts_on_two_axes(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("AWS Lambda"))

        assert result.breakdown.backend.score == 1
        assert result.breakdown.infrastructure.score == 2
        assert result.factors.infrastructure_complexity == ComplexityLevel.MEDIUM

    def test_express_below_node(self, calculator, make_techs):
        assert calculator.calculate_enhanced_complexity(make_techs("Express")).breakdown.backend.score == 2
        assert calculator.calculate_enhanced_complexity(make_techs("Express", "Node.js")).breakdown.backend.score == 3

    def test_paas_hosting(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("Vercel"))
        assert result.breakdown.infrastructure.score == 1

    def test_bucket_lists_matching_technologies(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("Gatsby", "Angular", "Stripe"))

        assert result.breakdown.frontend.technologies == ["Gatsby", "Angular"]
        assert result.breakdown.frontend.max == 3
        assert result.breakdown.backend.max == 4
        assert result.breakdown.infrastructure.max == 3


class TestFactors:
    """Tests for the coarse factor classification."""

    def test_angular_alone_keeps_low_framework_complexity(self, calculator, make_techs):
        """Only the modern tier feeds framework_complexity, so Angular alone stays LOW."""
        result = calculator.calculate_enhanced_complexity(make_techs("Angular"))

        assert result.breakdown.frontend.score == 3
        assert result.factors.framework_complexity == ComplexityLevel.LOW
        assert result.factors.custom_code is True

    def test_no_code_with_modern_framework_needs_custom_code(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("Webflow", "React"))

        assert result.factors.custom_code is True
        assert result.factors.framework_complexity == ComplexityLevel.LOW

    def test_modern_frontend_without_backend(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("Svelte"))
        assert result.factors.framework_complexity == ComplexityLevel.MEDIUM

    def test_technology_count_factor(self, calculator, make_techs):
        result = calculator.calculate_enhanced_complexity(make_techs("React", "Unknown A", "Unknown B"))
        assert result.factors.technology_count == 3


class TestModifiers:
    """Tests for count modifiers and clamping."""

    def test_empty_input_clamps_to_one(self, calculator):
        result = calculator.calculate_enhanced_complexity([])

        assert result.score == 1
        assert result.breakdown.base_score == 0
        assert result.explanation

    def test_more_than_ten_technologies_adds_one(self, calculator, make_techs):
        names = ["React"] + [f"Widget {i}" for i in range(10)]
        result = calculator.calculate_enhanced_complexity(make_techs(*names))

        assert result.factors.technology_count == 11
        assert result.score == 3

    def test_exactly_ten_technologies_adds_nothing(self, calculator, make_techs):
        names = ["React"] + [f"Widget {i}" for i in range(9)]
        assert calculator.calculate_enhanced_complexity(make_techs(*names)).score == 2

    def test_more_than_twenty_technologies_adds_two(self, calculator, make_techs):
        names = ["React"] + [f"Widget {i}" for i in range(20)]
        result = calculator.calculate_enhanced_complexity(make_techs(*names))

        assert result.score == 4
        assert "21" in result.explanation

    def test_score_never_exceeds_ten(self, calculator, make_techs):
        names = ["Angular", "Kubernetes", "Oracle", "AWS"] + [f"Widget {i}" for i in range(25)]
        assert calculator.calculate_enhanced_complexity(make_techs(*names)).score == 10


class TestExplanation:
    """Tests for the human-readable explanation."""

    def test_low_tier_sentence(self, calculator, make_techs):
        explanation = calculator.calculate_enhanced_complexity(make_techs("Hugo")).explanation
        assert "low-complexity" in explanation
        assert "easy to clone" in explanation

    def test_moderate_tier_sentence(self, calculator, make_techs):
        explanation = calculator.calculate_enhanced_complexity(make_techs("React", "Node.js")).explanation
        assert "moderate-complexity" in explanation
        assert "solid development skills" in explanation

    def test_high_tier_sentence(self, calculator, make_techs):
        explanation = calculator.calculate_enhanced_complexity(make_techs("Angular", "Kubernetes")).explanation
        assert "high-complexity" in explanation
        assert "challenging" in explanation

    def test_explanation_names_winning_technologies(self, calculator, make_techs):
        explanation = calculator.calculate_enhanced_complexity(make_techs("React", "Django", "Heroku")).explanation
        assert "React" in explanation
        assert "Django" in explanation
        assert "Heroku" in explanation


STACKS = [
    [],
    ["Webflow"],
    ["React", "Node.js"],
    ["Angular"],
    ["Angular", "Django", "Kubernetes"],
    ["Oracle", "Spring Boot", "AWS"],
    ["Gatsby", "Netlify", "Contentful"],
    [f"Tool {i}" for i in range(30)],
]


class TestLegacyAgreement:
    """Tests that the basic result is derived from the enhanced one."""

    @pytest.mark.parametrize("names", STACKS)
    def test_basic_and_enhanced_agree(self, calculator, make_techs, names):
        techs = make_techs(*names)
        basic = calculator.calculate_complexity(techs)
        enhanced = calculator.calculate_enhanced_complexity(techs)

        assert type(basic) is ComplexityResult
        assert basic.score == enhanced.score
        assert basic.factors == enhanced.factors

    @pytest.mark.parametrize("names", STACKS)
    def test_score_within_bounds(self, make_techs, names):
        result = calculate_enhanced_complexity(make_techs(*names))

        assert isinstance(result, EnhancedComplexityResult)
        assert 1 <= result.score <= 10
        assert 1 <= calculate_complexity(make_techs(*names)).score <= 10


class TestCustomRules:
    """Tests for injecting custom rule tables."""

    def test_custom_frontend_rules(self, make_techs):
        from clonescope.skills.complexity_calculator import AXIS_RULES, Axis

        rules = dict(AXIS_RULES)
        rules[Axis.FRONTEND] = [TierRule(tier=3, label="complex framework", patterns=["Elm"])]
        calculator = ComplexityCalculator(axis_rules=rules)

        assert calculator.calculate_enhanced_complexity(make_techs("Elm")).breakdown.frontend.score == 3
        assert calculator.calculate_enhanced_complexity(make_techs("React")).breakdown.frontend.score == 0
