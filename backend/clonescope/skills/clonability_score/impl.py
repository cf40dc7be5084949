"""
Clonability Score - Implementation

Weighted clonability scoring with:
- Inverted technical complexity
- Market opportunity from SWOT and competition
- Resource requirements from cost and team estimates
- Time to market from the realistic timeline
- Confidence based on data availability

Author: CloneScope Team
"""

import logging
import math
from typing import Dict, Optional

from clonescope.core.exceptions import ScoringValidationError
from clonescope.core.parsing import (
    extract_development_cost,
    extract_monthly_cost,
    parse_duration_weeks,
    round_half_up,
)
from clonescope.schemas.insights import ProjectEstimates
from clonescope.schemas.market import MarketData

from .definition import (
    ClonabilityComponent,
    ClonabilityComponents,
    ClonabilityRating,
    ClonabilityScore,
)

logger = logging.getLogger(__name__)


# Component weights (must sum to 1.0)
DEFAULT_WEIGHTS: Dict[str, float] = {
    "technical_complexity": 0.4,
    "market_opportunity": 0.3,
    "resource_requirements": 0.2,
    "time_to_market": 0.1,
}

NEUTRAL_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10

# ============================================================================
# MARKET OPPORTUNITY
# ============================================================================

OPPORTUNITY_POINTS, OPPORTUNITY_CAP = 0.5, 2.0
STRENGTH_POINTS, STRENGTH_CAP = 0.3, 1.5
WEAKNESS_POINTS, WEAKNESS_CAP = 0.3, 1.5
THREAT_POINTS, THREAT_CAP = 0.4, 2.0

# ============================================================================
# RESOURCE REQUIREMENTS (upper bound, adjustment)
# ============================================================================

DEVELOPMENT_COST_ADJUSTMENTS = [
    (20_000, 3),
    (50_000, 2),
    (100_000, 0),
    (200_000, -2),
]
DEVELOPMENT_COST_OVER = -3

MONTHLY_COST_ADJUSTMENTS = [
    (100, 1),
    (500, 0),
    (2_000, -1),
]
MONTHLY_COST_OVER = -2

# ============================================================================
# TIME TO MARKET (max weeks, score)
# ============================================================================

TIME_SCORE_BUCKETS = [
    (4, 10),
    (12, 8),
    (24, 6),
    (48, 4),
]
TIME_SCORE_OVER = 2

# ============================================================================
# CONFIDENCE
# ============================================================================

BASE_CONFIDENCE = 0.5
MARKET_DATA_CONFIDENCE = 0.2
DETAILED_SWOT_CONFIDENCE = 0.1
DETAILED_SWOT_MIN_ITEMS = 12
COMPETITOR_CONFIDENCE = 0.1
RESOURCE_ESTIMATE_CONFIDENCE = 0.1

# ============================================================================
# RECOMMENDATIONS
# ============================================================================

WEAK_COMPONENT_THRESHOLD = 4

RECOMMENDATION_EXCELLENT = (
    "Excellent cloning opportunity! This business has low technical complexity, good market "
    "opportunity, and reasonable resource requirements. Start with an MVP to validate the concept quickly."
)
RECOMMENDATION_GOOD = (
    "Good cloning opportunity. The business is feasible to clone with moderate effort. Focus on "
    "building an MVP first and leverage SaaS solutions to reduce complexity."
)
RECOMMENDATION_MODERATE = (
    "Moderate cloning opportunity. This will require significant effort and resources. Consider "
    "starting with a simplified version focusing on core features, and evaluate if you have the "
    "necessary skills and budget."
)
RECOMMENDATION_TECHNICAL = (
    "Challenging opportunity due to high technical complexity. Consider partnering with experienced "
    "developers or finding a simpler business to clone. If you proceed, plan for a longer timeline "
    "and higher costs."
)
RECOMMENDATION_MARKET = (
    "Challenging opportunity due to difficult market conditions. The market may be crowded or have "
    "significant barriers. Consider if you can bring unique value or find a niche angle before proceeding."
)
RECOMMENDATION_CHALLENGING = (
    "Challenging opportunity. This business will require substantial resources, time, and expertise. "
    "Carefully evaluate if you have the necessary commitment before proceeding."
)
RECOMMENDATION_NOT_RECOMMENDED = (
    "Not recommended for cloning. This business has very high complexity, significant resource "
    "requirements, or unfavorable market conditions. Consider finding a simpler opportunity that "
    "better matches your resources and timeline."
)


def _clamp(value: float, low: int = MIN_SCORE, high: int = MAX_SCORE) -> int:
    return max(low, min(high, round_half_up(value)))


class ClonabilityScoreCalculator:
    """
    Weighted clonability calculator.

    Converts a technical complexity score plus business context into a
    1-10 clonability score (10 = easiest to clone).

    Usage:
        calculator = ClonabilityScoreCalculator()
        result = calculator.calculate_clonability(
            complexity_score=3,
            market_data=None,
            resource_estimates=insights.estimates,
        )

        print(f"Score: {result.score}, Rating: {result.rating.value}")

    Raises:
        ScoringValidationError: If the weights do not sum to 1.0 or the
            complexity score is outside 1-10
    """

    def __init__(self, weights: Optional[Dict[str, float]] = None):
        """
        Initialize the Clonability Score Calculator.

        Args:
            weights: Component weights keyed like DEFAULT_WEIGHTS (default: 0.4/0.3/0.2/0.1)
        """
        self.weights = dict(weights if weights is not None else DEFAULT_WEIGHTS)
        self._validate_weights()

    def _validate_weights(self) -> None:
        missing = set(DEFAULT_WEIGHTS) - set(self.weights)
        if missing:
            raise ScoringValidationError(
                f"Missing component weights: {', '.join(sorted(missing))}",
                field="weights",
            )

        unknown = set(self.weights) - set(DEFAULT_WEIGHTS)
        if unknown:
            raise ScoringValidationError(
                f"Unknown component weights: {', '.join(sorted(unknown))}",
                field="weights",
            )

        for name, weight in self.weights.items():
            if not 0 < weight <= 1:
                raise ScoringValidationError(
                    f"Weight must be in (0, 1], got {weight}",
                    field=name,
                )

        total = math.fsum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ScoringValidationError(
                f"Component weights must sum to 1.0, got {total}",
                field="weights",
            )

    def calculate_clonability(
        self,
        complexity_score: int,
        market_data: Optional[MarketData],
        resource_estimates: ProjectEstimates,
    ) -> ClonabilityScore:
        """
        Calculate the clonability score from technical and business factors.

        Args:
            complexity_score: Technical complexity 1-10.
            market_data: Optional SWOT and competitor data.
            resource_estimates: Time, cost and team estimates.

        Returns:
            ClonabilityScore with rating, components, recommendation and confidence.
        """
        tech_score = self.calculate_technical_score(complexity_score)
        market_score = self.calculate_market_score(market_data)
        resource_score = self.calculate_resource_score(resource_estimates)
        time_score = self.calculate_time_score(resource_estimates)

        total = (
            tech_score * self.weights["technical_complexity"]
            + market_score * self.weights["market_opportunity"]
            + resource_score * self.weights["resource_requirements"]
            + time_score * self.weights["time_to_market"]
        )
        final_score = _clamp(total)

        logger.debug(
            f"Clonability {final_score}/10 (tech={tech_score}, market={market_score}, "
            f"resources={resource_score}, time={time_score}, raw={total:.2f})"
        )

        return ClonabilityScore(
            score=final_score,
            rating=self.get_rating(final_score),
            components=ClonabilityComponents(
                technical_complexity=ClonabilityComponent(
                    score=tech_score, weight=self.weights["technical_complexity"]
                ),
                market_opportunity=ClonabilityComponent(
                    score=market_score, weight=self.weights["market_opportunity"]
                ),
                resource_requirements=ClonabilityComponent(
                    score=resource_score, weight=self.weights["resource_requirements"]
                ),
                time_to_market=ClonabilityComponent(
                    score=time_score, weight=self.weights["time_to_market"]
                ),
            ),
            recommendation=self.get_recommendation(final_score, tech_score, market_score),
            confidence=self.calculate_confidence(market_data),
        )

    def calculate_technical_score(self, complexity_score: int) -> int:
        """Invert complexity: 1 (easiest) -> 10, 10 (hardest) -> 1."""
        if not MIN_SCORE <= complexity_score <= MAX_SCORE:
            raise ScoringValidationError(
                f"Complexity score must be between 1 and 10, got {complexity_score}",
                field="complexity_score",
            )
        return 11 - complexity_score

    def calculate_market_score(self, market_data: Optional[MarketData]) -> int:
        """Score market opportunity from SWOT counts and competition. Neutral without data."""
        if market_data is None:
            return NEUTRAL_SCORE

        swot = market_data.swot
        score = float(NEUTRAL_SCORE)

        score += min(len(swot.opportunities) * OPPORTUNITY_POINTS, OPPORTUNITY_CAP)
        score -= min(len(swot.strengths) * STRENGTH_POINTS, STRENGTH_CAP)
        score += min(len(swot.weaknesses) * WEAKNESS_POINTS, WEAKNESS_CAP)
        score -= min(len(swot.threats) * THREAT_POINTS, THREAT_CAP)
        score += self._competition_adjustment(len(market_data.competitors))

        return _clamp(score)

    @staticmethod
    def _competition_adjustment(competitor_count: int) -> int:
        if competitor_count == 0:
            return 2   # blue ocean
        if competitor_count <= 3:
            return 1
        if competitor_count <= 5:
            return 0
        return -1      # crowded market

    def calculate_resource_score(self, estimates: ProjectEstimates) -> int:
        """Score resource requirements from development cost, monthly cost and team size."""
        score = NEUTRAL_SCORE

        dev_cost = extract_development_cost(estimates.cost_estimate.development)
        score += _bucket_adjustment(dev_cost, DEVELOPMENT_COST_ADJUSTMENTS, DEVELOPMENT_COST_OVER)

        monthly_cost = extract_monthly_cost(estimates.cost_estimate.infrastructure)
        score += _bucket_adjustment(monthly_cost, MONTHLY_COST_ADJUSTMENTS, MONTHLY_COST_OVER)

        if estimates.team_size.minimum == 1:
            score += 1
        elif estimates.team_size.minimum >= 3:
            score -= 1

        return _clamp(score)

    def calculate_time_score(self, estimates: ProjectEstimates) -> int:
        """Map the realistic timeline (in weeks) directly to a score."""
        weeks = parse_duration_weeks(estimates.time_estimate.realistic)
        for max_weeks, score in TIME_SCORE_BUCKETS:
            if weeks <= max_weeks:
                return score
        return TIME_SCORE_OVER

    @staticmethod
    def get_rating(score: int) -> ClonabilityRating:
        if score >= 9:
            return ClonabilityRating.VERY_EASY
        if score >= 7:
            return ClonabilityRating.EASY
        if score >= 5:
            return ClonabilityRating.MODERATE
        if score >= 3:
            return ClonabilityRating.DIFFICULT
        return ClonabilityRating.VERY_DIFFICULT

    @staticmethod
    def get_recommendation(score: int, tech_score: int, market_score: int) -> str:
        """Actionable guidance; in the 3-4 band it targets the weaker driver."""
        if score >= 9:
            return RECOMMENDATION_EXCELLENT
        if score >= 7:
            return RECOMMENDATION_GOOD
        if score >= 5:
            return RECOMMENDATION_MODERATE
        if score >= 3:
            if tech_score <= WEAK_COMPONENT_THRESHOLD:
                return RECOMMENDATION_TECHNICAL
            if market_score <= WEAK_COMPONENT_THRESHOLD:
                return RECOMMENDATION_MARKET
            return RECOMMENDATION_CHALLENGING
        return RECOMMENDATION_NOT_RECOMMENDED

    @staticmethod
    def calculate_confidence(market_data: Optional[MarketData]) -> float:
        """Confidence grows with the amount of market data available."""
        confidence = BASE_CONFIDENCE

        if market_data is not None:
            confidence += MARKET_DATA_CONFIDENCE
            if market_data.swot.total_items >= DETAILED_SWOT_MIN_ITEMS:
                confidence += DETAILED_SWOT_CONFIDENCE
            if market_data.competitors:
                confidence += COMPETITOR_CONFIDENCE

        # Resource estimates are always present
        confidence += RESOURCE_ESTIMATE_CONFIDENCE

        return round(max(0.0, min(1.0, confidence)), 2)


def _bucket_adjustment(value: float, buckets, over: int) -> int:
    for upper_bound, adjustment in buckets:
        if value < upper_bound:
            return adjustment
    return over


# Convenience function
def calculate_clonability(
    complexity_score: int,
    market_data: Optional[MarketData],
    resource_estimates: ProjectEstimates,
) -> ClonabilityScore:
    """Calculate clonability with the default weights."""
    return ClonabilityScoreCalculator().calculate_clonability(
        complexity_score, market_data, resource_estimates
    )
