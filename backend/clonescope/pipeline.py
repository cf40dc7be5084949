"""
End-to-end technology scoring pipeline.

Chains the three stages for one detected stack:

    complexity -> insights -> clonability

The insights' estimates feed the clonability resource and time sub-scores.
"""

from typing import Optional, Sequence

from pydantic import BaseModel

from clonescope.core.logging import get_logger
from clonescope.schemas.insights import TechnologyInsights
from clonescope.schemas.market import MarketData
from clonescope.schemas.technology import DetectedTechnology
from clonescope.services.technology_insights import TechnologyInsightsService
from clonescope.skills.clonability_score import ClonabilityScore, ClonabilityScoreCalculator
from clonescope.skills.complexity_calculator import ComplexityCalculator, EnhancedComplexityResult

logger = get_logger(__name__)


class StackAssessment(BaseModel):
    """Resultado combinado de las tres etapas."""
    complexity: EnhancedComplexityResult
    insights: TechnologyInsights
    clonability: ClonabilityScore


class TechnologyScoringPipeline:
    def __init__(
        self,
        complexity_calculator: ComplexityCalculator,
        insights_service: TechnologyInsightsService,
        clonability_calculator: ClonabilityScoreCalculator,
    ):
        self.complexity_calculator = complexity_calculator
        self.insights_service = insights_service
        self.clonability_calculator = clonability_calculator

    async def assess(
        self,
        technologies: Sequence[DetectedTechnology],
        market_data: Optional[MarketData] = None,
    ) -> StackAssessment:
        """
        Evalua un stack completo.

        Raises:
            CatalogLoadError: Si el catalogo no puede cargarse.
        """
        techs = list(technologies)
        complexity = self.complexity_calculator.calculate_enhanced_complexity(techs)
        insights = await self.insights_service.generate_insights(techs, complexity.score)
        clonability = self.clonability_calculator.calculate_clonability(
            complexity.score, market_data, insights.estimates
        )

        logger.info(
            f"Assessed {len(techs)} technologies: complexity {complexity.score}/10, "
            f"clonability {clonability.score}/10 ({clonability.rating.value})"
        )
        return StackAssessment(complexity=complexity, insights=insights, clonability=clonability)
