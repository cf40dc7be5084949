from clonescope.schemas.catalog import (
    CostEstimate,
    Difficulty,
    LearningResource,
    SaasAlternative,
    TechnologyAlternative,
    TechnologyProfile,
)
from clonescope.schemas.insights import (
    BuildVsBuyCost,
    BuildVsBuyRecommendation,
    ProjectCostEstimate,
    ProjectEstimates,
    Recommendation,
    SkillRequirement,
    TeamSize,
    TechnologyInsights,
    TimeEstimate,
)
from clonescope.schemas.market import Competitor, MarketData, SwotAnalysis
from clonescope.schemas.technology import DetectedTechnology, technology_names

__all__ = [
    "BuildVsBuyCost",
    "BuildVsBuyRecommendation",
    "Competitor",
    "CostEstimate",
    "DetectedTechnology",
    "Difficulty",
    "LearningResource",
    "MarketData",
    "ProjectCostEstimate",
    "ProjectEstimates",
    "Recommendation",
    "SaasAlternative",
    "SkillRequirement",
    "SwotAnalysis",
    "TeamSize",
    "TechnologyAlternative",
    "TechnologyInsights",
    "TechnologyProfile",
    "TimeEstimate",
    "technology_names",
]
