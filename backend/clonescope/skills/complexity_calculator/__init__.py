"""
Complexity Calculator Skill

Deterministic technical complexity scoring for CloneScope.
Classifies detected technologies into ordered tiers per axis
(frontend, backend, infrastructure) and explains the result.
"""

from .definition import (
    Axis,
    ComplexityBreakdown,
    ComplexityBucket,
    ComplexityFactors,
    ComplexityLevel,
    ComplexityResult,
    EnhancedComplexityResult,
    TierRule,
)

from .impl import (
    AXIS_RULES,
    BACKEND_RULES,
    COMMERCIAL_LICENSES,
    FRONTEND_RULES,
    INFRASTRUCTURE_RULES,
    ComplexityCalculator,
    calculate_complexity,
    calculate_enhanced_complexity,
)

__all__ = [
    # Classes
    "ComplexityCalculator",
    # Models
    "Axis",
    "ComplexityBreakdown",
    "ComplexityBucket",
    "ComplexityFactors",
    "ComplexityLevel",
    "ComplexityResult",
    "EnhancedComplexityResult",
    "TierRule",
    # Functions
    "calculate_complexity",
    "calculate_enhanced_complexity",
    # Constants
    "AXIS_RULES",
    "BACKEND_RULES",
    "COMMERCIAL_LICENSES",
    "FRONTEND_RULES",
    "INFRASTRUCTURE_RULES",
]
