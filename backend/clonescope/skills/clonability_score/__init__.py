"""
Clonability Score Skill

Weighted 1-10 clonability scoring for CloneScope.
Combines inverted technical complexity with market, resource
and time-to-market sub-scores, plus a confidence estimate.
"""

from .definition import (
    ClonabilityComponent,
    ClonabilityComponents,
    ClonabilityRating,
    ClonabilityScore,
)

from .impl import (
    DEFAULT_WEIGHTS,
    ClonabilityScoreCalculator,
    calculate_clonability,
)

__all__ = [
    # Classes
    "ClonabilityScoreCalculator",
    # Models
    "ClonabilityComponent",
    "ClonabilityComponents",
    "ClonabilityRating",
    "ClonabilityScore",
    # Functions
    "calculate_clonability",
    # Constants
    "DEFAULT_WEIGHTS",
]
