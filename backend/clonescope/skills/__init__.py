"""Deterministic scoring skills: technical complexity and clonability."""

from .clonability_score import ClonabilityScoreCalculator, calculate_clonability
from .complexity_calculator import (
    ComplexityCalculator,
    calculate_complexity,
    calculate_enhanced_complexity,
)

__all__ = [
    "ClonabilityScoreCalculator",
    "ComplexityCalculator",
    "calculate_clonability",
    "calculate_complexity",
    "calculate_enhanced_complexity",
]
