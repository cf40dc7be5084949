"""
Complexity Calculator - Data Definitions

Pydantic models for the tiered technical complexity score.
Three axes (frontend, backend, infrastructure) add up to a 1-10 score.

Author: CloneScope Team
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ComplexityLevel(str, Enum):
    """Nivel cualitativo de complejidad."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Axis(str, Enum):
    """Ejes evaluados por el calculador."""
    FRONTEND = "frontend"
    BACKEND = "backend"
    INFRASTRUCTURE = "infrastructure"


class TierRule(BaseModel):
    """
    Regla de clasificacion: si algun patron esta contenido en el nombre
    detectado (case-insensitive), la tecnologia pertenece a este tier.
    """

    tier: int = Field(..., ge=0, description="Puntos que aporta el tier al eje.")
    label: str = Field(..., description="Nombre legible del tier (ej. 'no-code').")
    patterns: List[str] = Field(default_factory=list, description="Substrings que identifican el tier.")

    def matches(self, name: str) -> bool:
        lowered = name.lower()
        return any(pattern.lower() in lowered for pattern in self.patterns)


class ComplexityBucket(BaseModel):
    """Puntaje de un eje con las tecnologias que lo determinaron."""

    score: int = Field(..., ge=0, description="Puntaje obtenido en el eje.")
    max: int = Field(..., ge=1, description="Maximo posible del eje.")
    technologies: List[str] = Field(
        default_factory=list,
        description="Tecnologias detectadas que coinciden con algun tier del eje.",
    )


class ComplexityBreakdown(BaseModel):
    frontend: ComplexityBucket
    backend: ComplexityBucket
    infrastructure: ComplexityBucket

    @property
    def base_score(self) -> int:
        return self.frontend.score + self.backend.score + self.infrastructure.score


class ComplexityFactors(BaseModel):
    """Factores cualitativos que acompañan al score."""

    custom_code: bool = Field(..., description="Si el stack requiere desarrollo a medida.")
    framework_complexity: ComplexityLevel
    infrastructure_complexity: ComplexityLevel
    technology_count: int = Field(..., ge=0)
    licensing_complexity: bool = Field(
        default=False,
        description="Presencia de tecnologias con licencia comercial.",
    )


class ComplexityResult(BaseModel):
    """Resultado basico (compatibilidad hacia atras)."""

    score: int = Field(..., ge=1, le=10, description="Complejidad tecnica 1-10.")
    factors: ComplexityFactors


class EnhancedComplexityResult(ComplexityResult):
    """Resultado con desglose por eje y explicacion legible."""

    breakdown: ComplexityBreakdown
    explanation: str = Field(..., min_length=1)

    def to_basic(self) -> ComplexityResult:
        return ComplexityResult(score=self.score, factors=self.factors.model_copy())
