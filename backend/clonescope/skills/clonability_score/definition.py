"""
Clonability Score - Data Definitions

Pydantic models for the weighted clonability score.
Combines inverted technical complexity with market opportunity,
resource requirements and time to market.

Author: CloneScope Team
"""

from enum import Enum

from pydantic import BaseModel, Field


class ClonabilityRating(str, Enum):
    """
    Rating cualitativo derivado del score final.

    - VERY_EASY: 9-10
    - EASY: 7-8
    - MODERATE: 5-6
    - DIFFICULT: 3-4
    - VERY_DIFFICULT: 1-2
    """
    VERY_DIFFICULT = "very-difficult"
    DIFFICULT = "difficult"
    MODERATE = "moderate"
    EASY = "easy"
    VERY_EASY = "very-easy"


class ClonabilityComponent(BaseModel):
    """Sub-score con el peso que aporta al total."""

    score: int = Field(..., ge=1, le=10, description="Sub-score 1-10.")
    weight: float = Field(..., gt=0, le=1, description="Peso del componente en el total.")

    @property
    def weighted(self) -> float:
        return self.score * self.weight


class ClonabilityComponents(BaseModel):
    technical_complexity: ClonabilityComponent
    market_opportunity: ClonabilityComponent
    resource_requirements: ClonabilityComponent
    time_to_market: ClonabilityComponent


class ClonabilityScore(BaseModel):
    """
    Resultado completo del scoring de clonabilidad.

    Contiene el score, rating, desglose por componente,
    recomendacion accionable y confianza del calculo.
    """

    score: int = Field(..., ge=1, le=10, description="Clonabilidad 1-10 (10 = mas facil de clonar).")
    rating: ClonabilityRating
    components: ClonabilityComponents
    recommendation: str = Field(..., min_length=1)
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confianza segun datos disponibles.")

    def get_indicator(self) -> str:
        """Retorna el emoji de semaforo segun el rating."""
        return {
            ClonabilityRating.VERY_EASY: "🟢",
            ClonabilityRating.EASY: "🟢",
            ClonabilityRating.MODERATE: "🟡",
            ClonabilityRating.DIFFICULT: "🟠",
            ClonabilityRating.VERY_DIFFICULT: "🔴",
        }[self.rating]

    def to_summary(self) -> str:
        """Genera un resumen de una linea."""
        return (
            f"{self.get_indicator()} Clonability: {self.score}/10 | "
            f"Rating: {self.rating.value} | "
            f"Confidence: {self.confidence:.0%}"
        )

    def to_report(self) -> str:
        """Genera un reporte Markdown detallado."""
        lines = [
            "## Clonability Assessment",
            "",
            f"**Score**: {self.score}/10 {self.get_indicator()}",
            f"**Rating**: {self.rating.value}",
            f"**Confidence**: {self.confidence:.0%}",
            "",
            f"**Recommendation**: {self.recommendation}",
            "",
            "### Component Breakdown",
            "",
            "| Component | Score | Weight | Weighted |",
            "|-----------|-------|--------|----------|",
        ]

        rows = [
            ("Technical complexity", self.components.technical_complexity),
            ("Market opportunity", self.components.market_opportunity),
            ("Resource requirements", self.components.resource_requirements),
            ("Time to market", self.components.time_to_market),
        ]
        for label, component in rows:
            lines.append(
                f"| {label} | {component.score}/10 | {component.weight:.0%} | {component.weighted:.2f} |"
            )

        return "\n".join(lines)
