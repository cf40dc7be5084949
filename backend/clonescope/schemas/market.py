from pydantic import BaseModel, Field


class Competitor(BaseModel):
    name: str
    url: str | None = None
    notes: str | None = None


class SwotAnalysis(BaseModel):
    """Analisis SWOT del negocio objetivo."""
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    opportunities: list[str] = Field(default_factory=list)
    threats: list[str] = Field(default_factory=list)

    @property
    def total_items(self) -> int:
        return len(self.strengths) + len(self.weaknesses) + len(self.opportunities) + len(self.threats)


class MarketData(BaseModel):
    """Datos de mercado provenientes del analysis store (opcional en el scoring)."""
    competitors: list[Competitor] = Field(default_factory=list, description="Competidores identificados")
    swot: SwotAnalysis = Field(default_factory=SwotAnalysis, description="Analisis SWOT")
