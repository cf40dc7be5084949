from typing import Literal

from pydantic import BaseModel, Field

Proficiency = Literal["beginner", "intermediate", "advanced", "expert"]
Priority = Literal["high", "medium", "low"]
BuildVsBuyDecision = Literal["build", "buy", "hybrid"]


class SkillRequirement(BaseModel):
    skill: str
    proficiency: Proficiency
    category: str
    estimated_learning_time: str | None = None


class BuildVsBuyCost(BaseModel):
    build: str
    buy: str


class BuildVsBuyRecommendation(BaseModel):
    technology: str
    recommendation: BuildVsBuyDecision
    reasoning: str
    alternatives: list[str] = Field(default_factory=list)
    estimated_cost: BuildVsBuyCost | None = None


class TimeEstimate(BaseModel):
    minimum: str
    maximum: str
    realistic: str


class ProjectCostEstimate(BaseModel):
    development: str
    infrastructure: str
    maintenance: str
    total: str


class TeamSize(BaseModel):
    minimum: int = Field(ge=1)
    recommended: int = Field(ge=1)


class ProjectEstimates(BaseModel):
    """Estimaciones de tiempo, costo y equipo para clonar el stack."""
    time_estimate: TimeEstimate
    cost_estimate: ProjectCostEstimate
    team_size: TeamSize


class Recommendation(BaseModel):
    priority: Priority
    category: str
    title: str
    description: str
    impact: str


class TechnologyInsights(BaseModel):
    """Reporte completo de insights tecnologicos."""
    alternatives: dict[str, list[str]] = Field(default_factory=dict)
    build_vs_buy: list[BuildVsBuyRecommendation] = Field(default_factory=list)
    skills: list[SkillRequirement] = Field(default_factory=list)
    estimates: ProjectEstimates
    recommendations: list[Recommendation] = Field(default_factory=list)
    summary: str = ""
