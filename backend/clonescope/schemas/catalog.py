from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    """Dificultad de aprendizaje/implementacion de una tecnologia."""
    VERY_EASY = "very-easy"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    VERY_HARD = "very-hard"


class CostEstimate(BaseModel):
    """Niveles de costo ("low", "medium", "free-to-low", ...) o rangos en texto libre."""
    development: str = "medium"
    hosting: str = "medium"
    maintenance: str = "medium"


class TechnologyProfile(BaseModel):
    """Perfil de una tecnologia del catalogo. El dataset usa claves camelCase."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(min_length=1)
    category: str
    difficulty: Difficulty
    description: str = ""
    alternatives: list[str] = Field(default_factory=list)
    cost_estimate: CostEstimate = Field(default_factory=CostEstimate, alias="costEstimate")
    learning_resources: list[str] = Field(default_factory=list, alias="learningResources")
    typical_use_case: str = Field(default="", alias="typicalUseCase")
    market_demand: str = Field(default="medium", alias="marketDemand")


class TechnologyAlternative(BaseModel):
    name: str
    difficulty: str = "unknown"
    market_demand: str = "unknown"


class SaasAlternative(BaseModel):
    name: str
    category: str
    cost_estimate: CostEstimate


class LearningResource(BaseModel):
    url: str
    type: str = Field(description="documentation, tutorial, course, guide o resource")
