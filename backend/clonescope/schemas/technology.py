from pydantic import BaseModel, ConfigDict, Field, field_validator


class DetectedTechnology(BaseModel):
    """Tecnologia detectada en el sitio objetivo (salida del detector externo)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Nombre de la tecnologia, puede incluir version")
    categories: tuple[str, ...] = Field(default=(), description="Categorias reportadas por el detector")
    confidence: int = Field(default=100, ge=0, le=100, description="Confianza de la deteccion (0-100)")
    version: str | None = Field(default=None, description="Version detectada, si se conoce")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v):
        return v.strip() if isinstance(v, str) else v


def technology_names(technologies: list[DetectedTechnology]) -> list[str]:
    return [tech.name for tech in technologies]
