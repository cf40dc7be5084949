import json
import threading
from functools import wraps
from pathlib import Path
from typing import Callable, TypeVar

from pydantic import ValidationError

from clonescope.core.config import settings
from clonescope.core.exceptions import CatalogLoadError
from clonescope.core.logging import get_logger
from clonescope.schemas.catalog import (
    CostEstimate,
    Difficulty,
    LearningResource,
    SaasAlternative,
    TechnologyAlternative,
    TechnologyProfile,
)

logger = get_logger(__name__)
T = TypeVar("T")

# Palabras clave de URL -> tipo de recurso (evaluadas en orden)
_RESOURCE_TYPE_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("documentation", ("docs", "documentation", ".dev", "developer.")),
    ("tutorial", ("tutorial",)),
    ("course", ("course", "udemy", "egghead", "university")),
    ("guide", ("guide",)),
]

_SAAS_CATEGORY_KEYWORDS = ("service", "platform", "hosting")


def _ensure_loaded(method: Callable[..., T]) -> Callable[..., T]:
    """Decorador que carga el dataset antes de ejecutar el metodo."""
    @wraps(method)
    def wrapper(self: "TechnologyCatalog", *args, **kwargs) -> T:
        if not self._loaded:
            self.load()
        return method(self, *args, **kwargs)
    return wrapper


class TechnologyCatalog:
    """Catalogo de perfiles tecnologicos con lookup case-insensitive.

    El dataset se lee una sola vez; despues de `load()` el catalogo es de
    solo lectura.
    """

    def __init__(self, data_path: Path | str | None = None):
        self._data_path = Path(data_path) if data_path is not None else settings.catalog_path
        self._technologies: dict[str, TechnologyProfile] = {}
        self._by_category: dict[str, list[TechnologyProfile]] = {}
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def data_path(self) -> Path:
        return self._data_path

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self) -> None:
        """Lee el dataset y construye los indices. Llamadas posteriores no hacen nada."""
        if self._loaded:
            return

        with self._lock:
            if self._loaded:
                return

            try:
                raw = json.loads(self._data_path.read_text(encoding="utf-8"))
                records = raw["technologies"]
                profiles = [TechnologyProfile.model_validate(record) for record in records]
            except (OSError, json.JSONDecodeError, KeyError, TypeError, ValidationError) as e:
                logger.error(f"Failed to load technology catalog from {self._data_path}: {e}")
                raise CatalogLoadError(
                    "Failed to initialize technology catalog",
                    path=self._data_path,
                    original_error=e,
                ) from e

            technologies: dict[str, TechnologyProfile] = {}
            by_category: dict[str, list[TechnologyProfile]] = {}
            for profile in profiles:
                technologies[profile.name.lower()] = profile
                by_category.setdefault(profile.category, []).append(profile)

            self._technologies = technologies
            self._by_category = by_category
            self._loaded = True
            logger.info(f"Loaded {len(technologies)} technologies from catalog ({len(by_category)} categories)")

    @_ensure_loaded
    def get_technology(self, name: str) -> TechnologyProfile | None:
        """Lookup exacto en minusculas; si falla, busqueda por substring en ambos sentidos."""
        normalized = name.strip().lower()
        if not normalized:
            return None

        profile = self._technologies.get(normalized)
        if profile is not None:
            return profile

        return self._find_by_partial_match(normalized)

    def _find_by_partial_match(self, search_term: str) -> TechnologyProfile | None:
        # e.g. "react.js" -> "react", "next.js 13.4.1" -> "next.js"
        for name, profile in self._technologies.items():
            if name in search_term or search_term in name:
                return profile
        return None

    def get_fallback_profile(self, name: str, category: str | None = None) -> TechnologyProfile:
        """Perfil neutro para tecnologias que no estan en el dataset."""
        return TechnologyProfile(
            name=name,
            category=category or "unknown",
            difficulty=Difficulty.MEDIUM,
            description=f"{name} - Technology details not available in knowledge base",
            alternatives=[],
            cost_estimate=CostEstimate(development="medium", hosting="medium", maintenance="medium"),
            learning_resources=[],
            typical_use_case="General purpose technology",
            market_demand="medium",
        )

    @_ensure_loaded
    def get_technologies_by_category(self, category: str) -> list[TechnologyProfile]:
        return list(self._by_category.get(category, []))

    @_ensure_loaded
    def get_categories(self) -> list[str]:
        return list(self._by_category.keys())

    @_ensure_loaded
    def get_all_technologies(self) -> list[TechnologyProfile]:
        return list(self._technologies.values())

    def get_technology_alternatives(self, name: str) -> list[TechnologyAlternative]:
        """Alternativas de una tecnologia, enriquecidas con dificultad y demanda si estan perfiladas."""
        profile = self.get_technology(name)
        if profile is None:
            return []

        alternatives = []
        for alt_name in profile.alternatives:
            alt = self.get_technology(alt_name)
            alternatives.append(
                TechnologyAlternative(
                    name=alt_name,
                    difficulty=alt.difficulty.value if alt else "unknown",
                    market_demand=alt.market_demand if alt else "unknown",
                )
            )
        return alternatives

    def get_saas_alternatives(self, category: str) -> list[SaasAlternative]:
        return [
            SaasAlternative(name=tech.name, category=tech.category, cost_estimate=tech.cost_estimate)
            for tech in self.get_technologies_by_category(category)
            if any(keyword in tech.category for keyword in _SAAS_CATEGORY_KEYWORDS)
        ]

    def get_learning_resources(self, name: str) -> list[LearningResource]:
        profile = self.get_technology(name)
        if profile is None:
            return []
        return [LearningResource(url=url, type=_infer_resource_type(url)) for url in profile.learning_resources]


def _infer_resource_type(url: str) -> str:
    lower_url = url.lower()
    for resource_type, keywords in _RESOURCE_TYPE_KEYWORDS:
        if any(keyword in lower_url for keyword in keywords):
            return resource_type
    return "resource"
