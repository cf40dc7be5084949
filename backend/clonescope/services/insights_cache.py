"""
Insights Cache.

In-memory cache of technology insights keyed by the normalized technology
set. Entries live for a configurable TTL (24h by default), expire lazily on
read and through a periodic asyncio sweep.

Example:
    cache = InsightsCache()
    cache.set(["React", "Node.js"], insights, origin_key="analysis-42")
    cache.get(["node.js", "react"])  # same entry, order does not matter
"""

import asyncio
import contextlib
import time
from typing import Awaitable, Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from clonescope.core.cache import TTLCache
from clonescope.core.config import settings
from clonescope.core.logging import get_logger
from clonescope.schemas.insights import TechnologyInsights

logger = get_logger(__name__)

InsightsGenerator = Callable[[list[str]], Awaitable[TechnologyInsights]]

# Combinaciones frecuentes para precalentar el cache
COMMON_TECH_PATTERNS: list[list[str]] = [
    ["React", "Node.js", "PostgreSQL"],
    ["Next.js", "Vercel", "Supabase"],
    ["Vue.js", "Express", "MongoDB"],
    ["Angular", "NestJS", "MySQL"],
    ["Svelte", "Firebase", "Firestore"],
]

WARMING_ORIGIN_KEY = "cache-warming"


class CacheEntry(BaseModel):
    """Entrada del cache: insights mas metadatos de origen."""

    model_config = ConfigDict(frozen=True)

    insights: TechnologyInsights
    timestamp: float = Field(description="Momento de escritura (segundos, reloj del cache)")
    origin_key: str = Field(description="Identificador de la operacion que genero la entrada")


class CacheStats(BaseModel):
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    size: int = 0
    hit_rate: float = Field(default=0.0, ge=0.0, le=1.0)


class InsightsCache:
    """Cache TTL de insights con estadisticas, warm-up y limpieza periodica."""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        max_size: int | None = None,
        cleanup_interval_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._clock = clock
        self._store: TTLCache[CacheEntry] = TTLCache(
            ttl_seconds=ttl_seconds if ttl_seconds is not None else settings.insights_cache_ttl_seconds,
            max_size=max_size if max_size is not None else settings.insights_cache_max_size,
            clock=clock,
        )
        self._cleanup_interval = (
            cleanup_interval_seconds
            if cleanup_interval_seconds is not None
            else settings.insights_cache_cleanup_interval_seconds
        )
        self._cleanup_task: Optional[asyncio.Task] = None

    @property
    def ttl_seconds(self) -> float:
        return self._store.ttl_seconds

    @staticmethod
    def generate_key(technologies: Sequence[str]) -> str:
        """Clave independiente del orden: nombres normalizados, ordenados y unidos por '|'."""
        return "|".join(sorted(name.strip().lower() for name in technologies))

    def get(self, technologies: Sequence[str]) -> TechnologyInsights | None:
        key = self.generate_key(technologies)
        entry, age = self._store.lookup(key)

        if entry is None:
            event = "expired" if age is not None else "miss"
            self._log_event(event, key, age)
            return None

        return entry.insights

    def set(
        self,
        technologies: Sequence[str],
        insights: TechnologyInsights,
        origin_key: str,
    ) -> None:
        key = self.generate_key(technologies)
        self._store.set(key, CacheEntry(insights=insights, timestamp=self._clock(), origin_key=origin_key))
        logger.debug(f"Cached insights for '{key[:50]}' (origin: {origin_key})")

    def has(self, technologies: Sequence[str]) -> bool:
        """Indica si hay una entrada vigente, sin afectar estadisticas."""
        return self._store.contains(self.generate_key(technologies))

    def get_entry_age(self, technologies: Sequence[str]) -> float | None:
        """Edad en segundos de la entrada, o None si no existe."""
        return self._store.age(self.generate_key(technologies))

    def clear_expired(self) -> int:
        cleared = self._store.purge_expired()
        if cleared:
            logger.info(f"Cleared {cleared} expired insights cache entries")
        return cleared

    def clear(self) -> int:
        cleared = self._store.clear()
        logger.info(f"Cleared {cleared} insights cache entries")
        return cleared

    def get_stats(self) -> CacheStats:
        raw = self._store.stats()
        lookups = raw["hits"] + raw["misses"]
        hit_rate = raw["hits"] / lookups if lookups else 0.0
        return CacheStats(**raw, hit_rate=round(hit_rate, 2))

    def reset_stats(self) -> None:
        self._store.reset_stats()

    async def warm_cache(
        self,
        generator: InsightsGenerator,
        patterns: Sequence[Sequence[str]] = COMMON_TECH_PATTERNS,
    ) -> int:
        """
        Pre-carga combinaciones comunes de tecnologias.

        Omite las ya cacheadas y tolera fallos individuales sin abortar el lote.
        Retorna la cantidad de entradas generadas.
        """
        logger.info(f"Starting insights cache warming ({len(patterns)} patterns)")
        start = time.perf_counter()
        warmed = 0

        for pattern in patterns:
            names = list(pattern)
            if self.has(names):
                continue
            try:
                insights = await generator(names)
            except Exception as e:
                logger.warning(f"Failed to warm cache for {', '.join(names)}: {type(e).__name__}: {e}")
                continue
            self.set(names, insights, WARMING_ORIGIN_KEY)
            warmed += 1
            logger.debug(f"Warmed cache for: {', '.join(names)}")

        duration_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Cache warming completed in {duration_ms:.0f}ms ({warmed} entries)")
        return warmed

    # ------------------------------------------------------------------------
    # Periodic sweep
    # ------------------------------------------------------------------------

    @property
    def cleanup_running(self) -> bool:
        return self._cleanup_task is not None and not self._cleanup_task.done()

    def start_cleanup_task(self) -> asyncio.Task:
        """Arranca el barrido periodico de entradas vencidas. Requiere un event loop activo."""
        if self.cleanup_running:
            return self._cleanup_task
        self._cleanup_task = asyncio.get_running_loop().create_task(self._cleanup_loop())
        logger.debug(f"Insights cache sweep started (every {self._cleanup_interval}s)")
        return self._cleanup_task

    async def stop_cleanup_task(self) -> None:
        task, self._cleanup_task = self._cleanup_task, None
        if task is None or task.done():
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.debug("Insights cache sweep stopped")

    async def _cleanup_loop(self) -> None:
        while True:
            await asyncio.sleep(self._cleanup_interval)
            self.clear_expired()

    def _log_event(self, event: str, key: str, age: float | None) -> None:
        stats = self.get_stats()
        age_text = f" | age: {age:.0f}s" if age is not None else ""
        logger.info(
            f"Insights cache {event} | key: {key[:50]}{age_text} | "
            f"hits: {stats.hits} misses: {stats.misses} evictions: {stats.evictions} size: {stats.size}"
        )

    def __len__(self) -> int:
        return len(self._store)
