"""
Dependency Injection Container.

This module provides a centralized container for the pipeline services.
The catalog, insights cache and performance monitor are built once per
container and injected into the orchestrator, so tests can swap any of them
for a fresh or fake instance.

The container pattern enables:
- Load-once, reuse-everywhere lifecycle for the technology catalog
- Easy testing with isolated dependencies
- Lazy initialization of every service

Example:
    from clonescope.services.container import get_container

    container = get_container()
    await container.startup()
    assessment = await container.pipeline.assess(technologies)
"""

from functools import lru_cache
from typing import Optional

from clonescope.core.config import Settings, get_settings
from clonescope.core.logging import get_logger
from clonescope.schemas.insights import TechnologyInsights
from clonescope.schemas.technology import DetectedTechnology
from clonescope.services.insights_cache import InsightsCache
from clonescope.services.performance_monitor import PerformanceMonitor
from clonescope.services.technology_catalog import TechnologyCatalog
from clonescope.services.technology_insights import TechnologyInsightsService
from clonescope.skills.clonability_score import ClonabilityScoreCalculator
from clonescope.skills.complexity_calculator import ComplexityCalculator

logger = get_logger(__name__)


class ServiceContainer:
    """
    Centralized container for pipeline dependencies.

    Attributes:
        _settings: Settings used to build every service.
        _catalog: Cached TechnologyCatalog instance.
        _insights_cache: Cached InsightsCache instance.
        _performance_monitor: Cached PerformanceMonitor instance.
        _insights_service: Cached TechnologyInsightsService instance.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the container with lazy service references."""
        self._settings = settings
        self._catalog: Optional[TechnologyCatalog] = None
        self._insights_cache: Optional[InsightsCache] = None
        self._performance_monitor: Optional[PerformanceMonitor] = None
        self._complexity_calculator: Optional[ComplexityCalculator] = None
        self._clonability_calculator: Optional[ClonabilityScoreCalculator] = None
        self._insights_service: Optional[TechnologyInsightsService] = None
        self._pipeline = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def catalog(self) -> TechnologyCatalog:
        """
        Get the technology catalog.

        The dataset is not read here; it loads on first lookup or on startup().
        """
        if self._catalog is None:
            self._catalog = TechnologyCatalog(self.settings.catalog_path)
        return self._catalog

    @property
    def insights_cache(self) -> InsightsCache:
        if self._insights_cache is None:
            self._insights_cache = InsightsCache(
                ttl_seconds=self.settings.insights_cache_ttl_seconds,
                max_size=self.settings.insights_cache_max_size,
                cleanup_interval_seconds=self.settings.insights_cache_cleanup_interval_seconds,
            )
        return self._insights_cache

    @property
    def performance_monitor(self) -> PerformanceMonitor:
        if self._performance_monitor is None:
            self._performance_monitor = PerformanceMonitor(
                max_samples=self.settings.monitor_max_samples,
                slow_threshold_ms=self.settings.monitor_slow_threshold_ms,
                stats_log_interval=self.settings.monitor_stats_log_interval,
            )
        return self._performance_monitor

    @property
    def complexity_calculator(self) -> ComplexityCalculator:
        if self._complexity_calculator is None:
            self._complexity_calculator = ComplexityCalculator()
        return self._complexity_calculator

    @property
    def clonability_calculator(self) -> ClonabilityScoreCalculator:
        if self._clonability_calculator is None:
            self._clonability_calculator = ClonabilityScoreCalculator()
        return self._clonability_calculator

    @property
    def insights_service(self) -> TechnologyInsightsService:
        """
        Get the insights orchestrator.

        Built with the container's catalog, cache and monitor.
        """
        if self._insights_service is None:
            self._insights_service = TechnologyInsightsService(
                catalog=self.catalog,
                cache=self.insights_cache,
                monitor=self.performance_monitor,
                max_attempts=self.settings.insights_max_attempts,
                retry_base_delay=self.settings.insights_retry_base_delay_seconds,
                slow_generation_ms=self.settings.insights_slow_generation_ms,
            )
        return self._insights_service

    @property
    def pipeline(self):
        """
        Get the end-to-end scoring pipeline.

        Returns:
            TechnologyScoringPipeline wired to this container's services.
        """
        if self._pipeline is None:
            # Import here to avoid circular imports
            from clonescope.pipeline import TechnologyScoringPipeline
            self._pipeline = TechnologyScoringPipeline(
                complexity_calculator=self.complexity_calculator,
                insights_service=self.insights_service,
                clonability_calculator=self.clonability_calculator,
            )
        return self._pipeline

    async def startup(self) -> None:
        """
        Load the catalog and start background maintenance.

        Raises:
            CatalogLoadError: If the technology dataset cannot be read.
        """
        logger.info(f"Starting CloneScope services [{self.settings.app_env}]")
        self.catalog.load()
        self.insights_cache.start_cleanup_task()
        if self.settings.warm_cache_on_startup:
            await self.warm_insights_cache()

    async def shutdown(self) -> None:
        if self._insights_cache is not None:
            await self._insights_cache.stop_cleanup_task()
        logger.info("CloneScope services stopped")

    async def warm_insights_cache(self) -> int:
        """Pre-populate the insights cache with common stacks."""
        async def generate(names: list[str]) -> TechnologyInsights:
            technologies = [DetectedTechnology(name=name) for name in names]
            complexity = self.complexity_calculator.calculate_complexity(technologies)
            return self.insights_service.build_insights(technologies, complexity.score)

        return await self.insights_cache.warm_cache(generate)

    def reset(self) -> None:
        """
        Reset all cached services.

        Useful for testing to ensure fresh instances.
        """
        self._catalog = None
        self._insights_cache = None
        self._performance_monitor = None
        self._complexity_calculator = None
        self._clonability_calculator = None
        self._insights_service = None
        self._pipeline = None

    def override_catalog(self, catalog: TechnologyCatalog) -> None:
        self._catalog = catalog
        # Rebuild dependents to pick up the new catalog
        self._insights_service = None
        self._pipeline = None

    def override_insights_cache(self, cache: InsightsCache) -> None:
        self._insights_cache = cache
        self._insights_service = None
        self._pipeline = None

    def override_performance_monitor(self, monitor: PerformanceMonitor) -> None:
        self._performance_monitor = monitor
        self._insights_service = None
        self._pipeline = None


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    """
    Get the singleton ServiceContainer instance.

    Uses lru_cache to ensure only one container exists per process.
    """
    return ServiceContainer()


def reset_container() -> None:
    """
    Reset the global container singleton.

    Clears the lru_cache and allows a fresh container to be created.
    """
    get_container.cache_clear()
