"""
Unit tests for the ServiceContainer.

Tests lazy construction, overrides, lifecycle and cache warming.
"""

import pytest

from clonescope.core.config import Settings
from clonescope.pipeline import TechnologyScoringPipeline
from clonescope.services.container import ServiceContainer, get_container, reset_container
from clonescope.services.insights_cache import COMMON_TECH_PATTERNS, InsightsCache
from clonescope.services.performance_monitor import PerformanceMonitor
from clonescope.services.technology_catalog import TechnologyCatalog
from clonescope.services.technology_insights import TechnologyInsightsService


class TestLazyServices:
    """Tests for lazy service construction."""

    def test_services_are_singletons_per_container(self):
        container = ServiceContainer(settings=Settings(log_to_file=False))

        assert container.catalog is container.catalog
        assert container.insights_cache is container.insights_cache
        assert container.insights_service is container.insights_service
        assert container.pipeline is container.pipeline

    def test_catalog_not_loaded_until_needed(self):
        container = ServiceContainer(settings=Settings(log_to_file=False))
        assert container.catalog.is_loaded is False

    def test_settings_flow_into_services(self):
        settings = Settings(
            log_to_file=False,
            insights_cache_ttl_seconds=120,
            insights_max_attempts=4,
            monitor_slow_threshold_ms=250.0,
        )
        container = ServiceContainer(settings=settings)

        assert container.insights_cache.ttl_seconds == 120
        assert container.insights_service.max_attempts == 4
        assert container.performance_monitor.slow_threshold_ms == 250.0

    def test_insights_service_wiring(self, test_container, catalog, insights_cache, monitor):
        service = test_container.insights_service

        assert isinstance(service, TechnologyInsightsService)
        assert service.catalog is catalog
        assert service.cache is insights_cache
        assert service.monitor is monitor

    def test_pipeline_wiring(self, test_container):
        pipeline = test_container.pipeline

        assert isinstance(pipeline, TechnologyScoringPipeline)
        assert pipeline.insights_service is test_container.insights_service
        assert pipeline.complexity_calculator is test_container.complexity_calculator


class TestOverrides:
    """Tests for dependency overrides."""

    def test_override_rebuilds_dependents(self, test_container):
        original_service = test_container.insights_service
        new_monitor = PerformanceMonitor(max_samples=10, slow_threshold_ms=100, stats_log_interval=10)

        test_container.override_performance_monitor(new_monitor)

        assert test_container.insights_service is not original_service
        assert test_container.insights_service.monitor is new_monitor

    def test_override_cache(self, test_container, fake_clock):
        cache = InsightsCache(ttl_seconds=60, max_size=5, cleanup_interval_seconds=10, clock=fake_clock)
        test_container.override_insights_cache(cache)
        assert test_container.pipeline.insights_service.cache is cache

    def test_reset(self, test_container):
        catalog = test_container.catalog
        test_container.reset()

        assert test_container.catalog is not catalog
        assert isinstance(test_container.catalog, TechnologyCatalog)


class TestLifecycle:
    """Tests for startup, shutdown and warming."""

    @pytest.mark.asyncio
    async def test_startup_loads_catalog_and_starts_sweep(self):
        container = ServiceContainer(settings=Settings(log_to_file=False, warm_cache_on_startup=False))

        await container.startup()
        try:
            assert container.catalog.is_loaded
            assert container.insights_cache.cleanup_running
            assert len(container.insights_cache) == 0
        finally:
            await container.shutdown()

        assert container.insights_cache.cleanup_running is False

    @pytest.mark.asyncio
    async def test_startup_warms_cache_when_configured(self):
        container = ServiceContainer(settings=Settings(log_to_file=False, warm_cache_on_startup=True))

        await container.startup()
        try:
            assert len(container.insights_cache) == len(COMMON_TECH_PATTERNS)
            assert container.insights_cache.has(["react", "node.js", "postgresql"])
        finally:
            await container.shutdown()

    @pytest.mark.asyncio
    async def test_warming_does_not_record_metrics(self, test_container, monitor):
        warmed = await test_container.warm_insights_cache()

        assert warmed == len(COMMON_TECH_PATTERNS)
        assert monitor.get_stats().total == 0

    @pytest.mark.asyncio
    async def test_warmed_entry_serves_generation(self, test_container, make_techs, monitor):
        await test_container.warm_insights_cache()
        await test_container.insights_service.generate_insights(make_techs("Next.js", "Vercel", "Supabase"), 4)

        assert monitor.get_stats("insights").cached_count == 1


class TestGlobalContainer:
    """Tests for the process-wide singleton."""

    def test_get_container_is_cached(self):
        reset_container()
        try:
            assert get_container() is get_container()
        finally:
            reset_container()

    def test_reset_container_creates_new_instance(self):
        first = get_container()
        reset_container()
        try:
            assert get_container() is not first
        finally:
            reset_container()
