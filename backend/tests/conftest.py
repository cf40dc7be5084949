"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing CloneScope.
Every fixture builds fresh service instances so no test shares cache,
catalog or monitor state with another.

Usage:
    def test_example(insights_service, make_techs):
        techs = make_techs("React", "Node.js")
        insights = await insights_service.generate_insights(techs, 5)
"""

import os

# Sin archivo de log durante los tests
os.environ.setdefault("CLONESCOPE_LOG_TO_FILE", "false")

import pytest

from clonescope.schemas.insights import (
    ProjectCostEstimate,
    ProjectEstimates,
    TeamSize,
    TimeEstimate,
)
from clonescope.schemas.market import Competitor, MarketData, SwotAnalysis
from clonescope.schemas.technology import DetectedTechnology


# =============================================================================
# CLOCK FIXTURES
# =============================================================================


class FakeClock:
    """Reloj manual para simular el paso del tiempo en caches con TTL."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """
    Manually advanced clock.

    Usage:
        def test_example(fake_clock):
            cache = TTLCache(ttl_seconds=10, clock=fake_clock)
            fake_clock.advance(11)
    """
    return FakeClock()


# =============================================================================
# TECHNOLOGY FIXTURES
# =============================================================================


@pytest.fixture
def make_techs():
    """
    Factory fixture for building DetectedTechnology lists from names.

    Usage:
        def test_example(make_techs):
            techs = make_techs("React", "Node.js")
    """
    def _create(*names: str) -> list[DetectedTechnology]:
        return [DetectedTechnology(name=name) for name in names]
    return _create


@pytest.fixture
def estimates_factory():
    """
    Factory fixture for ProjectEstimates with overridable fields.

    Usage:
        def test_example(estimates_factory):
            estimates = estimates_factory(realistic="4 weeks", development="$5,000-$15,000")
    """
    def _create(
        realistic: str = "3 months",
        development: str = "$30,000-$75,000",
        infrastructure: str = "$200-$1,000/month",
        team_minimum: int = 1,
    ) -> ProjectEstimates:
        return ProjectEstimates(
            time_estimate=TimeEstimate(minimum=realistic, maximum=realistic, realistic=realistic),
            cost_estimate=ProjectCostEstimate(
                development=development,
                infrastructure=infrastructure,
                maintenance="$5,000-$15,000/month",
                total="$75,000-$200,000 (first year)",
            ),
            team_size=TeamSize(minimum=team_minimum, recommended=max(team_minimum, 2)),
        )
    return _create


@pytest.fixture
def detailed_market_data():
    """Market data with 12 SWOT items and two competitors."""
    return MarketData(
        competitors=[Competitor(name="Acme"), Competitor(name="Globex", url="https://globex.example")],
        swot=SwotAnalysis(
            strengths=["brand", "network", "pricing"],
            weaknesses=["slow ui", "no mobile app", "poor onboarding"],
            opportunities=["emerging market", "api partners", "smb segment"],
            threats=["regulation", "new entrants", "price war"],
        ),
    )


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def catalog():
    """Fresh TechnologyCatalog over the packaged dataset, already loaded."""
    from clonescope.services.technology_catalog import TechnologyCatalog

    instance = TechnologyCatalog()
    instance.load()
    return instance


@pytest.fixture
def insights_cache(fake_clock):
    """InsightsCache with a 24h TTL driven by fake_clock."""
    from clonescope.services.insights_cache import InsightsCache

    return InsightsCache(ttl_seconds=86400, max_size=100, cleanup_interval_seconds=3600, clock=fake_clock)


@pytest.fixture
def monitor():
    """Isolated PerformanceMonitor."""
    from clonescope.services.performance_monitor import PerformanceMonitor

    return PerformanceMonitor(max_samples=1000, slow_threshold_ms=10000, stats_log_interval=50)


@pytest.fixture
def insights_service(catalog, insights_cache, monitor):
    """
    TechnologyInsightsService wired to fresh collaborators.

    Backoff delay is zero so retry tests do not wait.
    """
    from clonescope.services.technology_insights import TechnologyInsightsService

    return TechnologyInsightsService(
        catalog=catalog,
        cache=insights_cache,
        monitor=monitor,
        max_attempts=2,
        retry_base_delay=0.0,
        slow_generation_ms=500.0,
    )


@pytest.fixture
def test_container(catalog, insights_cache, monitor):
    """
    ServiceContainer with isolated catalog, cache and monitor.

    Usage:
        def test_example(test_container):
            service = test_container.insights_service
    """
    from clonescope.core.config import Settings
    from clonescope.services.container import ServiceContainer

    container = ServiceContainer(settings=Settings(log_to_file=False, warm_cache_on_startup=False))
    container.override_catalog(catalog)
    container.override_insights_cache(insights_cache)
    container.override_performance_monitor(monitor)
    return container


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
