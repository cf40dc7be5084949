from clonescope.services.insights_cache import CacheEntry, CacheStats, InsightsCache
from clonescope.services.performance_monitor import PerformanceMonitor, PerformanceSample, PerformanceStats
from clonescope.services.technology_catalog import TechnologyCatalog
from clonescope.services.technology_insights import TechnologyInsightsService, minimal_insights
from clonescope.services.container import ServiceContainer, get_container, reset_container

__all__ = [
    "CacheEntry",
    "CacheStats",
    "InsightsCache",
    "PerformanceMonitor",
    "PerformanceSample",
    "PerformanceStats",
    "TechnologyCatalog",
    "TechnologyInsightsService",
    "minimal_insights",
    "ServiceContainer",
    "get_container",
    "reset_container",
]
