import threading
from collections import deque
from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from clonescope.core.config import settings
from clonescope.core.logging import get_logger

logger = get_logger(__name__)

Operation = Literal["detection", "insights"]


class PerformanceSample(BaseModel):
    """Una medicion de una operacion (deteccion o generacion de insights)."""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    operation: Operation
    duration_ms: float = Field(ge=0)
    success: bool
    is_fallback: bool = False
    cached: bool = False
    technologies_detected: int = Field(default=0, ge=0)


class PerformanceStats(BaseModel):
    total: int = 0
    successful: int = 0
    failed: int = 0
    fallback_count: int = 0
    cached_count: int = 0
    success_rate: float = 0.0
    fallback_rate: float = 0.0
    average_duration_ms: float = 0.0
    slow_count: int = 0


class PerformanceMonitor:
    """Metricas rolling sobre las ultimas N operaciones (las mas viejas se descartan)."""

    def __init__(
        self,
        max_samples: int | None = None,
        slow_threshold_ms: float | None = None,
        stats_log_interval: int | None = None,
    ):
        self.max_samples = max_samples if max_samples is not None else settings.monitor_max_samples
        self.slow_threshold_ms = (
            slow_threshold_ms if slow_threshold_ms is not None else settings.monitor_slow_threshold_ms
        )
        self.stats_log_interval = (
            stats_log_interval if stats_log_interval is not None else settings.monitor_stats_log_interval
        )
        if self.max_samples < 1:
            raise ValueError(f"max_samples must be >= 1, got {self.max_samples}")
        if self.stats_log_interval < 1:
            raise ValueError(f"stats_log_interval must be >= 1, got {self.stats_log_interval}")
        if self.slow_threshold_ms <= 0:
            raise ValueError(f"slow_threshold_ms must be > 0, got {self.slow_threshold_ms}")
        self._samples: deque[PerformanceSample] = deque(maxlen=self.max_samples)
        self._recorded = 0
        self._lock = threading.Lock()

    def record_detection(
        self,
        duration_ms: float,
        success: bool,
        technologies_detected: int = 0,
        is_fallback: bool = False,
    ) -> None:
        self._record(
            PerformanceSample(
                operation="detection",
                duration_ms=duration_ms,
                success=success,
                technologies_detected=technologies_detected,
                is_fallback=is_fallback,
            )
        )

    def record_insights_generation(
        self,
        duration_ms: float,
        success: bool = True,
        cached: bool = False,
        is_fallback: bool = False,
    ) -> None:
        self._record(
            PerformanceSample(
                operation="insights",
                duration_ms=duration_ms,
                success=success,
                cached=cached,
                is_fallback=is_fallback,
            )
        )

    def _record(self, sample: PerformanceSample) -> None:
        with self._lock:
            self._samples.append(sample)
            self._recorded += 1
            recorded = self._recorded
            log_stats = recorded % self.stats_log_interval == 0

        if sample.duration_ms > self.slow_threshold_ms:
            logger.warning(
                f"Slow {sample.operation} operation: {sample.duration_ms:.0f}ms "
                f"(threshold: {self.slow_threshold_ms:.0f}ms, success: {sample.success})"
            )

        if log_stats:
            stats = self.get_stats()
            logger.info(f"Performance stats after {recorded} operations: {stats.model_dump()}")

    def get_stats(self, operation: Operation | None = None) -> PerformanceStats:
        """Estadisticas del buffer actual, opcionalmente filtradas por tipo de operacion."""
        with self._lock:
            samples = [s for s in self._samples if operation is None or s.operation == operation]

        total = len(samples)
        if total == 0:
            return PerformanceStats()

        successful = sum(1 for s in samples if s.success)
        fallback_count = sum(1 for s in samples if s.is_fallback)

        return PerformanceStats(
            total=total,
            successful=successful,
            failed=total - successful,
            fallback_count=fallback_count,
            cached_count=sum(1 for s in samples if s.cached),
            success_rate=round(successful / total * 100, 2),
            fallback_rate=round(fallback_count / total * 100, 2),
            average_duration_ms=round(sum(s.duration_ms for s in samples) / total, 2),
            slow_count=sum(1 for s in samples if s.duration_ms > self.slow_threshold_ms),
        )

    def get_recent_samples(self, count: int = 10) -> list[PerformanceSample]:
        if count <= 0:
            return []
        with self._lock:
            return list(self._samples)[-count:]

    def reset(self) -> None:
        with self._lock:
            self._samples.clear()
            self._recorded = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)
