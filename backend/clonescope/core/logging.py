import logging
import sys
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Directorio de logs (backend/logs/)
_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

# Símbolos para visualizar el flujo
FLOW_SYMBOLS = {
    "start": "╔",
    "node": "║",
    "arrow": "→",
    "end": "╚",
    "route": "◆",
}


def _configure_root_logger(level: LogLevel, log_to_file: bool) -> None:
    """Configura el logger raíz con handlers de consola y archivo."""
    root = logging.getLogger()
    if root.handlers:
        return

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    # Handler de consola (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Handler de archivo con rotación diaria (mantiene 7 días)
    if log_to_file:
        try:
            _LOG_DIR.mkdir(exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                _LOG_DIR / "clonescope.log",
                when="midnight",
                interval=1,
                backupCount=7,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            # Si falla la creación del archivo, solo usar consola
            root.warning(f"File logging disabled: {e}")

    root.setLevel(level)


@lru_cache(maxsize=128)
def get_logger(name: str) -> logging.Logger:
    """
    Retorna un logger configurado para el módulo especificado.

    Uso:
        from clonescope.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Mensaje")
    """
    from clonescope.core.config import settings

    _configure_root_logger(settings.log_level, settings.log_to_file)
    return logging.getLogger(name)


class InsightsLogger:
    """Logger especializado para trazabilidad del pipeline de insights."""

    def __init__(self, component: str):
        self._logger = get_logger(f"insights.{component}")
        self.component = component

    def pipeline_start(self, tech_count: int, complexity_score: int) -> None:
        self._logger.info(
            f"{FLOW_SYMBOLS['start']}══ INSIGHTS START | technologies: {tech_count} | "
            f"complexity: {complexity_score}/10"
        )

    def cache_hit(self, key: str) -> None:
        self._logger.info(f"{FLOW_SYMBOLS['node']} [CACHE] {FLOW_SYMBOLS['arrow']} hit | key: {key[:50]}")

    def retry(self, attempt: int, max_attempts: int, delay: float, error: Exception) -> None:
        self._logger.warning(
            f"{FLOW_SYMBOLS['node']} [GENERATE] attempt {attempt}/{max_attempts} failed "
            f"({type(error).__name__}: {error}), retrying in {delay:.2f}s"
        )

    def fallback(self, stage: str, error: Exception) -> None:
        """Log degradación a un nivel de fallback."""
        self._logger.error(
            f"{FLOW_SYMBOLS['route']} FALLBACK [{stage.upper()}] after {type(error).__name__}: {error}",
            exc_info=error,
        )

    def pipeline_end(self, status: str, duration_ms: float, cached: bool, tech_count: int) -> None:
        """Log fin del pipeline con resumen."""
        self._logger.info(
            f"{FLOW_SYMBOLS['end']}══ INSIGHTS {status.upper()} | duration: {duration_ms:.1f}ms | "
            f"cached: {cached} | technologies: {tech_count}"
        )

    def slow(self, duration_ms: float, target_ms: float) -> None:
        self._logger.warning(
            f"{FLOW_SYMBOLS['route']} Insights generation took {duration_ms:.1f}ms (target: <{target_ms:.0f}ms)"
        )
