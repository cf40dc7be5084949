"""Utilidades de cache en memoria con TTL, eviction LRU y estadisticas."""

import threading
import time
from collections import OrderedDict
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class TTLCache(Generic[T]):
    """
    Cache en memoria con expiracion por TTL y eviction LRU.

    Todas las operaciones estan protegidas por un lock para poder compartir
    la instancia entre threads y tareas asyncio.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_size: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self._ttl_seconds = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._store: OrderedDict[str, tuple[float, T]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def _is_expired(self, ts: float, now: float) -> bool:
        return now - ts > self._ttl_seconds

    def get(self, key: str) -> T | None:
        """Obtiene un valor si existe y no expiro. Las entradas vencidas se eliminan."""
        value, _ = self.lookup(key)
        return value

    def lookup(self, key: str) -> tuple[T | None, float | None]:
        """
        Como get(), pero en una sola seccion critica devuelve tambien la edad
        de una entrada vencida: (valor, None) en hit, (None, edad) si expiro
        y (None, None) si no existia.
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None, None

            ts, value = entry
            now = self._clock()
            if self._is_expired(ts, now):
                del self._store[key]
                self._evictions += 1
                self._misses += 1
                return None, now - ts

            self._store.move_to_end(key)
            self._hits += 1
            return value, None

    def set(self, key: str, value: T) -> None:
        """Guarda un valor y aplica politica de eviction LRU."""
        with self._lock:
            self._store[key] = (self._clock(), value)
            self._store.move_to_end(key)
            if self._max_size is not None:
                while len(self._store) > self._max_size:
                    self._store.popitem(last=False)
                    self._evictions += 1

    def contains(self, key: str) -> bool:
        """Indica si hay una entrada vigente, sin tocar estadisticas."""
        with self._lock:
            entry = self._store.get(key)
            return entry is not None and not self._is_expired(entry[0], self._clock())

    def age(self, key: str) -> float | None:
        """Edad en segundos de la entrada, vigente o no."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                return None
            return self._clock() - entry[0]

    def purge_expired(self) -> int:
        """Elimina todas las entradas vencidas y retorna cuantas se borraron."""
        with self._lock:
            now = self._clock()
            expired = [k for k, (ts, _) in self._store.items() if self._is_expired(ts, now)]
            for key in expired:
                del self._store[key]
            self._evictions += len(expired)
            return len(expired)

    def clear(self) -> int:
        """Limpia todo el cache y retorna la cantidad de entradas borradas."""
        with self._lock:
            size = len(self._store)
            self._store.clear()
            return size

    def reset_stats(self) -> None:
        with self._lock:
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
                "size": len(self._store),
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
