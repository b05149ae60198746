"""
Cache em memória dos resultados agregados (sem filtros)
"""
import threading
import time
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, NamedTuple, Optional, Tuple

from ..domain.models import Flight


class _CacheEntry(NamedTuple):
    flights: Tuple[Flight, ...]
    expires_at: float


class ReadWriteLock:
    """Leituras compartilhadas, escrita exclusiva"""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ResultCache:
    """Cache com TTL indexado pela impressão digital da consulta.

    Entradas expiradas contam como ausentes e são removidas na leitura que
    as encontra; não há varredura periódica.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: Dict[str, _CacheEntry] = {}

    def get(self, fingerprint: str) -> Optional[List[Flight]]:
        """Retorna uma cópia da lista em cache ou None"""
        with self._lock.read():
            entry = self._entries.get(fingerprint)

        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            self._discard(fingerprint, entry)
            return None
        return list(entry.flights)

    def put(self, fingerprint: str, flights: List[Flight], ttl: float) -> None:
        entry = _CacheEntry(tuple(flights), self._clock() + ttl)
        with self._lock.write():
            self._entries[fingerprint] = entry

    def clear(self) -> None:
        with self._lock.write():
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def _discard(self, fingerprint: str, entry: _CacheEntry) -> None:
        with self._lock.write():
            # Só remove se ninguém regravou a chave nesse meio tempo
            if self._entries.get(fingerprint) is entry:
                del self._entries[fingerprint]
