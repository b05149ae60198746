"""
Application Services - Casos de uso principais
"""
import asyncio
import logging
import time
from typing import Dict

from ..domain.models import AggregationOutcome, SearchQuery, SearchResult
from .aggregator import FlightAggregator
from .interfaces import RankingServiceInterface, ResultCacheInterface
from .ranking import build_filter

logger = logging.getLogger(__name__)


class FlightSearchService:
    """Serviço principal de busca de voos: cache, agregação, filtro e ordenação"""

    def __init__(
        self,
        aggregator: FlightAggregator,
        cache: ResultCacheInterface,
        ranking_service: RankingServiceInterface,
    ):
        self._aggregator = aggregator
        self._cache = cache
        self._ranking_service = ranking_service
        self._inflight: Dict[str, "asyncio.Future[AggregationOutcome]"] = {}

    async def search(self, query: SearchQuery) -> SearchResult:
        """Executa a busca completa; só erros de validação chegam ao chamador"""
        started = time.perf_counter()

        # Valida antes de qualquer chamada aos provedores
        build_filter(query)

        fingerprint = query.fingerprint()
        cached = self._cache.get(fingerprint)

        if cached is not None:
            flights = self._ranking_service.apply(cached, query)
            result = SearchResult(flights=flights, cache_hit=True)
        else:
            outcome = await self._aggregate_once(fingerprint, query)
            flights = self._ranking_service.apply(outcome.flights, query)
            result = SearchResult(
                flights=flights,
                cache_hit=False,
                providers_queried=outcome.providers_queried,
                providers_succeeded=outcome.providers_succeeded,
                providers_failed=outcome.providers_failed,
            )

        result.search_time_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "search %s: %d results (cache_hit=%s, providers %d/%d ok)",
            fingerprint,
            result.total_results,
            result.cache_hit,
            result.providers_succeeded,
            result.providers_queried,
        )
        return result

    async def _aggregate_once(self, fingerprint: str, query: SearchQuery) -> AggregationOutcome:
        """Buscas simultâneas com a mesma chave compartilham uma única agregação"""
        task = self._inflight.get(fingerprint)
        if task is None:
            task = asyncio.ensure_future(self._aggregator.aggregate(query))
            self._inflight[fingerprint] = task
            task.add_done_callback(lambda t: self._forget(fingerprint, t))
        else:
            logger.debug("search %s: joining in-flight aggregation", fingerprint)
        # shield: cancelar um chamador não derruba a agregação dos outros
        return await asyncio.shield(task)

    def _forget(self, fingerprint: str, task: "asyncio.Future[AggregationOutcome]") -> None:
        if self._inflight.get(fingerprint) is task:
            del self._inflight[fingerprint]
