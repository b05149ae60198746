"""
Aggregation Engine - fan-out/fan-in nos provedores sob um prazo único
"""
import asyncio
import logging
from typing import List, Sequence

from ..domain.models import AggregationOutcome, Flight, SearchQuery
from .interfaces import FlightProviderInterface, ResultCacheInterface

logger = logging.getLogger(__name__)

AGGREGATION_TIMEOUT = 5.0
CACHE_TTL = 180.0


def _discard_result(task: "asyncio.Task[List[Flight]]") -> None:
    # Consome a exceção para o asyncio não reclamar de exceção nunca lida
    if not task.cancelled() and task.exception() is not None:
        logger.debug("abandoned provider task ended with: %s", task.exception())


class FlightAggregator:
    """Consulta todos os provedores em paralelo e mescla os resultados.

    Um provedor lento ou com erro não bloqueia os demais: ao fim do prazo as
    tarefas pendentes são canceladas e contadas como falha. O resultado
    mesclado (sem filtros) é gravado no cache antes de retornar.
    """

    def __init__(
        self,
        providers: Sequence[FlightProviderInterface],
        cache: ResultCacheInterface,
        timeout: float = AGGREGATION_TIMEOUT,
        cache_ttl: float = CACHE_TTL,
    ):
        self._providers = tuple(providers)
        self._cache = cache
        self._timeout = timeout
        self._cache_ttl = cache_ttl

    @property
    def providers(self) -> Sequence[FlightProviderInterface]:
        return self._providers

    async def aggregate(self, query: SearchQuery) -> AggregationOutcome:
        """Executa a rodada de agregação para a consulta"""
        tasks = {
            asyncio.create_task(provider.search(query)): provider
            for provider in self._providers
        }

        done, pending = set(), set()
        if tasks:
            done, pending = await asyncio.wait(tasks, timeout=self._timeout)

        for task in pending:
            # Termina em segundo plano (clientes HTTP fecham sozinhos); resultado descartado
            task.add_done_callback(_discard_result)
            task.cancel()
            logger.warning(
                "provider %s timed out after %.1fs", tasks[task].name, self._timeout
            )

        flights: List[Flight] = []
        succeeded = 0
        # Percorre na ordem de registro para um merge reproduzível
        for task, provider in tasks.items():
            if task not in done or task.cancelled():
                continue
            error = task.exception()
            if error is not None:
                logger.warning("provider %s failed: %s", provider.name, error)
                continue
            succeeded += 1
            flights.extend(self._valid_flights(provider, task.result() or []))

        self._cache.put(query.fingerprint(), flights, self._cache_ttl)

        return AggregationOutcome(
            flights=flights,
            providers_queried=len(tasks),
            providers_succeeded=succeeded,
            providers_failed=len(tasks) - succeeded,
        )

    def _valid_flights(
        self, provider: FlightProviderInterface, flights: List[Flight]
    ) -> List[Flight]:
        valid = []
        for flight in flights:
            if not flight.has_valid_schedule:
                logger.debug(
                    "%s: dropping %s, arrival not after departure",
                    provider.name, flight.flight_code,
                )
                continue
            valid.append(flight)
        return valid
