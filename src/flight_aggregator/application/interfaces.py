"""
Interfaces/Contratos para Application Layer
"""
from abc import ABC, abstractmethod
from typing import List, Optional, Protocol

from ..domain.models import Flight, SearchQuery


class FlightProviderInterface(Protocol):
    """Interface para provedores de voo"""
    name: str

    async def search(self, query: SearchQuery) -> List[Flight]:
        """Busca voos; levanta ProviderError se a chamada inteira falhar"""
        ...


class ResultCacheInterface(Protocol):
    """Interface para o cache de resultados agregados"""

    def get(self, fingerprint: str) -> Optional[List[Flight]]:
        ...

    def put(self, fingerprint: str, flights: List[Flight], ttl: float) -> None:
        ...


class RankingServiceInterface(ABC):
    """Interface para serviço de filtro e ordenação"""

    @abstractmethod
    def apply(self, flights: List[Flight], query: SearchQuery) -> List[Flight]:
        """Filtra e ordena voos conforme a consulta"""
        pass
