"""
Base Provider - Template Method Pattern
"""
import logging
from abc import ABC, abstractmethod
from datetime import tzinfo
from typing import Any, Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from ...domain.exceptions import ProviderError
from ...domain.models import Flight, SearchQuery
from ..config import Config
from ..parsing import load_zone

logger = logging.getLogger(__name__)

# Falhas isoladas de um registro: descarta o registro e segue
RECORD_ERRORS = (ValueError, KeyError, TypeError, AttributeError, ValidationError)


class BaseFlightProvider(ABC):
    """Classe base para provedores de voo usando Template Method Pattern"""

    name: str = ""
    search_path: str = ""

    def __init__(
        self,
        base_url: str,
        config: Optional[Config] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if config is None:
            config = Config()
        self._base_url = base_url.rstrip("/")
        self._config = config
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self._base_url}{self.search_path}"

    @property
    def default_tz(self) -> tzinfo:
        return load_zone(self._config.DEFAULT_TIMEZONE)

    async def search(self, query: SearchQuery) -> List[Flight]:
        """Template method para busca de voos"""
        raw_data = await self._make_request(query)
        if not self._is_success(raw_data):
            raise ProviderError(self.name, "upstream reported failure")

        flights = []
        for record in self._extract_records(raw_data):
            try:
                flights.append(self._map_record(record))
            except RECORD_ERRORS as e:
                logger.debug("%s: skipping record: %s", self.name, e)
        return flights

    async def _make_request(self, query: SearchQuery) -> Dict[str, Any]:
        """Faz a requisição HTTP e decodifica o JSON"""
        async with httpx.AsyncClient(
            timeout=self._config.REQUEST_TIMEOUT, transport=self._transport
        ) as client:
            try:
                response = await client.get(self.url, params=self._build_search_params(query))
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise ProviderError(self.name, f"transport error: {e}") from e

            try:
                data = response.json()
            except ValueError as e:
                raise ProviderError(self.name, f"decode error: {e}") from e

        if not isinstance(data, dict):
            raise ProviderError(self.name, "decode error: unexpected payload")
        return data

    def _build_search_params(self, query: SearchQuery) -> Dict[str, Any]:
        """Constrói parâmetros da requisição"""
        return {
            "origin": query.origin.upper(),
            "destination": query.destination.upper(),
            "date": query.normalized_date(),
            "passengers": query.passengers,
            "cabin_class": query.cabin_class,
        }

    @abstractmethod
    def _is_success(self, raw_data: Dict[str, Any]) -> bool:
        """Verifica o envelope de status do provedor"""
        pass

    @abstractmethod
    def _extract_records(self, raw_data: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
        """Extrai a lista de registros do envelope"""
        pass

    @abstractmethod
    def _map_record(self, record: Dict[str, Any]) -> Flight:
        """Converte um registro nativo no modelo canônico"""
        pass
