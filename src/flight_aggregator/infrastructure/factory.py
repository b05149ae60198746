"""
Factory para criar instâncias configuradas dos serviços
"""
from typing import List

from ..application.aggregator import FlightAggregator
from ..application.interfaces import FlightProviderInterface, RankingServiceInterface
from ..application.ranking import FlightRankingService
from ..application.services import FlightSearchService
from .cache import ResultCache
from .config import Config
from .providers.airasia_provider import AirAsiaProvider
from .providers.batik_provider import BatikProvider
from .providers.garuda_provider import GarudaProvider
from .providers.lion_air_provider import LionAirProvider


class FlightSearchServiceFactory:
    """Factory para criar o serviço de busca configurado"""

    @staticmethod
    def create(config: Config = None, cache: ResultCache = None) -> FlightSearchService:
        """Cria uma instância completa do serviço de busca"""
        if config is None:
            config = Config()
        if cache is None:
            cache = ResultCache()

        providers = FlightSearchServiceFactory._create_providers(config)

        aggregator = FlightAggregator(
            providers=providers,
            cache=cache,
            timeout=config.AGGREGATION_TIMEOUT,
            cache_ttl=config.CACHE_TTL,
        )

        return FlightSearchService(
            aggregator=aggregator,
            cache=cache,
            ranking_service=FlightSearchServiceFactory._create_ranking_service(),
        )

    @staticmethod
    def _create_providers(config: Config) -> List[FlightProviderInterface]:
        """Cria lista de provedores, na ordem de registro"""
        return [
            GarudaProvider(config.GARUDA_BASE_URL, config),
            LionAirProvider(config.LION_AIR_BASE_URL, config),
            AirAsiaProvider(config.AIRASIA_BASE_URL, config),
            BatikProvider(config.BATIK_BASE_URL, config),
        ]

    @staticmethod
    def _create_ranking_service() -> RankingServiceInterface:
        """Cria serviço de filtro e ordenação"""
        return FlightRankingService()
