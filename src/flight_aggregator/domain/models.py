"""
Domain Models - Entidades de negócio puras
"""
from datetime import date, datetime, time
from enum import Enum
from typing import FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

DATE_LAYOUT = "%Y-%m-%d"


class SortOption(str, Enum):
    """Critérios de ordenação suportados"""
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    DURATION_ASC = "duration_asc"
    DURATION_DESC = "duration_desc"
    DEPARTURE_ASC = "departure_asc"
    ARRIVAL_ASC = "arrival_asc"
    BEST_VALUE = "best_value"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOption":
        """Converte texto livre; desconhecido ou vazio vira best_value"""
        if not value:
            return cls.BEST_VALUE
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.BEST_VALUE


class Flight(BaseModel):
    """Voo normalizado, independente do provedor de origem"""
    model_config = ConfigDict(frozen=True)

    flight_code: str = Field(..., description="Código do voo")
    airline: str = Field(..., description="Nome da companhia aérea")
    airline_code: str = Field(..., description="Código IATA da companhia")
    origin: str = Field(..., description="IATA origem")
    destination: str = Field(..., description="IATA destino")
    departure_time: datetime = Field(..., description="Partida com fuso resolvido")
    arrival_time: datetime = Field(..., description="Chegada com fuso resolvido")
    duration_minutes: int = Field(..., ge=0)
    stops: int = Field(default=0, ge=0)
    price: int = Field(..., ge=0, description="Preço na moeda de referência")
    available_seats: int = 0
    aircraft: str = ""
    baggage: str = ""
    amenities: Tuple[str, ...] = ()
    provider: str = ""

    @property
    def has_valid_schedule(self) -> bool:
        """Chegada estritamente depois da partida"""
        return self.arrival_time > self.departure_time

    @property
    def route_summary(self) -> str:
        """Resumo da rota"""
        return f"{self.origin} → {self.destination}"


class SearchQuery(BaseModel):
    """Critérios de busca (identidade + filtros + ordenação)"""
    origin: str = Field(..., min_length=1, description="IATA origem")
    destination: str = Field(..., min_length=1, description="IATA destino")
    departure_date: str = Field(..., min_length=1, description="Data de partida (YYYY-MM-DD)")
    passengers: int = Field(default=1, ge=1)
    cabin_class: str = "economy"

    min_price: Optional[int] = None
    max_price: Optional[int] = None
    max_stops: Optional[int] = None
    max_duration: Optional[int] = None
    airlines: List[str] = Field(default_factory=list)
    earliest_departure: Optional[str] = None
    latest_departure: Optional[str] = None
    earliest_arrival: Optional[str] = None
    latest_arrival: Optional[str] = None

    sort_by: Optional[str] = None

    def normalized_date(self) -> str:
        """Data de partida em ISO (2025-6-1 vira 2025-06-01); inválida volta como veio"""
        text = self.departure_date.strip()
        try:
            return datetime.strptime(text, DATE_LAYOUT).date().isoformat()
        except ValueError:
            return text

    def fingerprint(self) -> str:
        """Chave de cache: somente os campos que mudam a resposta dos provedores"""
        parts = [
            self.origin.strip().upper(),
            self.destination.strip().upper(),
            self.normalized_date(),
            self.cabin_class.strip().lower(),
            str(self.passengers),
        ]
        return "|".join(parts)


class FlightFilter(BaseModel):
    """Restrições já interpretadas a partir da consulta"""
    departure_date: date
    min_price: int = 0
    max_price: int = 0
    max_stops: Optional[int] = None
    max_duration: int = 0
    airlines: Optional[FrozenSet[str]] = Field(None, description="None = sem restrição")
    earliest_departure: Optional[time] = None
    latest_departure: Optional[time] = None
    earliest_arrival: Optional[time] = None
    latest_arrival: Optional[time] = None


class AggregationOutcome(BaseModel):
    """Resultado efêmero de uma rodada de agregação"""
    flights: List[Flight] = Field(default_factory=list)
    providers_queried: int = 0
    providers_succeeded: int = 0
    providers_failed: int = 0


class SearchResult(BaseModel):
    """Resultado de uma busca"""
    flights: List[Flight]
    cache_hit: bool = False
    providers_queried: int = 0
    providers_succeeded: int = 0
    providers_failed: int = 0
    search_time_ms: int = 0

    @property
    def total_results(self) -> int:
        return len(self.flights)

    @property
    def cheapest_flight(self) -> Optional[Flight]:
        """Voo mais barato"""
        if not self.flights:
            return None
        return min(self.flights, key=lambda f: f.price)
