"""
Filter & Rank Engine - aplica as restrições da consulta e ordena o resultado
"""
from datetime import date, datetime, time
from typing import Any, Callable, Dict, List, Optional

from ..domain.exceptions import QueryValidationError
from ..domain.models import DATE_LAYOUT, Flight, FlightFilter, SearchQuery, SortOption
from ..infrastructure.parsing import resolve_airline_codes
from .interfaces import RankingServiceInterface

TIME_OF_DAY_LAYOUT = "%H:%M"

# Pesos fixos do score best_value (menor é melhor)
PRICE_DIVISOR = 10_000
STOP_PENALTY = 100


def best_value_score(flight: Flight) -> int:
    """Combina preço, duração e paradas num único escalar"""
    return flight.price // PRICE_DIVISOR + flight.duration_minutes + STOP_PENALTY * flight.stops


SORT_KEYS: Dict[SortOption, Callable[[Flight], Any]] = {
    SortOption.PRICE_ASC: lambda f: f.price,
    SortOption.PRICE_DESC: lambda f: -f.price,
    SortOption.DURATION_ASC: lambda f: f.duration_minutes,
    SortOption.DURATION_DESC: lambda f: -f.duration_minutes,
    SortOption.DEPARTURE_ASC: lambda f: f.departure_time,
    SortOption.ARRIVAL_ASC: lambda f: f.arrival_time,
    SortOption.BEST_VALUE: best_value_score,
}


def _parse_time_of_day(value: Optional[str], field: str, second: int = 0) -> Optional[time]:
    if value is None or not value.strip():
        return None
    try:
        parsed = datetime.strptime(value.strip(), TIME_OF_DAY_LAYOUT)
    except ValueError as e:
        raise QueryValidationError(f"invalid {field}: {value!r}, expected HH:MM") from e
    return parsed.time().replace(second=second)


def build_filter(query: SearchQuery) -> FlightFilter:
    """Interpreta os campos textuais da consulta; levanta QueryValidationError"""
    try:
        departure_date = datetime.strptime(query.departure_date.strip(), DATE_LAYOUT).date()
    except ValueError as e:
        raise QueryValidationError(
            f"invalid departure_date: {query.departure_date!r}, expected YYYY-MM-DD"
        ) from e

    airlines = None
    if any(a and a.strip() for a in query.airlines):
        airlines = frozenset(resolve_airline_codes(query.airlines))

    max_stops = query.max_stops
    if max_stops is not None and max_stops < 0:
        max_stops = None

    return FlightFilter(
        departure_date=departure_date,
        min_price=query.min_price or 0,
        max_price=query.max_price or 0,
        max_stops=max_stops,
        max_duration=query.max_duration or 0,
        airlines=airlines,
        earliest_departure=_parse_time_of_day(query.earliest_departure, "earliest_departure"),
        latest_departure=_parse_time_of_day(query.latest_departure, "latest_departure", second=59),
        earliest_arrival=_parse_time_of_day(query.earliest_arrival, "earliest_arrival"),
        latest_arrival=_parse_time_of_day(query.latest_arrival, "latest_arrival", second=59),
    )


def _within_window(
    instant: datetime, on: date, earliest: Optional[time], latest: Optional[time]
) -> bool:
    # Os limites HH:MM valem no fuso do próprio voo
    tz = instant.tzinfo
    if earliest is not None and instant < datetime.combine(on, earliest, tzinfo=tz):
        return False
    if latest is not None and instant > datetime.combine(on, latest, tzinfo=tz):
        return False
    return True


def matches(flight: Flight, query: SearchQuery, flt: FlightFilter) -> bool:
    """Predicado de filtro; todas as condições precisam valer"""
    if flight.origin.strip().upper() != query.origin.strip().upper():
        return False
    if flight.destination.strip().upper() != query.destination.strip().upper():
        return False
    if flight.departure_time.date() != flt.departure_date:
        return False

    if flt.min_price > 0 and flight.price < flt.min_price:
        return False
    if flt.max_price > 0 and flight.price > flt.max_price:
        return False
    if flt.max_stops is not None and flight.stops > flt.max_stops:
        return False
    if flt.max_duration > 0 and flight.duration_minutes > flt.max_duration:
        return False
    if flt.airlines is not None and flight.airline_code.strip().upper() not in flt.airlines:
        return False

    if not _within_window(
        flight.departure_time, flt.departure_date, flt.earliest_departure, flt.latest_departure
    ):
        return False
    if not _within_window(
        flight.arrival_time, flt.departure_date, flt.earliest_arrival, flt.latest_arrival
    ):
        return False
    return True


def filter_flights(flights: List[Flight], query: SearchQuery, flt: FlightFilter) -> List[Flight]:
    return [f for f in flights if matches(f, query, flt)]


def sort_flights(flights: List[Flight], sort_by: Optional[str]) -> List[Flight]:
    """Ordenação estável; empates desfeitos por partida e código do voo"""
    primary = SORT_KEYS[SortOption.parse(sort_by)]
    return sorted(flights, key=lambda f: (primary(f), f.departure_time, f.flight_code))


class FlightRankingService(RankingServiceInterface):
    """Serviço de filtro e ordenação (puro, sem I/O)"""

    def apply(self, flights: List[Flight], query: SearchQuery) -> List[Flight]:
        flt = build_filter(query)
        return sort_flights(filter_flights(flights, query, flt), query.sort_by)
