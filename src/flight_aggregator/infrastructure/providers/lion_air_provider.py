"""
Provedor Lion Air
"""
from typing import Any, Dict, Iterable, List

from ...domain.models import Flight
from ..parsing import normalize_price, parse_flight_time, reconcile_stops
from .base import BaseFlightProvider


class LionAirProvider(BaseFlightProvider):
    """Provedor de voos via API Lion Air

    Os horários chegam sem offset, acompanhados do fuso nomeado em
    ``departure_timezone``/``arrival_timezone``.
    """

    name = "Lion Air"
    search_path = "/lion/search"

    def _is_success(self, raw_data: Dict[str, Any]) -> bool:
        return raw_data.get("success") is True

    def _extract_records(self, raw_data: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
        data = raw_data.get("data") or {}
        return data.get("available_flights") or []

    def _map_record(self, record: Dict[str, Any]) -> Flight:
        carrier = record.get("carrier") or {}
        route = record["route"]
        schedule = record["schedule"]
        pricing = record.get("pricing") or {}
        services = record.get("services") or {}

        return Flight(
            flight_code=record["id"],
            airline=carrier.get("name", ""),
            airline_code=carrier.get("iata", ""),
            origin=route["from"]["code"],
            destination=route["to"]["code"],
            departure_time=parse_flight_time(
                schedule["departure"],
                tz_name=schedule.get("departure_timezone"),
                default_tz=self.default_tz,
            ),
            arrival_time=parse_flight_time(
                schedule["arrival"],
                tz_name=schedule.get("arrival_timezone"),
                default_tz=self.default_tz,
            ),
            duration_minutes=int(record.get("flight_time") or 0),
            stops=reconcile_stops(record.get("is_direct"), record.get("stop_count")),
            price=normalize_price(pricing.get("total")),
            available_seats=int(record.get("seats_left") or 0),
            aircraft=record.get("plane_type") or "",
            baggage=self._format_baggage(services.get("baggage_allowance") or {}),
            amenities=tuple(self._amenities(services)),
            provider=self.name,
        )

    def _format_baggage(self, allowance: Dict[str, Any]) -> str:
        if not allowance:
            return ""
        return f"{allowance.get('cabin', '')} cabin, {allowance.get('hold', '')} checked"

    def _amenities(self, services: Dict[str, Any]) -> List[str]:
        amenities = []
        if services.get("wifi_available"):
            amenities.append("wifi")
        if services.get("meals_included"):
            amenities.append("meal")
        return amenities
