"""
Provedor Batik Air
"""
from typing import Any, Dict, Iterable

from ...domain.models import Flight
from ..parsing import normalize_price, parse_flight_time
from .base import BaseFlightProvider

CODE_SUCCESS = 200


class BatikProvider(BaseFlightProvider):
    """Provedor de voos via API Batik Air"""

    name = "Batik Air"
    search_path = "/batik/search"

    def _is_success(self, raw_data: Dict[str, Any]) -> bool:
        return raw_data.get("code") == CODE_SUCCESS

    def _extract_records(self, raw_data: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
        return raw_data.get("results") or []

    def _map_record(self, record: Dict[str, Any]) -> Flight:
        fare = record.get("fare") or {}
        departure = parse_flight_time(record["departureDateTime"], default_tz=self.default_tz)
        arrival = parse_flight_time(record["arrivalDateTime"], default_tz=self.default_tz)

        return Flight(
            flight_code=record["flightNumber"],
            airline=record.get("airlineName", ""),
            airline_code=record.get("airlineIATA", ""),
            origin=record["origin"],
            destination=record["destination"],
            departure_time=departure,
            arrival_time=arrival,
            # travelTime vem como texto livre; a duração sai dos horários
            duration_minutes=max(0, int((arrival - departure).total_seconds() // 60)),
            stops=int(record.get("numberOfStops") or 0),
            price=normalize_price(fare.get("totalPrice")),
            available_seats=int(record.get("seatsAvailable") or 0),
            aircraft=record.get("aircraftModel") or "",
            baggage=record.get("baggageInfo") or "",
            amenities=tuple(record.get("onboardServices") or ()),
            provider=self.name,
        )
