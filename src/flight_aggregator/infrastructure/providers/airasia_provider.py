"""
Provedor AirAsia
"""
from typing import Any, Dict, Iterable

from ...domain.models import Flight
from ..parsing import normalize_price, parse_flight_time, reconcile_stops
from .base import BaseFlightProvider

STATUS_OK = "ok"


class AirAsiaProvider(BaseFlightProvider):
    """Provedor de voos via API AirAsia"""

    name = "AirAsia"
    search_path = "/airasia/search"

    def _is_success(self, raw_data: Dict[str, Any]) -> bool:
        return raw_data.get("status") == STATUS_OK

    def _extract_records(self, raw_data: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
        return raw_data.get("flights") or []

    def _map_record(self, record: Dict[str, Any]) -> Flight:
        flight_code = record["flight_code"]
        stops = record.get("stops") or []

        return Flight(
            flight_code=flight_code,
            airline=record.get("airline", ""),
            # A API não informa o código IATA; vem do prefixo do voo
            airline_code=flight_code[:2],
            origin=record["from_airport"],
            destination=record["to_airport"],
            departure_time=parse_flight_time(record["depart_time"], default_tz=self.default_tz),
            arrival_time=parse_flight_time(record["arrive_time"], default_tz=self.default_tz),
            duration_minutes=round(float(record.get("duration_hours") or 0) * 60),
            stops=reconcile_stops(record.get("direct_flight"), len(stops) if stops else None),
            price=normalize_price(record.get("price_idr")),
            available_seats=int(record.get("seats") or 0),
            baggage=record.get("baggage_note") or "",
            provider=self.name,
        )
