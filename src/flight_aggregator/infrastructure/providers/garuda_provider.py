"""
Provedor Garuda Indonesia
"""
from typing import Any, Dict, Iterable

from ...domain.models import Flight
from ..parsing import normalize_price, parse_flight_time
from .base import BaseFlightProvider

STATUS_SUCCESS = "success"


class GarudaProvider(BaseFlightProvider):
    """Provedor de voos via API Garuda Indonesia"""

    name = "Garuda Indonesia"
    search_path = "/garuda/search"

    def _is_success(self, raw_data: Dict[str, Any]) -> bool:
        return raw_data.get("status") == STATUS_SUCCESS

    def _extract_records(self, raw_data: Dict[str, Any]) -> Iterable[Dict[str, Any]]:
        return raw_data.get("flights") or []

    def _map_record(self, record: Dict[str, Any]) -> Flight:
        departure = record["departure"]
        arrival = record["arrival"]
        price = record.get("price") or {}

        return Flight(
            flight_code=record["flight_id"],
            airline=record.get("airline", ""),
            airline_code=record.get("airline_code", ""),
            origin=departure["airport"],
            destination=arrival["airport"],
            departure_time=parse_flight_time(departure["time"], default_tz=self.default_tz),
            arrival_time=parse_flight_time(arrival["time"], default_tz=self.default_tz),
            duration_minutes=int(record.get("duration_minutes") or 0),
            stops=int(record.get("stops") or 0),
            price=normalize_price(price.get("amount")),
            available_seats=int(record.get("available_seats") or 0),
            aircraft=record.get("aircraft") or "",
            baggage=self._format_baggage(record.get("baggage") or {}),
            amenities=tuple(record.get("amenities") or ()),
            provider=self.name,
        )

    def _format_baggage(self, baggage: Dict[str, Any]) -> str:
        """Resumo da franquia de bagagem"""
        if not baggage:
            return ""
        return f"{baggage.get('carry_on', 0)} carry-on, {baggage.get('checked', 0)} checked"
