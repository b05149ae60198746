"""
Normalização de campos heterogêneos dos provedores (horário, preço, paradas, companhia)
"""
import math
from datetime import datetime, timezone, tzinfo
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Any, Iterable, Iterator, Optional, Set, Tuple, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..domain.exceptions import PriceFormatError, TimeFormatError

# Ordem importa: o primeiro layout que casar vence
OFFSET_LAYOUTS: Tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S%z",       # 2025-06-01T06:00:00+07:00, ...Z, ...+0700
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S%z",
)

NAIVE_LAYOUTS: Tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)

AIRLINE_ALIASES = {
    "GARUDA": "GA",
    "GARUDA INDONESIA": "GA",
    "GA": "GA",
    "LION": "JT",
    "LION AIR": "JT",
    "JT": "JT",
    "AIRASIA": "QZ",
    "AIR ASIA": "QZ",
    "INDONESIA AIRASIA": "QZ",
    "QZ": "QZ",
    "BATIK": "ID",
    "BATIK AIR": "ID",
    "ID": "ID",
    "CITILINK": "QG",
    "QG": "QG",
    "SUPER AIR JET": "IU",
    "IU": "IU",
}


@lru_cache(maxsize=64)
def load_zone(name: str) -> tzinfo:
    """Carrega um fuso nomeado (ex: Asia/Jakarta)"""
    if name.upper() == "UTC":
        return timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimeFormatError(f"unknown timezone: {name!r}") from e


def _strategies(
    tz_name: Optional[str], default_tz: tzinfo
) -> Iterator[Tuple[Optional[tzinfo], Tuple[str, ...]]]:
    if tz_name:
        yield load_zone(tz_name), NAIVE_LAYOUTS
    yield None, OFFSET_LAYOUTS
    yield default_tz, NAIVE_LAYOUTS


def parse_flight_time(
    value: Any,
    tz_name: Optional[str] = None,
    default_tz: Union[tzinfo, str] = timezone.utc,
) -> datetime:
    """Converte o horário do provedor em datetime com fuso.

    Estratégias, na ordem: layout sem fuso interpretado no fuso nomeado do
    campo companheiro (quando existe), layout com offset explícito, layout
    sem fuso interpretado em ``default_tz``.
    """
    if not isinstance(value, str) or not value.strip():
        raise TimeFormatError(f"unsupported time value: {value!r}")
    if isinstance(default_tz, str):
        default_tz = load_zone(default_tz)

    text = value.strip()
    for zone, layouts in _strategies(tz_name, default_tz):
        for layout in layouts:
            try:
                parsed = datetime.strptime(text, layout)
            except ValueError:
                continue
            if zone is not None:
                parsed = parsed.replace(tzinfo=zone)
            return parsed

    raise TimeFormatError(f"unsupported time format: {value!r}")


def normalize_price(value: Any) -> int:
    """Normaliza preço numérico ou textual (ex: ' 1,250,000 ') para inteiro"""
    if isinstance(value, bool):
        raise PriceFormatError(f"unsupported price format: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise PriceFormatError(f"unsupported price value: {value!r}")
        return int(value)
    if isinstance(value, str):
        clean = value.replace(",", "").strip()
        if not clean:
            raise PriceFormatError(f"empty price: {value!r}")
        try:
            return int(clean)
        except ValueError:
            pass
        try:
            return int(Decimal(clean))
        except (InvalidOperation, ValueError, OverflowError) as e:
            raise PriceFormatError(f"unsupported price format: {value!r}") from e
    raise PriceFormatError(f"unsupported price format: {value!r}")


def reconcile_stops(direct: Optional[bool], count: Optional[int]) -> int:
    """Concilia indicador de voo direto com a contagem explícita de paradas"""
    if direct is True:
        return 0
    if count is not None:
        return int(count)
    if direct is False:
        return 1
    return 0


def resolve_airline_codes(values: Iterable[str]) -> Set[str]:
    """Resolve nomes/códigos livres para códigos IATA; desconhecidos são descartados"""
    codes = set()
    for value in values:
        if not value:
            continue
        code = AIRLINE_ALIASES.get(value.strip().upper())
        if code:
            codes.add(code)
    return codes
