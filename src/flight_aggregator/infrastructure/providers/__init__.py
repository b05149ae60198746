from .airasia_provider import AirAsiaProvider
from .base import BaseFlightProvider
from .batik_provider import BatikProvider
from .garuda_provider import GarudaProvider
from .lion_air_provider import LionAirProvider

__all__ = [
    "AirAsiaProvider",
    "BaseFlightProvider",
    "BatikProvider",
    "GarudaProvider",
    "LionAirProvider",
]
