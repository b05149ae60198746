"""
Configuração da aplicação
"""
import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuração centralizada"""

    # Provedores
    GARUDA_BASE_URL = os.getenv("GARUDA_BASE_URL", "http://127.0.0.1:8083")
    LION_AIR_BASE_URL = os.getenv("LION_AIR_BASE_URL", "http://127.0.0.1:8084")
    AIRASIA_BASE_URL = os.getenv("AIRASIA_BASE_URL", "http://127.0.0.1:8081")
    BATIK_BASE_URL = os.getenv("BATIK_BASE_URL", "http://127.0.0.1:8082")

    # Defaults
    DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "IDR")
    DEFAULT_TIMEZONE = os.getenv("DEFAULT_TIMEZONE", "UTC")

    # Limites
    REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "2"))
    AGGREGATION_TIMEOUT = float(os.getenv("AGGREGATION_TIMEOUT", "5"))
    CACHE_TTL = float(os.getenv("CACHE_TTL", "180"))

    # Logs
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def effective_log_level(cls) -> str:
        return "DEBUG" if cls.DEBUG else cls.LOG_LEVEL
