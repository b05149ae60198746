"""
Exceções de domínio
"""


class FlightAggregatorError(Exception):
    """Base para erros do pacote"""


class QueryValidationError(FlightAggregatorError, ValueError):
    """Parâmetros derivados da consulta inválidos (data, janelas de horário)"""


class ProviderError(FlightAggregatorError):
    """Falha de uma chamada inteira a um provedor"""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class RecordParseError(FlightAggregatorError, ValueError):
    """Registro individual não pôde ser normalizado"""


class TimeFormatError(RecordParseError):
    """Horário em formato não suportado"""


class PriceFormatError(RecordParseError):
    """Preço em formato não suportado"""
