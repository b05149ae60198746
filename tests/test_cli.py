"""Tests for the CLI entry point and the service factory."""

import io
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from rich.console import Console

from flight_aggregator.domain.exceptions import QueryValidationError
from flight_aggregator.domain.models import SearchResult
from flight_aggregator.infrastructure.config import Config
from flight_aggregator.infrastructure.factory import FlightSearchServiceFactory
from flight_aggregator.presentation.cli import FlightAggregatorCLI

BASE_ARGS = ["--origin", "cgk", "--destination", "dps", "--departure-date", "2025-06-01"]


@pytest.fixture
def output():
    return io.StringIO()


def _cli(service, output) -> FlightAggregatorCLI:
    return FlightAggregatorCLI(search_service=service, console=Console(file=output, width=200))


class TestBuildQuery:
    """Tests for argument to query conversion."""

    def test_airlines_csv_and_repeated(self, output) -> None:
        cli = _cli(MagicMock(), output)
        args = cli._parse_arguments(BASE_ARGS + ["--airlines", "Garuda Indonesia, JT", "--airlines", "ID"])

        query = cli._build_query(args)

        assert query.airlines == ["Garuda Indonesia", "JT", "ID"]
        assert query.origin == "CGK" and query.destination == "DPS"

    def test_optional_filters_default_to_unset(self, output) -> None:
        cli = _cli(MagicMock(), output)
        query = cli._build_query(cli._parse_arguments(BASE_ARGS))

        assert query.max_stops is None
        assert query.sort_by is None
        assert query.airlines == []


@patch("flight_aggregator.presentation.cli.setup_logging")
class TestRun:
    """Tests for FlightAggregatorCLI.run."""

    def test_success_prints_results(self, _logging, output, make_flight) -> None:
        result = SearchResult(flights=[make_flight()], providers_queried=4, providers_succeeded=4)
        service = MagicMock(search=AsyncMock(return_value=result))

        code = _cli(service, output).run(BASE_ARGS + ["--sort-by", "price_asc"])

        assert code == 0
        assert "GA400" in output.getvalue()
        query = service.search.call_args.args[0]
        assert query.sort_by == "price_asc"

    def test_unknown_sort_key_is_accepted(self, _logging, output, make_flight) -> None:
        service = MagicMock(search=AsyncMock(return_value=SearchResult(flights=[make_flight()])))

        code = _cli(service, output).run(BASE_ARGS + ["--sort-by", "fastest"])

        assert code == 0
        assert service.search.call_args.args[0].sort_by == "fastest"

    def test_empty_result(self, _logging, output) -> None:
        service = MagicMock(search=AsyncMock(return_value=SearchResult(flights=[], providers_queried=4)))

        assert _cli(service, output).run(BASE_ARGS) == 0
        assert "Nenhum voo encontrado" in output.getvalue()

    def test_validation_error_exit_code(self, _logging, output) -> None:
        service = MagicMock(search=AsyncMock(side_effect=QueryValidationError("invalid departure_date")))

        code = _cli(service, output).run(BASE_ARGS)

        assert code == 1
        assert "invalid departure_date" in output.getvalue()

    def test_model_validation_error_exit_code(self, _logging, output) -> None:
        service = MagicMock(search=AsyncMock())

        code = _cli(service, output).run(BASE_ARGS + ["--passengers", "0"])

        assert code == 1
        service.search.assert_not_called()


class TestFactory:
    """Tests for FlightSearchServiceFactory."""

    def test_providers_registered_in_order(self) -> None:
        service = FlightSearchServiceFactory.create()

        names = [p.name for p in service._aggregator.providers]

        assert names == ["Garuda Indonesia", "Lion Air", "AirAsia", "Batik Air"]

    def test_uses_configured_limits(self) -> None:
        class Custom(Config):
            AGGREGATION_TIMEOUT = 1.5
            CACHE_TTL = 60.0
            GARUDA_BASE_URL = "http://garuda.test"

        service = FlightSearchServiceFactory.create(Custom())

        assert service._aggregator._timeout == 1.5
        assert service._aggregator._cache_ttl == 60.0
        assert service._aggregator.providers[0].url == "http://garuda.test/garuda/search"
