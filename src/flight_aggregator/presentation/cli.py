"""
Interface de linha de comando
"""
import argparse
import asyncio
import sys
from typing import List, Optional, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..domain.exceptions import QueryValidationError
from ..domain.models import SearchQuery, SearchResult, SortOption
from ..infrastructure.config import Config
from ..infrastructure.factory import FlightSearchServiceFactory
from ..infrastructure.logging_config import setup_logging


class FlightAggregatorCLI:
    """Interface CLI para o agregador de voos"""

    def __init__(self, search_service=None, console: Console = None):
        self.console = console or Console()
        self._search_service = search_service

    @property
    def search_service(self):
        if self._search_service is None:
            self._search_service = FlightSearchServiceFactory.create()
        return self._search_service

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Executa a interface CLI; retorna o código de saída"""
        args = self._parse_arguments(argv)
        setup_logging(Config.effective_log_level())

        try:
            query = self._build_query(args)
            result = asyncio.run(self.search_service.search(query))
        except (QueryValidationError, ValidationError) as e:
            self.console.print(Panel.fit(f"[red]{e}[/red]", title="Consulta inválida", border_style="red"))
            return 1

        self._display_results(result, args.limit)
        return 0

    def _parse_arguments(self, argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
        """Configura e processa argumentos da linha de comando"""
        parser = argparse.ArgumentParser(
            prog="flight-aggregator",
            description="Busca agregada de voos em várias companhias",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Exemplos de uso:
  flight-aggregator --origin CGK --destination DPS --departure-date 2025-06-01
  flight-aggregator --origin CGK --destination DPS --departure-date 2025-06-01 --max-stops 0 --sort-by price_asc
  flight-aggregator --origin CGK --destination DPS --departure-date 2025-06-01 --airlines "Garuda Indonesia,JT"
            """
        )

        # Argumentos obrigatórios
        parser.add_argument("--origin", required=True,
                            help="Código IATA origem (ex: CGK)")
        parser.add_argument("--destination", required=True,
                            help="Código IATA destino (ex: DPS)")
        parser.add_argument("--departure-date", required=True,
                            help="Data partida YYYY-MM-DD")

        # Argumentos opcionais
        parser.add_argument("--passengers", type=int, default=1,
                            help="Número de passageiros (padrão: 1)")
        parser.add_argument("--cabin-class", default="economy",
                            help="Classe de cabine (economy, business)")
        parser.add_argument("--min-price", type=int,
                            help="Preço mínimo (IDR)")
        parser.add_argument("--max-price", type=int,
                            help="Preço máximo (IDR)")
        parser.add_argument("--max-stops", type=int,
                            help="Número máximo de paradas (0 = somente diretos)")
        parser.add_argument("--max-duration", type=int,
                            help="Duração máxima em minutos")
        parser.add_argument("--airlines", action="append", default=[],
                            help="Companhias (nomes ou códigos, CSV ou repetido), ex: GA,ID")
        parser.add_argument("--earliest-departure", help="Partida a partir de HH:MM")
        parser.add_argument("--latest-departure", help="Partida até HH:MM")
        parser.add_argument("--earliest-arrival", help="Chegada a partir de HH:MM")
        parser.add_argument("--latest-arrival", help="Chegada até HH:MM")
        parser.add_argument("--sort-by",
                            help="Critério de ordenação: "
                                 f"{', '.join(o.value for o in SortOption)} "
                                 "(desconhecido ou vazio: best_value)")
        parser.add_argument("--limit", type=int, default=20,
                            help="Limite de voos exibidos (padrão: 20)")

        return parser.parse_args(argv)

    def _build_query(self, args: argparse.Namespace) -> SearchQuery:
        """Constrói a consulta a partir dos argumentos"""
        return SearchQuery(
            origin=args.origin.upper(),
            destination=args.destination.upper(),
            departure_date=args.departure_date,
            passengers=args.passengers,
            cabin_class=args.cabin_class,
            min_price=args.min_price,
            max_price=args.max_price,
            max_stops=args.max_stops,
            max_duration=args.max_duration,
            airlines=self._split_airlines(args.airlines),
            earliest_departure=args.earliest_departure,
            latest_departure=args.latest_departure,
            earliest_arrival=args.earliest_arrival,
            latest_arrival=args.latest_arrival,
            sort_by=args.sort_by,
        )

    def _split_airlines(self, values: List[str]) -> List[str]:
        airlines = []
        for value in values:
            airlines.extend(part.strip() for part in value.split(",") if part.strip())
        return airlines

    def _display_results(self, result: SearchResult, limit: int):
        """Exibe resultados da busca"""
        if not result.flights:
            self.console.print(
                Panel.fit(
                    "[yellow]Nenhum voo encontrado dentro dos critérios especificados.[/yellow]\n"
                    f"Provedores com sucesso: {result.providers_succeeded}/{result.providers_queried}",
                    title="Sem Resultados",
                    border_style="yellow"
                )
            )
        else:
            shown = result.flights[:limit]
            table = Table(show_lines=True, title=f"🛫 Voos Encontrados ({len(shown)} de {result.total_results})")

            table.add_column("Voo", style="bold cyan")
            table.add_column("Companhia")
            table.add_column("Rota", style="yellow")
            table.add_column("Partida")
            table.add_column("Chegada")
            table.add_column("Duração", justify="right")
            table.add_column("Paradas", justify="center")
            table.add_column("Preço", style="bold green", justify="right")
            table.add_column("Assentos", justify="right")

            for flight in shown:
                table.add_row(
                    flight.flight_code,
                    f"{flight.airline} ({flight.airline_code})",
                    flight.route_summary,
                    flight.departure_time.strftime("%d/%m %H:%M %z"),
                    flight.arrival_time.strftime("%d/%m %H:%M %z"),
                    f"{flight.duration_minutes // 60}h{flight.duration_minutes % 60:02d}",
                    str(flight.stops),
                    f"{Config.DEFAULT_CURRENCY} {flight.price:,}",
                    str(flight.available_seats),
                )

            self.console.print(table)

        source = "cache" if result.cache_hit else (
            f"{result.providers_succeeded}/{result.providers_queried} provedores "
            f"({result.providers_failed} falhas)"
        )
        stats_text = (
            f"• Total encontrado: {result.total_results} voos\n"
            f"• Origem dos dados: {source}\n"
            f"• Tempo de busca: {result.search_time_ms} ms"
        )
        self.console.print(Panel.fit(stats_text, title="Resumo", border_style="blue"))


def main():
    """Função principal"""
    cli = FlightAggregatorCLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
