"""Command line interface for the OMDb client."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from .. import __version__
from ..api.client import OmdbClient
from ..config.config_manager import ConfigManager
from ..models.config import LOG_LEVELS
from ..models.query import QueryData, SearchKind
from ..models.search_result import SearchResponse
from ..utils.error_handler import ApplicationError, OmdbError
from ..utils.logging_config import LogLevel, get_logger, setup_application_logging


class OmdbCLI:
    """
    Command Line Interface for the OMDb client.

    Provides ``search``, ``title`` and ``id`` commands that print results
    as text or JSON.
    """

    def __init__(self):
        """Initialize the CLI application."""
        self.logger = get_logger(__name__)

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the main argument parser with all commands and options."""
        parser = argparse.ArgumentParser(
            prog='pyomdb',
            description='Query the OMDb movie database',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  pyomdb search "Rush" --year 2013 --type movie
  pyomdb title "Inception" --json
  pyomdb id tt2015381
            """
        )

        # Global options
        parser.add_argument(
            '--config', '-c',
            type=Path,
            help='Path to configuration file (default: pyomdb.yaml)'
        )

        parser.add_argument(
            '--api-key',
            help='OMDb API key (overrides OMDB_API_KEY and the config file)'
        )

        parser.add_argument(
            '--log-level', '-l',
            choices=LOG_LEVELS,
            help='Set logging level (default: from config, INFO)'
        )

        parser.add_argument(
            '--log-file',
            type=Path,
            help='Also write JSON log lines to this file (default: logging.file from config)'
        )

        parser.add_argument(
            '--json',
            action='store_true',
            help='Output results in JSON format'
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'pyomdb {__version__}'
        )

        subparsers = parser.add_subparsers(
            dest='command',
            help='Available commands',
            metavar='COMMAND'
        )

        kinds = list(SearchKind.values())

        search_parser = subparsers.add_parser('search', help='Free-text search')
        search_parser.add_argument('title', help='Search term')
        search_parser.add_argument('--year', '-y', default='', help='Year of release')
        search_parser.add_argument('--type', '-t', dest='search_type', choices=kinds, default='')
        search_parser.add_argument('--page', '-p', default='', help='Result page to fetch')

        title_parser = subparsers.add_parser('title', help='Look up a single title')
        title_parser.add_argument('title', help='Exact title')
        title_parser.add_argument('--year', '-y', default='', help='Year of release')
        title_parser.add_argument('--type', '-t', dest='search_type', choices=kinds, default='')

        id_parser = subparsers.add_parser('id', help='Look up an IMDb id')
        id_parser.add_argument('imdb_id', help='IMDb id, e.g. tt2015381')

        return parser

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the CLI application.

        Args:
            args: Command line arguments (defaults to sys.argv)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)

        if not parsed_args.command:
            parser.print_help()
            return 0

        try:
            manager = ConfigManager(str(parsed_args.config) if parsed_args.config else None)
            config = manager.get_config(api_key=parsed_args.api_key)

            setup_application_logging(
                log_level=LogLevel(parsed_args.log_level or config.log_level),
                log_file=parsed_args.log_file or manager.get('logging.file')
            )

            with OmdbClient(config) as client:
                result = self._execute(client, parsed_args)

        except ApplicationError as e:
            print(f"Not found: {e}", file=sys.stderr)
            return 1

        except OmdbError as e:
            self.logger.debug(f"CLI error: {e!r}")
            print(f"Error: {e}", file=sys.stderr)
            return 1

        self._print_result(result, parsed_args.json)
        return 0

    def _execute(self, client: OmdbClient, args: argparse.Namespace) -> Any:
        """Dispatch to the client operation named by the subcommand."""
        if args.command == 'search':
            query = QueryData(
                title=args.title, year=args.year,
                search_type=args.search_type, page=args.page
            )
            return client.search(query)

        if args.command == 'title':
            query = QueryData(title=args.title, year=args.year, search_type=args.search_type)
            return client.lookup_by_title(query)

        return client.lookup_by_imdb_id(args.imdb_id)

    def _print_result(self, result: Any, as_json: bool) -> None:
        """Print a search response or movie result to stdout."""
        if as_json:
            print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
            return

        if isinstance(result, SearchResponse):
            for item in result:
                print(item)
            print(f"\n{len(result)} of {result.total_results or len(result)} results")
            return

        print(result)
        if result.plot and result.plot != "N/A":
            print(f"\n{result.plot}")


def main() -> int:
    """Main entry point for the CLI application."""
    cli = OmdbCLI()

    try:
        return cli.run()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
