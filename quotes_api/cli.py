#!/usr/bin/env python3
"""
Command line entry point for the Quotes API.

    quotes-api serve       start the HTTP server (default)
    quotes-api query       run one GraphQL query against the database
    quotes-api snapshot    write the schema snapshot and exit
"""

import argparse
import logging
from dataclasses import replace

from graphql import graphql_sync
from rich.console import Console

from quotes_api.config import load_settings
from quotes_api.database import connect_database
from quotes_api.exceptions import StartupError
from quotes_api.graphql_api import schema
from quotes_api.schema_snapshot import refresh_snapshot
from quotes_api.startup import bootstrap, serve

logger = logging.getLogger(__name__)

console = Console()


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def run_serve(args, settings):
    try:
        application = bootstrap(settings)
    except StartupError as e:
        console.print(f"[bold red]Startup failed:[/] {e}")
        return 1

    console.print(f"[bold blue]Quotes API[/] listening on http://{settings.host}:{settings.port}/graphql")
    serve(application)
    return 0


def run_query(args, settings):
    try:
        client, db = connect_database(settings)
    except StartupError as e:
        console.print(f"[bold red]Database connection failed:[/] {e}")
        return 1

    try:
        query_text = args.query or console.input("Client request: ")
        result = graphql_sync(schema, query_text, context_value={"db": db})
    except EOFError:
        console.print("[bold red]No query given:[/] pass it as an argument or type it at the prompt")
        return 1
    finally:
        client.close()

    if result.errors:
        for error in result.errors:
            console.print(f"[bold red]Error:[/] {error.message}")
        return 1

    console.print("[bold]Server answer:[/]")
    console.print_json(data=result.data)
    return 0


def run_snapshot(args, settings):
    output = args.output or settings.snapshot_path
    if refresh_snapshot(schema, output):
        console.print(f"[green]Schema snapshot written to {output}[/]")
        return 0
    console.print(f"[bold red]Could not write schema snapshot to {output}[/] (see log)")
    return 1


def build_parser():
    parser = argparse.ArgumentParser(prog="quotes-api", description="Quotes GraphQL API")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--port", type=int, help="Port to listen on")
    serve_parser.set_defaults(handler=run_serve)

    query_parser = subparsers.add_parser("query", help="Execute a GraphQL query and print the answer")
    query_parser.add_argument("query", nargs="?", help="Query text; prompted for when omitted")
    query_parser.set_defaults(handler=run_query)

    snapshot_parser = subparsers.add_parser("snapshot", help="Write the schema introspection snapshot")
    snapshot_parser.add_argument("--output", type=str, help="Snapshot file path")
    snapshot_parser.set_defaults(handler=run_snapshot)

    parser.set_defaults(handler=run_serve, port=None)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    settings = load_settings()
    if args.port:
        settings = replace(settings, port=args.port)
    return args.handler(args, settings)


if __name__ == "__main__":
    raise SystemExit(main())
