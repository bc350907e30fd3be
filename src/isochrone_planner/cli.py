"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import sys

from isochrone_planner import __version__
from isochrone_planner.config import configure_logging, get_settings
from isochrone_planner.flows.build import build_all
from isochrone_planner.flows.fetch import fetch_all
from isochrone_planner.reference.categories import osm_tag_for
from isochrone_planner.reference.criteria import DEFAULT_CRITERIA
from isochrone_planner.schemas import Criterion

logger = logging.getLogger(__name__)


def parse_criterion(text: str) -> Criterion:
    """argparse type for ``CATEGORY:MODE:MINUTES``."""
    try:
        criterion = Criterion.parse(text)
        osm_tag_for(criterion.category)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc
    return criterion


def _add_criteria_argument(parser: argparse.ArgumentParser) -> None:
    defaults = ", ".join(f"{c.category}:{c.mode.value}:{c.minutes}" for c in DEFAULT_CRITERIA)
    parser.add_argument(
        "-c",
        "--criterion",
        dest="criteria",
        action="append",
        type=parse_criterion,
        metavar="CATEGORY:MODE:MINUTES",
        help=f"Proximity criterion, repeatable (default: {defaults})",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="isochrone-planner",
        description="Map the areas reachable from several kinds of places at once",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    fetch_parser = subparsers.add_parser("fetch", help="Fetch places and isochrones")
    _add_criteria_argument(fetch_parser)

    build_parser = subparsers.add_parser("build", help="Build site from cached data")
    _add_criteria_argument(build_parser)

    refresh_parser = subparsers.add_parser("refresh", help="Fetch data and build site")
    _add_criteria_argument(refresh_parser)

    serve_parser = subparsers.add_parser("serve", help="Serve site locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: serve_port from settings)",
    )

    return parser


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Region: {settings.bbox.as_overpass()}")
    print(f"OpenRouteService key: {'set' if settings.ors_api_key else 'missing'}")
    print(f"Data dir: {settings.data_dir}")
    return 0


def cmd_fetch(args: argparse.Namespace) -> int:
    """Handle the 'fetch' command."""
    settings = get_settings()
    if not settings.ors_api_key:
        print(
            "Error: OpenRouteService API key missing (set ISOCHRONE_PLANNER_ORS_API_KEY).",
            file=sys.stderr,
        )
        return 1
    result = fetch_all(criteria=args.criteria)
    logger.debug("fetch result: %s", result)
    print(f"Fetched places: {result['places']}")
    print(f"Fetched isochrones: {result['isochrones']}")
    return 0


def cmd_build(args: argparse.Namespace) -> int:
    """Handle the 'build' command."""
    result = build_all(criteria=args.criteria)
    if "error" in result:
        print("Error: no cached isochrones. Run 'isochrone-planner fetch' first.", file=sys.stderr)
        return 1
    print(f"Site written to {result['output']}")
    return 0


def cmd_refresh(args: argparse.Namespace) -> int:
    """Handle the 'refresh' command: fetch data then build site."""
    status = cmd_fetch(args)
    if status != 0:
        return status
    return cmd_build(args)


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.serve_port
    site_dir = settings.data_dir / "derived" / "site"

    if not site_dir.exists():
        print("No site directory found. Run 'isochrone-planner refresh' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/ (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(debug=args.debug or get_settings().debug)

    commands = {
        "info": cmd_info,
        "fetch": cmd_fetch,
        "build": cmd_build,
        "refresh": cmd_refresh,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1
    try:
        return handler(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
