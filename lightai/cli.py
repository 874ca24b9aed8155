"""
Command-line entry point: HTTP server by default, REPL with --cli.
"""
import argparse
import logging
from typing import List, Optional

import uvicorn

from .config import DEFAULT_PORT, Settings
from .main import configure_logging, create_app
from .repl import run_repl
from .responders import ResponderPolicy, build_provider

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lightai", description="LightAI chat relay")
    parser.add_argument("--cli", action="store_true", help="run the interactive REPL instead of the HTTP server")
    parser.add_argument("--port", type=int, default=None, help=f"HTTP listen port (default: $PORT or {DEFAULT_PORT})")
    return parser


def resolve_port(cli_port: Optional[int], app_settings: Settings) -> int:
    """--port wins over PORT, which wins over the default. A zero --port means the default."""
    if cli_port is not None:
        return cli_port or DEFAULT_PORT
    return app_settings.port or DEFAULT_PORT


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    app_settings = Settings()
    configure_logging(app_settings)

    if args.cli:
        policy = ResponderPolicy.from_settings(app_settings, build_provider(app_settings))
        run_repl(policy)
        return 0

    port = resolve_port(args.port, app_settings)
    logger.info(f"LightAI server listening on http://localhost:{port}")
    uvicorn.run(
        create_app(app_settings),
        host=app_settings.host,
        port=port,
        log_level=app_settings.log_level.lower(),
    )
    return 0
