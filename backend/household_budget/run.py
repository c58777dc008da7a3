"""
Entry point for running the Household Budget server.

Usage:
    python -m household_budget.run [--config PATH] [--host HOST] [--port PORT]
        [--database-url URL] [--log-level LEVEL]
"""

import argparse
import sys

import qrcode
import structlog
import uvicorn

from .config import ConfigError, load_config
from .log import configure_logging
from .main import create_app

logger = structlog.get_logger(__name__)


def print_qr_code(url: str) -> None:
    """Print a QR code to the terminal."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=1,
        border=1,
    )
    qr.add_data(url)
    qr.make(fit=True)

    # Print QR code using ASCII
    qr.print_ascii(invert=True)


def build_overrides(args: argparse.Namespace) -> dict:
    """Nested config values for the CLI flags that were given."""
    overrides: dict[str, dict] = {}
    if args.host is not None:
        overrides.setdefault("server", {})["host"] = args.host
    if args.port is not None:
        overrides.setdefault("server", {})["port"] = args.port
    if args.database_url is not None:
        overrides.setdefault("database", {})["url"] = args.database_url
    if args.log_level is not None:
        overrides.setdefault("logging", {})["level"] = args.log_level
    return overrides


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Household Budget")
    parser.add_argument("--config", help="Config file (TOML or JSON)")
    parser.add_argument("--host", help="Host to bind to")
    parser.add_argument("--port", type=int, help="Port to run on")
    parser.add_argument("--database-url", help="SQLAlchemy database URL")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        config = load_config(
            args.config,
            explicit=args.config is not None,
            overrides=build_overrides(args),
        )
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(config.logging.level, config.logging.json_logs)

    url = f"http://{config.server.host}:{config.server.port}"

    print("\n" + "=" * 50)
    print("  Household Budget")
    print("=" * 50)
    print(f"\n  URL: {url}\n")

    try:
        print_qr_code(url)
    except (OSError, ValueError) as e:
        logger.warning("qr_code_unavailable", error=str(e))

    print("\n  Press Ctrl+C to stop the server\n")
    print("=" * 50 + "\n")

    app = create_app(config)
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
