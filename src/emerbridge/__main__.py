"""Command-line entry point: serve the HTTP bridge with uvicorn."""

from __future__ import annotations

import argparse
import logging
import sys

from emerbridge.config import Config
from emerbridge.endpoints import ENDPOINTS
from emerbridge.errors import ConfigurationError

log = logging.getLogger("emerbridge")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="emerbridge",
        description="Expose emercoin-cli commands over HTTP.",
    )
    parser.add_argument("--host", default="0.0.0.0", help="Interface to bind")
    parser.add_argument(
        "--port", type=int, default=None, help="Port to bind (default: $PORT or 7331)"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Resolve configuration, log the startup banner and run the server."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = Config.from_env()
    except ConfigurationError as e:
        log.error("Invalid configuration: %s", e)
        if e.hint:
            log.error("Hint: %s", e.hint)
        return 2

    import uvicorn

    from emerbridge.pipeline import Pipeline
    from emerbridge.server import create_app

    port = args.port or config.http_port
    app = create_app(Pipeline(config))

    log.info("Using emercoin-cli at: %s", config.cli_path)
    log.info("RPC Host: %s:%s", config.rpc_host, config.rpc_port)
    log.info("Available endpoints: %d", len(ENDPOINTS))
    log.info("API Documentation: http://localhost:%d/endpoints", port)
    log.info("Health Check: http://localhost:%d/health", port)

    uvicorn.run(app, host=args.host, port=port, log_level=args.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
