"""A minimal server answering ``/`` and ``/ping``."""

from __future__ import annotations

import argparse
import logging
import os

from flask import Flask

logger = logging.getLogger(__name__)

DEFAULT_PORT = "8080"


def create_app() -> Flask:
    """Build the application with no extra middleware."""
    app = Flask(__name__)

    @app.get("/")
    def index():
        return "Hello World!"

    @app.get("/ping")
    def ping():
        return "pong"

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Hello world demo server.")
    parser.add_argument("--host", default="0.0.0.0")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    port = os.environ.get("PORT", "")
    if not port:
        port = DEFAULT_PORT
        logger.info("Defaulting to port %s", port)

    logger.info("Listening on port %s", port)
    create_app().run(host=args.host, port=int(port))


if __name__ == "__main__":
    main()