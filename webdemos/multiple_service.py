"""Two independent servers running side by side on different ports."""

from __future__ import annotations

import argparse
import logging
import queue
import threading

from flask import Flask, jsonify

logger = logging.getLogger(__name__)


def create_router(number: int) -> Flask:
    """Build the application for server ``number``."""
    app = Flask(f"{__name__}.server{number:02d}")

    @app.get("/")
    def index():
        return jsonify({"code": 200, "error": f"Welcome server {number:02d}"})

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Run two demo servers at once.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port1", type=int, default=8080)
    parser.add_argument("--port2", type=int, default=8081)
    args = parser.parse_args(argv)

    errors: queue.Queue = queue.Queue()

    def serve(app: Flask, port: int) -> None:
        try:
            app.run(host=args.host, port=port, threaded=True)
        except Exception as error:  # noqa: BLE001 - first failure stops everything
            errors.put(error)

    for number, port in ((1, args.port1), (2, args.port2)):
        threading.Thread(target=serve, args=(create_router(number), port), daemon=True).start()

    error = errors.get()
    logger.error("%s", error)
    raise SystemExit(1) from error


if __name__ == "__main__":
    main()