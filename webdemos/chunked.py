"""A page streamed to the client piece by piece."""

from __future__ import annotations

import argparse
import time
from typing import Iterator

from flask import Flask, Response

CHUNK_COUNT = 10


def stream_numbers(count: int = CHUNK_COUNT, delay: float = 1.0) -> Iterator[str]:
    """Yield an HTML page whose numbered headings arrive ``delay`` seconds apart."""
    yield "\n\t\t\t<html>\n\t\t\t\t\t<body>\n\t\t"
    for number in range(count):
        yield f"\n\t\t\t\t<h1>{number}</h1>\n\t\t\t"
        time.sleep(delay)
    yield "\n\t\t\t\n\t\t\t\t\t</body>\n\t\t\t</html>\n\t\t"


def create_app(delay: float = 1.0) -> Flask:
    app = Flask(__name__)

    @app.get("/test_stream")
    def test_stream():
        return Response(stream_numbers(CHUNK_COUNT, delay), content_type="text/html")

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Chunked streaming demo server.")
    parser.add_argument("--delay", type=float, default=1.0)
    args = parser.parse_args(argv)
    create_app(args.delay).run(host="127.0.0.1", port=8080, threaded=True)


if __name__ == "__main__":
    main()