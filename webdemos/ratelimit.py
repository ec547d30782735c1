"""A leaky-bucket rate limiter applied to every request."""

from __future__ import annotations

import argparse
import logging
import threading
import time

from flask import Flask, jsonify

logger = logging.getLogger(__name__)

_NANOS = 1_000_000_000


class Limiter:
    """Hands out at most ``rate`` permissions per second, with ``slack`` burst."""

    def __init__(self, rate: int, slack: int = 10, clock=time.monotonic_ns, sleep=time.sleep):
        if rate <= 0 or slack < 0:
            raise ValueError("rate must be positive and slack not negative")
        self.per_request = _NANOS // rate
        self.max_slack = slack * self.per_request
        self._clock = clock
        self._sleep = sleep
        self._next: int | None = None
        self._lock = threading.Lock()

    def take(self) -> int:
        """Block until the next permission and return its time in nanoseconds."""
        with self._lock:
            now = self._clock()
            last = self._next
            if last is None:
                issued = now
            elif now - last > self.max_slack + self.per_request:
                issued = now - self.max_slack
            else:
                issued = last + self.per_request
            self._next = issued
        if issued > now:
            self._sleep((issued - now) / _NANOS)
            return issued
        return now


def create_app(rps: int = 100) -> Flask:
    """Build an app limited to ``rps`` requests per second."""
    limiter = Limiter(rps)
    app = Flask(__name__)
    app.extensions["limiter"] = limiter
    prev = time.monotonic_ns()

    @app.before_request
    def leak_bucket():
        nonlocal prev
        now = limiter.take()
        logger.info("\x1b[36m%.3fms\x1b[0m", (now - prev) / 1_000_000)
        prev = now

    @app.get("/rate")
    def rate():
        return jsonify("rate limiting test")

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Rate limited demo server.")
    parser.add_argument("--rps", type=int, default=100, help="request per second")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[GIN] %(message)s")
    app = create_app(args.rps)
    logger.info("\x1b[36mCurrent Rate Limit: %d requests/s\x1b[0m", args.rps)
    app.run(host="0.0.0.0", port=8080, threaded=True)


if __name__ == "__main__":
    main()