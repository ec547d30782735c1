"""A server that stops on a signal, either gracefully or at once."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
import time
from socketserver import ThreadingMixIn
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from flask import Flask

logger = logging.getLogger(__name__)


class _Handler(WSGIRequestHandler):
    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)


class _Server(ThreadingMixIn, WSGIServer):
    daemon_threads = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.active = 0
        self.idle = threading.Condition()

    def process_request(self, request, client_address):
        with self.idle:
            self.active += 1
        super().process_request(request, client_address)

    def process_request_thread(self, request, client_address):
        try:
            super().process_request_thread(request, client_address)
        finally:
            with self.idle:
                self.active -= 1
                self.idle.notify_all()


class GracefulServer:
    """A threaded WSGI server that can drain in-flight requests on shutdown."""

    def __init__(self, app, host: str = "127.0.0.1", port: int = 8080):
        self._server = make_server(host, port, app, server_class=_Server, handler_class=_Handler)
        self.server_address = self._server.server_address[:2]
        self._lock = threading.Lock()
        self._serving = False
        self._closed = False

    def serve_forever(self) -> None:
        """Accept requests until the server is shut down or closed."""
        with self._lock:
            if self._closed:
                raise RuntimeError("server closed")
            self._serving = True
        self._server.serve_forever(poll_interval=0.1)

    def _stop_listening(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            serving = self._serving
        if serving:
            self._server.shutdown()
        self._server.server_close()

    def shutdown(self, timeout: float = 5.0) -> None:
        """Stop accepting and wait up to ``timeout`` seconds for running requests."""
        self._stop_listening()
        server = self._server
        with server.idle:
            if not server.idle.wait_for(lambda: server.active == 0, timeout):
                raise TimeoutError(
                    f"{server.active} request(s) still running after {timeout}s"
                )

    def close(self) -> None:
        """Stop accepting at once, without waiting for running requests."""
        self._stop_listening()


def create_app(delay: float = 5.0) -> Flask:
    """Build an app whose ``/`` answers after ``delay`` seconds."""
    app = Flask(__name__)

    @app.get("/")
    def index():
        time.sleep(delay)
        return "Welcome Gin Server", 200, {"Content-Type": "text/plain; charset=utf-8"}

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Graceful shutdown demo server.")
    parser.add_argument("--mode", choices=("graceful", "close"), default="graceful")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--delay", type=float, default=5.0)
    parser.add_argument("--timeout", type=float, default=5.0)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        server = GracefulServer(create_app(args.delay), args.host, args.port)
    except OSError as error:
        logger.error("listen: %s", error)
        raise SystemExit(1) from error

    stop = threading.Event()
    previous = {
        sig: signal.signal(sig, lambda *_: stop.set())
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        while thread.is_alive() and not stop.wait(0.2):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    if args.mode == "close":
        logger.info("receive interrupt signal")
        server.close()
        logger.info("Server closed under request")
    else:
        logger.info("Shutting down server...")
        try:
            server.shutdown(args.timeout)
        except TimeoutError as error:
            logger.error("Server forced to shutdown: %s", error)
            raise SystemExit(1) from error
    logger.info("Server exiting")


if __name__ == "__main__":
    main()