"""A forwarding proxy, a reverse proxy and the backend server they relay to."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence
from urllib.parse import urlsplit

import requests
from flask import Flask, Response, jsonify, request

logger = logging.getLogger(__name__)

REAL_SERVER_ADDR = "127.0.0.1:2003"
REAL_ADDRS = ("http://127.0.0.1:2003",)
ANY_METHOD = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
_HOP_BY_HOP = frozenset(
    "connection keep-alive proxy-authenticate proxy-authorization proxy-connection "
    "te trailer transfer-encoding upgrade".split()
)


def get_load_balance_addr(addrs: Sequence[str]) -> str:
    """Pick the backend to relay to; currently always the first one."""
    if not addrs:
        raise ValueError("no real server addresses configured")
    return addrs[0]


def _filtered(headers, also=frozenset()) -> dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() not in _HOP_BY_HOP | also}


def _relay(url: str, headers: dict[str, str]) -> Response:
    upstream = requests.request(
        request.method, url, headers=headers, data=request.get_data(),
        allow_redirects=False, stream=True, timeout=30.0,
    )
    with upstream:
        body = upstream.raw.read(decode_content=False)
    return Response(body, status=upstream.status_code, headers=_filtered(upstream.headers))


def _target(base: str) -> str:
    remote = urlsplit(base)
    query = request.query_string.decode("latin-1")
    return f"{remote.scheme}://{remote.netloc}{request.path}" + (f"?{query}" if query else "")


def _outgoing() -> dict[str, str]:
    return _filtered(request.headers, frozenset({"host", "content-length"}))


def create_forward_app(upstream: str) -> Flask:
    """Forward ``Forward: ok`` requests to their own URL and relay the rest to ``upstream``."""
    app = Flask(__name__)

    @app.before_request
    def forward_mid():
        values = request.headers.getlist("Forward")
        if not values or values[0] != "ok":
            return None
        try:
            return _relay(request.url, _outgoing())
        except requests.RequestException as error:
            return Response(f"{error}\n", status=503, mimetype="text/plain")

    @app.route("/", defaults={"proxy_path": ""}, methods=ANY_METHOD)
    @app.route("/<path:proxy_path>", methods=ANY_METHOD)
    def reverse(proxy_path: str):
        headers = _outgoing()
        client = request.remote_addr or ""
        prior = request.headers.get("X-Forwarded-For")
        headers["X-Forwarded-For"] = f"{prior}, {client}" if prior else client
        try:
            return _relay(_target(upstream), headers)
        except requests.RequestException as error:
            logger.error("http: proxy error: %s", error)
            return Response(status=502)

    return app


def create_real_server_app(addr: str = REAL_SERVER_ADDR) -> Flask:
    """Build the backend that reports the path and client addresses it saw."""
    app = Flask(__name__)

    @app.get("/<name>")
    def info(name: str):
        host = request.environ.get("REMOTE_ADDR", "")
        port = request.environ.get("REMOTE_PORT")
        remote = f"{host}:{port}" if port else host
        real_ip = (
            f"RemoteAddr={remote},"
            f"X-Forwarded-For={request.headers.get('X-Forwarded-For', '')},"
            f"X-Real-Ip={request.headers.get('X-Real-Ip', '')}"
        )
        return jsonify({"path": f"http://{addr}{request.path}", "ip": real_ip})

    return app


def create_reverse_app(real_addrs: Sequence[str] = REAL_ADDRS) -> Flask:
    """Build the reverse proxy relaying ``GET /<name>`` to a backend from ``real_addrs``."""
    addrs = tuple(real_addrs)
    app = Flask(__name__)

    @app.get("/<name>")
    def relay(name: str):
        try:
            response = _relay(_target(get_load_balance_addr(addrs)), _outgoing())
        except (ValueError, requests.RequestException) as error:
            logger.error("error in roundtrip: %s", error)
            return Response("error", status=500, mimetype="text/plain")
        response.status_code = 200
        return response

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Proxy demo servers.")
    parser.add_argument("--role", choices=("forward", "real", "reverse"), default="reverse")
    parser.add_argument("--upstream", default=REAL_ADDRS[0])
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    if args.role == "forward":
        app, host, port = create_forward_app(args.upstream), "0.0.0.0", 8888
    elif args.role == "real":
        app, host, port = create_real_server_app(), "127.0.0.1", 2003
    else:
        app, host, port = create_reverse_app([args.upstream]), "127.0.0.1", 2002
    try:
        app.run(host=host, port=port, threaded=True)
    except OSError as error:
        logger.error("Error: %s", error)


if __name__ == "__main__":
    main()