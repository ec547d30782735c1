"""Routes organised into nested groups under ``/v1`` and ``/v2``."""

from __future__ import annotations

import argparse

from flask import Blueprint, Flask, jsonify


def add_user_routes(parent: Blueprint) -> None:
    """Attach the ``/users`` group to ``parent``."""
    users = Blueprint("users", __name__, url_prefix="/users")

    @users.get("/")
    def list_users():
        return jsonify("users")

    @users.get("/comments")
    def comments():
        return jsonify("users comments")

    @users.get("/pictures")
    def pictures():
        return jsonify("users pictures")

    parent.register_blueprint(users)


def add_ping_routes(parent: Blueprint) -> None:
    """Attach the ``/ping`` group to ``parent``."""
    ping = Blueprint("ping", __name__, url_prefix="/ping")

    @ping.get("/")
    def pong():
        return jsonify("pong")

    parent.register_blueprint(ping)


def create_app() -> Flask:
    """Build the application with all route groups registered."""
    app = Flask(__name__)

    v1 = Blueprint("v1", __name__, url_prefix="/v1")
    add_user_routes(v1)
    add_ping_routes(v1)

    v2 = Blueprint("v2", __name__, url_prefix="/v2")
    add_ping_routes(v2)

    app.register_blueprint(v1)
    app.register_blueprint(v2)
    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Grouped routes demo server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=5000)
    args = parser.parse_args(argv)
    create_app().run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()