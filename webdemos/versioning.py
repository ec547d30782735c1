"""Two API versions, each with a public listing and an authorised add route."""

from __future__ import annotations

import argparse
from functools import wraps
from typing import Callable, Mapping

from flask import Blueprint, Flask, jsonify, request

USERNAME = "foo"
PASSWORD = "password"


def is_authorized(form: Mapping[str, str]) -> bool:
    """Return True when the form carries the accepted user and password."""
    return form.get("user", "") == USERNAME and form.get("password", "") == PASSWORD


def _auth_required(view: Callable) -> Callable:
    @wraps(view)
    def guarded(*args, **kwargs):
        if not is_authorized(request.form):
            return "", 401
        return view(*args, **kwargs)

    return guarded


def _version_blueprint(version: int) -> Blueprint:
    api = Blueprint(f"v{version}", __name__, url_prefix=f"/v{version}")

    @api.get("/users")
    def list_users():
        return jsonify(f"List Of V{version} Users")

    @api.post("/users/add")
    @_auth_required
    def add_user():
        return jsonify(f"V{version} User added")

    return api


def create_app() -> Flask:
    """Build the application with ``/v1`` and ``/v2`` route groups."""
    app = Flask(__name__)
    for version in (1, 2):
        app.register_blueprint(_version_blueprint(version))
    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Versioned API demo server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8081)
    args = parser.parse_args(argv)
    create_app().run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()