"""A login route that sets a cookie and a home page guarded by it."""

from __future__ import annotations

import argparse
from functools import wraps

from flask import Flask, jsonify, make_response, request


def cookie_required(view):
    """Reject the request with 403 unless the ``label`` cookie is ``ok``."""

    @wraps(view)
    def guarded(*args, **kwargs):
        if request.cookies.get("label") == "ok":
            return view(*args, **kwargs)
        return jsonify({"error": "Forbidden with no cookie"}), 403

    return guarded


def create_app() -> Flask:
    app = Flask(__name__)

    @app.get("/login")
    def login():
        response = make_response("Login success!", 200)
        response.set_cookie(
            "label", "ok", max_age=30, path="/", domain="localhost",
            secure=False, httponly=True,
        )
        return response

    @app.get("/home")
    @cookie_required
    def home():
        return jsonify({"data": "Your home page"})

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Cookie-guarded demo server.")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    create_app().run(host="0.0.0.0", port=args.port)


if __name__ == "__main__":
    main()