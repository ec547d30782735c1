"""Rendering a template file with custom delimiters and a date filter."""

from __future__ import annotations

import argparse
import os
from datetime import date, datetime, timezone

from flask import Flask, render_template


def format_as_date(value: date) -> str:
    """Format a date as year and month run together, a slash, then the day."""
    return f"{value.year}{value.month:02d}/{value.day:02d}"


def create_app(template_path: str = "./testdata/raw.tmpl") -> Flask:
    """Build the application serving ``template_path`` at ``/raw``."""
    folder, name = os.path.split(os.path.abspath(template_path))
    app = Flask(__name__, template_folder=folder)
    app.jinja_options = {
        **app.jinja_options,
        "variable_start_string": "{[{",
        "variable_end_string": "}]}",
        "autoescape": True,
    }
    app.jinja_env.filters["formatAsDate"] = format_as_date
    app.jinja_env.globals["formatAsDate"] = format_as_date

    @app.get("/raw")
    def raw():
        return render_template(name, now=datetime(2017, 7, 1, tzinfo=timezone.utc))

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Template rendering demo server.")
    parser.add_argument("--template", default="./testdata/raw.tmpl")
    args = parser.parse_args(argv)
    create_app(args.template).run(host="0.0.0.0", port=8080)


if __name__ == "__main__":
    main()