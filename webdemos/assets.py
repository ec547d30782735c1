"""Templates bundled inside the package and served from memory."""

from __future__ import annotations

import argparse
import stat
from dataclasses import dataclass

from flask import Flask, render_template_string


@dataclass(frozen=True)
class AssetFile:
    """One entry of the in-memory file system."""

    path: str
    mode: int
    mtime: int
    data: bytes | None = None

    @property
    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)


DIRECTORIES: dict[str, tuple[str, ...]] = {
    "/": ("html",),
    "/html": ("bar.tmpl", "index.tmpl"),
}

ASSETS: dict[str, AssetFile] = {
    "/": AssetFile("/", stat.S_IFDIR | 0o755, 1524365738),
    "/html": AssetFile("/html", stat.S_IFDIR | 0o755, 1524365491),
    "/html/bar.tmpl": AssetFile(
        "/html/bar.tmpl",
        stat.S_IFREG | 0o644,
        1524365491,
        "<!doctype html>\n<body>\n  <p>Can you see this? → {{ Bar }}</p>\n</body>\n".encode(),
    ),
    "/html/index.tmpl": AssetFile(
        "/html/index.tmpl",
        stat.S_IFREG | 0o644,
        1524365491,
        b"<!doctype html>\n<body>\n  <p>Hello, {{ Foo }}</p>\n</body>\n",
    ),
}


def load_templates() -> dict[str, str]:
    """Return the source of every bundled ``.tmpl`` file, keyed by its path."""
    return {
        name: (asset.data or b"").decode("utf-8")
        for name, asset in ASSETS.items()
        if not asset.is_dir and name.endswith(".tmpl")
    }


def create_app() -> Flask:
    """Build the application rendering the bundled templates."""
    templates = load_templates()
    app = Flask(__name__)

    @app.get("/")
    def index():
        return render_template_string(templates["/html/index.tmpl"], Foo="World")

    @app.get("/bar")
    def bar():
        return render_template_string(templates["/html/bar.tmpl"], Bar="World")

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Bundled templates demo server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    create_app().run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()