"""Servers accepting uploaded files through multipart forms."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from flask import Flask, Response, request

from webdemos.validation import ValidationError

PUBLIC_DIR = "public"


def _text(body: str, status: int = 200) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _base_app() -> Flask:
    return Flask(
        __name__, static_folder=os.path.abspath(PUBLIC_DIR), static_url_path=""
    )


def _save(storage, upload_dir: Path) -> None:
    name = os.path.basename(storage.filename or "") or "."
    storage.save(upload_dir / name)


def create_binding_app(upload_dir: str | os.PathLike = ".") -> Flask:
    """Build an app whose ``/upload`` requires name, email and file together."""
    target = Path(upload_dir)
    app = _base_app()

    @app.post("/upload")
    def upload():
        name = request.form.get("name", "")
        email = request.form.get("email", "")
        file = request.files.get("file")
        failures = [
            (field, "required")
            for field, missing in (("Name", not name), ("Email", not email), ("File", file is None))
            if missing
        ]
        if failures:
            return _text(f"err: {ValidationError('BindFile', failures)}", 400)
        try:
            _save(file, target)
        except OSError as error:
            return _text(f"upload file err: {error}", 400)
        return _text(
            f"File {file.filename} uploaded successfully with fields "
            f"name={name} and email={email}."
        )

    return app


def create_single_app(upload_dir: str | os.PathLike = ".") -> Flask:
    """Build an app whose ``/upload`` stores the single ``file`` field."""
    target = Path(upload_dir)
    app = _base_app()

    @app.post("/upload")
    def upload():
        name = request.form.get("name", "")
        email = request.form.get("email", "")
        file = request.files.get("file")
        if file is None:
            return _text("get form err: no such file", 400)
        try:
            _save(file, target)
        except OSError as error:
            return _text(f"upload file err: {error}", 400)
        return _text(
            f"File {file.filename} uploaded successfully with fields "
            f"name={name} and email={email}."
        )

    return app


def create_multiple_app(upload_dir: str | os.PathLike = ".") -> Flask:
    """Build an app whose ``/upload`` stores every ``files`` field."""
    target = Path(upload_dir)
    app = _base_app()

    @app.post("/upload")
    def upload():
        name = request.form.get("name", "")
        email = request.form.get("email", "")
        if request.mimetype != "multipart/form-data":
            return _text("get form err: request Content-Type isn't multipart/form-data", 400)
        files = request.files.getlist("files")
        for file in files:
            try:
                _save(file, target)
            except OSError as error:
                return _text(f"upload file err: {error}", 400)
        return _text(
            f"Uploaded successfully {len(files)} files with fields "
            f"name={name} and email={email}."
        )

    return app


_FACTORIES = {
    "binding": create_binding_app,
    "single": create_single_app,
    "multiple": create_multiple_app,
}


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="File upload demo servers.")
    parser.add_argument("--kind", choices=sorted(_FACTORIES), default="single")
    parser.add_argument("--upload-dir", default=".")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    _FACTORIES[args.kind](args.upload_dir).run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()