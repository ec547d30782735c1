"""Query and JSON binding with field-level and struct-level validation rules."""

from __future__ import annotations

import argparse
import json
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Mapping

from flask import Flask, jsonify, request

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class ValidationError(ValueError):
    """One or more fields of ``struct`` failed their validation tags."""

    def __init__(self, struct: str, failures):
        self.struct = struct
        self.failures = list(failures)
        super().__init__("\n".join(
            f"Key: '{struct}.{field}' Error:Field validation for "
            f"'{field}' failed on the '{tag}' tag"
            for field, tag in self.failures
        ))


@dataclass(frozen=True)
class Booking:
    check_in: date
    check_out: date


@dataclass(frozen=True)
class User:
    first_name: str
    last_name: str
    email: str


def _moment(value: date) -> datetime:
    return value if isinstance(value, datetime) else datetime.combine(value, time.min)


def bookable_date(value: date, today: datetime | None = None) -> bool:
    """Return False when ``today`` is already past the start of ``value``."""
    return not _moment(today or datetime.now()) > _moment(value)


def _parse_date(query: Mapping[str, str], key: str) -> date | None:
    raw = query.get(key, "")
    if not raw:
        return None
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"invalid {key} {raw!r}: expected a date as YYYY-MM-DD") from None


def bind_booking(query: Mapping[str, str], today: datetime | None = None) -> Booking:
    """Build a Booking from query parameters, raising on invalid input."""
    check_in = _parse_date(query, "check_in")
    check_out = _parse_date(query, "check_out")
    failures = []
    if check_in is None:
        failures.append(("CheckIn", "required"))
    elif not bookable_date(check_in, today):
        failures.append(("CheckIn", "bookabledate"))
    if check_out is None:
        failures.append(("CheckOut", "required"))
    elif check_in is not None and not check_out > check_in:
        failures.append(("CheckOut", "gtfield"))
    if failures:
        raise ValidationError("Booking", failures)
    return Booking(check_in, check_out)


def _string_field(payload: Mapping[str, Any], name: str) -> str:
    folded = {k.lower(): v for k, v in payload.items() if isinstance(k, str)}
    value = payload[name] if name in payload else folded.get(name.lower())
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string")
    return value


def bind_user(payload: Any) -> User:
    """Build a User from decoded JSON, raising on invalid input."""
    if not isinstance(payload, Mapping):
        raise ValueError("expected a JSON object")
    first, last, email = (_string_field(payload, key) for key in ("fname", "lname", "Email"))
    failures = []
    if not email:
        failures.append(("Email", "required"))
    elif not _EMAIL_RE.match(email):
        failures.append(("Email", "email"))
    if not first and not last:
        failures += [("FirstName", "fnameorlname"), ("LastName", "fnameorlname")]
    if failures:
        raise ValidationError("User", failures)
    return User(first, last, email)


def create_booking_app() -> Flask:
    app = Flask(__name__)

    @app.get("/bookable")
    def get_bookable():
        try:
            bind_booking(request.args)
        except ValueError as error:
            return jsonify({"error": str(error)}), 400
        return jsonify({"message": "Booking dates are valid!"})

    return app


def create_user_app() -> Flask:
    app = Flask(__name__)

    @app.post("/user")
    def validate_user():
        try:
            bind_user(json.loads(request.get_data(as_text=True)))
        except ValueError as error:
            return jsonify({"message": "User validation failed!", "error": str(error)}), 400
        return jsonify({"message": "User validation successful."})

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Validation demo servers.")
    parser.add_argument("--app", choices=("bookable", "user"), default="bookable")
    args = parser.parse_args(argv)
    app = create_booking_app() if args.app == "bookable" else create_user_app()
    app.run(host="0.0.0.0", port=8085)


if __name__ == "__main__":
    main()