from datetime import date, datetime, timezone

import pytest

from webdemos.templates import create_app, format_as_date


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "raw.tmpl"
    path.write_text("Date: {[{ now | formatAsDate }]}")
    return path


def test_format_as_date_worked_example():
    assert format_as_date(datetime(2017, 7, 1, tzinfo=timezone.utc)) == "201707/01"


def test_format_as_date_pads_month_and_day():
    result = format_as_date(date(1999, 1, 2))
    assert result == "199901/02"


def test_format_as_date_structure():
    value = date(2024, 11, 30)
    year_month, day = format_as_date(value).split("/")
    assert year_month.startswith(str(value.year))
    assert int(year_month[len(str(value.year)):]) == value.month
    assert int(day) == value.day


def test_raw_route_renders_formatted_date(template_file):
    client = create_app(str(template_file)).test_client()
    response = client.get("/raw")
    assert response.status_code == 200
    expected = format_as_date(datetime(2017, 7, 1, tzinfo=timezone.utc))
    assert response.get_data(as_text=True) == f"Date: {expected}"


def test_default_delimiters_are_left_alone(tmp_path):
    path = tmp_path / "plain.tmpl"
    path.write_text("{{ untouched }} {[{ now | formatAsDate }]}")
    client = create_app(str(path)).test_client()
    body = client.get("/raw").get_data(as_text=True)
    assert body.startswith("{{ untouched }} ")


def test_output_is_escaped(tmp_path):
    path = tmp_path / "escape.tmpl"
    path.write_text("{[{ '<b>' }]}")
    client = create_app(str(path)).test_client()
    body = client.get("/raw").get_data(as_text=True)
    assert "<b>" not in body
    assert "&lt;b&gt;" in body