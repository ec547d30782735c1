import pytest

from webdemos.multiple_service import create_router


@pytest.mark.parametrize("number", [1, 2])
def test_router_welcome(number):
    response = create_router(number).test_client().get("/")
    assert response.status_code == 200
    body = response.get_json()
    assert body["code"] == 200
    assert body["error"] == f"Welcome server {number:02d}"


def test_first_router_message():
    body = create_router(1).test_client().get("/").get_json()
    assert body == {"code": 200, "error": "Welcome server 01"}


def test_routers_are_independent():
    first = create_router(1).test_client().get("/").get_json()
    second = create_router(2).test_client().get("/").get_json()
    assert second == {"code": 200, "error": "Welcome server 02"}
    assert first["error"] != second["error"]
    assert first["code"] == second["code"]


def test_only_root_route_exists():
    assert create_router(1).test_client().get("/other").status_code == 404