import pytest
from flask import Blueprint, Flask

from webdemos.group_routes import add_ping_routes, add_user_routes, create_app


@pytest.fixture
def client():
    return create_app().test_client()


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/v1/users/", "users"),
        ("/v1/users/comments", "users comments"),
        ("/v1/users/pictures", "users pictures"),
        ("/v1/ping/", "pong"),
        ("/v2/ping/", "pong"),
    ],
)
def test_routes(client, path, expected):
    response = client.get(path)
    assert response.status_code == 200
    assert response.get_json() == expected


def test_v2_has_no_user_routes(client):
    assert client.get("/v2/users/").status_code == 404


def test_groups_attach_to_custom_parent():
    app = Flask("custom")
    parent = Blueprint("api", "custom", url_prefix="/api")
    add_user_routes(parent)
    add_ping_routes(parent)
    app.register_blueprint(parent)
    client = app.test_client()
    assert client.get("/api/ping/").get_json() == "pong"
    assert client.get("/api/users/comments").get_json() == "users comments"