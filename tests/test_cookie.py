from flask import Flask

from webdemos.cookie import cookie_required, create_app


def _client():
    return create_app().test_client()


def test_login_returns_success_text():
    response = _client().get("/login")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Login success!"


def test_login_sets_cookie_attributes():
    response = _client().get("/login")
    header = response.headers["Set-Cookie"]
    assert "label=ok" in header
    assert "Max-Age=30" in header
    assert "HttpOnly" in header
    assert "Path=/" in header


def test_home_without_cookie_is_forbidden():
    response = _client().get("/home")
    assert response.status_code == 403
    assert response.get_json() == {"error": "Forbidden with no cookie"}


def test_home_with_wrong_cookie_is_forbidden():
    response = _client().get("/home", headers={"Cookie": "label=nope"})
    assert response.status_code == 403
    assert response.get_json() == {"error": "Forbidden with no cookie"}


def test_home_with_cookie_is_allowed():
    response = _client().get("/home", headers={"Cookie": "label=ok"})
    assert response.status_code == 200
    assert response.get_json() == {"data": "Your home page"}


def test_decorator_guards_any_view():
    def secret_view():
        return "inside"

    guarded = cookie_required(secret_view)
    app = Flask("guarded")
    app.add_url_rule("/secret", "secret", guarded)

    client = app.test_client()
    denied = client.get("/secret")
    assert denied.status_code == 403
    assert denied.get_json() == {"error": "Forbidden with no cookie"}
    allowed = client.get("/secret", headers={"Cookie": "label=ok"})
    assert allowed.get_data(as_text=True) == "inside"