from webdemos.hello import create_app


def test_ping_route():
    client = create_app().test_client()
    response = client.get("/ping")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "pong"


def test_index_route():
    client = create_app().test_client()
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Hello World!"


def test_unknown_route_is_not_found():
    client = create_app().test_client()
    assert client.get("/missing").status_code == 404