from unittest import mock

from webdemos.chunked import create_app, stream_numbers


def test_stream_numbers_structure():
    chunks = list(stream_numbers(3, 0))
    assert len(chunks) == 5
    assert "<html>" in chunks[0]
    assert "</html>" in chunks[-1]
    assert ["<h1>0</h1>" in chunks[1], "<h1>1</h1>" in chunks[2], "<h1>2</h1>" in chunks[3]] == [
        True,
        True,
        True,
    ]


def test_stream_numbers_sleeps_after_each_item():
    with mock.patch("time.sleep") as sleep:
        chunks = list(stream_numbers(4, 0.25))
    assert len(chunks) == 6
    assert "<h1>3</h1>" in chunks[4]
    assert sleep.call_count == 4
    assert [call.args for call in sleep.call_args_list] == [(0.25,)] * 4


def test_stream_route_returns_whole_page():
    client = create_app(delay=0).test_client()
    response = client.get("/test_stream")
    body = response.get_data(as_text=True)
    assert response.status_code == 200
    assert response.headers["Content-Type"] == "text/html"
    assert body.index("<h1>0</h1>") < body.index("<h1>9</h1>") < body.index("</html>")
    assert "<h1>10</h1>" not in body