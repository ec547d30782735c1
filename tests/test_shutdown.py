import threading
import time
import urllib.request

import pytest

from webdemos.shutdown import GracefulServer, create_app


def _start(delay):
    server = GracefulServer(create_app(delay), "127.0.0.1", 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    return server, thread


def _url(server):
    host, port = server.server_address
    return f"http://{host}:{port}/"


def _fetch_in_background(url, results):
    def fetch():
        with urllib.request.urlopen(url, timeout=10) as response:
            results.append(response.read().decode())

    worker = threading.Thread(target=fetch, daemon=True)
    worker.start()
    return worker


def test_index_route():
    response = create_app(0).test_client().get("/")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Welcome Gin Server"


def test_shutdown_waits_for_running_request():
    server, thread = _start(0.5)
    results = []
    worker = _fetch_in_background(_url(server), results)
    time.sleep(0.2)
    server.shutdown(timeout=5)
    worker.join(5)
    thread.join(5)
    assert results == ["Welcome Gin Server"]
    assert not thread.is_alive()


def test_shutdown_times_out_on_slow_request():
    server, thread = _start(2.0)
    _fetch_in_background(_url(server), [])
    time.sleep(0.2)
    with pytest.raises(TimeoutError):
        server.shutdown(timeout=0.1)
    thread.join(5)
    assert not thread.is_alive()


def test_close_stops_accepting():
    server, thread = _start(0)
    url = _url(server)
    with urllib.request.urlopen(url, timeout=5) as response:
        assert response.read().decode() == "Welcome Gin Server"
    server.close()
    thread.join(5)
    assert not thread.is_alive()
    with pytest.raises(OSError):
        urllib.request.urlopen(url, timeout=2)


def test_serve_after_shutdown_without_serving_raises():
    server = GracefulServer(create_app(0), "127.0.0.1", 0)
    server.shutdown(timeout=1)
    with pytest.raises(RuntimeError):
        server.serve_forever()