import asyncio
from datetime import datetime

import pytest
import requests
from websockets.asyncio.client import connect

from webdemos.websocket_echo import home_page, run_client, serve


def _port(server):
    return next(iter(server.sockets)).getsockname()[1]


def test_home_page_embeds_url():
    page = home_page("ws://localhost:8080/echo")
    assert 'new WebSocket("ws://localhost:8080/echo")' in page
    assert page.lstrip().startswith("<!DOCTYPE html>")


@pytest.mark.asyncio
async def test_echo_text_and_binary():
    async with serve("127.0.0.1", 0) as server:
        port = _port(server)
        async with connect(f"ws://127.0.0.1:{port}/echo") as ws:
            await ws.send("hello")
            assert await ws.recv() == "hello"
            await ws.send(b"\x00\x01")
            assert await ws.recv() == b"\x00\x01"


@pytest.mark.asyncio
async def test_home_served_over_http():
    async with serve("127.0.0.1", 0) as server:
        port = _port(server)
        response = await asyncio.to_thread(
            requests.get, f"http://127.0.0.1:{port}/", timeout=5
        )
    assert response.status_code == 200
    assert response.headers["Content-Type"].startswith("text/html")
    assert f'"ws://127.0.0.1:{port}/echo"' in response.text


@pytest.mark.asyncio
async def test_unknown_path_is_404():
    async with serve("127.0.0.1", 0) as server:
        port = _port(server)
        response = await asyncio.to_thread(
            requests.get, f"http://127.0.0.1:{port}/nope", timeout=5
        )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_client_receives_echoed_timestamps():
    async with serve("127.0.0.1", 0) as server:
        port = _port(server)
        received = []
        client = run_client(f"127.0.0.1:{port}", 0.05)
        async for message in client:
            received.append(message)
            if len(received) == 2:
                break
        await client.aclose()
    assert len(received) == 2
    first, second = (datetime.fromisoformat(m) for m in received)
    assert first <= second
    assert first.tzinfo is not None