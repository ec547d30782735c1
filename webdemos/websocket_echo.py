"""A WebSocket echo server with a browser test page, and a ticking client."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from datetime import datetime
from http import HTTPStatus
from typing import AsyncIterator

from websockets.asyncio.client import connect
from websockets.asyncio.server import Serve, ServerConnection
from websockets.asyncio.server import serve as _ws_serve
from websockets.exceptions import ConnectionClosed
from websockets.http11 import Request, Response

logger = logging.getLogger(__name__)

ECHO_PATH = "/echo"

_HOME = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>WebSocket echo</title>
<style>
  main { display: flex; gap: 2em; }
  main > section { flex: 1; }
  #output { max-height: 70vh; overflow-y: scroll; }
</style>
</head>
<body>
<main>
<section>
<p>Press Open to connect to the echo server, Send to transmit the text
in the box, and Close to end the session. The text may be edited and
sent any number of times.</p>
<form onsubmit="return false">
<button id="open" type="button">Open</button>
<button id="close" type="button">Close</button>
<p><input id="input" type="text" value="Hello world!">
<button id="send" type="button">Send</button></p>
</form>
</section>
<section id="output"></section>
</main>
<script>
(function () {
  const target = @URL@;
  const output = document.getElementById("output");
  const input = document.getElementById("input");
  let socket = null;

  function log(line) {
    const entry = document.createElement("div");
    entry.textContent = line;
    output.appendChild(entry);
    output.scrollTop = output.scrollHeight;
  }

  document.getElementById("open").addEventListener("click", () => {
    if (socket) {
      return;
    }
    socket = new WebSocket(target);
    socket.addEventListener("open", () => log("OPEN"));
    socket.addEventListener("close", () => {
      log("CLOSE");
      socket = null;
    });
    socket.addEventListener("message", (event) => log("RESPONSE: " + event.data));
    socket.addEventListener("error", (event) => log("ERROR: " + event.data));
  });

  document.getElementById("send").addEventListener("click", () => {
    if (!socket) {
      return;
    }
    log("SEND: " + input.value);
    socket.send(input.value);
  });

  document.getElementById("close").addEventListener("click", () => {
    if (socket) {
      socket.close();
    }
  });
})();
</script>
</body>
</html>
"""


def home_page(url: str) -> str:
    """Return the browser test page that connects to ``url``."""
    return _HOME.replace("@URL@", json.dumps(url).replace("</", "<\\/"))


async def echo(connection: ServerConnection) -> None:
    """Send every message received on ``connection`` straight back."""
    try:
        async for message in connection:
            logger.info("recv:%s", message)
            await connection.send(message)
    except ConnectionClosed as error:
        logger.info("read: %s", error)


def _process_request(connection: ServerConnection, request: Request) -> Response | None:
    path = request.path.split("?", 1)[0]
    if path == ECHO_PATH:
        return None
    if path == "/":
        host = request.headers.get("Host", "")
        response = connection.respond(HTTPStatus.OK, home_page(f"ws://{host}{ECHO_PATH}"))
        del response.headers["Content-Type"]
        response.headers["Content-Type"] = "text/html; charset=utf-8"
        return response
    return connection.respond(HTTPStatus.NOT_FOUND, "404 page not found")


def serve(host: str | None, port: int) -> Serve:
    """Return the echo server; use it with ``async with`` to start listening."""
    return _ws_serve(echo, host, port, process_request=_process_request)


async def _tick(connection, interval: float) -> None:
    try:
        while True:
            await asyncio.sleep(interval)
            await connection.send(str(datetime.now().astimezone()))
    except ConnectionClosed as error:
        logger.info("write: %s", error)


async def run_client(addr: str, interval: float = 1.0) -> AsyncIterator[str | bytes]:
    """Send the current time to ``addr`` every ``interval`` seconds and yield the replies."""
    url = f"ws://{addr}{ECHO_PATH}"
    logger.info("connecting to %s", url)
    async with connect(url, close_timeout=1.0) as connection:
        sender = asyncio.create_task(_tick(connection, interval))
        try:
            async for message in connection:
                logger.info("recv: %s", message)
                yield message
        except ConnectionClosed as error:
            logger.info("read: %s", error)
        finally:
            sender.cancel()
            await asyncio.wait([sender])


def _split_addr(addr: str) -> tuple[str | None, int]:
    host, _, port = addr.rpartition(":")
    return host or None, int(port)


async def _serve_forever(host: str | None, port: int) -> None:
    async with serve(host, port) as server:
        await server.serve_forever()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="WebSocket echo server.")
    parser.add_argument("--addr", default=":8080", help="http service address")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    host, port = _split_addr(args.addr)
    try:
        asyncio.run(_serve_forever(host, port))
    except KeyboardInterrupt:
        pass


async def _consume(addr: str) -> None:
    async for _ in run_client(addr):
        pass


def client_main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="WebSocket echo client.")
    parser.add_argument("--addr", default="localhost:8080", help="http service address")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        asyncio.run(_consume(args.addr))
    except KeyboardInterrupt:
        logger.info("interrupt")
    except OSError as error:
        logger.error("dial: %s", error)
        raise SystemExit(1) from error


if __name__ == "__main__":
    main()