"""A chat server whose rooms stream messages to browsers as server-sent events."""

from __future__ import annotations

import argparse
import html
import json
import queue
import random
import threading
from dataclasses import dataclass
from string import Template
from typing import Any, Callable, Iterator
from urllib.parse import quote

from flask import Flask, Response, jsonify, request

from webdemos.broadcast import CLOSED, RoomRegistry

_KEEPALIVE_SECONDS = 15.0

_PAGE = Template(
    """
<html>
<head>
    <title>$title</title>
    <script>
        document.addEventListener("DOMContentLoaded", function() {
            var form = document.getElementById("myForm");
            var input = document.getElementById("message_form");
            var messages = document.getElementById("messages");
            input.focus();
            form.addEventListener("submit", function(e) {
                e.preventDefault();
                fetch(form.action, {method: "POST", body: new URLSearchParams(new FormData(form))})
                    .then(function() {
                        input.value = "";
                        input.focus();
                    });
            });

            if (!!window.EventSource) {
                var source = new EventSource($stream_url);
                source.addEventListener("message", function(e) {
                    messages.append(e.data);
                    messages.appendChild(document.createElement("br"));
                    window.scrollTo(0, document.body.scrollHeight);
                }, false);
            } else {
                alert("NOT SUPPORTED");
            }
        });
    </script>
</head>
<body>
    <h1>Welcome to $title room</h1>
    <div id="messages"></div>
    <form id="myForm" action="$post_url" method="post">
    User: <input id="user_form" name="user" value="$userid">
    Message: <input id="message_form" name="message">
    <input type="submit" value="Submit">
    </form>
</body>
</html>
"""
)


@dataclass(frozen=True)
class Message:
    """A line of chat sent by a user to a room."""

    user_id: str
    room_id: str
    text: str

    def __str__(self) -> str:
        return f"{self.user_id}: {self.text}"


class Manager:
    """Serialises all room operations through one worker thread."""

    def __init__(self, backlog: int = 100) -> None:
        self._rooms = RoomRegistry()
        self._commands: queue.Queue[Callable[[], None] | None] = queue.Queue(maxsize=backlog)
        self._lock = threading.Lock()
        self._stopped = False
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while True:
            command = self._commands.get()
            if command is None:
                return
            command()

    def _send(self, command: Callable[[], None]) -> None:
        with self._lock:
            if self._stopped:
                raise RuntimeError("room manager is stopped")
        self._commands.put(command)

    def open_listener(self, roomid: str) -> queue.Queue:
        """Return a queue that will receive the messages of ``roomid``."""
        listener: queue.Queue = queue.Queue()
        self._send(lambda: self._rooms.room(roomid).register(listener))
        return listener

    def close_listener(self, roomid: str, listener: queue.Queue) -> None:
        """Detach ``listener`` from ``roomid`` and mark it as ended."""
        self._send(lambda: self._rooms.close_listener(roomid, listener))

    def delete_broadcast(self, roomid: str) -> None:
        """Close the room ``roomid`` and end all of its listeners."""
        self._send(lambda: self._rooms.delete(roomid))

    def submit(self, userid: str, roomid: str, text: str) -> None:
        """Post ``text`` from ``userid`` to everyone listening in ``roomid``."""
        message = Message(user_id=userid, room_id=roomid, text=text)
        self._send(lambda: self._rooms.room(message.room_id).submit(str(message)))

    def stop(self) -> None:
        """Finish the queued operations and stop the worker thread."""
        with self._lock:
            if self._stopped:
                return
            self._stopped = True
        self._commands.put(None)
        self._thread.join()


def _sse_event(event: str, data: Any) -> str:
    if not isinstance(data, str):
        data = json.dumps(data, sort_keys=True, separators=(",", ":"))
    data = data.replace("\r", "\\r").replace("\n", "\ndata:")
    return f"event:{event}\ndata:{data}\n\n"


def render_room(roomid: str, userid: str) -> str:
    """Return the HTML page of chat room ``roomid`` for ``userid``."""
    path = quote(roomid, safe="")
    stream_url = json.dumps(f"/stream/{path}").replace("</", "<\\/")
    return _PAGE.substitute(
        title=html.escape(roomid),
        stream_url=stream_url,
        post_url=html.escape(f"/room/{path}"),
        userid=html.escape(userid),
    )


def create_app(manager: Manager | None = None) -> Flask:
    """Build the chat application on top of ``manager``."""
    rooms = manager if manager is not None else Manager()
    app = Flask(__name__)
    app.extensions["rooms"] = rooms

    @app.get("/room/<roomid>")
    def room_get(roomid: str):
        userid = str(random.randint(0, 2**31 - 1))
        return render_room(roomid, userid), 200, {"Content-Type": "text/html; charset=utf-8"}

    @app.post("/room/<roomid>")
    def room_post(roomid: str):
        userid = request.form.get("user", "")
        message = request.form.get("message", "")
        rooms.submit(userid, roomid, message)
        return jsonify({"status": "success", "message": message})

    @app.delete("/room/<roomid>")
    def room_delete(roomid: str):
        rooms.delete_broadcast(roomid)
        return "", 200

    @app.get("/stream/<roomid>")
    def stream(roomid: str):
        listener = rooms.open_listener(roomid)

        def events() -> Iterator[str]:
            while True:
                try:
                    message = listener.get(timeout=_KEEPALIVE_SECONDS)
                except queue.Empty:
                    yield ":\n\n"
                    continue
                if message is CLOSED:
                    return
                yield _sse_event("message", message)

        response = Response(events(), mimetype="text/event-stream")
        response.headers["Cache-Control"] = "no-cache"
        response.call_on_close(lambda: rooms.close_listener(roomid, listener))
        return response

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Realtime chat demo server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    create_app(Manager()).run(host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()