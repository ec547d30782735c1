"""A chat server with per-client rate limiting and live server statistics."""

from __future__ import annotations

import argparse
import gc
import logging
import os
import queue
import sys
import threading
import time

from flask import Flask, Response, jsonify, redirect, render_template, request

from webdemos.broadcast import CLOSED, RoomRegistry
from webdemos.realtime_chat import _sse_event

logger = logging.getLogger(__name__)

_ESCAPES = str.maketrans({"&": "&amp;", "'": "&#39;", "<": "&lt;", ">": "&gt;", '"': "&#34;"})


class Counter:
    """Thread-safe named integer counters."""

    def __init__(self) -> None:
        self._values: dict[str, int] = {}
        self._lock = threading.Lock()

    def add(self, key: str, delta: int) -> int:
        with self._lock:
            self._values[key] = self._values.get(key, 0) + delta
            return self._values[key]

    def get(self, key: str) -> int:
        with self._lock:
            return self._values.get(key, 0)

    def reset(self) -> None:
        with self._lock:
            self._values.clear()


def _collected_objects() -> int:
    return sum(generation["collected"] for generation in gc.get_stats())


class StatsCollector:
    """Periodic snapshots of interpreter and chat activity."""

    def __init__(self, messages: Counter | None = None, users: Counter | None = None,
                 clock=time.time) -> None:
        self.messages = messages if messages is not None else Counter()
        self.users = users if users is not None else Counter()
        self._clock = clock
        self._lock = threading.Lock()
        self._saved: dict[str, int] = {}
        self._last_allocated = sys.getallocatedblocks()
        self._last_collected = _collected_objects()

    def connected_users(self) -> int:
        return max(self.users.get("connected") - self.users.get("disconnected"), 0)

    def collect(self) -> dict[str, int]:
        """Take a new snapshot, reset the message counters and return it."""
        allocated = sys.getallocatedblocks()
        collected = _collected_objects()
        with self._lock:
            self._saved = {
                "timestamp": int(self._clock()),
                "HeapInuse": allocated,
                "StackInuse": threading.active_count(),
                "Mallocs": max(allocated - self._last_allocated, 0),
                "Frees": max(collected - self._last_collected, 0),
                "Inbound": self.messages.get("inbound"),
                "Outbound": self.messages.get("outbound"),
                "Connected": self.connected_users(),
            }
            self._last_allocated = allocated
            self._last_collected = collected
            self.messages.reset()
            return dict(self._saved)

    def snapshot(self) -> dict[str, int]:
        """Return the latest snapshot, empty before the first collection."""
        with self._lock:
            return dict(self._saved)


def clean_nick(nick: str) -> str:
    """Drop nicknames shorter than two characters and shorten long ones."""
    if len(nick) < 2:
        return ""
    return nick[:12] + "..." if len(nick) > 13 else nick


def validate_post(nick: str, message: str) -> dict[str, str]:
    """Return the escaped post, raising ValueError when either part is out of range."""
    message = message.strip()
    if not (1 < len(message) < 200 and 1 < len(nick) < 14):
        raise ValueError("the message or nickname is too long")
    return {"nick": nick.translate(_ESCAPES), "message": message.translate(_ESCAPES)}


def create_app(template_folder: str = "resources",
               static_folder: str = "resources/static") -> Flask:
    app = Flask(
        __name__,
        template_folder=os.path.abspath(template_folder),
        static_folder=os.path.abspath(static_folder),
        static_url_path="/static",
    )
    app.config.setdefault("STATS_INTERVAL", 1.0)
    ips, rooms, stats = Counter(), RoomRegistry(), StatsCollector()
    app.extensions.update(ips=ips, rooms=rooms, stats=stats)

    @app.before_request
    def rate_limit():
        ip = request.remote_addr or ""
        value = ips.add(ip, 1)
        if value % 50 == 0:
            logger.info("ip: %s, count: %d", ip, value)
        if value >= 200:
            if value % 200 == 0:
                logger.info("ip blocked")
            return Response("you were automatically banned :)", status=503, mimetype="text/plain")
        return None

    @app.get("/")
    def index():
        return redirect("/room/hn", code=301)

    @app.get("/room/<roomid>")
    def room_get(roomid: str):
        return render_template(
            "room_login.templ.html", roomid=roomid,
            nick=clean_nick(request.args.get("nick", "")), timestamp=int(time.time()),
        )

    @app.post("/room-post/<roomid>")
    def room_post(roomid: str):
        try:
            post = validate_post(request.args.get("nick", ""), request.form.get("message", ""))
        except ValueError as error:
            return jsonify({"status": "failed", "error": str(error)}), 400
        stats.messages.add("inbound", 1)
        rooms.room(roomid).submit(post)
        return jsonify(post)

    @app.get("/stream/<roomid>")
    def stream_room(roomid: str):
        interval = float(app.config["STATS_INTERVAL"])
        listener = rooms.open_listener(roomid)
        stats.users.add("connected", 1)

        def events():
            deadline = time.monotonic() + interval
            while True:
                try:
                    message = listener.get(timeout=max(deadline - time.monotonic(), 0.0))
                except queue.Empty:
                    deadline = time.monotonic() + interval
                    yield _sse_event("stats", stats.snapshot())
                    continue
                if message is CLOSED:
                    return
                stats.messages.add("outbound", 1)
                yield _sse_event("message", message)

        def finish() -> None:
            rooms.close_listener(roomid, listener)
            stats.users.add("disconnected", 1)

        response = Response(events(), mimetype="text/event-stream")
        response.headers["Cache-Control"] = "no-cache"
        response.call_on_close(finish)
        return response

    return app


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Advanced realtime chat demo server.")
    parser.add_argument("--port", type=int, default=80)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    print(f"Running with {os.cpu_count() or 1} CPUs")
    app = create_app()
    collector = app.extensions["stats"]
    interval = float(app.config["STATS_INTERVAL"])

    def work() -> None:
        while True:
            time.sleep(interval)
            collector.collect()

    threading.Thread(target=work, daemon=True).start()
    app.run(host="0.0.0.0", port=args.port, threaded=True)


if __name__ == "__main__":
    main()