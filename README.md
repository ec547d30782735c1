# webdemos

A set of small web servers, each showing one technique. Every demo can be
started from the command line, and most can also be built as an
application object and driven from a test client without opening a port.

## Installation

```
pip install webdemos
```

The test suite needs the `test` extra:

```
pip install "webdemos[test]"
```

## The demos

Each demo is a module in the `webdemos` package. Its `main()` parses the
command line and starts the server; the factory functions listed below
return the application without starting anything.

| Command | Module | What it shows |
| --- | --- | --- |
| `webdemos-hello` | `webdemos.hello` | `create_app()` answers `/` with `Hello World!` and `/ping` with `pong`. The port comes from the `PORT` environment variable, default 8080. |
| `webdemos-cookie` | `webdemos.cookie` | `/login` sets a `label=ok` cookie for 30 seconds; `/home` is wrapped in `cookie_required` and answers 403 without it. Port 8080 (`--port`). |
| `webdemos-versioning` | `webdemos.versioning` | `/v1` and `/v2` groups, each with `GET users` and `POST users/add`; the add route answers 401 unless `is_authorized` accepts the form's `user` and `password` fields. Port 8081. |
| `webdemos-group-routes` | `webdemos.group_routes` | Nested route groups built with `add_user_routes` and `add_ping_routes`: `/v1/users/...`, `/v1/ping/` and `/v2/ping/`. Port 5000. |
| `webdemos-multiple-service` | `webdemos.multiple_service` | Two servers from `create_router(1)` and `create_router(2)` on ports 8080 and 8081 (`--port1`, `--port2`); the first failure stops the program. |
| `webdemos-templates` | `webdemos.templates` | `create_app(template_path)` renders a template file at `/raw` with `{[{ ... }]}` delimiters and a `formatAsDate` filter (`format_as_date`). `--template` picks the file. |
| `webdemos-validation` | `webdemos.validation` | `bind_booking` checks `check_in`/`check_out` query dates (`bookable_date`, check-out after check-in); `bind_user` checks a JSON user's e-mail and that a first or last name is given. Both raise `ValidationError`. `--app bookable` or `--app user`, port 8085. |
| `webdemos-uploads` | `webdemos.uploads` | `/upload` endpoints from `create_binding_app`, `create_single_app` and `create_multiple_app`, saving files into an upload directory. `--kind`, `--upload-dir`, `--port`. |
| `webdemos-ratelimit` | `webdemos.ratelimit` | A leaky-bucket `Limiter` whose `take()` spaces requests evenly; `/rate` is limited to `--rps` requests per second (default 100). |
| `webdemos-chunked` | `webdemos.chunked` | `/test_stream` sends an HTML page piece by piece from `stream_numbers`, one heading every `--delay` seconds. |
| `webdemos-shutdown` | `webdemos.shutdown` | A `GracefulServer` that on SIGINT or SIGTERM either drains running requests (`shutdown(timeout)`, `--mode graceful`) or stops at once (`close()`, `--mode close`). |
| `webdemos-realtime-chat` | `webdemos.realtime_chat` | Chat rooms streamed as server-sent events, with all room operations run by a `Manager` on one worker thread. Port 8080. |
| `webdemos-realtime-advanced` | `webdemos.realtime_advanced` | Chat rooms with per-client rate limiting (banned from the 200th request), nickname and message checks (`clean_nick`, `validate_post`), and a `stats` event each second from `StatsCollector`. Port 80 (`--port`). |
| `webdemos-proxy` | `webdemos.proxy` | `--role real` reports the path and client addresses it sees (127.0.0.1:2003); `--role reverse` relays `GET /<name>` to it (127.0.0.1:2002); `--role forward` sends requests carrying `Forward: ok` to their own URL and everything else to `--upstream` (port 8888). |
| `webdemos-assets` | `webdemos.assets` | Two templates held in memory (`load_templates`) served at `/` and `/bar`. Port 8080. |
| `webdemos-websocket-echo` | `webdemos.websocket_echo` | A websocket echo server at `/echo` with a browser test page at `/`. `--addr`, default `:8080`. |
| `webdemos-websocket-client` | `webdemos.websocket_echo` | Connects to `--addr` (default `localhost:8080`), sends the current time every second and logs each echo. |

The room machinery shared by the two chat demos lives in
`webdemos.broadcast`: a `Broadcaster` fans messages out to listener
queues, and a `RoomRegistry` keeps one per room.

## Examples

Start the hello server and open `http://localhost:8080/ping`:

```
webdemos-hello
```

Run the websocket echo server in one terminal and the client in another:

```
webdemos-websocket-echo
webdemos-websocket-client
```

Use a demo from your own tests:

```python
from webdemos.hello import create_app

client = create_app().test_client()
response = client.get("/ping")
assert response.status_code == 200
assert response.get_data(as_text=True) == "pong"
```

Use the rooms on their own:

```python
from webdemos.broadcast import RoomRegistry

rooms = RoomRegistry()
listener = rooms.open_listener("lobby")
rooms.room("lobby").submit({"nick": "ann", "message": "hello"})
assert listener.get() == {"nick": "ann", "message": "hello"}
rooms.close_listener("lobby", listener)
```

## What is not included

- Every server speaks plain HTTP. There is no HTTPS, automatic
  certificate handling, HTTP/2 server push or gRPC.
- Some demos read files the package does not ship. `webdemos-templates`
  needs the template given with `--template` (default
  `./testdata/raw.tmpl`). `webdemos-realtime-advanced` needs
  `resources/room_login.templ.html` and a `resources/static` directory.
  The upload demos serve static pages from `./public` if it exists.

## Running the tests

```
pytest
```