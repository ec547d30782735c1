"""Small, self-contained web server demos: routing, cookies, validation,
uploads, rate limiting, streaming, graceful shutdown, proxies, realtime
chat and websockets."""

__version__ = "0.1.0"