[build-system]
requires = ["hatchling>=1.18"]
build-backend = "hatchling.build"

[project]
name = "webdemos"
version = "0.1.0"
description = "Small, self-contained web server demos: routing, cookies, validation, uploads, rate limiting, streaming, graceful shutdown, proxies, realtime chat and websockets."
requires-python = ">=3.10"
keywords = [
    "http",
    "web",
    "flask",
    "server-sent-events",
    "websocket",
    "proxy",
    "rate-limiting",
    "examples",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]
dependencies = [
    "flask>=2.2",
    "requests>=2.28",
    "websockets>=13.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "pytest-asyncio>=0.21",
]

[project.scripts]
webdemos-cookie = "webdemos.cookie:main"
webdemos-versioning = "webdemos.versioning:main"
webdemos-group-routes = "webdemos.group_routes:main"
webdemos-hello = "webdemos.hello:main"
webdemos-multiple-service = "webdemos.multiple_service:main"
webdemos-templates = "webdemos.templates:main"
webdemos-validation = "webdemos.validation:main"
webdemos-uploads = "webdemos.uploads:main"
webdemos-ratelimit = "webdemos.ratelimit:main"
webdemos-chunked = "webdemos.chunked:main"
webdemos-shutdown = "webdemos.shutdown:main"
webdemos-realtime-chat = "webdemos.realtime_chat:main"
webdemos-realtime-advanced = "webdemos.realtime_advanced:main"
webdemos-proxy = "webdemos.proxy:main"
webdemos-assets = "webdemos.assets:main"
webdemos-websocket-echo = "webdemos.websocket_echo:main"
webdemos-websocket-client = "webdemos.websocket_echo:client_main"

[tool.hatch.build.targets.wheel]
packages = ["webdemos"]

[tool.hatch.build.targets.sdist]
include = ["webdemos", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
