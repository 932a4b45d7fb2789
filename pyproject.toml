[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyserve"
version = "0.1.0"
description = "Small TCP and HTTP/1.1 servers (echo, fixed replies, path routing, static files; forking, poll, select and event-loop variants with buffered writes) and a relay client."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "tcp", "server", "echo", "static-files", "select", "poll", "selectors", "sockets"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinyserve-echo = "tinyserve.echo:main"
tinyserve-hello = "tinyserve.hello:main"
tinyserve-get = "tinyserve.getserver:main"
tinyserve-static = "tinyserve.staticserver:main"
tinyserve-client = "tinyserve.client:main"
tinyserve-poll = "tinyserve.pollserver:main"
tinyserve-select = "tinyserve.selectserver:main"
tinyserve-event = "tinyserve.eventserver:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyserve"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
