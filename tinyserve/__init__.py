"""Small TCP and HTTP/1.1 servers (echo, fixed replies, routing, static files) and a relay client."""

__version__ = "0.1.0"