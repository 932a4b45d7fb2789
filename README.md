# tinyserve

A set of small TCP and HTTP/1.1 servers, each a step up from the one
before, and a client that relays standard input to a server. Everything
uses port 8080 by default. The package depends on nothing outside the
standard library. It needs a POSIX system, because the forking servers
use `fork` and the poll server uses `select.poll`.

## Installing

```
pip install .
```

To run the test suite, install the `test` extra and run `pytest`:

```
pip install ".[test]"
pytest
```

## The servers

Every server takes `--port` to listen on a port other than 8080. Each
one runs until it is interrupted with Ctrl-C.

| Command            | What it does |
|--------------------|--------------|
| `tinyserve-echo`   | Raw TCP echo. Everything a client sends is sent straight back. A child process is forked for each connection. |
| `tinyserve-hello`  | Answers every connection with a fixed `200 OK` text reply that says `Hello World!`. A child process is forked for each connection. |
| `tinyserve-get`    | Reads the request line and routes on its path. `/start` and `/` get `200 OK` with a short text body. Any other path gets `404 Not Found`. A child process is forked for each connection. |
| `tinyserve-static` | Serves files from a document root, set with `--root`. The default root is `../static`, taken relative to the current directory. It forks a child process for each connection and closes the connection after the reply. |
| `tinyserve-poll`   | Keep-alive server on a `poll()` loop. It answers each request with the same short text reply, `boom`. When 8 seconds pass with no activity at all, it closes every client. |
| `tinyserve-select` | Echo server on a `select()` loop. One process serves up to 1024 clients. |
| `tinyserve-event`  | Keep-alive static file server on a selector loop. It takes `--root` like `tinyserve-static`. Replies go through a per-connection write buffer, described under `WriteBuffer` below. Use `--unbuffered` to turn this buffering off. |

### How static files are found

`tinyserve-static` and `tinyserve-event` look files up the same way:

- A leading `/` is removed from the request path.
- The root is searched recursively for a regular file with exactly that name. The first match is served with `200 OK`.
- If nothing matches, the reply is `404 Not Found`. The body is the root's `404.html`, or a short built-in message if that page is missing or empty.
- At most the first 4096 bytes of a file are sent.
- A request line with no space in it gets `400 Bad Request`.

For example:

```
tinyserve-static --root ./public
curl -i http://localhost:8080/index.html
```

## The client

`tinyserve-client` connects to port 8080 at the IPv4 address you give it:

```
tinyserve-client 127.0.0.1
```

It waits on standard input and the socket at the same time. Input is
sent as it arrives, and whatever the server sends is printed. Closing
standard input (Ctrl-D) shuts down the sending side of the connection.
The client exits once the server has closed its side too. If the server
closes first, the client exits with an error.

With `--lines`, it works one line at a time instead. It sends a line,
waits for one line back, prints it, and moves on to the next line:

```
tinyserve-client --lines 127.0.0.1
```

The client pairs naturally with `tinyserve-echo` and `tinyserve-select`.

## Using it as a library

- `tinyserve.net`
  - Holds the shared constants: `SERV_PORT`, `MAXLINE`, `MAX_FILE_SIZE`, `LISTENQ`, `KEEPALIVE_TIMEOUT`.
  - `listen_tcp(port, host, backlog)` returns a listening socket.
  - `connect_tcp(address, port)` connects to a dotted IPv4 address. It raises `ValueError` for an invalid address.
- `tinyserve.lineio`
  - `read_line` reads one newline-terminated line from a socket.
  - `request_path` returns the path from a request line, or `None` if the line has no space.
  - `parse_request` reads the request line from a socket and returns its path.
- `tinyserve.scanner`
  - `search_in_dir(directory, filename)` does the recursive file lookup.
  - `scan(filename, root)` returns `(status_code, body)`.
- `tinyserve.http`
  - `build_header(status_code, length, keep_alive)` builds the status line and headers.
  - `response_parts(request, root, keep_alive)` returns the status and the parts of the reply.
  - `respond_fork(sock, root, buffer)` and `respond_epoll(sock, data, root, buffer)` send the reply, optionally through a `WriteBuffer`.
- `tinyserve.buffer`
  - `WriteBuffer` keeps the bytes a non-blocking socket could not take yet.
    - `writev(sock, chunks)` sends chunks in one gathered write and keeps whatever the socket did not accept.
    - `flush(sock)` returns `True` once everything has been sent.
    - `expand()` doubles the capacity.
    - `reset()` clears the buffer.
    - `pending` says whether data is waiting to be sent.
    - `failed` says whether the data could not be buffered or the socket reported an error.
    - `used`, `sent` and `unsent` describe what the buffer holds.
    - The capacity starts at 8 KiB and doubles up to 64 KiB. It drops back to 8 KiB once the buffer is drained.
  - `BufferOverflow` is raised by `expand()` when the buffer would have to grow past its limit.
- `tinyserve.errors`
  - `format_error(message, with_errno)` formats an error message, optionally with the reason for the `OSError` being handled.
  - `err_sys(message)` and `err_quit(message)` print the message to standard error and raise `FatalError`. `FatalError` exits with status 1 if nothing catches it.
- The servers as objects:
  - `PollServer`, `SelectServer` and `EventServer` each take a listening socket.
  - Each one handles a single round of events with `step()`, or loops forever with `serve_forever()`.
  - `close()` closes every client and the listener. The servers also work as context managers.
  - The `clients` property lists the connected sockets.

## What it does not do

These are teaching-sized servers, not a general web server:

- Only the request path is read. Methods, headers and request bodies are ignored, and query strings are not parsed.
- Files are matched by name alone, so directories in the request path are not followed.
- Every file is served as `text/html`, and anything past the first 4096 bytes is cut off.
- There is no TLS, no logging and no configuration file.
- The client cannot pick a port other than 8080.