"""Per-connection write buffering for non-blocking sockets."""

BUF_8KB = 8192
BUF_MAX = 65536


class BufferOverflow(Exception):
    """Raised when a write buffer would have to grow past its maximum size."""


class WriteBuffer:
    """Holds bytes a non-blocking socket could not take yet.

    ``pending`` is true while data waits to be flushed; ``failed`` is set when
    the data could not be buffered or the socket reported an error.
    """

    def __init__(self, initial_capacity=BUF_8KB, max_size=BUF_MAX):
        if initial_capacity <= 0:
            raise ValueError("initial_capacity must be positive")
        self.initial_capacity = initial_capacity
        self.capacity = initial_capacity
        self.max_size = max_size
        self.pending = False
        self.failed = False
        self._data = bytearray()
        self._sent = 0

    def __len__(self):
        return len(self._data) - self._sent

    @property
    def used(self):
        """Bytes held in the buffer, sent or not."""
        return len(self._data)

    @property
    def sent(self):
        """Bytes of the buffer already written to the socket."""
        return self._sent

    @property
    def unsent(self):
        """The bytes still waiting to be written."""
        return bytes(self._data[self._sent:])

    def expand(self):
        """Double the capacity, up to max_size; raise BufferOverflow when already there."""
        if self.capacity >= self.max_size:
            raise BufferOverflow(f"write buffer limit of {self.max_size} bytes reached")
        self.capacity = min(self.capacity * 2, self.max_size)

    def _append(self, chunk):
        while len(chunk) > self.capacity - len(self._data):
            self.expand()
        self._data += chunk

    def flush(self, sock):
        """Write buffered data to sock; return True once nothing is left to send."""
        remain = self.unsent
        if not remain:
            return True
        try:
            written = sock.send(remain)
        except BlockingIOError:
            return False
        except OSError:
            self.failed = True
            return False
        self._sent += written
        if self._sent < len(self._data):
            return False
        self._data.clear()
        self._sent = 0
        self.pending = False
        if self.capacity > self.initial_capacity:
            self.capacity = self.initial_capacity
        return True

    def writev(self, sock, chunks):
        """Send chunks in one gathered write, keeping whatever the socket does not take.

        While earlier data is still buffered, the chunks are only appended.
        """
        chunks = list(chunks)
        try:
            if self._data or self._sent:
                for chunk in chunks:
                    self._append(chunk)
                self.pending = True
                return

            try:
                written = sock.sendmsg(chunks)
            except BlockingIOError:
                for chunk in chunks:
                    self._append(chunk)
                self.pending = True
                return
            except OSError:
                self.failed = True
                return

            if written == sum(len(chunk) for chunk in chunks):
                return

            skip = written
            for chunk in chunks:
                if skip >= len(chunk):
                    skip -= len(chunk)
                    continue
                self._append(chunk[skip:])
                skip = 0
            self._sent = 0
            self.pending = True
        except BufferOverflow:
            self.failed = True

    def reset(self):
        """Drop all buffered data and return to the initial state."""
        self._data = bytearray()
        self._sent = 0
        self.capacity = self.initial_capacity
        self.pending = False
        self.failed = False