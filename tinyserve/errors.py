"""Fatal error reporting for the command-line tools."""

import os
import sys


class FatalError(SystemExit):
    """A fatal condition. If nothing catches it, the process exits with status 1."""

    def __init__(self, message):
        super().__init__(1)
        self.message = message

    def __str__(self):
        return self.message


def format_error(message, with_errno=False):
    """Return the message, followed by the reason of the OSError being handled if asked."""
    if with_errno:
        exc = sys.exc_info()[1]
        if isinstance(exc, OSError):
            reason = os.strerror(exc.errno) if exc.errno is not None else str(exc)
            return f"{message}: {reason}"
    return message


def _report(text):
    sys.stdout.flush()
    sys.stderr.write(text + "\n")
    sys.stderr.flush()


def err_sys(message):
    """Report a fatal error caused by a system call and raise FatalError."""
    text = format_error(message, True)
    _report(text)
    raise FatalError(text)


def err_quit(message):
    """Report a fatal error that has no system cause and raise FatalError."""
    text = format_error(message, False)
    _report(text)
    raise FatalError(text)