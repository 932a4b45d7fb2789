"""Finding static files under a document root."""

import os
import stat

from .net import MAX_FILE_SIZE

DEFAULT_ROOT = "../static"
NOT_FOUND_PAGE = "404.html"
FALLBACK_BODY = b"Oops! It seems developer made a little mistake!"


def _read_head(path):
    """Return up to MAX_FILE_SIZE bytes of the file, or None if it cannot be read or is empty."""
    try:
        with open(path, "rb") as handle:
            data = handle.read(MAX_FILE_SIZE)
    except OSError:
        return None
    return data or None


def search_in_dir(directory, filename):
    """Search directory recursively for a regular file named filename.

    Returns the first MAX_FILE_SIZE bytes of the first match, or None.
    A match that cannot be read or is empty ends the search in its directory.
    """
    try:
        entries = os.scandir(directory)
    except OSError:
        return None
    with entries:
        for entry in entries:
            path = os.path.join(directory, entry.name)
            try:
                info = os.stat(path)
            except OSError:
                continue
            if stat.S_ISDIR(info.st_mode):
                found = search_in_dir(path, filename)
                if found is not None:
                    return found
            elif stat.S_ISREG(info.st_mode) and entry.name == filename:
                return _read_head(path)
    return None


def scan(filename, root=DEFAULT_ROOT):
    """Return (status_code, body) for filename looked up under root.

    A found file gives 200 and its content; otherwise 404 with the root's
    404.html, or a fixed message when that page is missing or unreadable.
    """
    content = search_in_dir(root, filename)
    if content is not None:
        return 200, content
    page = _read_head(os.path.join(root, NOT_FOUND_PAGE))
    return 404, page if page is not None else FALLBACK_BODY