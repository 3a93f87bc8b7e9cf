"""
File system utilities
"""
import json
import logging
import os

from ...exceptions import FileReadError

log = logging.getLogger(__name__)


def read_bytes(filepath):
    """
    Read a file's full contents.

    Args:
        filepath: Path to file

    Returns:
        File contents as bytes

    Raises:
        FileReadError: If the file is missing or unreadable
    """
    try:
        with open(filepath, 'rb') as f:
            return f.read()
    except OSError as e:
        raise FileReadError(filepath, e.strerror or str(e)) from e


def parse_json(filepath, raw):
    """
    Parse JSON bytes that were read from *filepath*.

    Raises:
        FileReadError: If *raw* is not valid UTF-8 JSON
    """
    try:
        return json.loads(raw.decode('utf-8'))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        log.error("Error loading JSON from %s: %s", filepath, e)
        raise FileReadError(filepath, f"invalid JSON ({e})") from e


def path_exists(path, directory=False):
    """Check whether *path* exists (and is a directory when asked)."""
    if directory:
        return os.path.isdir(path)
    return os.path.isfile(path)
