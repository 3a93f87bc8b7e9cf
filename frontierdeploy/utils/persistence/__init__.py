"""
Persistence utilities sub-package.

Local file reading for assets and manifests.
"""
from .file_utils import parse_json, path_exists, read_bytes

__all__ = [
    'parse_json',
    'path_exists',
    'read_bytes',
]
