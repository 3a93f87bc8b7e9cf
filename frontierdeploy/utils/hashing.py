"""
Content fingerprints for change detection.

Fingerprints are hex MD5 digests. For single-part uploads S3 reports the
same value as the object's ``ETag``, so a local digest can be compared to
a HEAD response directly.
"""
import base64
import hashlib

from ..exceptions import FileReadError

_CHUNK_SIZE = 1024 * 1024


def fingerprint_bytes(data: bytes) -> str:
    """Return the hex MD5 digest of *data*."""
    return hashlib.md5(data).hexdigest()


def fingerprint_file(path: str) -> str:
    """Hash a file from disk without loading it all at once.

    Raises:
        FileReadError: If the file cannot be opened or read
    """
    digest = hashlib.md5()
    try:
        with open(path, 'rb') as f:
            for chunk in iter(lambda: f.read(_CHUNK_SIZE), b''):
                digest.update(chunk)
    except OSError as e:
        raise FileReadError(path, e.strerror or str(e)) from e
    return digest.hexdigest()


def content_md5_header(fingerprint: str) -> str:
    """Convert a hex digest to the base64 form S3 expects in ``Content-MD5``."""
    return base64.b64encode(bytes.fromhex(fingerprint)).decode('ascii')
