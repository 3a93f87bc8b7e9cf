"""
frontierdeploy - versioned asset publishing to S3-compatible storage.

Walks an extracted asset tree, uploads changed files under a versioned
key prefix, and publishes a ``latest`` pointer manifest for CDN clients.
"""

__version__ = "1.0.0"
