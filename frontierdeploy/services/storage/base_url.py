"""
Public URL construction for published versions.

AWS and custom S3-compatible endpoints (DigitalOcean Spaces, MinIO, ...)
expose buckets under different host names; each gets its own strategy.
"""
from abc import ABC, abstractmethod
from typing import Optional
from urllib.parse import urlparse


class BaseUrlStrategy(ABC):
    """Maps a bucket to the public root its objects are served from."""

    @abstractmethod
    def cdn_domain(self, bucket: str) -> str:
        """Scheme and host serving *bucket*, without a trailing slash."""

    def compute_base_url(self, bucket: str, prefix: str, version: str) -> str:
        """Root URL of one published version."""
        return f"{self.cdn_domain(bucket)}/{prefix}/{version}"


class AwsBaseUrl(BaseUrlStrategy):
    """Virtual-hosted-style AWS S3 URLs."""

    def cdn_domain(self, bucket: str) -> str:
        return f"https://{bucket}.s3.amazonaws.com"


class CustomEndpointBaseUrl(BaseUrlStrategy):
    """Bucket as a subdomain of a custom endpoint's host.

    Only the scheme and hostname of *endpoint* are used; any port or path
    on the endpoint is dropped.
    """

    def __init__(self, endpoint: str):
        parsed = urlparse(endpoint)
        if not parsed.scheme or not parsed.hostname:
            raise ValueError(f"Endpoint must be an absolute URL: {endpoint!r}")
        self.scheme = parsed.scheme
        self.hostname = parsed.hostname

    def cdn_domain(self, bucket: str) -> str:
        return f"{self.scheme}://{bucket}.{self.hostname}"


def base_url_strategy(endpoint: Optional[str]) -> BaseUrlStrategy:
    """Pick the strategy for an optional custom endpoint."""
    if endpoint:
        return CustomEndpointBaseUrl(endpoint)
    return AwsBaseUrl()


def compute_base_url(bucket: str, endpoint: Optional[str], prefix: str, version: str) -> str:
    """Public root URL of *version* for the given bucket and endpoint."""
    return base_url_strategy(endpoint).compute_base_url(bucket, prefix, version)
