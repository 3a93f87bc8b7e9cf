"""
Bucket CORS configuration.
"""
from typing import Any, Dict, Iterable

from ...utils.logger import get_logger
from .operations import S3Operations

log = get_logger(__name__)

ALLOWED_METHODS = ["GET", "HEAD"]
ALLOWED_HEADERS = ["*"]
EXPOSE_HEADERS = ["ETag"]
MAX_AGE_SECONDS = 3600


def build_cors_configuration(origins: Iterable[str]) -> Dict[str, Any]:
    """Return the read-only cross-origin policy for *origins*."""
    return {
        "CORSRules": [
            {
                "AllowedOrigins": list(origins),
                "AllowedMethods": list(ALLOWED_METHODS),
                "AllowedHeaders": list(ALLOWED_HEADERS),
                "MaxAgeSeconds": MAX_AGE_SECONDS,
                "ExposeHeaders": list(EXPOSE_HEADERS),
            }
        ]
    }


class CorsConfigurer:
    """Applies :func:`build_cors_configuration` to the destination bucket.

    Re-applying simply replaces whatever policy the bucket had.

    Args:
        operations: Bucket-bound S3 adapter
        origins: Allowed origins
        dry_run: Report the policy without calling the store
    """

    def __init__(self, operations: S3Operations, origins: Iterable[str], dry_run: bool = False):
        self.operations = operations
        self.origins = [o for o in origins if o]
        self.dry_run = dry_run

    def apply(self) -> Dict[str, Any]:
        """Apply (or, in dry run, describe) the policy and return it.

        Raises:
            CorsConfigurationError: If the store rejects the policy
        """
        configuration = build_cors_configuration(self.origins)

        if self.dry_run:
            log.info("[DRY RUN] Would configure CORS on %s", self.operations.bucket_name)
        else:
            self.operations.put_bucket_cors(configuration)
            log.info("CORS configuration applied to %s", self.operations.bucket_name)

        log.info("   Origins: %s", ", ".join(self.origins))
        log.info("   Methods: %s", ", ".join(ALLOWED_METHODS))
        log.info("   Headers: %s", ", ".join(ALLOWED_HEADERS))
        log.info("   Max Age: %d seconds", MAX_AGE_SECONDS)
        log.info("   Expose Headers: %s", ", ".join(EXPOSE_HEADERS))
        return configuration
