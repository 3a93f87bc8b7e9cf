"""
Low-level S3 primitive operations.

Provides the adapter every higher-level component talks to: object
upload, HEAD-based fingerprint lookup, and bucket CORS configuration.
botocore failures are translated into the :mod:`frontierdeploy.exceptions`
hierarchy here so callers never handle ``ClientError`` directly.
"""
from typing import Any, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from ...exceptions import CorsConfigurationError, RemoteProbeError, UploadError
from ...utils.logger import get_logger

log = get_logger(__name__)

_NOT_FOUND_CODES = frozenset({"404", "NotFound", "NoSuchKey"})


def is_not_found(error: ClientError) -> bool:
    """True when a ``ClientError`` means the object simply does not exist."""
    response = error.response or {}
    code = str(response.get("Error", {}).get("Code", ""))
    status = response.get("ResponseMetadata", {}).get("HTTPStatusCode")
    return code in _NOT_FOUND_CODES or status == 404


class S3Operations:
    """Primitive S3 operations bound to one bucket.

    Args:
        s3_client: A boto3 S3 client (or anything with the same methods)
        bucket_name: Destination bucket
        acl: Canned ACL attached to every object, or None to omit it
    """

    def __init__(self, s3_client, bucket_name: str, acl: Optional[str] = None):
        self.s3_client = s3_client
        self.bucket_name = bucket_name
        self.acl = acl or None

    def head_fingerprint(self, s3_key: str) -> Optional[str]:
        """Return the remote object's ETag without its quotes.

        Args:
            s3_key: S3 object key

        Returns:
            The fingerprint, or None if no object exists at *s3_key*

        Raises:
            RemoteProbeError: For any failure other than not-found
        """
        try:
            response = self.s3_client.head_object(Bucket=self.bucket_name, Key=s3_key)
        except ClientError as e:
            if is_not_found(e):
                log.debug("No remote object at %s", s3_key)
                return None
            raise RemoteProbeError(s3_key, str(e)) from e
        except BotoCoreError as e:
            raise RemoteProbeError(s3_key, str(e)) from e

        etag = response.get("ETag")
        if not etag:
            raise RemoteProbeError(s3_key, "response carried no ETag")
        return etag.strip('"')

    def put_object(self, s3_key: str, body: bytes, content_type: str,
                   cache_control: str, content_md5: Optional[str] = None) -> Dict[str, Any]:
        """Upload *body* to *s3_key*.

        Args:
            s3_key: S3 object key
            body: Object bytes
            content_type: MIME type stored with the object
            cache_control: ``Cache-Control`` header stored with the object
            content_md5: Base64 MD5 the store verifies the body against

        Returns:
            The raw put_object response

        Raises:
            UploadError: If the store rejects the write
        """
        params = {
            "Bucket": self.bucket_name,
            "Key": s3_key,
            "Body": body,
            "ContentType": content_type,
            "CacheControl": cache_control,
        }
        if content_md5:
            params["ContentMD5"] = content_md5
        if self.acl:
            params["ACL"] = self.acl

        try:
            return self.s3_client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise UploadError(s3_key, str(e)) from e

    def put_bucket_cors(self, cors_configuration: Dict[str, Any]) -> None:
        """Replace the bucket's CORS configuration.

        Raises:
            CorsConfigurationError: If the store rejects the policy
        """
        try:
            self.s3_client.put_bucket_cors(
                Bucket=self.bucket_name,
                CORSConfiguration=cors_configuration,
            )
        except (ClientError, BotoCoreError) as e:
            raise CorsConfigurationError(self.bucket_name, str(e)) from e
