"""
Upload planning: change detection plus content headers.
"""
import mimetypes

from ..models.asset_file import UploadDecision, UploadPlan
from ..utils.hashing import fingerprint_bytes, fingerprint_file
from ..utils.logger import get_logger
from ..utils.persistence.file_utils import read_bytes

log = get_logger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CACHE_CONTROL_IMAGES = "public, max-age=31536000, immutable"   # 1 year
CACHE_CONTROL_MANIFEST = "public, max-age=300"                 # 5 minutes
CACHE_CONTROL_DEFAULT = "public, max-age=86400"                # 1 day


def guess_content_type(path: str) -> str:
    """MIME type for *path* by extension."""
    content_type, _ = mimetypes.guess_type(path, strict=False)
    return content_type or DEFAULT_CONTENT_TYPE


def select_cache_control(content_type: str, path: str) -> str:
    """Cache policy for an uploaded object.

    Precedence is fixed: image types first, then ``.json`` files, then
    the default.
    """
    if content_type.startswith("image/"):
        return CACHE_CONTROL_IMAGES
    if path.endswith(".json"):
        return CACHE_CONTROL_MANIFEST
    return CACHE_CONTROL_DEFAULT


class UploadPlanner:
    """Decides whether a local file needs to be written to its key.

    Args:
        operations: Adapter used for the remote probe
        force: Upload everything without probing
    """

    def __init__(self, operations, force: bool = False):
        self.operations = operations
        self.force = force

    def decide(self, key: str, fingerprint: str) -> UploadDecision:
        if self.force:
            return UploadDecision.FORCED

        remote = self.operations.head_fingerprint(key)
        if remote is not None and remote == fingerprint:
            return UploadDecision.SKIP
        return UploadDecision.UPLOAD

    def plan(self, local_path: str, key: str) -> UploadPlan:
        """Hash and classify one file; its bytes are read only when uploading.

        Raises:
            FileReadError: If the file cannot be read
            RemoteProbeError: If the remote state cannot be determined
        """
        fingerprint = fingerprint_file(local_path)
        decision = self.decide(key, fingerprint)
        log.debug("%s -> %s (%s)", key, decision.value, fingerprint)

        if not decision.uploads:
            return UploadPlan(key=key, decision=decision, fingerprint=fingerprint)
        return self._upload_plan(key, decision, fingerprint, read_bytes(local_path), local_path)

    def plan_body(self, body: bytes, key: str, local_path: str) -> UploadPlan:
        """Classify bytes already in memory; *local_path* drives the headers."""
        fingerprint = fingerprint_bytes(body)
        decision = self.decide(key, fingerprint)
        log.debug("%s -> %s (%s)", key, decision.value, fingerprint)

        if not decision.uploads:
            return UploadPlan(key=key, decision=decision, fingerprint=fingerprint, body=body)
        return self._upload_plan(key, decision, fingerprint, body, local_path)

    def _upload_plan(self, key, decision, fingerprint, body, local_path):
        content_type = guess_content_type(local_path)
        return UploadPlan(
            key=key,
            decision=decision,
            fingerprint=fingerprint,
            body=body,
            content_type=content_type,
            cache_control=select_cache_control(content_type, local_path),
        )
