"""
Exception hierarchy for deployment runs.

Per-asset errors (:class:`FileReadError`, :class:`RemoteProbeError`,
:class:`UploadError`) are caught and counted by the publisher loop.
Everything else propagates to the CLI and aborts the run.
"""
from typing import List, Optional


class DeployError(Exception):
    """Base class for all deployment failures."""


class ConfigurationError(DeployError):
    """Resolved settings cannot produce a valid run.

    Args:
        problems: Every validation problem found, in discovery order
    """

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "invalid configuration")


class FileReadError(DeployError):
    """A local file or manifest could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        super().__init__(f"Cannot read {path}: {reason}")


class TreeWalkError(DeployError):
    """The asset tree could not be enumerated."""


class RemoteProbeError(DeployError):
    """HEAD request failed for a reason other than not-found."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Cannot probe {key}: {reason}")


class UploadError(DeployError):
    """PUT request to the object store failed."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Failed to upload {key}: {reason}")


class CorsConfigurationError(DeployError):
    """Bucket CORS policy could not be applied."""

    def __init__(self, bucket: str, reason: Optional[str] = None):
        self.bucket = bucket
        msg = f"Failed to configure CORS on {bucket}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
