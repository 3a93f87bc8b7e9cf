"""
Per-file models: local asset entries and upload plans
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class AssetFile:
    """A local file to publish.

    Attributes:
        local_path: Absolute filesystem path
        relative_path: Path below the asset root, always ``/``-separated
    """
    local_path: str
    relative_path: str


class UploadDecision(Enum):
    """Outcome of change detection for one file."""
    SKIP = "skip"
    UPLOAD = "upload"
    FORCED = "forced"

    @property
    def uploads(self) -> bool:
        return self is not UploadDecision.SKIP


@dataclass(frozen=True)
class UploadPlan:
    """Everything needed to execute (or report) one upload decision.

    *body* is only loaded for decisions that upload.
    """
    key: str
    decision: UploadDecision
    fingerprint: str
    body: Optional[bytes] = None
    content_type: Optional[str] = None
    cache_control: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.body) if self.body is not None else 0
