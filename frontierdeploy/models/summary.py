"""
Structured result of a deployment run
"""
import threading
from dataclasses import dataclass, field
from typing import List, Optional

from .asset_file import UploadDecision


@dataclass
class FileResult:
    """Outcome for a single asset file."""
    relative_path: str
    key: str
    decision: Optional[UploadDecision] = None
    size: int = 0
    content_type: Optional[str] = None
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass
class DeploymentSummary:
    """Counts and per-file results, safe to update from worker threads."""
    version: str
    dry_run: bool = False
    uploaded: int = 0
    skipped: int = 0
    errors: int = 0
    files: List[FileResult] = field(default_factory=list)
    cors_configured: bool = False
    versioned_manifest_key: Optional[str] = None
    versioned_manifest_decision: Optional[UploadDecision] = None
    latest_manifest_key: Optional[str] = None
    base_url: Optional[str] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record(self, result: FileResult) -> None:
        """Add one file's outcome and bump the matching counter."""
        with self._lock:
            self.files.append(result)
            if result.failed:
                self.errors += 1
            elif result.decision is UploadDecision.SKIP:
                self.skipped += 1
            else:
                self.uploaded += 1

    def failures(self) -> List[FileResult]:
        return [r for r in self.files if r.failed]
