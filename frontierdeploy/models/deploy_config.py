"""
Resolved deployment settings
"""
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_KEY_PREFIX = "frontier-icons"
DEFAULT_MANIFEST_NAME = "frontier_assets.json"
LATEST_SEGMENT = "latest"


@dataclass(frozen=True)
class DeploymentConfig:
    """Immutable settings for one deployment run.

    Built once by :func:`frontierdeploy.utils.config_loader.resolve_config`
    and handed to every component that needs it.
    """
    bucket: str
    version: str
    source_dir: str
    region: str = "us-east-1"
    endpoint: Optional[str] = None
    force_path_style: bool = False
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = field(default=None, repr=False)
    profile: Optional[str] = None
    key_prefix: str = DEFAULT_KEY_PREFIX
    manifest_name: str = DEFAULT_MANIFEST_NAME
    dry_run: bool = False
    force: bool = False
    setup_cors: bool = False
    cors_origins: Tuple[str, ...] = ("http://localhost:3000",)
    acl: Optional[str] = "public-read"
    max_workers: int = 1

    @property
    def icons_dir(self) -> str:
        return os.path.join(self.source_dir, "icons")

    @property
    def manifest_file(self) -> str:
        return os.path.join(self.source_dir, self.manifest_name)

    @property
    def has_explicit_credentials(self) -> bool:
        return bool(self.access_key_id and self.secret_access_key)

    def versioned_key(self, relative_path: str) -> str:
        """Object key for a file published under this run's version."""
        return f"{self.key_prefix}/{self.version}/{relative_path}"

    def versioned_manifest_key(self) -> str:
        return self.versioned_key(self.manifest_name)

    def latest_manifest_key(self) -> str:
        return f"{self.key_prefix}/{LATEST_SEGMENT}/{self.manifest_name}"
