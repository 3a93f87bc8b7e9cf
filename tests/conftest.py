"""Shared test fixtures for frontierdeploy."""

from __future__ import annotations

import base64
import hashlib
import json
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict

import pytest
from botocore.exceptions import ClientError

from frontierdeploy.models.deploy_config import DeploymentConfig
from frontierdeploy.services.storage.operations import S3Operations

FIXED_NOW = datetime(2024, 12, 2, 14, 30, 0, tzinfo=timezone.utc)

MANIFEST = {
    "icons": [
        {"id": 1, "path": "ui/texture/icons/frontier/ActiveCooling.png"},
        {"id": 2, "path": "ui/texture/icons/frontier/Shield.png"},
    ],
    "generatedAt": "2024-12-01T00:00:00Z",
}


def client_error(code: str, operation: str, status: int = 400) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": f"{code} ({operation})"},
            "ResponseMetadata": {"HTTPStatusCode": status},
        },
        operation,
    )


class FakeS3Client:
    """In-memory stand-in for a boto3 S3 client.

    Only the calls the deployer makes are implemented. Failures are
    injected per key through ``fail_put`` / ``fail_head`` and raise real
    botocore ``ClientError`` instances.
    """

    def __init__(self) -> None:
        self.objects: Dict[str, Dict[str, Any]] = {}
        self.cors: Dict[str, Any] | None = None
        self.calls: list = []
        self.fail_put: set = set()
        self.fail_head: Dict[str, tuple] = {}
        self.fail_cors = False
        self._lock = threading.Lock()

    def _log(self, op: str, key: str | None = None) -> None:
        with self._lock:
            self.calls.append((op, key))

    def count(self, op: str) -> int:
        return sum(1 for name, _ in self.calls if name == op)

    def head_object(self, *, Bucket: str, Key: str, **_):
        self._log("head_object", Key)
        if Key in self.fail_head:
            code, status = self.fail_head[Key]
            raise client_error(code, "HeadObject", status)
        obj = self.objects.get(Key)
        if obj is None:
            raise client_error("404", "HeadObject", 404)
        return {"ETag": obj["ETag"], "ContentLength": len(obj["Body"])}

    def put_object(self, *, Bucket: str, Key: str, Body: bytes, **kwargs):
        self._log("put_object", Key)
        if Key in self.fail_put:
            raise client_error("InternalError", "PutObject", 500)
        digest = hashlib.md5(Body).digest()
        if "ContentMD5" in kwargs and kwargs["ContentMD5"] != base64.b64encode(digest).decode():
            raise client_error("BadDigest", "PutObject", 400)
        etag = f'"{digest.hex()}"'
        with self._lock:
            self.objects[Key] = {"Body": Body, "ETag": etag, **kwargs}
        return {"ETag": etag}

    def put_bucket_cors(self, *, Bucket: str, CORSConfiguration: Dict[str, Any]):
        self._log("put_bucket_cors")
        if self.fail_cors:
            raise client_error("AccessDenied", "PutBucketCors", 403)
        self.cors = CORSConfiguration
        return {}


@pytest.fixture
def fake_client() -> FakeS3Client:
    """Provide an empty in-memory bucket."""
    return FakeS3Client()


@pytest.fixture
def operations(fake_client: FakeS3Client) -> S3Operations:
    """Provide an S3Operations adapter bound to the fake bucket."""
    return S3Operations(fake_client, "test-bucket", acl="public-read")


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Provide an extracted-assets directory with icons and a manifest."""
    root = tmp_path / "extracted"
    frontier = root / "icons" / "ui" / "texture" / "icons" / "frontier"
    frontier.mkdir(parents=True)
    (frontier / "ActiveCooling.png").write_bytes(b"\x89PNG\r\n\x1a\nactive-cooling")
    (frontier / "Shield.png").write_bytes(b"\x89PNG\r\n\x1a\nshield")
    (root / "icons" / "groups.json").write_text('{"groups": []}')
    (root / "icons" / "README.unknownext").write_text("notes")
    (root / "frontier_assets.json").write_text(json.dumps(MANIFEST, indent=2))
    return root


@pytest.fixture
def make_config(source_dir: Path):
    """Factory for DeploymentConfig pointing at ``source_dir``."""

    def _make(**overrides: Any) -> DeploymentConfig:
        settings: Dict[str, Any] = {
            "bucket": "test-bucket",
            "version": "v2024.12.02.1430",
            "source_dir": str(source_dir),
            "access_key_id": "AKIATEST",
            "secret_access_key": "secret",
        }
        settings.update(overrides)
        return DeploymentConfig(**settings)

    return _make


@pytest.fixture
def fixed_clock():
    """Clock returning a constant publish time."""
    return lambda: FIXED_NOW
