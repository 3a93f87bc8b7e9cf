"""Tests for UploadPlanner - change detection and content headers."""

from __future__ import annotations

import pytest

from frontierdeploy.exceptions import FileReadError, RemoteProbeError
from frontierdeploy.models.asset_file import UploadDecision
from frontierdeploy.services.planner import (
    CACHE_CONTROL_DEFAULT,
    CACHE_CONTROL_IMAGES,
    CACHE_CONTROL_MANIFEST,
    UploadPlanner,
    guess_content_type,
    select_cache_control,
)
from frontierdeploy.utils.hashing import fingerprint_bytes


class TestCacheControl:
    def test_image_gets_long_lived_policy(self):
        assert select_cache_control(guess_content_type("icon.png"), "icon.png") == CACHE_CONTROL_IMAGES

    def test_manifest_gets_short_policy(self):
        name = "frontier_assets.json"
        assert select_cache_control(guess_content_type(name), name) == CACHE_CONTROL_MANIFEST

    def test_unknown_extension_gets_default(self):
        name = "notes.unknownext"
        assert guess_content_type(name) == "application/octet-stream"
        assert select_cache_control(guess_content_type(name), name) == CACHE_CONTROL_DEFAULT

    def test_image_rule_wins_over_json_rule(self):
        assert select_cache_control("image/png", "weird.json") == CACHE_CONTROL_IMAGES

    def test_json_rule_uses_extension_not_mime(self):
        assert select_cache_control("application/octet-stream", "data.json") == CACHE_CONTROL_MANIFEST

    def test_policies_are_ordered_by_lifetime(self):
        assert "immutable" in CACHE_CONTROL_IMAGES
        assert "max-age=300" in CACHE_CONTROL_MANIFEST
        assert "max-age=86400" in CACHE_CONTROL_DEFAULT


class TestUploadPlanner:
    KEY = "frontier-icons/v1/icon.png"

    @pytest.fixture
    def icon(self, tmp_path):
        path = tmp_path / "icon.png"
        path.write_bytes(b"png-bytes")
        return path

    def test_absent_remote_uploads(self, operations, fake_client, icon):
        plan = UploadPlanner(operations).plan(str(icon), self.KEY)
        assert plan.decision is UploadDecision.UPLOAD
        assert plan.content_type == "image/png"
        assert plan.cache_control == CACHE_CONTROL_IMAGES
        assert plan.fingerprint == fingerprint_bytes(b"png-bytes")
        assert plan.size == len(b"png-bytes")
        assert fake_client.count("head_object") == 1

    def test_matching_remote_skips(self, operations, fake_client, icon):
        fake_client.put_object(Bucket="test-bucket", Key=self.KEY, Body=b"png-bytes")
        plan = UploadPlanner(operations).plan(str(icon), self.KEY)
        assert plan.decision is UploadDecision.SKIP
        assert plan.content_type is None

    def test_skip_does_not_load_body(self, operations, fake_client, icon):
        fake_client.put_object(Bucket="test-bucket", Key=self.KEY, Body=b"png-bytes")
        plan = UploadPlanner(operations).plan(str(icon), self.KEY)
        assert plan.body is None
        assert plan.size == 0

    def test_upload_carries_file_bytes(self, operations, icon):
        plan = UploadPlanner(operations).plan(str(icon), self.KEY)
        assert plan.body == b"png-bytes"

    def test_changed_remote_uploads(self, operations, fake_client, icon):
        fake_client.put_object(Bucket="test-bucket", Key=self.KEY, Body=b"old-bytes")
        plan = UploadPlanner(operations).plan(str(icon), self.KEY)
        assert plan.decision is UploadDecision.UPLOAD

    def test_force_never_probes(self, operations, fake_client, icon):
        fake_client.put_object(Bucket="test-bucket", Key=self.KEY, Body=b"png-bytes")
        plan = UploadPlanner(operations, force=True).plan(str(icon), self.KEY)
        assert plan.decision is UploadDecision.FORCED
        assert plan.content_type == "image/png"
        assert fake_client.count("head_object") == 0

    def test_probe_failure_propagates(self, operations, fake_client, icon):
        fake_client.fail_head[self.KEY] = ("AccessDenied", 403)
        with pytest.raises(RemoteProbeError):
            UploadPlanner(operations).plan(str(icon), self.KEY)

    def test_unreadable_file_raises(self, operations, tmp_path):
        with pytest.raises(FileReadError):
            UploadPlanner(operations).plan(str(tmp_path / "gone.png"), self.KEY)

    def test_plan_body_uses_path_for_headers(self, operations):
        plan = UploadPlanner(operations).plan_body(b"{}", "p/v/frontier_assets.json", "/x/frontier_assets.json")
        assert plan.content_type == "application/json"
        assert plan.cache_control == CACHE_CONTROL_MANIFEST
