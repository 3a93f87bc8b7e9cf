"""Tests for latest-pointer manifest construction."""

from __future__ import annotations

import copy
import json
from datetime import datetime, timedelta, timezone

import pytest

from conftest import FIXED_NOW, MANIFEST
from frontierdeploy.services.manifest import build_latest_manifest, format_timestamp, render_manifest

BASE_URL = "https://bucket.example.com/frontier-icons/v1"


class TestBuildLatestManifest:
    def test_adds_exact_metadata(self):
        latest = build_latest_manifest(MANIFEST, "v1", BASE_URL, FIXED_NOW)
        assert latest["metadata"] == {
            "deployedVersion": "v1",
            "deployedAt": "2024-12-02T14:30:00.000Z",
            "baseUrl": BASE_URL,
        }

    def test_original_fields_unchanged(self):
        latest = build_latest_manifest(MANIFEST, "v1", BASE_URL, FIXED_NOW)
        for key, value in MANIFEST.items():
            assert latest[key] == value
        assert set(latest) == set(MANIFEST) | {"metadata"}

    def test_input_not_mutated(self):
        original = copy.deepcopy(MANIFEST)
        build_latest_manifest(MANIFEST, "v1", BASE_URL, FIXED_NOW)
        assert MANIFEST == original

    def test_existing_metadata_is_merged(self):
        doc = {"icons": [], "metadata": {"source": "extractor", "deployedVersion": "v0"}}
        latest = build_latest_manifest(doc, "v1", BASE_URL, FIXED_NOW)
        assert latest["metadata"]["source"] == "extractor"
        assert latest["metadata"]["deployedVersion"] == "v1"
        assert doc["metadata"]["deployedVersion"] == "v0"

    def test_non_object_metadata_is_replaced(self):
        latest = build_latest_manifest({"metadata": "legacy"}, "v1", BASE_URL, FIXED_NOW)
        assert latest["metadata"]["deployedVersion"] == "v1"

    def test_defaults_to_now(self):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)
        latest = build_latest_manifest({}, "v1", BASE_URL)
        stamp = datetime.strptime(latest["metadata"]["deployedAt"], "%Y-%m-%dT%H:%M:%S.%fZ")
        assert stamp.replace(tzinfo=timezone.utc) >= before

    def test_rejects_non_object(self):
        with pytest.raises(TypeError):
            build_latest_manifest(["not", "an", "object"], "v1", BASE_URL, FIXED_NOW)


class TestFormatting:
    def test_timestamp_milliseconds_and_z(self):
        moment = datetime(2024, 1, 5, 3, 4, 5, 678901, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024-01-05T03:04:05.678Z"

    def test_timestamp_converts_to_utc(self):
        moment = datetime(2024, 1, 5, 5, 0, 0, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2024-01-05T03:00:00.000Z"

    def test_render_is_indented_json(self):
        body = render_manifest({"a": [1]})
        assert body == b'{\n  "a": [\n    1\n  ]\n}'
        assert json.loads(body) == {"a": [1]}
