"""Tests for bucket CORS configuration."""

from __future__ import annotations

import pytest

from frontierdeploy.exceptions import CorsConfigurationError
from frontierdeploy.services.storage.cors import CorsConfigurer, build_cors_configuration

ORIGINS = ["http://localhost:3000", "https://vultur.one"]


class TestBuildCorsConfiguration:
    def test_policy_shape(self):
        rule = build_cors_configuration(ORIGINS)["CORSRules"][0]
        assert rule == {
            "AllowedOrigins": ORIGINS,
            "AllowedMethods": ["GET", "HEAD"],
            "AllowedHeaders": ["*"],
            "MaxAgeSeconds": 3600,
            "ExposeHeaders": ["ETag"],
        }


class TestCorsConfigurer:
    def test_apply_calls_store(self, operations, fake_client):
        policy = CorsConfigurer(operations, ORIGINS).apply()
        assert fake_client.cors == policy
        assert fake_client.count("put_bucket_cors") == 1

    def test_reapply_replaces(self, operations, fake_client):
        CorsConfigurer(operations, ["https://old.example.com"]).apply()
        CorsConfigurer(operations, ORIGINS).apply()
        assert fake_client.cors["CORSRules"][0]["AllowedOrigins"] == ORIGINS

    def test_dry_run_reports_without_calling_store(self, operations, fake_client):
        policy = CorsConfigurer(operations, ORIGINS, dry_run=True).apply()
        assert policy["CORSRules"][0]["AllowedOrigins"] == ORIGINS
        assert fake_client.count("put_bucket_cors") == 0
        assert fake_client.cors is None

    def test_blank_origins_are_dropped(self, operations):
        policy = CorsConfigurer(operations, ["", "https://a.example.com"], dry_run=True).apply()
        assert policy["CORSRules"][0]["AllowedOrigins"] == ["https://a.example.com"]

    def test_failure_raises(self, operations, fake_client):
        fake_client.fail_cors = True
        with pytest.raises(CorsConfigurationError):
            CorsConfigurer(operations, ORIGINS).apply()
