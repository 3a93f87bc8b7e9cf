"""
Configuration loader: defaults, JSON config file, environment, CLI flags
"""
import json
import os
from datetime import datetime
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from dotenv import find_dotenv, load_dotenv

from ..exceptions import ConfigurationError
from ..models.deploy_config import DEFAULT_KEY_PREFIX, DEFAULT_MANIFEST_NAME, DeploymentConfig
from .logger import get_logger
from .persistence.file_utils import path_exists

log = get_logger(__name__)


# Built-in defaults. Every key here may also appear in a --config-file JSON
# document; unknown keys there are rejected.
DEFAULT_CONFIG: Dict[str, Any] = {
    "bucket": "",
    "region": "us-east-1",
    "endpoint": "",
    "force_path_style": False,
    "access_key_id": "",
    "secret_access_key": "",
    "profile": "",
    "key_prefix": DEFAULT_KEY_PREFIX,
    "manifest_name": DEFAULT_MANIFEST_NAME,
    "version": "",
    "dry_run": False,
    "force": False,
    "setup_cors": False,
    "cors_origins": "http://localhost:3000",
    "source_dir": "data/extracted",
    "acl": "public-read",
    "workers": 1,
}

# Environment variables per setting; the first non-empty one wins.
ENV_VARS: Dict[str, tuple] = {
    "bucket": ("S3_BUCKET_NAME", "S3_BUCKET", "AWS_S3_BUCKET"),
    "region": ("S3_REGION", "AWS_REGION"),
    "endpoint": ("S3_ENDPOINT",),
    "access_key_id": ("S3_ACCESS_KEY_ID", "AWS_ACCESS_KEY_ID"),
    "secret_access_key": ("S3_SECRET_ACCESS_KEY", "AWS_SECRET_ACCESS_KEY"),
    "profile": ("AWS_PROFILE",),
    "force_path_style": ("S3_FORCE_PATH_STYLE",),
    "key_prefix": ("S3_PATH_PREFIX", "S3_KEY_PREFIX"),
    "version": ("DEPLOY_VERSION",),
    "dry_run": ("DRY_RUN",),
    "force": ("FORCE_UPLOAD",),
    "setup_cors": ("SETUP_CORS",),
    "cors_origins": ("CORS_ORIGINS",),
    "source_dir": ("ASSETS_SOURCE_DIR",),
    "acl": ("S3_OBJECT_ACL",),
    "workers": ("DEPLOY_WORKERS",),
}

_TRUE_VALUES = {"true", "1", "yes", "on"}


def generate_version(now: Optional[datetime] = None) -> str:
    """Timestamp-derived version, e.g. ``v2024.12.02.1430`` (local time)."""
    now = now or datetime.now()
    return f"v{now.year}.{now.month:02d}.{now.day:02d}.{now.hour:02d}{now.minute:02d}"


def parse_bool(value: Any) -> bool:
    """Interpret an env/config value as a flag."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUE_VALUES


def parse_origins(value: Any) -> tuple:
    """Comma-separated string (or list) of origins to a clean tuple."""
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value or "").split(",")
    return tuple(o.strip() for o in items if o and o.strip())


class ConfigLoader:
    """Collects settings from each configuration source."""

    @staticmethod
    def load_dotenv_file(dotenv_path: Optional[str] = None) -> bool:
        """
        Load a ``.env`` file into the process environment.

        Existing environment variables are never overridden.

        Args:
            dotenv_path: Explicit path; defaults to the nearest ``.env``
                searching upward from the working directory

        Returns:
            True if a file was loaded
        """
        path = dotenv_path or find_dotenv(usecwd=True)
        if not path:
            return False
        loaded = load_dotenv(path, override=False)
        if loaded:
            log.debug("Loaded environment from %s", path)
        return loaded

    @staticmethod
    def load_config_file(path: str) -> Dict[str, Any]:
        """
        Load a JSON settings file.

        Args:
            path: Path to a JSON object whose keys are DEFAULT_CONFIG keys

        Returns:
            Settings dictionary

        Raises:
            ConfigurationError: If the file is unreadable, not an object,
                or contains unknown keys
        """
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError([f"Cannot load config file {path}: {e}"]) from e

        if not isinstance(data, dict):
            raise ConfigurationError([f"Config file {path} must contain a JSON object"])

        invalid_keys = sorted(k for k in data if k not in DEFAULT_CONFIG)
        if invalid_keys:
            raise ConfigurationError([
                f"Invalid configuration key(s) in {path}: {', '.join(invalid_keys)}",
                f"Valid keys: {', '.join(sorted(DEFAULT_CONFIG))}",
            ])
        return data

    @staticmethod
    def load_environment(environ: Mapping[str, str]) -> Dict[str, Any]:
        """
        Pick settings out of an environment mapping.

        Returns:
            Only the settings that have a non-empty variable set
        """
        settings = {}
        for key, names in ENV_VARS.items():
            for name in names:
                value = environ.get(name)
                if value:
                    settings[key] = value
                    break
        return settings


def merge_settings(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Merge settings layers, later layers winning; None values are ignored."""
    merged = dict(DEFAULT_CONFIG)
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is not None:
                merged[key] = value
    return merged


def build_config(settings: Mapping[str, Any], now: Optional[datetime] = None) -> DeploymentConfig:
    """
    Turn merged settings into a :class:`DeploymentConfig`.

    Raises:
        ConfigurationError: If a value has the wrong shape
    """
    raw_workers = settings.get("workers")
    try:
        workers = 1 if raw_workers in (None, "") else int(raw_workers)
    except (TypeError, ValueError) as e:
        raise ConfigurationError([f"workers must be an integer, got {raw_workers!r}"]) from e

    return DeploymentConfig(
        bucket=str(settings.get("bucket") or "").strip(),
        version=str(settings.get("version") or "").strip() or generate_version(now),
        source_dir=os.path.abspath(str(settings.get("source_dir") or DEFAULT_CONFIG["source_dir"])),
        region=str(settings.get("region") or DEFAULT_CONFIG["region"]),
        endpoint=settings.get("endpoint") or None,
        force_path_style=parse_bool(settings.get("force_path_style")),
        access_key_id=settings.get("access_key_id") or None,
        secret_access_key=settings.get("secret_access_key") or None,
        profile=settings.get("profile") or None,
        key_prefix=str(settings.get("key_prefix") or DEFAULT_KEY_PREFIX).strip("/"),
        manifest_name=str(settings.get("manifest_name") or DEFAULT_MANIFEST_NAME),
        dry_run=parse_bool(settings.get("dry_run")),
        force=parse_bool(settings.get("force")),
        setup_cors=parse_bool(settings.get("setup_cors")),
        cors_origins=parse_origins(settings.get("cors_origins")),
        acl=str(settings.get("acl") or "").strip() or None,
        max_workers=workers,
    )


def validate_config(config: DeploymentConfig) -> DeploymentConfig:
    """
    Check everything that must hold before any network activity.

    All problems are collected and reported together.

    Raises:
        ConfigurationError: Listing every problem found
    """
    problems = []

    if not config.bucket:
        problems.append("S3_BUCKET_NAME, S3_BUCKET, or AWS_S3_BUCKET environment variable is required")

    if not config.profile and not config.access_key_id:
        problems.append(
            "Access credentials required: Set S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY, "
            "or AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY, or use AWS_PROFILE"
        )

    if config.access_key_id and not config.secret_access_key:
        problems.append("S3_SECRET_ACCESS_KEY is required when S3_ACCESS_KEY_ID is set")

    if config.max_workers < 1:
        problems.append(f"workers must be at least 1, got {config.max_workers}")

    if config.endpoint:
        parsed = urlparse(config.endpoint)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            problems.append(f"S3_ENDPOINT must be an http(s) URL with a host: {config.endpoint}")

    if config.setup_cors and not config.cors_origins:
        problems.append("CORS_ORIGINS must list at least one origin when SETUP_CORS is enabled")

    if not path_exists(config.source_dir, directory=True):
        problems.append(f"Extracted directory not found: {config.source_dir}")
    elif not path_exists(config.icons_dir, directory=True):
        problems.append(f"Icons directory not found: {config.icons_dir}")

    if not path_exists(config.manifest_file):
        problems.append(f"Manifest file not found: {config.manifest_file}")

    if problems:
        raise ConfigurationError(problems)
    return config


def resolve_config(cli_overrides: Optional[Mapping[str, Any]] = None,
                   environ: Optional[Mapping[str, str]] = None,
                   config_file: Optional[str] = None,
                   now: Optional[datetime] = None) -> DeploymentConfig:
    """
    Resolve the run's configuration from every source.

    Precedence, lowest to highest: DEFAULT_CONFIG, *config_file*,
    *environ* (``os.environ`` when omitted), *cli_overrides*. The result
    is not validated; call :func:`validate_config` before deploying.
    """
    if environ is None:
        environ = os.environ
    file_settings = ConfigLoader.load_config_file(config_file) if config_file else None
    env_settings = ConfigLoader.load_environment(environ)
    return build_config(merge_settings(file_settings, env_settings, cli_overrides), now=now)
