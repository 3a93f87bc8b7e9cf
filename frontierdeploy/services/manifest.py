"""
Latest-pointer manifest construction
"""
import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def build_latest_manifest(manifest: Dict[str, Any], version: str, base_url: str,
                          deployed_at: Optional[datetime] = None) -> Dict[str, Any]:
    """Return *manifest* with deployment metadata merged in.

    Only the ``metadata`` key changes: existing metadata fields are kept
    and ``deployedVersion``, ``deployedAt`` and ``baseUrl`` are set on top.
    The input document is left untouched.

    Args:
        manifest: Parsed versioned manifest (a JSON object)
        version: Deployment version being published
        base_url: Public root URL of *version*
        deployed_at: Publish time, defaults to now

    Raises:
        TypeError: If *manifest* is not a JSON object
    """
    if not isinstance(manifest, dict):
        raise TypeError(f"Manifest must be a JSON object, got {type(manifest).__name__}")

    moment = deployed_at or datetime.now(timezone.utc)
    existing = manifest.get("metadata")
    metadata = dict(existing) if isinstance(existing, dict) else {}
    metadata.update({
        "deployedVersion": version,
        "deployedAt": format_timestamp(moment),
        "baseUrl": base_url,
    })

    latest = dict(manifest)
    latest["metadata"] = metadata
    return latest


def render_manifest(manifest: Dict[str, Any]) -> bytes:
    """Serialize a manifest the way it is published (2-space indent)."""
    return json.dumps(manifest, indent=2, ensure_ascii=False).encode("utf-8")
