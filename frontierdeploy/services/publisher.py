"""
Versioned deployment workflow.

Provides :class:`DeploymentPublisher`, which walks the icon tree,
uploads changed files under ``{prefix}/{version}/``, then publishes the
versioned manifest and the ``latest`` pointer manifest.
"""
import threading
from datetime import datetime, timezone
from queue import Empty, Queue
from typing import Callable, Iterable, List, Optional

from ..exceptions import DeployError, FileReadError
from ..models.asset_file import AssetFile, UploadDecision, UploadPlan
from ..models.deploy_config import DeploymentConfig
from ..models.summary import DeploymentSummary, FileResult
from ..utils.hashing import content_md5_header, fingerprint_bytes
from ..utils.logger import get_logger
from ..utils.persistence.file_utils import parse_json, read_bytes
from ..utils.tree_walker import walk_tree
from .manifest import build_latest_manifest, render_manifest
from .planner import CACHE_CONTROL_MANIFEST, UploadPlanner
from .storage.base_url import base_url_strategy
from .storage.cors import CorsConfigurer
from .storage.operations import S3Operations

log = get_logger(__name__)


class DeploymentPublisher:
    """Runs one deployment against a resolved :class:`DeploymentConfig`.

    Per-asset failures are recorded and counted without stopping the run.
    CORS and manifest failures propagate: a run that uploaded assets but
    no valid manifest is not a successful deployment.

    Args:
        config: Resolved settings for this run
        operations: Bucket-bound S3 adapter
        clock: Returns the publish time; defaults to ``datetime.now(UTC)``
    """

    def __init__(self, config: DeploymentConfig, operations: S3Operations,
                 clock: Optional[Callable[[], datetime]] = None):
        self.config = config
        self.operations = operations
        self.planner = UploadPlanner(operations, force=config.force)
        self.base_urls = base_url_strategy(config.endpoint)
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    # ── Main entry point ───────────────────────────────────────────────

    def publish(self) -> DeploymentSummary:
        """Execute the full workflow and return its summary.

        Raises:
            CorsConfigurationError: CORS was requested and could not be applied
            TreeWalkError: The icon tree could not be enumerated
            FileReadError: The manifest could not be read or parsed
            RemoteProbeError, UploadError: A manifest stage failed
        """
        config = self.config
        summary = DeploymentSummary(version=config.version, dry_run=config.dry_run)

        manifest_body = read_bytes(config.manifest_file)
        manifest = self._parse_manifest(manifest_body)

        if config.setup_cors:
            self.configure_cors()
            summary.cors_configured = True

        self.upload_assets(walk_tree(config.icons_dir), summary)
        self.publish_versioned_manifest(manifest_body, summary)
        self.publish_latest_manifest(manifest, summary)
        return summary

    def configure_cors(self):
        log.info("Configuring CORS settings...")
        return CorsConfigurer(
            self.operations, self.config.cors_origins, dry_run=self.config.dry_run
        ).apply()

    # ── Assets ─────────────────────────────────────────────────────────

    def upload_assets(self, assets: Iterable[AssetFile], summary: DeploymentSummary) -> DeploymentSummary:
        """Plan and upload every asset, recording one result per file."""
        log.info("Uploading icon files...")

        if self.config.max_workers > 1:
            self._upload_concurrently(assets, summary)
        else:
            for asset in assets:
                self.process_asset(asset, summary)

        log.info(
            "Icons upload summary: %d uploaded, %d skipped, %d errors",
            summary.uploaded, summary.skipped, summary.errors,
        )
        return summary

    def process_asset(self, asset: AssetFile, summary: DeploymentSummary) -> FileResult:
        """Handle one file; failures are recorded, not raised."""
        key = self.config.versioned_key(asset.relative_path)
        result = FileResult(relative_path=asset.relative_path, key=key)

        try:
            plan = self.planner.plan(asset.local_path, key)
            result.decision = plan.decision
            result.size = plan.size
            result.content_type = plan.content_type
            self._execute(plan)
        except (DeployError, OSError) as e:
            result.error = str(e)
            log.error("Error uploading %s: %s", asset.relative_path, e)

        summary.record(result)
        return result

    def _upload_concurrently(self, assets: Iterable[AssetFile], summary: DeploymentSummary) -> None:
        work_queue = Queue()
        for asset in assets:
            work_queue.put(asset)

        crashes: List[BaseException] = []
        crash_lock = threading.Lock()

        def worker():
            while True:
                try:
                    asset = work_queue.get_nowait()
                except Empty:
                    return
                try:
                    self.process_asset(asset, summary)
                except Exception as e:  # noqa: BLE001 - re-raised on the main thread
                    with crash_lock:
                        crashes.append(e)
                finally:
                    work_queue.task_done()

        num_workers = min(self.config.max_workers, work_queue.qsize())
        threads = [threading.Thread(target=worker, daemon=True) for _ in range(num_workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        if crashes:
            raise crashes[0]

    # ── Manifests ──────────────────────────────────────────────────────

    def publish_versioned_manifest(self, body: bytes, summary: DeploymentSummary) -> UploadPlan:
        """Upload the manifest verbatim under the version path."""
        log.info("Uploading manifest file...")
        key = self.config.versioned_manifest_key()
        plan = self.planner.plan_body(body, key, self.config.manifest_file)
        self._execute(plan)

        summary.versioned_manifest_key = key
        summary.versioned_manifest_decision = plan.decision
        return plan

    def publish_latest_manifest(self, manifest: dict, summary: DeploymentSummary) -> UploadPlan:
        """Upload the manifest with deployment metadata under the latest key."""
        log.info("Uploading latest manifest pointer...")
        config = self.config
        base_url = self.base_urls.compute_base_url(config.bucket, config.key_prefix, config.version)
        latest = build_latest_manifest(manifest, config.version, base_url, self.clock())
        body = render_manifest(latest)

        plan = UploadPlan(
            key=config.latest_manifest_key(),
            decision=UploadDecision.UPLOAD,
            fingerprint=fingerprint_bytes(body),
            body=body,
            content_type="application/json",
            cache_control=CACHE_CONTROL_MANIFEST,
        )
        self._execute(plan)

        summary.latest_manifest_key = plan.key
        summary.base_url = base_url
        return plan

    def _parse_manifest(self, body: bytes) -> dict:
        manifest = parse_json(self.config.manifest_file, body)
        if not isinstance(manifest, dict):
            raise FileReadError(self.config.manifest_file, "manifest must be a JSON object")
        return manifest

    # ── Execution ──────────────────────────────────────────────────────

    def _execute(self, plan: UploadPlan) -> None:
        if not plan.decision.uploads:
            log.info("Skipping %s (unchanged)", plan.key)
            return

        size_kb = round(plan.size / 1024)
        if self.config.dry_run:
            log.info("[DRY RUN] Would upload %s (%s, %dKB)", plan.key, plan.content_type, size_kb)
            return

        self.operations.put_object(
            plan.key,
            plan.body,
            content_type=plan.content_type,
            cache_control=plan.cache_control,
            content_md5=content_md5_header(plan.fingerprint),
        )
        log.info("Uploaded %s (%s, %dKB)", plan.key, plan.content_type, size_kb)
