"""
Deployment services.

- :mod:`planner`   - change detection and content headers
- :mod:`manifest`  - latest-pointer manifest construction
- :mod:`publisher` - the end-to-end deployment workflow
- :mod:`storage`   - S3 adapter, URL strategies, CORS
"""
from .planner import UploadPlanner, select_cache_control
from .manifest import build_latest_manifest
from .publisher import DeploymentPublisher

__all__ = [
    'UploadPlanner',
    'select_cache_control',
    'build_latest_manifest',
    'DeploymentPublisher',
]
