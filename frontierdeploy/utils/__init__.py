"""Utility modules for frontierdeploy.

Sub-packages:
- persistence/ - local file and JSON reading
- display/ - console rendering of settings and summaries
- aws/ - boto3 session and S3 client construction
"""

from .config_loader import ConfigLoader, resolve_config, validate_config, generate_version
from .persistence.file_utils import read_bytes
from .logger import get_logger, setup_logging
from .hashing import fingerprint_bytes, fingerprint_file
from .tree_walker import walk_tree

__all__ = [
    'ConfigLoader',
    'resolve_config',
    'validate_config',
    'generate_version',
    'read_bytes',
    'get_logger',
    'setup_logging',
    'fingerprint_bytes',
    'fingerprint_file',
    'walk_tree',
]
