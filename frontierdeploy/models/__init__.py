from .asset_file import AssetFile, UploadDecision, UploadPlan
from .deploy_config import DeploymentConfig, DEFAULT_KEY_PREFIX, DEFAULT_MANIFEST_NAME
from .summary import DeploymentSummary, FileResult

__all__ = [
    'AssetFile',
    'UploadDecision',
    'UploadPlan',
    'DeploymentConfig',
    'DEFAULT_KEY_PREFIX',
    'DEFAULT_MANIFEST_NAME',
    'DeploymentSummary',
    'FileResult',
]
