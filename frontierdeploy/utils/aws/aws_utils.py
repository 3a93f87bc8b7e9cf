"""AWS utilities for session management.

Builds boto3 sessions and S3 clients for AWS and S3-compatible
providers (DigitalOcean Spaces, MinIO, ...) from a resolved
:class:`~frontierdeploy.models.deploy_config.DeploymentConfig`.
"""
from typing import Optional

import boto3
from botocore.config import Config as BotoConfig

from ...models.deploy_config import DeploymentConfig
from ..logger import get_logger

log = get_logger(__name__)

CONNECT_TIMEOUT = 10
READ_TIMEOUT = 60


def create_boto3_session(
    profile_name: Optional[str] = None,
    region_name: Optional[str] = None
):
    """Create a boto3 session, optionally bound to a named profile.

    Args:
        profile_name: AWS profile name from ``~/.aws/credentials``
        region_name: Optional AWS region

    Returns:
        boto3.Session object

    Example:
        >>> session = create_boto3_session('assets-deployer', 'us-west-2')
        >>> s3 = session.client('s3')
    """
    kwargs = {}
    if profile_name:
        kwargs['profile_name'] = profile_name
    if region_name:
        kwargs['region_name'] = region_name
    return boto3.Session(**kwargs)


def build_client_config(config: DeploymentConfig) -> BotoConfig:
    """botocore client config: addressing style plus bounded timeouts."""
    addressing = 'path' if (config.endpoint and config.force_path_style) else 'auto'
    return BotoConfig(
        s3={'addressing_style': addressing},
        connect_timeout=CONNECT_TIMEOUT,
        read_timeout=READ_TIMEOUT,
    )


def create_s3_client(config: DeploymentConfig, session=None):
    """Create the S3 client a deployment run talks to.

    Explicit keys win over a named profile; with neither, boto3's default
    credential chain (environment, instance role, ...) applies.

    Args:
        config: Resolved deployment settings
        session: Pre-built session to use instead of creating one

    Returns:
        A boto3 S3 client
    """
    if session is None:
        profile = None if config.has_explicit_credentials else config.profile
        session = create_boto3_session(profile, config.region)

    client_kwargs = {
        'region_name': config.region,
        'config': build_client_config(config),
    }
    if config.endpoint:
        client_kwargs['endpoint_url'] = config.endpoint
    if config.has_explicit_credentials:
        client_kwargs['aws_access_key_id'] = config.access_key_id
        client_kwargs['aws_secret_access_key'] = config.secret_access_key

    log.debug(
        "Creating S3 client (region=%s, endpoint=%s, profile=%s)",
        config.region, config.endpoint or 'aws', config.profile or '-',
    )
    return session.client('s3', **client_kwargs)
