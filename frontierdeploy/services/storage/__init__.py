"""
S3-compatible storage package.

- :mod:`operations` - put/head/CORS primitives over a boto3 client
- :mod:`base_url`   - public URL strategies for AWS and custom endpoints
- :mod:`cors`       - bucket CORS policy
"""
from .operations import S3Operations
from .base_url import AwsBaseUrl, CustomEndpointBaseUrl, base_url_strategy, compute_base_url
from .cors import CorsConfigurer, build_cors_configuration

__all__ = [
    'S3Operations',
    'AwsBaseUrl',
    'CustomEndpointBaseUrl',
    'base_url_strategy',
    'compute_base_url',
    'CorsConfigurer',
    'build_cors_configuration',
]
