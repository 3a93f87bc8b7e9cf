"""Display utilities sub-package.

Console rendering of run settings, configuration errors and summaries.
"""
from .display_utils import (
    mask_secret,
    print_banner,
    print_configuration_errors,
    print_deployment_info,
    print_summary,
)

__all__ = [
    'mask_secret',
    'print_banner',
    'print_configuration_errors',
    'print_deployment_info',
    'print_summary',
]
