"""
frontierdeploy - Main CLI interface
EVE Frontier asset deployment to S3-compatible storage

Settings come from (lowest to highest precedence) built-in defaults, an
optional JSON config file, the environment (including a ``.env`` file)
and the flags below.
"""
import sys
import argparse
from colorama import init
from botocore.exceptions import BotoCoreError

from . import __version__
from .exceptions import ConfigurationError, DeployError
from .services.publisher import DeploymentPublisher
from .services.storage.operations import S3Operations
from .utils.aws.aws_utils import create_s3_client
from .utils.config_loader import ConfigLoader, resolve_config, validate_config
from .utils.display.display_utils import (
    print_configuration_errors, print_deployment_info, print_summary
)
from .utils.logger import get_logger, setup_logging

log = get_logger(__name__)

# ── Help-text epilog ───────────────────────────────────────────────────────

DEPLOY_EXAMPLES = """\
Environment variables:
  S3_BUCKET_NAME          Bucket/Space name (required)
  S3_REGION               Region (default: us-east-1)
  S3_ENDPOINT             Custom endpoint (for non-AWS providers)
  S3_ACCESS_KEY_ID        Access key ID
  S3_SECRET_ACCESS_KEY    Secret access key
  AWS_PROFILE             Named AWS profile (instead of keys)
  S3_FORCE_PATH_STYLE     Force path-style addressing (true/false)
  S3_PATH_PREFIX          Path prefix (default: frontier-icons)
  DEPLOY_VERSION          Deployment version (default: vYYYY.MM.DD.HHMM)
  DRY_RUN                 Perform dry run (true/false)
  FORCE_UPLOAD            Force upload all files (true/false)
  SETUP_CORS              Configure CORS settings (true/false)
  CORS_ORIGINS            Comma-separated allowed origins (default: http://localhost:3000)
  ASSETS_SOURCE_DIR       Extracted assets directory (default: data/extracted)
  S3_OBJECT_ACL           Canned ACL for uploads (default: public-read)
  DEPLOY_WORKERS          Concurrent uploads (default: 1)

Examples:
  # AWS S3
  S3_BUCKET_NAME=my-bucket frontier-deploy
  AWS_PROFILE=prod frontier-deploy --bucket prod-assets --dry-run

  # DigitalOcean Spaces with CORS
  frontier-deploy --bucket my-space --endpoint https://nyc3.digitaloceanspaces.com \\
      --region nyc3 --setup-cors

  # MinIO
  frontier-deploy --bucket my-bucket --endpoint https://minio.example.com --path-style
"""


def create_argument_parser():
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='frontier-deploy',
        description='Upload extracted Frontier assets to S3-compatible storage under a versioned prefix.',
        epilog=DEPLOY_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    mode = parser.add_argument_group('mode')
    mode.add_argument('--dry-run', action='store_true', default=None,
                      help='Report what would change without writing anything')
    mode.add_argument('--force', action='store_true', default=None,
                      help='Upload every file, skipping change detection')
    mode.add_argument('--setup-cors', action='store_true', default=None,
                      help='Apply the bucket CORS policy before uploading')
    mode.add_argument('--cors-origins', help='Comma-separated allowed origins')
    mode.add_argument('--workers', type=int, help='Concurrent uploads (default: 1)')

    target = parser.add_argument_group('target')
    target.add_argument('--bucket', help='Bucket/Space name')
    target.add_argument('--region', help='Region')
    target.add_argument('--endpoint', help='Custom S3-compatible endpoint URL')
    target.add_argument('--path-style', dest='force_path_style', action='store_true', default=None,
                        help='Use path-style addressing with a custom endpoint')
    target.add_argument('--profile', help='Named AWS profile')
    target.add_argument('--prefix', dest='key_prefix', help='Key prefix (default: frontier-icons)')
    target.add_argument('--deploy-version', dest='deploy_version',
                        help='Version segment for this run (default: timestamp)')
    target.add_argument('--acl', help='Canned ACL for uploads; pass "" to omit')

    source = parser.add_argument_group('source')
    source.add_argument('--source-dir', help='Extracted assets directory')
    source.add_argument('--config-file', help='JSON file with settings')
    source.add_argument('--no-dotenv', action='store_true', help='Do not load a .env file')

    output = parser.add_argument_group('output')
    output.add_argument('--verbose', action='store_true', help='Enable verbose output')
    output.add_argument('--quiet', action='store_true', help='Only show warnings and errors')
    return parser


def cli_overrides(args):
    """Settings given on the command line; unset flags stay None."""
    return {
        "bucket": args.bucket,
        "region": args.region,
        "endpoint": args.endpoint,
        "force_path_style": args.force_path_style,
        "profile": args.profile,
        "key_prefix": args.key_prefix,
        "version": args.deploy_version,
        "dry_run": args.dry_run,
        "force": args.force,
        "setup_cors": args.setup_cors,
        "cors_origins": args.cors_origins,
        "source_dir": args.source_dir,
        "acl": args.acl,
        "workers": args.workers,
    }


def run_deployment(args, environ=None, client_factory=create_s3_client):
    """Resolve settings, deploy, and render the result.

    Args:
        args: Parsed command-line namespace
        environ: Environment mapping (``os.environ`` when omitted)
        client_factory: Builds the S3 client from a DeploymentConfig

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    if environ is None and not args.no_dotenv:
        ConfigLoader.load_dotenv_file()

    try:
        config = resolve_config(cli_overrides(args), environ=environ, config_file=args.config_file)
    except ConfigurationError as e:
        print_configuration_errors(e.problems)
        return 1

    print_deployment_info(config)

    try:
        validate_config(config)
    except ConfigurationError as e:
        print_configuration_errors(e.problems)
        return 1

    try:
        operations = S3Operations(client_factory(config), config.bucket, acl=config.acl)
        summary = DeploymentPublisher(config, operations).publish()
    except (DeployError, BotoCoreError) as e:
        log.error("Deployment failed: %s", e)
        log.debug("Traceback:", exc_info=True)
        return 1

    print_summary(summary, config)
    return 0


def main(argv=None):
    """Main CLI entry point."""
    init(autoreset=True)

    parser = create_argument_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        return run_deployment(args)
    except KeyboardInterrupt:
        log.warning("Interrupted")
        return 130


if __name__ == '__main__':
    sys.exit(main())
