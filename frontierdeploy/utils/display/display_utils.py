"""
Console rendering for deployment runs
"""
from colorama import Fore, Style

from ...models.asset_file import UploadDecision
from ...services.storage.base_url import base_url_strategy

RULE = "━" * 50


def yes_no(flag):
    return "Yes" if flag else "No"


def mask_secret(value):
    """Show only the first four characters of a credential."""
    if not value:
        return ""
    value = str(value)
    if len(value) > 4:
        return f"{value[:4]}...{'*' * 8}"
    return '*' * 8


def print_banner():
    """Display frontierdeploy banner."""
    print(f"\n{Fore.CYAN}  ╺┳╸ Frontier Assets{Style.RESET_ALL}"
          f"  {Fore.WHITE}S3-Compatible Deployment{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{RULE}{Style.RESET_ALL}")


def print_deployment_info(config):
    """
    Print the resolved settings of a run.

    Args:
        config: DeploymentConfig about to be deployed
    """
    print_banner()
    print(f"  Bucket/Space:   {config.bucket or f'{Fore.RED}(not set){Style.RESET_ALL}'}")
    print(f"  Region:         {config.region}")
    if config.endpoint:
        print(f"  Endpoint:       {config.endpoint}")
        print(f"  Path Style:     {yes_no(config.force_path_style)}")
    if config.has_explicit_credentials:
        print(f"  Credentials:    access key {mask_secret(config.access_key_id)}")
    elif config.profile:
        print(f"  Credentials:    profile {config.profile}")
    print(f"  Path Prefix:    {config.key_prefix}")
    print(f"  Version:        {config.version}")
    print(f"  Dry Run:        {yes_no(config.dry_run)}")
    print(f"  Force Upload:   {yes_no(config.force)}")
    print(f"  Setup CORS:     {yes_no(config.setup_cors)}")
    if config.setup_cors:
        print(f"    CORS Origins: {', '.join(config.cors_origins)}")
    if config.max_workers > 1:
        print(f"  Workers:        {config.max_workers}")
    print(f"  Source Dir:     {config.source_dir}")
    print(f"{Fore.CYAN}{RULE}{Style.RESET_ALL}")


def print_configuration_errors(problems):
    """
    Print every configuration problem.

    Args:
        problems: List of problem descriptions
    """
    print(f"{Fore.RED}[ERROR] Configuration errors:{Style.RESET_ALL}")
    for problem in problems:
        print(f"{Fore.RED}   {problem}{Style.RESET_ALL}")
    if any("Extracted directory" in p for p in problems):
        print(f"{Fore.YELLOW}[TIP] Run the asset extraction first, or point "
              f"--source-dir / ASSETS_SOURCE_DIR at its output{Style.RESET_ALL}")


def print_summary(summary, config):
    """
    Render a finished run.

    Args:
        summary: DeploymentSummary returned by the publisher
        config: DeploymentConfig the run used
    """
    cdn_domain = base_url_strategy(config.endpoint).cdn_domain(config.bucket)
    title = "Dry run completed" if summary.dry_run else "Deployment completed successfully!"

    print(f"{Fore.CYAN}{RULE}{Style.RESET_ALL}")
    print(f"{Fore.GREEN}[SUCCESS] {title}{Style.RESET_ALL}")
    print(f"{Fore.CYAN}{RULE}{Style.RESET_ALL}")
    print("Deployment Summary:")
    print(f"   Icons: {summary.uploaded} uploaded, {summary.skipped} skipped, {summary.errors} errors")
    verb = "would be uploaded" if summary.dry_run else "uploaded"
    if summary.versioned_manifest_decision is UploadDecision.SKIP:
        print(f"   Manifest: versioned copy unchanged, latest pointer {verb}")
    else:
        print(f"   Manifest: {verb} to versioned and latest paths")
    if summary.cors_configured:
        print(f"   CORS: configured for {len(config.cors_origins)} origins")

    failures = summary.failures()
    if failures:
        print(f"\n{Fore.YELLOW}[WARNING] {len(failures)} file(s) failed:{Style.RESET_ALL}")
        for result in failures:
            print(f"{Fore.YELLOW}   {result.relative_path}: {result.error}{Style.RESET_ALL}")

    print("\nCDN URLs:")
    print(f"   Versioned: {cdn_domain}/{config.key_prefix}/{config.version}/")
    print(f"   Latest: {cdn_domain}/{config.key_prefix}/latest/")
    print("\nEnvironment Variables for Next.js:")
    print("   NEXT_PUBLIC_FRONTIER_ASSETS_USE_CDN=true")
    print(f"   NEXT_PUBLIC_FRONTIER_ASSETS_CDN_DOMAIN={cdn_domain}")
    print(f"   NEXT_PUBLIC_FRONTIER_ASSETS_CDN_PATH_PREFIX={config.key_prefix}")
    print(f"   NEXT_PUBLIC_FRONTIER_ASSETS_CDN_VERSION={config.version}")
