import logging
import sys
from collections.abc import Callable
from importlib import metadata
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import TypeVar

import click
from appdirs import user_log_dir
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from apigw_domains.cli.commands import build_domain_config, run_change_record, run_find_zone
from apigw_domains.config import AwsConfig
from apigw_domains.exceptions import DomainManagerError
from apigw_domains.globals import ENDPOINT_TYPES, PLUGIN_NAME, ROUTING_POLICIES, RecordAction

console = Console()

app_logger = logging.getLogger("apigw_domains")
# Capture everything internally, handlers decide what is shown
app_logger.setLevel(logging.DEBUG)

log_dir = Path(user_log_dir(PLUGIN_NAME))
log_dir.mkdir(parents=True, exist_ok=True)
log_file_path = log_dir / f"{PLUGIN_NAME}.log"
file_handler = TimedRotatingFileHandler(
    filename=str(log_file_path), when="D", interval=1, backupCount=7, encoding="utf-8"
)
file_handler.setLevel(logging.DEBUG)
file_handler.setFormatter(
    logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
)
app_logger.addHandler(file_handler)

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


@click.group(invoke_without_command=True)
@click.option(
    "--verbose", "-v", count=True, help="Increase verbosity. -v for INFO, -vv for DEBUG logs."
)
@click.option("--profile", default=None, help="AWS profile of the host credentials.")
@click.option("--region", default=None, help="AWS region of the host credentials.")
@click.option("--version", is_flag=True, help="Show apigw-domains and boto3 versions.")
@click.pass_context
def cli(
    ctx: click.Context, verbose: int, profile: str | None, region: str | None, version: bool
) -> None:
    """Manage Route53 alias records of API gateway custom domains."""
    if version:
        _version()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit(0)

    if verbose > 0:
        console_handler = RichHandler(
            console=console,
            show_time=False,
            show_level=True,
            markup=False,
            tracebacks_suppress=[click],
            rich_tracebacks=True,
        )
        console_handler.setLevel(logging.INFO if verbose == 1 else logging.DEBUG)
        console.print(f"[italic dim]Logs saved to: {log_file_path}[/]")
        app_logger.addHandler(console_handler)

    ctx.obj = AwsConfig(profile=profile, region=region)


def _zone_options(func: F) -> F:
    func = click.option("--hosted-zone-id", default=None, help="Skip hosted zone lookup.")(func)
    return click.option(
        "--private/--public",
        "private",
        default=None,
        help="Only consider private or public hosted zones.",
    )(func)


def _record_options(func: F) -> F:
    options = [
        click.option("--target-domain", required=True, help="Alias target domain name."),
        click.option("--target-zone-id", required=True, help="Hosted zone of the alias target."),
        click.option("--ipv6/--no-ipv6", default=True, help="Also manage the AAAA record."),
        click.option(
            "--endpoint-type",
            type=click.Choice(ENDPOINT_TYPES),
            default="edge",
            show_default=True,
        ),
        click.option(
            "--routing-policy",
            type=click.Choice(ROUTING_POLICIES, case_sensitive=False),
            default="simple",
            show_default=True,
        ),
        click.option("--weight", type=int, default=None, help="Weight for weighted routing."),
        click.option("--set-identifier", default=None),
        click.option("--health-check-id", default=None),
        click.option("--role-arn", default=None, help="Role to assume for Route53 changes."),
        click.option("--mfa-serial", default=None, help="MFA device used to assume the role."),
        click.option("--route53-profile", default=None),
        click.option("--route53-region", default=None),
    ]
    for option in reversed(options):
        func = option(func)
    return _zone_options(func)


def _change_record(ctx: click.Context, action: RecordAction, domain_name: str, **options) -> None:
    try:
        domain = build_domain_config(domain_name, **options)
        run_change_record(console, action, domain, ctx.obj)
    except (DomainManagerError, ValueError) as e:
        _handle_error(e)


@cli.command("create-record")
@click.argument("domain_name")
@_record_options
@click.pass_context
def create_record(ctx: click.Context, domain_name: str, **options) -> None:
    """Create or update the alias records of DOMAIN_NAME."""
    _change_record(ctx, "UPSERT", domain_name, **options)


@cli.command("remove-record")
@click.argument("domain_name")
@_record_options
@click.pass_context
def remove_record(ctx: click.Context, domain_name: str, **options) -> None:
    """Remove the alias records of DOMAIN_NAME."""
    _change_record(ctx, "DELETE", domain_name, **options)


@cli.command("find-zone")
@click.argument("domain_name")
@_zone_options
@click.pass_context
def find_zone(
    ctx: click.Context, domain_name: str, hosted_zone_id: str | None, private: bool | None
) -> None:
    """Print the id of the hosted zone DOMAIN_NAME belongs to."""
    try:
        domain = build_domain_config(
            domain_name, hosted_zone_id=hosted_zone_id, private=private
        )
        run_find_zone(console, domain, ctx.obj)
    except (DomainManagerError, ValueError) as e:
        _handle_error(e)


def _handle_error(e: Exception) -> None:
    logger.debug("Command failed", exc_info=e)
    console.print(f"[bold red]✗[/bold red] {escape(str(e))}", highlight=False)
    raise SystemExit(1) from None


def _version() -> None:
    console.print(f"apigw-domains version: {metadata.version(PLUGIN_NAME)}", highlight=False)
    console.print(f"boto3 version: {metadata.version('boto3')}", highlight=False)
    sys.exit(0)

