import logging
from typing import Any

from rich.console import Console

from apigw_domains.aws.route53 import Route53Wrapper
from apigw_domains.config import AwsConfig, DomainConfig, DomainInfo
from apigw_domains.globals import RecordAction

logger = logging.getLogger(__name__)


def run_change_record(
    console: Console, action: RecordAction, domain: DomainConfig, aws: AwsConfig
) -> dict[str, Any] | None:
    wrapper = Route53Wrapper.for_domain(domain, aws=aws)
    logger.info("Running %s for %s", action, domain.given_domain_name)
    response = wrapper.change_resource_record_set(action, domain)
    if response is None:
        console.print("[yellow]Route53 record management is disabled, nothing changed[/yellow]")
        return None

    record_types = "A, AAAA" if domain.create_route53_ipv6_record else "A"
    verb = "Removed" if action == "DELETE" else "Upserted"
    change_info = response.get("ChangeInfo", {})
    console.print(
        f"[bold green]✓[/bold green] {verb} {record_types} alias for "
        f"[cyan]{domain.given_domain_name}[/cyan]",
        highlight=False,
    )
    if change_info:
        console.print(
            f"  Change {change_info.get('Id')} is {change_info.get('Status')}", highlight=False
        )
    return response


def run_find_zone(console: Console, domain: DomainConfig, aws: AwsConfig) -> str:
    wrapper = Route53Wrapper.for_domain(domain, aws=aws)
    hosted_zone_id = wrapper.get_route53_hosted_zone_id(domain)
    console.print(hosted_zone_id, highlight=False)
    return hosted_zone_id


def build_domain_config(  # noqa: PLR0913
    domain_name: str,
    *,
    target_domain: str | None = None,
    target_zone_id: str | None = None,
    hosted_zone_id: str | None = None,
    private: bool | None = None,
    ipv6: bool = True,
    endpoint_type: str = "edge",
    routing_policy: str = "simple",
    weight: int | None = None,
    set_identifier: str | None = None,
    health_check_id: str | None = None,
    role_arn: str | None = None,
    mfa_serial: str | None = None,
    route53_profile: str | None = None,
    route53_region: str | None = None,
) -> DomainConfig:
    """Translate command line options into the same config the plugin host would pass."""
    domain = DomainConfig.from_dict(
        {
            "domainName": domain_name,
            "endpointType": endpoint_type,
            "hostedZoneId": hosted_zone_id,
            "hostedZonePrivate": private,
            "createRoute53IPv6Record": ipv6,
            "route53Profile": route53_profile,
            "route53Region": route53_region,
            "route53RoleArn": role_arn,
            "route53MfaSerial": mfa_serial,
            "route53Params": {
                "routingPolicy": routing_policy,
                "weight": weight,
                "setIdentifier": set_identifier,
                "healthCheckId": health_check_id,
            },
        }
    )
    if target_domain and target_zone_id:
        domain = domain.with_domain_info(
            DomainInfo(domain_name=target_domain, hosted_zone_id=target_zone_id)
        )
    return domain
