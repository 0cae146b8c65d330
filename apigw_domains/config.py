import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, TypedDict

import boto3
from botocore.config import Config

from apigw_domains.globals import (
    DEFAULT_ENDPOINT_TYPE,
    DEFAULT_ROUTING_POLICY,
    DEFAULT_SECURITY_POLICY,
    DEFAULT_WEIGHT,
    ENDPOINT_TYPES,
    MAX_WEIGHT,
    ROUTING_POLICIES,
    EndpointType,
    RoutingPolicy,
)
from apigw_domains.utils import evaluate_boolean


@dataclass(frozen=True, kw_only=True)
class AwsConfig:
    """AWS credentials and HTTP options of the host.

    Both profile and region are optional overrides. When not specified, the standard AWS
    credential and region resolution chain is used (environment variables, assume role
    providers, SSO, shared credentials and config files, then instance/task roles).

    ## HTTP options

    `proxy`, `connect_timeout` and `read_timeout` are applied to every client created from
    this config, including clients built from assumed role credentials.

    ## Examples

    ```python
    AwsConfig()  # Uses env vars or the default profile
    AwsConfig(profile="dns-admin", region="eu-west-1")
    AwsConfig(proxy="http://proxy.internal:3128", read_timeout=120)
    ```
    """

    profile: str | None = None
    region: str | None = None
    proxy: str | None = None
    connect_timeout: int | None = None
    read_timeout: int | None = None

    def session(self) -> boto3.Session:
        return boto3.Session(profile_name=self.profile, region_name=self.region)

    def client_config(self) -> Config:
        options: dict[str, Any] = {}
        if self.proxy:
            options["proxies"] = {"http": self.proxy, "https": self.proxy}
        if self.connect_timeout is not None:
            options["connect_timeout"] = self.connect_timeout
        if self.read_timeout is not None:
            options["read_timeout"] = self.read_timeout
        return Config(**options)


class Route53ParamsDict(TypedDict, total=False):
    routing_policy: RoutingPolicy
    weight: int
    set_identifier: str | None
    health_check_id: str | None


@dataclass(frozen=True, kw_only=True)
class Route53Params:
    routing_policy: RoutingPolicy = DEFAULT_ROUTING_POLICY
    weight: int = DEFAULT_WEIGHT
    set_identifier: str | None = None
    health_check_id: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "routing_policy", str(self.routing_policy).lower())
        if self.routing_policy not in ROUTING_POLICIES:
            raise ValueError(
                f"{self.routing_policy} is not a supported routing policy, "
                "use simple, latency, or weighted."
            )
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise TypeError("Weight must be an integer")
        if not 0 <= self.weight <= MAX_WEIGHT:
            raise ValueError(f"Weight must be between 0 and {MAX_WEIGHT}")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "Route53Params":
        """Build params from raw plugin config (camelCase or snake_case keys)."""
        raw = raw or {}
        routing_policy = _pick(raw, "routingPolicy", "routing_policy") or DEFAULT_ROUTING_POLICY
        weight = _pick(raw, "weight")
        return cls(
            routing_policy=routing_policy,
            weight=DEFAULT_WEIGHT if weight is None else int(weight),
            set_identifier=_pick(raw, "setIdentifier", "set_identifier"),
            health_check_id=_pick(raw, "healthCheckId", "health_check_id"),
        )


@dataclass(frozen=True)
class DomainInfo:
    """Alias target of a custom domain: the gateway's domain name and its hosted zone."""

    domain_name: str
    hosted_zone_id: str


class DomainConfigDict(TypedDict, total=False):
    given_domain_name: str
    enabled: bool
    base_path: str | None
    stage: str | None
    certificate_arn: str | None
    endpoint_type: EndpointType
    security_policy: str
    hosted_zone_id: str | None
    hosted_zone_private: bool | None
    create_route53_record: bool
    create_route53_ipv6_record: bool
    route53_profile: str | None
    route53_region: str | None
    route53_role_arn: str | None
    route53_mfa_serial: str | None
    route53_params: Route53Params | Route53ParamsDict | None
    domain_info: DomainInfo | None


@dataclass(frozen=True, kw_only=True)
class DomainConfig:
    given_domain_name: str
    enabled: bool = True
    base_path: str | None = None
    stage: str | None = None
    certificate_arn: str | None = None
    endpoint_type: EndpointType = DEFAULT_ENDPOINT_TYPE
    security_policy: str = DEFAULT_SECURITY_POLICY
    hosted_zone_id: str | None = None
    hosted_zone_private: bool | None = None
    create_route53_record: bool = True
    create_route53_ipv6_record: bool = True
    route53_profile: str | None = None
    route53_region: str | None = None
    route53_role_arn: str | None = None
    route53_mfa_serial: str | None = None
    route53_params: Route53Params | Route53ParamsDict | None = field(default=None)
    domain_info: DomainInfo | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.given_domain_name, str):
            raise TypeError("Domain name must be a string")
        if not self.given_domain_name.strip():
            raise ValueError("Domain name cannot be empty")

        if self.endpoint_type not in ENDPOINT_TYPES:
            raise ValueError(
                f"Invalid endpoint type: {self.endpoint_type}. "
                "Only 'regional' and 'edge' are supported."
            )

        routing_policy = self.normalized_route53_params.routing_policy
        if routing_policy != "simple" and self.endpoint_type == "edge":
            raise ValueError(
                f"{routing_policy} routing is not intended to be used with edge endpoints. "
                "Use a regional endpoint instead."
            )

    @property
    def normalized_route53_params(self) -> Route53Params:
        """Route53 params as a Route53Params, with defaults when none were given."""
        if isinstance(self.route53_params, Route53Params):
            return self.route53_params
        if isinstance(self.route53_params, dict):
            return Route53Params(**self.route53_params)
        return Route53Params()

    def with_domain_info(self, domain_info: DomainInfo) -> "DomainConfig":
        return dataclasses.replace(self, domain_info=domain_info)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "DomainConfig":
        """Parse raw plugin configuration.

        Keys may use the camelCase plugin names (``domainName``, ``hostedZonePrivate``,
        ``route53Params``...) or the field names. Boolean options also accept "true"/"false"
        and "1"/"0" strings.
        """
        endpoint_type = _pick(raw, "endpointType", "endpoint_type") or DEFAULT_ENDPOINT_TYPE
        hosted_zone_private = _pick(raw, "hostedZonePrivate", "hosted_zone_private")
        return cls(
            given_domain_name=_pick(raw, "domainName", "domain_name", "given_domain_name"),
            enabled=evaluate_boolean(_pick(raw, "enabled"), True),
            base_path=_pick(raw, "basePath", "base_path"),
            stage=_pick(raw, "stage"),
            certificate_arn=_pick(raw, "certificateArn", "certificate_arn"),
            endpoint_type=str(endpoint_type).lower(),
            security_policy=_pick(raw, "securityPolicy", "security_policy")
            or DEFAULT_SECURITY_POLICY,
            hosted_zone_id=_pick(raw, "hostedZoneId", "hosted_zone_id"),
            hosted_zone_private=None
            if hosted_zone_private is None
            else evaluate_boolean(hosted_zone_private, False),
            create_route53_record=evaluate_boolean(
                _pick(raw, "createRoute53Record", "create_route53_record"), True
            ),
            create_route53_ipv6_record=evaluate_boolean(
                _pick(raw, "createRoute53IPv6Record", "create_route53_ipv6_record"), True
            ),
            route53_profile=_pick(raw, "route53Profile", "route53_profile"),
            route53_region=_pick(raw, "route53Region", "route53_region"),
            route53_role_arn=_pick(raw, "route53RoleArn", "route53_role_arn"),
            route53_mfa_serial=_pick(raw, "route53MfaSerial", "route53_mfa_serial"),
            route53_params=Route53Params.from_dict(_pick(raw, "route53Params", "route53_params")),
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-data form, the inverse of from_dict for snake_case keys."""
        data = dataclasses.asdict(self)
        data["route53_params"] = dataclasses.asdict(self.normalized_route53_params)
        data.pop("domain_info")
        return data


def _pick(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return None
