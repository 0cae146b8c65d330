"""Route53 alias records for API gateway custom domains."""

from apigw_domains.config import AwsConfig, DomainConfig, DomainInfo, Route53Params
from apigw_domains.context import PluginContext, context, init_context

__all__ = [
    "AwsConfig",
    "DomainConfig",
    "DomainInfo",
    "PluginContext",
    "Route53Params",
    "context",
    "init_context",
]
