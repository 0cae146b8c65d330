"""AWS components for custom domains."""

from apigw_domains.aws.custom_domain import ApiCustomDomain, ApiCustomDomainResources
from apigw_domains.aws.record import AliasRecord
from apigw_domains.aws.route53 import Route53Wrapper

__all__ = [
    "AliasRecord",
    "ApiCustomDomain",
    "ApiCustomDomainResources",
    "Route53Wrapper",
]
