import logging
from dataclasses import dataclass
from typing import final

import pulumi
from pulumi import Input, Output
from pulumi_aws.apigateway import (
    BasePathMapping,
    DomainName,
    DomainNameEndpointConfigurationArgs,
)

from apigw_domains.aws.record import AliasRecord
from apigw_domains.component import Component
from apigw_domains.config import DomainConfig, DomainConfigDict
from apigw_domains.context import context

logger = logging.getLogger(__name__)


@final
@dataclass(frozen=True)
class ApiCustomDomainResources:
    domain_name: DomainName | None
    record: AliasRecord | None
    base_path_mapping: BasePathMapping | None


@final
class ApiCustomDomain(Component[ApiCustomDomainResources]):
    """Custom domain of an API gateway together with its Route53 alias records.

    Creates the API Gateway domain name, the alias records pointing at it and, when a REST
    API is given, the base path mapping. Resources are registered
    with Pulumi when the component is constructed. A disabled domain creates nothing.
    """

    def __init__(
        self,
        name: str,
        domain: DomainConfig | DomainConfigDict,
        rest_api_id: Input[str] | None = None,
        stage_name: Input[str] | None = None,
    ):
        self._domain = domain if isinstance(domain, DomainConfig) else DomainConfig(**domain)
        self._rest_api_id = rest_api_id
        self._stage_name = stage_name
        super().__init__(name)
        self._resources = self._create_resources()

    @property
    def domain(self) -> DomainConfig:
        return self._domain

    def _create_resources(self) -> ApiCustomDomainResources:
        domain = self._domain
        if not domain.enabled:
            logger.info("Custom domain '%s' is disabled, skipping", domain.given_domain_name)
            return ApiCustomDomainResources(domain_name=None, record=None, base_path_mapping=None)

        if not domain.certificate_arn:
            raise ValueError(
                f"Certificate ARN is required for custom domain '{domain.given_domain_name}'"
            )

        aws_domain_name, target_domain_name, target_zone_id = self._create_domain_name(domain)

        record = None
        if domain.create_route53_record:
            record = AliasRecord(
                context().prefix(f"{self.name}-custom-domain-record"),
                domain,
                target_domain_name=target_domain_name,
                target_hosted_zone_id=target_zone_id,
                opts=pulumi.ResourceOptions(depends_on=[aws_domain_name]),
            )
        else:
            logger.info("Skipping creation of Route53 record.")

        base_path_mapping = None
        stage_name = self._stage_name or domain.stage
        if self._rest_api_id is not None and stage_name:
            base_path_mapping = BasePathMapping(
                context().prefix(f"{self.name}-custom-domain-base-path-mapping"),
                rest_api=self._rest_api_id,
                stage_name=stage_name,
                domain_name=aws_domain_name.domain_name,
                base_path=domain.base_path,
                opts=pulumi.ResourceOptions(depends_on=[aws_domain_name]),
            )

        pulumi.export(f"custom_domain_{self.name}_domain_name", aws_domain_name.domain_name)
        pulumi.export(f"custom_domain_{self.name}_target_domain_name", target_domain_name)

        return ApiCustomDomainResources(
            domain_name=aws_domain_name, record=record, base_path_mapping=base_path_mapping
        )

    def _create_domain_name(
        self, domain: DomainConfig
    ) -> tuple[DomainName, Output[str], Output[str]]:
        resource_name = context().prefix(f"{self.name}-custom-domain")
        if domain.endpoint_type == "regional":
            aws_domain_name = DomainName(
                resource_name,
                domain_name=domain.given_domain_name,
                regional_certificate_arn=domain.certificate_arn,
                endpoint_configuration=DomainNameEndpointConfigurationArgs(types="REGIONAL"),
                security_policy=domain.security_policy,
            )
            return (
                aws_domain_name,
                aws_domain_name.regional_domain_name,
                aws_domain_name.regional_zone_id,
            )

        # Edge endpoints are served through CloudFront
        aws_domain_name = DomainName(
            resource_name,
            domain_name=domain.given_domain_name,
            certificate_arn=domain.certificate_arn,
            endpoint_configuration=DomainNameEndpointConfigurationArgs(types="EDGE"),
            security_policy=domain.security_policy,
        )
        return (
            aws_domain_name,
            aws_domain_name.cloudfront_domain_name,
            aws_domain_name.cloudfront_zone_id,
        )
