import logging
from typing import Any

import boto3
from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from apigw_domains.config import AwsConfig, DomainConfig, DomainInfo
from apigw_domains.context import context
from apigw_domains.exceptions import (
    HostedZoneListError,
    HostedZoneNotFoundError,
    RecordChangeError,
)
from apigw_domains.globals import (
    HOSTED_ZONE_PREFIX,
    RECORD_ACTIONS,
    RECORD_COMMENT,
    ROLE_SESSION_NAME,
    RecordAction,
)
from apigw_domains.utils import get_aws_paged_results, prompt_for_mfa_token, throttled_call

logger = logging.getLogger(__name__)


class Route53Wrapper:
    """Manages the alias records of a custom domain in Route53."""

    route53: BaseClient

    def __init__(
        self, profile: str | None = None, region: str | None = None, aws: AwsConfig | None = None
    ) -> None:
        self._aws = aws or context().aws
        self._client_config = self._aws.client_config()

        session = self._aws.session()
        if profile:
            session = boto3.Session(
                profile_name=profile, region_name=region or session.region_name
            )
        self.route53 = session.client("route53", config=self._client_config)

    @classmethod
    def for_domain(cls, domain: DomainConfig, aws: AwsConfig | None = None) -> "Route53Wrapper":
        """Create a wrapper using the Route53 credentials configured on the domain."""
        wrapper = cls(profile=domain.route53_profile, region=domain.route53_region, aws=aws)
        if domain.route53_role_arn:
            wrapper.assume_role(
                domain.route53_role_arn,
                region=domain.route53_region,
                mfa_serial=domain.route53_mfa_serial,
            )
        return wrapper

    @property
    def region(self) -> str | None:
        return self.route53.meta.region_name

    def assume_role(
        self, role_arn: str, region: str | None = None, mfa_serial: str | None = None
    ) -> None:
        """Assume the given role and use its credentials for Route53 from now on.

        The role is assumed with the host credentials. When ``mfa_serial`` is given the user
        is prompted for a token.
        """
        sts = self._aws.session().client("sts", config=self._client_config)
        params: dict[str, Any] = {"RoleArn": role_arn, "RoleSessionName": ROLE_SESSION_NAME}
        if mfa_serial:
            params["SerialNumber"] = mfa_serial
            params["TokenCode"] = prompt_for_mfa_token(mfa_serial)
        result = sts.assume_role(**params)

        credentials = result["Credentials"]
        assumed_region = region or self.region
        self.route53 = boto3.client(
            "route53",
            aws_access_key_id=credentials["AccessKeyId"],
            aws_secret_access_key=credentials["SecretAccessKey"],
            aws_session_token=credentials["SessionToken"],
            region_name=assumed_region,
            config=self._client_config,
        )
        logger.info("Assumed credentials for role: '%s' in region: '%s'", role_arn, assumed_region)

    def change_resource_record_set(
        self, action: RecordAction, domain: DomainConfig
    ) -> dict[str, Any] | None:
        """Change the A (and AAAA) alias records of the custom domain.

        Args:
            action: "UPSERT" or "DELETE".
            domain: The custom domain. Its ``domain_info`` is the alias target; without it the
                record aliases the domain name itself within the resolved hosted zone.

        Returns:
            The Route53 response, or None when record management is disabled for the domain.
        """
        if action not in RECORD_ACTIONS:
            raise ValueError(
                f"Invalid action: {action}. Only 'UPSERT' and 'DELETE' are supported."
            )

        if not domain.create_route53_record:
            logger.info(
                "Skipping %s of Route53 record.", "removal" if action == "DELETE" else "creation"
            )
            return None

        hosted_zone_id = self.get_route53_hosted_zone_id(domain)
        route53_params = domain.normalized_route53_params
        domain_info = domain.domain_info or DomainInfo(
            domain_name=domain.given_domain_name, hosted_zone_id=hosted_zone_id
        )

        health_check = (
            {"HealthCheckId": route53_params.health_check_id}
            if route53_params.health_check_id
            else {}
        )
        identifier = (
            route53_params.set_identifier
            if route53_params.set_identifier is not None
            else domain_info.domain_name
        )
        routing_options: dict[str, Any] = {}
        if route53_params.routing_policy == "latency":
            routing_options = {
                "Region": self.region,
                "SetIdentifier": identifier,
                **health_check,
            }
        elif route53_params.routing_policy == "weighted":
            routing_options = {
                "Weight": route53_params.weight,
                "SetIdentifier": identifier,
                **health_check,
            }

        record_types = ["A", "AAAA"] if domain.create_route53_ipv6_record else ["A"]
        changes = [
            {
                "Action": action,
                "ResourceRecordSet": {
                    "AliasTarget": {
                        "DNSName": domain_info.domain_name,
                        "EvaluateTargetHealth": False,
                        "HostedZoneId": domain_info.hosted_zone_id,
                    },
                    "Name": domain.given_domain_name,
                    "Type": record_type,
                    **routing_options,
                },
            }
            for record_type in record_types
        ]
        params = {
            "ChangeBatch": {"Changes": changes, "Comment": RECORD_COMMENT},
            "HostedZoneId": hosted_zone_id,
        }

        try:
            return throttled_call(self.route53, "change_resource_record_sets", params)
        except (ClientError, BotoCoreError) as e:
            raise RecordChangeError(action, domain.given_domain_name, str(e)) from e

    def get_route53_hosted_zone_id(self, domain: DomainConfig) -> str:
        """Get the hosted zone id from the domain config, or find it in Route53.

        The most specific zone wins: among zones whose name the domain ends with, the one
        with the longest name.
        """
        if domain.hosted_zone_id:
            logger.info("Selected specific hostedZoneId %s", domain.hosted_zone_id)
            return domain.hosted_zone_id

        filter_zone = domain.hosted_zone_private is not None
        if filter_zone:
            zone_type = "private" if domain.hosted_zone_private else "public"
            logger.info("Filtering to only %s zones.", zone_type)

        try:
            hosted_zones = get_aws_paged_results(
                self.route53, "list_hosted_zones", "HostedZones", "Marker", "NextMarker", {}
            )
        except (ClientError, BotoCoreError) as e:
            raise HostedZoneListError(str(e)) from e

        candidates = [
            zone
            for zone in hosted_zones
            if (not filter_zone or zone["Config"]["PrivateZone"] == domain.hosted_zone_private)
            and domain.given_domain_name.endswith(zone["Name"].removesuffix("."))
        ]
        if not candidates:
            raise HostedZoneNotFoundError(domain.given_domain_name)

        target = max(candidates, key=lambda zone: len(zone["Name"]))
        return target["Id"].replace(HOSTED_ZONE_PREFIX, "")
