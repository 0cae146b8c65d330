"""Route53 alias records driven by the Pulumi resource lifecycle."""

import dataclasses
import logging
from typing import Any

import pulumi
from pulumi import Input, Output
from pulumi.dynamic import CreateResult, DiffResult, Resource, ResourceProvider, UpdateResult

from apigw_domains.aws.route53 import Route53Wrapper
from apigw_domains.config import AwsConfig, DomainConfig, DomainInfo
from apigw_domains.context import context

logger = logging.getLogger(__name__)

# Changing any of these points the record at a different record set in Route53
_IDENTITY_FIELDS = ("given_domain_name", "hosted_zone_id", "hosted_zone_private")
_IDENTITY_PARAMS = ("routing_policy", "set_identifier")
_INPUT_KEYS = ("domain", "target_domain_name", "target_hosted_zone_id", "aws")


def _domain_from_props(props: dict[str, Any]) -> DomainConfig:
    domain = DomainConfig.from_dict(props["domain"])
    return domain.with_domain_info(
        DomainInfo(
            domain_name=props["target_domain_name"],
            hosted_zone_id=props["target_hosted_zone_id"],
        )
    )


def _wrapper_from_props(domain: DomainConfig, props: dict[str, Any]) -> Route53Wrapper:
    return Route53Wrapper.for_domain(domain, aws=AwsConfig(**props["aws"]))


def _record_types(domain: DomainConfig) -> list[str]:
    return ["A", "AAAA"] if domain.create_route53_ipv6_record else ["A"]


class _AliasRecordProvider(ResourceProvider):
    def _upsert(self, props: dict[str, Any]) -> dict[str, Any]:
        domain = _domain_from_props(props)
        wrapper = _wrapper_from_props(domain, props)
        hosted_zone_id = wrapper.get_route53_hosted_zone_id(domain)
        logger.debug(
            "Upserting alias record %s in zone %s", domain.given_domain_name, hosted_zone_id
        )
        # Zone already resolved
        wrapper.change_resource_record_set(
            "UPSERT", dataclasses.replace(domain, hosted_zone_id=hosted_zone_id)
        )
        return {
            **props,
            "hosted_zone_id": hosted_zone_id,
            "record_name": domain.given_domain_name,
            "record_types": _record_types(domain),
        }

    def create(self, props: dict[str, Any]) -> CreateResult:
        outs = self._upsert(props)
        return CreateResult(id_=f"{outs['hosted_zone_id']}_{outs['record_name']}", outs=outs)

    def diff(self, _id: str, olds: dict[str, Any], news: dict[str, Any]) -> DiffResult:
        old_domain, new_domain = olds["domain"], news["domain"]
        replaces = [f for f in _IDENTITY_FIELDS if old_domain.get(f) != new_domain.get(f)]
        old_params = old_domain.get("route53_params") or {}
        new_params = new_domain.get("route53_params") or {}
        replaces += [p for p in _IDENTITY_PARAMS if old_params.get(p) != new_params.get(p)]
        if old_domain.get("create_route53_ipv6_record") != new_domain.get(
            "create_route53_ipv6_record"
        ):
            replaces.append("create_route53_ipv6_record")

        changes = any(olds.get(key) != news.get(key) for key in _INPUT_KEYS)
        return DiffResult(
            changes=changes or bool(replaces),
            replaces=replaces,
            delete_before_replace=True,
        )

    def update(self, _id: str, _olds: dict[str, Any], news: dict[str, Any]) -> UpdateResult:
        return UpdateResult(outs=self._upsert(news))

    def delete(self, _id: str, props: dict[str, Any]) -> None:
        domain = _domain_from_props(props)
        if props.get("hosted_zone_id"):
            domain = dataclasses.replace(domain, hosted_zone_id=props["hosted_zone_id"])
        _wrapper_from_props(domain, props).change_resource_record_set("DELETE", domain)


class AliasRecord(Resource):
    """A/AAAA alias records pointing a custom domain at its API gateway.

    Creating the resource upserts the records, updates upsert the new configuration and
    deleting the resource deletes the records.
    """

    hosted_zone_id: Output[str]
    record_name: Output[str]
    record_types: Output[list[str]]

    def __init__(  # noqa: PLR0913
        self,
        resource_name: str,
        domain: DomainConfig,
        target_domain_name: Input[str],
        target_hosted_zone_id: Input[str],
        aws: AwsConfig | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        aws = aws or context().aws
        super().__init__(
            _AliasRecordProvider(),
            resource_name,
            {
                "domain": domain.to_dict(),
                "target_domain_name": target_domain_name,
                "target_hosted_zone_id": target_hosted_zone_id,
                "aws": dataclasses.asdict(aws),
                "hosted_zone_id": None,
                "record_name": None,
                "record_types": None,
            },
            opts,
        )
