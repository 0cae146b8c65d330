import pulumi
import pytest

from apigw_domains.aws.custom_domain import ApiCustomDomain
from apigw_domains.config import DomainConfig

from .pulumi_mocks import (
    CLOUDFRONT_DOMAIN_NAME,
    CLOUDFRONT_ZONE_ID,
    REGIONAL_DOMAIN_NAME,
    REGIONAL_ZONE_ID,
)

# Test prefix
TP = "test-test-"
CERT_ARN = "arn:aws:acm:us-east-1:123456789012:certificate/abc"


@pulumi.runtime.test
def test_edge_custom_domain(pulumi_mocks):
    custom_domain = ApiCustomDomain(
        "api",
        {"given_domain_name": "api.example.com", "certificate_arn": CERT_ARN},
    )
    resources = custom_domain.resources

    def check(_):
        domain_names = pulumi_mocks.created_domain_names(f"{TP}api-custom-domain")
        assert len(domain_names) == 1
        inputs = domain_names[0].inputs
        assert inputs["domainName"] == "api.example.com"
        assert inputs["certificateArn"] == CERT_ARN
        assert "regionalCertificateArn" not in inputs
        assert inputs["endpointConfiguration"]["types"] == "EDGE"
        assert inputs["securityPolicy"] == "TLS_1_2"

        records = pulumi_mocks.created_alias_records(f"{TP}api-custom-domain-record")
        assert len(records) == 1
        assert records[0].inputs["target_domain_name"] == CLOUDFRONT_DOMAIN_NAME
        assert records[0].inputs["target_hosted_zone_id"] == CLOUDFRONT_ZONE_ID

        assert pulumi_mocks.created_base_path_mappings() == []

    return resources.record.id.apply(check)


@pulumi.runtime.test
def test_regional_custom_domain_with_base_path_mapping(pulumi_mocks):
    custom_domain = ApiCustomDomain(
        "api",
        DomainConfig(
            given_domain_name="api.example.com",
            certificate_arn=CERT_ARN,
            endpoint_type="regional",
            base_path="v1",
            route53_params={"routing_policy": "latency"},
        ),
        rest_api_id="12345abcde",
        stage_name="prod",
    )
    resources = custom_domain.resources

    def check(_):
        inputs = pulumi_mocks.created_domain_names(f"{TP}api-custom-domain")[0].inputs
        assert inputs["regionalCertificateArn"] == CERT_ARN
        assert "certificateArn" not in inputs
        assert inputs["endpointConfiguration"]["types"] == "REGIONAL"

        record = pulumi_mocks.created_alias_records(f"{TP}api-custom-domain-record")[0]
        assert record.inputs["target_domain_name"] == REGIONAL_DOMAIN_NAME
        assert record.inputs["target_hosted_zone_id"] == REGIONAL_ZONE_ID
        assert record.inputs["domain"]["route53_params"]["routing_policy"] == "latency"

        mappings = pulumi_mocks.created_base_path_mappings(
            f"{TP}api-custom-domain-base-path-mapping"
        )
        assert len(mappings) == 1
        assert mappings[0].inputs["restApi"] == "12345abcde"
        assert mappings[0].inputs["stageName"] == "prod"
        assert mappings[0].inputs["basePath"] == "v1"
        assert mappings[0].inputs["domainName"] == "api.example.com"

    return pulumi.Output.all(resources.record.id, resources.base_path_mapping.id).apply(check)


def test_custom_domain_registers_resources_on_construction(pulumi_mocks):
    @pulumi.runtime.test
    def declare_custom_domain():
        ApiCustomDomain(
            "api",
            {
                "given_domain_name": "api.example.com",
                "certificate_arn": CERT_ARN,
                "endpoint_type": "regional",
                "base_path": "v1",
                "route53_params": {"routing_policy": "latency"},
            },
            rest_api_id="12345abcde",
            stage_name="prod",
        )

    declare_custom_domain()

    assert len(pulumi_mocks.created_domain_names(f"{TP}api-custom-domain")) == 1
    assert len(pulumi_mocks.created_alias_records(f"{TP}api-custom-domain-record")) == 1
    assert len(
        pulumi_mocks.created_base_path_mappings(f"{TP}api-custom-domain-base-path-mapping")
    ) == 1


@pulumi.runtime.test
def test_stage_from_domain_config(pulumi_mocks):
    custom_domain = ApiCustomDomain(
        "api",
        DomainConfig(given_domain_name="api.example.com", certificate_arn=CERT_ARN, stage="dev"),
        rest_api_id="12345abcde",
    )
    resources = custom_domain.resources

    def check(_):
        mapping = pulumi_mocks.created_base_path_mappings()[0]
        assert mapping.inputs["stageName"] == "dev"

    return resources.base_path_mapping.id.apply(check)


@pulumi.runtime.test
def test_custom_domain_without_route53_record(pulumi_mocks):
    custom_domain = ApiCustomDomain(
        "api",
        DomainConfig(
            given_domain_name="api.example.com",
            certificate_arn=CERT_ARN,
            create_route53_record=False,
        ),
    )
    resources = custom_domain.resources

    def check(_):
        assert resources.record is None
        assert len(pulumi_mocks.created_domain_names()) == 1
        assert pulumi_mocks.created_alias_records() == []

    return resources.domain_name.id.apply(check)


def test_disabled_custom_domain_creates_nothing(pulumi_mocks):
    custom_domain = ApiCustomDomain(
        "api",
        DomainConfig(given_domain_name="api.example.com", certificate_arn=CERT_ARN, enabled=False),
    )

    resources = custom_domain.resources

    assert resources.domain_name is None
    assert resources.record is None
    assert resources.base_path_mapping is None
    assert pulumi_mocks.created_resources == []


def test_custom_domain_requires_certificate(pulumi_mocks):
    with pytest.raises(ValueError, match="Certificate ARN is required for custom domain"):
        ApiCustomDomain("api", {"given_domain_name": "api.example.com"})

    assert pulumi_mocks.created_resources == []


def test_custom_domain_config_is_validated():
    with pytest.raises(ValueError, match="Domain name cannot be empty"):
        ApiCustomDomain("api", {"given_domain_name": ""})


def test_custom_domain_names_must_be_unique(pulumi_mocks):
    ApiCustomDomain("api", {"given_domain_name": "api.example.com", "enabled": False})

    with pytest.raises(ValueError, match="Duplicate component name"):
        ApiCustomDomain("api", {"given_domain_name": "www.example.com", "enabled": False})
