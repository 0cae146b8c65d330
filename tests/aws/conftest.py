"""AWS fixtures shared across aws test modules."""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from pulumi.runtime import set_mocks

from .pulumi_mocks import PulumiTestMocks


@pytest.fixture
def pulumi_mocks():
    """Provide shared Pulumi mocks for AWS resource testing."""
    mocks = PulumiTestMocks()
    set_mocks(mocks)
    return mocks


@pytest.fixture
def aws():
    """boto3 sessions and clients, with route53 and sts clients shared by every session."""
    route53 = MagicMock(name="route53")
    route53.meta.region_name = "us-east-1"
    route53.list_hosted_zones.return_value = {"HostedZones": [], "IsTruncated": False}
    sts = MagicMock(name="sts")
    sts.assume_role.return_value = {
        "Credentials": {
            "AccessKeyId": "ASIAEXAMPLE",
            "SecretAccessKey": "secret",
            "SessionToken": "token",
        }
    }
    assumed_route53 = MagicMock(name="assumed_route53")
    assumed_route53.meta.region_name = "eu-west-1"

    with (
        patch("boto3.Session") as session_cls,
        patch("boto3.client", return_value=assumed_route53) as client_fn,
    ):
        session = session_cls.return_value
        session.region_name = "us-east-1"
        session.client.side_effect = lambda name, **_: {"route53": route53, "sts": sts}[name]
        yield SimpleNamespace(
            session_cls=session_cls,
            session=session,
            route53=route53,
            sts=sts,
            client_fn=client_fn,
            assumed_route53=assumed_route53,
        )
