import pytest

from apigw_domains.component import ComponentRegistry
from apigw_domains.config import AwsConfig
from apigw_domains.context import PluginContext, _ContextStore


@pytest.fixture(autouse=True)
def clean_registries():
    ComponentRegistry.clear()
    yield
    ComponentRegistry.clear()


@pytest.fixture(autouse=True)
def app_context():
    _ContextStore.clear()
    _ContextStore.set(
        PluginContext(
            name="test",
            env="test",
            aws=AwsConfig(profile="default", region="us-east-1"),
        )
    )
    yield
    _ContextStore.clear()
