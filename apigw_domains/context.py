from dataclasses import dataclass, field
from typing import ClassVar

from apigw_domains.config import AwsConfig
from apigw_domains.exceptions import ContextNotInitializedError


@dataclass(frozen=True)
class PluginContext:
    """Host information available while the plugin runs."""

    name: str
    env: str
    aws: AwsConfig = field(default_factory=AwsConfig)

    def prefix(self, name: str | None = None) -> str:
        """Get resource name prefix or prefixed name.

        Args:
            name: Optional name to prefix. If None, returns just the prefix with trailing dash.

        Returns:
            If name is None: "{app}-{env}-"
            If name provided: "{app}-{env}-{name}"
        """
        base = f"{self.name.lower()}-{self.env.lower()}-"
        return base if name is None else f"{base}{name}"


class _ContextStore:
    """Internal storage for the global plugin context."""

    _instance: ClassVar[PluginContext | None] = None

    @classmethod
    def set(cls, context: PluginContext) -> None:
        """Set the global context. Can only be called once."""
        if cls._instance is not None:
            raise RuntimeError("Context has already been initialized")
        cls._instance = context

    @classmethod
    def get(cls) -> PluginContext:
        if cls._instance is None:
            raise ContextNotInitializedError(
                "Plugin context not initialized. The host must call init_context() before "
                "custom domains are managed."
            )
        return cls._instance

    @classmethod
    def clear(cls) -> None:
        """Clear the context. Only used for testing."""
        cls._instance = None


def init_context(name: str, env: str, aws: AwsConfig | None = None) -> PluginContext:
    """Initialize the plugin context from host settings and return it."""
    ctx = PluginContext(name=name, env=env, aws=aws or AwsConfig())
    _ContextStore.set(ctx)
    return ctx


def context() -> PluginContext:
    """Get the current plugin context.

    Raises:
        ContextNotInitializedError: If called before the context is initialized.
    """
    return _ContextStore.get()
