from apigw_domains.globals import PLUGIN_NAME


class DomainManagerError(Exception):
    """Base class for custom domain management errors."""


class ContextNotInitializedError(RuntimeError):
    """Raised when the plugin context is read before the host initialised it."""


class AmbiguousBooleanError(DomainManagerError, ValueError):
    """Raised when a boolean config value is neither true-ish nor false-ish."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f'{PLUGIN_NAME}: Ambiguous boolean config: "{value}"')


class HostedZoneListError(DomainManagerError):
    """Raised when listing Route53 hosted zones fails."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Unable to list hosted zones in Route53.\n{reason}")


class HostedZoneNotFoundError(DomainManagerError):
    """Raised when no hosted zone matches the custom domain."""

    def __init__(self, domain_name: str):
        self.domain_name = domain_name
        super().__init__(f"Could not find hosted zone '{domain_name}'")


class RecordChangeError(DomainManagerError):
    """Raised when Route53 rejects a record set change."""

    def __init__(self, action: str, domain_name: str, reason: str):
        self.action = action
        self.domain_name = domain_name
        self.reason = reason
        super().__init__(f"Failed to {action} A Alias for '{domain_name}':\n{reason}")
