class DisposalAgentError(Exception):
    """Base exception for disposal agent service."""


class ConfigurationError(DisposalAgentError):
    """Raised when required configuration is missing or invalid."""


class ProviderNotFoundError(DisposalAgentError):
    """Raised when a provider id has no catalog document."""


class ProviderLoadError(DisposalAgentError):
    """Raised when a provider document exists but cannot be parsed."""


class ServiceNotInitializedError(DisposalAgentError):
    """Raised when the service is used before initialization."""
