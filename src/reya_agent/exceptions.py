from typing import Optional


class ReyaAgentError(Exception):
    """Base exception for the Reya agent plugin."""


class ConfigurationError(ReyaAgentError):
    """Raised when plugin configuration is missing or invalid."""


class ClassificationError(ReyaAgentError):
    """Raised when the model could not classify a message."""


class UpstreamFetchError(ReyaAgentError):
    """
    Raised when the Reya API is unreachable or answers with a non-success status.

    Carries the resource kind and, where available, the HTTP status code so
    operators can tell a 404 on one market from a network outage.
    """

    def __init__(
        self,
        resource_kind: str,
        url: str,
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.resource_kind = resource_kind
        self.url = url
        self.status_code = status_code
        self.reason = reason

        message = f"Upstream fetch failed for {resource_kind} ({url})"
        if status_code is not None:
            message += f": HTTP {status_code}"
        if reason:
            message += f" - {reason}"
        super().__init__(message)
