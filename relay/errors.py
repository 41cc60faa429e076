"""Relay error taxonomy.

Every error carries the HTTP status it maps to at the handler boundary.
"""

from typing import Any, Optional


class RelayError(Exception):
    """Base class for failures converted into structured HTTP responses."""

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)

    def to_body(self) -> dict[str, Any]:
        return {"detail": self.detail}


class InvalidRequestError(RelayError):
    """Missing body, malformed JSON or missing message. Caller-correctable."""

    status_code = 400


class ConfigurationError(RelayError):
    """Deployment is missing something it needs, such as the API key."""

    status_code = 500


class UpstreamError(RelayError):
    """Provider answered with a non-2xx status."""

    def __init__(self, provider_status: int, provider_error: str):
        self.provider_status = provider_status
        self.provider_error = provider_error
        # Rate limiting is passed through; everything else is a bad gateway
        self.status_code = 429 if provider_status == 429 else 502
        super().__init__(f"AI Service Error: provider returned {provider_status}")

    def to_body(self) -> dict[str, Any]:
        return {
            "detail": self.detail,
            "provider_status": self.provider_status,
            "provider_error": self.provider_error,
        }


class UpstreamTimeoutError(RelayError):
    """Provider did not answer within the relay deadline."""

    status_code = 504

    def __init__(self, detail: str = "Error: AI service request timed out."):
        super().__init__(detail)


class DispatchError(RelayError):
    """The background stage could not be handed the request."""

    status_code = 500

    def __init__(self, reason: str, upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        super().__init__(f"Internal Server Error: Could not invoke background task. {reason}")
