"""
Exceptions raised by request handlers.

Each exception knows its HTTP status and how to render itself; the
application registers one handler for ``GatewayError`` that turns any of
them into a JSON response.
"""

from typing import Any, Dict, Optional

from .results import Err, ErrorKind


class GatewayError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None, suggestion: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail
        self.suggestion = suggestion

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.message}
        if self.detail is not None:
            payload["details"] = self.detail
        if self.suggestion is not None:
            payload["suggestion"] = self.suggestion
        return payload


class FieldValidationError(GatewayError):
    """A required request field is missing or blank."""

    status_code = 400

    def __init__(self, label: str):
        super().__init__(f"{label} is required")
        self.label = label


class UpstreamError(GatewayError):
    """A remote call returned an ``Err``."""

    def __init__(self, message: str, detail: Optional[str] = None, suggestion: Optional[str] = None,
                 upstream_status: Optional[int] = None):
        super().__init__(message, detail=detail, suggestion=suggestion)
        self.upstream_status = upstream_status

    @classmethod
    def from_err(cls, err: Err) -> "UpstreamError":
        """Pick the subclass matching the error kind."""
        error_cls = _KIND_TO_ERROR.get(err.kind, UpstreamTransportError)
        return error_cls(
            err.message,
            detail=err.detail,
            suggestion=err.suggestion,
            upstream_status=err.status_code,
        )


class UpstreamConfigError(UpstreamError):
    """Credential for the upstream service is not configured."""


class UpstreamRequestError(UpstreamError):
    """Upstream answered with a non-success status."""


class UpstreamTransportError(UpstreamError):
    """Network or decode failure talking to the upstream."""


_KIND_TO_ERROR = {
    ErrorKind.CONFIG: UpstreamConfigError,
    ErrorKind.REQUEST: UpstreamRequestError,
    ErrorKind.TRANSPORT: UpstreamTransportError,
}
