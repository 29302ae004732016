"""
Result values returned by every remote client.

Remote failures are never raised out of a client: they come back as ``Err``
so that callers branch explicitly before touching a value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Why a remote call produced no value."""
    CONFIG = "config"          # credential missing, no request made
    REQUEST = "request"        # upstream answered with an error
    TRANSPORT = "transport"    # network or decode failure


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful remote call."""
    value: T


@dataclass(frozen=True)
class Err:
    """Failed remote call."""
    message: str
    kind: ErrorKind = ErrorKind.TRANSPORT
    detail: Optional[str] = None
    suggestion: Optional[str] = None
    status_code: Optional[int] = None


Result = Union[Ok[T], Err]


def not_configured(service: str, env_var: str, suggestion: str) -> Err:
    """Err for a client whose credential is absent."""
    return Err(
        message=f"{service} API key not configured. Please set {env_var} in your environment variables.",
        kind=ErrorKind.CONFIG,
        suggestion=suggestion,
    )
