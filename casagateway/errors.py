"""
Error kinds and the Outcome value passed between pipeline stages.

Stages never raise across their boundary: they return an ``Outcome`` that is
either a success carrying a payload or a failure carrying one of the errors
below. The handler turns any failure into the JSON error envelope.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class GatewayError(Exception):
    """Base class; ``error`` is the short title, ``message`` the detail."""
    kind = "gateway"
    error = "Failed to fetch properties"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ConfigurationError(GatewayError):
    kind = "configuration"
    error = "API keys not configured"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        names = " and ".join(self.missing)
        pronoun = "them" if len(self.missing) > 1 else "it"
        super().__init__(f"Missing {names}. Please set {pronoun} in the Netlify environment variables.")


class NetworkError(GatewayError):
    kind = "network"
    error = "Could not reach CASAGATEWAY"


class UpstreamError(GatewayError):
    kind = "upstream"

    def __init__(self, status: int, reason: str = "", body: str = ""):
        self.status = status
        self.reason = reason
        self.body = body
        super().__init__(f"CASAGATEWAY returned {status}: {reason}".rstrip(": "))

    def to_body(self) -> dict[str, Any]:
        body = super().to_body()
        body["status"] = self.status
        body["details"] = self.body or self.reason
        return body


class ParseError(GatewayError):
    kind = "parse"
    error = "Invalid response from CASAGATEWAY"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success-with-payload or failure-with-error."""
    value: Optional[T] = None
    error: Optional[GatewayError] = None

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: GatewayError) -> "Outcome[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def then(self, step: Callable[[T], "Outcome[U]"]) -> "Outcome[U]":
        """Run the next stage only when this one succeeded."""
        if self.error is not None:
            return Outcome.failure(self.error)
        return step(self.value)
