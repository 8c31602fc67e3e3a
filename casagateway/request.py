"""
Inbound request parsing for Netlify (and Lambda function URL) events.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .normalizer import OutputMode
from .profiles import SIGNING_KEYS, Profile


def _flag(params: Mapping[str, Any], name: str) -> bool:
    return params.get(name) == "true"


def event_method(event: Mapping[str, Any]) -> str:
    http = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http.get("method") or "GET"
    return method.upper()


@dataclass(frozen=True)
class GatewayRequest:
    method: str = "GET"
    values: dict[str, Optional[str]] = field(default_factory=dict)
    response_format: Optional[str] = None
    debug: bool = False
    flatten_images: bool = False
    simplify_images: bool = False

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "GatewayRequest":
        params = event.get("queryStringParameters") or {}
        return cls(
            method=event_method(event),
            values={key: params.get(key) or None for key in SIGNING_KEYS},
            response_format=params.get("responseFormat") or None,
            debug=_flag(params, "debug"),
            flatten_images=_flag(params, "flattenImages"),
            simplify_images=_flag(params, "simplifyImages"),
        )

    def output_mode(self, profile: Profile) -> OutputMode:
        if self.debug or not profile.json_output:
            return OutputMode.RAW_XML
        response_format = self.response_format or profile.default_response_format
        return OutputMode.JSON if response_format == "json" else OutputMode.RAW_XML
