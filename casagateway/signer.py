"""
Request signing for the CASAGATEWAY publisher API.

The upstream validates each call with a digest over a canonical string:

    <key><value><key><value>...<private key><timestamp>

where the pairs are the query options sorted by key. Any delimiter, a
different order or a different timestamp format yields a digest the upstream
rejects, so the string is built here and nowhere else.
"""
import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlencode

from .config import GatewayConfig
from .errors import ConfigurationError, Outcome
from .profiles import Profile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SigningParameter:
    key: str
    value: str


@dataclass(frozen=True)
class SigningRequest:
    parameters: tuple[SigningParameter, ...]
    private_key: str
    timestamp: int


@dataclass(frozen=True)
class SignedURL:
    url: str
    timestamp: int
    digest: str
    parameters: tuple[SigningParameter, ...]


def current_timestamp() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def collect_parameters(values: Mapping[str, Optional[str]], profile: Profile,
                       config: GatewayConfig) -> list[SigningParameter]:
    """Pick the options the profile forwards, dropping empty ones.

    ``format`` is always sent. The slug parameter falls back to the configured
    default provider when the profile asks for it.
    """
    params = []
    for key in sorted(profile.allowed_params):
        value = values.get(key) or ""
        if key == "format" and not value:
            value = profile.default_format
        if key == profile.slug_param and not value and profile.use_default_provider:
            value = config.default_provider
        if value:
            params.append(SigningParameter(key, str(value)))
    return params


def _collation_key(key: str) -> tuple[str, tuple[bool, ...]]:
    # Case-insensitive first, lowercase before uppercase on ties, like localeCompare
    return key.casefold(), tuple(ch.isupper() for ch in key)


def sort_parameters(params) -> list[SigningParameter]:
    return sorted(params, key=lambda param: _collation_key(param.key))


def canonical_string(request: SigningRequest) -> str:
    options = "".join(f"{param.key}{param.value}" for param in sort_parameters(request.parameters))
    return f"{options}{request.private_key}{request.timestamp}"


def compute_digest(request: SigningRequest) -> str:
    """Lowercase hex SHA-256 of the canonical string (the upstream's ``hmac``)."""
    return hashlib.sha256(canonical_string(request).encode("utf-8")).hexdigest()


def build_url(endpoint: str, api_key: str, params, timestamp: int, digest: str) -> str:
    query = [("apikey", api_key)]
    query.extend((param.key, param.value) for param in sort_parameters(params))
    query.append(("timestamp", str(timestamp)))
    query.append(("hmac", digest))
    return f"{endpoint}?{urlencode(query)}"


def sign(values: Mapping[str, Optional[str]], profile: Profile, config: GatewayConfig,
         timestamp: Optional[int] = None) -> Outcome[SignedURL]:
    missing = config.missing_secrets()
    if missing:
        logger.error("Signing aborted, missing configuration: %s", ", ".join(missing))
        return Outcome.failure(ConfigurationError(missing))

    params = tuple(sort_parameters(collect_parameters(values, profile, config)))
    request = SigningRequest(
        parameters=params,
        private_key=config.private_key.get_secret_value(),
        timestamp=current_timestamp() if timestamp is None else timestamp,
    )
    digest = compute_digest(request)
    url = build_url(config.endpoint, config.api_key.get_secret_value(), params, request.timestamp, digest)
    return Outcome.success(SignedURL(url=url, timestamp=request.timestamp, digest=digest, parameters=params))
