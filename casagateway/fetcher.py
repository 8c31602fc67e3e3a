import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .errors import NetworkError, Outcome, UpstreamError
from .signer import SignedURL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpstreamResponse:
    status: int
    reason: str
    text: str
    content_type: Optional[str]


def _describe(signed: SignedURL) -> str:
    # apikey and hmac stay out of the logs
    options = ", ".join(f"{param.key}={param.value}" for param in signed.parameters)
    return f"{signed.url.split('?', 1)[0]} [{options}]"


def fetch(signed: SignedURL, timeout: Optional[float] = None,
          session: Optional[requests.Session] = None) -> Outcome[UpstreamResponse]:
    """Single GET against the signed URL. No retries."""
    http = session or requests
    logger.info("Fetching from CASAGATEWAY: %s", _describe(signed))
    try:
        response = http.get(signed.url, timeout=timeout)
    except requests.RequestException as e:
        logger.error("CASAGATEWAY unreachable: %s", e)
        return Outcome.failure(NetworkError(str(e)))

    logger.info("CASAGATEWAY responded %s", response.status_code)
    if not 200 <= response.status_code < 300:
        return Outcome.failure(UpstreamError(response.status_code, response.reason or "", response.text))

    content_type = response.headers.get("Content-Type")
    # requests assumes ISO-8859-1 for text/* without a charset; the upstream sends UTF-8
    if "charset=" not in (content_type or "").lower():
        response.encoding = "utf-8"
    return Outcome.success(UpstreamResponse(
        status=response.status_code,
        reason=response.reason or "",
        text=response.text,
        content_type=content_type,
    ))
