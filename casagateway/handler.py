"""
Netlify function entry point shared by every endpoint.

    inbound event -> GatewayRequest -> sign -> fetch -> normalize -> response

Each stage returns an Outcome; the first failure short-circuits the chain and
is rendered as ``{"error": ..., "message": ...}`` with status 500.
"""
import json
import logging
from functools import partial
from typing import Any, Mapping, Optional

import requests

from .config import GatewayConfig
from .errors import GatewayError
from .fetcher import fetch
from .normalizer import OutputMode, normalize
from .profiles import Profile, get_profile
from .request import GatewayRequest
from .signer import sign

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _response(status: int, body: str = "", content_type: Optional[str] = None) -> dict[str, Any]:
    headers = dict(CORS_HEADERS)
    if content_type:
        headers["Content-Type"] = content_type
    return {"statusCode": status, "headers": headers, "body": body}


def _json_response(status: int, payload: dict[str, Any]) -> dict[str, Any]:
    return _response(status, json.dumps(payload, ensure_ascii=False), "application/json")


def error_response(error: GatewayError) -> dict[str, Any]:
    logger.error("Request failed (%s): %s", error.kind, error.message)
    return _json_response(500, error.to_body())


def handle_request(event: Mapping[str, Any], profile: Profile, config: Optional[GatewayConfig] = None,
                   session: Optional[requests.Session] = None) -> dict[str, Any]:
    try:
        request = GatewayRequest.from_event(event)
        if request.method == "OPTIONS":
            return _response(200)
        if request.method != "GET":
            return _json_response(405, {"error": "Method not allowed", "message": f"{request.method} is not supported"})

        config = config or GatewayConfig.from_env()
        logging.getLogger("casagateway").setLevel(config.log_level)

        mode = request.output_mode(profile)
        outcome = (
            sign(request.values, profile, config)
            .then(partial(fetch, timeout=config.timeout, session=session))
            .then(partial(
                normalize,
                mode=mode,
                profile=profile,
                flatten=profile.image_options and request.flatten_images,
                simplify=profile.image_options and request.simplify_images,
                force_content_type=request.debug,
            ))
        )
        if not outcome.ok:
            return error_response(outcome.error)

        normalized = outcome.value
        logger.info("Responding with %s (%s profile)", mode.value, profile.name)
        return _response(200, normalized.body, normalized.content_type)

    except Exception as e:
        logger.exception("Unexpected error in %s handler", profile.name)
        return _json_response(500, {"error": "Internal server error", "message": str(e)})


def make_handler(profile_name: str):
    """Build the ``handler(event, context)`` a Netlify function module exports."""
    profile = get_profile(profile_name)

    def handler(event, context):
        return handle_request(event, profile)

    handler.__name__ = f"{profile.name}_handler"
    return handler
