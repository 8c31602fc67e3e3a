import json
import logging
from dataclasses import dataclass
from enum import Enum

from .errors import Outcome, ParseError
from .fetcher import UpstreamResponse
from .images import reshape_images
from .profiles import Profile
from .xml_parser import parse_xml

logger = logging.getLogger(__name__)

XML_CONTENT_TYPE = "application/xml"
JSON_CONTENT_TYPE = "application/json"


class OutputMode(str, Enum):
    RAW_XML = "raw-xml"
    JSON = "json"


@dataclass(frozen=True)
class NormalizedResponse:
    body: str
    content_type: str


def normalize(upstream: UpstreamResponse, mode: OutputMode, profile: Profile,
              flatten: bool = False, simplify: bool = False,
              force_content_type: bool = False) -> Outcome[NormalizedResponse]:
    """Pass the XML through untouched, or convert it to JSON and reshape images.

    ``force_content_type`` ignores the upstream header and answers with
    ``application/xml`` (used for debug responses).
    """
    if mode is OutputMode.RAW_XML:
        content_type = XML_CONTENT_TYPE if force_content_type else (upstream.content_type or XML_CONTENT_TYPE)
        return Outcome.success(NormalizedResponse(body=upstream.text, content_type=content_type))

    try:
        doc = parse_xml(upstream.text, profile)
    except ParseError as e:
        logger.error("Could not parse CASAGATEWAY response: %s", e)
        return Outcome.failure(e)

    reshape_images(doc, profile, flatten=flatten, simplify=simplify)
    return Outcome.success(NormalizedResponse(
        body=json.dumps(doc, ensure_ascii=False),
        content_type=JSON_CONTENT_TYPE,
    ))
