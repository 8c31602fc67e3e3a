"""
Response-shape profiles.

Each Netlify function used to carry its own copy of the signing and parsing
code with slightly different defaults. A profile captures those differences so
one pipeline can serve every endpoint:

- which query parameters are forwarded and signed
- which parameter carries the publisher slug (``company`` or ``provider``)
- whether JSON output and image reshaping are offered
- the XML-to-JSON naming convention (attribute prefix and text field name)
- which element names are always emitted as lists

``listings`` answers with the ``@_``/``#text`` shape, ``framer`` with the
unprefixed/``value`` shape; the two are never mixed.
"""
from pydantic import BaseModel, ConfigDict

DEFAULT_FORMAT = "swissrets:2.7"

SIGNING_KEYS = ("format", "company", "provider", "limit", "offset", "availability", "type")


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    allowed_params: frozenset[str]
    default_format: str = DEFAULT_FORMAT
    slug_param: str = "company"
    use_default_provider: bool = False
    json_output: bool = True
    default_response_format: str = "json"
    attribute_prefix: str = "@_"
    text_key: str = "#text"
    parse_attribute_values: bool = True
    parse_text_values: bool = True
    always_array: frozenset[str] = frozenset({"property"})
    listing_tag: str = "property"
    image_options: bool = False


PROPERTIES = Profile(
    name="properties",
    allowed_params=frozenset({"format", "company"}),
    json_output=False,
    default_response_format="xml",
)

LISTINGS = Profile(
    name="listings",
    allowed_params=frozenset({"format", "company", "limit", "offset", "availability", "type"}),
)

FRAMER = Profile(
    name="framer",
    allowed_params=frozenset({"format", "provider", "limit", "offset", "availability", "type"}),
    slug_param="provider",
    use_default_provider=True,
    attribute_prefix="",
    text_key="value",
    always_array=frozenset({"property", "attachment", "image"}),
    image_options=True,
)

PROFILES = {profile.name: profile for profile in (PROPERTIES, LISTINGS, FRAMER)}


def get_profile(name: str) -> Profile:
    try:
        return PROFILES[name]
    except KeyError:
        raise KeyError(f"Unknown profile '{name}'. Available: {', '.join(sorted(PROFILES))}") from None
