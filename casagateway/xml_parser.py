"""
XML to JSON-ready mapping conversion.

Shape rules, per profile:

- attributes become fields, named ``<attribute_prefix><name>``
- element text goes under ``text_key``; an element with text only collapses to
  that value, an empty element to ``""``
- repeated child names become lists; names listed in ``always_array`` are lists
  even with a single child
- namespace URIs are dropped, local names are kept
- ``"true"``/``"false"`` and decimal numbers are coerced to bool/int/float.
  Callers expecting strings will see numbers for things like ``id="42"``;
  values with leading zeros (``"0041"``) stay strings.
"""
import math
import re
import xml.etree.ElementTree as ET
from typing import Any

from .errors import ParseError
from .profiles import Profile

_NUMBER = re.compile(r"^[+-]?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?$")
_INTEGER = re.compile(r"^[+-]?(?:0|[1-9]\d*)$")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def coerce_value(raw: str) -> Any:
    if raw == "true":
        return True
    if raw == "false":
        return False
    if _INTEGER.match(raw):
        return int(raw)
    if _NUMBER.match(raw):
        value = float(raw)
        # JSON has no Infinity
        return raw if math.isinf(value) else value
    return raw


def _add_child(node: dict, key: str, value: Any, profile: Profile) -> None:
    if key in profile.always_array:
        existing = node.get(key)
        if isinstance(existing, list):
            existing.append(value)
        else:
            node[key] = [value] if existing is None else [existing, value]
    elif key not in node:
        node[key] = value
    elif isinstance(node[key], list):
        node[key].append(value)
    else:
        node[key] = [node[key], value]


def _convert(element: ET.Element, profile: Profile) -> Any:
    node: dict[str, Any] = {}
    for name, raw in element.attrib.items():
        value = raw.strip()
        node[f"{profile.attribute_prefix}{_local_name(name)}"] = (
            coerce_value(value) if profile.parse_attribute_values else value
        )

    texts = [(element.text or "").strip()]
    for child in element:
        # comments and processing instructions carry no data
        if not isinstance(child.tag, str):
            texts.append((child.tail or "").strip())
            continue
        _add_child(node, _local_name(child.tag), _convert(child, profile), profile)
        texts.append((child.tail or "").strip())

    text = "".join(texts)
    value = coerce_value(text) if text and profile.parse_text_values else text
    if not node:
        return value
    if text:
        node[profile.text_key] = value
    return node


def parse_xml(text: str, profile: Profile) -> dict[str, Any]:
    """Parse an XML document into nested dicts/lists following ``profile``."""
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise ParseError(f"Malformed XML from CASAGATEWAY: {e}") from e

    doc: dict[str, Any] = {}
    _add_child(doc, _local_name(root.tag), _convert(root, profile), profile)
    return doc
