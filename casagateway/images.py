"""
Image reshaping for the page-builder front-end.

SwissRETS nests pictures as

    property > localizations > localization > attachments > image > url

with one localization per language. Any level may be missing or, outside the
always-array names, hold a single object instead of a list.
"""
from typing import Any, Iterator, Optional

from .profiles import Profile


def as_list(value: Any) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def iter_listings(doc: Any, listing_tag: str) -> Iterator[dict]:
    """Yield every listing mapping in the parsed document, in document order."""
    if isinstance(doc, list):
        for item in doc:
            yield from iter_listings(item, listing_tag)
    elif isinstance(doc, dict):
        for key, value in doc.items():
            if key == listing_tag:
                for listing in as_list(value):
                    if isinstance(listing, dict):
                        yield listing
            else:
                yield from iter_listings(value, listing_tag)


def localizations_of(listing: dict) -> list[dict]:
    container = listing.get("localizations")
    if not isinstance(container, dict):
        return []
    return [loc for loc in as_list(container.get("localization")) if isinstance(loc, dict)]


def images_of(localization: dict) -> list:
    attachments = localization.get("attachments")
    if not isinstance(attachments, dict):
        return []
    return as_list(attachments.get("image"))


def image_url(image: Any, text_key: str) -> Optional[str]:
    if isinstance(image, str):
        return image or None
    if not isinstance(image, dict):
        return None
    url = image.get("url")
    if isinstance(url, dict):
        url = url.get(text_key)
    return url or None


def flatten_images(doc: dict, profile: Profile) -> None:
    """Attach a flat ``images`` list of URLs to each listing. Keeps the nested data."""
    for listing in iter_listings(doc, profile.listing_tag):
        urls = []
        for localization in localizations_of(listing):
            for image in images_of(localization):
                url = image_url(image, profile.text_key)
                if url:
                    urls.append(url)
        listing["images"] = urls


def simplify_images(doc: dict, profile: Profile) -> None:
    """Collapse each localization's image list to its first image."""
    for listing in iter_listings(doc, profile.listing_tag):
        for localization in localizations_of(listing):
            images = images_of(localization)
            if images:
                localization["attachments"]["image"] = images[0]


def reshape_images(doc: dict, profile: Profile, flatten: bool = False, simplify: bool = False) -> dict:
    # simplify mutates the lists flatten reads, so flatten has to run first
    if flatten:
        flatten_images(doc, profile)
    if simplify:
        simplify_images(doc, profile)
    return doc
