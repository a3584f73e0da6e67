"""
Store ingestion helpers.

Converts externally sourced records into :class:`Store` objects:
OpenStreetMap/Overpass style nodes (``id``, ``lat``, ``lon``, ``tags``),
tabular records (a pandas DataFrame or any iterable of mappings), and
size-class inference from free-form tags. Fetching the records from a
lookup service is the caller's job.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from .errors import InvalidInputError
from .models import Point, SizeClass, Store


LARGE_KEYWORDS = ("supermarket", "department_store", "mall")
MEDIUM_KEYWORDS = ("grocery", "chemist", "bakery", "convenience")

DEFAULT_CATEGORY = "shop"
UNNAMED = "Unnamed"


def _missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (Mapping, list, tuple, set)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def infer_size_class(tags: Optional[Mapping[str, Any]]) -> SizeClass:
    """
    Guess a store's size class from its tags.

    Any tag value mentioning a supermarket, department store or mall is
    large; grocery, chemist, bakery or convenience is medium; anything
    else is small.
    """
    if not tags:
        return SizeClass.SMALL

    text = " ".join(str(v) for v in tags.values() if not _missing(v)).lower()
    if any(k in text for k in LARGE_KEYWORDS):
        return SizeClass.LARGE
    if any(k in text for k in MEDIUM_KEYWORDS):
        return SizeClass.MEDIUM
    return SizeClass.SMALL


def store_from_element(element: Mapping[str, Any]) -> Store:
    """
    Build a :class:`Store` from an Overpass-style element.

    Ways and relations returned with ``out center`` carry their position in
    a ``center`` object instead of top-level ``lat``/``lon``.

    Raises:
        InvalidInputError: If the element has no usable coordinates
    """
    tags = dict(element.get("tags") or {})

    lat = element.get("lat")
    lon = element.get("lon")
    if _missing(lat) or _missing(lon):
        center = element.get("center") or {}
        lat, lon = center.get("lat"), center.get("lon")
    if _missing(lat) or _missing(lon):
        raise InvalidInputError(f"Element {element.get('id')!r} has no coordinates")

    category = tags.get("shop") or tags.get("amenity") or DEFAULT_CATEGORY
    name = tags.get("name") or tags.get("brand") or UNNAMED

    return Store(
        id=element.get("id"),
        point=Point(lat, lon),
        category=category,
        size=infer_size_class(tags),
        tags=tags,
        name=name,
    )


def stores_from_elements(elements: Iterable[Mapping[str, Any]]) -> List[Store]:
    """Convert Overpass-style elements to stores, preserving order."""
    return [store_from_element(el) for el in elements]


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = record.get(key)
        if not _missing(value):
            return value
    return None


def store_from_record(record: Mapping[str, Any]) -> Store:
    """
    Build a :class:`Store` from a flat record.

    Recognised keys: ``id``, ``lat``, ``lng`` (or ``lon``), ``category``
    (or ``type``), ``size``, ``name``, ``tags``. A missing size is inferred
    from the tags and category; a missing category defaults to ``"shop"``.
    """
    lat = _first_present(record, "lat")
    lng = _first_present(record, "lng", "lon")
    if lat is None or lng is None:
        raise InvalidInputError(f"Record {record.get('id')!r} has no coordinates")

    tags = record.get("tags")
    tags = dict(tags) if isinstance(tags, Mapping) else {}

    category = _first_present(record, "category", "type") or DEFAULT_CATEGORY
    size = _first_present(record, "size")
    if size is None:
        size = infer_size_class({**tags, "category": category})

    return Store(
        id=record.get("id"),
        point=Point(lat, lng),
        category=str(category),
        size=size,
        tags=tags,
        name=str(_first_present(record, "name") or ""),
    )


def stores_from_records(records: Any) -> List[Store]:
    """
    Convert a DataFrame or iterable of mappings into stores.

    Row order is preserved, so indices in the clustering output refer back
    to the input rows.
    """
    if isinstance(records, pd.DataFrame):
        rows = records.to_dict("records")
    else:
        rows = list(records)
    return [store_from_record(row) for row in rows]
