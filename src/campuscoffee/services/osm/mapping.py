"""Conversion of OpenStreetMap node tags into point-of-sale records."""

from __future__ import annotations

import re
from typing import Mapping

from ...exceptions import OsmNodeMissingFieldsError
from ...models.domain import CampusType, OsmNode, Pos, PosType

REQUIRED_TAGS: tuple[str, ...] = (
    "name",
    "addr:street",
    "addr:housenumber",
    "addr:postcode",
    "addr:city",
)

_AMENITY_TYPES: dict[str, PosType] = {
    "cafe": PosType.CAFE,
    "vending_machine": PosType.VENDING_MACHINE,
    "cafeteria": PosType.CAFETERIA,
    "canteen": PosType.CAFETERIA,
    "bakery": PosType.BAKERY,
}

_INF_STREET_MARKERS: tuple[str, ...] = ("im neuenheimer feld", "berliner str")

# Plain base-10 integer, optional sign, no whitespace or digit separators
_POSTCODE_PATTERN = re.compile(r"[+-]?[0-9]+")
# Postal codes are stored in a 32-bit integer column
_POSTCODE_MIN = -(2**31)
_POSTCODE_MAX = 2**31 - 1


def convert_osm_node_to_pos(node: OsmNode) -> Pos:
    """Build an unsaved POS from the tags of ``node``.

    Raises:
        OsmNodeMissingFieldsError: if a required tag is absent or blank, or the
            postcode is not a 32-bit integer.
    """
    tags = node.tags
    if any(not (tags.get(key) or "").strip() for key in REQUIRED_TAGS):
        raise OsmNodeMissingFieldsError(node.node_id)

    street = tags["addr:street"]
    city = tags["addr:city"]
    return Pos(
        name=tags["name"],
        description=tags.get("description") or "",
        type=infer_pos_type(tags),
        campus=infer_campus(street, city),
        street=street,
        house_number=tags["addr:housenumber"],
        postal_code=parse_postal_code(tags["addr:postcode"], node.node_id),
        city=city,
    )


def parse_postal_code(postcode: str, node_id: int) -> int:
    if not _POSTCODE_PATTERN.fullmatch(postcode):
        raise OsmNodeMissingFieldsError(node_id)
    value = int(postcode)
    if not _POSTCODE_MIN <= value <= _POSTCODE_MAX:
        raise OsmNodeMissingFieldsError(node_id)
    return value


def infer_pos_type(tags: Mapping[str, str]) -> PosType:
    """Pick the venue type from ``amenity`` first, then ``shop``; default to cafe."""
    amenity = tags.get("amenity")
    if amenity in _AMENITY_TYPES:
        return _AMENITY_TYPES[amenity]
    if tags.get("shop") == "bakery":
        return PosType.BAKERY
    return PosType.CAFE


def infer_campus(street: str | None, city: str | None) -> CampusType:
    if city is not None and city.casefold() != "heidelberg":
        # Any city other than Heidelberg falls back to a generic campus
        return CampusType.BERGHEIM
    if street is not None:
        lowered = street.lower()
        if any(marker in lowered for marker in _INF_STREET_MARKERS):
            return CampusType.INF
    return CampusType.ALTSTADT
