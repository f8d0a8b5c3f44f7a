"""Domain models for points of sale and OpenStreetMap nodes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class PosType(str, Enum):
    """Kind of venue a point of sale is."""

    CAFE = "CAFE"
    VENDING_MACHINE = "VENDING_MACHINE"
    CAFETERIA = "CAFETERIA"
    BAKERY = "BAKERY"


class CampusType(str, Enum):
    """Campus locations of Heidelberg University."""

    ALTSTADT = "ALTSTADT"
    BERGHEIM = "BERGHEIM"
    INF = "INF"
    MANNHEIM_MED = "MANNHEIM_MED"  # Mannheim medical faculty


@dataclass(slots=True)
class Pos:
    """A point of sale. ``id`` and the timestamps are set by the store."""

    name: str
    type: PosType
    campus: CampusType
    street: str
    house_number: str
    postal_code: int
    city: str
    description: str = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(slots=True, frozen=True)
class OsmNode:
    """An OpenStreetMap node and its raw tags."""

    node_id: int
    tags: dict[str, str] = field(default_factory=dict)
