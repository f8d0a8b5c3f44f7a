import pytest

from campuscoffee.exceptions import (
    DuplicatePosNameError,
    OsmNodeMissingFieldsError,
    OsmNodeNotFoundError,
    PosNotFoundError,
)
from campuscoffee.models.domain import CampusType, OsmNode, Pos, PosType
from campuscoffee.persistence.pos import InMemoryPosStore
from campuscoffee.services.osm.client import STUB_NODE_ID, StubOsmClient
from campuscoffee.services.pos.service import PosService


class FakeOsmClient:
    def __init__(self, tags: dict[str, str]) -> None:
        self.tags = tags
        self.requested: list[int] = []

    def fetch_node(self, node_id: int) -> OsmNode:
        self.requested.append(node_id)
        return OsmNode(node_id=node_id, tags=self.tags)


def _pos(name: str = "Café Frisch") -> Pos:
    return Pos(
        name=name,
        type=PosType.CAFE,
        campus=CampusType.INF,
        street="Im Neuenheimer Feld",
        house_number="304",
        postal_code=69120,
        city="Heidelberg",
    )


@pytest.fixture
def service() -> PosService:
    return PosService(store=InMemoryPosStore(), osm_client=StubOsmClient())


def test_upsert_creates_then_updates(service: PosService):
    created = service.upsert(_pos())
    created.name = "Café Frisch (Updated)"

    updated = service.upsert(created)

    assert updated.id == created.id
    assert service.get_by_id(created.id).name == "Café Frisch (Updated)"
    assert len(service.get_all()) == 1


def test_upsert_unknown_id_raises_not_found(service: PosService):
    pos = _pos()
    pos.id = 123

    with pytest.raises(PosNotFoundError):
        service.upsert(pos)


def test_upsert_duplicate_name_propagates(service: PosService):
    service.upsert(_pos())

    with pytest.raises(DuplicatePosNameError):
        service.upsert(_pos())


def test_clear_removes_everything(service: PosService):
    service.upsert(_pos("A"))
    service.upsert(_pos("B"))

    service.clear()

    assert service.get_all() == []


def test_import_from_stub_node(service: PosService):
    imported = service.import_from_osm_node(STUB_NODE_ID)

    assert imported.id is not None
    assert imported.name == "Rada Coffee & Rösterei"
    assert imported.description == "Caffé und Rösterei"
    assert imported.type is PosType.CAFE
    assert imported.campus is CampusType.ALTSTADT
    assert imported.street == "Untere Straße"
    assert imported.house_number == "21"
    assert imported.postal_code == 69117
    assert imported.city == "Heidelberg"
    assert service.get_by_id(imported.id) == imported


def test_import_twice_is_a_duplicate(service: PosService):
    service.import_from_osm_node(STUB_NODE_ID)

    with pytest.raises(DuplicatePosNameError):
        service.import_from_osm_node(STUB_NODE_ID)


def test_import_unknown_node_raises_not_found(service: PosService):
    with pytest.raises(OsmNodeNotFoundError):
        service.import_from_osm_node(1)


def test_import_with_missing_tags_stores_nothing():
    store = InMemoryPosStore()
    osm_client = FakeOsmClient({"name": "Nameless Street Café"})
    service = PosService(store=store, osm_client=osm_client)

    with pytest.raises(OsmNodeMissingFieldsError):
        service.import_from_osm_node(77)

    assert osm_client.requested == [77]
    assert store.get_all() == []


def test_import_maps_vending_machine():
    tags = {
        "name": "Mensa Automat",
        "amenity": "vending_machine",
        "addr:street": "Im Neuenheimer Feld",
        "addr:housenumber": "304",
        "addr:postcode": "69120",
        "addr:city": "Heidelberg",
    }
    service = PosService(store=InMemoryPosStore(), osm_client=FakeOsmClient(tags))

    imported = service.import_from_osm_node(5)

    assert imported.type is PosType.VENDING_MACHINE
    assert imported.campus is CampusType.INF
