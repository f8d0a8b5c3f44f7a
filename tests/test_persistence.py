from datetime import datetime, timezone

import pytest

from campuscoffee.exceptions import DuplicatePosNameError, PosNotFoundError
from campuscoffee.models.domain import CampusType, Pos, PosType
from campuscoffee.persistence.pos import (
    InMemoryPosStore,
    merge_house_number,
    pos_from_row,
    pos_to_row,
    split_house_number,
)


def _pos(name: str = "Schmelzpunkt", house_number: str = "5") -> Pos:
    return Pos(
        name=name,
        description="Coffee bar",
        type=PosType.CAFE,
        campus=CampusType.ALTSTADT,
        street="Hauptstraße",
        house_number=house_number,
        postal_code=69117,
        city="Heidelberg",
    )


def test_in_memory_store_assigns_id_and_timestamps_on_create() -> None:
    store = InMemoryPosStore()

    first = store.upsert(_pos("A"))
    second = store.upsert(_pos("B"))

    assert first.id == 1
    assert second.id == 2
    assert first.created_at is not None
    assert first.created_at == first.updated_at
    assert [pos.name for pos in store.get_all()] == ["A", "B"]


def test_in_memory_store_update_keeps_created_at() -> None:
    store = InMemoryPosStore()
    created = store.upsert(_pos("A"))

    created.description = "Updated description"
    updated = store.upsert(created)

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at
    assert store.get_by_id(created.id).description == "Updated description"


def test_in_memory_store_rejects_duplicate_names() -> None:
    store = InMemoryPosStore()
    store.upsert(_pos("A"))
    other = store.upsert(_pos("B"))

    with pytest.raises(DuplicatePosNameError):
        store.upsert(_pos("A"))

    other.name = "A"
    with pytest.raises(DuplicatePosNameError):
        store.upsert(other)


def test_in_memory_store_allows_update_with_unchanged_name() -> None:
    store = InMemoryPosStore()
    created = store.upsert(_pos("A"))

    assert store.upsert(created).name == "A"


def test_in_memory_store_unknown_id_and_clear() -> None:
    store = InMemoryPosStore()
    store.upsert(_pos("A"))

    with pytest.raises(PosNotFoundError):
        store.get_by_id(99)

    store.clear()
    assert store.get_all() == []


def test_in_memory_store_returns_copies() -> None:
    store = InMemoryPosStore()
    created = store.upsert(_pos("A"))

    created.name = "Mutated"

    assert store.get_by_id(created.id).name == "A"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("21a", (21, "a")),
        ("10", (10, None)),
        ("7bc", (7, "b")),
        ("", (None, None)),
    ],
)
def test_split_house_number(value, expected) -> None:
    assert split_house_number(value) == expected


def test_merge_house_number() -> None:
    assert merge_house_number(21, "a") == "21a"
    assert merge_house_number(10, None) == "10"
    assert merge_house_number(None, "a") == "a"
    assert merge_house_number(None, None) is None


def test_row_mapping_splits_and_merges_house_number() -> None:
    stamp = datetime(2025, 10, 1, 12, 0, tzinfo=timezone.utc)
    pos = _pos(house_number="21a")
    pos.id = 3
    pos.created_at = stamp
    pos.updated_at = stamp

    row = pos_to_row(pos)

    assert row["house_number"] == 21
    assert row["house_number_suffix"] == "a"
    assert row["type"] == "CAFE"
    assert row["created_at"] == "2025-10-01T12:00:00+00:00"
    assert pos_from_row(row) == pos


def test_row_mapping_omits_id_for_new_records() -> None:
    assert "id" not in pos_to_row(_pos())
