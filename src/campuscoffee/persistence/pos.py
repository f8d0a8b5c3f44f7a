"""Point-of-sale stores.

Every store exposes the same four operations: ``upsert``, ``get_by_id``,
``get_all`` and ``clear``. Stores own the record lifecycle: they assign the
id and both timestamps on creation, and on update keep ``id``/``created_at``
while refreshing ``updated_at``. Names are unique across all records.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import datetime, timezone
from typing import Any

from supabase import Client, PostgrestAPIError

from ..config import Settings, settings
from ..db.supabase import get_supabase_client
from ..exceptions import DuplicatePosNameError, PosNotFoundError
from ..models.domain import CampusType, Pos, PosType

logger = logging.getLogger(__name__)

# Postgres unique_violation
_UNIQUE_VIOLATION = "23505"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def split_house_number(house_number: str | None) -> tuple[int | None, str | None]:
    """Split ``"21a"`` into ``(21, "a")``; only the first suffix character is kept."""
    if not house_number:
        return None, None
    digits = "".join(ch for ch in house_number if ch.isdigit())
    rest = "".join(ch for ch in house_number if not ch.isdigit())
    return (int(digits) if digits else None), (rest[0] if rest else None)


def merge_house_number(number: int | None, suffix: str | None) -> str | None:
    if number is None:
        # Letter-only house numbers survive as their suffix
        return suffix
    return f"{number}{suffix or ''}"


def pos_to_row(pos: Pos) -> dict[str, Any]:
    """Serialize a POS into a table row (house number split into number + suffix)."""
    number, suffix = split_house_number(pos.house_number)
    row: dict[str, Any] = {
        "name": pos.name,
        "description": pos.description,
        "type": pos.type.value,
        "campus": pos.campus.value,
        "street": pos.street,
        "house_number": number,
        "house_number_suffix": suffix,
        "postal_code": pos.postal_code,
        "city": pos.city,
        "created_at": pos.created_at.isoformat() if pos.created_at else None,
        "updated_at": pos.updated_at.isoformat() if pos.updated_at else None,
    }
    if pos.id is not None:
        row["id"] = pos.id
    return row


def _parse_timestamp(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def pos_from_row(row: dict[str, Any]) -> Pos:
    return Pos(
        id=int(row["id"]),
        name=row["name"],
        description=row.get("description") or "",
        type=PosType(row["type"]),
        campus=CampusType(row["campus"]),
        street=row["street"],
        house_number=merge_house_number(row.get("house_number"), row.get("house_number_suffix")) or "",
        postal_code=int(row["postal_code"]),
        city=row["city"],
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


class InMemoryPosStore:
    """Process-local store used when no database is configured."""

    def __init__(self) -> None:
        self._records: dict[int, Pos] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def get_all(self) -> list[Pos]:
        with self._lock:
            return [dataclasses.replace(pos) for pos in self._records.values()]

    def get_by_id(self, pos_id: int) -> Pos:
        with self._lock:
            pos = self._records.get(pos_id)
            if pos is None:
                raise PosNotFoundError(pos_id)
            return dataclasses.replace(pos)

    def upsert(self, pos: Pos) -> Pos:
        with self._lock:
            if any(existing.name == pos.name and existing.id != pos.id for existing in self._records.values()):
                raise DuplicatePosNameError(pos.name)

            now = _utcnow()
            if pos.id is None:
                stored = dataclasses.replace(pos, id=self._next_id, created_at=now, updated_at=now)
                self._next_id += 1
            else:
                current = self._records.get(pos.id)
                if current is None:
                    raise PosNotFoundError(pos.id)
                stored = dataclasses.replace(pos, created_at=current.created_at, updated_at=now)
            self._records[stored.id] = stored
            return dataclasses.replace(stored)


class SupabasePosStore:
    """Store backed by a Supabase (PostgREST) table with a unique ``name`` column."""

    def __init__(self, client: Client, table: str | None = None) -> None:
        self.client = client
        self.table = table or settings.supabase_pos_table

    def clear(self) -> None:
        # PostgREST refuses unfiltered deletes
        self.client.table(self.table).delete().gte("id", 0).execute()

    def get_all(self) -> list[Pos]:
        response = self.client.table(self.table).select("*").order("id").execute()
        return [pos_from_row(row) for row in (response.data or [])]

    def get_by_id(self, pos_id: int) -> Pos:
        response = self.client.table(self.table).select("*").eq("id", pos_id).limit(1).execute()
        if not response.data:
            raise PosNotFoundError(pos_id)
        return pos_from_row(response.data[0])

    def upsert(self, pos: Pos) -> Pos:
        now = _utcnow()
        try:
            if pos.id is None:
                row = pos_to_row(dataclasses.replace(pos, created_at=now, updated_at=now))
                response = self.client.table(self.table).insert(row).execute()
            else:
                current = self.get_by_id(pos.id)
                row = pos_to_row(dataclasses.replace(pos, created_at=current.created_at, updated_at=now))
                row.pop("id")
                response = self.client.table(self.table).update(row).eq("id", pos.id).execute()
        except PostgrestAPIError as exc:
            if exc.code == _UNIQUE_VIOLATION:
                raise DuplicatePosNameError(pos.name) from exc
            raise

        if not response.data:
            if pos.id is not None:
                raise PosNotFoundError(pos.id)
            raise RuntimeError(f"Supabase returned no row for inserted POS '{pos.name}'")
        return pos_from_row(response.data[0])


def build_pos_store(config: Settings | None = None) -> InMemoryPosStore | SupabasePosStore:
    """Pick the Supabase store when credentials are configured, else keep data in memory."""
    config = config or settings
    client = get_supabase_client() if config.supabase_configured else None
    if client is None:
        logger.info("Supabase not configured - POS data will be kept in memory")
        return InMemoryPosStore()
    return SupabasePosStore(client, table=config.supabase_pos_table)
