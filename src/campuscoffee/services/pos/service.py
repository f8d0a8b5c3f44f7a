"""Point-of-sale business logic."""

from __future__ import annotations

import logging
from typing import Protocol

from ...config import Settings, settings
from ...exceptions import DuplicatePosNameError
from ...models.domain import OsmNode, Pos
from ...persistence.pos import build_pos_store
from ..osm.client import build_osm_client
from ..osm.mapping import convert_osm_node_to_pos

logger = logging.getLogger(__name__)


class PosStore(Protocol):
    def clear(self) -> None: ...

    def get_all(self) -> list[Pos]: ...

    def get_by_id(self, pos_id: int) -> Pos: ...

    def upsert(self, pos: Pos) -> Pos: ...


class OsmNodeFetcher(Protocol):
    def fetch_node(self, node_id: int) -> OsmNode: ...


class PosService:
    """Coordinates the POS store and the OSM node source."""

    def __init__(self, store: PosStore, osm_client: OsmNodeFetcher) -> None:
        self.store = store
        self.osm_client = osm_client

    def clear(self) -> None:
        logger.warning("Clearing all POS data")
        self.store.clear()

    def get_all(self) -> list[Pos]:
        logger.debug("Retrieving all POS")
        return self.store.get_all()

    def get_by_id(self, pos_id: int) -> Pos:
        logger.debug("Retrieving POS with ID: %s", pos_id)
        return self.store.get_by_id(pos_id)

    def upsert(self, pos: Pos) -> Pos:
        """Create ``pos`` when it has no id, otherwise update the existing record.

        Raises:
            PosNotFoundError: when updating an id that does not exist.
            DuplicatePosNameError: when another record already has the name.
        """
        if pos.id is None:
            logger.info("Creating new POS: %s", pos.name)
        else:
            logger.info("Updating POS with ID: %s", pos.id)
            # The record must exist before it can be updated
            self.store.get_by_id(pos.id)
        return self._perform_upsert(pos)

    def import_from_osm_node(self, node_id: int) -> Pos:
        logger.info("Importing POS from OpenStreetMap node %s...", node_id)
        node = self.osm_client.fetch_node(node_id)
        saved = self.upsert(convert_osm_node_to_pos(node))
        logger.info("Successfully imported POS '%s' from OSM node %s", saved.name, node_id)
        return saved

    def _perform_upsert(self, pos: Pos) -> Pos:
        try:
            saved = self.store.upsert(pos)
        except DuplicatePosNameError as exc:
            logger.error("Error upserting POS '%s': %s", pos.name, exc)
            raise
        logger.info("Successfully upserted POS with ID: %s", saved.id)
        return saved


def build_pos_service(config: Settings | None = None) -> PosService:
    config = config or settings
    return PosService(store=build_pos_store(config), osm_client=build_osm_client(config))
