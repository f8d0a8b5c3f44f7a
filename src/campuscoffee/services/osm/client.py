"""Clients that fetch OpenStreetMap nodes."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree

import httpx

from ...config import Settings, settings
from ...exceptions import OsmNodeMissingFieldsError, OsmNodeNotFoundError
from ...models.domain import OsmNode

logger = logging.getLogger(__name__)

STUB_NODE_ID = 5589879349
_STUB_NODES: dict[int, dict[str, str]] = {
    STUB_NODE_ID: {
        "name": "Rada Coffee & Rösterei",
        "description": "Caffé und Rösterei",
        "amenity": "cafe",
        "addr:street": "Untere Straße",
        "addr:housenumber": "21",
        "addr:postcode": "69117",
        "addr:city": "Heidelberg",
    },
}


class StubOsmClient:
    """Offline node source with a single known node, for development and tests."""

    def fetch_node(self, node_id: int) -> OsmNode:
        logger.warning("Using stub OSM client - returning hardcoded data for node %s", node_id)
        tags = _STUB_NODES.get(node_id)
        if tags is None:
            raise OsmNodeNotFoundError(node_id)
        return OsmNode(node_id=node_id, tags=dict(tags))


class OsmHttpClient:
    """Fetches nodes from the OSM editing API (``/node/{id}``, XML)."""

    def __init__(
        self,
        base_url: str | None = None,
        user_agent: str | None = None,
        connect_timeout: float | None = None,
        request_timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.osm_api_base_url).rstrip("/")
        self.user_agent = user_agent or settings.osm_user_agent
        self.connect_timeout = connect_timeout if connect_timeout is not None else settings.osm_connect_timeout_seconds
        self.request_timeout = request_timeout if request_timeout is not None else settings.osm_request_timeout_seconds
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(
            timeout=httpx.Timeout(self.request_timeout, connect=self.connect_timeout),
            headers={"User-Agent": self.user_agent},
            transport=self._transport,
        )

    def fetch_node(self, node_id: int) -> OsmNode:
        url = f"{self.base_url}/node/{node_id}"
        logger.info("Fetching OSM node %s via HTTP from %s", node_id, url)

        try:
            with self._get_client() as client:
                response = client.get(url)
        except httpx.HTTPError as exc:
            # An unreachable upstream is reported as a missing node
            logger.error("HTTP request to OSM failed for node %s: %s", node_id, exc)
            raise OsmNodeNotFoundError(node_id) from exc

        if response.status_code in (404, 410):
            raise OsmNodeNotFoundError(node_id)
        if not response.is_success:
            logger.error(
                "Unexpected HTTP status %s from OSM for node %s: %s",
                response.status_code,
                node_id,
                response.text,
            )
            raise OsmNodeNotFoundError(node_id)

        try:
            tags = parse_tags_from_osm_xml(response.content)
        except ElementTree.ParseError as exc:
            logger.warning("Failed to parse OSM XML for node %s: %s", node_id, exc)
            raise OsmNodeMissingFieldsError(node_id) from exc
        return OsmNode(node_id=node_id, tags=tags)


def parse_tags_from_osm_xml(payload: bytes | str) -> dict[str, str]:
    """Collect every ``<tag k=".." v=".."/>`` element of an OSM XML document."""
    root = ElementTree.fromstring(payload)
    tags: dict[str, str] = {}
    for element in root.iter("tag"):
        key = element.get("k")
        value = element.get("v")
        if key is not None and value is not None:
            tags[key] = value
    return tags


def build_osm_client(config: Settings | None = None) -> StubOsmClient | OsmHttpClient:
    config = config or settings
    if config.osm_source == "http":
        return OsmHttpClient(
            base_url=config.osm_api_base_url,
            user_agent=config.osm_user_agent,
            connect_timeout=config.osm_connect_timeout_seconds,
            request_timeout=config.osm_request_timeout_seconds,
        )
    return StubOsmClient()
