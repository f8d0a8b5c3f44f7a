"""OpenStreetMap import helpers."""

from .client import OsmHttpClient, StubOsmClient, build_osm_client
from .mapping import convert_osm_node_to_pos

__all__ = [
    "OsmHttpClient",
    "StubOsmClient",
    "build_osm_client",
    "convert_osm_node_to_pos",
]
