"""Domain errors and failure typing."""


class CampusCoffeeError(Exception):
    """Base class for domain failures surfaced to API clients."""

    error_code = "CAMPUSCOFFEE_ERROR"
    status_code = 500


class PosNotFoundError(CampusCoffeeError):
    """Raised when no point of sale exists for an id."""

    error_code = "POS_NOT_FOUND"
    status_code = 404

    def __init__(self, pos_id: int) -> None:
        super().__init__(f"POS with ID {pos_id} does not exist.")
        self.pos_id = pos_id


class DuplicatePosNameError(CampusCoffeeError):
    """Raised by a store when another point of sale already uses the name."""

    error_code = "DUPLICATE_POS_NAME"
    status_code = 409

    def __init__(self, name: str) -> None:
        super().__init__(f"POS with name '{name}' already exists.")
        self.name = name


class OsmNodeNotFoundError(CampusCoffeeError):
    """Raised when an OSM node cannot be fetched."""

    error_code = "OSM_NODE_NOT_FOUND"
    status_code = 404

    def __init__(self, node_id: int) -> None:
        super().__init__(f"OpenStreetMap node with ID {node_id} does not exist.")
        self.node_id = node_id


class OsmNodeMissingFieldsError(CampusCoffeeError):
    """Raised when an OSM node lacks (or has unusable) required tags."""

    error_code = "OSM_NODE_MISSING_FIELDS"
    status_code = 400

    def __init__(self, node_id: int) -> None:
        super().__init__(f"OpenStreetMap node with ID {node_id} is missing required fields.")
        self.node_id = node_id
