from typing import Dict, Any, List

from ...firebase_sync.firestore_client import FirestoreClient
from ...utils.errors import InvalidArgumentError, NotFoundError
from ...utils.models import Property


class PropertyService:
    """Service for managing property operations."""

    def __init__(self, firestore_client: FirestoreClient, logger):
        self.firestore_client = firestore_client
        self.logger = logger

    def list_properties(self) -> List[Dict[str, Any]]:
        return [prop.to_api() for prop in self.firestore_client.list_properties()]

    def create_property(self, name: str) -> Dict[str, Any]:
        name = (name or "").strip()
        if not name:
            raise InvalidArgumentError("Property name is required.")
        prop = self.firestore_client.create_property(Property(name=name))
        self.logger.info("Property created", property_id=prop.id, name=name)
        return prop.to_api()

    def rename_property(self, property_id: str, name: str) -> Dict[str, Any]:
        name = (name or "").strip()
        if not name:
            raise InvalidArgumentError("Property name is required.")
        if not self.firestore_client.update_property(property_id, {"name": name}):
            raise NotFoundError(f"Property with ID {property_id} not found.",
                                details={"property_id": property_id})
        return {"id": property_id, "name": name}

    def delete_property(self, property_id: str) -> bool:
        """Delete a property. Bookings keep the property name they were created with."""
        existed = self.firestore_client.delete_property(property_id)
        if not existed:
            self.logger.warning("Delete request for non-existent property", property_id=property_id)
        return existed
