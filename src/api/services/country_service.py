"""
Country list shown on the guest registration form.
"""
from typing import Dict, Any, List, Optional

from ...firebase_sync.firestore_client import FirestoreClient
from ...utils.errors import InvalidArgumentError, NotFoundError
from ...utils.models import Country


class CountryService:
    """Service for managing the country options."""

    def __init__(self, firestore_client: FirestoreClient, logger):
        self.firestore_client = firestore_client
        self.logger = logger

    def list_countries(self) -> List[Dict[str, Any]]:
        return [country.to_api() for country in self.firestore_client.list_countries()]

    def create_country(self, name: str, code: str) -> Dict[str, Any]:
        country = Country(name=name, code=code)
        if not country.name or not country.code:
            raise InvalidArgumentError("Country name and code are required.")
        country = self.firestore_client.create_country(country)
        self.logger.info("Country created", country_id=country.id, code=country.code)
        return country.to_api()

    def update_country(self, country_id: str, name: Optional[str] = None,
                       code: Optional[str] = None) -> Dict[str, Any]:
        updates = {}
        if name is not None and name.strip():
            updates['name'] = name.strip()
        if code is not None and code.strip():
            updates['code'] = code.strip().upper()
        if not updates:
            raise InvalidArgumentError("Country name or code is required.")
        if not self.firestore_client.update_country(country_id, updates):
            raise NotFoundError(f"Country with ID {country_id} not found.",
                                details={"country_id": country_id})
        return {"id": country_id, **updates}

    def delete_country(self, country_id: str) -> bool:
        existed = self.firestore_client.delete_country(country_id)
        if not existed:
            self.logger.warning("Delete request for non-existent country", country_id=country_id)
        return existed
