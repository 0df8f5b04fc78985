"""
services/restaurant_service.py
------------------------------
Business logic for restaurants, cities and restaurant types.
Every write runs as one unit of work: committed on success, rolled back on
failure. A failed read is rolled back too and yields an empty result.
"""

from typing import Optional

from mappers.persistence_helper import PersistenceHelper
from mappers.registry import MapperRegistry
from models.city import City, RestaurantType
from models.restaurant import Restaurant
from services.base_service import BaseService
from utils.logger import get_logger

logger = get_logger(__name__)


class RestaurantService(BaseService):
    """Restaurant catalogue operations used by the console."""

    def __init__(self, mappers: MapperRegistry, helper: Optional[PersistenceHelper] = None):
        super().__init__(mappers)
        self.helper = helper or PersistenceHelper(mappers)

    # ── QUERIES ───────────────────────────────────────────

    def get_all_restaurants_with_evaluations(self) -> list[Restaurant]:
        logger.info("Loading all restaurants with their evaluations")
        return self._read(self.helper.load_all_restaurants_with_evaluations, "Load restaurants", [])

    def get_restaurant(self, restaurant_id: int) -> Optional[Restaurant]:
        return self._read(
            lambda: self.helper.load_restaurant_with_evaluations(restaurant_id), "Load restaurant", None
        )

    def search_restaurants_by_name(self, name: str) -> list[Restaurant]:
        if name is None:
            raise ValueError("Search name must not be None")
        logger.info(f"Searching restaurants by name: {name!r}")
        return self._read(lambda: self.helper.search_restaurants_by_name(name), "Search by name", [])

    def search_restaurants_by_city(self, city_name: str) -> list[Restaurant]:
        if city_name is None:
            raise ValueError("City name must not be None")
        logger.info(f"Searching restaurants by city: {city_name!r}")
        return self._read(lambda: self.helper.search_restaurants_by_city(city_name), "Search by city", [])

    def search_restaurants_by_type(self, restaurant_type: RestaurantType) -> list[Restaurant]:
        if restaurant_type is None:
            raise ValueError("Restaurant type must not be None")
        logger.info(f"Searching restaurants by type: {restaurant_type.label}")
        return self._read(
            lambda: self.helper.search_restaurants_by_type(restaurant_type), "Search by type", []
        )

    def get_all_cities(self) -> list[City]:
        return self._read(self.helper.load_all_cities, "Load cities", [])

    def get_all_restaurant_types(self) -> list[RestaurantType]:
        return self._read(self.helper.load_all_restaurant_types, "Load restaurant types", [])

    # ── WRITES ────────────────────────────────────────────

    def create_restaurant(self, restaurant: Restaurant) -> Optional[Restaurant]:
        """Persist a new restaurant. Returns it with its id, or None."""
        if restaurant is None:
            logger.warning("Attempted to create a null restaurant")
            return None
        logger.info(f"Creating restaurant '{restaurant.name}'")
        return self._run(lambda: self.mappers.restaurants.create(restaurant), "Create restaurant")

    def update_restaurant(self, restaurant: Restaurant) -> bool:
        if restaurant is None or restaurant.id is None:
            logger.warning("Attempted to update a null or unsaved restaurant")
            return False
        logger.info(f"Updating restaurant #{restaurant.id}")
        return bool(self._run(lambda: self.mappers.restaurants.update(restaurant), "Update restaurant"))

    def delete_restaurant(self, restaurant: Restaurant) -> bool:
        """Delete a restaurant together with all its evaluations and grades."""
        if restaurant is None or restaurant.id is None:
            logger.warning("Attempted to delete a null or unsaved restaurant")
            return False
        logger.info(f"Deleting restaurant #{restaurant.id} '{restaurant.name}'")
        return bool(self._run(
            lambda: self.helper.delete_restaurant_completely(restaurant), "Delete restaurant"
        ))

    def create_city(self, city: City) -> Optional[City]:
        if city is None:
            logger.warning("Attempted to create a null city")
            return None
        logger.info(f"Creating city {city.zip_code} {city.name}")
        return self._run(lambda: self.mappers.cities.create(city), "Create city")
