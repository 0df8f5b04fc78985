"""
mappers/persistence_helper.py
-----------------------------
Operations spanning several tables that no single mapper owns:
eager loading of a restaurant's evaluations, searches returning eagerly
loaded restaurants, and the cascade delete of a restaurant.

Nothing here commits; callers wrap these calls in their unit of work.
"""

from typing import Optional

from mappers.registry import MapperRegistry
from models.city import City, RestaurantType
from models.evaluation import Evaluation
from models.evaluation_criteria import EvaluationCriteria
from models.restaurant import Restaurant
from utils.logger import get_logger

logger = get_logger(__name__)


class PersistenceHelper:
    """Composes the entity mappers for cross-entity loads and deletes."""

    def __init__(self, mappers: MapperRegistry):
        self.mappers = mappers

    # ── EAGER LOADS ───────────────────────────────────────

    def load_restaurant_with_evaluations(self, restaurant_id: int) -> Optional[Restaurant]:
        """
        Load one restaurant and fill its evaluations.

        Returns:
            The restaurant, or None if it does not exist.
        """
        restaurant = self.mappers.restaurants.find_by_id(restaurant_id)
        if restaurant is not None:
            self._load_evaluations(restaurant)
        return restaurant

    def load_all_restaurants_with_evaluations(self) -> list[Restaurant]:
        return self._with_evaluations(self.mappers.restaurants.find_all())

    def search_restaurants_by_name(self, name: str) -> list[Restaurant]:
        """Restaurants whose name contains `name` (case-insensitive)."""
        return self._with_evaluations(self.mappers.restaurants.find_by_name_contains(name))

    def search_restaurants_by_city(self, city_name: str) -> list[Restaurant]:
        """
        Restaurants whose city name contains `city_name` (case-insensitive).

        Filters all restaurants in memory so the lookup reuses the restaurant
        and city mappers instead of a dedicated join query.
        """
        needle = city_name.upper()
        matches = [
            r for r in self.mappers.restaurants.find_all()
            if needle in r.city.name.upper()
        ]
        return self._with_evaluations(matches)

    def search_restaurants_by_type(self, restaurant_type: Optional[RestaurantType]) -> list[Restaurant]:
        return self._with_evaluations(self.mappers.restaurants.find_by_type(restaurant_type))

    def _with_evaluations(self, restaurants: list[Restaurant]) -> list[Restaurant]:
        for restaurant in restaurants:
            self._load_evaluations(restaurant)
        return restaurants

    def _load_evaluations(self, restaurant: Restaurant) -> None:
        """Union of the restaurant's basic and complete evaluations."""
        evaluations: list[Evaluation] = []
        evaluations.extend(self.mappers.basic_evaluations.find_by_restaurant_id(restaurant.id))
        evaluations.extend(self.mappers.complete_evaluations.find_by_restaurant_id(restaurant.id))
        restaurant.evaluations = evaluations
        logger.debug(f"Loaded {len(evaluations)} evaluation(s) for restaurant #{restaurant.id}")

    # ── CASCADE DELETE ────────────────────────────────────

    def delete_restaurant_completely(self, restaurant: Optional[Restaurant]) -> bool:
        """
        Delete a restaurant and every row referencing it.

        Order: complete evaluations (each removing its grades first), basic
        evaluations, then the restaurant. Partial deletions are not undone
        here; the caller's transaction must be rolled back on failure.

        Returns:
            True if the restaurant row was deleted.
        """
        if restaurant is None or restaurant.id is None:
            logger.warning("Attempted to delete a null or unsaved restaurant")
            return False

        for evaluation in self.mappers.complete_evaluations.find_by_restaurant_id(restaurant.id):
            self.mappers.complete_evaluations.delete(evaluation)
        for evaluation in self.mappers.basic_evaluations.find_by_restaurant_id(restaurant.id):
            self.mappers.basic_evaluations.delete(evaluation)

        deleted = self.mappers.restaurants.delete(restaurant)
        if deleted:
            restaurant.evaluations = []
            logger.info(f"Restaurant #{restaurant.id} deleted with all its evaluations")
        return deleted

    # ── REFERENCE DATA ────────────────────────────────────

    def load_all_cities(self) -> list[City]:
        return self.mappers.cities.find_all()

    def load_all_restaurant_types(self) -> list[RestaurantType]:
        return self.mappers.restaurant_types.find_all()

    def load_all_evaluation_criteria(self) -> list[EvaluationCriteria]:
        return self.mappers.criteria.find_all()
