"""
mappers/restaurant_type_mapper.py
---------------------------------
Data mapper for the `restaurant_types` table.
"""

from typing import Optional

from mappers.base_mapper import AbstractMapper
from models.city import RestaurantType


class RestaurantTypeMapper(AbstractMapper[RestaurantType]):
    """Maps rows of `restaurant_types` to RestaurantType objects."""

    ENTITY_NAME = "RestaurantType"
    TABLE = "restaurant_types"
    SEQUENCE = "seq_restaurant_types"

    FIND_BY_ID = "SELECT id, label, description FROM restaurant_types WHERE id = %s;"
    FIND_ALL = "SELECT id, label, description FROM restaurant_types ORDER BY label;"
    FIND_BY_LABEL = "SELECT id, label, description FROM restaurant_types WHERE UPPER(label) = %s ORDER BY label;"
    INSERT = "INSERT INTO restaurant_types (label, description) VALUES (%s, %s);"
    UPDATE = "UPDATE restaurant_types SET label = %s, description = %s WHERE id = %s;"
    DELETE = "DELETE FROM restaurant_types WHERE id = %s;"

    def find_by_label(self, label: str) -> Optional[RestaurantType]:
        """Type whose label matches `label` case-insensitively, or None."""
        types = self._find_many("FIND RestaurantType by label", self.FIND_BY_LABEL, (label.upper(),))
        return types[0] if types else None

    @staticmethod
    def _row_to_entity(row: tuple) -> RestaurantType:
        return RestaurantType(id=row[0], label=row[1], description=row[2])

    @staticmethod
    def _to_params(restaurant_type: RestaurantType) -> tuple:
        return (restaurant_type.label, restaurant_type.description)
