"""
mappers/restaurant_mapper.py
----------------------------
Data mapper for the `restaurants` table.
City and type are resolved through their own mappers, so repeated loads of
restaurants in the same city reuse the cached City.
"""

from typing import Optional

from mappers.base_mapper import AbstractMapper
from mappers.city_mapper import CityMapper
from mappers.restaurant_type_mapper import RestaurantTypeMapper
from models.city import City, RestaurantType
from models.restaurant import Restaurant

_COLUMNS = "id, name, street, description, website, type_id, city_id"


class RestaurantMapper(AbstractMapper[Restaurant]):
    """
    Maps rows of `restaurants` to Restaurant objects.

    Evaluations are never loaded here; see PersistenceHelper for eager loads.
    """

    ENTITY_NAME = "Restaurant"
    TABLE = "restaurants"
    SEQUENCE = "seq_restaurants"

    FIND_BY_ID = f"SELECT {_COLUMNS} FROM restaurants WHERE id = %s;"
    FIND_ALL = f"SELECT {_COLUMNS} FROM restaurants ORDER BY name;"
    FIND_BY_NAME = f"SELECT {_COLUMNS} FROM restaurants WHERE UPPER(name) LIKE %s ESCAPE '\\' ORDER BY name;"
    FIND_BY_TYPE = f"SELECT {_COLUMNS} FROM restaurants WHERE type_id = %s ORDER BY name;"
    FIND_BY_CITY = f"SELECT {_COLUMNS} FROM restaurants WHERE city_id = %s ORDER BY name;"
    INSERT = """
        INSERT INTO restaurants (name, street, description, website, type_id, city_id)
        VALUES (%s, %s, %s, %s, %s, %s);
    """
    UPDATE = """
        UPDATE restaurants
        SET name = %s, street = %s, description = %s, website = %s, type_id = %s, city_id = %s
        WHERE id = %s;
    """
    DELETE = "DELETE FROM restaurants WHERE id = %s;"

    def __init__(self, uow, city_mapper: CityMapper, type_mapper: RestaurantTypeMapper):
        super().__init__(uow)
        self.city_mapper = city_mapper
        self.type_mapper = type_mapper

    # ── SEARCH ────────────────────────────────────────────

    def find_by_name_contains(self, name: str) -> list[Restaurant]:
        """
        Restaurants whose name contains `name`, ignoring case.

        Args:
            name: Substring to look for; passed as a bound parameter.
                LIKE wildcards in it match literally.

        Returns:
            Matching restaurants ordered by name.
        """
        escaped = name.upper().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        return self._find_many("FIND Restaurants by name", self.FIND_BY_NAME, (pattern,))

    def find_by_type(self, restaurant_type: Optional[RestaurantType]) -> list[Restaurant]:
        if restaurant_type is None or restaurant_type.id is None:
            return []
        return self.find_by_type_id(restaurant_type.id)

    def find_by_type_id(self, type_id: int) -> list[Restaurant]:
        return self._find_many("FIND Restaurants by type", self.FIND_BY_TYPE, (type_id,))

    def find_by_city(self, city: Optional[City]) -> list[Restaurant]:
        if city is None or city.id is None:
            return []
        return self.find_by_city_id(city.id)

    def find_by_city_id(self, city_id: int) -> list[Restaurant]:
        return self._find_many("FIND Restaurants by city", self.FIND_BY_CITY, (city_id,))

    # ── HELPERS ───────────────────────────────────────────

    def _can_persist(self, restaurant: Restaurant) -> bool:
        """A restaurant may only reference an already persisted city and type."""
        return (
            restaurant.city is not None and restaurant.city.id is not None
            and restaurant.type is not None and restaurant.type.id is not None
        )

    def _row_to_entity(self, row: tuple) -> Restaurant:
        """Convert a database row tuple to a Restaurant, resolving city and type."""
        return Restaurant(
            id=row[0],
            name=row[1],
            street=row[2],
            description=row[3],
            website=row[4],
            type=self.type_mapper.find_by_id(row[5]),
            city=self.city_mapper.find_by_id(row[6]),
        )

    @staticmethod
    def _to_params(restaurant: Restaurant) -> tuple:
        # None is sent as SQL NULL, distinct from an empty string
        return (
            restaurant.name,
            restaurant.street,
            restaurant.description,
            restaurant.website,
            restaurant.type.id,
            restaurant.city.id,
        )
