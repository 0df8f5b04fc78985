"""
mappers/city_mapper.py
----------------------
Data mapper for the `cities` table.
"""

from typing import Optional

from mappers.base_mapper import AbstractMapper
from models.city import City


class CityMapper(AbstractMapper[City]):
    """Maps rows of `cities` to City objects."""

    ENTITY_NAME = "City"
    TABLE = "cities"
    SEQUENCE = "seq_cities"

    FIND_BY_ID = "SELECT id, zip_code, name FROM cities WHERE id = %s;"
    FIND_ALL = "SELECT id, zip_code, name FROM cities ORDER BY name;"
    FIND_BY_ZIP_CODE = "SELECT id, zip_code, name FROM cities WHERE zip_code = %s ORDER BY name;"
    INSERT = "INSERT INTO cities (zip_code, name) VALUES (%s, %s);"
    UPDATE = "UPDATE cities SET zip_code = %s, name = %s WHERE id = %s;"
    DELETE = "DELETE FROM cities WHERE id = %s;"

    def find_by_zip_code(self, zip_code: str) -> Optional[City]:
        """First city with the given postal code, or None."""
        cities = self._find_many("FIND City by zip code", self.FIND_BY_ZIP_CODE, (zip_code,))
        return cities[0] if cities else None

    @staticmethod
    def _row_to_entity(row: tuple) -> City:
        """Convert a database row tuple to a City domain object."""
        return City(id=row[0], zip_code=row[1], name=row[2])

    @staticmethod
    def _to_params(city: City) -> tuple:
        return (city.zip_code, city.name)
