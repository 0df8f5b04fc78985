"""
models/city.py
--------------
Domain model for cities and restaurant types (simple reference data).
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class City:
    """
    A city restaurants can be located in.

    Attributes:
        zip_code: Postal code (kept as text, e.g. '1000').
        name: City name.
        id: Database primary key (None for new records).
    """
    zip_code: str
    name: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.zip_code} {self.name}"


@dataclass
class RestaurantType:
    """
    A gastronomic category (e.g. 'Pizzeria').

    Attributes:
        label: Short display label, unique.
        description: Longer free-text description.
        id: Database primary key (None for new records).
    """
    label: str
    description: Optional[str] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.label
