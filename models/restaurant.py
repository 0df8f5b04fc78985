"""
models/restaurant.py
--------------------
Domain model for restaurants.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from models.city import City, RestaurantType

if TYPE_CHECKING:
    from models.evaluation import Evaluation


@dataclass
class Restaurant:
    """
    A catalogued restaurant.

    Attributes:
        name: Restaurant name.
        street: Street address.
        city: Owning City (must be persisted before the restaurant).
        type: Owning RestaurantType (must be persisted before the restaurant).
        description: Optional free-text description.
        website: Optional website URL.
        id: Database primary key (None for new records).
        evaluations: Basic and complete evaluations. Only filled by an
            explicit eager load, never automatically.
    """
    name: str
    street: str
    city: City
    type: RestaurantType
    description: Optional[str] = None
    website: Optional[str] = None
    id: Optional[int] = None
    evaluations: list["Evaluation"] = field(default_factory=list, repr=False, compare=False)

    def count_likes(self, like: bool) -> int:
        """Number of basic evaluations with the given like flag."""
        return sum(
            1 for e in self.evaluations
            if getattr(e, "like", None) is like
        )

    def __str__(self) -> str:
        return f"{self.name} - {self.street}, {self.city}"
