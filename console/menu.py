"""
console/menu.py
---------------
Interactive text menus. Each action reads input, delegates to a service and
prints the outcome; no business logic lives here.
"""

from typing import Callable, Optional, Sequence, TypeVar

from mappers.exceptions import PersistenceError
from models.city import City, RestaurantType
from models.evaluation import CompleteEvaluation
from models.restaurant import Restaurant
from services.evaluation_service import EvaluationService
from services.restaurant_service import RestaurantService

T = TypeVar("T")

LINE = "=" * 60

# Answer that clears an optional field when editing.
CLEAR = "-"


class ConsoleApp:
    """Main menu loop of the restaurant guide."""

    def __init__(
        self,
        restaurants: RestaurantService,
        evaluations: EvaluationService,
        read: Callable[[str], str] = input,
        write: Callable[[str], None] = print,
    ):
        self.restaurants = restaurants
        self.evaluations = evaluations
        self.read = read
        self.write = write

    def run(self) -> None:
        self.write(LINE)
        self.write("Welcome to GuideResto! Choose an option:")
        actions = {
            1: self.show_restaurants,
            2: self.search_by_name,
            3: self.search_by_city,
            4: self.search_by_type,
            5: self.add_restaurant,
        }
        while True:
            self.write(LINE)
            self.write("1. List all restaurants")
            self.write("2. Search restaurants by name")
            self.write("3. Search restaurants by city")
            self.write("4. Search restaurants by type")
            self.write("5. Add a restaurant")
            self.write("0. Quit")
            choice = self.read_int()
            if choice == 0:
                self.write("Goodbye!")
                return
            action = actions.get(choice)
            if action is None:
                self.write("Invalid choice, try again.")
                continue
            try:
                action()
            except PersistenceError as e:
                self.write(f"Error: {e}")

    # ── LISTS & SEARCHES ──────────────────────────────────

    def show_restaurants(self) -> None:
        self.pick_and_show(self.restaurants.get_all_restaurants_with_evaluations())

    def search_by_name(self) -> None:
        name = self.read("Part of the restaurant name: ")
        self.pick_and_show(self.restaurants.search_restaurants_by_name(name))

    def search_by_city(self) -> None:
        city_name = self.read("Part of the city name: ")
        self.pick_and_show(self.restaurants.search_restaurants_by_city(city_name))

    def search_by_type(self) -> None:
        restaurant_type = self.pick(self.restaurants.get_all_restaurant_types(), str)
        if restaurant_type is not None:
            self.pick_and_show(self.restaurants.search_restaurants_by_type(restaurant_type))

    def pick_and_show(self, restaurants: list[Restaurant]) -> None:
        restaurant = self.pick(restaurants, str)
        if restaurant is not None:
            self.restaurant_menu(restaurant)

    # ── CREATION ──────────────────────────────────────────

    def add_restaurant(self) -> None:
        name = self.read("Name: ").strip()
        description = self.read("Description (optional): ").strip() or None
        website = self.read("Website (optional): ").strip() or None
        street = self.read("Street: ").strip()
        city = self.pick_or_create_city()
        if city is None:
            return
        restaurant_type = self.pick(self.restaurants.get_all_restaurant_types(), str)
        if restaurant_type is None:
            return
        restaurant = Restaurant(
            name=name, street=street, city=city, type=restaurant_type,
            description=description, website=website,
        )
        if self.restaurants.create_restaurant(restaurant) is None:
            self.write("Error: the restaurant could not be saved.")
            return
        self.restaurant_menu(restaurant)

    def pick_or_create_city(self) -> Optional[City]:
        self.write("Pick a city, or 0 to create a new one:")
        cities = self.restaurants.get_all_cities()
        city = self.pick(cities, str, allow_none=False)
        if city is not None:
            return city
        zip_code = self.read("Postal code: ").strip()
        name = self.read("City name: ").strip()
        created = self.restaurants.create_city(City(zip_code=zip_code, name=name))
        if created is None:
            self.write("Error: the city could not be saved.")
        return created

    # ── RESTAURANT DETAIL ─────────────────────────────────

    def restaurant_menu(self, restaurant: Restaurant) -> None:
        while True:
            self.show_restaurant(restaurant)
            self.write("1. Like  2. Dislike  3. Full evaluation  4. Edit  5. Delete  0. Back")
            choice = self.read_int()
            if choice == 0:
                return
            if choice in (1, 2):
                saved = self.evaluations.add_basic_evaluation(restaurant, like=choice == 1)
                self.write("Your vote has been recorded!" if saved else "Error while recording the vote.")
            elif choice == 3:
                self.evaluate(restaurant)
            elif choice == 4:
                self.edit(restaurant)
            elif choice == 5:
                if self.restaurants.delete_restaurant(restaurant):
                    self.write("Restaurant deleted.")
                    return
                self.write("Error: the restaurant could not be deleted.")

    def show_restaurant(self, restaurant: Restaurant) -> None:
        self.write(LINE)
        self.write(restaurant.name)
        self.write(restaurant.description or "")
        self.write(f"Type: {restaurant.type.label}")
        self.write(f"Website: {restaurant.website or '-'}")
        self.write(f"Address: {restaurant.street}, {restaurant.city}")
        self.write(f"Likes: {restaurant.count_likes(True)}  Dislikes: {restaurant.count_likes(False)}")
        for evaluation in restaurant.evaluations:
            if isinstance(evaluation, CompleteEvaluation):
                self.write(f"  {evaluation}")
                for grade in evaluation.grades:
                    self.write(f"    {grade}")

    def evaluate(self, restaurant: Restaurant) -> None:
        all_criteria = self.evaluations.get_all_evaluation_criteria()
        if not all_criteria:
            self.write("Error: no evaluation criteria available.")
            return
        username = self.read("Your name: ")
        comment = self.read("Comment: ").strip() or None
        grades = []
        for criteria in all_criteria:
            self.write(f"{criteria.name} ({criteria.description or ''}) - grade from 1 to 5:")
            grades.append((criteria, self.read_int()))
        saved = self.evaluations.add_complete_evaluation(restaurant, username, comment, grades)
        self.write("Thank you, your evaluation has been saved!" if saved else "Error while saving the evaluation.")

    def edit(self, restaurant: Restaurant) -> None:
        """Edit in place; the previous values come back if the update fails."""
        previous = (
            restaurant.name, restaurant.description, restaurant.website,
            restaurant.street, restaurant.type,
        )
        self.write(f"Empty keeps the current value, '{CLEAR}' clears an optional one.")
        restaurant.name = self.read(f"Name [{restaurant.name}]: ").strip() or restaurant.name
        restaurant.description = self.read_optional("Description", restaurant.description)
        restaurant.website = self.read_optional("Website", restaurant.website)
        restaurant.street = self.read(f"Street [{restaurant.street}]: ").strip() or restaurant.street
        restaurant_type: Optional[RestaurantType] = self.pick(
            self.restaurants.get_all_restaurant_types(), str
        )
        if restaurant_type is not None:
            restaurant.type = restaurant_type
        if self.restaurants.update_restaurant(restaurant):
            self.write("Restaurant updated.")
            return
        (
            restaurant.name, restaurant.description, restaurant.website,
            restaurant.street, restaurant.type,
        ) = previous
        self.write("Error: the restaurant could not be updated.")

    # ── INPUT HELPERS ─────────────────────────────────────

    def pick(self, items: Sequence[T], label: Callable[[T], str], allow_none: bool = True) -> Optional[T]:
        """Number the items, read a choice; 0 (or an empty list) gives None."""
        if not items:
            self.write("Nothing found.")
            return None
        for index, item in enumerate(items, start=1):
            self.write(f"{index}. {label(item)}")
        if allow_none:
            self.write("0. Back")
        choice = self.read_int()
        if 1 <= choice <= len(items):
            return items[choice - 1]
        return None

    def read_optional(self, label: str, current: Optional[str]) -> Optional[str]:
        raw = self.read(f"{label} [{current or ''}]: ").strip()
        if raw == CLEAR:
            return None
        return raw or current

    def read_int(self) -> int:
        while True:
            raw = self.read("> ").strip()
            try:
                return int(raw)
            except ValueError:
                self.write("Error: please enter a whole number.")
