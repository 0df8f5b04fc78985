"""
Shared pytest fixtures.

Every test gets a fresh in-memory database (tests/fake_db.py) wired to the
real UnitOfWork, mapper registry and services, so the production SQL and
mapping code is exercised end to end without a PostgreSQL server.
"""

import pytest

from db.unit_of_work import UnitOfWork
from mappers.persistence_helper import PersistenceHelper
from mappers.registry import MapperRegistry
from models.city import City, RestaurantType
from models.evaluation_criteria import EvaluationCriteria
from models.restaurant import Restaurant
from services.evaluation_service import EvaluationService
from services.restaurant_service import RestaurantService
from tests.fake_db import FakeDatabase, FakeProvider


@pytest.fixture
def db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def uow(db) -> UnitOfWork:
    return UnitOfWork(FakeProvider(db))


@pytest.fixture
def mappers(uow) -> MapperRegistry:
    return MapperRegistry.build(uow)


@pytest.fixture
def helper(mappers) -> PersistenceHelper:
    return PersistenceHelper(mappers)


@pytest.fixture
def restaurant_service(mappers, helper) -> RestaurantService:
    return RestaurantService(mappers, helper)


@pytest.fixture
def evaluation_service(mappers) -> EvaluationService:
    return EvaluationService(mappers)


# -------------------------------
# Seed data
# -------------------------------

@pytest.fixture
def lausanne(mappers) -> City:
    return mappers.cities.create(City(zip_code="1000", name="Lausanne"))


@pytest.fixture
def neuchatel(mappers) -> City:
    return mappers.cities.create(City(zip_code="2000", name="Neuchâtel"))


@pytest.fixture
def pizzeria(mappers) -> RestaurantType:
    return mappers.restaurant_types.create(RestaurantType(label="Pizzeria", description="Italian pizzas"))


@pytest.fixture
def brasserie(mappers) -> RestaurantType:
    return mappers.restaurant_types.create(RestaurantType(label="Brasserie", description="Swiss brasserie"))


@pytest.fixture
def criteria(mappers) -> list[EvaluationCriteria]:
    return [
        mappers.criteria.create(EvaluationCriteria(name="Service", description="Quality of service")),
        mappers.criteria.create(EvaluationCriteria(name="Cuisine", description="Quality of the food")),
        mappers.criteria.create(EvaluationCriteria(name="Setting", description="Decor and ambience")),
    ]


@pytest.fixture
def roma(mappers, lausanne, pizzeria) -> Restaurant:
    return mappers.restaurants.create(Restaurant(
        name="Pizzeria Roma",
        street="Rue du Port 1",
        city=lausanne,
        type=pizzeria,
        description="Wood-fired pizzas",
        website="https://roma.example.ch",
    ))


@pytest.fixture
def cafe(mappers, neuchatel, brasserie) -> Restaurant:
    return mappers.restaurants.create(Restaurant(
        name="Café du Lac",
        street="Quai Ostervald 4",
        city=neuchatel,
        type=brasserie,
    ))
