"""
mappers/registry.py
-------------------
Builds the full set of mappers against one unit of work.

Mappers are plain instances wired explicitly: each one receives the mappers
it resolves foreign keys through. One registry means one set of identity
maps, i.e. one session.
"""

from dataclasses import dataclass

from db.unit_of_work import UnitOfWork
from mappers.basic_evaluation_mapper import BasicEvaluationMapper
from mappers.city_mapper import CityMapper
from mappers.complete_evaluation_mapper import CompleteEvaluationMapper
from mappers.evaluation_criteria_mapper import EvaluationCriteriaMapper
from mappers.grade_mapper import GradeMapper
from mappers.restaurant_mapper import RestaurantMapper
from mappers.restaurant_type_mapper import RestaurantTypeMapper
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class MapperRegistry:
    """Every entity mapper of one session."""
    uow: UnitOfWork
    cities: CityMapper
    restaurant_types: RestaurantTypeMapper
    criteria: EvaluationCriteriaMapper
    restaurants: RestaurantMapper
    grades: GradeMapper
    basic_evaluations: BasicEvaluationMapper
    complete_evaluations: CompleteEvaluationMapper

    @classmethod
    def build(cls, uow: UnitOfWork) -> "MapperRegistry":
        """
        Construct and wire every mapper.

        Caches are cleared whenever the unit of work rolls back, since
        entities created or modified in the aborted transaction no longer
        match the database.
        """
        cities = CityMapper(uow)
        restaurant_types = RestaurantTypeMapper(uow)
        criteria = EvaluationCriteriaMapper(uow)
        restaurants = RestaurantMapper(uow, cities, restaurant_types)
        grades = GradeMapper(uow, criteria)
        registry = cls(
            uow=uow,
            cities=cities,
            restaurant_types=restaurant_types,
            criteria=criteria,
            restaurants=restaurants,
            grades=grades,
            basic_evaluations=BasicEvaluationMapper(uow, restaurants),
            complete_evaluations=CompleteEvaluationMapper(uow, restaurants, grades),
        )
        uow.on_rollback(registry.reset_caches)
        return registry

    def all(self) -> list:
        return [
            self.cities, self.restaurant_types, self.criteria, self.restaurants,
            self.grades, self.basic_evaluations, self.complete_evaluations,
        ]

    def reset_caches(self) -> None:
        for mapper in self.all():
            mapper.reset_cache()
        logger.debug("All mapper caches cleared")
