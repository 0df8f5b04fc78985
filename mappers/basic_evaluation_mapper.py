"""
mappers/basic_evaluation_mapper.py
----------------------------------
Data mapper for the `basic_evaluations` table (like / dislike votes).
The like flag is stored as a single character: 'T' for a like, 'F' for a
dislike.
"""

from mappers.base_mapper import AbstractMapper
from mappers.restaurant_mapper import RestaurantMapper
from models.evaluation import BasicEvaluation

LIKE = "T"
DISLIKE = "F"

_COLUMNS = "id, appreciation, visit_date, ip_address, restaurant_id"


class BasicEvaluationMapper(AbstractMapper[BasicEvaluation]):
    """Maps rows of `basic_evaluations` to BasicEvaluation objects."""

    ENTITY_NAME = "BasicEvaluation"
    TABLE = "basic_evaluations"
    SEQUENCE = "seq_evaluations"

    FIND_BY_ID = f"SELECT {_COLUMNS} FROM basic_evaluations WHERE id = %s;"
    FIND_ALL = f"SELECT {_COLUMNS} FROM basic_evaluations ORDER BY visit_date DESC;"
    FIND_BY_RESTAURANT = f"SELECT {_COLUMNS} FROM basic_evaluations WHERE restaurant_id = %s ORDER BY visit_date DESC;"
    INSERT = """
        INSERT INTO basic_evaluations (appreciation, visit_date, ip_address, restaurant_id)
        VALUES (%s, %s, %s, %s);
    """
    UPDATE = """
        UPDATE basic_evaluations
        SET appreciation = %s, visit_date = %s, ip_address = %s, restaurant_id = %s
        WHERE id = %s;
    """
    DELETE = "DELETE FROM basic_evaluations WHERE id = %s;"

    def __init__(self, uow, restaurant_mapper: RestaurantMapper):
        super().__init__(uow)
        self.restaurant_mapper = restaurant_mapper

    def find_by_restaurant_id(self, restaurant_id: int) -> list[BasicEvaluation]:
        """All votes for one restaurant, most recent first."""
        return self._find_many(
            "FIND BasicEvaluations by restaurant", self.FIND_BY_RESTAURANT, (restaurant_id,)
        )

    def _can_persist(self, evaluation: BasicEvaluation) -> bool:
        return evaluation.restaurant is not None and evaluation.restaurant.id is not None

    def _row_to_entity(self, row: tuple) -> BasicEvaluation:
        return BasicEvaluation(
            id=row[0],
            like=row[1] == LIKE,
            visit_date=row[2],
            ip_address=row[3],
            restaurant=self.restaurant_mapper.find_by_id(row[4]),
        )

    @staticmethod
    def _to_params(evaluation: BasicEvaluation) -> tuple:
        return (
            LIKE if evaluation.like else DISLIKE,
            evaluation.visit_date,
            evaluation.ip_address,
            evaluation.restaurant.id,
        )
