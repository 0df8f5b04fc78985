"""
mappers/complete_evaluation_mapper.py
-------------------------------------
Data mapper for the `complete_evaluations` table.

A complete evaluation is written together with its grades:
    - create inserts the evaluation, then each grade;
    - update rewrites the evaluation, deletes every existing grade and
      re-inserts the supplied set (grades missing from the new set are lost);
    - delete removes the grades before the evaluation (foreign key).
These multi-table writes are atomic only inside the caller's unit of work.
"""

from typing import Optional

from mappers.base_mapper import AbstractMapper
from mappers.grade_mapper import GradeMapper
from mappers.restaurant_mapper import RestaurantMapper
from models.evaluation import CompleteEvaluation
from utils.logger import get_logger

logger = get_logger(__name__)

_COLUMNS = "id, visit_date, comment, username, restaurant_id"


class CompleteEvaluationMapper(AbstractMapper[CompleteEvaluation]):
    """Maps rows of `complete_evaluations` to CompleteEvaluation objects with their grades."""

    ENTITY_NAME = "CompleteEvaluation"
    TABLE = "complete_evaluations"
    SEQUENCE = "seq_evaluations"

    FIND_BY_ID = f"SELECT {_COLUMNS} FROM complete_evaluations WHERE id = %s;"
    FIND_ALL = f"SELECT {_COLUMNS} FROM complete_evaluations ORDER BY visit_date DESC;"
    FIND_BY_RESTAURANT = f"SELECT {_COLUMNS} FROM complete_evaluations WHERE restaurant_id = %s ORDER BY visit_date DESC;"
    INSERT = """
        INSERT INTO complete_evaluations (visit_date, comment, username, restaurant_id)
        VALUES (%s, %s, %s, %s);
    """
    UPDATE = """
        UPDATE complete_evaluations
        SET visit_date = %s, comment = %s, username = %s, restaurant_id = %s
        WHERE id = %s;
    """
    DELETE = "DELETE FROM complete_evaluations WHERE id = %s;"

    def __init__(self, uow, restaurant_mapper: RestaurantMapper, grade_mapper: GradeMapper):
        super().__init__(uow)
        self.restaurant_mapper = restaurant_mapper
        self.grade_mapper = grade_mapper

    def find_by_restaurant_id(self, restaurant_id: int) -> list[CompleteEvaluation]:
        """All complete evaluations of one restaurant, most recent first."""
        return self._find_many(
            "FIND CompleteEvaluations by restaurant", self.FIND_BY_RESTAURANT, (restaurant_id,)
        )

    # ── WRITES ────────────────────────────────────────────

    def create(self, evaluation: Optional[CompleteEvaluation]) -> Optional[CompleteEvaluation]:
        """
        Insert the evaluation, then every grade it carries.

        Returns:
            The evaluation with ids assigned, or None if any step failed.
            On None the caller must roll back: some rows may already exist.
        """
        if super().create(evaluation) is None:
            return None
        if not self._insert_grades(evaluation):
            self._remove_from_cache(evaluation.id)
            return None
        logger.info(f"CompleteEvaluation #{evaluation.id} saved with {len(evaluation.grades)} grade(s)")
        return evaluation

    def update(self, evaluation: Optional[CompleteEvaluation]) -> bool:
        """Rewrite the evaluation row and replace its whole grade set."""
        if not super().update(evaluation):
            return False
        self.grade_mapper.delete_by_evaluation_id(evaluation.id)
        return self._insert_grades(evaluation)

    def delete_by_id(self, evaluation_id: int) -> bool:
        """Delete the evaluation's grades, then the evaluation itself."""
        self.grade_mapper.delete_by_evaluation_id(evaluation_id)
        return super().delete_by_id(evaluation_id)

    def _insert_grades(self, evaluation: CompleteEvaluation) -> bool:
        for grade in evaluation.grades:
            grade.evaluation = evaluation
            if self.grade_mapper.create(grade) is None:
                logger.error(f"Failed to save a grade of CompleteEvaluation #{evaluation.id}")
                return False
        return True

    # ── HELPERS ───────────────────────────────────────────

    def _can_persist(self, evaluation: CompleteEvaluation) -> bool:
        return evaluation.restaurant is not None and evaluation.restaurant.id is not None

    def _row_to_entity(self, row: tuple) -> CompleteEvaluation:
        """Build the evaluation, then attach its grades and their back reference."""
        evaluation = CompleteEvaluation(
            id=row[0],
            visit_date=row[1],
            comment=row[2],
            username=row[3],
            restaurant=self.restaurant_mapper.find_by_id(row[4]),
        )
        for grade in self.grade_mapper.find_by_evaluation_id(evaluation.id):
            evaluation.add_grade(grade)
        return evaluation

    @staticmethod
    def _to_params(evaluation: CompleteEvaluation) -> tuple:
        return (
            evaluation.visit_date,
            evaluation.comment,
            evaluation.username,
            evaluation.restaurant.id,
        )
