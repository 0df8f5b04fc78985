"""
mappers/grade_mapper.py
-----------------------
Data mapper for the `grades` table.

A grade row is mapped with its criterion only. The owning evaluation is
never loaded from here (that would recurse back into the evaluation
mapper); CompleteEvaluationMapper sets the back reference after loading.
The owning evaluation id read from each row is kept as a plain lookup so
bulk deletes can evict the right cache entries.
"""

from typing import Optional

from mappers.base_mapper import AbstractMapper
from mappers.evaluation_criteria_mapper import EvaluationCriteriaMapper
from models.evaluation import CompleteEvaluation, Grade
from utils.logger import get_logger

logger = get_logger(__name__)


class GradeMapper(AbstractMapper[Grade]):
    """Maps rows of `grades` to Grade objects."""

    ENTITY_NAME = "Grade"
    TABLE = "grades"
    SEQUENCE = "seq_grades"

    FIND_BY_ID = "SELECT id, grade, evaluation_id, criteria_id FROM grades WHERE id = %s;"
    FIND_ALL = "SELECT id, grade, evaluation_id, criteria_id FROM grades ORDER BY id;"
    FIND_BY_EVALUATION = "SELECT id, grade, evaluation_id, criteria_id FROM grades WHERE evaluation_id = %s ORDER BY id;"
    INSERT = "INSERT INTO grades (grade, evaluation_id, criteria_id) VALUES (%s, %s, %s);"
    UPDATE = "UPDATE grades SET grade = %s, evaluation_id = %s, criteria_id = %s WHERE id = %s;"
    DELETE = "DELETE FROM grades WHERE id = %s;"
    DELETE_BY_EVALUATION = "DELETE FROM grades WHERE evaluation_id = %s;"

    def __init__(self, uow, criteria_mapper: EvaluationCriteriaMapper):
        super().__init__(uow)
        self.criteria_mapper = criteria_mapper
        self._evaluation_ids: dict[int, int] = {}

    def find_by_evaluation(self, evaluation: Optional[CompleteEvaluation]) -> list[Grade]:
        if evaluation is None or evaluation.id is None:
            return []
        return self.find_by_evaluation_id(evaluation.id)

    def find_by_evaluation_id(self, evaluation_id: int) -> list[Grade]:
        """All grades of one evaluation, without their back reference set."""
        return self._find_many("FIND Grades by evaluation", self.FIND_BY_EVALUATION, (evaluation_id,))

    def delete_by_evaluation_id(self, evaluation_id: int) -> int:
        """
        Delete every grade of an evaluation and evict them from the cache.

        Returns:
            The number of rows deleted (0 is not a failure).
        """
        with self._operation("DELETE Grades by evaluation"):
            deleted = self.uow.execute(self.DELETE_BY_EVALUATION, (evaluation_id,))

        for grade_id, owner_id in list(self._evaluation_ids.items()):
            if owner_id == evaluation_id:
                self._remove_from_cache(grade_id)
        logger.info(f"Deleted {deleted} grade(s) of evaluation #{evaluation_id}")
        return deleted

    def _can_persist(self, grade: Grade) -> bool:
        return (
            grade.evaluation is not None and grade.evaluation.id is not None
            and grade.criteria is not None and grade.criteria.id is not None
        )

    def _row_to_entity(self, row: tuple) -> Grade:
        self._evaluation_ids[row[0]] = row[2]
        return Grade(
            id=row[0],
            grade=row[1],
            criteria=self.criteria_mapper.find_by_id(row[3]),
        )

    @staticmethod
    def _to_params(grade: Grade) -> tuple:
        return (grade.grade, grade.evaluation.id, grade.criteria.id)

    def _add_to_cache(self, grade: Grade) -> None:
        super()._add_to_cache(grade)
        if grade.id is not None and grade.evaluation is not None:
            self._evaluation_ids[grade.id] = grade.evaluation.id

    def _remove_from_cache(self, grade_id: Optional[int]) -> None:
        super()._remove_from_cache(grade_id)
        self._evaluation_ids.pop(grade_id, None)

    def reset_cache(self) -> None:
        super().reset_cache()
        self._evaluation_ids.clear()
