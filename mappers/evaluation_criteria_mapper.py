"""
mappers/evaluation_criteria_mapper.py
-------------------------------------
Data mapper for the `evaluation_criteria` table.
"""

from mappers.base_mapper import AbstractMapper
from models.evaluation_criteria import EvaluationCriteria


class EvaluationCriteriaMapper(AbstractMapper[EvaluationCriteria]):
    """Maps rows of `evaluation_criteria` to EvaluationCriteria objects."""

    ENTITY_NAME = "EvaluationCriteria"
    TABLE = "evaluation_criteria"
    SEQUENCE = "seq_evaluation_criteria"

    FIND_BY_ID = "SELECT id, name, description FROM evaluation_criteria WHERE id = %s;"
    FIND_ALL = "SELECT id, name, description FROM evaluation_criteria ORDER BY name;"
    INSERT = "INSERT INTO evaluation_criteria (name, description) VALUES (%s, %s);"
    UPDATE = "UPDATE evaluation_criteria SET name = %s, description = %s WHERE id = %s;"
    DELETE = "DELETE FROM evaluation_criteria WHERE id = %s;"

    @staticmethod
    def _row_to_entity(row: tuple) -> EvaluationCriteria:
        return EvaluationCriteria(id=row[0], name=row[1], description=row[2])

    @staticmethod
    def _to_params(criteria: EvaluationCriteria) -> tuple:
        return (criteria.name, criteria.description)
