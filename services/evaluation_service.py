"""
services/evaluation_service.py
------------------------------
Business logic for recording likes, dislikes and complete evaluations.
"""

from datetime import date
from typing import Iterable, Optional

from config import IP_UNAVAILABLE, MAX_GRADE, MIN_GRADE
from models.evaluation import BasicEvaluation, CompleteEvaluation, Grade
from models.evaluation_criteria import EvaluationCriteria
from models.restaurant import Restaurant
from services.base_service import BaseService
from utils.logger import get_logger

logger = get_logger(__name__)


class EvaluationService(BaseService):
    """
    Handles evaluation submissions.

    Workflow:
        1. Validate the input (restaurant saved, grades in range, ...).
        2. Build the evaluation objects.
        3. Persist them in one unit of work.
        4. Return the saved evaluation, or None on failure.
    """

    def add_basic_evaluation(
        self, restaurant: Restaurant, like: bool, ip_address: Optional[str] = None
    ) -> Optional[BasicEvaluation]:
        """
        Record a like or dislike for a restaurant.

        Args:
            restaurant: A persisted restaurant.
            like: True for a like, False for a dislike.
            ip_address: Submitter address; IP_UNAVAILABLE when unknown.

        Returns:
            The saved BasicEvaluation, or None on failure.
        """
        if restaurant is None or restaurant.id is None:
            logger.warning("Attempted to vote for a null or unsaved restaurant")
            return None

        logger.info(f"Recording {'LIKE' if like else 'DISLIKE'} for restaurant #{restaurant.id}")
        evaluation = BasicEvaluation(
            visit_date=date.today(),
            restaurant=restaurant,
            like=like,
            ip_address=ip_address or IP_UNAVAILABLE,
        )
        saved = self._run(
            lambda: self.mappers.basic_evaluations.create(evaluation), "Add basic evaluation"
        )
        if saved is not None:
            restaurant.evaluations.append(saved)
        return saved

    def add_complete_evaluation(
        self,
        restaurant: Restaurant,
        username: str,
        comment: Optional[str],
        grades: Iterable[tuple[EvaluationCriteria, int]],
    ) -> Optional[CompleteEvaluation]:
        """
        Record a commented evaluation with one grade per criterion.

        Args:
            restaurant: A persisted restaurant.
            username: Submitter name, must not be blank.
            comment: Free-text comment.
            grades: (criterion, value) pairs, values within MIN_GRADE..MAX_GRADE.

        Returns:
            The saved CompleteEvaluation with its grades, or None on failure.
        """
        if restaurant is None or restaurant.id is None:
            logger.warning("Attempted to evaluate a null or unsaved restaurant")
            return None
        if not username or not username.strip():
            logger.warning("Attempted to add a complete evaluation without a username")
            return None

        grades = list(grades)
        for _, value in grades:
            if not MIN_GRADE <= value <= MAX_GRADE:
                logger.error(f"Invalid grade {value}: grades must be between {MIN_GRADE} and {MAX_GRADE}")
                return None

        logger.info(f"Recording complete evaluation by {username} for restaurant #{restaurant.id}")
        evaluation = CompleteEvaluation(
            visit_date=date.today(),
            restaurant=restaurant,
            comment=comment,
            username=username.strip(),
        )
        for criteria, value in grades:
            evaluation.add_grade(Grade(grade=value, criteria=criteria))

        saved = self._run(
            lambda: self.mappers.complete_evaluations.create(evaluation), "Add complete evaluation"
        )
        if saved is not None:
            restaurant.evaluations.append(saved)
        return saved

    def get_all_evaluation_criteria(self) -> list[EvaluationCriteria]:
        return self._read(self.mappers.criteria.find_all, "Load evaluation criteria", [])
