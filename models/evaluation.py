"""
models/evaluation.py
--------------------
Domain models for restaurant evaluations.

Two concrete kinds live in separate tables:
    - BasicEvaluation: a like / dislike vote.
    - CompleteEvaluation: a comment plus one Grade per criterion.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from models.evaluation_criteria import EvaluationCriteria
from models.restaurant import Restaurant


@dataclass
class Evaluation:
    """
    Common part of every evaluation.

    Attributes:
        visit_date: Date of the visit being evaluated.
        restaurant: Owning Restaurant.
        id: Database primary key (None for new records). Both evaluation
            kinds draw ids from one sequence, so ids are unique across them.
    """
    visit_date: date
    restaurant: Restaurant = field(repr=False)
    id: Optional[int] = field(default=None, kw_only=True)


@dataclass
class BasicEvaluation(Evaluation):
    """
    A like / dislike vote.

    Attributes:
        like: True for a like, False for a dislike.
        ip_address: Address the vote was submitted from.
    """
    like: bool
    ip_address: str

    def __str__(self) -> str:
        return f"{'Like' if self.like else 'Dislike'} ({self.visit_date})"


@dataclass
class CompleteEvaluation(Evaluation):
    """
    A commented evaluation carrying one grade per criterion.

    Attributes:
        comment: Free-text comment (optional).
        username: Name of the submitter.
        grades: Grades of this evaluation. Each grade points back here.
    """
    comment: Optional[str]
    username: str
    grades: list["Grade"] = field(default_factory=list)

    def add_grade(self, grade: "Grade") -> None:
        """Attach a grade and set its back reference."""
        grade.evaluation = self
        self.grades.append(grade)

    def __str__(self) -> str:
        return f"{self.username} ({self.visit_date}): {self.comment or ''}"


@dataclass
class Grade:
    """
    A score given to one criterion inside a CompleteEvaluation.

    Attributes:
        grade: Numeric score.
        criteria: The EvaluationCriteria being scored.
        evaluation: Back reference to the owning CompleteEvaluation. It is
            set after loading by the evaluation side and never followed
            while mapping rows, so it is excluded from repr and equality.
        id: Database primary key (None for new records).
    """
    grade: int
    criteria: EvaluationCriteria
    evaluation: Optional[CompleteEvaluation] = field(default=None, repr=False, compare=False)
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.criteria.name}: {self.grade}"
