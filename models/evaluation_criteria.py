"""
models/evaluation_criteria.py
-----------------------------
Domain model for the criteria every complete evaluation grades.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EvaluationCriteria:
    """
    Stable reference data shared by all complete evaluations.

    Attributes:
        name: Criterion name (e.g. 'Service'), unique.
        description: What the criterion measures.
        id: Database primary key (None for new records).
    """
    name: str
    description: Optional[str] = None
    id: Optional[int] = None

    def __str__(self) -> str:
        return self.name
