"""SQLAlchemy ORM models.

All models are imported here so that ``Base.metadata`` knows every table
(used by the test fixtures to create the schema).
"""

from choreinsights.models.chore import ChoreAssignment, ChoreTransaction  # noqa: F401
from choreinsights.models.family import Family, FamilyProfile  # noqa: F401

__all__ = [
    "ChoreAssignment",
    "ChoreTransaction",
    "Family",
    "FamilyProfile",
]
