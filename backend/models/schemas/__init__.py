"""Request-scoped Pydantic contracts shared by the matching pipeline."""

from models.schemas.candidate import CandidateMatch, IndexHit
from models.schemas.preferences import UserPreferences

__all__ = [
    "CandidateMatch",
    "IndexHit",
    "UserPreferences",
]
