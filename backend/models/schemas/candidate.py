"""Retrieval hits and the candidates built from them."""

from typing import Any

from pydantic import BaseModel


class IndexHit(BaseModel):
    """One nearest-neighbour result from the postings index."""
    id: str
    score: float
    metadata: dict[str, Any] = {}


class CandidateMatch(BaseModel):
    """A posting being scored for one request.

    A posting found only by the resume query has goal_match_score 0 and
    vice versa; that zero is a real score, not a missing value.
    """
    id: str
    metadata: dict[str, Any] = {}
    raw_scores: dict[str, float] = {}  # query name -> raw similarity
    background_match_score: float = 0.0  # 0.0-1.0, resume query
    goal_match_score: float = 0.0  # 0.0-1.0, desired-role query
    is_entry_level: bool = False
    has_transferable_skills: bool = False
    final_score: float = 0.0
    factors: list[str] = []
    corroborated_by: list[str] = []  # title / free_text queries that also found it
    retrieval_rank: int = 0  # first-seen order, used as the sort tie-break
