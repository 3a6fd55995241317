"""Retrieval planner: up to four concurrent nearest-neighbour queries.

    resume vector    -> "resume"     top 50, optional location filter
    role vector      -> "role"       top 50, optional location filter
    role vector      -> "title"      top 30, postings with a title only
    free-text vector -> "free_text"  top 30, only when free text was given

A failing query degrades to an empty list; the others still count.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from models.schemas.candidate import IndexHit
from models.schemas.preferences import UserPreferences
from services.result import Err, Result, capture, unwrap_or
from services.vector_index import TITLE_EXISTS, VectorIndex, location_filter

logger = logging.getLogger(__name__)

PRIMARY_TOP_K = 50
SECONDARY_TOP_K = 30


@dataclass
class RetrievalResults:
    resume: list[IndexHit] = field(default_factory=list)
    role: list[IndexHit] = field(default_factory=list)
    title: list[IndexHit] = field(default_factory=list)
    free_text: list[IndexHit] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def primary_empty(self) -> bool:
        return not self.resume and not self.role


class RetrievalPlanner:
    def __init__(self, index: VectorIndex) -> None:
        self.index = index

    async def plan(
        self,
        resume_vector: list[float],
        role_vector: list[float],
        preferences: UserPreferences,
        free_text_vector: list[float] | None = None,
    ) -> RetrievalResults:
        loc = location_filter(preferences.location)

        queries = {
            "resume": self.index.query(resume_vector, PRIMARY_TOP_K, loc, True),
            "role": self.index.query(role_vector, PRIMARY_TOP_K, loc, True),
            "title": self.index.query(role_vector, SECONDARY_TOP_K, TITLE_EXISTS, True),
        }
        if free_text_vector is not None:
            queries["free_text"] = self.index.query(free_text_vector, SECONDARY_TOP_K, None, True)

        outcomes: list[Result[list[IndexHit]]] = await asyncio.gather(
            *(capture(coro, f"{name} query") for name, coro in queries.items())
        )

        results = RetrievalResults()
        for name, outcome in zip(queries, outcomes):
            if isinstance(outcome, Err):
                results.errors[name] = outcome.reason
            setattr(results, name, unwrap_or(outcome, []))

        logger.info(
            "Retrieval: resume=%d role=%d title=%d free_text=%d failed=%s",
            len(results.resume), len(results.role), len(results.title),
            len(results.free_text), sorted(results.errors) or "none",
        )
        return results


def synthesize_fallback_postings(preferences: UserPreferences) -> list[IndexHit]:
    """Generic postings used when neither primary query found anything."""
    role = preferences.desired_role_expanded or preferences.desired_role
    title = role.title()
    location = preferences.location or ("Remote" if preferences.remote else "Multiple Locations")
    description = (
        f"We are looking for a {role} to join our team. Strong communication, "
        f"problem solving and a willingness to learn are valued."
    )
    return [
        IndexHit(
            id="fallback-1",
            score=0.5,
            metadata={
                "title": title,
                "company": "Various Companies",
                "location": location,
                "description": description,
                "salary": "Competitive",
                "synthetic": True,
            },
        ),
        IndexHit(
            id="fallback-2",
            score=0.45,
            metadata={
                "title": f"Senior {title}",
                "company": "Various Companies",
                "location": location,
                "description": description,
                "salary": "Competitive",
                "synthetic": True,
            },
        ),
    ]
