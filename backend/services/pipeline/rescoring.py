"""Rescoring and ranking: transition-aware boosts, clamping, stable sort."""

import logging
import re
from typing import Any

from models.schemas.candidate import CandidateMatch
from models.schemas.preferences import UserPreferences

logger = logging.getLogger(__name__)

ENTRY_LEVEL_TITLE_TERMS: frozenset[str] = frozenset({
    "entry", "junior", "jr", "associate", "trainee", "beginner", "intern", "apprentice",
})

ENTRY_LEVEL_PHRASES: tuple[str, ...] = (
    "no experience required",
    "no experience necessary",
    "entry level",
    "entry-level",
    "0-1 year",
    "0-2 years",
    "recent graduate",
    "new grad",
    "will train",
    "training provided",
)

SOFT_SKILLS: frozenset[str] = frozenset({
    "communication", "problem solving", "problem-solving", "analytical",
    "teamwork", "collaboration", "leadership", "adaptability",
    "critical thinking", "time management", "organization", "creativity",
    "attention to detail", "interpersonal", "project management",
})

OPEN_BACKGROUND_PHRASES: tuple[str, ...] = (
    "career change friendly",
    "career changers",
    "career changer",
    "open to career",
    "diverse backgrounds",
    "non-traditional background",
    "transferable skills",
    "all backgrounds",
)

MIN_SOFT_SKILLS = 3
SHORT_ROLE_MAX_LEN = 5  # originals this short are treated as acronyms

ENTRY_LEVEL_BOOST_TRANSITION = 1.3
ENTRY_LEVEL_BOOST = 1.1
TRANSFERABLE_BOOST = 1.2
REMOTE_BOOST = 1.15
DESIRED_TITLE_BOOST = 1.2
ACRONYM_TITLE_BOOST = 1.15
CURRENT_TITLE_BOOST = 1.1

SCORE_FLOOR = 0.4
TRANSITION_CEILING = 0.95
CEILING = 0.98


def _text(metadata: dict[str, Any], key: str) -> str:
    value = metadata.get(key)
    return str(value).lower() if value else ""


def is_entry_level_posting(metadata: dict[str, Any]) -> bool:
    title_words = set(_text(metadata, "title").replace("-", " ").replace(".", " ").split())
    if title_words & ENTRY_LEVEL_TITLE_TERMS:
        return True
    description = _text(metadata, "description")
    return any(phrase in description for phrase in ENTRY_LEVEL_PHRASES)


def has_transferable_skills(description: str | None) -> bool:
    text = (description or "").lower()
    if not text:
        return False
    if any(phrase in text for phrase in OPEN_BACKGROUND_PHRASES):
        return True
    found = {skill for skill in SOFT_SKILLS if skill in text}
    # "problem solving" and "problem-solving" are one skill
    if {"problem solving", "problem-solving"} <= found:
        found.discard("problem-solving")
    return len(found) >= MIN_SOFT_SKILLS


def _contains(haystack: str, needle: str | None) -> bool:
    return bool(needle) and needle.lower() in haystack


def _contains_word(haystack: str, needle: str) -> bool:
    return bool(needle) and re.search(rf"\b{re.escape(needle)}\b", haystack, re.IGNORECASE) is not None


def rescore(
    candidates: list[CandidateMatch],
    preferences: UserPreferences,
    is_transition: bool,
) -> list[CandidateMatch]:
    """Apply boosts to each candidate's merged score and sort best first.

    Ties keep retrieval order.
    """
    ceiling = TRANSITION_CEILING if is_transition else CEILING
    desired_original = preferences.desired_role.strip()

    for candidate in candidates:
        score = candidate.final_score
        factors = list(candidate.factors)
        title = _text(candidate.metadata, "title")
        location = _text(candidate.metadata, "location")

        if candidate.is_entry_level:
            score *= ENTRY_LEVEL_BOOST_TRANSITION if is_transition else ENTRY_LEVEL_BOOST
            factors.append("entry_level")
        if candidate.has_transferable_skills:
            score *= TRANSFERABLE_BOOST
            factors.append("transferable_skills")
        if preferences.remote and "remote" in location:
            score *= REMOTE_BOOST
            factors.append("remote")
        if _contains(title, preferences.desired_role_expanded):
            score *= DESIRED_TITLE_BOOST
            factors.append("desired_role_in_title")
        if len(desired_original) <= SHORT_ROLE_MAX_LEN and _contains_word(title, desired_original):
            score *= ACRONYM_TITLE_BOOST
            factors.append("role_acronym_in_title")
        if _contains(title, preferences.current_role_expanded) or _contains(title, preferences.current_role):
            score *= CURRENT_TITLE_BOOST
            factors.append("current_role_in_title")
        for source in candidate.corroborated_by:
            factors.append(f"corroborated_by_{source}")

        candidate.final_score = round(min(max(score, SCORE_FLOOR), ceiling), 4)
        candidate.factors = factors

    ranked = sorted(candidates, key=lambda c: (-c.final_score, c.retrieval_rank))
    if ranked:
        logger.debug(
            "Rescored %d candidates, top=%.3f (%s)",
            len(ranked), ranked[0].final_score, ranked[0].metadata.get("title", ranked[0].id),
        )
    return ranked
