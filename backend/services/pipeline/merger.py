"""Dual-score merger.

Builds one candidate per posting id with two independent scores:
background fit (resume query) and goal fit (desired-role query). Title and
free-text hits only corroborate postings the primary queries already found.

The blended score is deliberately a calibrated UX signal, not a raw cosine:
near-zero similarities are stretched into a usable low range and the result
is clamped to [0.3, 0.95] so the list does not look uniformly mediocre.
"""

import logging

from models.schemas.candidate import CandidateMatch, IndexHit
from services.pipeline.rescoring import has_transferable_skills, is_entry_level_posting

logger = logging.getLogger(__name__)

RETRIEVAL_BOOST = 1.2

TRANSITION_WEIGHTS = (0.4, 0.6)  # (background, goal)
DEFAULT_WEIGHTS = (0.7, 0.3)

LOW_SCORE = 0.05
MID_SCORE = 0.2
MERGE_FLOOR = 0.3
MERGE_CEILING = 0.95


def calibrate(score: float) -> float:
    return min(score * RETRIEVAL_BOOST, 1.0)


def smooth_score(score: float) -> float:
    """Spread the long tail of tiny similarities, then clamp."""
    if score < LOW_SCORE:
        score = LOW_SCORE + score * 3
    elif score < MID_SCORE:
        score = MID_SCORE + score * 1.5
    return min(max(score, MERGE_FLOOR), MERGE_CEILING)


def blend(background: float, goal: float, is_transition: bool) -> float:
    w_background, w_goal = TRANSITION_WEIGHTS if is_transition else DEFAULT_WEIGHTS
    return smooth_score(background * w_background + goal * w_goal)


def merge(
    resume_hits: list[IndexHit],
    role_hits: list[IndexHit],
    title_hits: list[IndexHit],
    free_text_hits: list[IndexHit],
    is_transition: bool,
) -> list[CandidateMatch]:
    """Union resume and role hits by posting id and compute blended scores.

    Returned in first-seen order (resume hits first, then new role hits).
    """
    candidates: dict[str, CandidateMatch] = {}

    def _admit(hit: IndexHit) -> CandidateMatch:
        candidate = candidates.get(hit.id)
        if candidate is not None:
            return candidate
        candidate = CandidateMatch(
            id=hit.id,
            metadata=dict(hit.metadata),
            retrieval_rank=len(candidates),
        )
        candidates[hit.id] = candidate
        return candidate

    for hit in resume_hits:
        candidate = _admit(hit)
        candidate.raw_scores["resume"] = hit.score
        candidate.background_match_score = calibrate(hit.score)

    for hit in role_hits:
        candidate = _admit(hit)
        candidate.raw_scores["role"] = hit.score
        candidate.goal_match_score = calibrate(hit.score)

    for source, hits in (("title", title_hits), ("free_text", free_text_hits)):
        for hit in hits:
            candidate = candidates.get(hit.id)
            if candidate is not None and source not in candidate.corroborated_by:
                candidate.raw_scores[source] = hit.score
                candidate.corroborated_by.append(source)

    merged: list[CandidateMatch] = []
    for candidate in candidates.values():
        try:
            candidate.is_entry_level = is_entry_level_posting(candidate.metadata)
            candidate.has_transferable_skills = has_transferable_skills(
                candidate.metadata.get("description")
            )
            candidate.final_score = blend(
                candidate.background_match_score,
                candidate.goal_match_score,
                is_transition,
            )
        except Exception as e:
            # e.g. a non-string description from a loosely typed catalog
            logger.warning("Excluding malformed posting %s: %s", candidate.id, e)
            continue
        merged.append(candidate)

    logger.debug("Merged %d candidates (transition=%s)", len(merged), is_transition)
    return merged
