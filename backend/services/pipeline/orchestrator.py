"""Matching orchestrator: wires the pipeline stages together.

Flow:
    resume_text + preferences
      ├─ section_parser.prepare_resume_text   → weighted text
      ├─ EmbeddingOrchestrator.embed (x2-3, concurrent)
      │       resume (A/B method) / desired role / free text
      ├─ transition.is_transition(current, desired)
      ├─ RetrievalPlanner.plan                → resume/role/title/free_text hits
      │       (both primary lists empty → synthesized postings)
      ├─ merger.merge                         → CandidateMatch[] with dual scores
      ├─ rescoring.rescore                    → boosted, clamped, sorted
      └─ explanations.*                       → MatchResponse
"""

import asyncio
import logging

from models.responses import JobMatch, MatchResponse, ProfileSummary
from models.schemas.candidate import CandidateMatch
from models.schemas.preferences import UserPreferences
from services.embeddings import EmbeddingOrchestrator, select_embedding_method
from services.pipeline import explanations
from services.pipeline.merger import merge
from services.pipeline.rescoring import rescore
from services.pipeline.retrieval import RetrievalPlanner, synthesize_fallback_postings
from services.pipeline.transition import is_transition as classify_transition
from services.section_parser import prepare_resume_text

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 10


def role_query_text(preferences: UserPreferences) -> str:
    expanded = preferences.desired_role_expanded
    original = preferences.desired_role
    if expanded.lower() != original.lower():
        return f"{expanded} {original}"
    return original


async def match_profile(
    resume_text: str,
    preferences: UserPreferences,
    *,
    embedder: EmbeddingOrchestrator,
    planner: RetrievalPlanner,
    session_id: str | None = None,
    weighted_text: str | None = None,
    full_name: str | None = None,
    top_n: int = DEFAULT_TOP_N,
) -> MatchResponse:
    """Run the full matching pipeline for one submission."""
    if weighted_text is None:
        weighted_text, _ = prepare_resume_text(resume_text)

    method = select_embedding_method(session_id)
    transition = classify_transition(preferences.current_role, preferences.desired_role)
    logger.info(
        "Matching %r -> %r (transition=%s, method=%s)",
        preferences.current_role, preferences.desired_role, transition, method.value,
    )

    embed_jobs = [
        embedder.embed(weighted_text, method),
        embedder.embed(role_query_text(preferences)),
    ]
    if preferences.additional_info:
        embed_jobs.append(embedder.embed(preferences.additional_info))
    vectors = await asyncio.gather(*embed_jobs)
    resume_vector, role_vector = vectors[0], vectors[1]
    free_text_vector = vectors[2] if len(vectors) > 2 else None

    retrieved = await planner.plan(resume_vector, role_vector, preferences, free_text_vector)

    candidates: list[CandidateMatch] = []
    if not retrieved.primary_empty:
        candidates = merge(
            retrieved.resume, retrieved.role, retrieved.title, retrieved.free_text, transition
        )

    fallback_used = not candidates
    if fallback_used:
        logger.warning("No postings retrieved, returning synthesized matches")
        synthetic = synthesize_fallback_postings(preferences)
        candidates = merge(synthetic, synthetic, [], [], transition)

    ranked = rescore(candidates, preferences, transition)[:top_n]

    return MatchResponse(
        profile=ProfileSummary(
            full_name=full_name,
            resume_text=resume_text,
            **preferences.model_dump(),
        ),
        matches=[to_job_match(c, transition, preferences) for c in ranked],
        is_transition=transition,
        embedding_method=method.value,
        embedding_provider=embedder.provider_name,
        fallback_used=fallback_used,
        degraded=bool(retrieved.errors),
    )


def to_job_match(
    candidate: CandidateMatch,
    transition: bool,
    preferences: UserPreferences,
) -> JobMatch:
    meta = candidate.metadata
    location = str(meta.get("location") or "Multiple Locations")
    return JobMatch(
        id=candidate.id,
        job_title=str(meta.get("title") or "Unknown Position"),
        company=str(meta.get("company") or "Unknown Company"),
        location=location,
        employment_type=str(meta.get("employment_type") or "Not Specified"),
        salary=str(meta.get("salary") or ""),
        description=str(meta.get("description") or ""),
        apply_link=str(meta.get("apply_link") or "#"),
        posted_at=str(meta.get("posted_at") or ""),
        remote=bool(meta.get("remote")) or "remote" in location.lower(),
        match_score=candidate.final_score,
        background_match_score=round(candidate.background_match_score, 4),
        goal_match_score=round(candidate.goal_match_score, 4),
        is_entry_level=candidate.is_entry_level,
        has_transferable_skills=candidate.has_transferable_skills,
        factors=candidate.factors,
        match_quality=explanations.match_quality_label(candidate.final_score, transition),
        match_explanation=explanations.match_explanation(candidate, transition, preferences),
        matched_with=explanations.matched_with(preferences),
    )
