"""Load job postings from JSON and index their embeddings."""

import json
import logging
from pathlib import Path
from typing import Any

from services.embeddings import EmbeddingOrchestrator
from services.vector_index import InMemoryJobIndex

logger = logging.getLogger(__name__)

# Alternate source field names, first present wins
_FIELD_ALIASES: dict[str, list[str]] = {
    "title": ["title", "job_title"],
    "company": ["company", "company_name", "employer_name"],
    "location": ["location", "job_location"],
    "description": ["description", "job_description"],
    "salary": ["salary", "salary_range"],
    "employment_type": ["employment_type", "job_employment_type"],
    "apply_link": ["apply_link", "job_apply_link", "url"],
    "posted_at": ["posted_at", "date_posted", "job_posted_at"],
    "remote": ["remote", "is_remote", "job_is_remote"],
}


def normalize_posting(raw: dict[str, Any]) -> dict[str, Any]:
    """Map a raw posting record onto canonical metadata keys."""
    metadata: dict[str, Any] = {}
    for field, aliases in _FIELD_ALIASES.items():
        for alias in aliases:
            value = raw.get(alias)
            if value is not None and value != "":
                metadata[field] = value
                break
    if "remote" in metadata:
        metadata["remote"] = bool(metadata["remote"])
    return metadata


def posting_text(metadata: dict[str, Any]) -> str:
    """Text embedded for a posting: title twice, then company and description."""
    title = metadata.get("title", "")
    return " ".join(
        part for part in (title, title, metadata.get("company", ""), metadata.get("description", ""))
        if part
    )


def load_postings(path: str | Path) -> list[dict[str, Any]]:
    path = Path(path)
    if not path.exists():
        logger.warning("Postings file %s not found; index will be empty", path)
        return []
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("jobs", [])
    return [item for item in data if isinstance(item, dict)]


async def build_index(
    postings: list[dict[str, Any]],
    embedder: EmbeddingOrchestrator,
) -> InMemoryJobIndex:
    """Embed every posting and load it into a fresh in-memory index."""
    index = InMemoryJobIndex(embedder.dimension)
    records = []
    for i, raw in enumerate(postings):
        posting_id = str(raw.get("id") or raw.get("job_id") or f"job-{i}")
        metadata = normalize_posting(raw)
        if not metadata.get("title"):
            logger.debug("Posting %s has no title", posting_id)
        records.append((posting_id, metadata))

    vectors = await embedder.embed_many([posting_text(meta) for _, meta in records])
    for (posting_id, metadata), vector in zip(records, vectors):
        index.upsert(posting_id, vector, metadata)

    logger.info("Indexed %d postings (%s embeddings)", len(index), embedder.provider_name)
    return index
