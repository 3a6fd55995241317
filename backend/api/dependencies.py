"""Shared dependencies for API routes.

The embedder and postings index are built once in the app lifespan and
kept on ``app.state``; routes receive them through these providers so
tests can swap in fakes with ``app.dependency_overrides``.
"""

import logging

from fastapi import Depends, Request

from config import Settings, settings
from services import gemini_client, job_catalog
from services.embeddings import (
    EmbeddingOrchestrator,
    EmbeddingProvider,
    GeminiEmbeddingProvider,
    SentenceTransformerProvider,
)
from services.pipeline.retrieval import RetrievalPlanner
from services.vector_index import InMemoryJobIndex

logger = logging.getLogger(__name__)


def build_provider(config: Settings = settings) -> EmbeddingProvider | None:
    name = config.embedding_provider.lower()
    if name == "gemini":
        client = gemini_client.get_client()
        if client is None:
            return None
        return GeminiEmbeddingProvider(client, config.embedding_model, config.embedding_dim)
    if name == "sbert":
        return SentenceTransformerProvider(config.sbert_model_name)
    if name != "none":
        logger.warning("Unknown EMBEDDING_PROVIDER %r, using fallback embeddings", name)
    return None


def build_embedder(config: Settings = settings) -> EmbeddingOrchestrator:
    return EmbeddingOrchestrator(
        build_provider(config),
        dimension=config.embedding_dim,
        max_chars=config.max_embed_chars,
        concurrency=config.embed_concurrency,
    )


async def build_postings_index(
    embedder: EmbeddingOrchestrator,
    config: Settings = settings,
) -> InMemoryJobIndex:
    postings = job_catalog.load_postings(config.jobs_data_path)
    return await job_catalog.build_index(postings, embedder)


def get_embedder(request: Request) -> EmbeddingOrchestrator:
    embedder = getattr(request.app.state, "embedder", None)
    if embedder is None:
        embedder = build_embedder()
        request.app.state.embedder = embedder
    return embedder


def get_index(request: Request) -> InMemoryJobIndex:
    index = getattr(request.app.state, "index", None)
    if index is None:
        # Lifespan did not run (e.g. bare TestClient); serve an empty index
        index = InMemoryJobIndex(settings.embedding_dim)
        request.app.state.index = index
    return index


def get_planner(index: InMemoryJobIndex = Depends(get_index)) -> RetrievalPlanner:
    return RetrievalPlanner(index)
