"""Nearest-neighbour search over job-posting embeddings.

The matching pipeline only depends on the ``VectorIndex`` protocol. The
in-process implementation below keeps postings in a numpy matrix and ranks
them by cosine similarity, which is enough for catalogs of a few thousand
postings and for tests.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from models.schemas.candidate import IndexHit

logger = logging.getLogger(__name__)


class IndexQueryError(RuntimeError):
    """Malformed filter, dimensionality mismatch or backend failure."""


@dataclass(frozen=True)
class MetadataFilter:
    """Predicate over one metadata field.

    ops:
        contains  - case-insensitive substring; list fields match if any
                    element contains the value
        exists    - field present and not None/empty
    """
    field: str
    op: str
    value: str | None = None

    def matches(self, metadata: dict[str, Any]) -> bool:
        current = metadata.get(self.field)
        if self.op == "exists":
            return current is not None and current != ""
        if self.op == "contains":
            if current is None or self.value is None:
                return False
            needle = self.value.lower()
            if isinstance(current, (list, tuple)):
                return any(needle in str(item).lower() for item in current)
            return needle in str(current).lower()
        raise IndexQueryError(f"Unsupported filter op: {self.op}")


def location_filter(location: str | None) -> MetadataFilter | None:
    if not location:
        return None
    return MetadataFilter(field="location", op="contains", value=location)


TITLE_EXISTS = MetadataFilter(field="title", op="exists")


class VectorIndex(Protocol):
    async def query(
        self,
        vector: list[float],
        top_k: int,
        metadata_filter: MetadataFilter | None = None,
        include_metadata: bool = True,
    ) -> list[IndexHit]:
        """Top-k postings, best first. Raises IndexQueryError on failure."""
        ...


class InMemoryJobIndex:
    def __init__(self, dimension: int) -> None:
        self.dimension = dimension
        self._ids: list[str] = []
        self._metadata: list[dict[str, Any]] = []
        self._vectors = np.empty((0, dimension), dtype=float)

    def __len__(self) -> int:
        return len(self._ids)

    def upsert(self, posting_id: str, vector: list[float], metadata: dict[str, Any]) -> None:
        if len(vector) != self.dimension:
            raise IndexQueryError(
                f"Vector for {posting_id} has {len(vector)} dims, index expects {self.dimension}"
            )
        row = np.asarray(vector, dtype=float).reshape(1, -1)
        if posting_id in self._ids:
            i = self._ids.index(posting_id)
            self._vectors[i] = row
            self._metadata[i] = dict(metadata)
            return
        self._ids.append(posting_id)
        self._metadata.append(dict(metadata))
        self._vectors = np.vstack([self._vectors, row])

    def _search(
        self,
        vector: list[float],
        top_k: int,
        metadata_filter: MetadataFilter | None,
        include_metadata: bool,
    ) -> list[IndexHit]:
        if len(vector) != self.dimension:
            raise IndexQueryError(
                f"Query has {len(vector)} dims, index expects {self.dimension}"
            )
        if not self._ids or top_k <= 0:
            return []

        candidates = [
            i for i, meta in enumerate(self._metadata)
            if metadata_filter is None or metadata_filter.matches(meta)
        ]
        if not candidates:
            return []

        query = np.asarray(vector, dtype=float).reshape(1, -1)
        scores = sklearn_cosine(query, self._vectors[candidates])[0]
        # stable: equal scores keep catalog order
        order = np.argsort(-scores, kind="stable")[:top_k]
        return [
            IndexHit(
                id=self._ids[candidates[j]],
                score=float(scores[j]),
                metadata=dict(self._metadata[candidates[j]]) if include_metadata else {},
            )
            for j in order
        ]

    async def query(
        self,
        vector: list[float],
        top_k: int,
        metadata_filter: MetadataFilter | None = None,
        include_metadata: bool = True,
    ) -> list[IndexHit]:
        return await asyncio.to_thread(
            self._search, vector, top_k, metadata_filter, include_metadata
        )
