import pytest

from fakes import BrokenIndex, FakeIndex, hit
from models.schemas.preferences import UserPreferences
from services.pipeline.retrieval import RetrievalPlanner, synthesize_fallback_postings
from services.vector_index import TITLE_EXISTS, IndexQueryError

RESUME_VEC = [1.0, 0.0]
ROLE_VEC = [0.0, 1.0]
FREE_VEC = [0.5, 0.5]


def _handler(vector, top_k, metadata_filter):
    if vector == RESUME_VEC:
        return [hit("r1", 0.8, title="Backend Engineer")]
    if vector == ROLE_VEC and top_k == 50:
        return [hit("g1", 0.7, title="ML Engineer")]
    if vector == ROLE_VEC and metadata_filter is TITLE_EXISTS:
        return [hit("g1", 0.9, title="ML Engineer")]
    return [hit("f1", 0.6, title="Research Engineer")]


@pytest.mark.asyncio
async def test_three_queries_without_free_text(swe_to_mle):
    index = FakeIndex(_handler)
    results = await RetrievalPlanner(index).plan(RESUME_VEC, ROLE_VEC, swe_to_mle)
    assert sorted(top_k for _, top_k, _ in index.calls) == [30, 50, 50]
    assert [h.id for h in results.resume] == ["r1"]
    assert [h.id for h in results.role] == ["g1"]
    assert [h.id for h in results.title] == ["g1"]
    assert results.free_text == []
    assert results.errors == {}


@pytest.mark.asyncio
async def test_free_text_query_added(swe_to_mle):
    index = FakeIndex(_handler)
    results = await RetrievalPlanner(index).plan(RESUME_VEC, ROLE_VEC, swe_to_mle, FREE_VEC)
    assert len(index.calls) == 4
    assert [h.id for h in results.free_text] == ["f1"]


@pytest.mark.asyncio
async def test_location_filter_on_primary_queries():
    prefs = UserPreferences.build("Analyst", "Data Scientist", location="Remote")
    index = FakeIndex(_handler)
    await RetrievalPlanner(index).plan(RESUME_VEC, ROLE_VEC, prefs)
    primary = [f for _, top_k, f in index.calls if top_k == 50]
    assert len(primary) == 2
    assert all(f.field == "location" and f.op == "contains" and f.value == "Remote" for f in primary)
    title = [f for _, top_k, f in index.calls if top_k == 30]
    assert title == [TITLE_EXISTS]


@pytest.mark.asyncio
async def test_no_location_filter_by_default(swe_to_mle):
    index = FakeIndex(_handler)
    await RetrievalPlanner(index).plan(RESUME_VEC, ROLE_VEC, swe_to_mle)
    assert all(f is None for _, top_k, f in index.calls if top_k == 50)


@pytest.mark.asyncio
async def test_single_failing_query_degrades_to_empty(swe_to_mle):
    def handler(vector, top_k, metadata_filter):
        if metadata_filter is TITLE_EXISTS:
            raise IndexQueryError("bad filter")
        return _handler(vector, top_k, metadata_filter)

    results = await RetrievalPlanner(FakeIndex(handler)).plan(RESUME_VEC, ROLE_VEC, swe_to_mle)
    assert results.title == []
    assert "title" in results.errors
    assert [h.id for h in results.resume] == ["r1"]
    assert [h.id for h in results.role] == ["g1"]
    assert not results.primary_empty


@pytest.mark.asyncio
async def test_all_queries_failing(swe_to_mle):
    results = await RetrievalPlanner(BrokenIndex()).plan(RESUME_VEC, ROLE_VEC, swe_to_mle, FREE_VEC)
    assert results.primary_empty
    assert set(results.errors) == {"resume", "role", "title", "free_text"}


def test_synthesize_fallback_postings(swe_to_mle):
    postings = synthesize_fallback_postings(swe_to_mle)
    titles = [p.metadata["title"] for p in postings]
    assert titles == ["Machine Learning Engineer", "Senior Machine Learning Engineer"]
    assert len({p.id for p in postings}) == 2
