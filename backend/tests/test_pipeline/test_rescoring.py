import itertools

import pytest

from models.schemas.candidate import CandidateMatch
from models.schemas.preferences import UserPreferences
from services.pipeline.rescoring import has_transferable_skills, is_entry_level_posting, rescore


def _candidate(final_score=0.5, rank=0, **kwargs) -> CandidateMatch:
    metadata = kwargs.pop("metadata", {"title": "Account Executive"})
    return CandidateMatch(
        id=kwargs.pop("id", f"c{rank}"),
        metadata=metadata,
        final_score=final_score,
        retrieval_rank=rank,
        **kwargs,
    )


class TestPostingSignals:
    def test_entry_level_by_title_and_phrase(self):
        assert is_entry_level_posting({
            "title": "Junior Data Analyst",
            "description": "No experience required",
        }) is True

    def test_entry_level_by_title_only(self):
        assert is_entry_level_posting({"title": "Jr. Developer"}) is True
        assert is_entry_level_posting({"title": "Software Engineering Intern"}) is True

    def test_entry_level_by_description_only(self):
        assert is_entry_level_posting({
            "title": "Developer",
            "description": "Great fit for a recent graduate.",
        }) is True

    def test_not_entry_level(self):
        assert is_entry_level_posting({"title": "Senior Engineer", "description": "5+ years"}) is False
        assert is_entry_level_posting({}) is False

    def test_transferable_skills_three_terms(self):
        text = "We value communication, teamwork, and analytical thinking."
        assert has_transferable_skills(text) is True

    def test_transferable_skills_two_terms(self):
        assert has_transferable_skills("Strong communication and teamwork.") is False

    def test_transferable_skills_open_background_phrase(self):
        assert has_transferable_skills("This team is career change friendly.") is True

    def test_transferable_skills_problem_solving_counted_once(self):
        assert has_transferable_skills("problem solving and problem-solving and teamwork") is False

    def test_transferable_skills_empty(self):
        assert has_transferable_skills(None) is False
        assert has_transferable_skills("") is False


class TestRescore:
    def test_desired_role_in_title(self, swe_to_mle):
        c = _candidate(metadata={"title": "Machine Learning Engineer", "location": "Boston"})
        [ranked] = rescore([c], swe_to_mle, is_transition=True)
        assert ranked.final_score == pytest.approx(0.6)
        assert ranked.factors == ["desired_role_in_title"]

    def test_short_original_role_in_title(self, swe_to_mle):
        c = _candidate(metadata={"title": "MLE II"})
        [ranked] = rescore([c], swe_to_mle, is_transition=True)
        assert ranked.final_score == pytest.approx(0.575)
        assert ranked.factors == ["role_acronym_in_title"]

    def test_short_role_needs_whole_word(self):
        prefs = UserPreferences.build("Business Analyst", "PM")
        inside_word = _candidate(metadata={"title": "Software Development Engineer"})
        [ranked] = rescore([inside_word], prefs, is_transition=True)
        assert "role_acronym_in_title" not in ranked.factors
        assert ranked.final_score == pytest.approx(0.5)

    def test_short_role_matches_case_insensitively(self):
        prefs = UserPreferences.build("Business Analyst", "PM")
        [ranked] = rescore([_candidate(metadata={"title": "Senior pm, Payments"})], prefs, True)
        assert "role_acronym_in_title" in ranked.factors

    def test_entry_level_boost_depends_on_transition(self, swe_to_mle):
        transition = rescore([_candidate(is_entry_level=True)], swe_to_mle, True)[0]
        lateral = rescore([_candidate(is_entry_level=True)], swe_to_mle, False)[0]
        assert transition.final_score == pytest.approx(0.65)
        assert lateral.final_score == pytest.approx(0.55)
        assert transition.factors == ["entry_level"]

    def test_transferable_skills_boost(self, swe_to_mle):
        [ranked] = rescore([_candidate(has_transferable_skills=True)], swe_to_mle, True)
        assert ranked.final_score == pytest.approx(0.6)
        assert ranked.factors == ["transferable_skills"]

    def test_remote_boost(self, same_domain):
        c = _candidate(metadata={"title": "Account Executive", "location": "Remote - US"})
        [ranked] = rescore([c], same_domain, False)
        assert ranked.final_score == pytest.approx(0.575)
        assert "remote" in ranked.factors

    def test_current_role_in_title(self):
        prefs = UserPreferences.build(current_role="Analyst", desired_role="Product Manager")
        c = _candidate(metadata={"title": "Senior Analyst"})
        [ranked] = rescore([c], prefs, True)
        assert ranked.factors == ["current_role_in_title"]
        assert ranked.final_score == pytest.approx(0.55)

    def test_corroboration_adds_factor_without_boost(self, swe_to_mle):
        [ranked] = rescore([_candidate(corroborated_by=["title"])], swe_to_mle, True)
        assert ranked.final_score == pytest.approx(0.5)
        assert ranked.factors == ["corroborated_by_title"]

    def test_ceilings_differ_by_mode(self, swe_to_mle):
        def strong():
            return _candidate(
                final_score=0.9,
                is_entry_level=True,
                has_transferable_skills=True,
                metadata={"title": "Machine Learning Engineer"},
            )
        assert rescore([strong()], swe_to_mle, True)[0].final_score == 0.95
        assert rescore([strong()], swe_to_mle, False)[0].final_score == 0.98

    def test_floor(self, swe_to_mle):
        assert rescore([_candidate(final_score=0.3)], swe_to_mle, True)[0].final_score == 0.4

    def test_sorted_descending_with_stable_ties(self, swe_to_mle):
        candidates = [
            _candidate(0.5, rank=0, id="first"),
            _candidate(0.7, rank=1, id="best"),
            _candidate(0.5, rank=2, id="second"),
        ]
        ranked = rescore(candidates, swe_to_mle, True)
        assert [c.id for c in ranked] == ["best", "first", "second"]

    @pytest.mark.parametrize("transition", [True, False])
    def test_scores_always_within_bounds(self, same_domain, transition):
        candidates = []
        flags = itertools.product([True, False], repeat=2)
        for rank, ((entry, transferable), score) in enumerate(
            itertools.product(flags, [0.3, 0.5, 0.7, 0.95])
        ):
            candidates.append(_candidate(
                final_score=score,
                rank=rank,
                is_entry_level=entry,
                has_transferable_skills=transferable,
                metadata={"title": "Senior Software Engineer", "location": "Remote"},
            ))
        ceiling = 0.95 if transition else 0.98
        for c in rescore(candidates, same_domain, transition):
            assert 0.4 <= c.final_score <= ceiling
