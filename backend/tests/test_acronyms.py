import pytest

from services.acronyms import ACRONYMS, expand, expand_acronyms_in_text


def test_expand_whole_input():
    assert expand("SWE") == "software engineer"
    assert expand("  mle ") == "machine learning engineer"
    assert expand("PM") == "product manager"


def test_expand_tokens():
    assert expand("Sr SWE") == "senior software engineer"
    assert expand("Senior PM at startup") == "Senior product manager at startup"


def test_expand_whole_word_scan_substitutes_once():
    # "ML/AI" is not a whitespace token match, so the table scan kicks in
    assert expand("ML/AI researcher") == "machine learning/AI researcher"


def test_expand_unchanged():
    assert expand("Data Analyst") == "Data Analyst"
    assert expand("Teacher") == "Teacher"


def test_expand_empty():
    assert expand("") == ""


@pytest.mark.parametrize("phrase", [
    "software engineer",
    "senior software engineer",
    "machine learning engineer",
    "product manager",
    "site reliability engineer",
])
def test_expand_is_idempotent_on_expanded_phrases(phrase):
    assert expand(phrase) == phrase
    assert expand(expand(phrase)) == expand(phrase)


def test_every_expansion_is_stable():
    for expansion in ACRONYMS.values():
        assert expand(expansion) == expansion


def test_expand_acronyms_in_text_keeps_original():
    assert expand_acronyms_in_text("Built ML pipelines") == "Built ML machine learning pipelines"


def test_expand_acronyms_in_text_no_acronyms():
    text = "Python developer with Docker experience"
    assert expand_acronyms_in_text(text) == text


def test_expand_acronyms_in_text_empty():
    assert expand_acronyms_in_text("") == ""
