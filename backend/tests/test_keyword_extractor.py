from services.acronyms import expand
from services.keyword_extractor import MAX_KEY_TERMS, extract_key_terms, tokenize


def test_extract_key_terms_empty():
    assert extract_key_terms("") == []
    assert extract_key_terms("   ") == []


def test_short_tokens_and_stop_words_dropped():
    terms = extract_key_terms("The API and SQL with python python data")
    assert terms == ["python", "data"]


def test_frequency_order_with_first_seen_ties():
    terms = extract_key_terms("kafka redis kafka redis spark")
    assert terms == ["kafka", "redis", "spark"]


def test_lowercases_and_splits_on_punctuation():
    assert tokenize("Python/Django, PostgreSQL!") == ["python", "django", "postgresql"]


def test_limit_is_fifty():
    text = " ".join(f"term{i:02d}" for i in range(60))
    assert len(extract_key_terms(text)) == MAX_KEY_TERMS


def test_custom_limit():
    assert extract_key_terms("alpha bravo charlie delta", limit=2) == ["alpha", "bravo"]


def test_expanded_role_terms_are_extracted():
    role = expand("PM")
    text = (
        f"Looking for a {role} to own the roadmap. The {role} partners with "
        "engineering and design, runs discovery and writes product requirements."
    )
    terms = extract_key_terms(text)
    assert "product" in terms
    assert "manager" in terms
