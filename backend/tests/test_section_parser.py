import pytest

from services.document_parser import UnsupportedFormatError
from services.section_parser import (
    build_weighted_text,
    clean_resume_text,
    extract_section,
    extract_sections,
    extract_text_from_resume,
    prepare_resume_text,
)


def test_extract_section_stops_at_next_header():
    text = "Skills: Python, SQL Experience Built APIs"
    assert extract_section(text, ["skills"]) == "Python, SQL"


def test_extract_section_case_insensitive_and_multiline():
    text = "EDUCATION\nB.S. Computer Science\nState University\nPROJECTS\nChatbot"
    assert extract_section(text, ["education"]) == "B.S. Computer Science\nState University"


def test_extract_section_first_candidate_wins():
    text = "Technical Skills: Go, Rust Education BS"
    assert extract_section(text, ["technical skills", "skills"]) == "Go, Rust"


def test_extract_section_no_match():
    assert extract_section("Just a paragraph of text", ["skills"]) == ""
    assert extract_section("", ["skills"]) == ""


def test_clean_resume_text_strips_boilerplate():
    raw = "Python\n\n  SQL  References available upon request Page 2 of 3"
    assert clean_resume_text(raw) == "Python SQL"


def test_extract_sections(sample_resume):
    sections = extract_sections(clean_resume_text(sample_resume))
    assert "PyTorch" in sections["skills"]
    assert "machine learning" in sections["skills"]  # "ML" expanded alongside
    assert "Harbor Payments" in sections["experience"]
    assert "Computer Science" in sections["education"]
    assert "Recommendation engine" in sections["projects"]


def test_build_weighted_text_repeats_sections():
    sections = {"skills": "A", "experience": "B", "projects": "C", "education": "D"}
    assert build_weighted_text(sections) == "A A A B B C D"


def test_build_weighted_text_skips_empty_sections():
    sections = {"skills": "A", "experience": "", "projects": "", "education": "D"}
    assert build_weighted_text(sections) == "A A A D"


def test_build_weighted_text_falls_back_to_full_text():
    empty = {"skills": "", "experience": "", "projects": "", "education": ""}
    assert build_weighted_text(empty, fallback="plain ML text") == "plain ML machine learning text"


def test_prepare_resume_text_weights_experience_twice(sample_resume):
    weighted, _ = prepare_resume_text(sample_resume)
    assert weighted.count("Harbor Payments") == 2
    assert "References available" not in weighted


def test_extract_text_from_resume_txt(sample_resume):
    raw, weighted = extract_text_from_resume("resume.txt", sample_resume.encode())
    assert raw == sample_resume.strip()
    assert weighted.count("Harbor Payments") == 2


def test_extract_text_from_resume_unsupported():
    with pytest.raises(UnsupportedFormatError):
        extract_text_from_resume("resume.odt", b"whatever")
