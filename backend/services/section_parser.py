"""Resume section extraction and weighted embedding text."""

import logging
import re

from services import document_parser
from services.acronyms import expand_acronyms_in_text

logger = logging.getLogger(__name__)

# Candidate header names per canonical section, tried in order
SECTION_HEADERS: dict[str, list[str]] = {
    "experience": ["work experience", "professional experience", "employment history", "experience"],
    "skills": ["technical skills", "core competencies", "skills", "technologies"],
    "education": ["education", "academic background"],
    "projects": ["personal projects", "projects"],
}

# Any of these ends the section currently being captured
KNOWN_HEADERS: list[str] = [
    "experience", "employment", "skills", "competencies", "technologies",
    "education", "academic", "projects", "certifications", "certificates",
    "awards", "publications", "summary", "objective", "interests",
    "references", "volunteer",
]

# skills x3, experience x2, projects x1, education x1
SECTION_WEIGHTS: list[tuple[str, int]] = [
    ("skills", 3),
    ("experience", 2),
    ("projects", 1),
    ("education", 1),
]

_NEXT_HEADER = "|".join(re.escape(h) for h in KNOWN_HEADERS)

_WHITESPACE_RE = re.compile(r"\s+")
_BOILERPLATE_RE = [
    re.compile(r"references\s+(?:are\s+)?available\s+(?:up)?on\s+request\.?", re.IGNORECASE),
    re.compile(r"page\s+\d+\s+of\s+\d+", re.IGNORECASE),
]

_section_patterns: dict[str, re.Pattern] = {}


def _header_pattern(header: str) -> re.Pattern:
    pattern = _section_patterns.get(header)
    if pattern is None:
        pattern = re.compile(
            rf"\b{re.escape(header)}\b[:\s]*(.*?)(?=\b(?:{_NEXT_HEADER})\b|$)",
            re.IGNORECASE | re.DOTALL,
        )
        _section_patterns[header] = pattern
    return pattern


def extract_section(text: str, header_names: list[str]) -> str:
    """Return the text following the first header in ``header_names`` that
    captures something, up to the next known header. Empty string if none.
    """
    if not text:
        return ""
    for header in header_names:
        match = _header_pattern(header).search(text)
        if match:
            captured = match.group(1).strip()
            if captured:
                return captured
    return ""


def clean_resume_text(text: str) -> str:
    """Collapse whitespace and drop page furniture."""
    cleaned = text or ""
    for pattern in _BOILERPLATE_RE:
        cleaned = pattern.sub(" ", cleaned)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def extract_sections(text: str) -> dict[str, str]:
    """Split cleaned resume text into the four weighted sections.

    Each section has its acronyms expanded in place.
    """
    return {
        name: expand_acronyms_in_text(extract_section(text, headers))
        for name, headers in SECTION_HEADERS.items()
    }


def build_weighted_text(sections: dict[str, str], fallback: str = "") -> str:
    """Concatenate sections with repetition weights.

    When no section header was found the ``fallback`` text is used as is.
    """
    parts: list[str] = []
    for name, repeat in SECTION_WEIGHTS:
        content = sections.get(name, "")
        if content:
            parts.extend([content] * repeat)
    if not parts:
        logger.info("No resume sections detected, embedding full text")
        return expand_acronyms_in_text(fallback)
    return " ".join(parts)


def prepare_resume_text(raw_text: str) -> tuple[str, dict[str, str]]:
    """Clean, section and weight already-extracted resume text."""
    cleaned = clean_resume_text(raw_text)
    sections = extract_sections(cleaned)
    return build_weighted_text(sections, fallback=cleaned), sections


def extract_text_from_resume(filename: str, content: bytes) -> tuple[str, str]:
    """Read an uploaded resume and build its weighted embedding text.

    Returns ``(raw_text, weighted_text)``. UnsupportedFormatError from the
    document parser propagates to the caller.
    """
    raw_text = document_parser.extract_text(filename, content)
    weighted, sections = prepare_resume_text(raw_text)
    logger.debug(
        "Resume sections: %s",
        {name: len(value) for name, value in sections.items()},
    )
    return raw_text, weighted
