"""Professional shorthand expansion for role strings and resume text.

Users type roles the way they say them ("Sr SWE", "MLE", "PM"). Job
postings are usually written out in full, so both forms are kept around
for matching.
"""

import re

# Order matters: when no token matches exactly, the first key in this table
# that occurs as a whole word anywhere in the text wins.
ACRONYMS: dict[str, str] = {
    # Engineering roles
    "swe": "software engineer",
    "sde": "software development engineer",
    "sdet": "software development engineer in test",
    "mle": "machine learning engineer",
    "sre": "site reliability engineer",
    "fe": "frontend",
    "fs": "full stack",
    "qa": "quality assurance",
    "qae": "quality assurance engineer",
    "de": "data engineer",
    "ds": "data scientist",
    "da": "data analyst",
    "ba": "business analyst",
    "bi": "business intelligence",
    "ml": "machine learning",
    "ai": "artificial intelligence",
    "nlp": "natural language processing",
    "cv": "computer vision",
    # Management and product
    "pm": "product manager",
    "tpm": "technical program manager",
    "apm": "associate product manager",
    "em": "engineering manager",
    "po": "product owner",
    "cto": "chief technology officer",
    "cio": "chief information officer",
    "ceo": "chief executive officer",
    "cfo": "chief financial officer",
    "coo": "chief operating officer",
    "vp": "vice president",
    # Design
    "ux": "user experience",
    "ui": "user interface",
    # Security and ops
    "soc": "security operations center",
    "ciso": "chief information security officer",
    "hr": "human resources",
    # Seniority
    "sr": "senior",
    "jr": "junior",
    "mgr": "manager",
    "eng": "engineer",
    "dev": "developer",
}

_WORD_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(rf"\b{re.escape(key)}\b", re.IGNORECASE), expansion)
    for key, expansion in ACRONYMS.items()
]


def expand(text: str) -> str:
    """Expand professional acronyms in ``text``.

    Precedence:
    1. the whole (trimmed) input is an acronym -> its expansion
    2. whitespace tokens that are acronyms are replaced in place
    3. the first table entry found as a whole word is substituted once
    4. otherwise the input is returned unchanged
    """
    if not text:
        return text

    whole = ACRONYMS.get(text.strip().lower())
    if whole is not None:
        return whole

    tokens = text.split()
    replaced = False
    expanded_tokens: list[str] = []
    for token in tokens:
        expansion = ACRONYMS.get(token.lower())
        if expansion is not None:
            expanded_tokens.append(expansion)
            replaced = True
        else:
            expanded_tokens.append(token)
    if replaced:
        return " ".join(expanded_tokens)

    for pattern, expansion in _WORD_PATTERNS:
        if pattern.search(text):
            return pattern.sub(expansion, text, count=1)

    return text


def expand_acronyms_in_text(text: str) -> str:
    """Append expansions next to acronyms found in longer text.

    "Built ML pipelines" -> "Built ML machine learning pipelines". The
    literal token is kept so exact matches against postings still work.
    """
    if not text:
        return text

    words: list[str] = []
    for word in text.split():
        words.append(word)
        expanded = expand(word)
        if expanded != word:
            words.append(expanded)
    return " ".join(words)
