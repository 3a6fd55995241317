"""Frequency-based key-term extraction.

Used to augment embedding payloads and to seed the deterministic
fallback embedding when the live provider is unavailable.
"""

import re
from collections import Counter

MAX_KEY_TERMS = 50
MIN_TERM_LENGTH = 4  # tokens of 3 characters or fewer are dropped

_TOKEN_SPLIT_RE = re.compile(r"\W+")

STOP_WORDS: frozenset[str] = frozenset({
    # English function words long enough to survive the length filter
    "about", "above", "after", "again", "against", "also", "among", "because",
    "been", "before", "being", "below", "between", "both", "cannot", "could",
    "does", "doing", "down", "during", "each", "either", "else", "ever",
    "every", "from", "further", "have", "having", "here", "hers", "herself",
    "himself", "into", "itself", "just", "least", "less", "many", "more",
    "most", "much", "must", "myself", "neither", "never", "once", "only",
    "other", "ours", "ourselves", "over", "same", "shall", "should", "since",
    "some", "such", "than", "that", "their", "theirs", "them", "themselves",
    "then", "there", "these", "they", "this", "those", "through", "under",
    "until", "upon", "very", "were", "what", "when", "where", "which",
    "while", "whom", "whose", "will", "with", "within", "without", "would",
    "your", "yours", "yourself", "yourselves",
    # Resume filler
    "including", "using", "used", "various", "responsible", "responsibilities",
    "worked", "working", "work", "years", "year", "months", "month",
    "present", "current", "currently", "etc",
})


def tokenize(text: str) -> list[str]:
    """Lowercased tokens that survive the length and stop-word filters."""
    return [
        token
        for token in _TOKEN_SPLIT_RE.split(text.lower())
        if len(token) >= MIN_TERM_LENGTH and token not in STOP_WORDS
    ]


def extract_key_terms(text: str, limit: int = MAX_KEY_TERMS) -> list[str]:
    """Return up to ``limit`` terms, most frequent first.

    Ties keep first-seen order (Counter preserves insertion order and
    ``sorted`` is stable).
    """
    if not text or not text.strip():
        return []

    counts = Counter(tokenize(text))
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [term for term, _ in ranked[:limit]]
