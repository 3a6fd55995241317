"""Career-transition classifier.

A move is a transition when the current and desired roles share no
professional-domain cluster.
"""

import re

from services.acronyms import ACRONYMS

DOMAIN_CLUSTERS: dict[str, frozenset[str]] = {
    "software": frozenset({
        "software", "developer", "engineer", "engineering", "programmer",
        "frontend", "backend", "fullstack", "full-stack", "web", "mobile",
        "ios", "android", "swe", "sde", "sdet", "coder", "stack", "qa",
        "quality", "assurance", "tester",
    }),
    "infrastructure": frozenset({
        "devops", "sre", "infrastructure", "cloud", "platform", "reliability",
        "operations", "sysadmin", "administrator", "network", "systems",
    }),
    "data": frozenset({
        "data", "analyst", "analytics", "scientist", "science", "machine",
        "learning", "ml", "mle", "ai", "statistician", "bi", "intelligence",
        "vision",
    }),
    "security": frozenset({
        "security", "cyber", "cybersecurity", "infosec", "penetration",
        "pentester", "soc", "ciso",
    }),
    "management": frozenset({
        "manager", "director", "lead", "product", "head", "vp", "chief",
        "program", "project", "pm", "tpm", "owner", "president",
    }),
    "design": frozenset({
        "design", "designer", "ux", "ui", "graphic", "visual", "creative",
        "experience", "interface",
    }),
}

_WORD_RE = re.compile(r"[a-z0-9+#-]+")

# Seniority and generic titles say nothing about the domain
GENERIC_ROLE_WORDS = frozenset({"engineer", "engineering", "senior", "junior"})


def _words(text: str) -> set[str]:
    return set(_WORD_RE.findall(text.lower()))


def role_clusters(role: str) -> set[str]:
    """Names of every cluster with a term among the role's words.

    An acronym also counts the domain words of its expansion, so "DS" lands
    in the same cluster as "Data Scientist".
    """
    words = _words(role)
    for word in list(words):
        expansion = ACRONYMS.get(word)
        if expansion:
            words |= _words(expansion) - GENERIC_ROLE_WORDS
    return {name for name, terms in DOMAIN_CLUSTERS.items() if words & terms}


def is_transition(current_role: str | None, desired_role: str | None) -> bool:
    current = (current_role or "").strip().lower()
    desired = (desired_role or "").strip().lower()
    if not current or not desired:
        return False
    if current == desired or current in desired or desired in current:
        return False
    return not (role_clusters(current) & role_clusters(desired))
