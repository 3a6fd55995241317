"""Display strings for ranked candidates."""

from models.schemas.candidate import CandidateMatch
from models.schemas.preferences import UserPreferences

TRANSITION_LABELS: list[tuple[float, str]] = [
    (0.75, "Excellent Transition Match"),
    (0.6, "Strong Transition Potential"),
    (0.45, "Good Transition Opportunity"),
    (0.3, "Possible with Upskilling"),
]
TRANSITION_FLOOR_LABEL = "Significant Qualification Gap"

MATCH_LABELS: list[tuple[float, str]] = [
    (0.8, "Excellent Match"),
    (0.7, "Strong Match"),
    (0.6, "Good Match"),
    (0.4, "Fair Match"),
]
MATCH_FLOOR_LABEL = "Partial Match"


def match_quality_label(score: float, is_transition: bool) -> str:
    tiers = TRANSITION_LABELS if is_transition else MATCH_LABELS
    for threshold, label in tiers:
        if score > threshold:
            return label
    return TRANSITION_FLOOR_LABEL if is_transition else MATCH_FLOOR_LABEL


def match_explanation(
    candidate: CandidateMatch,
    is_transition: bool,
    preferences: UserPreferences,
) -> str:
    """One sentence on why this posting ranked where it did."""
    desired = preferences.desired_role_expanded or preferences.desired_role
    current = preferences.current_role_expanded or preferences.current_role
    background = candidate.background_match_score
    goal = candidate.goal_match_score

    if is_transition:
        if candidate.is_entry_level:
            return (
                f"An entry-level opening that offers a practical path from {current} into {desired}."
            )
        if candidate.has_transferable_skills:
            return (
                f"This role values transferable skills, so your {current} experience carries over to {desired} work."
            )
        if goal > background:
            return f"Closely aligned with your goal of moving into {desired}."
        if background > goal:
            return f"Builds on your {current} background while moving you toward {desired}."
    else:
        if background > goal:
            return f"Your current skills and experience as a {current} are a strong fit for this role."
        if goal > background:
            return f"This role lines up well with your target of {desired}."
        if candidate.is_entry_level:
            return f"An accessible {desired} opening that fits your experience level."

    return f"Matched on overall similarity between your resume and this {desired} role."


def matched_with(preferences: UserPreferences) -> str:
    """Desired role as typed, with its expansion when that differs."""
    original = preferences.desired_role
    expanded = preferences.desired_role_expanded
    if expanded and expanded.lower() != original.lower():
        return f"{original} ({expanded})"
    return original
