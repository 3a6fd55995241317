"""Per-request user preferences with original and acronym-expanded roles."""

from pydantic import BaseModel

from services.acronyms import expand


class UserPreferences(BaseModel):
    """What the candidate told us about themselves.

    The typed role strings are kept verbatim next to their expanded forms;
    both are used for title matching and neither is ever rewritten.
    """
    current_role: str
    desired_role: str
    current_role_expanded: str
    desired_role_expanded: str
    location: str | None = None
    remote: bool = False
    additional_info: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def build(
        cls,
        current_role: str,
        desired_role: str,
        location: str | None = None,
        remote: bool = False,
        additional_info: str | None = None,
    ) -> "UserPreferences":
        current_role = current_role.strip()
        desired_role = desired_role.strip()
        return cls(
            current_role=current_role,
            desired_role=desired_role,
            current_role_expanded=expand(current_role),
            desired_role_expanded=expand(desired_role),
            location=(location or "").strip() or None,
            remote=remote,
            additional_info=(additional_info or "").strip() or None,
        )
