from pydantic import BaseModel


class JobMatch(BaseModel):
    id: str
    job_title: str = "Unknown Position"
    company: str = "Unknown Company"
    location: str = "Multiple Locations"
    employment_type: str = "Not Specified"
    salary: str = ""
    description: str = ""
    apply_link: str = "#"
    posted_at: str = ""
    remote: bool = False
    match_score: float = 0.0
    background_match_score: float = 0.0
    goal_match_score: float = 0.0
    is_entry_level: bool = False
    has_transferable_skills: bool = False
    factors: list[str] = []
    match_quality: str = ""
    match_explanation: str = ""
    matched_with: str = ""


class ProfileSummary(BaseModel):
    full_name: str | None = None
    current_role: str
    desired_role: str
    current_role_expanded: str
    desired_role_expanded: str
    location: str | None = None
    remote: bool = False
    additional_info: str | None = None
    resume_text: str = ""  # echoed back for cover letter generation


class MatchResponse(BaseModel):
    profile: ProfileSummary
    matches: list[JobMatch] = []
    is_transition: bool = False
    embedding_method: str = "standard"
    embedding_provider: str = "fallback"
    fallback_used: bool = False  # synthesized postings, nothing was retrieved
    degraded: bool = False  # at least one retrieval query failed


class CoverLetterResponse(BaseModel):
    cover_letter: str
    job_title: str
    company: str
    degraded: bool = False
