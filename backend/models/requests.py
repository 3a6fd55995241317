from pydantic import BaseModel, Field


class QuickMatchRequest(BaseModel):
    resume_text: str = Field(..., min_length=1, max_length=50000, description="Plain text resume content")
    current_role: str = Field(..., min_length=1, max_length=200, description="Role the candidate holds today")
    desired_role: str = Field(..., min_length=1, max_length=200, description="Role the candidate wants next")
    full_name: str | None = Field(None, max_length=200)
    location: str | None = Field(None, max_length=200, description="Preferred location substring")
    remote: bool = False
    additional_info: str | None = Field(None, max_length=5000, description="Free-text preferences")
    session_id: str | None = Field(None, max_length=200)


class CoverLetterRequest(BaseModel):
    job_title: str = Field(..., min_length=1, max_length=200)
    company: str = Field(..., min_length=1, max_length=200)
    job_description: str = Field(..., min_length=1, max_length=10000)
    resume_text: str = Field(..., min_length=1, max_length=50000)
    full_name: str | None = Field(None, max_length=200)
    desired_role: str | None = Field(None, max_length=200)
