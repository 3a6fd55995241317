"""Prompt templates for Gemini API calls."""

MAX_RESUME_CHARS = 6000
MAX_JD_CHARS = 4000


def build_cover_letter_prompt(
    resume_text: str,
    job_title: str,
    company: str,
    job_description: str,
    full_name: str | None = None,
    desired_role: str | None = None,
) -> str:
    """Cover letter tailored to one posting, grounded in the resume."""
    signature = full_name or "[Your Name]"
    goal_line = ""
    if desired_role and desired_role.lower() not in job_title.lower():
        goal_line = (
            f"\nThe candidate is working toward a {desired_role} career; frame "
            f"relevant experience as transferable where it is not a direct match.\n"
        )

    return f"""You are an experienced career coach writing a cover letter for a job application.

Write a professional cover letter for the {job_title} position at {company}.
{goal_line}
RULES:
- 3-4 paragraphs, under 400 words
- Only mention experience, skills and achievements that appear in the resume
- Reference specific requirements from the job description
- Open with "Dear Hiring Manager," and close with "Sincerely," followed by {signature}
- Plain text only: no markdown, no placeholders other than the signature

RESUME:
---
{resume_text[:MAX_RESUME_CHARS]}
---

JOB DESCRIPTION:
---
{job_description[:MAX_JD_CHARS]}
---"""
