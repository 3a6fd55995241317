"""Cover letter generation with a template fallback."""

import logging

from models.requests import CoverLetterRequest
from models.responses import CoverLetterResponse
from services import gemini_client, prompt_builder
from services.keyword_extractor import extract_key_terms

logger = logging.getLogger(__name__)

TEMPLATE_SKILL_COUNT = 5


def template_cover_letter(request: CoverLetterRequest) -> str:
    """Deterministic letter built from the resume's most frequent terms."""
    resume_terms = extract_key_terms(request.resume_text)
    jd_terms = set(extract_key_terms(request.job_description))
    shared = [t for t in resume_terms if t in jd_terms][:TEMPLATE_SKILL_COUNT]
    highlights = shared or resume_terms[:TEMPLATE_SKILL_COUNT]
    skills_line = ", ".join(highlights) if highlights else "a broad and adaptable skill set"
    signature = request.full_name or "[Your Name]"

    return (
        "Dear Hiring Manager,\n\n"
        f"I am writing to express my interest in the {request.job_title} position at "
        f"{request.company}. After reviewing the role, I believe my background is a "
        "strong fit for what your team needs.\n\n"
        f"My experience includes work with {skills_line}. I have applied these skills "
        "to deliver results, collaborate across teams and learn quickly in new "
        "environments.\n\n"
        f"I am excited about the opportunity to contribute to {request.company} and would "
        "welcome the chance to discuss how I can help your team succeed. Thank you for "
        "considering my application.\n\n"
        f"Sincerely,\n{signature}"
    )


async def generate_cover_letter(request: CoverLetterRequest) -> CoverLetterResponse:
    prompt = prompt_builder.build_cover_letter_prompt(
        resume_text=request.resume_text,
        job_title=request.job_title,
        company=request.company,
        job_description=request.job_description,
        full_name=request.full_name,
        desired_role=request.desired_role,
    )
    text = await gemini_client.generate_text(prompt)

    degraded = False
    if not text:
        logger.warning("Gemini cover letter unavailable, using template")
        text = template_cover_letter(request)
        degraded = True

    return CoverLetterResponse(
        cover_letter=text,
        job_title=request.job_title,
        company=request.company,
        degraded=degraded,
    )
