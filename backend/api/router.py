from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_embedder, get_index, get_planner
from config import settings
from models.requests import CoverLetterRequest, QuickMatchRequest
from models.responses import CoverLetterResponse, MatchResponse
from models.schemas.preferences import UserPreferences
from services import cover_letter, section_parser
from services.document_parser import SUPPORTED_EXTENSIONS, UnsupportedFormatError
from services.embeddings import EmbeddingOrchestrator
from services.pipeline.orchestrator import match_profile
from services.pipeline.retrieval import RetrievalPlanner
from services.vector_index import InMemoryJobIndex

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _require_roles(current_role: str | None, desired_role: str | None) -> None:
    if not (current_role or "").strip() or not (desired_role or "").strip():
        raise HTTPException(status_code=400, detail="Both current_role and desired_role are required")


@router.get("/health")
async def health(
    embedder: EmbeddingOrchestrator = Depends(get_embedder),
    index: InMemoryJobIndex = Depends(get_index),
):
    return {
        "status": "ok",
        "embedding_provider": embedder.provider_name,
        "gemini_configured": bool(settings.gemini_api_key),
        "indexed_postings": len(index),
    }


@router.post("/match", response_model=MatchResponse)
@limiter.limit("10/minute")
async def match(
    request: Request,
    resume_file: UploadFile | None = File(None),
    current_role: str = Form(""),
    desired_role: str = Form(""),
    full_name: str | None = Form(None),
    location: str | None = Form(None),
    remote: bool = Form(False),
    additional_info: str | None = Form(None),
    session_id: str | None = Form(None),
    embedder: EmbeddingOrchestrator = Depends(get_embedder),
    planner: RetrievalPlanner = Depends(get_planner),
):
    if resume_file is None or not resume_file.filename:
        raise HTTPException(status_code=400, detail="No resume file uploaded")
    _require_roles(current_role, desired_role)

    # Read and validate size
    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    try:
        resume_text, weighted_text = section_parser.extract_text_from_resume(
            resume_file.filename, content
        )
    except UnsupportedFormatError as e:
        accepted = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise HTTPException(status_code=400, detail=f"{e}. Accepted: {accepted}")
    except Exception:
        raise HTTPException(status_code=400, detail="Could not parse resume file")

    if not resume_text.strip():
        raise HTTPException(status_code=400, detail="No text could be extracted from resume")

    preferences = UserPreferences.build(
        current_role=current_role,
        desired_role=desired_role,
        location=location,
        remote=remote,
        additional_info=additional_info,
    )
    return await match_profile(
        resume_text,
        preferences,
        embedder=embedder,
        planner=planner,
        session_id=session_id,
        weighted_text=weighted_text,
        full_name=full_name,
        top_n=settings.top_n_results,
    )


@router.post("/match/quick", response_model=MatchResponse)
@limiter.limit("10/minute")
async def match_quick(
    request: Request,
    body: QuickMatchRequest,
    embedder: EmbeddingOrchestrator = Depends(get_embedder),
    planner: RetrievalPlanner = Depends(get_planner),
):
    _require_roles(body.current_role, body.desired_role)
    preferences = UserPreferences.build(
        current_role=body.current_role,
        desired_role=body.desired_role,
        location=body.location,
        remote=body.remote,
        additional_info=body.additional_info,
    )
    return await match_profile(
        body.resume_text,
        preferences,
        embedder=embedder,
        planner=planner,
        session_id=body.session_id,
        full_name=body.full_name,
        top_n=settings.top_n_results,
    )


@router.post("/cover-letter", response_model=CoverLetterResponse)
@limiter.limit("10/minute")
async def generate_cover_letter(request: Request, body: CoverLetterRequest):
    return await cover_letter.generate_cover_letter(body)
