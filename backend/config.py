import json
import os
from pathlib import Path

from pydantic_settings import BaseSettings

BACKEND_DIR = Path(__file__).resolve().parent


def _parse_cors_origins() -> list[str] | None:
    """Read CORS_ORIGINS as a JSON list or a comma-separated string."""
    raw = os.environ.get("CORS_ORIGINS", "").strip()
    if not raw:
        return None
    if raw.startswith("["):
        return json.loads(raw)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    max_upload_size_mb: int = 5
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Embeddings
    embedding_provider: str = "gemini"  # "gemini" | "sbert" | "none"
    embedding_model: str = "text-embedding-004"
    sbert_model_name: str = "TechWolf/JobBERT-v2"
    embedding_dim: int = 768  # must match the postings index
    max_embed_chars: int = 8000
    embed_concurrency: int = 8  # catalog embedding calls in flight

    # Matching
    jobs_data_path: Path = BACKEND_DIR / "data" / "jobs.json"
    top_n_results: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
