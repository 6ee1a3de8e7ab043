# quizblog/config.py
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="QUIZBLOG_", env_file=".env", extra="ignore")

    # Text generation
    hf_token: Optional[str] = Field(default=None, validation_alias="HF_TOKEN")
    model: str = "llama-3-8b"
    llm_backend: str = "hf"          # "hf" (Inference API) or "local" (transformers)
    max_new_tokens: int = 300

    # Content + build
    posts_dir: str = "_posts"
    out_dir: str = "out"
    api_url: str = "/api/questions"
    default_og_image: str = "https://fleetingnotes.app/favicon/512.png"
    total_pages: int = 120

    # Server
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
