"""
Runtime configuration.

Lambda@Edge functions do not receive environment variables, so every field
carries the deployment value as its default. Environment variables and a
local .env file still override them when running tests or the preview server.
The IMGRESIZE_ prefix keeps the Lambda runtime's own AWS_REGION (the edge
replica's region, not the bucket's) from leaking into aws_region.
"""
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="IMGRESIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── AWS ───────────────────────────────────────────────────────────────────
    aws_region: str = "ap-northeast-2"
    s3_bucket_images: str = "cf-image-resize-test-bucket"

    # ── Limits ────────────────────────────────────────────────────────────────
    max_origin_bytes: int = 50_000_000
    max_output_bytes: int = 1_000_000

    # ── Response ──────────────────────────────────────────────────────────────
    cache_max_age_seconds: int = 30 * 24 * 60 * 60  # 30 days

    # What to do with a transform request for a missing or unsupported
    # extension: "reject" answers 400, "passthrough" forwards it untouched.
    unsupported_extension_policy: Literal["reject", "passthrough"] = "reject"

    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
