"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    skelgraph_env: str = "development"
    skelgraph_log_level: str = "info"

    # Boundary extraction
    skelgraph_marching_step: int = 1
    skelgraph_iso_level: float = 0.5

    # Absolute slack for model inclusion tests
    skelgraph_inclusion_tol: float = 1e-9

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
