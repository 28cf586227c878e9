from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # GitHub REST API
    github_api_url: str = "https://api.github.com"
    github_api_version: str = "2022-11-28"
    # Fallback token when a caller passes no credentials
    github_token: str = ""

    # Shared HTTP client
    github_request_timeout: float = 30.0
    github_connect_timeout: float = 5.0
    github_max_connections: int = 20

    # Files without inline content are read relative to this directory
    project_root: Path = Path(".")

    # Batch message used when the caller gives none
    default_commit_message: str = "Added following files:"

    # Application
    debug: bool = False


settings = Settings()
