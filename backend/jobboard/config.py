from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "JobBoard"
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 8000
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]

    # Issued session tokens live in memory only; a restart logs everyone out.
    token_ttl_seconds: int = 24 * 60 * 60

    # Upload transport cap. Intake validation itself does not look at size.
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MiB
    accepted_resume_extensions: list[str] = [".pdf", ".doc", ".docx"]
    accepted_resume_mime_types: list[str] = [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/octet-stream",
    ]

    # Client side
    api_base_url: str = "http://127.0.0.1:8000/api"
    request_timeout_seconds: float = 10.0
    tokeninfo_url: str = "https://oauth2.googleapis.com/tokeninfo"
    federated_client_id: str | None = None

    @property
    def db_path(self) -> Path:
        return self.data_path / "db.sqlite"

    @property
    def uploads_dir(self) -> Path:
        return self.data_path / "uploads"

    model_config = {"env_prefix": "JOBBOARD_"}


settings = Settings()
