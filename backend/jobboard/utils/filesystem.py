from pathlib import Path
from jobboard.config import settings


def ensure_data_dirs(data_path: Path | None = None) -> Path:
    path = data_path or settings.data_path
    path.mkdir(parents=True, exist_ok=True)
    (path / "uploads").mkdir(exist_ok=True)
    return path


def ensure_job_upload_dir(job_id: str, data_path: Path | None = None) -> Path:
    path = data_path or settings.data_path
    job_dir = path / "uploads" / job_id
    job_dir.mkdir(parents=True, exist_ok=True)
    return job_dir


def sanitize_filename(name: str) -> str:
    keep = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-")
    return "".join(c if c in keep else "_" for c in name)
