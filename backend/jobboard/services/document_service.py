import logging
import os
import shutil
from pathlib import Path

from jobboard.config import settings
from jobboard.utils.filesystem import ensure_job_upload_dir, sanitize_filename
from jobboard.utils.hashing import sha256_bytes

logger = logging.getLogger("jobboard.documents")


def store_resume(job_id: str, filename: str, content: bytes) -> tuple[str, str, int]:
    """Store a resume immutably. Returns (relative_path, file_hash, file_size).

    Files are content-addressed per job, so a repeated submission of the same
    file reuses the stored copy.
    """
    file_hash = sha256_bytes(content)
    safe_name = sanitize_filename(filename)
    stored_name = f"{file_hash[:8]}_{safe_name}"

    job_dir = ensure_job_upload_dir(job_id)
    doc_path = job_dir / stored_name
    if not doc_path.exists():
        doc_path.write_bytes(content)
        os.chmod(doc_path, 0o444)

    relative_path = f"uploads/{job_id}/{stored_name}"
    return relative_path, file_hash, len(content)


def get_resume_full_path(stored_path: str, data_path: Path) -> Path:
    return data_path / stored_path


def remove_job_uploads(job_id: str, data_path: Path | None = None):
    """Delete the resumes stored for a job once its rows are gone."""
    job_dir = (data_path or settings.data_path) / "uploads" / job_id
    if not job_dir.is_dir():
        return
    try:
        shutil.rmtree(job_dir)
    except OSError as exc:
        # The job is already deleted; leftover files are only disk space.
        logger.warning("Could not remove uploads for job %s: %s", job_id, exc)
