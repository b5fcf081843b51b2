"""
Application intake: validation and storage of a candidate's submission.

Validation fails fast and reports the first broken rule, in this order:
job exists, required text present, percentages in [0, 100], communication
score in [1, 10], language in the closed set, resume present and accepted.
The same function runs on the server (authoritative) and in the client
before upload.
"""
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Mapping

from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.errors import (
    InvalidChoice,
    JobNotFound,
    OutOfRange,
    UnsupportedDocument,
    ValidationFailed,
)
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.schemas.application import ApplicationCreate
from jobboard.services.document_service import store_resume

logger = logging.getLogger("jobboard.intake")

LANGUAGES = ("Java", "Python", "MERN", "Software Testing")

REQUIRED_TEXT_FIELDS = ("name", "email", "location", "collegeName")
PERCENTAGE_FIELDS = ("tenthPercentage", "degreePercentage")


@dataclass(frozen=True)
class ResumeDocument:
    filename: str
    content: bytes
    content_type: str | None = None


def _text(fields: Mapping[str, Any], key: str) -> str:
    value = fields.get(key)
    return value.strip() if isinstance(value, str) else ""


def _number(fields: Mapping[str, Any], key: str) -> float:
    value = fields.get(key)
    if isinstance(value, bool) or value is None:
        raise ValidationFailed(f"{key} must be a number", field=key)
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValidationFailed(f"{key} must be a number", field=key) from None
    if not math.isfinite(number):
        raise ValidationFailed(f"{key} must be a number", field=key)
    return number


def _integer(fields: Mapping[str, Any], key: str) -> int:
    number = _number(fields, key)
    if not number.is_integer():
        raise ValidationFailed(f"{key} must be a whole number", field=key)
    return int(number)


def check_document(
    document: ResumeDocument | None,
    accepted_extensions: list[str] | None = None,
    accepted_mime_types: list[str] | None = None,
) -> None:
    extensions = accepted_extensions or settings.accepted_resume_extensions
    mime_types = accepted_mime_types or settings.accepted_resume_mime_types

    if document is None or not document.filename or not document.content:
        raise UnsupportedDocument("A resume document is required", field="resume")
    suffix = PurePath(document.filename).suffix.lower()
    if suffix not in {e.lower() for e in extensions}:
        raise UnsupportedDocument(
            f"Resume must be one of: {', '.join(extensions)}", field="resume"
        )
    if document.content_type:
        media_type = document.content_type.split(";", 1)[0].strip().lower()
        if media_type not in {m.lower() for m in mime_types}:
            raise UnsupportedDocument(f"Unsupported media type: {media_type}", field="resume")


def validate_application(
    job,
    fields: Mapping[str, Any],
    document: ResumeDocument | None,
    accepted_extensions: list[str] | None = None,
    accepted_mime_types: list[str] | None = None,
) -> ApplicationCreate:
    """Validate one submission against ``job`` (``None`` when it does not exist)."""
    if job is None:
        raise JobNotFound()

    for key in REQUIRED_TEXT_FIELDS:
        if not _text(fields, key):
            raise ValidationFailed(f"{key} is required", field=key)

    percentages = {}
    for key in PERCENTAGE_FIELDS:
        value = _number(fields, key)
        if not 0 <= value <= 100:
            raise OutOfRange(f"{key} must be between 0 and 100", field=key)
        percentages[key] = value

    communication = _integer(fields, "communication")
    if not 1 <= communication <= 10:
        raise OutOfRange("communication must be between 1 and 10", field="communication")

    language = _text(fields, "selectedLanguage")
    if language not in LANGUAGES:
        raise InvalidChoice(
            f"selectedLanguage must be one of: {', '.join(LANGUAGES)}", field="selectedLanguage"
        )

    check_document(document, accepted_extensions, accepted_mime_types)

    return ApplicationCreate(
        job_id=job.id,
        name=_text(fields, "name"),
        email=_text(fields, "email"),
        location=_text(fields, "location"),
        college_name=_text(fields, "collegeName"),
        tenth_percentage=percentages["tenthPercentage"],
        degree_percentage=percentages["degreePercentage"],
        selected_language=language,
        communication=communication,
    )


def submit_application(
    db: Session, job_id: str, fields: Mapping[str, Any], document: ResumeDocument | None
) -> Application:
    job = db.query(Job).filter(Job.id == job_id).first()
    data = validate_application(job, fields, document)

    stored_path, file_hash, file_size = store_resume(job.id, document.filename, document.content)

    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    application = Application(
        id=str(uuid.uuid4()),
        job_id=data.job_id,
        name=data.name,
        email=data.email,
        location=data.location,
        college_name=data.college_name,
        tenth_percentage=data.tenth_percentage,
        degree_percentage=data.degree_percentage,
        selected_language=data.selected_language,
        communication=data.communication,
        resume_filename=document.filename,
        resume_path=stored_path,
        resume_hash=file_hash,
        resume_size_bytes=file_size,
        resume_mime_type=document.content_type,
        submitted_at=now,
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    logger.info("Stored application %s for job %s", application.id, job.id)
    return application
