from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.dependencies import require_user
from jobboard.errors import JobNotFound, UnsupportedDocument, ValidationFailed
from jobboard.models.application import Application
from jobboard.models.user import User
from jobboard.schemas.application import ApplicationResponse
from jobboard.services.application_service import ResumeDocument, submit_application
from jobboard.services.document_service import get_resume_full_path
from jobboard.services.job_service import get_owned_job

router = APIRouter(prefix="/applications", tags=["applications"])


def _application_to_response(app: Application) -> ApplicationResponse:
    return ApplicationResponse(
        id=app.id,
        job_id=app.job_id,
        name=app.name,
        email=app.email,
        location=app.location,
        college_name=app.college_name,
        tenth_percentage=app.tenth_percentage,
        degree_percentage=app.degree_percentage,
        selected_language=app.selected_language,
        communication=app.communication,
        resume_filename=app.resume_filename,
        resume_hash=app.resume_hash,
        resume_size_bytes=app.resume_size_bytes,
        resume_mime_type=app.resume_mime_type,
        submitted_at=app.submitted_at,
    )


async def _read_upload(file: UploadFile | None) -> ResumeDocument | None:
    if file is None or not file.filename:
        return None
    # Transport-level cap, checked while streaming.
    max_bytes = settings.max_upload_bytes
    size = 0
    chunks: list[bytes] = []
    while True:
        chunk = await file.read(1024 * 1024)
        if not chunk:
            break
        size += len(chunk)
        if size > max_bytes:
            raise HTTPException(status_code=413, detail=f"File too large (max {max_bytes} bytes)")
        chunks.append(chunk)
    return ResumeDocument(filename=file.filename, content=b"".join(chunks), content_type=file.content_type)


@router.post("", response_model=ApplicationResponse, status_code=201)
async def create_application(
    job_id: str | None = Form(None, alias="jobId"),
    name: str | None = Form(None),
    email: str | None = Form(None),
    location: str | None = Form(None),
    college_name: str | None = Form(None, alias="collegeName"),
    tenth_percentage: str | None = Form(None, alias="tenthPercentage"),
    degree_percentage: str | None = Form(None, alias="degreePercentage"),
    selected_language: str | None = Form(None, alias="selectedLanguage"),
    communication: str | None = Form(None),
    resume: UploadFile | None = File(None),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    fields = {
        "name": name,
        "email": email,
        "location": location,
        "collegeName": college_name,
        "tenthPercentage": tenth_percentage,
        "degreePercentage": degree_percentage,
        "selectedLanguage": selected_language,
        "communication": communication,
    }
    document = await _read_upload(resume)

    try:
        application = submit_application(db, job_id or "", fields, document)
    except JobNotFound as exc:
        raise HTTPException(status_code=404, detail=exc.to_detail())
    except UnsupportedDocument as exc:
        raise HTTPException(status_code=415, detail=exc.to_detail())
    except ValidationFailed as exc:
        raise HTTPException(status_code=422, detail=exc.to_detail())
    return _application_to_response(application)


@router.get("/{application_id}/resume")
async def download_resume(application_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    """Download an applicant's resume. Restricted to the owner of the target job."""
    application = db.query(Application).filter(Application.id == application_id).first()
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    get_owned_job(application.job_id, user, db)

    full_path = get_resume_full_path(application.resume_path, settings.data_path)
    if not full_path.exists():
        raise HTTPException(status_code=404, detail="Resume file missing from storage")

    return FileResponse(
        path=str(full_path),
        filename=application.resume_filename,
        media_type=application.resume_mime_type or "application/octet-stream",
    )
