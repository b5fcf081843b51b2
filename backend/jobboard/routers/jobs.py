import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from pydantic import ValidationError
from sqlalchemy import func, text
from sqlalchemy.orm import Session

from jobboard.database import get_db
from jobboard.dependencies import require_user
from jobboard.models.application import Application
from jobboard.models.job import Job
from jobboard.models.user import User
from jobboard.routers.applications import _application_to_response
from jobboard.schemas.application import ApplicationResponse
from jobboard.schemas.job import JobCreate, JobResponse, JobUpdate, OwnerResponse
from jobboard.services.document_service import remove_job_uploads
from jobboard.services.job_service import get_job_or_404, get_owned_job

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_to_response(job: Job, db: Session) -> JobResponse:
    application_count = (
        db.query(func.count(Application.id)).filter(Application.job_id == job.id).scalar()
    )
    return JobResponse(
        id=job.id,
        title=job.title,
        company=job.company,
        description=job.description,
        last_date=job.last_date,
        drive_type=job.drive_type,
        owner=OwnerResponse(id=job.owner.id, name=job.owner.name, email=job.owner.email),
        created_at=job.created_at,
        updated_at=job.updated_at,
        application_count=application_count,
    )


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(req: JobCreate, user: User = Depends(require_user), db: Session = Depends(get_db)):
    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    job = Job(
        id=str(uuid.uuid4()),
        owner_id=user.id,
        title=req.title,
        company=req.company,
        description=req.description,
        last_date=req.last_date.isoformat(),
        drive_type=req.drive_type.value,
        created_at=now,
        updated_at=now,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return _job_to_response(job, db)


@router.get("", response_model=list[JobResponse])
async def list_jobs(
    mine: bool = False,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    query = db.query(Job)
    if mine:
        query = query.filter(Job.owner_id == user.id)
    jobs = query.order_by(Job.created_at.asc(), text("jobs.rowid")).all()
    return [_job_to_response(j, db) for j in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    return _job_to_response(get_job_or_404(job_id, db), db)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: str,
    body: dict = Body(...),
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    # Ownership is settled before the payload is looked at.
    job = get_owned_job(job_id, user, db)
    try:
        req = JobUpdate.model_validate(body)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False)
        for error in errors:
            error["loc"] = ["body", *error["loc"]]
        raise HTTPException(status_code=422, detail=errors)

    update_data = req.model_dump(exclude_unset=True)
    if "last_date" in update_data:
        update_data["last_date"] = update_data["last_date"].isoformat()
    if "drive_type" in update_data:
        update_data["drive_type"] = update_data["drive_type"].value
    for key, value in update_data.items():
        setattr(job, key, value)
    job.updated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    db.commit()
    db.refresh(job)
    return _job_to_response(job, db)


@router.delete("/{job_id}", status_code=204)
async def delete_job(job_id: str, user: User = Depends(require_user), db: Session = Depends(get_db)):
    job = get_owned_job(job_id, user, db)
    db.delete(job)
    db.commit()
    remove_job_uploads(job_id)
    return Response(status_code=204)


@router.get("/{job_id}/applications", response_model=list[ApplicationResponse])
async def list_job_applications(
    job_id: str,
    user: User = Depends(require_user),
    db: Session = Depends(get_db),
):
    """Applications received for a job. Visible to the job's owner only."""
    job = get_owned_job(job_id, user, db)
    applications = (
        db.query(Application)
        .filter(Application.job_id == job.id)
        .order_by(Application.submitted_at.asc(), text("applications.rowid"))
        .all()
    )
    return [_application_to_response(a) for a in applications]
