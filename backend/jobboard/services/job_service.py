import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from jobboard.models.job import Job
from jobboard.models.user import User

logger = logging.getLogger("jobboard.jobs")

# Ownership refusals never echo who owns the record.
NOT_PERMITTED = "Not permitted"


def get_job_or_404(job_id: str, db: Session) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


def is_owner(job: Job, user: User) -> bool:
    return job.owner.email.lower() == user.email.lower()


def get_owned_job(job_id: str, user: User, db: Session) -> Job:
    """Load a job and verify the acting user owns it. Runs before any mutation."""
    job = get_job_or_404(job_id, db)
    if not is_owner(job, user):
        logger.warning("User %s refused access to job %s", user.id, job.id)
        raise HTTPException(status_code=403, detail=NOT_PERMITTED)
    return job
