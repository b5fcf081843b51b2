from typing import Any, Mapping

from jobboard.client.api import ApiClient
from jobboard.client.jobs import JobRepository
from jobboard.client.session import Session
from jobboard.errors import JobNotFound, NotFound
from jobboard.schemas.application import ApplicationResponse
from jobboard.services.application_service import (
    PERCENTAGE_FIELDS,
    REQUIRED_TEXT_FIELDS,
    ResumeDocument,
    validate_application,
)

FORM_FIELDS = REQUIRED_TEXT_FIELDS + PERCENTAGE_FIELDS + ("selectedLanguage", "communication")


class ApplicationIntake:
    def __init__(self, api: ApiClient, jobs: JobRepository):
        self.api = api
        self.jobs = jobs

    async def submit(
        self,
        session: Session,
        job_id: str,
        fields: Mapping[str, Any],
        document: ResumeDocument | None,
    ) -> ApplicationResponse:
        """Validate locally, then upload the application as multipart form data.

        The server repeats the same validation; a local pass only saves a
        round trip with the document attached.
        """
        try:
            job = await self.jobs.get(session, job_id)
        except NotFound:
            raise JobNotFound() from None

        validate_application(job, fields, document)

        data = {"jobId": job.id}
        for key in FORM_FIELDS:
            value = fields.get(key)
            if value is not None:
                data[key] = str(value)
        files = {
            "resume": (
                document.filename,
                document.content,
                document.content_type or "application/octet-stream",
            )
        }
        response = await self.api.request(
            "POST", "/applications", session=session, data=data, files=files
        )
        return ApplicationResponse.model_validate(response.json())
