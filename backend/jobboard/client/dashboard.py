"""
Dashboard controller: the state machine behind the recruiter's job list.

    IDLE -> LOADING -> LOADED(jobs)
    LOADED -> LOADING (create/update/delete) -> LOADED(refreshed jobs)

Mutations never patch the list locally: each success is followed by a fresh
``list()`` so what is shown is always a server snapshot. Failures become
transient notices and leave the previous snapshot in place. An edit modal
runs alongside (closed, or open with a draft). A fetch superseded by a newer
one, or any response arriving after ``detach()``, is dropped silently.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable

from jobboard.client.jobs import JobRepository
from jobboard.client.session import Session, SessionStore
from jobboard.errors import (
    Forbidden,
    JobBoardError,
    NotFound,
    Unauthorized,
    UpstreamUnavailable,
    ValidationFailed,
)
from jobboard.schemas.job import JobResponse

logger = logging.getLogger("jobboard.client.dashboard")


class DashboardState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"


@dataclass(frozen=True)
class Notice:
    level: str  # "success" | "error"
    message: str


@dataclass
class EditModal:
    job_id: str
    draft: dict[str, Any] = field(default_factory=dict)


def _draft_from(job: JobResponse) -> dict[str, Any]:
    return {
        "title": job.title,
        "company": job.company,
        "description": job.description,
        "lastDate": job.last_date.isoformat(),
        "driveType": job.drive_type.value,
    }


class DashboardController:
    def __init__(self, jobs: JobRepository, store: SessionStore):
        self.repository = jobs
        self.store = store
        self.state = DashboardState.IDLE
        self.jobs: list[JobResponse] = []
        self.edit: EditModal | None = None
        self.notices: list[Notice] = []
        self.needs_login = False
        self._has_snapshot = False
        self._generation = 0
        self._attached = True

    # --- view lifecycle -------------------------------------------------

    @property
    def attached(self) -> bool:
        return self._attached

    def detach(self):
        """The view is gone; any response still in flight will be ignored."""
        self._attached = False

    def dismiss_notices(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def can_edit(self, job: JobResponse) -> bool:
        # Display hint only. The server re-checks ownership on every mutation.
        session = self.store.get()
        return session is not None and session.user.email.lower() == job.owner.email.lower()

    # --- fetch ----------------------------------------------------------

    async def load(self) -> bool:
        if not self._attached:
            return False
        self._generation += 1
        generation = self._generation
        self.state = DashboardState.LOADING
        try:
            jobs = await self.repository.list(self.store.require())
        except JobBoardError as exc:
            if self._is_current(generation):
                self._fail(exc)
            return False
        if not self._is_current(generation):
            return False
        self.jobs = list(jobs)
        self._has_snapshot = True
        self.state = DashboardState.LOADED
        return True

    def _is_current(self, generation: int) -> bool:
        return self._attached and generation == self._generation

    # --- mutations ------------------------------------------------------

    async def create(self, fields: dict[str, Any]) -> bool:
        return await self._mutate(
            lambda session: self.repository.create(session, fields), "Job posted."
        )

    async def delete(self, job_id: str) -> bool:
        return await self._mutate(
            lambda session: self.repository.delete(session, job_id), "Job deleted."
        )

    def open_edit(self, job: JobResponse) -> EditModal:
        self.edit = EditModal(job_id=job.id, draft=_draft_from(job))
        return self.edit

    def update_draft(self, **changes):
        if self.edit is None:
            raise RuntimeError("No job is being edited")
        self.edit.draft.update(changes)

    def close_edit(self):
        self.edit = None

    async def submit_edit(self) -> bool:
        modal = self.edit
        if modal is None:
            return False

        def close_modal():
            if self.edit is modal:
                self.edit = None

        return await self._mutate(
            lambda session: self.repository.update(session, modal.job_id, dict(modal.draft)),
            "Job updated.",
            on_success=close_modal,
        )

    async def _mutate(
        self,
        action: Callable[[Session], Awaitable[Any]],
        success_message: str,
        on_success: Callable[[], None] | None = None,
    ) -> bool:
        if not self._attached:
            return False
        self.state = DashboardState.LOADING
        try:
            await action(self.store.require())
        except JobBoardError as exc:
            if self._attached:
                self._fail(exc)
            return False
        if not self._attached:
            return False
        if on_success is not None:
            on_success()
        self.notices.append(Notice("success", success_message))
        await self.load()
        return True

    # --- failures -------------------------------------------------------

    def _fail(self, exc: JobBoardError):
        self.state = DashboardState.LOADED if self._has_snapshot else DashboardState.IDLE
        if isinstance(exc, Unauthorized):
            self.store.clear()
            self.needs_login = True
            message = "Your session has expired. Please sign in again."
        elif isinstance(exc, Forbidden):
            message = "You are not permitted to modify this job."
        elif isinstance(exc, NotFound):
            message = "That job no longer exists."
        elif isinstance(exc, ValidationFailed):
            message = exc.message
        elif isinstance(exc, UpstreamUnavailable):
            message = "The service is unavailable. Please try again."
        else:
            message = "Something went wrong. Please try again."
        logger.info("Dashboard action failed: %s", exc.code)
        self.notices.append(Notice("error", message))
