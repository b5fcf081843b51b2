from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping

from jobboard.client.api import ApiClient
from jobboard.client.session import Session
from jobboard.schemas.application import ApplicationResponse
from jobboard.schemas.job import OWNER_FIELDS, JobResponse


def _to_wire(fields: Mapping[str, Any]) -> dict[str, Any]:
    payload = {}
    for key, value in fields.items():
        if isinstance(value, datetime):
            value = value.date().isoformat()
        elif isinstance(value, date):
            value = value.isoformat()
        elif isinstance(value, Enum):
            value = value.value
        payload[key] = value
    return payload


class JobRepository:
    """Job CRUD against the API. Every call takes the acting session explicitly."""

    def __init__(self, api: ApiClient):
        self.api = api

    async def list(self, session: Session, mine: bool = False) -> list[JobResponse]:
        params = {"mine": "true"} if mine else None
        response = await self.api.request("GET", "/jobs", session=session, params=params)
        return [JobResponse.model_validate(j) for j in response.json()]

    async def get(self, session: Session, job_id: str) -> JobResponse:
        response = await self.api.request("GET", f"/jobs/{job_id}", session=session)
        return JobResponse.model_validate(response.json())

    async def create(self, session: Session, fields: Mapping[str, Any]) -> JobResponse:
        # The server sets the owner from the token; owner-like keys are not even sent.
        payload = _to_wire({k: v for k, v in fields.items() if k not in OWNER_FIELDS})
        response = await self.api.request("POST", "/jobs", session=session, json=payload)
        return JobResponse.model_validate(response.json())

    async def update(self, session: Session, job_id: str, fields: Mapping[str, Any]) -> JobResponse:
        response = await self.api.request(
            "PUT", f"/jobs/{job_id}", session=session, json=_to_wire(fields)
        )
        return JobResponse.model_validate(response.json())

    async def delete(self, session: Session, job_id: str) -> None:
        await self.api.request("DELETE", f"/jobs/{job_id}", session=session)

    async def list_applications(self, session: Session, job_id: str) -> list[ApplicationResponse]:
        response = await self.api.request("GET", f"/jobs/{job_id}/applications", session=session)
        return [ApplicationResponse.model_validate(a) for a in response.json()]
