"""
HTTP transport for the client layer.

Every request goes through ``ApiClient.request``, which attaches the bearer
token of the session passed in (never a global one) and turns HTTP error
statuses and transport failures into ``jobboard.errors`` exceptions.
"""
import logging

import httpx

from jobboard.config import settings
from jobboard.errors import (
    VALIDATION_ERRORS,
    Forbidden,
    JobBoardError,
    JobNotFound,
    NotFound,
    Unauthorized,
    UnsupportedDocument,
    UpstreamUnavailable,
    ValidationFailed,
)
from jobboard.client.session import Session

logger = logging.getLogger("jobboard.client")


def _detail(response: httpx.Response):
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    return body.get("detail") if isinstance(body, dict) else body


def _validation_error(detail) -> ValidationFailed:
    if isinstance(detail, dict):
        cls = VALIDATION_ERRORS.get(detail.get("code"), ValidationFailed)
        return cls(detail.get("message") or "Invalid input", field=detail.get("field"))
    if isinstance(detail, list) and detail:
        # FastAPI request-validation errors
        first = detail[0]
        loc = first.get("loc") or []
        field = str(loc[-1]) if len(loc) > 1 else None
        return ValidationFailed(first.get("msg") or "Invalid input", field=field)
    return ValidationFailed(str(detail) if detail else "Invalid input")


def raise_for_error(response: httpx.Response):
    """Map a non-2xx response onto the error taxonomy."""
    status = response.status_code
    if status < 400:
        return
    detail = _detail(response)

    if status == 401:
        raise Unauthorized(detail if isinstance(detail, str) else "Session expired")
    if status == 403:
        # Raw backend text may mention the owner; callers only ever see the generic form.
        raise Forbidden()
    if status == 404:
        if isinstance(detail, dict) and detail.get("code") == JobNotFound.code:
            raise JobNotFound(detail.get("message") or "Job not found")
        raise NotFound(detail if isinstance(detail, str) else "Not found")
    if status == 413:
        raise ValidationFailed("Document too large", field="resume")
    if status == 415:
        message = detail.get("message") if isinstance(detail, dict) else None
        raise UnsupportedDocument(message or "Unsupported document", field="resume")
    if status in (400, 422):
        raise _validation_error(detail)
    if status >= 500:
        raise UpstreamUnavailable(f"Server error ({status})")
    raise JobBoardError(f"Unexpected response ({status})")


class ApiClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.request_timeout_seconds,
            transport=transport,
        )

    async def request(
        self,
        method: str,
        path: str,
        session: Session | None = None,
        **kwargs,
    ) -> httpx.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if session is not None:
            # Copied per call, so a concurrent clear() cannot change an in-flight request.
            headers.update(session.headers)
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            logger.warning("%s %s failed: %s", method, path, exc.__class__.__name__)
            raise UpstreamUnavailable("Service unreachable") from exc
        raise_for_error(response)
        return response

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
