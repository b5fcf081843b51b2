"""
Error taxonomy shared by the server routes and the client layer.

Server code raises the validation errors and maps them onto HTTP responses;
the client maps HTTP responses and transport failures back onto the same
classes, so callers only ever handle these types.
"""


class JobBoardError(Exception):
    """Root of every error the job board surfaces to a caller."""

    code = "error"

    def __init__(self, message: str = "", field: str | None = None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__
        self.field = field

    def to_detail(self) -> dict:
        return {"code": self.code, "field": self.field, "message": self.message}


# --- identity -----------------------------------------------------------

class AuthError(JobBoardError):
    code = "auth_error"


class InvalidCredential(AuthError):
    code = "invalid_credential"

    def __init__(self, message: str = "Invalid email or password."):
        super().__init__(message)


class TokenIssuanceFailed(AuthError):
    code = "token_issuance_failed"


# --- request outcome ----------------------------------------------------

class Unauthorized(JobBoardError):
    code = "unauthorized"


class Forbidden(JobBoardError):
    code = "forbidden"

    def __init__(self, message: str = "Not permitted"):
        super().__init__(message)


class NotFound(JobBoardError):
    code = "not_found"


class JobNotFound(NotFound):
    code = "job_not_found"

    def __init__(self, message: str = "Job not found", field: str | None = "jobId"):
        super().__init__(message, field)


class UpstreamUnavailable(JobBoardError):
    code = "upstream_unavailable"


class IdentityProviderUnavailable(AuthError, UpstreamUnavailable):
    code = "identity_provider_unavailable"


# --- field validation ---------------------------------------------------

class ValidationFailed(JobBoardError):
    code = "validation_failed"


class OutOfRange(ValidationFailed):
    code = "out_of_range"


class InvalidChoice(ValidationFailed):
    code = "invalid_choice"


class UnsupportedDocument(ValidationFailed):
    code = "unsupported_document"


VALIDATION_ERRORS = {
    cls.code: cls
    for cls in (ValidationFailed, OutOfRange, InvalidChoice, UnsupportedDocument)
}
