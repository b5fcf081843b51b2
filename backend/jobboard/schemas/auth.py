from pydantic import BaseModel, field_validator


class LoginRequest(BaseModel):
    email: str
    name: str
    photo: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = v.strip().lower()
        local, _, domain = v.partition("@")
        if not local or not domain:
            raise ValueError("Invalid email address")
        return v

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be empty")
        return v


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    photo: str | None = None


class LoginResponse(BaseModel):
    token: str
    expires_in_seconds: int
    user: UserResponse
