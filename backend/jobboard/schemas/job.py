from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Keys a client might send to claim or reassign ownership.
OWNER_FIELDS = {"owner", "owner_id", "ownerId", "ownerEmail", "owner_email", "postedBy", "posted_by"}


class DriveType(str, Enum):
    WALK_IN = "Walk-in Drive"
    DIRECT_FACE_TO_FACE = "Direct Face-to-Face"


_DRIVE_TYPE_ALIASES = {
    "walk-in": DriveType.WALK_IN,
    "walk-in drive": DriveType.WALK_IN,
    "direct-face-to-face": DriveType.DIRECT_FACE_TO_FACE,
    "direct face-to-face": DriveType.DIRECT_FACE_TO_FACE,
}


def parse_drive_type(value):
    if isinstance(value, str):
        return _DRIVE_TYPE_ALIASES.get(value.strip().lower(), value)
    return value


def parse_deadline(value):
    """Reduce a deadline to its calendar date; time of day is dropped."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return value.strip().split("T", 1)[0].split(" ", 1)[0]
    return value


class _JobFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @field_validator("title", "company", "description", check_fields=False)
    @classmethod
    def text_not_blank(cls, v):
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Must not be empty")
        return v

    @field_validator("last_date", mode="before", check_fields=False)
    @classmethod
    def date_only(cls, v):
        return parse_deadline(v)

    @field_validator("drive_type", mode="before", check_fields=False)
    @classmethod
    def drive_type_alias(cls, v):
        return parse_drive_type(v)


class JobCreate(_JobFields):
    title: str
    company: str
    description: str
    last_date: date = Field(alias="lastDate")
    drive_type: DriveType = Field(alias="driveType")


class JobUpdate(_JobFields):
    title: str | None = None
    company: str | None = None
    description: str | None = None
    last_date: date | None = Field(default=None, alias="lastDate")
    drive_type: DriveType | None = Field(default=None, alias="driveType")

    @model_validator(mode="before")
    @classmethod
    def reject_owner_change(cls, data):
        if isinstance(data, dict):
            claimed = OWNER_FIELDS.intersection(data)
            if claimed:
                raise ValueError(f"Job owner cannot be changed ({', '.join(sorted(claimed))})")
            nulls = [k for k, v in data.items() if v is None]
            if nulls:
                raise ValueError(f"Fields cannot be cleared: {', '.join(sorted(nulls))}")
        return data


class OwnerResponse(BaseModel):
    id: str
    name: str
    email: str


class JobResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    description: str
    last_date: date = Field(alias="lastDate")
    drive_type: DriveType = Field(alias="driveType")
    owner: OwnerResponse
    created_at: str
    updated_at: str
    application_count: int = 0
