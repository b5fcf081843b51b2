from pydantic import BaseModel, ConfigDict, Field


class ApplicationCreate(BaseModel):
    """Applicant fields after intake validation."""

    job_id: str
    name: str
    email: str
    location: str
    college_name: str
    tenth_percentage: float
    degree_percentage: float
    selected_language: str
    communication: int


class ApplicationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    job_id: str = Field(alias="jobId")
    name: str
    email: str
    location: str
    college_name: str = Field(alias="collegeName")
    tenth_percentage: float = Field(alias="tenthPercentage")
    degree_percentage: float = Field(alias="degreePercentage")
    selected_language: str = Field(alias="selectedLanguage")
    communication: int
    resume_filename: str
    resume_hash: str
    resume_size_bytes: int
    resume_mime_type: str | None
    submitted_at: str
