from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError
from typing import Dict, Optional
from enum import Enum
import datetime

from validation import (
    APPLICATION_TYPES,
    EMAIL_PATTERN,
    INTERESTED_AREAS_MAX_LENGTH,
    JOB_TITLE_MAX_LENGTH,
    MESSAGES,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHONE_PATTERN,
)


class ApplicationType(str, Enum):
    job = "Job"
    internship = "Internship"


def _clean(value):
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _fail(key: str):
    raise PydanticCustomError(key, MESSAGES[key])


class ApplicationForm(BaseModel):
    """Structured fields of a submission, keyed by their form names."""

    model_config = ConfigDict(populate_by_name=True, validate_default=True, use_enum_values=True)

    name: Optional[str] = None
    contact_number: Optional[str] = Field(None, alias="contactNumber")
    email: Optional[str] = None
    application_type: Optional[ApplicationType] = Field(None, alias="applicationType")
    job_title: Optional[str] = Field(None, alias="jobTitle")
    interested_areas: Optional[str] = Field(None, alias="interestedAreas")

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        value = _clean(value)
        if value is None:
            _fail("name_required")
        if len(value) < NAME_MIN_LENGTH:
            _fail("name_too_short")
        if len(value) > NAME_MAX_LENGTH:
            _fail("name_too_long")
        return value

    @field_validator("contact_number", mode="before")
    @classmethod
    def check_contact_number(cls, value):
        value = _clean(value)
        if value is None:
            _fail("contact_required")
        if not PHONE_PATTERN.match(value):
            _fail("contact_invalid")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value):
        value = _clean(value)
        if value is None:
            _fail("email_required")
        if not EMAIL_PATTERN.match(value):
            _fail("email_invalid")
        return value

    @field_validator("application_type", mode="before")
    @classmethod
    def check_application_type(cls, value):
        value = _clean(value)
        if value is None:
            _fail("type_required")
        if isinstance(value, ApplicationType):
            return value
        if value not in APPLICATION_TYPES:
            _fail("type_invalid")
        return value

    @field_validator("job_title", mode="before")
    @classmethod
    def check_job_title(cls, value, info: ValidationInfo):
        # application_type is declared first, so it is already in info.data when valid
        value = _clean(value)
        if value is None and info.data.get("application_type") == ApplicationType.job.value:
            _fail("job_title_required")
        if value is not None and len(value) > JOB_TITLE_MAX_LENGTH:
            _fail("job_title_too_long")
        return value

    @field_validator("interested_areas", mode="before")
    @classmethod
    def check_interested_areas(cls, value):
        value = _clean(value)
        if value is not None and len(value) > INTERESTED_AREAS_MAX_LENGTH:
            _fail("interested_areas_too_long")
        return value


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc)


class ApplicationRecord(ApplicationForm):
    resume_path: str = Field(..., alias="resumePath", min_length=1)
    created_at: datetime.datetime = Field(default_factory=_utcnow)
    updated_at: Optional[datetime.datetime] = None

    def to_document(self) -> dict:
        document = self.model_dump()
        if document["updated_at"] is None:
            document["updated_at"] = document["created_at"]
        return document


class Application(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    contact_number: str = Field(alias="contactNumber")
    email: str
    application_type: str = Field(alias="applicationType")
    job_title: Optional[str] = Field(None, alias="jobTitle")
    interested_areas: Optional[str] = Field(None, alias="interestedAreas")
    resume_path: str = Field(alias="resumePath")
    resume_url: str = Field(alias="resumeUrl")
    created_at: datetime.datetime = Field(alias="createdAt")


def validation_errors(exc: ValidationError) -> Dict[str, str]:
    """Flatten a ValidationError into {form field: first message}."""
    errors = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else "form"
        errors.setdefault(field, error["msg"])
    return errors
