"""Client-side application form.

Holds field values, the chosen resume and per-field errors, runs the local
checks and posts the multipart submission. Rendering lives in app.py.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from config import API_URL
from validation import (
    ALLOWED_RESUME_TYPES,
    EMAIL_PATTERN,
    INTERESTED_AREAS_MAX_LENGTH,
    JOB_TITLE_MAX_LENGTH,
    MAX_RESUME_SIZE_BYTES,
    MESSAGES,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PHONE_PATTERN,
    RESUME_FIELD,
)

logger = logging.getLogger(__name__)

DEFAULT_FILE_LABEL = "Click to upload PDF, DOC, or DOCX"
FORM_ERROR_TEXT = "Please correct the errors in the form."
SERVER_VALIDATION_TEXT = "Validation failed on server."
TRANSPORT_ERROR_TEXT = "An unexpected error occurred while submitting."


def empty_fields() -> Dict[str, str]:
    return {
        "name": "",
        "contactNumber": "",
        "email": "",
        "applicationType": "Job",
        "jobTitle": "",
        "interestedAreas": "",
    }


@dataclass
class ResumeFile:
    name: str
    content_type: Optional[str]
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def matches(self, name: str, content: bytes) -> bool:
        return self.name == name and self.content == content


@dataclass
class Banner:
    kind: str  # "success" or "error"
    text: str


@dataclass
class ApplicationFormState:
    api_url: str = API_URL
    session: requests.Session = field(default_factory=requests.Session)
    timeout: float = 30.0
    fields: Dict[str, str] = field(default_factory=empty_fields)
    resume: Optional[ResumeFile] = None
    errors: Dict[str, str] = field(default_factory=dict)
    banner: Optional[Banner] = None

    @property
    def file_label(self) -> str:
        return self.resume.name if self.resume else DEFAULT_FILE_LABEL

    def handle_change(self, name: str, value: str):
        self.fields[name] = value
        self.errors.pop(name, None)

    def select_file(self, name: str, content_type: Optional[str], content: bytes):
        self.resume = ResumeFile(name=name, content_type=content_type, content=content)
        self.errors.pop(RESUME_FIELD, None)

    def validate(self) -> bool:
        errors = {}
        name = self.fields["name"].strip()
        contact = self.fields["contactNumber"].strip()
        email = self.fields["email"].strip()
        job_title = self.fields["jobTitle"].strip()

        if not name:
            errors["name"] = MESSAGES["name_required"]
        elif len(name) < NAME_MIN_LENGTH:
            errors["name"] = MESSAGES["name_too_short"]
        elif len(name) > NAME_MAX_LENGTH:
            errors["name"] = MESSAGES["name_too_long"]

        if not contact:
            errors["contactNumber"] = MESSAGES["contact_required"]
        elif not PHONE_PATTERN.match(contact):
            errors["contactNumber"] = MESSAGES["contact_invalid"]

        if not email:
            errors["email"] = MESSAGES["email_required"]
        elif not EMAIL_PATTERN.match(email):
            errors["email"] = MESSAGES["email_invalid"]

        if self.fields["applicationType"] == "Job" and not job_title:
            errors["jobTitle"] = MESSAGES["job_title_required"]
        elif len(job_title) > JOB_TITLE_MAX_LENGTH:
            errors["jobTitle"] = MESSAGES["job_title_too_long"]

        if len(self.fields["interestedAreas"].strip()) > INTERESTED_AREAS_MAX_LENGTH:
            errors["interestedAreas"] = MESSAGES["interested_areas_too_long"]

        if self.resume is None:
            errors[RESUME_FIELD] = MESSAGES["resume_required"]
        elif self.resume.size > MAX_RESUME_SIZE_BYTES:
            errors[RESUME_FIELD] = MESSAGES["resume_size"]
        elif self.resume.content_type not in ALLOWED_RESUME_TYPES:
            errors[RESUME_FIELD] = MESSAGES["resume_type"]

        self.errors = errors
        return not errors

    def reset(self):
        self.fields = empty_fields()
        self.resume = None
        self.errors = {}

    def submit(self) -> bool:
        """Validate locally, then post. Returns True when the service accepted it."""
        self.banner = None

        if not self.validate():
            self.banner = Banner("error", FORM_ERROR_TEXT)
            return False

        files = {
            RESUME_FIELD: (self.resume.name, self.resume.content, self.resume.content_type),
        }
        try:
            response = self.session.post(
                f"{self.api_url.rstrip('/')}/submit",
                data=dict(self.fields),
                files=files,
                timeout=self.timeout,
            )
        except requests.RequestException:
            logger.exception("Submission request failed")
            self.banner = Banner("error", TRANSPORT_ERROR_TEXT)
            return False

        if response.ok:
            self.reset()
            self.banner = Banner("success", response.text)
            return True

        self._show_server_error(response)
        return False

    def _show_server_error(self, response: requests.Response):
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if isinstance(payload, dict) and payload.get("errors"):
            self.errors = dict(payload["errors"])
            self.banner = Banner("error", payload.get("message") or SERVER_VALIDATION_TEXT)
        elif response.text:
            self.banner = Banner("error", response.text)
        else:
            self.banner = Banner("error", TRANSPORT_ERROR_TEXT)
