"""Constraint constants shared by the service schema and the form client.

Both sides evaluate these independently. The client check only saves a
round trip; the service check is the one that counts.
"""
import re
from typing import Optional

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
JOB_TITLE_MAX_LENGTH = 100
INTERESTED_AREAS_MAX_LENGTH = 200

PHONE_PATTERN = re.compile(r"^\+?[0-9]{10,15}$")
EMAIL_PATTERN = re.compile(r"^([\w\-.]+@([\w-]+\.)+[\w-]{2,4})$", re.ASCII)

APPLICATION_TYPES = ("Job", "Internship")

RESUME_FIELD = "resume"
MAX_RESUME_SIZE_MB = 5
MAX_RESUME_SIZE_BYTES = MAX_RESUME_SIZE_MB * 1024 * 1024
ALLOWED_RESUME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

MESSAGES = {
    "name_required": "Name is required",
    "name_too_short": f"Name must be at least {NAME_MIN_LENGTH} characters long",
    "name_too_long": f"Name cannot exceed {NAME_MAX_LENGTH} characters",
    "contact_required": "Contact Number is required",
    "contact_invalid": "Please enter a valid contact number",
    "email_required": "Email is required",
    "email_invalid": "Please enter a valid email address",
    "type_required": "Application type is required",
    "type_invalid": "Application type must be either Job or Internship",
    "job_title_required": "Job Title is required for Job applications",
    "job_title_too_long": f"Job Title cannot exceed {JOB_TITLE_MAX_LENGTH} characters",
    "interested_areas_too_long": f"Interested Areas cannot exceed {INTERESTED_AREAS_MAX_LENGTH} characters",
    "resume_required": "Resume file is required.",
    "resume_type": "Invalid file type. Only PDF, DOC, and DOCX files are allowed.",
    "resume_size": f"File size too large. Max {MAX_RESUME_SIZE_MB}MB allowed.",
    "email_taken": "This email has already been used.",
}


def check_resume(content_type: Optional[str], size: int) -> Optional[str]:
    """Return the file constraint violation for an upload, or None.

    Type is checked before size, so an oversized file of the wrong type
    reports the type.
    """
    if content_type not in ALLOWED_RESUME_TYPES:
        return MESSAGES["resume_type"]
    if size > MAX_RESUME_SIZE_BYTES:
        return MESSAGES["resume_size"]
    return None
