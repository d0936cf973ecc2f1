"""
Tests for the client-side form state.
"""

from unittest.mock import MagicMock

import pytest
import requests

from form_client.form import (
    DEFAULT_FILE_LABEL,
    FORM_ERROR_TEXT,
    SERVER_VALIDATION_TEXT,
    TRANSPORT_ERROR_TEXT,
    ApplicationFormState,
    empty_fields,
)
from validation import MAX_RESUME_SIZE_BYTES


def _response(status, text="", payload=None):
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.ok = status < 400
    response.text = text
    if payload is None:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def form(session):
    state = ApplicationFormState(api_url="http://api.test/", session=session)
    for name, value in {
        "name": "Jane Doe",
        "contactNumber": "+919876543210",
        "email": "jane.doe@example.com",
        "jobTitle": "Backend Engineer",
    }.items():
        state.handle_change(name, value)
    state.select_file("cv.pdf", "application/pdf", b"%PDF-1.4")
    return state


def test_change_clears_only_that_fields_error(form):
    form.errors = {"email": "Email is required", "name": "Name is required"}
    form.handle_change("email", "x@example.com")
    assert form.errors == {"name": "Name is required"}


def test_selecting_file_clears_resume_error(form):
    form.errors = {"resume": "Resume file is required."}
    form.select_file("other.docx", "application/msword", b"doc")
    assert form.errors == {}
    assert form.file_label == "other.docx"


def test_invalid_email_blocks_network_call(form, session):
    form.handle_change("email", "jane.doe@")

    assert form.submit() is False
    session.post.assert_not_called()
    assert form.errors == {"email": "Please enter a valid email address"}
    assert form.banner.kind == "error"
    assert form.banner.text == FORM_ERROR_TEXT


def test_local_checks_cover_file_and_job_title(session):
    form = ApplicationFormState(session=session)
    assert form.validate() is False
    assert form.errors == {
        "name": "Name is required",
        "contactNumber": "Contact Number is required",
        "email": "Email is required",
        "jobTitle": "Job Title is required for Job applications",
        "resume": "Resume file is required.",
    }

    form.handle_change("applicationType", "Internship")
    form.select_file("huge.txt", "text/plain", b"0" * (MAX_RESUME_SIZE_BYTES + 1))
    form.validate()
    assert "jobTitle" not in form.errors
    assert form.errors["resume"] == "File size too large. Max 5MB allowed."

    form.select_file("notes.txt", "text/plain", b"notes")
    form.validate()
    assert form.errors["resume"] == "Invalid file type. Only PDF, DOC, and DOCX files are allowed."


def test_success_posts_multipart_and_resets(form, session):
    session.post.return_value = _response(201, "Resume submitted successfully!")

    assert form.submit() is True

    args, kwargs = session.post.call_args
    assert args == ("http://api.test/submit",)
    assert kwargs["data"]["email"] == "jane.doe@example.com"
    assert kwargs["data"]["applicationType"] == "Job"
    assert kwargs["files"] == {"resume": ("cv.pdf", b"%PDF-1.4", "application/pdf")}
    assert form.fields == empty_fields()
    assert form.resume is None
    assert form.file_label == DEFAULT_FILE_LABEL
    assert form.banner.kind == "success"
    assert form.banner.text == "Resume submitted successfully!"


def test_server_field_errors_are_shown_per_field(form, session):
    session.post.return_value = _response(
        400,
        payload={"message": "Email already exists.", "errors": {"email": "This email has already been used."}},
    )

    assert form.submit() is False
    assert form.errors == {"email": "This email has already been used."}
    assert form.banner.text == "Email already exists."
    assert form.fields["name"] == "Jane Doe"


def test_server_errors_without_message_use_fallback(form, session):
    session.post.return_value = _response(400, payload={"errors": {"name": "Name is required"}})

    form.submit()
    assert form.banner.text == SERVER_VALIDATION_TEXT


def test_plain_text_error_becomes_banner(form, session):
    session.post.return_value = _response(400, "File size too large. Max 5MB allowed.")

    assert form.submit() is False
    assert form.errors == {}
    assert form.banner.text == "File size too large. Max 5MB allowed."


def test_transport_failure_is_generic(form, session):
    session.post.side_effect = requests.ConnectionError("refused")

    assert form.submit() is False
    assert form.banner.text == TRANSPORT_ERROR_TEXT


def test_replacing_file_with_same_name_is_detected(form):
    assert form.resume.matches("cv.pdf", b"%PDF-1.4")
    assert not form.resume.matches("cv.pdf", b"%PDF-1.7 revised")

    form.select_file("cv.pdf", "application/pdf", b"%PDF-1.7 revised")
    assert form.resume.content == b"%PDF-1.7 revised"


def test_non_ascii_email_is_rejected_locally(form, session):
    form.handle_change("email", "jöhn@exämple.com")

    assert form.submit() is False
    session.post.assert_not_called()
    assert form.errors == {"email": "Please enter a valid email address"}
