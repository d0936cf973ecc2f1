import logging
import os
import tempfile
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import ValidationError
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError
from starlette.background import BackgroundTask
import pandas as pd
import openpyxl
from openpyxl.styles import Font

from config import PUBLIC_BASE_URL
from database import get_application_collection
from models import Application, ApplicationForm, ApplicationRecord, validation_errors
from services.email_service import send_application_ack
from services.storage_service import remove_resume, save_resume
from validation import MAX_RESUME_SIZE_BYTES, MESSAGES, check_resume

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_limited(upload: UploadFile) -> bytes:
    # One byte past the limit is enough to know it is too large.
    return await upload.read(MAX_RESUME_SIZE_BYTES + 1)


@router.post("/submit", status_code=201)
async def submit_application(
    background_tasks: BackgroundTasks,
    name: Optional[str] = Form(None),
    contactNumber: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    applicationType: Optional[str] = Form(None),
    jobTitle: Optional[str] = Form(None),
    interestedAreas: Optional[str] = Form(None),
    resume: Optional[UploadFile] = File(None),
    collection: Collection = Depends(get_application_collection),
):
    if resume is None or not resume.filename:
        return PlainTextResponse(MESSAGES["resume_required"], status_code=400)

    content = await _read_limited(resume)
    file_error = check_resume(resume.content_type, len(content))
    if file_error:
        logger.info("Rejected resume %r: %s", resume.filename, file_error)
        return PlainTextResponse(file_error, status_code=400)

    try:
        form = ApplicationForm(
            name=name,
            contactNumber=contactNumber,
            email=email,
            applicationType=applicationType,
            jobTitle=jobTitle,
            interestedAreas=interestedAreas,
        )
    except ValidationError as e:
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "errors": validation_errors(e)},
        )

    stored_name = None
    try:
        stored_name = save_resume(resume.filename, content)
        record = ApplicationRecord(**form.model_dump(), resume_path=stored_name)
        collection.insert_one(record.to_document())
    except DuplicateKeyError:
        remove_resume(stored_name)
        return JSONResponse(
            status_code=400,
            content={"message": "Email already exists.", "errors": {"email": MESSAGES["email_taken"]}},
        )
    except Exception:
        logger.exception("Error submitting application")
        if stored_name:
            remove_resume(stored_name)
        return PlainTextResponse("An unexpected error occurred.", status_code=500)

    logger.info("Application stored for %s (%s)", record.email, record.application_type)
    background_tasks.add_task(send_application_ack, record)
    return PlainTextResponse("Resume submitted successfully!", status_code=201)


def _to_application(doc: dict) -> Application:
    return Application(
        id=str(doc["_id"]),
        name=doc.get("name", "N/A"),
        contact_number=doc.get("contact_number", "N/A"),
        email=doc.get("email", "N/A"),
        application_type=doc.get("application_type", "N/A"),
        job_title=doc.get("job_title"),
        interested_areas=doc.get("interested_areas"),
        resume_path=doc["resume_path"],
        resume_url=f"/uploads/{doc['resume_path']}",
        created_at=doc["created_at"],
    )


@router.get("/applications", response_model=list[Application])
def get_applications(collection: Collection = Depends(get_application_collection)):
    docs = collection.find({}).sort("created_at", DESCENDING)
    return [_to_application(doc) for doc in docs]


@router.get("/applications/excel")
def export_applications_to_excel(collection: Collection = Depends(get_application_collection)):
    applications = [_to_application(doc) for doc in collection.find({}).sort("created_at", DESCENDING)]

    if not applications:
        raise HTTPException(status_code=404, detail="No applications found to export.")

    rows = []
    for application in applications:
        rows.append({
            "Name": application.name,
            "Contact Number": application.contact_number,
            "Email": application.email,
            "Application Type": application.application_type,
            "Job Title": application.job_title or "",
            "Interested Areas": application.interested_areas or "",
            # Excel cannot store tz-aware datetimes
            "Applied At": application.created_at.replace(tzinfo=None),
            "Resume Link": f"{PUBLIC_BASE_URL}{application.resume_url}",
        })

    df = pd.DataFrame(rows)
    fd, file_path = tempfile.mkstemp(suffix=".xlsx")
    os.close(fd)
    try:
        df.to_excel(file_path, index=False, engine="openpyxl")

        wb = openpyxl.load_workbook(file_path)
        ws = wb.active

        link_col = df.columns.get_loc("Resume Link") + 1
        for row in range(2, len(rows) + 2):
            link_cell = ws.cell(row=row, column=link_col)
            link_cell.hyperlink = link_cell.value
            link_cell.font = Font(color="0000FF", underline="single")

        wb.save(file_path)
    except Exception:
        os.remove(file_path)
        raise

    return FileResponse(
        file_path,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        filename="applications.xlsx",
        background=BackgroundTask(os.remove, file_path),
    )
