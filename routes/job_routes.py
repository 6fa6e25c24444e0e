from typing import Optional

from fastapi import APIRouter, Depends, Form

from config import Settings, get_settings
from errors import MissingAttachment, ValidationFailed
from middleware import accepted_resume
from models import Attachment, JobApplication
from services.composer import compose_job_application_emails
from services.email_service import Mailer, dispatch_all, get_mailer
from validation import validate_job_application

router = APIRouter()


@router.post("/api/job-application")
async def submit_job_application(
    firstName: Optional[str] = Form(None),
    lastName: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    jobTitle: Optional[str] = Form(None),
    jobLocation: Optional[str] = Form(None),
    resume: Optional[Attachment] = Depends(accepted_resume),
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
):
    fields = {
        "firstName": firstName,
        "lastName": lastName,
        "email": email,
        "phone": phone,
        "jobTitle": jobTitle,
        "jobLocation": jobLocation,
    }
    result = validate_job_application(fields)
    if not result.is_valid:
        raise ValidationFailed(result.errors)

    if resume is None:
        raise MissingAttachment()

    application = JobApplication(
        first_name=firstName,
        last_name=lastName,
        email=email,
        phone=phone,
        job_title=jobTitle,
        job_location=jobLocation,
    )
    await dispatch_all(
        mailer,
        compose_job_application_emails(application, resume, settings),
        failure_message="Failed to submit application. Please try again later.",
    )
    return {"message": "Application submitted successfully. We'll be in touch soon!"}
