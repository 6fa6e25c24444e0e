import logging

from fastapi import APIRouter, Depends

from config import Settings, get_settings
from errors import ValidationFailed
from middleware import json_form
from models import ContactMessage
from services.composer import compose_contact_emails
from services.email_service import Mailer, dispatch_all, get_mailer
from validation import validate_contact_message

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/api/contact")
async def submit_contact_form(
    form: dict = Depends(json_form),
    settings: Settings = Depends(get_settings),
    mailer: Mailer = Depends(get_mailer),
):
    logger.debug("Contact form payload: %s", form)

    result = validate_contact_message(form)
    if not result.is_valid:
        raise ValidationFailed(result.errors)

    contact = ContactMessage(
        name=form["name"],
        email=form["email"],
        full_phone_number=form.get("fullPhoneNumber") or None,
        subject=form["subject"],
        message=form["message"],
    )
    await dispatch_all(
        mailer,
        compose_contact_emails(contact, settings),
        failure_message="Failed to submit form. Please try again later.",
    )
    return {"message": "Form submitted successfully. We'll be in touch soon!"}
