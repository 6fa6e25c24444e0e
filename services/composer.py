from html import escape
from typing import List, Optional, Tuple

from config import Settings
from models import Attachment, ContactMessage, JobApplication, OutboundEmail

CELL = "padding: 10px; border: 1px solid #ddd;"


def _safe(value: Optional[str]) -> str:
    return escape(value or "")


def _row(label: str, value: Optional[str]) -> str:
    return f"""
            <tr>
              <td style="{CELL}"><strong>{label}:</strong></td>
              <td style="{CELL}">{_safe(value)}</td>
            </tr>"""


def _layout(body: str) -> str:
    return f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
{body}
        </div>
    """


def _table(title: str, rows: List[str]) -> str:
    cells = "".join(rows)
    return _layout(f"""          <h2>{title}</h2>
          <table style="width: 100%; border-collapse: collapse;">{cells}
          </table>""")


def _cc(settings: Settings) -> List[str]:
    return [settings.hr_email] if settings.hr_email else []


def _recipients(settings: Settings) -> List[str]:
    return [settings.client_email] if settings.client_email else []


def compose_job_application_emails(
    application: JobApplication, resume: Attachment, settings: Settings
) -> Tuple[OutboundEmail, OutboundEmail]:
    """Return the HR notification and the applicant acknowledgment."""
    full_name = f"{application.first_name} {application.last_name}"
    job_title = application.job_title or ""
    job_location = application.job_location or ""

    notification = OutboundEmail(
        from_name="Job Application",
        from_email=settings.sender,
        to=_recipients(settings),
        cc=_cc(settings),
        subject=(
            f"{settings.company_name} | New Job Application | "
            f"{job_title} | {job_location} - {full_name}"
        ),
        html=_table(
            "New Job Application",
            [
                _row("Name", full_name),
                _row("Email", application.email),
                _row("Phone", application.phone),
                _row("Job Title", job_title),
                _row("Job Location", job_location),
            ],
        ),
        attachment=resume,
    )

    company = _safe(settings.company_name)
    acknowledgment = OutboundEmail(
        from_name=settings.company_name,
        from_email=settings.sender,
        to=[application.email],
        subject="We've Received Your Job Application",
        html=_layout(f"""          <h2>Thank You for Your Application!</h2>
          <p>Hi {_safe(application.first_name)},</p>
          <p>We've received your job application for the position of <strong>{_safe(job_title)}</strong> in <strong>{_safe(job_location)}</strong> and will review it shortly.</p>
          <p>Our hiring team will contact you if your qualifications match our requirements.</p>
          <br>
          <p>Best regards,<br>{company}</p>"""),
    )
    return notification, acknowledgment


def compose_contact_emails(
    contact: ContactMessage, settings: Settings
) -> Tuple[OutboundEmail, OutboundEmail]:
    """Return the staff notification and the sender acknowledgment."""
    rows = [_row("Name", contact.name), _row("Email", contact.email)]
    if contact.full_phone_number:
        rows.append(_row("Phone", contact.full_phone_number))
    rows += [_row("Subject", contact.subject), _row("Message", contact.message)]

    notification = OutboundEmail(
        from_name="Contact Form",
        from_email=settings.sender,
        to=_recipients(settings),
        cc=_cc(settings),
        subject=f"{settings.company_name} | New Contact Form Submission: {contact.subject}",
        html=_table("New Contact Form Submission", rows),
    )

    acknowledgment = OutboundEmail(
        from_name=settings.company_name,
        from_email=settings.sender,
        to=[contact.email],
        subject="We've Received Your Message",
        html=_layout(f"""          <h2>Thank You for Contacting Us!</h2>
          <p>Hi {_safe(contact.name)},</p>
          <p>We've received your message regarding "{_safe(contact.subject)}" and will get back to you soon.</p>
          <p>Our team will review your inquiry and respond within the next 1-2 business days.</p>
          <br>
          <p>Best regards,<br>{_safe(settings.company_name)}</p>"""),
    )
    return notification, acknowledgment
