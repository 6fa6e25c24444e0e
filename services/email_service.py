import asyncio
import base64
import logging
from email.message import EmailMessage
from email.utils import formataddr
from typing import Iterable, Protocol

import aiosmtplib
from fastapi import Request
from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import (
    Attachment as SendGridAttachment,
    Cc,
    Disposition,
    FileContent,
    FileName,
    FileType,
    From,
    Mail,
)
from starlette.concurrency import run_in_threadpool

from config import Settings
from errors import DispatchError
from models import OutboundEmail

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    async def send(self, email: OutboundEmail) -> None:
        ...


def build_mime_message(email: OutboundEmail) -> EmailMessage:
    message = EmailMessage()
    message["From"] = formataddr((email.from_name, email.from_email))
    message["To"] = ", ".join(email.to)
    if email.cc:
        message["Cc"] = ", ".join(email.cc)
    message["Subject"] = email.subject
    message.set_content(email.html, subtype="html")

    if email.attachment:
        maintype, _, subtype = email.attachment.content_type.partition("/")
        message.add_attachment(
            email.attachment.content,
            maintype=maintype,
            subtype=subtype or "octet-stream",
            filename=email.attachment.filename,
        )
    return message


def build_sendgrid_mail(email: OutboundEmail) -> Mail:
    mail = Mail(
        from_email=From(email.from_email, email.from_name),
        to_emails=email.to,
        subject=email.subject,
        html_content=email.html,
    )
    for address in email.cc:
        mail.add_cc(Cc(address))

    if email.attachment:
        encoded = base64.b64encode(email.attachment.content).decode("utf-8")
        mail.attachment = SendGridAttachment(
            FileContent(encoded),
            FileName(email.attachment.filename),
            FileType(email.attachment.content_type),
            Disposition("attachment"),
        )
    return mail


class SmtpMailer:
    """Hands messages to the configured SMTP relay."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def send(self, email: OutboundEmail) -> None:
        await aiosmtplib.send(
            build_mime_message(email),
            hostname=self.settings.email_host,
            port=self.settings.email_port,
            username=self.settings.email_user,
            password=self.settings.email_password,
            use_tls=self.settings.email_secure,
            # opportunistic STARTTLS unless the connection is already TLS
            start_tls=False if self.settings.email_secure else None,
        )
        logger.info("Sent %r to %s via SMTP", email.subject, ", ".join(email.to))


class SendGridMailer:
    def __init__(self, settings: Settings):
        self.client = SendGridAPIClient(settings.sendgrid_api_key)

    async def send(self, email: OutboundEmail) -> None:
        response = await run_in_threadpool(self.client.send, build_sendgrid_mail(email))
        logger.info(
            "Sent %r to %s via SendGrid (status %s)",
            email.subject,
            ", ".join(email.to),
            response.status_code,
        )


def build_mailer(settings: Settings) -> Mailer:
    if settings.mail_transport == "sendgrid":
        return SendGridMailer(settings)
    if settings.mail_transport == "smtp":
        return SmtpMailer(settings)
    raise ValueError(f"Unknown mail transport: {settings.mail_transport}")


async def dispatch_all(
    mailer: Mailer,
    emails: Iterable[OutboundEmail],
    failure_message: str = "Failed to send email",
) -> None:
    """Send every email concurrently; succeed only if all of them were sent.

    All sends are awaited to completion before a failure is reported, so a
    caller never observes a request with some sends still in flight.
    """
    results = await asyncio.gather(
        *(mailer.send(email) for email in emails), return_exceptions=True
    )
    failures = [result for result in results if isinstance(result, BaseException)]
    if failures:
        for failure in failures:
            logger.error("Email dispatch failed", exc_info=failure)
        raise DispatchError(str(failures[0]), message=failure_message) from failures[0]


def get_mailer(request: Request) -> Mailer:
    return request.app.state.mailer
