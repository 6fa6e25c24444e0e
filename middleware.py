import logging
from typing import Any, Dict, Iterable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from starlette.middleware.base import BaseHTTPMiddleware

from errors import MalformedRequest, OriginNotAllowed, UploadRejected
from models import Attachment

logger = logging.getLogger(__name__)

MAX_RESUME_BYTES = 5 * 1024 * 1024
RESUME_CONTENT_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Turns away cross-origin callers before any route runs.

    Requests without an ``Origin`` header (curl, server-to-server) pass.
    """

    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = set(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and origin not in self.allowed_origins:
            error = OriginNotAllowed(origin)
            logger.warning("Rejected request from origin %s to %s", origin, request.url.path)
            return JSONResponse(status_code=error.status_code, content=error.content())
        return await call_next(request)


async def json_form(request: Request) -> Dict[str, Any]:
    """The JSON request body as a field mapping.

    An empty body or a JSON value that is not an object yields no fields, so
    the validator reports every required field.
    """
    if not await request.body():
        return {}
    try:
        payload = await request.json()
    except ValueError as exc:
        raise MalformedRequest(f"Malformed JSON body: {exc}") from exc
    return payload if isinstance(payload, dict) else {}


async def accepted_resume(request: Request) -> Optional[Attachment]:
    """Filter the uploaded resume by type and size; ``None`` if no file was sent."""
    form = await request.form()
    resume = form.get("resume")
    if not isinstance(resume, UploadFile) or not resume.filename:
        return None

    if resume.content_type not in RESUME_CONTENT_TYPES:
        raise UploadRejected(
            "Invalid file type. Only PDF and Word documents are allowed.", status_code=415
        )

    content = await resume.read()
    if len(content) > MAX_RESUME_BYTES:
        raise UploadRejected("File too large", status_code=413)

    return Attachment(filename=resume.filename, content_type=resume.content_type, content=content)
