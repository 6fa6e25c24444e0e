from pydantic import BaseModel
from typing import Dict, List, Optional


class JobApplication(BaseModel):
    first_name: str
    last_name: str
    email: str
    phone: str
    job_title: Optional[str] = None
    job_location: Optional[str] = None


class ContactMessage(BaseModel):
    name: str
    email: str
    full_phone_number: Optional[str] = None
    subject: str
    message: str


class Attachment(BaseModel):
    filename: str
    content_type: str
    content: bytes


class OutboundEmail(BaseModel):
    from_name: str
    from_email: str
    to: List[str]
    cc: List[str] = []
    subject: str
    html: str
    attachment: Optional[Attachment] = None


class ValidationResult(BaseModel):
    errors: Dict[str, str] = {}

    @property
    def is_valid(self) -> bool:
        return not self.errors
