"""Field validation for submitted forms.

Validators never raise. They collect every violation into a
``ValidationResult`` keyed by field name.

Whitespace and length follow browser string semantics: whitespace is the
ECMAScript set (which includes U+FEFF) and lengths count UTF-16 code units,
so limits agree with what the submitting frontend measured.
"""
import re
from typing import Any, Mapping, Optional

from models import ValidationResult

# ECMAScript WhiteSpace and LineTerminator code points
WHITESPACE = (
    "\t\n\v\f\r "
    "\N{NO-BREAK SPACE}\N{OGHAM SPACE MARK}\N{EN QUAD}-\N{HAIR SPACE}"
    "\N{LINE SEPARATOR}\N{PARAGRAPH SEPARATOR}\N{NARROW NO-BREAK SPACE}"
    "\N{MEDIUM MATHEMATICAL SPACE}\N{IDEOGRAPHIC SPACE}\N{ZERO WIDTH NO-BREAK SPACE}"
)

EMAIL_PATTERN = re.compile(rf"[^@{WHITESPACE}]+@[^@{WHITESPACE}]+\.[^@{WHITESPACE}]+")
JOB_PHONE_PATTERN = re.compile(rf"\+?[0-9{WHITESPACE}\-()]{{10,}}")
NON_DIGITS = re.compile(r"[^0-9]")
EDGE_WHITESPACE = re.compile(rf"\A[{WHITESPACE}]+|[{WHITESPACE}]+\Z")


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def trim(text: str) -> str:
    return EDGE_WHITESPACE.sub("", text)


def utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def _is_blank(value: Any, min_length: int = 1) -> bool:
    text = _text(value)
    return text is None or utf16_length(trim(text)) < min_length


def is_valid_email(value: Any) -> bool:
    text = _text(value)
    return bool(text) and EMAIL_PATTERN.fullmatch(text) is not None


def validate_job_application(data: Mapping[str, Any]) -> ValidationResult:
    errors = {}

    if _is_blank(data.get("firstName")):
        errors["firstName"] = "First name is required"

    if _is_blank(data.get("lastName")):
        errors["lastName"] = "Last name is required"

    if not is_valid_email(data.get("email")):
        errors["email"] = "Valid email is required"

    phone = _text(data.get("phone"))
    if not phone or JOB_PHONE_PATTERN.fullmatch(phone) is None:
        errors["phone"] = "Valid phone number is required"

    return ValidationResult(errors=errors)


def validate_contact_message(data: Mapping[str, Any]) -> ValidationResult:
    errors = {}

    if _is_blank(data.get("name"), min_length=2):
        errors["name"] = "Valid name is required"

    if not is_valid_email(data.get("email")):
        errors["email"] = "Valid email is required"

    # optional; reported under "phone"
    phone = data.get("fullPhoneNumber")
    if phone:
        digits = NON_DIGITS.sub("", _text(phone) or "")
        if not 10 <= len(digits) <= 15:
            errors["phone"] = "Invalid phone number length"

    if _is_blank(data.get("subject"), min_length=3):
        errors["subject"] = "Subject is required"

    if _is_blank(data.get("message"), min_length=10):
        errors["message"] = "Message must be at least 10 characters"

    return ValidationResult(errors=errors)
