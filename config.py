import os
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import Request
from pydantic import BaseModel

load_dotenv()

DEFAULT_ORIGINS = "http://localhost:5173,https://xs-gamma.vercel.app"


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    email_host: Optional[str] = None
    email_port: int = 587
    email_secure: bool = False
    email_user: Optional[str] = None
    email_password: Optional[str] = None
    email_from: Optional[str] = None
    client_email: Optional[str] = None
    hr_email: Optional[str] = None
    company_name: str = "Xemsoft"
    frontend_url: Optional[str] = None
    allowed_origins: List[str] = []
    mail_transport: str = "smtp"
    sendgrid_api_key: Optional[str] = None
    port: int = 3001
    log_level: str = "INFO"

    @property
    def sender(self) -> str:
        return self.email_from or self.email_user or ""

    @property
    def origin_allow_list(self) -> List[str]:
        origins = list(self.allowed_origins)
        if self.frontend_url and self.frontend_url not in origins:
            origins.insert(0, self.frontend_url)
        return origins

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("ALLOWED_ORIGINS", DEFAULT_ORIGINS)
        return cls(
            email_host=os.getenv("EMAIL_HOST"),
            email_port=int(os.getenv("EMAIL_PORT", "587")),
            email_secure=_flag(os.getenv("EMAIL_SECURE")),
            email_user=os.getenv("EMAIL_USER"),
            email_password=os.getenv("EMAIL_PASS"),
            email_from=os.getenv("EMAIL_FROM"),
            client_email=os.getenv("CLIENT_EMAIL"),
            hr_email=os.getenv("HR_EMAIL") or None,
            company_name=os.getenv("COMPANY_NAME", "Xemsoft"),
            frontend_url=os.getenv("FRONTEND_URL") or None,
            allowed_origins=[o.strip() for o in origins.split(",") if o.strip()],
            mail_transport=os.getenv("MAIL_TRANSPORT", "smtp").strip().lower(),
            sendgrid_api_key=os.getenv("SENDGRID_API_KEY"),
            port=int(os.getenv("PORT", "3001")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
