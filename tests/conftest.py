import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import create_app

ALLOWED_ORIGIN = "https://careers.example.com"


class RecordingMailer:
    """Collects outgoing emails instead of talking to a relay."""

    def __init__(self, fail_on=None):
        self.sent = []
        self.attempts = []
        self.fail_on = fail_on

    async def send(self, email):
        self.attempts.append(email)
        if self.fail_on is not None and self.fail_on(email):
            raise ConnectionError("SMTP relay refused the message")
        self.sent.append(email)


@pytest.fixture
def settings():
    return Settings(
        email_host="smtp.example.com",
        email_user="mailer@example.com",
        email_password="secret",
        client_email="client@example.com",
        hr_email="hr@example.com",
        company_name="Xemsoft",
        frontend_url=ALLOWED_ORIGIN,
        allowed_origins=["http://localhost:5173"],
    )


@pytest.fixture
def recording_mailer():
    return RecordingMailer


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(settings, mailer):
    app = create_app(settings, mailer=mailer)
    return TestClient(app, raise_server_exceptions=False)
