import pytest
from fastapi.testclient import TestClient

from main import create_app

PAYLOAD = {
    "name": "Grace Hopper",
    "email": "grace@example.com",
    "fullPhoneNumber": "+1 555-123-4567",
    "subject": "Partnership",
    "message": "We would like to talk about a project.",
}


def test_contact_form_sends_both_emails(client, mailer):
    response = client.post("/api/contact", json=PAYLOAD)

    assert response.status_code == 200
    assert response.json() == {"message": "Form submitted successfully. We'll be in touch soon!"}
    assert len(mailer.sent) == 2
    notification, acknowledgment = mailer.sent
    assert notification.subject == "Xemsoft | New Contact Form Submission: Partnership"
    assert notification.cc == ["hr@example.com"]
    assert "+1 555-123-4567" in notification.html
    assert acknowledgment.to == ["grace@example.com"]
    assert "Hi Grace Hopper," in acknowledgment.html


def test_contact_form_without_phone(client, mailer):
    payload = dict(PAYLOAD)
    del payload["fullPhoneNumber"]

    response = client.post("/api/contact", json=payload)

    assert response.status_code == 200
    assert "Phone:" not in mailer.sent[0].html


def test_contact_form_validation_errors(client, mailer):
    response = client.post(
        "/api/contact",
        json={"name": "G", "email": "a@b", "fullPhoneNumber": "12345", "subject": "", "message": "short"},
    )

    assert response.status_code == 400
    assert response.json() == {
        "errors": {
            "name": "Valid name is required",
            "email": "Valid email is required",
            "phone": "Invalid phone number length",
            "subject": "Subject is required",
            "message": "Message must be at least 10 characters",
        }
    }
    assert mailer.attempts == []


def test_empty_body_reports_required_fields(client):
    response = client.post("/api/contact")

    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"name", "email", "subject", "message"}


@pytest.mark.parametrize("failing_recipient", ["client@example.com", "grace@example.com"])
def test_any_dispatch_failure_returns_500(settings, recording_mailer, failing_recipient):
    mailer = recording_mailer(fail_on=lambda email: failing_recipient in email.to)
    client = TestClient(create_app(settings, mailer=mailer), raise_server_exceptions=False)

    response = client.post("/api/contact", json=PAYLOAD)

    assert response.status_code == 500
    assert response.json() == {
        "message": "Failed to submit form. Please try again later.",
        "error": "SMTP relay refused the message",
    }
    assert len(mailer.attempts) == 2
    assert len(mailer.sent) == 1


def test_non_object_body_reports_required_fields(client, mailer):
    response = client.post("/api/contact", json=["Grace", "grace@example.com"])

    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"name", "email", "subject", "message"}
    assert mailer.attempts == []


def test_malformed_json_is_an_unexpected_error(client, mailer):
    response = client.post(
        "/api/contact", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "An unexpected error occurred"
    assert body["error"].startswith("Malformed JSON body")
    assert mailer.attempts == []
