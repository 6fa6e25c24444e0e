from typing import Any, Dict


class SubmissionError(Exception):
    """Base for failures that map straight onto an HTTP response."""

    status_code = 500

    def content(self) -> Dict[str, Any]:
        return {"message": str(self)}


class ValidationFailed(SubmissionError):
    status_code = 400

    def __init__(self, errors: Dict[str, str]):
        super().__init__("Validation failed")
        self.errors = dict(errors)

    def content(self) -> Dict[str, Any]:
        return {"errors": self.errors}


class MissingAttachment(ValidationFailed):
    def __init__(self, message: str = "Resume is required"):
        super().__init__({"file": message})


class UploadRejected(SubmissionError):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code

    def content(self) -> Dict[str, Any]:
        return {"message": "Upload rejected", "error": str(self)}


class OriginNotAllowed(SubmissionError):
    status_code = 403

    def __init__(self, origin: str):
        super().__init__("Not allowed by CORS")
        self.origin = origin


class DispatchError(SubmissionError):
    """Raised when any of a request's emails could not be handed to the relay."""

    def __init__(self, error: str, message: str = "Failed to send email"):
        super().__init__(error)
        self.error = error
        self.message = message

    def content(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.error}


class MalformedRequest(SubmissionError):
    """A request body that could not be parsed at all."""

    def content(self) -> Dict[str, Any]:
        return {"message": "An unexpected error occurred", "error": str(self)}
