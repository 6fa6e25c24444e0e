import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings
from errors import SubmissionError, ValidationFailed
from middleware import OriginAllowListMiddleware
from routes import common_routes, contact_routes, job_routes
from services.email_service import Mailer, build_mailer

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger().setLevel(settings.log_level)


async def submission_error_handler(request: Request, exc: SubmissionError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.content())


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = {str(error["loc"][-1]): error["msg"] for error in exc.errors()}
    return await submission_error_handler(request, ValidationFailed(errors))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "An unexpected error occurred", "error": str(exc)},
    )


def create_app(settings: Optional[Settings] = None, mailer: Optional[Mailer] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    app = FastAPI()
    app.state.settings = settings
    app.state.mailer = mailer or build_mailer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origin_allow_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # added last so it runs first
    app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.origin_allow_list)

    app.add_exception_handler(SubmissionError, submission_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(common_routes.router)
    app.include_router(contact_routes.router)
    app.include_router(job_routes.router)
    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    logger.info("Server running on port %s", app.state.settings.port)
    uvicorn.run(app, host="0.0.0.0", port=app.state.settings.port)
