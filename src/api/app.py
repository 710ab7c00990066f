"""FastAPI surface for the tour plan backend."""
from __future__ import annotations

import os
# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


from typing import Any, Dict, List, Optional
from fastapi import Body, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import ValidationError as PydanticValidationError
import logging
from fastapi.middleware.cors import CORSMiddleware
import sentry_sdk

from src.api.dependencies import lifespan, get_plan_service, get_settings
from src.api.plan_service import ImageUpload
from src.core.errors import ValidationError
from src.core.schemas import DeletePlanRequest, PlanSubmission

logger = logging.getLogger(__name__)

if os.getenv("SENTRY_DSN"):  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=os.getenv("SENTRY_DSN"),
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="Tour Plan API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)


def _validation_message(exc: PydanticValidationError | RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def _error_response(exc: Exception) -> JSONResponse:
    """Every failure is reported to the client as 400 with its message."""

    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Rejected request body for {request.method} {request.url.path}: {exc.errors()}")
    return _error_response(ValidationError(_validation_message(exc)))


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "bye"


@app.get("/plans")
async def list_plans() -> Any:
    """Return every stored tour plan row."""

    try:
        service = get_plan_service()
        rows: List[Dict[str, Any]] = await service.list_plans()
    except Exception as exc:
        logger.error(f"Listing plans failed: {exc}", exc_info=True)
        return _error_response(exc)
    return rows


@app.post("/plans", status_code=201)
async def create_plan(
    destination: Optional[str] = Form(None),
    purpose: Optional[str] = Form(None),
    people_count: Optional[str] = Form(None),
    start_date: Optional[str] = Form(None),
    end_date: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
) -> Response:
    """Create a plan from a multipart form with an optional ``image`` file.

    The plan is enriched with an AI travel suggestion and an ensemble budget
    range before it is stored.
    """

    logger.info(f"New plan submission: destination={destination}, image={'yes' if image else 'no'}")

    try:
        service = get_plan_service()
        try:
            submission = PlanSubmission(
                destination=destination,
                purpose=purpose,
                people_count=people_count,
                start_date=start_date,
                end_date=end_date,
            )
        except PydanticValidationError as exc:
            raise ValidationError(_validation_message(exc)) from exc

        upload: Optional[ImageUpload] = None
        if image is not None and image.filename:
            upload = ImageUpload(
                filename=image.filename,
                content=await image.read(),
                content_type=image.content_type,
            )

        await service.create_plan(submission, upload)
    except Exception as exc:
        logger.error(f"Plan submission failed: {exc}", exc_info=True)
        return _error_response(exc)

    return Response(status_code=201)


@app.delete("/plans", status_code=204)
async def delete_plan(payload: Optional[Dict[str, Any]] = Body(None)) -> Response:
    """Delete the plan whose id is given as ``planId`` in the JSON body."""

    try:
        service = get_plan_service()
        try:
            request = DeletePlanRequest.model_validate(payload or {})
        except PydanticValidationError as exc:
            raise ValidationError(_validation_message(exc)) from exc
        if request.plan_id is None:
            raise ValidationError("planId is required")

        await service.delete_plan(request.plan_id)
    except Exception as exc:
        logger.error(f"Deleting plan failed: {exc}", exc_info=True)
        return _error_response(exc)

    return Response(status_code=204)
