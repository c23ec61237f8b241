"""FastAPI app: POST /api/detect."""

import logging

from fastapi import APIRouter, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from data_designer_ai_detector.api import (
    DEFAULT_SETTINGS,
    DetectorSettings,
    DetectRequest,
    DetectResponse,
    ScoringError,
    detect,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["detect"])


@router.post("/detect", response_model=DetectResponse)
def detect_text(body: DetectRequest, request: Request, response: Response) -> DetectResponse:
    """Estimate how likely the text is to be machine-generated.

    Heuristic scoring, not proof.
    """
    settings: DetectorSettings = request.app.state.settings
    result = detect(body.text, settings)
    response.headers["Cache-Control"] = "no-store"
    return result


def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    invalid_json = any(err.get("type") == "json_invalid" for err in exc.errors())
    message = "Invalid JSON body" if invalid_json else "Text is required"
    logger.info(f"Rejected detect request: {message}")
    return JSONResponse(status_code=400, content={"error": message})


def _scoring_error_handler(request: Request, exc: ScoringError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Consistent ``{"error": ...}`` body for routing errors such as 405."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


def create_app(settings: DetectorSettings | None = None) -> FastAPI:
    app = FastAPI(
        title="AI Detector API",
        description="Statistical AI-likeness scoring for prose.",
        version="0.1.0",
    )
    app.state.settings = settings or DEFAULT_SETTINGS
    app.include_router(router, prefix="/api")
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(ScoringError, _scoring_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    return app


app = create_app()
