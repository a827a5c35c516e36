"""
FastAPI Web Application - Review Radar API
===========================================

JSON API over the analysis pipeline.

ROUTES:
- POST /analyze   analyze a place name or map URL (201 new, 200 cached)
- GET  /analyze   stored analyses, most recent first
- GET  /health    liveness probe

Routes are plain `def` functions so each request's pipeline runs on its
own worker thread and blocking upstream calls never stall other requests.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..application import AnalysisPipeline
from ..domain.errors import AnalysisError, InvalidInput
from ..infrastructure.config import get_settings

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class AnalyzeRequest(BaseModel):
    """Either field may carry the place reference; `url` is the older name."""
    input: Optional[str] = None
    url: Optional[str] = None

    @property
    def place_reference(self) -> Optional[str]:
        return self.input if self.input is not None else self.url


# ── Lifespan ───────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    for issue in settings.validate():
        logger.warning(issue)

    if getattr(app.state, "pipeline", None) is None:
        app.state.pipeline = AnalysisPipeline.from_settings(settings)
    logger.info("Analysis pipeline ready")
    yield


def create_app(pipeline: Optional[AnalysisPipeline] = None) -> FastAPI:
    """Build the API. Pass a pipeline to skip wiring from settings."""
    app = FastAPI(
        title="Review Radar",
        description="Place review sentiment analysis",
        lifespan=lifespan,
    )
    app.state.pipeline = pipeline

    @app.exception_handler(AnalysisError)
    async def analysis_error_handler(request: Request, exc: AnalysisError):
        if exc.is_client_error:
            logger.info(f"{request.method} {request.url.path} -> {exc.code}: {exc.detail or exc.message}")
        else:
            logger.error(f"{request.method} {request.url.path} -> {exc.code}: {exc.detail or exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # malformed analyze bodies share the invalid_input shape
        if request.method == "POST" and request.url.path == "/analyze":
            error = InvalidInput("Send a JSON body like {\"input\": \"<place name or map URL>\"}.")
            logger.info(f"POST /analyze -> {error.code}: {exc.errors()}")
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
        return await request_validation_exception_handler(request, exc)

    @app.post("/analyze")
    def analyze(body: AnalyzeRequest, request: Request):
        outcome = request.app.state.pipeline.analyze(body.place_reference)
        return JSONResponse(
            status_code=200 if outcome.cached else 201,
            content=outcome.record.to_dict(),
        )

    @app.get("/analyze")
    def list_analyses(request: Request, limit: Optional[int] = Query(None, ge=1, le=500)):
        records = request.app.state.pipeline.list_analyses(limit)
        return [record.to_dict() for record in records]

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
