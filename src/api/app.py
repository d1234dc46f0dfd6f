"""API HTTP (FastAPI).

Capa de transporte fina:
- Traduce JSON <-> `CaptionService.handle` y el status que este decida.
- Nunca deja escapar excepciones crudas: todo sale como `ExtractionResult`.
- Sirve la página estática de `static_dir` en `/` si el directorio existe.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from core.config import AppSettings
from core.domain.models import ExtractionRequest, ExtractionResult
from core.log_config import configure_logging
from core.services.caption_service import CaptionService

logger = logging.getLogger(__name__)

APP_TITLE = "Instagram Caption Extractor"
INVALID_BODY_MESSAGE = "Invalid request body"

router = APIRouter()


def _json_result(status_code: int, result: ExtractionResult) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=result.model_dump(exclude_none=True))


@router.post("/extract-caption", response_model=ExtractionResult, response_model_exclude_none=True)
async def extract_caption(request: Request, payload: ExtractionRequest | None = None) -> JSONResponse:
    service: CaptionService = request.app.state.caption_service
    response = await service.handle(payload.url if payload else None)
    return _json_result(response.status_code, response.result)


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "OK", "message": "Server is running"}


def create_app(
    settings: AppSettings | None = None,
    *,
    service: CaptionService | None = None,
) -> FastAPI:
    """Construye la app; `service` inyectable para tests."""

    settings = settings or AppSettings()
    configure_logging(settings.log_level)
    app = FastAPI(title=APP_TITLE)
    app.state.settings = settings
    app.state.caption_service = service or CaptionService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
        return _json_result(400, ExtractionResult.failure(INVALID_BODY_MESSAGE))

    app.include_router(router, prefix="/api")
    app.include_router(router)

    # El mount en "/" va al final para no tapar las rutas de la API.
    static_dir = settings.static_dir
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.debug("Static directory %s not found; root page disabled", static_dir)

    return app
