from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from receituario.config import Settings, settings as default_settings
from receituario.database import (
    close_db,
    create_db_engine,
    create_session_factory,
    init_db,
)
from receituario.middleware import (
    BodySizeLimitMiddleware,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from receituario.services.exceptions import (
    DuplicateRxNoError,
    RecordNotFoundError,
    StoreError,
)
from receituario.web.counter_routes import router as counter_router
from receituario.web.health_routes import router as health_router
from receituario.web.prescription_routes import router as prescription_router

logger = logging.getLogger(__name__)


def configure_logging(config: Settings) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.LOG_FILE:
        log_path = Path(config.LOG_FILE)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path))

    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown events"""
    logger.info("[>>] Starting %s backend...", app.state.settings.APP_NAME)
    init_db(app.state.engine)
    logger.info("[OK] Database initialized")
    yield
    logger.info("[<<] Shutting down...")
    close_db(app.state.engine)
    logger.info("[OK] Database connections closed")


async def not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse({"error": "not_found"}, status_code=404)


async def duplicate_rx_no_handler(request: Request, exc: DuplicateRxNoError):
    logger.warning("Rejected duplicate rxNo %s", exc.rx_no)
    return JSONResponse(
        {"error": "rx_no_conflict", "rxNo": exc.rx_no}, status_code=409
    )


async def store_error_handler(request: Request, exc: StoreError):
    logger.error(
        "Store error on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=exc,
    )
    return JSONResponse({"error": str(exc)}, status_code=500)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        {"error": "validation_error", "detail": jsonable_encoder(exc.errors())},
        status_code=422,
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Registra todas as exceções não tratadas"""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        str(exc),
        exc_info=exc,
    )
    return JSONResponse({"error": str(exc)}, status_code=500)


def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Monta a aplicação com engine e fábrica de sessões próprios.

    Args:
        config: Configuração a usar; padrão é a lida do ambiente
    """
    config = config or default_settings

    app = FastAPI(
        title=config.APP_NAME,
        description="Backend API for prescription numbering and records",
        version="1.0.0",
        lifespan=lifespan,
    )

    engine = create_db_engine(
        config.DATABASE_URL, busy_timeout=config.DB_BUSY_TIMEOUT, echo=config.DEBUG
    )
    app.state.settings = config
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_exception_handler(RecordNotFoundError, not_found_handler)
    app.add_exception_handler(DuplicateRxNoError, duplicate_rx_no_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Innermost first: the last middleware added runs first on a request
    app.add_middleware(SecurityHeadersMiddleware, debug=config.DEBUG)
    if config.RATE_LIMIT_ENABLED:
        app.add_middleware(
            RateLimitMiddleware,
            max_requests=config.RATE_LIMIT_MAX_REQUESTS,
            window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        )
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=config.MAX_BODY_BYTES)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(counter_router)
    app.include_router(prescription_router)

    return app


configure_logging(default_settings)
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "receituario.main:app",
        host=default_settings.HOST,
        port=default_settings.PORT,
        reload=default_settings.DEBUG,
    )
