"""
➡️ But : assembler toutes les pièces du puzzle.

create_app(settings) crée l’instance FastAPI et :

construit le Store (engine SQLite) et le range dans app.state ;

configure CORS, le logging JSON et le middleware de traçage des requêtes ;

uniformise le format des erreurs : {"error": "message"} ;

inclut les routers (/api/customers, /api/orders) ;

crée les tables au démarrage (sans jamais les vider).

🔹 Avantages :

Point unique d’exécution : uvicorn app.main:app --reload.

Les tests construisent leur propre app sur une base en mémoire.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, settings as default_settings
from app.core.logging import get_logger, set_trace_id, setup_logging
from app.core.openapi import custom_openapi
from app.db.session import Store

from app.api.routers import customers, orders

import uvicorn

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, *, store: Optional[Store] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    store = store or Store(settings.DATABASE_URL, echo=settings.SQL_ECHO)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.init_db()
        logger.info("store_ready", url=store.url)
        yield
        store.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "customers", "description": "Opérations liées aux clients"},
            {"name": "orders", "description": "Opérations liées aux commandes"},
        ],
    )
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    @app.middleware("http")
    async def add_request_context(request: Request, call_next):
        """trace_id + durée pour chaque requête."""
        trace_id = set_trace_id(request.headers.get("X-Request-ID"))
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = trace_id
        response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

        if request.url.path != "/health":
            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
        return response

    # Erreurs : toujours {"error": "..."} (l'UI affiche ce message tel quel)
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning("request_invalid", path=request.url.path, errors=exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Données invalides."},
        )

    # Routers
    app.include_router(customers.router, prefix="/api")
    app.include_router(orders.router, prefix="/api")

    @app.get("/health", include_in_schema=False)
    def health():
        return {"status": "ok"}

    app.openapi = lambda: custom_openapi(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=3000, reload=(default_settings.ENV == "dev")) # http://localhost:3000
