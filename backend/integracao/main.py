# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - FASTAPI MAIN
# =============================================================================
# Aplicação FastAPI principal
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Optional

import psycopg2
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from .config import Settings, config
from .database_pg import Database
from .exceptions import IntegracaoException
from .logging_config import configure_logging
from .routers import pedidos, produtos, upload
from .utils.response import error_response

logger = logging.getLogger(__name__)

# Prefixo API
API_PREFIX = "/api"


# =============================================================================
# LIFESPAN - Startup/Shutdown
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Abre o pool no startup e fecha no shutdown."""
    settings: Settings = app.state.settings
    logger.info("%s v%s - Iniciando...", settings.APP_NAME, settings.VERSION)

    if settings.DB_CONNECT_ON_STARTUP:
        app.state.db.open()

    yield

    app.state.db.close()
    logger.info("%s - Encerrado", settings.APP_NAME)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

async def integracao_exception_handler(request: Request, exc: IntegracaoException):
    """Exceções de domínio -> envelope com status da exceção."""
    if exc.status_code >= 500:
        logger.error("Erro em %s %s: %s", request.method, request.url.path, exc.to_dict())
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.detail, code=exc.code, **exc.extra)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Erros de validação do FastAPI/pydantic -> 400."""
    erros = []
    for err in exc.errors():
        campo = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        erros.append(f"{campo}: {err.get('msg')}" if campo else err.get("msg"))
    return JSONResponse(
        status_code=400,
        content=error_response(
            "Dados inválidos. " + "; ".join(erros),
            code="VALIDATION_ERROR"
        )
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(str(exc.detail), code="HTTP_ERROR"),
        headers=getattr(exc, "headers", None)
    )


async def global_exception_handler(request: Request, exc: Exception):
    """Handler global para exceções não tratadas."""
    logger.exception("Erro não tratado em %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content=error_response(
            f"Erro ao processar a requisição: {exc}",
            code="INTERNAL_ERROR"
        )
    )


# =============================================================================
# APP FASTAPI
# =============================================================================

def create_app(settings: Optional[Settings] = None,
               database: Optional[Database] = None) -> FastAPI:
    """
    Monta a aplicação.

    Args:
        settings: Configuração (default: instância do módulo config)
        database: Database já criado (default: novo Database(settings))
    """
    settings = settings or config
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Integração Pedidos API",
        description="Catálogo de estoque, pedidos internos e requisições de separação",
        version=settings.VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.db = database or Database(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    app.add_exception_handler(IntegracaoException, integracao_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(produtos.router, prefix=API_PREFIX, tags=["Produtos"])
    app.include_router(pedidos.router, prefix=API_PREFIX, tags=["Pedidos"])
    app.include_router(upload.router, prefix=API_PREFIX, tags=["Upload"])

    # =========================================================================
    # ROOT ENDPOINTS
    # =========================================================================

    @app.get("/", tags=["Root"])
    def root():
        """Endpoint root - info da aplicação."""
        return {
            "app": settings.APP_NAME,
            "version": settings.VERSION,
            "status": "running",
            "docs": "/docs",
            "api": API_PREFIX,
        }

    @app.get("/health", tags=["Root"])
    def health_check(request: Request):
        """Health check com teste de conexão ao banco."""
        try:
            request.app.state.db.ping()
        except psycopg2.Error as e:
            return JSONResponse(
                status_code=503,
                content={"status": "unhealthy", "database": "unreachable", "error": str(e)}
            )
        return {"status": "healthy", "database": "connected"}

    return app


app = create_app()


# =============================================================================
# RUN (desenvolvimento)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "integracao.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
