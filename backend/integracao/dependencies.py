# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - DEPENDÊNCIAS FASTAPI
# =============================================================================
# Montagem de repositórios e serviços por request (Depends)
# =============================================================================

from fastapi import Depends, Request

from .config import Settings
from .database_pg import Database
from .persistence.repositories import PedidosRepository, ProdutosRepository
from .services.catalogo import CatalogoService
from .services.email import BaseEmailProvider, EmailDispatchService, SmtpProvider
from .services.ingest import IngestService
from .services.pedidos import PedidoService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.db


# =============================================================================
# REPOSITÓRIOS
# =============================================================================

def get_produtos_repository(db: Database = Depends(get_database)) -> ProdutosRepository:
    return ProdutosRepository(db)


def get_pedidos_repository(db: Database = Depends(get_database)) -> PedidosRepository:
    return PedidosRepository(db)


# =============================================================================
# SERVIÇOS
# =============================================================================

def get_catalogo_service(
    repo: ProdutosRepository = Depends(get_produtos_repository)
) -> CatalogoService:
    return CatalogoService(repo)


def get_pedido_service(
    repo: PedidosRepository = Depends(get_pedidos_repository),
    settings: Settings = Depends(get_settings)
) -> PedidoService:
    return PedidoService(repo, tz_name=settings.TIMEZONE)


def get_ingest_service(
    repo: ProdutosRepository = Depends(get_produtos_repository),
    settings: Settings = Depends(get_settings)
) -> IngestService:
    return IngestService(repo, batch_size=settings.INGEST_BATCH_SIZE)


def get_email_provider(settings: Settings = Depends(get_settings)):
    """Factory do provider; o SmtpProvider só é criado no envio."""
    def factory() -> BaseEmailProvider:
        return SmtpProvider(settings.smtp_config())
    return factory


def get_email_dispatch_service(
    pedidos: PedidoService = Depends(get_pedido_service),
    provider_factory=Depends(get_email_provider),
    settings: Settings = Depends(get_settings)
) -> EmailDispatchService:
    return EmailDispatchService(
        pedidos,
        provider_factory,
        destinatarios_padrao=settings.DEFAULT_EMAIL_DESTINATARIO,
        tz_name=settings.TIMEZONE,
    )
