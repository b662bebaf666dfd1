# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - TEST CONFIGURATION
# =============================================================================
# Fixtures globais: app com repositórios em memória, TestClient, serviços
# =============================================================================

import os
import random
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

# Ambiente de teste ANTES de importar a app
os.environ.setdefault("DB_CONNECT_ON_STARTUP", "false")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from integracao.config import Settings
from integracao.dependencies import (
    get_email_provider,
    get_pedidos_repository,
    get_produtos_repository,
)
from integracao.main import create_app
from integracao.services.catalogo import CatalogoService
from integracao.services.email import EmailDispatchService
from integracao.services.ingest import IngestService
from integracao.services.pedidos import PedidoService

from factories import PedidoFactory, ProdutoFactory
from fakes import FakeEmailProvider, FakePedidosRepository, FakeProdutosRepository


# =============================================================================
# SETTINGS / REPOSITÓRIOS
# =============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings isolado; alterações em um teste não vazam para outros."""
    s = Settings()
    s.DB_CONNECT_ON_STARTUP = False
    s.DEFAULT_EMAIL_DESTINATARIO = []
    s.INGEST_BATCH_SIZE = 50
    s.TIMEZONE = "America/Sao_Paulo"
    return s


@pytest.fixture
def produtos_repo() -> FakeProdutosRepository:
    return FakeProdutosRepository()


@pytest.fixture
def pedidos_repo() -> FakePedidosRepository:
    return FakePedidosRepository()


@pytest.fixture
def email_provider() -> FakeEmailProvider:
    return FakeEmailProvider()


# =============================================================================
# SERVIÇOS
# =============================================================================

@pytest.fixture
def catalogo_service(produtos_repo) -> CatalogoService:
    return CatalogoService(produtos_repo)


@pytest.fixture
def pedido_service(pedidos_repo, settings) -> PedidoService:
    return PedidoService(pedidos_repo, tz_name=settings.TIMEZONE)


@pytest.fixture
def ingest_service(produtos_repo) -> IngestService:
    return IngestService(produtos_repo, batch_size=50)


@pytest.fixture
def email_service(pedido_service, email_provider, settings) -> EmailDispatchService:
    return EmailDispatchService(
        pedido_service,
        lambda: email_provider,
        destinatarios_padrao=["almoxarifado@empresa.test"],
        tz_name=settings.TIMEZONE,
        rng=random.Random(42),
    )


# =============================================================================
# CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def app(settings, produtos_repo, pedidos_repo, email_provider):
    """App com dependências substituídas por doubles em memória."""
    application = create_app(settings)
    application.dependency_overrides[get_produtos_repository] = lambda: produtos_repo
    application.dependency_overrides[get_pedidos_repository] = lambda: pedidos_repo
    application.dependency_overrides[get_email_provider] = lambda: (lambda: email_provider)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """
    TestClient sem lifespan (o pool PostgreSQL nunca é aberto).
    """
    yield TestClient(app, raise_server_exceptions=False)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_pedido_data() -> Dict:
    """Payload válido de criação de pedido."""
    return PedidoFactory()


@pytest.fixture
def catalogo_populado(produtos_repo):
    """Catálogo com alguns itens conhecidos."""
    for dados in [
        ProdutoFactory(codigo="ABC-001", descricao="Parafuso ABC inox"),
        ProdutoFactory(codigo="XYZ-010", descricao="Arruela lisa abc"),
        ProdutoFactory(codigo="QWE-777", descricao="Porca sextavada"),
    ]:
        produtos_repo.insert_one(dados)
    produtos_repo.insert_many(ProdutoFactory.create_batch(10))
    produtos_repo.lotes.clear()
    return produtos_repo


# =============================================================================
# MARKER CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configura markers personalizados.
    """
    config.addinivalue_line(
        "markers", "unit: testes de unidade (sem app)"
    )
    config.addinivalue_line(
        "markers", "api: testes via TestClient"
    )
