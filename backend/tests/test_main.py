# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - TEST APP / UTILS
# =============================================================================
# Endpoints root/health, envelope de erro, configuração, datas e script CLI
# =============================================================================

from datetime import date, datetime, timezone
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from fastapi.testclient import TestClient

from integracao.config import Settings
from integracao.database_pg import Database
from integracao.exceptions import StoreError
from integracao.main import create_app
from integracao.scripts import import_produtos
from integracao.utils import campos_obrigatorios_ausentes, validate_file_extension
from integracao.utils.dates import fim_exclusivo, formatar_data, formatar_data_hora, inicio_do_dia


# =============================================================================
# APP
# =============================================================================

@pytest.mark.api
class TestApp:
    """Root, health check e handlers de erro."""

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health_ok(self, settings):
        database = MagicMock(spec=Database)
        database.ping.return_value = True
        client = TestClient(create_app(settings, database))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"

    def test_health_banco_fora(self, settings):
        database = MagicMock(spec=Database)
        database.ping.side_effect = psycopg2.OperationalError("could not connect")
        client = TestClient(create_app(settings, database))

        response = client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_lifespan_fecha_pool(self, settings):
        database = MagicMock(spec=Database)
        settings.DB_CONNECT_ON_STARTUP = True

        with TestClient(create_app(settings, database)):
            database.open.assert_called_once()
        database.close.assert_called_once()

    def test_rota_inexistente_envelope(self, client: TestClient):
        response = client.get("/api/nada")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_uuid_invalido(self, client: TestClient):
        response = client.get("/api/pedidos/nao-e-uuid")
        assert response.status_code == 400

    def test_erro_de_banco_vira_500(self, client: TestClient, pedidos_repo):
        pedidos_repo.list_headers = MagicMock(side_effect=StoreError("Erro ao listar pedidos"))

        response = client.get("/api/pedidos")

        assert response.status_code == 500
        assert response.json() == {
            "success": False, "message": "Erro ao listar pedidos", "code": "STORE_ERROR"
        }


# =============================================================================
# CONFIG
# =============================================================================

@pytest.mark.unit
class TestSettings:
    """Leitura do ambiente."""

    def test_fallback_gmail(self, monkeypatch):
        monkeypatch.delenv("SMTP_USER", raising=False)
        monkeypatch.delenv("SMTP_PASSWORD", raising=False)
        monkeypatch.setenv("GMAIL_USER", "pedidos@gmail.com")
        monkeypatch.setenv("GMAIL_APP_PASSWORD", "app-pass")

        cfg = Settings().smtp_config()

        assert cfg["smtp_user"] == "pedidos@gmail.com"
        assert cfg["smtp_password"] == "app-pass"

    def test_destinatarios_lista(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_EMAIL_DESTINATARIO", "a@x.com, b@x.com,")
        assert Settings().DEFAULT_EMAIL_DESTINATARIO == ["a@x.com", "b@x.com"]

    def test_sqlalchemy_url_postgres(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/app")
        assert Settings().sqlalchemy_url == "postgresql://u:p@db:5432/app"


# =============================================================================
# UTILS
# =============================================================================

@pytest.mark.unit
class TestUtils:
    """Datas e validação."""

    def test_formatar_data_hora_sao_paulo(self):
        valor = datetime(2024, 1, 2, 2, 59, tzinfo=timezone.utc)
        assert formatar_data_hora(valor) == "01/01/2024 23:59"

    def test_formatar_data_hora_string_iso(self):
        assert formatar_data_hora("2024-06-15T12:00:00Z") == "15/06/2024 09:00"

    def test_formatar_vazio(self):
        assert formatar_data_hora(None) == ""
        assert formatar_data(None) == ""

    def test_intervalo_do_dia(self):
        inicio = inicio_do_dia(date(2024, 1, 1))
        fim = fim_exclusivo(date(2024, 1, 1))

        assert inicio.astimezone(timezone.utc) == datetime(2024, 1, 1, 3, tzinfo=timezone.utc)
        assert fim.astimezone(timezone.utc) == datetime(2024, 1, 2, 3, tzinfo=timezone.utc)

    def test_campos_obrigatorios(self):
        dados = {"codigo": "1", "descricao": " ", "um": 5}
        assert campos_obrigatorios_ausentes(dados, ["endereco", "codigo", "descricao", "um"]) == [
            "endereco", "descricao", "um"
        ]

    @pytest.mark.parametrize("nome,valido", [
        ("catalogo.xlsx", True),
        ("CATALOGO.XLSM", True),
        ("catalogo.xls", False),
        ("catalogo", False),
        ("", False),
    ])
    def test_extensao(self, nome, valido):
        assert (validate_file_extension(nome, [".xlsx", ".xlsm"]) is None) == valido


# =============================================================================
# SCRIPT
# =============================================================================

@pytest.mark.unit
class TestImportProdutosScript:
    """integracao-import-produtos"""

    def test_arquivo_inexistente(self, tmp_path):
        assert import_produtos.main([str(tmp_path / "nao_existe.xlsx")]) == 1

    def test_importa(self, tmp_path):
        arquivo = tmp_path / "catalogo.xlsx"
        arquivo.write_bytes(b"xlsx")

        with patch.object(import_produtos, "run_import", return_value=7) as run:
            assert import_produtos.main([str(arquivo), "--batch-size", "10"]) == 0

        assert run.call_args[0][0] == arquivo
        assert run.call_args[0][2] == 10

    def test_falha_retorna_1(self, tmp_path):
        arquivo = tmp_path / "catalogo.xlsx"
        arquivo.write_bytes(b"xlsx")

        with patch.object(import_produtos, "run_import",
                          side_effect=StoreError("Erro ao inserir lote")):
            assert import_produtos.main([str(arquivo)]) == 1
