# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - TEST EMAIL
# =============================================================================
# Envio da requisição por email e atualização de status
# =============================================================================

import io
import logging
import uuid
from unittest.mock import MagicMock, patch

import psycopg2.errors
import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from integracao.database_pg import Database
from integracao.dependencies import get_pedidos_repository
from integracao.exceptions import DispatchError, PedidoNotFoundError, ValidationError
from integracao.models import PedidoCreate, PedidoStatus
from integracao.persistence.repositories import PedidosRepository
from integracao.services.email import EmailDispatchService
from integracao.services.email.providers import Anexo, SmtpProvider
from integracao.services.email.templates import render_template
from integracao.services.export import SHEET_REQUISICAO

from factories import ItemPedidoFactory, PedidoFactory


@pytest.fixture
def pedido(pedido_service):
    dados = PedidoFactory.com_data(2024, 3, 10, codigo="PED-000042", solicitante="Maria Souza",
                                   itens=ItemPedidoFactory.create_batch(2))
    return pedido_service.criar(PedidoCreate.model_validate(dados))


# =============================================================================
# SERVIÇO
# =============================================================================

@pytest.mark.unit
class TestEmailDispatchService:
    """EmailDispatchService.enviar"""

    def test_envio_com_anexo(self, email_service, email_provider, pedido):
        resultado = email_service.enviar(pedido.id)

        assert len(email_provider.enviados) == 1
        enviado = email_provider.enviados[0]
        assert resultado["messageId"] == enviado["message_id"]
        assert enviado["subject"] == "Novo Pedido Gerado - PED-000042 - 10/03/2024"
        assert "Maria Souza" in enviado["body_html"]
        assert "Total de Itens: 2" in enviado["body_text"]

        anexo = enviado["attachments"][0]
        assert anexo.filename == resultado["filename"]
        assert anexo.filename.startswith("Requisicao_PED-000042_")
        wb = load_workbook(io.BytesIO(anexo.content))
        assert len(list(wb[SHEET_REQUISICAO].iter_rows())) == 3

    def test_status_em_processamento(self, email_service, pedido_service, pedido):
        email_service.enviar(pedido.id)

        assert pedido_service.obter(pedido.id).status == PedidoStatus.EM_PROCESSAMENTO

    def test_destinatarios_padrao(self, email_service, email_provider, pedido):
        email_service.enviar(pedido.id)
        assert email_provider.enviados[0]["to"] == ["almoxarifado@empresa.test"]

    def test_destinatarios_informados(self, email_service, email_provider, pedido):
        email_service.enviar(pedido.id, ["a@empresa.test", "b@empresa.test"])
        assert email_provider.enviados[0]["to"] == ["a@empresa.test", "b@empresa.test"]

    def test_sem_destinatario(self, pedido_service, email_provider, pedido):
        service = EmailDispatchService(pedido_service, lambda: email_provider)

        with pytest.raises(ValidationError):
            service.enviar(pedido.id)
        assert email_provider.enviados == []

    def test_pedido_inexistente(self, email_service, email_provider):
        with pytest.raises(PedidoNotFoundError):
            email_service.enviar(str(uuid.uuid4()))
        assert email_provider.enviados == []

    def test_falha_provider_nao_altera_status(self, email_service, email_provider,
                                               pedido_service, pedido):
        email_provider.falhar = True

        with pytest.raises(DispatchError) as exc_info:
            email_service.enviar(pedido.id)

        assert "SMTP indisponível" in exc_info.value.detail
        assert pedido_service.obter(pedido.id).status == PedidoStatus.PENDENTE

    def test_falha_ao_criar_provider(self, pedido_service, pedido):
        def factory():
            raise ValueError("Credenciais ausentes")

        service = EmailDispatchService(pedido_service, factory, ["x@empresa.test"])

        with pytest.raises(DispatchError):
            service.enviar(pedido.id)

    def test_falha_no_status_mantem_sucesso(self, email_service, pedidos_repo, pedido, caplog):
        """Email já enviado: erro ao gravar o status vira só um warning."""
        pedidos_repo.falhar_update = True

        with caplog.at_level(logging.WARNING, logger="integracao"):
            resultado = email_service.enviar(pedido.id)

        assert resultado["messageId"]
        assert "status não atualizado" in caplog.text


# =============================================================================
# TEMPLATE / SMTP
# =============================================================================

@pytest.mark.unit
class TestTemplateESmtp:
    """Renderização e montagem da mensagem MIME."""

    def test_template_escapa_html(self):
        subject, body_html, body_text = render_template("novo_pedido", {
            "codigo": "PED-1", "data": "01/01/2024", "solicitante": "<b>Zé</b>",
            "total_itens": 1, "observacoes": "a & b",
        })

        assert subject == "Novo Pedido Gerado - PED-1 - 01/01/2024"
        assert "&lt;b&gt;Zé&lt;/b&gt;" in body_html
        assert "a &amp; b" in body_html
        assert "<b>Zé</b>" in body_text

    def test_smtp_sem_credenciais(self):
        with pytest.raises(ValueError):
            SmtpProvider({"smtp_user": "", "smtp_password": ""})

    def test_build_message(self):
        provider = SmtpProvider({"smtp_user": "sistema@empresa.test", "smtp_password": "x",
                                 "smtp_sender_name": "Sistema de Pedidos"})

        msg = provider.build_message(
            ["a@empresa.test", "b@empresa.test"], "Assunto", "<p>oi</p>", "oi",
            attachments=[Anexo("req.xlsx", b"PK\x03\x04", "application/vnd.ms-excel")]
        )

        assert msg["To"] == "a@empresa.test, b@empresa.test"
        assert "sistema@empresa.test" in msg["From"]
        assert msg["Message-ID"]
        partes = msg.get_payload()
        assert partes[0].get_content_type() == "multipart/alternative"
        assert partes[1].get_filename() == "req.xlsx"
        assert partes[1].get_payload(decode=True) == b"PK\x03\x04"

    def test_send_email_usa_smtp(self):
        provider = SmtpProvider({"smtp_user": "u@empresa.test", "smtp_password": "p",
                                 "smtp_host": "smtp.empresa.test", "smtp_port": 2525})
        server = MagicMock()

        with patch("integracao.services.email.providers.smtp.smtplib.SMTP",
                   return_value=server) as smtp_cls:
            message_id = provider.send_email(["a@empresa.test"], "Assunto", "<p>x</p>")

        smtp_cls.assert_called_once_with("smtp.empresa.test", 2525, timeout=30)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("u@empresa.test", "p")
        server.send_message.assert_called_once()
        server.quit.assert_called_once()
        assert message_id.startswith("<")


# =============================================================================
# API
# =============================================================================

@pytest.mark.api
class TestEmailExportApi:
    """POST /api/pedidos/email-export."""

    def test_envio(self, client: TestClient, email_provider, sample_pedido_data):
        pedido_id = client.post("/api/pedidos", json=sample_pedido_data).json()["data"]["id"]

        response = client.post("/api/pedidos/email-export", json={
            "pedidoId": pedido_id, "destinatarios": "a@empresa.test, b@empresa.test"
        })

        assert response.status_code == 200
        body = response.json()
        assert body["emailId"] == email_provider.enviados[0]["message_id"]
        assert body["filename"].endswith(".xlsx")
        assert email_provider.enviados[0]["to"] == ["a@empresa.test", "b@empresa.test"]

        detalhe = client.get(f"/api/pedidos/{pedido_id}").json()["data"]
        assert detalhe["status"] == "Em Processamento"

    def test_sem_destinatario_configurado(self, client: TestClient, sample_pedido_data):
        pedido_id = client.post("/api/pedidos", json=sample_pedido_data).json()["data"]["id"]

        response = client.post("/api/pedidos/email-export", json={"pedidoId": pedido_id})

        assert response.status_code == 400
        assert "Destinatário" in response.json()["message"]

    def test_pedido_inexistente(self, client: TestClient):
        response = client.post("/api/pedidos/email-export", json={
            "pedidoId": str(uuid.uuid4()), "destinatarios": ["a@empresa.test"]
        })
        assert response.status_code == 404

    def test_falha_smtp(self, client: TestClient, email_provider, sample_pedido_data):
        email_provider.falhar = True
        pedido_id = client.post("/api/pedidos", json=sample_pedido_data).json()["data"]["id"]

        response = client.post("/api/pedidos/email-export", json={
            "pedidoId": pedido_id, "destinatarios": ["a@empresa.test"]
        })

        assert response.status_code == 500
        assert response.json()["code"] == "DISPATCH_ERROR"

    def test_pedido_id_nao_uuid(self, app, client: TestClient, email_provider):
        """Id malformado é 404 e não chega ao banco (coluna uuid)."""
        database = MagicMock(spec=Database)
        cursor = database.cursor.return_value.__enter__.return_value
        cursor.execute.side_effect = psycopg2.errors.InvalidTextRepresentation(
            'invalid input syntax for type uuid: "abc"'
        )
        app.dependency_overrides[get_pedidos_repository] = lambda: PedidosRepository(database)

        response = client.post("/api/pedidos/email-export", json={
            "pedidoId": "abc", "destinatarios": ["a@empresa.test"]
        })

        assert response.status_code == 404
        assert response.json()["code"] == "PEDIDO_NOT_FOUND"
        cursor.execute.assert_not_called()
        assert email_provider.enviados == []
