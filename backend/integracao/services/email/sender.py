"""
Email sender - envio da requisição de separação de um pedido.
"""

import logging
import random
from typing import Callable, Dict, List, Optional

from ...exceptions import DispatchError, IntegracaoException, ValidationError
from ...models import PedidoStatus
from ...utils.dates import DEFAULT_TIMEZONE, formatar_data, hoje
from ..export import gerar_requisicao, nome_arquivo_requisicao
from ..pedidos import PedidoService
from .constants import XLSX_MIME_TYPE
from .providers import Anexo, BaseEmailProvider
from .templates import render_template

logger = logging.getLogger(__name__)


class EmailDispatchService:
    """
    Gera a planilha "Requisição" de um pedido e a envia por email.

    Uso:
        service = EmailDispatchService(pedidos, lambda: SmtpProvider(cfg), ["a@x.com"])
        result = service.enviar(pedido_id)
        # {'messageId': '<...>', 'filename': 'Requisicao_PED-1_2024-01-01.xlsx'}
    """

    def __init__(self, pedidos: PedidoService,
                 provider_factory: Callable[[], BaseEmailProvider],
                 destinatarios_padrao: Optional[List[str]] = None,
                 tz_name: str = DEFAULT_TIMEZONE,
                 rng: Optional[random.Random] = None):
        """
        Args:
            pedidos: Serviço de pedidos (leitura e atualização de status)
            provider_factory: Cria o provider no momento do envio
            destinatarios_padrao: Usados quando a requisição não informa nenhum
            tz_name: Fuso para datas do email e do nome do arquivo
            rng: Gerador para os campos aleatórios da planilha
        """
        self.pedidos = pedidos
        self.provider_factory = provider_factory
        self.destinatarios_padrao = destinatarios_padrao or []
        self.tz_name = tz_name
        self.rng = rng

    def enviar(self, pedido_id: str,
               destinatarios: Optional[List[str]] = None) -> Dict[str, str]:
        """
        Envia o pedido por email e marca como "Em Processamento".

        Raises:
            ValidationError: nenhum destinatário informado ou configurado
            PedidoNotFoundError: pedido inexistente
            DispatchError: falha do provider (status não é alterado)
        """
        para = destinatarios or self.destinatarios_padrao
        if not para:
            raise ValidationError("Destinatário de email não configurado")

        pedido = self.pedidos.obter(pedido_id)

        conteudo = gerar_requisicao(pedido, self.rng)
        filename = nome_arquivo_requisicao(pedido, hoje(self.tz_name))
        subject, body_html, body_text = render_template('novo_pedido', {
            'codigo': pedido.codigo or pedido.id,
            'data': formatar_data(pedido.data, self.tz_name),
            'solicitante': pedido.solicitante,
            'total_itens': len(pedido.itens),
            'observacoes': pedido.observacoes or 'Nenhuma observação',
        })

        try:
            provider = self.provider_factory()
            message_id = provider.send_email(
                para, subject, body_html, body_text,
                attachments=[Anexo(filename, conteudo, XLSX_MIME_TYPE)]
            )
        except Exception as e:
            logger.error("Falha ao enviar pedido %s por email: %s", pedido_id, e)
            raise DispatchError(
                f"Erro ao enviar email: {e}", extra={"pedidoId": str(pedido_id)}
            ) from e

        logger.info("Pedido %s enviado para %s (%s)", pedido.codigo, ", ".join(para), filename)
        self._marcar_em_processamento(pedido_id)

        return {'messageId': message_id, 'filename': filename}

    def _marcar_em_processamento(self, pedido_id: str) -> None:
        # O email já saiu: falha aqui é só registrada
        try:
            self.pedidos.alterar_status(pedido_id, PedidoStatus.EM_PROCESSAMENTO)
        except IntegracaoException as e:
            logger.warning(
                "Email do pedido %s enviado, mas status não atualizado: %s",
                pedido_id, e.detail
            )
