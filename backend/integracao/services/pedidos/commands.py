# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - PEDIDOS COMMANDS
# =============================================================================
# Funções de escrita: criação (com rollback compensatório), atualização
# parcial e exclusão de pedidos
# =============================================================================

import logging

from ...exceptions import PedidoNotFoundError, StoreError, ValidationError
from ...models import PedidoCreate, PedidoDetalhe, PedidoResumo, PedidoStatus, PedidoUpdate
from ...persistence.mapping import item_to_row, resumo_from_row
from ...persistence.repositories import PedidosRepository
from ...utils.dates import agora
from .queries import get_pedido

logger = logging.getLogger(__name__)


# =============================================================================
# CRIAÇÃO
# =============================================================================

def create_pedido(repo: PedidosRepository, dados: PedidoCreate) -> PedidoResumo:
    """
    Cria cabeçalho e linhas do pedido.

    As linhas são gravadas em um único lote. Se o lote falhar o cabeçalho
    é removido (melhor esforço) e o erro original é propagado.

    Raises:
        ValidationError: solicitante vazio ou nenhum item
        StoreError: falha ao gravar cabeçalho ou linhas
    """
    solicitante = (dados.solicitante or "").strip()
    if not solicitante or not dados.itens:
        raise ValidationError(
            "Dados incompletos. Solicitante e pelo menos um item são obrigatórios"
        )

    header = repo.insert_header(
        solicitante=solicitante,
        data=dados.data or agora(),
        codigo=(dados.codigo or "").strip() or None,
        observacoes=dados.observacoes or None,
    )
    pedido_id = str(header["id"])

    try:
        repo.insert_itens([item_to_row(pedido_id, item) for item in dados.itens])
    except StoreError as e:
        _rollback_header(repo, pedido_id)
        raise StoreError(
            f"Erro ao inserir itens do pedido: {e.detail}",
            extra={"pedidoId": pedido_id}
        ) from e

    header["quantidade_itens"] = len(dados.itens)
    header["total_quantidade"] = sum(item.quantidade for item in dados.itens)
    logger.info("Pedido %s criado com %d itens", header.get("codigo") or pedido_id,
                len(dados.itens))
    return resumo_from_row(header)


def _rollback_header(repo: PedidosRepository, pedido_id: str) -> None:
    try:
        removido = repo.delete_by_id(pedido_id)
    except StoreError as e:
        logger.error(
            "Rollback falhou: cabeçalho órfão %s permanece sem itens (%s)",
            pedido_id, e.detail
        )
        return

    if removido:
        logger.warning("Itens do pedido %s falharam; cabeçalho removido", pedido_id)
    else:
        logger.error("Rollback: cabeçalho %s não encontrado para remoção", pedido_id)


# =============================================================================
# ATUALIZAÇÃO / EXCLUSÃO
# =============================================================================

def update_pedido(repo: PedidosRepository, pedido_id: str,
                  dados: PedidoUpdate) -> PedidoDetalhe:
    """Grava apenas os campos presentes em ``dados``."""
    if repo.get_header(pedido_id) is None:
        raise PedidoNotFoundError(extra={"pedidoId": str(pedido_id)})

    campos = dados.campos_alterados()
    if campos:
        if repo.update_fields(pedido_id, campos) is None:
            raise PedidoNotFoundError(extra={"pedidoId": str(pedido_id)})
        logger.info("Pedido %s atualizado: %s", pedido_id, ", ".join(campos))

    return get_pedido(repo, pedido_id)


def update_status(repo: PedidosRepository, pedido_id: str, status: PedidoStatus) -> None:
    if repo.update_fields(pedido_id, {"status": status.value}) is None:
        raise PedidoNotFoundError(extra={"pedidoId": str(pedido_id)})


def delete_pedido(repo: PedidosRepository, pedido_id: str) -> None:
    """Remove o cabeçalho; as linhas saem pelo cascade da FK."""
    if repo.get_header(pedido_id) is None:
        raise PedidoNotFoundError(extra={"pedidoId": str(pedido_id)})
    repo.delete_by_id(pedido_id)
    logger.info("Pedido %s excluído", pedido_id)
