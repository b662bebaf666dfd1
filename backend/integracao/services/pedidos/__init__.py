# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - PEDIDOS SERVICE PACKAGE
# =============================================================================
# Serviço de pedidos decomposto em módulos:
#   pedidos/queries.py  - Leitura (get_pedido, list_pedidos)
#   pedidos/commands.py - Escrita (create_pedido, update_pedido, delete_pedido)
#
# PedidoService liga as funções a um repositório injetado
# =============================================================================

from typing import List, Union

from ...models import (
    FiltrosPedido, PedidoCreate, PedidoDetalhe, PedidoResumo, PedidoStatus, PedidoUpdate
)
from ...persistence.repositories import PedidosRepository
from ...utils.dates import DEFAULT_TIMEZONE
from .commands import create_pedido, delete_pedido, update_pedido, update_status
from .queries import get_pedido, list_pedidos


class PedidoService:
    """Fluxo transacional de pedidos sobre um PedidosRepository."""

    def __init__(self, repo: PedidosRepository, tz_name: str = DEFAULT_TIMEZONE):
        self.repo = repo
        self.tz_name = tz_name

    def criar(self, dados: PedidoCreate) -> PedidoResumo:
        return create_pedido(self.repo, dados)

    def obter(self, pedido_id: str) -> PedidoDetalhe:
        return get_pedido(self.repo, pedido_id)

    def atualizar(self, pedido_id: str, dados: PedidoUpdate) -> PedidoDetalhe:
        return update_pedido(self.repo, pedido_id, dados)

    def alterar_status(self, pedido_id: str, status: PedidoStatus) -> None:
        update_status(self.repo, pedido_id, status)

    def excluir(self, pedido_id: str) -> None:
        delete_pedido(self.repo, pedido_id)

    def listar(self, filtros: FiltrosPedido,
               incluir_itens: bool = True) -> List[Union[PedidoResumo, PedidoDetalhe]]:
        return list_pedidos(self.repo, filtros, incluir_itens, self.tz_name)


__all__ = [
    'PedidoService',
    'create_pedido',
    'update_pedido',
    'update_status',
    'delete_pedido',
    'get_pedido',
    'list_pedidos',
]
