# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - PEDIDOS QUERIES
# =============================================================================
# Funções de leitura de pedidos
# =============================================================================

import uuid
from collections import defaultdict
from typing import List, Union

from ...exceptions import PedidoNotFoundError
from ...models import FiltrosPedido, PedidoDetalhe, PedidoResumo
from ...persistence.mapping import detalhe_from_rows, resumo_from_row
from ...persistence.repositories import PedidosRepository
from ...utils.dates import DEFAULT_TIMEZONE, fim_exclusivo, inicio_do_dia


def _id_valido(pedido_id) -> bool:
    try:
        uuid.UUID(str(pedido_id))
    except ValueError:
        return False
    return True


def get_pedido(repo: PedidosRepository, pedido_id: str) -> PedidoDetalhe:
    """
    Cabeçalho + linhas. Levanta PedidoNotFoundError se não existir.

    Um id que não é UUID não chega ao banco (a coluna é uuid).
    """
    if not _id_valido(pedido_id):
        raise PedidoNotFoundError(extra={"pedidoId": str(pedido_id)})
    header = repo.get_header(pedido_id)
    if header is None:
        raise PedidoNotFoundError(extra={"pedidoId": str(pedido_id)})
    return detalhe_from_rows(header, repo.get_itens([header["id"]]))


def list_pedidos(repo: PedidosRepository, filtros: FiltrosPedido,
                 incluir_itens: bool = True,
                 tz_name: str = DEFAULT_TIMEZONE) -> List[Union[PedidoResumo, PedidoDetalhe]]:
    """
    Lista pedidos filtrados, mais recentes primeiro.

    ``data_fim`` inclui o dia inteiro: o limite enviado ao banco é
    a meia-noite do dia seguinte, exclusiva.
    """
    desde = inicio_do_dia(filtros.data_inicio, tz_name) if filtros.data_inicio else None
    ate = fim_exclusivo(filtros.data_fim, tz_name) if filtros.data_fim else None

    headers = repo.list_headers(
        codigo=filtros.codigo,
        solicitante=filtros.solicitante,
        status=filtros.status.value if filtros.status else None,
        desde=desde,
        ate_exclusivo=ate,
        limit=filtros.limit,
        offset=filtros.offset,
    )
    if not incluir_itens:
        return [resumo_from_row(h) for h in headers]

    itens_por_pedido = defaultdict(list)
    for item in repo.get_itens([h["id"] for h in headers]):
        itens_por_pedido[str(item["pedido_id"])].append(item)

    return [detalhe_from_rows(h, itens_por_pedido[str(h["id"])]) for h in headers]
