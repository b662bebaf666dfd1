# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - MAPEAMENTO LINHA <-> MODELO
# =============================================================================
# Único ponto onde nomes de coluna do banco (um, codigo_item, ...) são
# traduzidos para os campos dos modelos (unidade_medida, codigo, ...)
# =============================================================================

from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..models import ItemPedido, ItemPedidoInput, PedidoDetalhe, PedidoResumo, Produto


def _numero(valor: Any) -> float:
    if valor is None:
        return 0
    if isinstance(valor, Decimal):
        return float(valor)
    return valor


def _texto(valor: Any) -> Optional[str]:
    return None if valor is None else str(valor)


# =============================================================================
# CATÁLOGO
# =============================================================================

def produto_from_row(row: Dict[str, Any]) -> Produto:
    return Produto(
        id=_texto(row.get("id")),
        codigo=row["codigo"],
        descricao=row["descricao"],
        unidade_medida=row["um"],
        endereco=row["endereco"],
        created_at=row.get("created_at"),
    )


def produto_to_row(dados: Dict[str, str]) -> Dict[str, str]:
    """Dados de ingest (já validados) para colunas de integracao_itens."""
    return {
        "codigo": dados["codigo"].strip(),
        "descricao": dados["descricao"].strip(),
        "um": dados["um"].strip(),
        "endereco": dados["endereco"].strip(),
    }


# =============================================================================
# PEDIDOS
# =============================================================================

def item_from_row(row: Dict[str, Any]) -> ItemPedido:
    return ItemPedido(
        codigo=row["codigo_item"],
        descricao=row.get("descricao") or "",
        quantidade=_numero(row["quantidade"]),
        unidade_medida=row.get("um") or "",
        endereco=row.get("endereco") or "",
    )


def item_to_row(pedido_id: str, item: ItemPedidoInput) -> Dict[str, Any]:
    return {
        "pedido_id": pedido_id,
        "codigo_item": item.codigo,
        "descricao": item.descricao,
        "quantidade": item.quantidade,
        "um": item.unidade_medida,
        "endereco": item.endereco,
    }


def resumo_from_row(row: Dict[str, Any]) -> PedidoResumo:
    return PedidoResumo(
        id=str(row["id"]),
        codigo=row.get("codigo"),
        data=row["data"],
        solicitante=row["solicitante"],
        status=row.get("status") or "Pendente",
        observacoes=row.get("observacoes"),
        quantidade_itens=int(row.get("quantidade_itens") or 0),
        total_quantidade=_numero(row.get("total_quantidade")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


def detalhe_from_rows(row: Dict[str, Any], itens: List[Dict[str, Any]]) -> PedidoDetalhe:
    """Cabeçalho + linhas; os totais são recalculados a partir das linhas."""
    resumo = resumo_from_row(row)
    linhas = [item_from_row(i) for i in itens]
    dados = resumo.model_dump(exclude={"quantidade_itens", "total_quantidade"})
    return PedidoDetalhe(
        **dados,
        itens=linhas,
        quantidade_itens=len(linhas),
        total_quantidade=sum(i.quantidade for i in linhas),
    )
