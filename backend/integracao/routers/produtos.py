# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - ROUTER PRODUTOS
# =============================================================================
# Consulta ao catálogo: por código exato e busca textual
# =============================================================================

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from ..dependencies import get_catalogo_service
from ..models import BuscaProdutosRequest
from ..services.catalogo import CatalogoService
from ..utils.response import success_response

router = APIRouter(prefix="/produtos")


@router.get("", summary="Busca item por código")
def get_produto(
    codigo: Optional[str] = Query(None, description="Código exato do item"),
    service: CatalogoService = Depends(get_catalogo_service)
) -> Dict[str, Any]:
    """Retorna o item com o código informado (400 sem código, 404 se ausente)."""
    produto = service.buscar_por_codigo(codigo or "")
    return success_response(data=produto.model_dump(mode="json", by_alias=True))


@router.post("", summary="Busca textual no catálogo")
def search_produtos(
    body: Optional[BuscaProdutosRequest] = None,
    service: CatalogoService = Depends(get_catalogo_service)
) -> Dict[str, Any]:
    """
    Busca por substring em código ou descrição.

    Body: ``{"filtro": "abc", "limit": 20}`` (ambos opcionais).
    """
    body = body or BuscaProdutosRequest()
    produtos = service.pesquisar(body.filtro, body.limit)
    return success_response(
        data=[p.model_dump(mode="json", by_alias=True) for p in produtos],
        count=len(produtos)
    )
