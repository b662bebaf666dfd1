# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - SERVIÇO CATÁLOGO
# =============================================================================
# Consulta ao catálogo de estoque (somente leitura)
# =============================================================================

from typing import List

from ..exceptions import ProdutoNotFoundError, ValidationError
from ..models import Produto
from ..persistence.mapping import produto_from_row
from ..persistence.repositories import ProdutosRepository

LIMITE_PADRAO = 20
LIMITE_MAXIMO = 500


class CatalogoService:
    """Busca de itens por código exato ou por texto livre."""

    def __init__(self, repo: ProdutosRepository):
        self.repo = repo

    def buscar_por_codigo(self, codigo: str) -> Produto:
        codigo = (codigo or "").strip()
        if not codigo:
            raise ValidationError("Código do produto não fornecido")

        row = self.repo.get_by_codigo(codigo)
        if row is None:
            raise ProdutoNotFoundError(
                f"Produto não encontrado: {codigo}", extra={"codigo": codigo}
            )
        return produto_from_row(row)

    def pesquisar(self, filtro: str = "", limit: int = LIMITE_PADRAO) -> List[Produto]:
        """
        Busca itens cujo código ou descrição contém ``filtro``.

        Filtro vazio retorna os ``limit`` itens mais recentes.
        """
        if limit is None or limit < 1:
            raise ValidationError("limit deve ser maior que zero")
        limit = min(limit, LIMITE_MAXIMO)

        rows = self.repo.search((filtro or "").strip(), limit)
        return [produto_from_row(r) for r in rows]
