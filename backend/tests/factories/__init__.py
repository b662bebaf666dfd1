# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - TEST FACTORIES
# =============================================================================
# Factory Boy factories para geração de dados de teste
# =============================================================================

from .pedidos import ItemPedidoFactory, PedidoFactory
from .produtos import ProdutoFactory

__all__ = [
    "ItemPedidoFactory",
    "PedidoFactory",
    "ProdutoFactory",
]
