# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - REPOSITORIES
# =============================================================================

from .base import BaseRepository
from .produtos import ProdutosRepository
from .pedidos import PedidosRepository

__all__ = [
    'BaseRepository',
    'ProdutosRepository',
    'PedidosRepository',
]
