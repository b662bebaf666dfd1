# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - ROUTERS
# =============================================================================

from . import pedidos, produtos, upload

__all__ = ['pedidos', 'produtos', 'upload']
