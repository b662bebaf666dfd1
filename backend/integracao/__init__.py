"""Integração Pedidos - catálogo de estoque, pedidos internos e requisições."""

__version__ = "1.0.0"
