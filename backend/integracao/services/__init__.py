"""Serviços de domínio: catálogo, pedidos, export, email e ingest."""
