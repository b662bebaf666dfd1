# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - EXPORT PACKAGE
# =============================================================================

from .generator import (
    COLUNAS_DETALHES,
    COLUNAS_REQUISICAO,
    COLUNAS_RESUMO,
    SHEET_DETALHES,
    SHEET_REQUISICAO,
    SHEET_RESUMO,
    XLSX_MEDIA_TYPE,
    gerar_relatorio_pedidos,
    gerar_requisicao,
    nome_arquivo_relatorio,
    nome_arquivo_requisicao,
)

__all__ = [
    'COLUNAS_DETALHES',
    'COLUNAS_REQUISICAO',
    'COLUNAS_RESUMO',
    'SHEET_DETALHES',
    'SHEET_REQUISICAO',
    'SHEET_RESUMO',
    'XLSX_MEDIA_TYPE',
    'gerar_relatorio_pedidos',
    'gerar_requisicao',
    'nome_arquivo_relatorio',
    'nome_arquivo_requisicao',
]
