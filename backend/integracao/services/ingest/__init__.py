# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - INGEST PACKAGE
# =============================================================================
#   ingest/parsing.py    - Leitura da planilha e validação de itens
#   ingest/importacao.py - IngestService (JSON unitário e planilha em lotes)
# =============================================================================

from .importacao import BATCH_SIZE_PADRAO, IngestService
from .parsing import CAMPOS_OBRIGATORIOS, cell_to_str, ler_planilha, validar_item

__all__ = [
    'BATCH_SIZE_PADRAO',
    'IngestService',
    'CAMPOS_OBRIGATORIOS',
    'cell_to_str',
    'ler_planilha',
    'validar_item',
]
