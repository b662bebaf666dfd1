#!/usr/bin/env python3
# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - IMPORTAÇÃO CATÁLOGO
# =============================================================================
# Carrega uma planilha .xlsx em integracao_itens sem passar pela API
#
# USO:
#   python -m integracao.scripts.import_produtos catalogo.xlsx
#   python -m integracao.scripts.import_produtos catalogo.xlsx --batch-size 100
# =============================================================================

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import Settings
from ..database_pg import Database
from ..exceptions import IntegracaoException
from ..logging_config import configure_logging
from ..persistence.repositories import ProdutosRepository
from ..services.ingest import IngestService

logger = logging.getLogger("integracao.scripts.import_produtos")


def run_import(path: Path, settings: Settings, batch_size: Optional[int] = None) -> int:
    """
    Importa o arquivo e retorna o número de itens inseridos.

    Raises:
        IntegracaoException: validação ou falha de banco
    """
    db = Database(settings)
    try:
        service = IngestService(
            ProdutosRepository(db),
            batch_size=batch_size or settings.INGEST_BATCH_SIZE
        )
        resultado = service.importar_planilha(path.read_bytes())
    finally:
        db.close()
    return resultado["insertedCount"]


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(
        description="Importa itens de catálogo de uma planilha Excel"
    )
    parser.add_argument("arquivo", type=Path, help="Planilha .xlsx com endereco, codigo, descricao, um")
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Itens por lote (default: INGEST_BATCH_SIZE)"
    )
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(settings.LOG_LEVEL)

    if not args.arquivo.is_file():
        logger.error("Arquivo não encontrado: %s", args.arquivo)
        return 1

    try:
        inseridos = run_import(args.arquivo, settings, args.batch_size)
    except IntegracaoException as e:
        logger.error("Importação falhou: %s", e.detail)
        return 1

    logger.info("%d itens inseridos", inseridos)
    return 0


if __name__ == "__main__":
    sys.exit(main())
