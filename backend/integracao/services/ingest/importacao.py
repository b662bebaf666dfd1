# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - INGEST CATÁLOGO
# =============================================================================
# Inserção de itens de catálogo: unitária (JSON) ou em lote (planilha)
# =============================================================================

import logging
from typing import Any, Dict

from ...exceptions import StoreError, ValidationError
from ...models import Produto
from ...persistence.mapping import produto_from_row, produto_to_row
from ...persistence.repositories import ProdutosRepository
from .parsing import ler_planilha, validar_item

logger = logging.getLogger(__name__)

BATCH_SIZE_PADRAO = 50


class IngestService:
    """Carga do catálogo em integracao_itens."""

    def __init__(self, repo: ProdutosRepository, batch_size: int = BATCH_SIZE_PADRAO):
        if batch_size < 1:
            raise ValueError("batch_size deve ser maior que zero")
        self.repo = repo
        self.batch_size = batch_size

    def inserir_item(self, dados: Dict[str, Any]) -> Produto:
        """
        Insere um único item.

        Raises:
            ValidationError: com a lista dos campos inválidos em ``fields``
        """
        falhas = validar_item(dados)
        if falhas:
            raise ValidationError(
                f"Dados inválidos. Campos obrigatórios ausentes ou vazios: {', '.join(falhas)}",
                extra={"fields": falhas}
            )
        row = self.repo.insert_one(produto_to_row(dados))
        logger.info("Item %s inserido no catálogo", row["codigo"])
        return produto_from_row(row)

    def importar_planilha(self, conteudo: bytes) -> Dict[str, int]:
        """
        Importa os itens válidos da planilha em lotes sequenciais.

        Lotes já gravados não são desfeitos se um lote posterior falhar;
        o StoreError informa quantos itens foram gravados.

        Returns:
            {"insertedCount": n}
        """
        itens = ler_planilha(conteudo)
        if not itens:
            raise ValidationError("Nenhum item válido encontrado no arquivo")

        total = len(itens)
        inseridos = 0
        for inicio in range(0, total, self.batch_size):
            lote = [produto_to_row(i) for i in itens[inicio:inicio + self.batch_size]]
            numero_lote = inicio // self.batch_size + 1
            try:
                self.repo.insert_many(lote)
            except StoreError as e:
                logger.error(
                    "Lote %d falhou após %d/%d itens inseridos: %s",
                    numero_lote, inseridos, total, e.detail
                )
                raise StoreError(
                    f"Erro ao inserir itens em lote ({inseridos} itens já inseridos): {e.detail}",
                    extra={"insertedCount": inseridos}
                ) from e
            inseridos += len(lote)
            logger.info("Lote %d: %d/%d itens inseridos", numero_lote, inseridos, total)

        return {"insertedCount": inseridos}
