# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - BASE REPOSITORY
# =============================================================================
# Classe base para o Repository Pattern
# =============================================================================

import logging
from abc import ABC
from typing import Any, Dict, List, Optional, Sequence

import psycopg2
from psycopg2.extras import execute_values

from ...database_pg import Database
from ...exceptions import StoreError

logger = logging.getLogger(__name__)


def escape_like(value: str) -> str:
    """Escapa curingas de LIKE/ILIKE (``\\``, ``%`` e ``_``)."""
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


class BaseRepository(ABC):
    """
    Repositório base com helpers de execução.

    Toda falha do driver vira ``StoreError`` com a exceção original
    encadeada.

    Attributes:
        table_name: Nome da tabela principal
        primary_key: Nome da chave primária (default: 'id')
    """

    table_name: str = ""
    primary_key: str = "id"

    def __init__(self, db: Database):
        self.db = db

    def _store_error(self, operacao: str, exc: Exception) -> StoreError:
        logger.error("Erro de banco em %s.%s: %s", self.table_name, operacao, exc)
        return StoreError(f"Erro ao {operacao}: {exc}")

    def _execute_query(self, query: str, params: Sequence = None,
                       operacao: str = "consultar") -> List[Dict[str, Any]]:
        """Executa query e retorna lista de dict."""
        try:
            with self.db.cursor() as cur:
                cur.execute(query, params or ())
                rows = cur.fetchall()
        except psycopg2.Error as e:
            raise self._store_error(operacao, e) from e
        return [dict(row) for row in rows]

    def _execute_one(self, query: str, params: Sequence = None,
                     operacao: str = "consultar") -> Optional[Dict[str, Any]]:
        """Executa query e retorna um único dict (ou None)."""
        try:
            with self.db.cursor() as cur:
                cur.execute(query, params or ())
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise self._store_error(operacao, e) from e
        return dict(row) if row else None

    def _execute_values(self, query: str, rows: List[tuple], template: str = None,
                        operacao: str = "inserir") -> List[Dict[str, Any]]:
        """Insert em lote via execute_values, tudo em uma transação."""
        try:
            with self.db.cursor() as cur:
                result = execute_values(
                    cur, query, rows, template=template,
                    page_size=max(len(rows), 1), fetch=True
                )
        except psycopg2.Error as e:
            raise self._store_error(operacao, e) from e
        return [dict(row) for row in result]

    def delete_by_id(self, id_value: Any) -> bool:
        """
        Remove registro pela chave primária.

        Returns:
            True se uma linha foi removida
        """
        row = self._execute_one(
            f"DELETE FROM {self.table_name} WHERE {self.primary_key} = %s "
            f"RETURNING {self.primary_key}",
            (str(id_value),),
            operacao="excluir"
        )
        return row is not None
