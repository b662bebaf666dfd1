# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - PRODUTOS REPOSITORY
# =============================================================================
# Acesso à tabela integracao_itens (catálogo de estoque)
# =============================================================================

from typing import Any, Dict, List, Optional

from .base import BaseRepository, escape_like

_COLUNAS = "id, codigo, descricao, um, endereco, created_at"


class ProdutosRepository(BaseRepository):
    """Repositório do catálogo. Códigos duplicados são permitidos."""

    table_name = "integracao_itens"

    def get_by_codigo(self, codigo: str) -> Optional[Dict[str, Any]]:
        """Item com código exato; entre duplicados, o mais recente."""
        return self._execute_one(
            f"""
            SELECT {_COLUNAS} FROM {self.table_name}
            WHERE codigo = %s
            ORDER BY created_at DESC
            LIMIT 1
            """,
            (codigo,),
            operacao="buscar item"
        )

    def search(self, filtro: str = "", limit: int = 20) -> List[Dict[str, Any]]:
        """
        Busca por substring (case-insensitive) em código ou descrição.

        Args:
            filtro: Texto a procurar; vazio retorna os mais recentes
            limit: Máximo de resultados

        Returns:
            Lista de dict ordenada por created_at desc
        """
        params: list = []
        where = ""
        if filtro:
            pattern = f"%{escape_like(filtro)}%"
            where = "WHERE codigo ILIKE %s OR descricao ILIKE %s"
            params.extend([pattern, pattern])
        params.append(limit)

        return self._execute_query(
            f"""
            SELECT {_COLUNAS} FROM {self.table_name}
            {where}
            ORDER BY created_at DESC
            LIMIT %s
            """,
            params,
            operacao="buscar itens"
        )

    def insert_one(self, dados: Dict[str, str]) -> Dict[str, Any]:
        return self._execute_one(
            f"""
            INSERT INTO {self.table_name} (codigo, descricao, um, endereco)
            VALUES (%s, %s, %s, %s)
            RETURNING {_COLUNAS}
            """,
            (dados["codigo"], dados["descricao"], dados["um"], dados["endereco"]),
            operacao="inserir item"
        )

    def insert_many(self, linhas: List[Dict[str, str]]) -> int:
        """Insere um lote em uma única transação. Retorna o número de linhas."""
        if not linhas:
            return 0
        rows = [(l["codigo"], l["descricao"], l["um"], l["endereco"]) for l in linhas]
        inseridos = self._execute_values(
            f"INSERT INTO {self.table_name} (codigo, descricao, um, endereco) "
            f"VALUES %s RETURNING id",
            rows,
            operacao="inserir lote de itens"
        )
        return len(inseridos)
