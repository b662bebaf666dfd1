# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - PEDIDOS REPOSITORY
# =============================================================================
# Acesso a integracao_pedidos (cabeçalho) e integracao_pedidos_itens (linhas).
# As linhas são removidas pelo ON DELETE CASCADE da FK pedido_id.
# =============================================================================

from datetime import datetime
from typing import Any, Dict, List, Optional

from .base import BaseRepository, escape_like

_COLUNAS_PEDIDO = (
    "p.id, p.codigo, p.data, p.solicitante, p.status, p.observacoes, "
    "p.created_at, p.updated_at"
)
_COLUNAS_ITEM = "id, pedido_id, codigo_item, descricao, quantidade, um, endereco"

CAMPOS_ATUALIZAVEIS = ("status", "observacoes")


class PedidosRepository(BaseRepository):
    """Repositório de pedidos e suas linhas."""

    table_name = "integracao_pedidos"
    itens_table = "integracao_pedidos_itens"

    # =========================================================================
    # CABEÇALHO
    # =========================================================================

    def insert_header(self, solicitante: str, data: datetime,
                      codigo: Optional[str] = None,
                      observacoes: Optional[str] = None) -> Dict[str, Any]:
        """
        Cria o cabeçalho do pedido.

        Sem ``codigo`` a coluna fica com o default do banco (sequência PED-nnnnnn).
        """
        colunas = ["data", "solicitante", "observacoes"]
        valores: list = [data, solicitante, observacoes]
        if codigo:
            colunas.insert(0, "codigo")
            valores.insert(0, codigo)

        placeholders = ", ".join(["%s"] * len(colunas))
        return self._execute_one(
            f"""
            INSERT INTO {self.table_name} ({", ".join(colunas)})
            VALUES ({placeholders})
            RETURNING id, codigo, data, solicitante, status, observacoes,
                      created_at, updated_at
            """,
            valores,
            operacao="criar pedido"
        )

    def get_header(self, pedido_id: str) -> Optional[Dict[str, Any]]:
        return self._execute_one(
            f"SELECT {_COLUNAS_PEDIDO} FROM {self.table_name} p WHERE p.id = %s",
            (str(pedido_id),),
            operacao="buscar pedido"
        )

    def update_fields(self, pedido_id: str, campos: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Atualiza apenas os campos informados e renova updated_at.

        Returns:
            Linha atualizada ou None se o pedido não existe
        """
        desconhecidos = set(campos) - set(CAMPOS_ATUALIZAVEIS)
        if desconhecidos:
            raise ValueError(f"Campos não atualizáveis: {sorted(desconhecidos)}")

        sets = [f"{campo} = %s" for campo in campos]
        sets.append("updated_at = NOW()")
        params = list(campos.values()) + [str(pedido_id)]

        return self._execute_one(
            f"""
            UPDATE {self.table_name} SET {", ".join(sets)}
            WHERE id = %s
            RETURNING id, codigo, data, solicitante, status, observacoes,
                      created_at, updated_at
            """,
            params,
            operacao="atualizar pedido"
        )

    def list_headers(self, codigo: Optional[str] = None,
                     solicitante: Optional[str] = None,
                     status: Optional[str] = None,
                     desde: Optional[datetime] = None,
                     ate_exclusivo: Optional[datetime] = None,
                     limit: Optional[int] = None,
                     offset: int = 0) -> List[Dict[str, Any]]:
        """
        Lista cabeçalhos filtrados, mais recentes primeiro.

        Args:
            codigo: Substring do código (case-insensitive)
            solicitante: Substring do solicitante (case-insensitive)
            status: Igualdade exata
            desde: Limite inferior inclusivo de ``data``
            ate_exclusivo: Limite superior exclusivo de ``data``
            limit: Máximo de linhas (None = sem limite)
            offset: Linhas a pular após o filtro

        Returns:
            Lista de dict com quantidade_itens e total_quantidade
        """
        conditions = []
        params: list = []

        if codigo:
            conditions.append("p.codigo ILIKE %s")
            params.append(f"%{escape_like(codigo)}%")
        if solicitante:
            conditions.append("p.solicitante ILIKE %s")
            params.append(f"%{escape_like(solicitante)}%")
        if status:
            conditions.append("p.status = %s")
            params.append(status)
        if desde is not None:
            conditions.append("p.data >= %s")
            params.append(desde)
        if ate_exclusivo is not None:
            conditions.append("p.data < %s")
            params.append(ate_exclusivo)

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        paginacao = "OFFSET %s"
        params_paginacao: list = [offset]
        if limit is not None:
            paginacao = "LIMIT %s OFFSET %s"
            params_paginacao = [limit, offset]

        return self._execute_query(
            f"""
            SELECT {_COLUNAS_PEDIDO},
                   COUNT(i.id) AS quantidade_itens,
                   COALESCE(SUM(i.quantidade), 0) AS total_quantidade
            FROM {self.table_name} p
            LEFT JOIN {self.itens_table} i ON i.pedido_id = p.id
            {where}
            GROUP BY p.id
            ORDER BY p.data DESC, p.created_at DESC
            {paginacao}
            """,
            params + params_paginacao,
            operacao="listar pedidos"
        )

    # =========================================================================
    # LINHAS
    # =========================================================================

    def insert_itens(self, linhas: List[Dict[str, Any]]) -> int:
        """Insere todas as linhas em um único statement (tudo ou nada)."""
        rows = [
            (l["pedido_id"], l["codigo_item"], l["descricao"],
             l["quantidade"], l["um"], l["endereco"])
            for l in linhas
        ]
        inseridos = self._execute_values(
            f"""
            INSERT INTO {self.itens_table}
                (pedido_id, codigo_item, descricao, quantidade, um, endereco)
            VALUES %s
            RETURNING id
            """,
            rows,
            operacao="inserir itens do pedido"
        )
        return len(inseridos)

    def get_itens(self, pedido_ids: List[str]) -> List[Dict[str, Any]]:
        """Linhas de um ou mais pedidos, na ordem de inserção."""
        if not pedido_ids:
            return []
        return self._execute_query(
            f"""
            SELECT {_COLUNAS_ITEM} FROM {self.itens_table}
            WHERE pedido_id = ANY(%s::uuid[])
            ORDER BY created_at, id
            """,
            ([str(p) for p in pedido_ids],),
            operacao="buscar itens do pedido"
        )
