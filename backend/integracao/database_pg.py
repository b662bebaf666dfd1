# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - DATABASE MANAGER (PostgreSQL)
# =============================================================================
# Pool de conexões psycopg2 criado no startup e injetado nos repositórios
# =============================================================================

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2 import pool
from psycopg2.extras import RealDictCursor

from .config import Settings

logger = logging.getLogger(__name__)


class Database:
    """
    Dono do ThreadedConnectionPool.

    Cada chamada a ``cursor()`` empresta uma conexão, executa uma
    transação (commit no sucesso, rollback em exceção) e a devolve.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._pool: Optional[pool.ThreadedConnectionPool] = None

    # =========================================================================
    # CICLO DE VIDA
    # =========================================================================

    def open(self) -> None:
        """Inicializa o pool (idempotente)."""
        if self._pool is not None:
            return

        self._pool = pool.ThreadedConnectionPool(
            minconn=self.settings.PG_POOL_MIN,
            maxconn=self.settings.PG_POOL_MAX,
            dsn=self.settings.dsn,
        )
        logger.info(
            "Pool PostgreSQL aberto (min=%s, max=%s)",
            self.settings.PG_POOL_MIN, self.settings.PG_POOL_MAX
        )

    def close(self) -> None:
        """Fecha todas as conexões do pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Pool PostgreSQL fechado")

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    # =========================================================================
    # CONEXÕES E CURSORES
    # =========================================================================

    @contextmanager
    def connection(self) -> Iterator["psycopg2.extensions.connection"]:
        """Empresta uma conexão do pool, abrindo-o sob demanda."""
        if self._pool is None:
            self.open()

        conn = self._pool.getconn()
        try:
            yield conn
        finally:
            self._pool.putconn(conn)

    @contextmanager
    def cursor(self) -> Iterator[RealDictCursor]:
        """Context manager para cursor com commit/rollback automático."""
        with self.connection() as conn:
            cur = conn.cursor(cursor_factory=RealDictCursor)
            try:
                yield cur
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                cur.close()

    def ping(self) -> bool:
        """Verifica conectividade executando SELECT 1."""
        with self.cursor() as cur:
            cur.execute("SELECT 1 AS ok")
            row = cur.fetchone()
        return bool(row and row["ok"] == 1)
