"""initial_schema_integracao

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-19 09:12:44.102318

BASELINE MIGRATION para Integração Pedidos v1.0

Bancos existentes (tabelas já criadas pelo Supabase) recebem apenas
o stamp; bancos novos recebem o schema completo.

Tabelas: integracao_itens, integracao_pedidos, integracao_pedidos_itens
"""
from typing import Sequence, Union

from alembic import op
from sqlalchemy import text


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Verifica se a tabela existe no banco."""
    conn = op.get_bind()
    result = conn.execute(text(
        "SELECT EXISTS (SELECT 1 FROM information_schema.tables WHERE table_name = :name)"
    ), {"name": table_name})
    return result.scalar()


def upgrade() -> None:
    if table_exists('integracao_pedidos'):
        print("  Schema já existe - baseline (sem alterações)")
        return

    print("  Criando schema inicial...")
    conn = op.get_bind()

    conn.execute(text('CREATE EXTENSION IF NOT EXISTS "pgcrypto"'))

    # =========================================================================
    # CATÁLOGO
    # =========================================================================

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS integracao_itens (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            codigo TEXT NOT NULL,
            descricao TEXT NOT NULL,
            um TEXT NOT NULL,
            endereco TEXT NOT NULL,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """))
    conn.execute(text(
        "CREATE INDEX IF NOT EXISTS idx_integracao_itens_codigo ON integracao_itens (codigo)"
    ))
    conn.execute(text(
        "CREATE INDEX IF NOT EXISTS idx_integracao_itens_created_at "
        "ON integracao_itens (created_at DESC)"
    ))

    # =========================================================================
    # PEDIDOS
    # =========================================================================

    conn.execute(text("CREATE SEQUENCE IF NOT EXISTS integracao_pedidos_codigo_seq"))
    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS integracao_pedidos (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            codigo TEXT DEFAULT ('PED-' || lpad(nextval('integracao_pedidos_codigo_seq')::text, 6, '0')),
            data TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            solicitante TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'Pendente'
                CHECK (status IN ('Pendente', 'Em Processamento', 'Separado', 'Entregue', 'Cancelado')),
            observacoes TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """))
    conn.execute(text(
        "CREATE INDEX IF NOT EXISTS idx_integracao_pedidos_data ON integracao_pedidos (data DESC)"
    ))
    conn.execute(text(
        "CREATE INDEX IF NOT EXISTS idx_integracao_pedidos_status ON integracao_pedidos (status)"
    ))

    conn.execute(text("""
        CREATE TABLE IF NOT EXISTS integracao_pedidos_itens (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            pedido_id UUID NOT NULL REFERENCES integracao_pedidos(id) ON DELETE CASCADE,
            codigo_item TEXT NOT NULL,
            descricao TEXT NOT NULL DEFAULT '',
            quantidade NUMERIC(14, 3) NOT NULL CHECK (quantidade > 0),
            um TEXT NOT NULL DEFAULT '',
            endereco TEXT NOT NULL DEFAULT '',
            created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
        )
    """))
    conn.execute(text(
        "CREATE INDEX IF NOT EXISTS idx_integracao_pedidos_itens_pedido "
        "ON integracao_pedidos_itens (pedido_id)"
    ))


def downgrade() -> None:
    conn = op.get_bind()
    conn.execute(text("DROP TABLE IF EXISTS integracao_pedidos_itens"))
    conn.execute(text("DROP TABLE IF EXISTS integracao_pedidos"))
    conn.execute(text("DROP SEQUENCE IF EXISTS integracao_pedidos_codigo_seq"))
    conn.execute(text("DROP TABLE IF EXISTS integracao_itens"))
