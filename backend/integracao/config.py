# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - CONFIGURAÇÃO
# =============================================================================
# Parâmetros lidos do ambiente (.env via python-dotenv)
# =============================================================================

import os
from typing import List, Optional

from dotenv import load_dotenv

# Carrega variáveis de ambiente do .env se presente
load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str = "") -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# =============================================================================
# CONFIGURAÇÃO PRINCIPAL
# =============================================================================

class Settings:
    """
    Configuração global da aplicação.

    Os valores são lidos no momento da construção, o que permite
    criar instâncias com ambiente diferente nos testes.
    """

    VERSION: str = "1.0.0"
    APP_NAME: str = "Integração Pedidos"

    def __init__(self):
        # Banco PostgreSQL (Supabase ou instância própria)
        self.DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL") or None
        self.PG_HOST: str = os.getenv("PG_HOST", "localhost")
        self.PG_PORT: int = int(os.getenv("PG_PORT", "5432"))
        self.PG_DATABASE: str = os.getenv("PG_DATABASE", "postgres")
        self.PG_USER: str = os.getenv("PG_USER", "postgres")
        self.PG_PASSWORD: str = os.getenv("PG_PASSWORD", "")
        self.PG_POOL_MIN: int = int(os.getenv("PG_POOL_MIN", "1"))
        self.PG_POOL_MAX: int = int(os.getenv("PG_POOL_MAX", "10"))
        self.DB_CONNECT_ON_STARTUP: bool = _env_bool("DB_CONNECT_ON_STARTUP", True)

        # Email (SMTP, padrão Gmail)
        self.SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
        self.SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
        self.SMTP_USER: str = os.getenv("SMTP_USER") or os.getenv("GMAIL_USER", "")
        self.SMTP_PASSWORD: str = (
            os.getenv("SMTP_PASSWORD") or os.getenv("GMAIL_APP_PASSWORD", "")
        )
        self.SMTP_USE_TLS: bool = _env_bool("SMTP_USE_TLS", True)
        self.SMTP_SENDER_NAME: str = os.getenv("SMTP_SENDER_NAME", "Sistema de Pedidos")
        self.SMTP_TIMEOUT: int = int(os.getenv("SMTP_TIMEOUT", "30"))
        self.DEFAULT_EMAIL_DESTINATARIO: List[str] = _env_list("DEFAULT_EMAIL_DESTINATARIO")

        # Importação em lote
        self.INGEST_BATCH_SIZE: int = int(os.getenv("INGEST_BATCH_SIZE", "50"))
        self.MAX_UPLOAD_SIZE: int = int(os.getenv("MAX_UPLOAD_SIZE", str(10 * 1024 * 1024)))

        # Diversos
        self.TIMEZONE: str = os.getenv("TIMEZONE", "America/Sao_Paulo")
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.CORS_ORIGINS: List[str] = _env_list(
            "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
        )

    @property
    def dsn(self) -> str:
        """DSN libpq usado pelo pool e pelo Alembic."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"host={self.PG_HOST} port={self.PG_PORT} dbname={self.PG_DATABASE} "
            f"user={self.PG_USER} password={self.PG_PASSWORD}"
        )

    @property
    def sqlalchemy_url(self) -> str:
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            if url.startswith("postgres://"):
                url = "postgresql://" + url[len("postgres://"):]
            return url
        return (
            f"postgresql://{self.PG_USER}:{self.PG_PASSWORD}"
            f"@{self.PG_HOST}:{self.PG_PORT}/{self.PG_DATABASE}"
        )

    def smtp_config(self) -> dict:
        """Configuração no formato esperado pelos providers de email."""
        return {
            'smtp_host': self.SMTP_HOST,
            'smtp_port': self.SMTP_PORT,
            'smtp_user': self.SMTP_USER,
            'smtp_password': self.SMTP_PASSWORD,
            'smtp_use_tls': self.SMTP_USE_TLS,
            'smtp_sender_name': self.SMTP_SENDER_NAME,
            'smtp_timeout': self.SMTP_TIMEOUT,
        }


# Instância padrão
config = Settings()
