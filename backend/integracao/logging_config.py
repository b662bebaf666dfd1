"""
Configuração de logging da aplicação.

Cada módulo usa ``logging.getLogger(__name__)``; aqui é instalado
apenas o handler de console no logger raiz do pacote.
"""

import logging

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Instala um StreamHandler no logger ``integracao`` (idempotente)."""
    global _configured

    logger = logging.getLogger("integracao")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    if _configured:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    _configured = True
