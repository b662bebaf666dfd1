"""
Base class para providers de email.

Para adicionar um novo provider (ex. SendGrid):
1. Criar novo arquivo em providers/
2. Estender BaseEmailProvider
3. Implementar os métodos abstratos
4. Registrar em providers/__init__.py
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class Anexo:
    """Arquivo anexado ao email."""
    filename: str
    content: bytes
    mime_type: str = 'application/octet-stream'


class BaseEmailProvider(ABC):
    """
    Abstract base class para providers de envio.
    """

    def __init__(self, config: Dict[str, Any]):
        """
        Args:
            config: Dict com credenciais e parâmetros
        """
        self.config = config
        self._validate_config()

    @abstractmethod
    def _validate_config(self) -> None:
        """Levanta ValueError se a configuração for inválida."""

    @abstractmethod
    def send_email(self, to: List[str], subject: str, body_html: str,
                   body_text: Optional[str] = None,
                   attachments: Optional[List[Anexo]] = None) -> str:
        """
        Envia um email.

        Args:
            to: Destinatários
            subject: Assunto
            body_html: Corpo HTML
            body_text: Corpo texto (opcional)
            attachments: Anexos

        Returns:
            Message-ID do email enviado

        Raises:
            Exception do transporte em caso de falha
        """
