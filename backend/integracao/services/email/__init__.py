"""
Sistema de Email - Integração Pedidos v1.0

Envio da requisição de separação de pedidos por SMTP (Gmail por padrão).
"""

from .providers import Anexo, BaseEmailProvider, SmtpProvider
from .sender import EmailDispatchService
from .templates import TEMPLATES, render_template

__all__ = [
    'Anexo',
    'BaseEmailProvider',
    'SmtpProvider',
    'EmailDispatchService',
    'TEMPLATES',
    'render_template',
]
