"""Providers de envio de email."""

from .base import Anexo, BaseEmailProvider
from .smtp import SmtpProvider

__all__ = ['Anexo', 'BaseEmailProvider', 'SmtpProvider']
