# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - UTILS
# =============================================================================
# Funções utilitárias compartilhadas
# =============================================================================

from .response import success_response, error_response
from .dates import formatar_data, formatar_data_hora, fim_exclusivo, inicio_do_dia
from .validation import campos_obrigatorios_ausentes, validate_file_extension

__all__ = [
    'success_response',
    'error_response',
    'formatar_data',
    'formatar_data_hora',
    'fim_exclusivo',
    'inicio_do_dia',
    'campos_obrigatorios_ausentes',
    'validate_file_extension',
]
