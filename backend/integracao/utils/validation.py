# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - UTILS/VALIDATION
# =============================================================================
# Funções de validação
# =============================================================================

from typing import Any, Dict, List, Optional, Sequence


def campos_obrigatorios_ausentes(dados: Dict[str, Any], campos: Sequence[str]) -> List[str]:
    """
    Retorna os campos ausentes, não-string ou em branco.

    Args:
        dados: Registro a validar
        campos: Campos obrigatórios

    Returns:
        Lista (na ordem de ``campos``) dos que falharam
    """
    falhas = []
    for campo in campos:
        valor = dados.get(campo) if isinstance(dados, dict) else None
        if not isinstance(valor, str) or not valor.strip():
            falhas.append(campo)
    return falhas


def validate_file_extension(filename: str, allowed_extensions: List[str]) -> Optional[str]:
    """
    Valida a extensão do arquivo.

    Args:
        filename: Nome do arquivo
        allowed_extensions: Extensões aceitas (ex.: ['.xlsx'])

    Returns:
        Mensagem de erro se inválido, None se válido
    """
    if not filename:
        return "Nome do arquivo ausente"

    ext = filename.lower().rsplit('.', 1)[-1] if '.' in filename else ''
    allowed = [e.lstrip('.').lower() for e in allowed_extensions]

    if ext not in allowed:
        return f"Formato não suportado. Formatos aceitos: {', '.join(allowed_extensions)}"
    return None
