# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - UTILS/RESPONSE
# =============================================================================
# Builders para o envelope JSON padrão {success, message, data, count}
# =============================================================================

from typing import Any, Dict


def success_response(data: Any = None, message: str = None, **kwargs) -> Dict[str, Any]:
    """
    Monta resposta de sucesso.

    Args:
        data: Payload
        message: Mensagem opcional
        **kwargs: Campos adicionais (count, ...)

    Returns:
        Dict com success=True
    """
    response = {"success": True}
    if message:
        response["message"] = message
    if data is not None:
        response["data"] = data
    response.update(kwargs)
    return response


def error_response(message: str, code: str = None, **kwargs) -> Dict[str, Any]:
    """
    Monta resposta de erro.

    Args:
        message: Mensagem para o usuário
        code: Código de erro opcional
        **kwargs: Campos adicionais (fields, insertedCount, ...)

    Returns:
        Dict com success=False
    """
    response = {"success": False, "message": message}
    if code:
        response["code"] = code
    response.update(kwargs)
    return response
