# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - EXCEÇÕES CENTRALIZADAS
# =============================================================================
# Hierarquia de exceções para tratamento uniforme de erros
# =============================================================================

from typing import Optional, Dict, Any


class IntegracaoException(Exception):
    """
    Exceção base da aplicação.

    Todas as exceções de domínio estendem esta classe; os handlers
    registrados em main.py as convertem no envelope JSON padrão.
    """
    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    detail: str = "Erro interno do servidor"

    def __init__(self, detail: Optional[str] = None, extra: Dict[str, Any] = None):
        self.detail = detail or self.__class__.detail
        self.extra = extra or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Converte em dicionário para logging."""
        return {
            "code": self.code,
            "status_code": self.status_code,
            "message": self.detail,
            **self.extra
        }


# =============================================================================
# EXCEÇÕES HTTP PADRÃO
# =============================================================================

class ValidationError(IntegracaoException):
    """Erro de validação de dados (400)."""
    status_code = 400
    code = "VALIDATION_ERROR"
    detail = "Erro de validação"


class NotFoundError(IntegracaoException):
    """Recurso não encontrado (404)."""
    status_code = 404
    code = "NOT_FOUND"
    detail = "Recurso não encontrado"


class UnsupportedMediaTypeError(IntegracaoException):
    """Content-Type não suportado (415)."""
    status_code = 415
    code = "UNSUPPORTED_MEDIA_TYPE"
    detail = "Tipo de conteúdo não suportado"


# =============================================================================
# EXCEÇÕES DE DOMÍNIO
# =============================================================================

class PedidoNotFoundError(NotFoundError):
    """Pedido não encontrado."""
    code = "PEDIDO_NOT_FOUND"
    detail = "Pedido não encontrado"


class ProdutoNotFoundError(NotFoundError):
    """Item de catálogo não encontrado."""
    code = "PRODUTO_NOT_FOUND"
    detail = "Item não encontrado"


# =============================================================================
# EXCEÇÕES DE INFRAESTRUTURA
# =============================================================================

class StoreError(IntegracaoException):
    """Falha do banco de dados (500)."""
    status_code = 500
    code = "STORE_ERROR"
    detail = "Erro ao acessar o banco de dados"


class DispatchError(IntegracaoException):
    """Falha no envio de email (500)."""
    status_code = 500
    code = "DISPATCH_ERROR"
    detail = "Erro ao enviar email"
