# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - MODELOS
# =============================================================================
# Modelos Pydantic para request/response da API e objetos de domínio.
#
# ESTRUTURA:
# - Enumerações (PedidoStatus)
# - Catálogo (Produto, BuscaProdutosRequest)
# - Pedidos (ItemPedidoInput, PedidoCreate, PedidoUpdate, ItemPedido,
#   PedidoResumo, PedidoDetalhe, FiltrosPedido)
# - Export/Email (ExportRequest, EmailExportRequest)
#
# Os nomes JSON são camelCase (unidadeMedida, quantidadeItens, ...),
# os atributos Python são snake_case.
# =============================================================================

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base com aliases camelCase; aceita também os nomes snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# ENUMERAÇÕES
# =============================================================================

class PedidoStatus(str, Enum):
    """
    Status de um pedido.

    O valor string é o mesmo salvo no banco. Não há máquina de estados:
    qualquer status pode ser gravado a partir de qualquer outro.
    """
    PENDENTE = "Pendente"
    EM_PROCESSAMENTO = "Em Processamento"
    SEPARADO = "Separado"
    ENTREGUE = "Entregue"
    CANCELADO = "Cancelado"


# =============================================================================
# CATÁLOGO
# =============================================================================

class Produto(CamelModel):
    """Item do catálogo de estoque."""
    id: Optional[str] = None
    codigo: str
    descricao: str
    unidade_medida: str
    endereco: str
    created_at: Optional[datetime] = None


class BuscaProdutosRequest(CamelModel):
    """Body de POST /produtos."""
    filtro: str = ""
    limit: int = Field(20, ge=1, le=500)

    @field_validator("filtro", mode="before")
    @classmethod
    def _filtro_nulo(cls, v):
        return "" if v is None else v


# =============================================================================
# PEDIDOS - REQUEST
# =============================================================================

class ItemPedidoInput(CamelModel):
    """Linha de pedido enviada pelo cliente."""
    codigo: str = Field(..., min_length=1)
    descricao: str = ""
    quantidade: float = Field(..., gt=0)
    unidade_medida: str = ""
    endereco: str = ""


class PedidoCreate(CamelModel):
    """
    Body de POST /pedidos.

    ``solicitante`` e ``itens`` são checados pelo serviço para que a
    ausência resulte em ValidationError com a mensagem de negócio.
    """
    codigo: Optional[str] = None
    data: Optional[datetime] = None
    solicitante: Optional[str] = None
    itens: List[ItemPedidoInput] = Field(default_factory=list)
    observacoes: Optional[str] = None


class PedidoUpdate(CamelModel):
    """
    Body de PATCH /pedidos/{id}.

    Apenas os campos presentes no JSON são gravados; ``observacoes: null``
    limpa as observações, um ``status`` nulo é ignorado.
    """
    status: Optional[PedidoStatus] = None
    observacoes: Optional[str] = None

    def campos_alterados(self) -> dict:
        campos = {}
        if "status" in self.model_fields_set and self.status is not None:
            campos["status"] = self.status.value
        if "observacoes" in self.model_fields_set:
            campos["observacoes"] = self.observacoes
        return campos


# =============================================================================
# PEDIDOS - RESPONSE / DOMÍNIO
# =============================================================================

class ItemPedido(CamelModel):
    """Linha de pedido persistida."""
    codigo: str
    descricao: str = ""
    quantidade: float
    unidade_medida: str = ""
    endereco: str = ""


class PedidoResumo(CamelModel):
    """Cabeçalho do pedido com totais das linhas."""
    id: str
    codigo: Optional[str] = None
    data: datetime
    solicitante: str
    status: PedidoStatus = PedidoStatus.PENDENTE
    observacoes: Optional[str] = None
    quantidade_itens: int = 0
    total_quantidade: float = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PedidoDetalhe(PedidoResumo):
    """
    Pedido completo com as linhas.

    Também é aceito no body de export, por isso ``id`` e ``data``
    podem faltar quando o cliente envia pedidos montados na tela.
    """
    id: Optional[str] = None
    data: Optional[datetime] = None
    solicitante: str = ""
    itens: List[ItemPedido] = Field(default_factory=list)

    def model_post_init(self, __context) -> None:
        if self.itens and not self.quantidade_itens:
            self.quantidade_itens = len(self.itens)
            self.total_quantidade = sum(item.quantidade for item in self.itens)


class FiltrosPedido(CamelModel):
    """Filtros de listagem e export de pedidos."""
    codigo: Optional[str] = None
    solicitante: Optional[str] = None
    status: Optional[PedidoStatus] = None
    data_inicio: Optional[date] = None
    data_fim: Optional[date] = None
    limit: Optional[int] = Field(None, ge=1, le=1000)
    offset: int = Field(0, ge=0)

    @field_validator("codigo", "solicitante", "status", mode="before")
    @classmethod
    def _vazio_para_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# =============================================================================
# EXPORT / EMAIL
# =============================================================================

class ExportRequest(CamelModel):
    """Body de POST /pedidos/export: pedidos prontos ou filtros."""
    pedidos: Optional[List[PedidoDetalhe]] = None
    filtros: Optional[FiltrosPedido] = None


class EmailExportRequest(CamelModel):
    """Body de POST /pedidos/email-export."""
    pedido_id: str = Field(..., min_length=1)
    destinatarios: Optional[Union[str, List[str]]] = None

    def lista_destinatarios(self) -> List[str]:
        """Normaliza string separada por vírgula ou lista."""
        if not self.destinatarios:
            return []
        if isinstance(self.destinatarios, str):
            valores = self.destinatarios.split(",")
        else:
            valores = self.destinatarios
        return [v.strip() for v in valores if v and v.strip()]


class EmailEnviado(CamelModel):
    message_id: str
    filename: str
