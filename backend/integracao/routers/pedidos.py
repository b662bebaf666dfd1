# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - ROUTER PEDIDOS
# =============================================================================
# CRUD de pedidos, export do relatório .xlsx e envio por email
# =============================================================================

import io
from datetime import date
from typing import Any, Dict, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, StreamingResponse

from ..config import Settings
from ..dependencies import get_email_dispatch_service, get_pedido_service, get_settings
from ..exceptions import ValidationError
from ..models import (
    EmailExportRequest, ExportRequest, FiltrosPedido, PedidoCreate, PedidoStatus, PedidoUpdate
)
from ..services.email import EmailDispatchService
from ..services.export import XLSX_MEDIA_TYPE, gerar_relatorio_pedidos, nome_arquivo_relatorio
from ..services.pedidos import PedidoService
from ..utils.dates import hoje
from ..utils.response import success_response

router = APIRouter(prefix="/pedidos")


def _dump(modelo) -> Dict[str, Any]:
    return modelo.model_dump(mode="json", by_alias=True)


# =============================================================================
# CRIAÇÃO / LISTAGEM
# =============================================================================

@router.post("", status_code=201, summary="Cria pedido com itens")
def create_pedido(
    body: PedidoCreate,
    service: PedidoService = Depends(get_pedido_service)
) -> JSONResponse:
    """Grava cabeçalho e itens; se os itens falharem o cabeçalho é removido."""
    pedido = service.criar(body)
    return JSONResponse(
        status_code=201,
        content=success_response(data=_dump(pedido), message="Pedido criado com sucesso")
    )


@router.get("", summary="Lista pedidos com filtros")
def list_pedidos(
    codigo: Optional[str] = Query(None, description="Parte do código"),
    solicitante: Optional[str] = Query(None, description="Parte do nome do solicitante"),
    status: Optional[PedidoStatus] = Query(None),
    data_inicio: Optional[date] = Query(None, alias="dataInicio"),
    data_fim: Optional[date] = Query(None, alias="dataFim", description="Inclusivo"),
    limit: int = Query(50, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    incluir_itens: bool = Query(True, alias="incluirItens"),
    service: PedidoService = Depends(get_pedido_service)
) -> Dict[str, Any]:
    filtros = FiltrosPedido(
        codigo=codigo,
        solicitante=solicitante,
        status=status,
        data_inicio=data_inicio,
        data_fim=data_fim,
        limit=limit,
        offset=offset,
    )
    pedidos = service.listar(filtros, incluir_itens=incluir_itens)
    return success_response(data=[_dump(p) for p in pedidos], count=len(pedidos))


# =============================================================================
# EXPORT
# =============================================================================

@router.post("/export", summary="Exporta relatório .xlsx")
def export_pedidos(
    body: ExportRequest,
    service: PedidoService = Depends(get_pedido_service),
    settings: Settings = Depends(get_settings)
) -> StreamingResponse:
    """
    Gera o relatório a partir dos pedidos enviados ou, sem a chave
    ``pedidos``, buscando todos os pedidos que atendem aos filtros.
    Uma lista vazia explícita não cai nos filtros.
    """
    pedidos = body.pedidos
    if pedidos is None and body.filtros is not None:
        pedidos = service.listar(body.filtros, incluir_itens=True)

    if not pedidos:
        raise ValidationError("Nenhum pedido para exportar")

    conteudo = gerar_relatorio_pedidos(pedidos, settings.TIMEZONE)
    filename = nome_arquivo_relatorio(hoje(settings.TIMEZONE))

    return StreamingResponse(
        io.BytesIO(conteudo),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.post("/email-export", summary="Envia requisição do pedido por email")
def email_export_pedido(
    body: EmailExportRequest,
    service: EmailDispatchService = Depends(get_email_dispatch_service)
) -> Dict[str, Any]:
    resultado = service.enviar(body.pedido_id, body.lista_destinatarios())
    return success_response(
        data=resultado,
        message="Pedido enviado por email com sucesso",
        emailId=resultado["messageId"],
        filename=resultado["filename"]
    )


# =============================================================================
# PEDIDO INDIVIDUAL
# =============================================================================

@router.get("/{pedido_id}", summary="Detalhe do pedido")
def get_pedido(
    pedido_id: UUID,
    service: PedidoService = Depends(get_pedido_service)
) -> Dict[str, Any]:
    return success_response(data=_dump(service.obter(str(pedido_id))))


@router.patch("/{pedido_id}", summary="Atualiza status e/ou observações")
def update_pedido(
    pedido_id: UUID,
    body: PedidoUpdate,
    service: PedidoService = Depends(get_pedido_service)
) -> Dict[str, Any]:
    pedido = service.atualizar(str(pedido_id), body)
    return success_response(data=_dump(pedido), message="Pedido atualizado com sucesso")


@router.delete("/{pedido_id}", summary="Exclui pedido e itens")
def delete_pedido(
    pedido_id: UUID,
    service: PedidoService = Depends(get_pedido_service)
) -> Dict[str, Any]:
    service.excluir(str(pedido_id))
    return success_response(message="Pedido excluído com sucesso")
