# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - UPLOAD ROUTER
# =============================================================================
# Carga do catálogo: item único (JSON) ou planilha Excel (multipart)
# =============================================================================

import json
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from ..config import Settings
from ..dependencies import get_ingest_service, get_settings
from ..exceptions import UnsupportedMediaTypeError, ValidationError
from ..services.ingest import IngestService
from ..utils.response import success_response
from ..utils.validation import validate_file_extension

router = APIRouter()

EXTENSOES_ACEITAS = ['.xlsx', '.xlsm']


@router.post("/insert_upload", status_code=201, summary="Insere itens no catálogo")
async def insert_upload(
    request: Request,
    service: IngestService = Depends(get_ingest_service),
    settings: Settings = Depends(get_settings)
) -> JSONResponse:
    """
    Despacha pelo Content-Type:

    - application/json: um item {endereco, codigo, descricao, um}
    - multipart/form-data: campo ``file`` com planilha .xlsx
    - outros: 415
    """
    content_type = request.headers.get("content-type", "")

    if "application/json" in content_type:
        return await _insert_json(request, service)
    if "multipart/form-data" in content_type:
        return await _insert_planilha(request, service, settings)

    raise UnsupportedMediaTypeError(
        f"Tipo de conteúdo não suportado: {content_type or 'não informado'}"
    )


async def _insert_json(request: Request, service: IngestService) -> JSONResponse:
    try:
        dados = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ValidationError(f"JSON inválido: {e}") from e

    if not isinstance(dados, dict):
        raise ValidationError("Dados inválidos. Esperado um objeto JSON")

    produto = await run_in_threadpool(service.inserir_item, dados)
    return JSONResponse(
        status_code=201,
        content=success_response(
            data=produto.model_dump(mode="json", by_alias=True),
            message="Item inserido com sucesso"
        )
    )


async def _insert_planilha(request: Request, service: IngestService,
                           settings: Settings) -> JSONResponse:
    form = await request.form()
    arquivo = form.get("file")
    if not isinstance(arquivo, UploadFile):
        raise ValidationError("Nenhum arquivo enviado")

    erro = validate_file_extension(arquivo.filename, EXTENSOES_ACEITAS)
    if erro:
        raise ValidationError(f"Apenas arquivos Excel .xlsx são permitidos. {erro}")

    conteudo = await arquivo.read()
    if not conteudo:
        raise ValidationError("Arquivo vazio")
    if len(conteudo) > settings.MAX_UPLOAD_SIZE:
        raise ValidationError(
            f"Arquivo muito grande (máx {settings.MAX_UPLOAD_SIZE // 1024 // 1024}MB)"
        )

    resultado: Dict[str, Any] = await run_in_threadpool(service.importar_planilha, conteudo)
    inseridos = resultado["insertedCount"]
    return JSONResponse(
        status_code=201,
        content=success_response(
            data=resultado,
            message=f"{inseridos} itens inseridos com sucesso",
            count=inseridos
        )
    )
