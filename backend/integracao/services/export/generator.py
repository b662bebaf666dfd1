# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - GERADOR PLANILHAS
# =============================================================================
# Relatório de pedidos (Resumo + Detalhes) e requisição de separação
# (pick list) enviada por email, ambos em .xlsx via openpyxl
# =============================================================================

import io
import random
from datetime import date
from typing import Iterable, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ...models import PedidoDetalhe
from ...utils.dates import DEFAULT_TIMEZONE, formatar_data_hora

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# =============================================================================
# LAYOUT
# =============================================================================

SHEET_RESUMO = "Resumo Pedidos"
SHEET_DETALHES = "Detalhes Itens"
SHEET_REQUISICAO = "Requisição"

COLUNAS_RESUMO = [
    "Código", "Data", "Solicitante", "Status", "Observações",
    "Quantidade de Itens", "Total de Itens",
]
LARGURAS_RESUMO = [15, 18, 25, 18, 40, 20, 15]

COLUNAS_DETALHES = [
    "Código Pedido", "Data Pedido", "Solicitante", "Status",
    "Código Item", "Descrição", "Quantidade", "UM", "Endereço",
]
LARGURAS_DETALHES = [15, 18, 25, 18, 15, 40, 12, 8, 20]

COLUNAS_REQUISICAO = [
    "Loja", "Remessa", "Local", "Ordem", "Posição Depósito", "Código",
    "Descrição do Produto", "UM", "Qtde Emb", "Qtde CX", "Qtde UM",
    "Estoque", "EAN",
]
LARGURAS_REQUISICAO = [15, 15, 15, 10, 20, 15, 40, 10, 10, 10, 10, 10, 20]

# Valores fixos da requisição de separação
LOJA_REQUISICAO = "PRODUÇÃO"
LOCAL_REQUISICAO = "Sem Local"
ESTOQUE_REQUISICAO = 10000

# Estilos
_HEADER_FONT = Font(bold=True, color="FFFFFF")
_HEADER_FILL = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
_HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center")
_THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)


def _escrever_header(ws: Worksheet, colunas: Sequence[str], larguras: Sequence[int]) -> None:
    for col, titulo in enumerate(colunas, 1):
        cell = ws.cell(row=1, column=col, value=titulo)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _HEADER_ALIGNMENT
        cell.border = _THIN_BORDER
        ws.column_dimensions[get_column_letter(col)].width = larguras[col - 1]
    ws.freeze_panes = "A2"


def _escrever_linhas(ws: Worksheet, linhas: Iterable[list]) -> None:
    for row_idx, valores in enumerate(linhas, 2):
        for col, valor in enumerate(valores, 1):
            ws.cell(row=row_idx, column=col, value=valor).border = _THIN_BORDER


def _para_bytes(wb: Workbook) -> bytes:
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def _quantidade(valor: float):
    # 3.0 -> 3 para a célula ficar como inteiro
    return int(valor) if float(valor).is_integer() else valor


# =============================================================================
# RELATÓRIO DE PEDIDOS
# =============================================================================

def gerar_relatorio_pedidos(pedidos: List[PedidoDetalhe],
                            tz_name: str = DEFAULT_TIMEZONE) -> bytes:
    """
    Gera o relatório com as abas "Resumo Pedidos" e "Detalhes Itens".

    Args:
        pedidos: Pedidos com as linhas carregadas
        tz_name: Fuso usado para formatar as datas (dd/mm/aaaa HH:MM)

    Returns:
        Conteúdo do arquivo .xlsx
    """
    wb = Workbook()

    ws_resumo = wb.active
    ws_resumo.title = SHEET_RESUMO
    _escrever_header(ws_resumo, COLUNAS_RESUMO, LARGURAS_RESUMO)
    _escrever_linhas(ws_resumo, (
        [
            p.codigo,
            formatar_data_hora(p.data, tz_name),
            p.solicitante,
            p.status.value,
            p.observacoes or "",
            len(p.itens),
            _quantidade(sum(i.quantidade for i in p.itens)),
        ]
        for p in pedidos
    ))

    ws_detalhes = wb.create_sheet(SHEET_DETALHES)
    _escrever_header(ws_detalhes, COLUNAS_DETALHES, LARGURAS_DETALHES)
    _escrever_linhas(ws_detalhes, (
        [
            p.codigo,
            formatar_data_hora(p.data, tz_name),
            p.solicitante,
            p.status.value,
            item.codigo,
            item.descricao,
            _quantidade(item.quantidade),
            item.unidade_medida,
            item.endereco,
        ]
        for p in pedidos
        for item in p.itens
    ))

    return _para_bytes(wb)


# =============================================================================
# REQUISIÇÃO DE SEPARAÇÃO (PICK LIST)
# =============================================================================

def gerar_requisicao(pedido: PedidoDetalhe, rng: Optional[random.Random] = None) -> bytes:
    """
    Gera a planilha "Requisição" de um pedido, uma linha por item.

    ``Remessa`` é um número de 8 dígitos único para todo o arquivo;
    ``Ordem`` (1-100) e ``EAN`` (14 dígitos) são sorteados por linha.
    """
    rng = rng or random.Random()
    remessa = f"{rng.randrange(10 ** 8):08d}"

    wb = Workbook()
    ws = wb.active
    ws.title = SHEET_REQUISICAO
    _escrever_header(ws, COLUNAS_REQUISICAO, LARGURAS_REQUISICAO)
    _escrever_linhas(ws, (
        [
            LOJA_REQUISICAO,
            remessa,
            LOCAL_REQUISICAO,
            rng.randint(1, 100),
            item.endereco,
            item.codigo,
            item.descricao,
            item.unidade_medida,
            _quantidade(item.quantidade),
            _quantidade(item.quantidade),
            _quantidade(item.quantidade),
            ESTOQUE_REQUISICAO,
            f"{rng.randrange(10 ** 14):014d}",
        ]
        for item in pedido.itens
    ))

    return _para_bytes(wb)


# =============================================================================
# NOMES DE ARQUIVO
# =============================================================================

def nome_arquivo_relatorio(hoje: date) -> str:
    return f"relatorio-pedidos-{hoje.isoformat()}.xlsx"


def nome_arquivo_requisicao(pedido: PedidoDetalhe, hoje: date) -> str:
    codigo = (pedido.codigo or pedido.id or "pedido").replace("/", "-")
    return f"Requisicao_{codigo}_{hoje.isoformat()}.xlsx"
