# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - INGEST PARSING
# =============================================================================
# Leitura da planilha de catálogo e validação de linhas
# =============================================================================

import io
import logging
import zipfile
from typing import Any, Dict, List, Sequence

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ...exceptions import ValidationError
from ...utils.validation import campos_obrigatorios_ausentes

logger = logging.getLogger(__name__)

CAMPOS_OBRIGATORIOS = ('endereco', 'codigo', 'descricao', 'um')


def validar_item(dados: Dict[str, Any]) -> List[str]:
    """
    Valida um item de catálogo.

    Returns:
        Campos obrigatórios ausentes ou em branco (vazio = válido)
    """
    return campos_obrigatorios_ausentes(dados, CAMPOS_OBRIGATORIOS)


def cell_to_str(valor: Any) -> str:
    """Converte o valor da célula em texto; 123.0 vira "123"."""
    if valor is None:
        return ''
    if isinstance(valor, float) and valor.is_integer():
        return str(int(valor))
    return str(valor).strip()


def _linha_vazia(row: Sequence[Any]) -> bool:
    return all(cell is None or (isinstance(cell, str) and not cell.strip()) for cell in row)


def ler_planilha(conteudo: bytes) -> List[Dict[str, str]]:
    """
    Lê a primeira aba e retorna os itens válidos.

    A primeira linha é o cabeçalho (case-insensitive, sem espaços nas
    bordas). Linhas totalmente vazias são ignoradas; linhas inválidas
    são descartadas com log.

    Raises:
        ValidationError: arquivo ilegível, menos de duas linhas ou
            colunas obrigatórias ausentes
    """
    try:
        wb = load_workbook(io.BytesIO(conteudo), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise ValidationError(f"Não foi possível ler o arquivo Excel: {e}") from e

    try:
        ws = wb.worksheets[0]
        rows = [tuple(r) for r in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    if len(rows) < 2:
        raise ValidationError("Arquivo Excel vazio ou sem dados suficientes")

    headers = [cell_to_str(h).lower() for h in rows[0]]
    ausentes = [c for c in CAMPOS_OBRIGATORIOS if c not in headers]
    if ausentes:
        raise ValidationError(
            f"Coluna(s) obrigatória(s) não encontrada(s) no arquivo Excel: "
            f"{', '.join(ausentes)}. Colunas disponíveis: {', '.join(h for h in headers if h)}",
            extra={"fields": ausentes}
        )

    indices = {c: headers.index(c) for c in CAMPOS_OBRIGATORIOS}
    itens = []
    descartadas = 0

    for numero, row in enumerate(rows[1:], start=2):
        if not row or _linha_vazia(row):
            continue

        item = {
            campo: cell_to_str(row[idx]) if idx < len(row) else ''
            for campo, idx in indices.items()
        }
        falhas = validar_item(item)
        if falhas:
            descartadas += 1
            logger.warning("Linha %d ignorada, campos inválidos: %s", numero, ", ".join(falhas))
            continue
        itens.append(item)

    logger.info(
        "Planilha processada: %d linhas, %d itens válidos, %d descartados",
        len(rows) - 1, len(itens), descartadas
    )
    return itens
