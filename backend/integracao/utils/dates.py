# =============================================================================
# INTEGRAÇÃO PEDIDOS v1.0 - UTILS/DATES
# =============================================================================
# Formatação pt-BR e limites de intervalo de datas
# =============================================================================

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Sao_Paulo"


def _local(valor: datetime, tz_name: str) -> datetime:
    # datetimes sem tzinfo são tratados como UTC (padrão do banco)
    if valor.tzinfo is None:
        valor = valor.replace(tzinfo=timezone.utc)
    return valor.astimezone(ZoneInfo(tz_name))


def formatar_data_hora(valor: Optional[Union[datetime, str]],
                       tz_name: str = DEFAULT_TIMEZONE) -> str:
    """
    Formata data/hora como ``dd/mm/aaaa HH:MM`` no fuso informado.

    Aceita datetime ou string ISO 8601; None vira string vazia.
    """
    if not valor:
        return ''
    if isinstance(valor, str):
        valor = datetime.fromisoformat(valor.replace('Z', '+00:00'))
    return _local(valor, tz_name).strftime('%d/%m/%Y %H:%M')


def formatar_data(valor: Optional[Union[datetime, date]],
                  tz_name: str = DEFAULT_TIMEZONE) -> str:
    """Formata como ``dd/mm/aaaa``."""
    if not valor:
        return ''
    if isinstance(valor, datetime):
        valor = _local(valor, tz_name)
    return valor.strftime('%d/%m/%Y')


def inicio_do_dia(dia: date, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """Meia-noite local de ``dia`` (timezone-aware)."""
    return datetime.combine(dia, time.min, tzinfo=ZoneInfo(tz_name))


def fim_exclusivo(dia: date, tz_name: str = DEFAULT_TIMEZONE) -> datetime:
    """
    Limite superior exclusivo para um filtro "até ``dia``" inclusivo.

    Ex.: 2024-01-01 -> 2024-01-02 00:00 local, o que inclui 01/01 23:59.
    """
    return inicio_do_dia(dia + timedelta(days=1), tz_name)


def agora() -> datetime:
    return datetime.now(timezone.utc)


def hoje(tz_name: str = DEFAULT_TIMEZONE) -> date:
    return datetime.now(ZoneInfo(tz_name)).date()
