from datetime import datetime, date, time
from zoneinfo import ZoneInfo

TZ_SP = ZoneInfo('America/Sao_Paulo')


def now_trimmed():
    """Retorna datetime atual no horário de São Paulo, sem microsegundos e sem tzinfo"""
    return datetime.now(TZ_SP).replace(microsecond=0, tzinfo=None)


def today_sp() -> date:
    return now_trimmed().date()


def day_bounds(dia: date) -> tuple[datetime, datetime]:
    """Início e fim (inclusivo) de um dia."""
    return datetime.combine(dia, time.min), datetime.combine(dia, time.max)
