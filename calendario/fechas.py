"""Fechas sin hora.

Las asignaciones se guardan como fecha (``yyyy-MM-dd``). Cuando llega un
timestamp completo se toma el día tal como está escrito en su propio offset.
"""
from datetime import date, datetime

FORMATO_FECHA = '%Y-%m-%d'


def parse_fecha(valor) -> date:
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    if not isinstance(valor, str) or not valor.strip():
        raise ValueError(f"Fecha inválida: {valor!r}")
    texto = valor.strip()
    try:
        return date.fromisoformat(texto)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(texto.replace('Z', '+00:00')).date()
    except ValueError:
        raise ValueError(f"Fecha inválida: {valor!r}") from None


def formatear_fecha(valor: date) -> str:
    return valor.strftime(FORMATO_FECHA)
