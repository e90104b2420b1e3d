"""
Aritmética de fechas de calendario.

Todas las fechas del panel son fechas locales (sin hora). Nunca se parsean
cadenas ISO como instantes UTC: "2024-03-01" interpretado como medianoche UTC
se muestra como 29/02 en zonas con offset negativo.

Regla de desborde de sumar_meses: se recorta al último día del mes destino
(31/01/2024 + 1 mes = 29/02/2024).
"""
import calendar
import math
from datetime import date, datetime, time

from django.utils import timezone

from apps.socios.excepciones import ValidationError

ESTADO_ACTIVO = "active"
ESTADO_POR_VENCER = "expiring"
ESTADO_VENCIDO = "expired"


def sumar_meses(fecha: date, meses: int) -> date:
    indice = fecha.month - 1 + meses
    anio = fecha.year + indice // 12
    mes = indice % 12 + 1
    ultimo_dia = calendar.monthrange(anio, mes)[1]
    return date(anio, mes, min(fecha.day, ultimo_dia))


def dias_restantes(fecha_objetivo: date, hoy) -> int:
    """
    Días que faltan hasta fecha_objetivo, redondeando hacia arriba.

    Con un `date` la cuenta es exacta. Con un `datetime` la fecha objetivo se
    toma como medianoche local y la fracción de día se redondea hacia arriba,
    de modo que el mismo día del vencimiento devuelve 0 y no -1.
    """
    if isinstance(hoy, datetime):
        objetivo = datetime.combine(fecha_objetivo, time.min, tzinfo=hoy.tzinfo)
        segundos = (objetivo - hoy).total_seconds()
        return math.ceil(segundos / 86400)
    return (fecha_objetivo - hoy).days


def clasificar_ventana(fecha_fin: date, hoy, dias_aviso: int) -> str:
    dias = dias_restantes(fecha_fin, hoy)
    if dias < 0:
        return ESTADO_VENCIDO
    if dias <= dias_aviso:
        return ESTADO_POR_VENCER
    return ESTADO_ACTIVO


def parsear_fecha_local(texto: str) -> date:
    if isinstance(texto, date) and not isinstance(texto, datetime):
        return texto
    if not isinstance(texto, str) or not texto.strip():
        raise ValidationError("La fecha es requerida.")

    partes = texto.strip().split("-")
    if len(partes) != 3 or not all(p.isdigit() for p in partes):
        raise ValidationError(f"Fecha inválida: '{texto}'. Usa el formato AAAA-MM-DD.")

    anio, mes, dia = (int(p) for p in partes)
    try:
        return date(anio, mes, dia)
    except ValueError:
        raise ValidationError(f"Fecha inválida: '{texto}'.")


def fecha_a_texto(fecha: date) -> str:
    return f"{fecha.year:04d}-{fecha.month:02d}-{fecha.day:02d}"


def formatear_fecha(fecha) -> str:
    if fecha is None:
        return ""
    if isinstance(fecha, datetime):
        fecha = timezone.localtime(fecha) if timezone.is_aware(fecha) else fecha
        return fecha.strftime("%d/%m/%Y %H:%M")
    return fecha.strftime("%d/%m/%Y")


def fecha_local(instante=None) -> date:
    """Fecha de calendario de `instante` en la zona horaria configurada."""
    return timezone.localdate(instante)
