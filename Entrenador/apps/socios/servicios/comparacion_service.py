"""
Comparación entre dos mediciones de un mismo cliente.

Solo lectura: el reporte se entrega a quien genere el PDF o la imagen para
compartir, y no se guarda en ningún lado.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from apps.socios.excepciones import RegistroNoEncontradoError, ValidationError
from apps.socios.models import CAMPOS_MEDIDAS, FotoProgreso, Medicion
from apps.socios.servicios.fotos_service import fotos_por_slot, url_foto

logger = logging.getLogger(__name__)

SIN_VALOR = "-"
SIN_FOTO = "Sin foto"

DIRECCION_SUBE = "up"
DIRECCION_BAJA = "down"
DIRECCION_IGUAL = "equal"


@dataclass
class FilaComparacion:
    campo: str
    etiqueta: str
    inicio: Optional[Decimal]
    fin: Optional[Decimal]
    delta: Decimal

    @property
    def direccion(self):
        if self.delta > 0:
            return DIRECCION_SUBE
        if self.delta < 0:
            return DIRECCION_BAJA
        return DIRECCION_IGUAL

    @property
    def delta_texto(self):
        return formatear_delta(self.delta)

    def como_dict(self):
        return {
            "label": self.etiqueta,
            "start": _valor_texto(self.inicio),
            "end": _valor_texto(self.fin),
            "delta": self.delta_texto,
            "direction": self.direccion,
        }


@dataclass
class ParFotos:
    tipo: str
    inicio: Optional[str]
    fin: Optional[str]

    def como_dict(self):
        return {
            "type": self.tipo,
            "start": self.inicio if self.inicio is not None else SIN_FOTO,
            "end": self.fin if self.fin is not None else SIN_FOTO,
        }


@dataclass
class ReporteComparacion:
    inicio: Medicion
    fin: Medicion
    filas: List[FilaComparacion] = field(default_factory=list)
    fotos: List[ParFotos] = field(default_factory=list)

    def fila(self, campo):
        for fila in self.filas:
            if fila.campo == campo:
                return fila
        return None

    def como_dict(self):
        return {
            "start_date": self.inicio.Fecha.isoformat(),
            "end_date": self.fin.Fecha.isoformat(),
            "rows": [f.como_dict() for f in self.filas],
            "photos": [p.como_dict() for p in self.fotos],
        }


def formatear_delta(delta):
    """Un decimal; signo explícito solo si es positivo ("+2.0", "-2.0", "0.0")."""
    texto = f"{Decimal(delta):.1f}"
    if texto == "-0.0":
        texto = "0.0"
    if delta > 0:
        return f"+{texto}"
    return texto


def _valor_texto(valor):
    if valor is None:
        return SIN_VALOR
    return f"{valor:.1f}"


def _obtener(medicion_id):
    try:
        return Medicion.objects.select_related("SocioID").get(id=medicion_id)
    except Medicion.DoesNotExist:
        raise RegistroNoEncontradoError("Medición", medicion_id)


def filas_comparacion(valores_inicio: dict, valores_fin: dict):
    filas = []
    for clave, _, etiqueta in CAMPOS_MEDIDAS:
        inicio = valores_inicio.get(clave)
        fin = valores_fin.get(clave)
        if inicio is None and fin is None:
            continue
        delta = (fin or Decimal("0")) - (inicio or Decimal("0"))
        filas.append(FilaComparacion(clave, etiqueta, inicio, fin, delta))
    return filas


def pares_fotos(medicion_inicio_id, medicion_fin_id):
    fotos_inicio = fotos_por_slot(medicion_inicio_id)
    fotos_fin = fotos_por_slot(medicion_fin_id)

    pares = []
    for tipo in FotoProgreso.TIPOS:
        inicio = fotos_inicio.get(tipo)
        fin = fotos_fin.get(tipo)
        if inicio is None and fin is None:
            continue
        pares.append(
            ParFotos(
                tipo,
                url_foto(inicio) if inicio else None,
                url_foto(fin) if fin else None,
            )
        )
    return pares


def comparar_mediciones(inicio_id, fin_id) -> ReporteComparacion:
    """
    Arma el reporte de progreso entre dos mediciones.

    Raises:
        RegistroNoEncontradoError: alguna de las mediciones no existe
        ValidationError: las mediciones son de clientes distintos
    """
    inicio = _obtener(inicio_id)
    fin = _obtener(fin_id)

    if inicio.SocioID_id != fin.SocioID_id:
        raise ValidationError("Solo se pueden comparar mediciones del mismo cliente.")

    reporte = ReporteComparacion(
        inicio=inicio,
        fin=fin,
        filas=filas_comparacion(inicio.valores(), fin.valores()),
        fotos=pares_fotos(inicio.id, fin.id),
    )
    logger.debug("Comparación %s -> %s: %d filas", inicio.id, fin.id, len(reporte.filas))
    return reporte


def comparar_ultimas(socio_id):
    """Compara las dos mediciones más recientes; None si hay menos de dos."""
    ultimas = list(Medicion.objects.filter(SocioID_id=socio_id)[:2])
    if len(ultimas) < 2:
        return None
    fin, inicio = ultimas
    return comparar_mediciones(inicio.id, fin.id)
