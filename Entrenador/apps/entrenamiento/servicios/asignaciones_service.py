"""
Ciclo de vida de las asignaciones de rutinas y planes nutricionales.

Un cliente puede tener varias asignaciones del mismo tipo al mismo tiempo:
asignar una plantilla nueva no cierra la anterior. La vigente es la más
reciente (por FechaInicio y luego por orden de creación) que no esté pausada
ni completada.
"""
import logging

from django.db import transaction

from apps.entrenamiento.models import (
    AsignacionBase,
    PlanNutricionalAsignado,
    PlantillaNutricional,
    PlantillaRutina,
    RutinaAsignada,
)
from apps.socios.excepciones import RegistroNoEncontradoError, ValidationError
from apps.socios.models import Socio
from apps.socios.servicios.calendario import parsear_fecha_local

logger = logging.getLogger(__name__)

TIPO_RUTINA = "rutina"
TIPO_NUTRICION = "nutricion"

MODELOS = {
    TIPO_RUTINA: (RutinaAsignada, PlantillaRutina),
    TIPO_NUTRICION: (PlanNutricionalAsignado, PlantillaNutricional),
}


def derivar_estado_asignacion(fecha_inicio, fecha_fin, pausada, hoy):
    """
    - paused: la asignación está pausada (tiene prioridad)
    - completed: `hoy` es posterior a la fecha de fin
    - active: en cualquier otro caso, también antes de la fecha de inicio
    """
    if pausada:
        return AsignacionBase.ESTADO_PAUSADO
    if hoy > fecha_fin:
        return AsignacionBase.ESTADO_COMPLETADO
    return AsignacionBase.ESTADO_ACTIVO


def _modelos(tipo):
    try:
        return MODELOS[tipo]
    except KeyError:
        raise ValidationError(f"Tipo de asignación inválido: {tipo}.")


def _obtener_asignacion(tipo, asignacion_id):
    modelo, _ = _modelos(tipo)
    try:
        return modelo.objects.select_related("PlantillaID").get(id=asignacion_id)
    except modelo.DoesNotExist:
        raise RegistroNoEncontradoError("Asignación", asignacion_id)


def _validar_ventana(fecha_inicio, fecha_fin):
    inicio = parsear_fecha_local(fecha_inicio)
    fin = parsear_fecha_local(fecha_fin)
    if fin < inicio:
        raise ValidationError("La fecha de fin no puede ser anterior a la fecha de inicio.")
    return inicio, fin


def asignar_plantilla(tipo, socio_id, plantilla_id, fecha_inicio, fecha_fin, notas=""):
    """
    Asigna una plantilla (rutina o plan nutricional) a un cliente.

    Args:
        tipo: "rutina" o "nutricion"
        socio_id: ID del cliente
        plantilla_id: ID de la plantilla
        fecha_inicio, fecha_fin: ventana de la asignación (date o "AAAA-MM-DD")
        notas: texto libre opcional

    Returns:
        RutinaAsignada o PlanNutricionalAsignado creado

    Raises:
        RegistroNoEncontradoError: el cliente o la plantilla no existen
        ValidationError: tipo inválido o ventana de fechas inválida
    """
    modelo, modelo_plantilla = _modelos(tipo)

    try:
        socio = Socio.objects.get(id=socio_id)
    except Socio.DoesNotExist:
        raise RegistroNoEncontradoError("Cliente", socio_id)

    try:
        plantilla = modelo_plantilla.objects.get(id=plantilla_id)
    except modelo_plantilla.DoesNotExist:
        raise RegistroNoEncontradoError("Plantilla", plantilla_id)

    inicio, fin = _validar_ventana(fecha_inicio, fecha_fin)

    with transaction.atomic():
        asignacion = modelo.objects.create(
            SocioID=socio,
            PlantillaID=plantilla,
            FechaInicio=inicio,
            FechaFin=fin,
            Notas=(notas or "").strip() or None,
        )

    logger.info("Plantilla de %s %s asignada al cliente %s", tipo, plantilla.id, socio.id)
    return asignacion


def actualizar_asignacion(tipo, asignacion_id, fecha_inicio=None, fecha_fin=None, notas=None):
    asignacion = _obtener_asignacion(tipo, asignacion_id)

    inicio, fin = _validar_ventana(
        fecha_inicio or asignacion.FechaInicio,
        fecha_fin or asignacion.FechaFin,
    )
    asignacion.FechaInicio = inicio
    asignacion.FechaFin = fin
    if notas is not None:
        asignacion.Notas = notas.strip() or None
    asignacion.save()

    logger.info("Asignación de %s %s actualizada", tipo, asignacion.id)
    return asignacion


def pausar_asignacion(tipo, asignacion_id):
    asignacion = _obtener_asignacion(tipo, asignacion_id)
    asignacion.Pausada = True
    asignacion.save(update_fields=["Pausada", "ActualizadoEn"])
    logger.info("Asignación de %s %s pausada", tipo, asignacion.id)
    return asignacion


def reanudar_asignacion(tipo, asignacion_id):
    asignacion = _obtener_asignacion(tipo, asignacion_id)
    asignacion.Pausada = False
    asignacion.save(update_fields=["Pausada", "ActualizadoEn"])
    logger.info("Asignación de %s %s reanudada", tipo, asignacion.id)
    return asignacion


def desasignar(tipo, asignacion_id):
    """Borra solo el vínculo; la plantilla sigue disponible para otros clientes."""
    asignacion = _obtener_asignacion(tipo, asignacion_id)
    plantilla_id = asignacion.PlantillaID_id
    asignacion.delete()
    logger.info("Asignación de %s %s eliminada (plantilla %s intacta)", tipo, asignacion_id, plantilla_id)


def listar_asignaciones(tipo, socio_id, hoy):
    """
    Asignaciones del cliente, más recientes primero.

    Returns:
        list de tuplas (asignacion, estado)
    """
    modelo, _ = _modelos(tipo)
    asignaciones = modelo.objects.filter(SocioID_id=socio_id).select_related("PlantillaID")
    return [(a, a.estado(hoy)) for a in asignaciones]


def asignacion_vigente(tipo, socio_id, hoy):
    for asignacion, estado in listar_asignaciones(tipo, socio_id, hoy):
        if estado == AsignacionBase.ESTADO_ACTIVO:
            return asignacion
    return None
