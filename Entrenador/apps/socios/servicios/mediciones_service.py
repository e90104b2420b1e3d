import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from apps.socios.excepciones import RegistroNoEncontradoError, Resultado, ValidationError
from apps.socios.models import CAMPOS_MEDIDAS, Medicion, Socio
from apps.socios.servicios.calendario import parsear_fecha_local
from apps.socios.servicios.fotos_service import (
    eliminar_objeto_foto,
    obtener_fotos_medicion,
    subir_foto,
)

logger = logging.getLogger(__name__)

CAMPOS_TEXTO = [("objetivo", "Objetivo"), ("notas", "Notas")]


def _obtener_socio(socio_id):
    try:
        return Socio.objects.get(id=socio_id)
    except Socio.DoesNotExist:
        raise RegistroNoEncontradoError("Cliente", socio_id)


def _obtener_medicion(medicion_id):
    try:
        return Medicion.objects.get(id=medicion_id)
    except Medicion.DoesNotExist:
        raise RegistroNoEncontradoError("Medición", medicion_id)


def parsear_medida(valor, etiqueta):
    """
    Convierte una entrada del formulario en Decimal.

    Vacío o None significa "no medido" y devuelve None. Un valor negativo o no
    numérico es un error; nunca se convierte silenciosamente en cero.
    """
    if valor is None:
        return None
    if isinstance(valor, str):
        valor = valor.strip()
        if valor == "":
            return None
    if isinstance(valor, bool):
        raise ValidationError(f"{etiqueta}: valor no numérico.")
    try:
        numero = Decimal(str(valor))
    except InvalidOperation:
        raise ValidationError(f"{etiqueta}: '{valor}' no es un número válido.")
    if not numero.is_finite():
        raise ValidationError(f"{etiqueta}: '{valor}' no es un número válido.")
    if numero < 0:
        raise ValidationError(f"{etiqueta}: no puede ser negativo.")
    return numero


def _aplicar_datos(medicion, datos, parcial):
    if "fecha" in datos or not parcial:
        medicion.Fecha = parsear_fecha_local(datos.get("fecha"))

    for clave, atributo, etiqueta in CAMPOS_MEDIDAS:
        if clave in datos or not parcial:
            setattr(medicion, atributo, parsear_medida(datos.get(clave), etiqueta))

    for clave, atributo in CAMPOS_TEXTO:
        if clave in datos or not parcial:
            setattr(medicion, atributo, (datos.get(clave) or "").strip() or None)


def listar_mediciones(socio_id):
    """Mediciones del cliente, la más reciente primero."""
    _obtener_socio(socio_id)
    return list(Medicion.objects.filter(SocioID_id=socio_id).prefetch_related("fotos"))


def medicion_mas_reciente(socio_id):
    return Medicion.objects.filter(SocioID_id=socio_id).first()


def historial_mediciones(socio_id):
    """Historial en formato plano para el panel (incluye fotos con URL)."""
    return [
        {
            "id": m.id,
            "fecha": m.Fecha.isoformat(),
            "objetivo": m.Objetivo or "",
            "notas": m.Notas or "",
            "medidas": {k: (float(v) if v is not None else None) for k, v in m.valores().items()},
            "fotos": obtener_fotos_medicion(m.id),
        }
        for m in listar_mediciones(socio_id)
    ]


def crear_medicion(socio_id, datos: dict) -> Medicion:
    """
    Registra una medición nueva.

    Raises:
        RegistroNoEncontradoError: el cliente no existe
        ValidationError: fecha faltante o medidas inválidas
    """
    socio = _obtener_socio(socio_id)
    medicion = Medicion(SocioID=socio)
    _aplicar_datos(medicion, datos, parcial=False)
    medicion.save()
    logger.info("Medición %s creada para el cliente %s", medicion.id, socio.id)
    return medicion


def actualizar_medicion(medicion_id, datos: dict) -> Medicion:
    """Edición parcial: solo cambian los campos presentes en `datos`; el id se conserva."""
    medicion = _obtener_medicion(medicion_id)
    _aplicar_datos(medicion, datos, parcial=True)
    medicion.save()
    logger.info("Medición %s actualizada", medicion.id)
    return medicion


def eliminar_medicion(medicion_id) -> Resultado:
    """
    Elimina una medición con sus fotos.

    Se borran los objetos de almacenamiento (con advertencias si alguno
    falla), luego las filas de fotos y por último la medición.
    """
    medicion = _obtener_medicion(medicion_id)
    resultado = Resultado(valor=medicion_id)

    fotos = list(medicion.fotos.all())
    for foto in fotos:
        advertencia = eliminar_objeto_foto(foto)
        if advertencia:
            resultado.advertencias.append(advertencia)

    with transaction.atomic():
        medicion.fotos.all().delete()
        medicion.delete()

    if resultado.advertencias:
        logger.warning(
            "Medición %s eliminada; %d objetos no se pudieron borrar",
            medicion_id,
            len(resultado.advertencias),
        )
    else:
        logger.info("Medición %s eliminada con %d fotos", medicion_id, len(fotos))
    return resultado


def guardar_medicion_con_fotos(socio_id, datos: dict, fotos=None, medicion_id=None) -> Resultado:
    """
    Guarda la medición y luego sube las fotos pendientes.

    La medición se confirma antes de subir nada, porque las fotos necesitan su
    id. Si una subida falla la medición no se revierte: el fallo queda como
    advertencia en el Resultado.

    Args:
        socio_id: cliente dueño de la medición
        datos: campos de la medición
        fotos: dict tipo -> archivo subido
        medicion_id: si se indica, se edita esa medición en vez de crear otra

    Returns:
        Resultado con la Medicion en `valor`
    """
    if medicion_id is None:
        medicion = crear_medicion(socio_id, datos)
    else:
        medicion = _obtener_medicion(medicion_id)
        if medicion.SocioID_id != int(socio_id):
            raise ValidationError("La medición no pertenece a este cliente.")
        medicion = actualizar_medicion(medicion_id, datos)

    resultado = Resultado(valor=medicion)
    for tipo_foto, archivo in (fotos or {}).items():
        try:
            subida = subir_foto(medicion.id, archivo, tipo_foto)
        except Exception as e:
            logger.warning("No se pudo subir la foto %s de la medición %s: %s", tipo_foto, medicion.id, e)
            resultado.advertir(f"subir_foto:{tipo_foto}", str(e))
        else:
            resultado.advertencias.extend(subida.advertencias)

    return resultado
