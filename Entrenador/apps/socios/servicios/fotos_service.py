"""
Fotos de progreso adjuntas a una medición.

Cada medición tiene como máximo una foto por tipo (frontal, lateral,
posterior). En la base de datos solo se guarda la ruta del objeto; la URL se
pide al almacenamiento en cada lectura porque puede expirar.
"""
import logging

from django.conf import settings
from django.core.files.storage import default_storage
from django.db import transaction

from apps.socios.excepciones import (
    AdvertenciaParcial,
    RegistroNoEncontradoError,
    Resultado,
    ValidationError,
)
from apps.socios.models import FotoProgreso, Medicion
from apps.socios.servicios.imagenes import extension_para, validar_imagen

logger = logging.getLogger(__name__)


def obtener_almacenamiento():
    return default_storage


def ruta_foto(medicion, tipo_foto, extension):
    return f"progreso/{medicion.SocioID_id}/{medicion.id}/{tipo_foto}.{extension}"


def url_foto(foto):
    return obtener_almacenamiento().url(foto.RutaArchivo)


def _validar_tipo_foto(tipo_foto):
    if tipo_foto not in FotoProgreso.TIPOS:
        raise ValidationError(
            f"Tipo de foto inválido: {tipo_foto}. Usa: {', '.join(FotoProgreso.TIPOS)}."
        )


def _obtener_medicion(medicion_id):
    try:
        return Medicion.objects.get(id=medicion_id)
    except Medicion.DoesNotExist:
        raise RegistroNoEncontradoError("Medición", medicion_id)


def borrar_objeto(ruta, operacion, almacenamiento=None):
    """
    Borra un objeto del almacenamiento sin interrumpir la operación principal.

    Returns:
        None si se borró, AdvertenciaParcial si el almacenamiento falló.
    """
    if almacenamiento is None:
        almacenamiento = obtener_almacenamiento()
    try:
        almacenamiento.delete(ruta)
    except Exception as e:
        logger.exception("No se pudo borrar %s del almacenamiento", ruta)
        return AdvertenciaParcial(operacion, f"{ruta}: {e}")
    return None


def eliminar_objeto_foto(foto):
    return borrar_objeto(foto.RutaArchivo, "eliminar_foto")


def subir_foto(medicion_id, archivo, tipo_foto, tipos_permitidos=None, max_bytes=None) -> Resultado:
    """
    Sube (o reemplaza) la foto de un tipo para una medición.

    El objeto nuevo se escribe primero y la fila se actualiza en lugar de
    duplicarse. Solo después se borra el objeto anterior: si el guardado
    falla la foto previa queda intacta, y si falla el borrado del anterior
    se devuelve una advertencia.

    Returns:
        Resultado con la FotoProgreso en `valor`

    Raises:
        ValidationError: tipo de foto desconocido
        ArchivoInvalidoError: tipo MIME, tamaño o contenido inválido
        RegistroNoEncontradoError: la medición no existe
    """
    _validar_tipo_foto(tipo_foto)
    medicion = _obtener_medicion(medicion_id)

    if tipos_permitidos is None:
        tipos_permitidos = settings.FOTOS_PROGRESO_TIPOS_PERMITIDOS
    if max_bytes is None:
        max_bytes = settings.FOTOS_PROGRESO_MAX_BYTES

    validar_imagen(archivo, tipos_permitidos, max_bytes)

    almacenamiento = obtener_almacenamiento()
    anterior = FotoProgreso.objects.filter(MedicionID=medicion, TipoFoto=tipo_foto).first()
    ruta_anterior = anterior.RutaArchivo if anterior else None

    ruta = almacenamiento.save(ruta_foto(medicion, tipo_foto, extension_para(archivo)), archivo)

    try:
        with transaction.atomic():
            foto, _ = FotoProgreso.objects.update_or_create(
                MedicionID=medicion,
                TipoFoto=tipo_foto,
                defaults={
                    "RutaArchivo": ruta,
                    "TipoContenido": archivo.content_type,
                    "TamanoBytes": archivo.size,
                },
            )
    except Exception:
        borrar_objeto(ruta, "subir_foto", almacenamiento)
        raise

    resultado = Resultado(valor=foto)
    if ruta_anterior and ruta_anterior != ruta:
        advertencia = borrar_objeto(ruta_anterior, f"reemplazar_foto:{tipo_foto}", almacenamiento)
        if advertencia:
            logger.warning("Foto %s reemplazada; el objeto anterior %s no se borró", foto.id, ruta_anterior)
            resultado.advertencias.append(advertencia)

    logger.info("Foto %s guardada para la medición %s", tipo_foto, medicion.id)
    return resultado


def fotos_por_slot(medicion_id):
    """Diccionario tipo -> FotoProgreso (de cero a tres entradas)."""
    return {foto.TipoFoto: foto for foto in FotoProgreso.objects.filter(MedicionID_id=medicion_id)}


def obtener_fotos_medicion(medicion_id):
    fotos = fotos_por_slot(medicion_id)
    return [
        {
            "id": fotos[tipo].id,
            "tipo": tipo,
            "url": url_foto(fotos[tipo]),
            "tipo_contenido": fotos[tipo].TipoContenido,
            "tamano_bytes": fotos[tipo].TamanoBytes,
        }
        for tipo in FotoProgreso.TIPOS
        if tipo in fotos
    ]


def eliminar_foto(foto_id) -> Resultado:
    """
    Elimina una foto: primero el objeto, luego la fila.

    Un fallo del almacenamiento no impide borrar la fila; se devuelve como
    advertencia.
    """
    try:
        foto = FotoProgreso.objects.get(id=foto_id)
    except FotoProgreso.DoesNotExist:
        raise RegistroNoEncontradoError("Foto", foto_id)

    resultado = Resultado(valor=foto_id)
    advertencia = eliminar_objeto_foto(foto)
    if advertencia:
        resultado.advertencias.append(advertencia)

    foto.delete()
    logger.info("Foto %s eliminada", foto_id)
    return resultado
