import logging
from itertools import groupby

from django.conf import settings
from django.db import transaction

from apps.entrenamiento.models import EjercicioRutina, PlantillaRutina
from apps.socios.excepciones import RegistroNoEncontradoError, Resultado, ValidationError
from apps.socios.servicios.fotos_service import borrar_objeto, obtener_almacenamiento
from apps.socios.servicios.imagenes import extension_para, validar_imagen

logger = logging.getLogger(__name__)


def validar_numero_dia(numero_dia):
    """
    Valida que el día de la rutina esté en el rango válido (1-7).
    """
    if not isinstance(numero_dia, int) or numero_dia < 1 or numero_dia > 7:
        raise ValidationError("El día de la rutina debe ser un número entre 1 y 7.")


def validar_valores_positivos(series=None, descanso_segundos=None):
    """
    Valida que las series sean positivas y el descanso no sea negativo.
    """
    if series is not None and series <= 0:
        raise ValidationError("Las series deben ser un número positivo.")

    if descanso_segundos is not None and descanso_segundos < 0:
        raise ValidationError("El descanso no puede ser negativo.")


def _obtener_plantilla(plantilla_id):
    try:
        return PlantillaRutina.objects.get(id=plantilla_id)
    except PlantillaRutina.DoesNotExist:
        raise RegistroNoEncontradoError("Rutina", plantilla_id)


def _obtener_ejercicio(ejercicio_id):
    try:
        return EjercicioRutina.objects.get(id=ejercicio_id)
    except EjercicioRutina.DoesNotExist:
        raise RegistroNoEncontradoError("Ejercicio", ejercicio_id)


def crear_plantilla_rutina(nombre, descripcion="", categoria=None, dificultad=None, duracion_semanas=4):
    """
    Crea una plantilla de rutina reutilizable.

    Args:
        nombre: Nombre de la rutina
        descripcion: Texto libre
        categoria: hipertrofia, fuerza, resistencia, perdida_peso u otro
        dificultad: principiante, intermedio o avanzado
        duracion_semanas: Duración sugerida en semanas

    Returns:
        Objeto PlantillaRutina creado

    Raises:
        ValidationError: Si los datos son inválidos
    """
    if not nombre or not nombre.strip():
        raise ValidationError("El nombre de la rutina es obligatorio.")

    if categoria and categoria not in dict(PlantillaRutina.CATEGORIA_CHOICES):
        raise ValidationError(f"Categoría inválida: {categoria}.")

    if dificultad and dificultad not in dict(PlantillaRutina.DIFICULTAD_CHOICES):
        raise ValidationError(f"Dificultad inválida: {dificultad}.")

    if duracion_semanas is None or duracion_semanas < 1:
        raise ValidationError("La duración debe ser de al menos una semana.")

    plantilla = PlantillaRutina.objects.create(
        Nombre=nombre.strip(),
        Descripcion=(descripcion or "").strip() or None,
        Categoria=categoria or None,
        Dificultad=dificultad or None,
        DuracionSemanas=duracion_semanas,
    )
    logger.info("Plantilla de rutina %s creada", plantilla.id)
    return plantilla


def agregar_ejercicio(
    plantilla_id,
    numero_dia,
    nombre_dia,
    nombre_ejercicio,
    series,
    repeticiones,
    descanso_segundos=60,
    notas="",
    orden=None,
):
    """
    Agrega un ejercicio a un día de la plantilla.

    Si no se indica `orden`, el ejercicio queda al final del día.

    Raises:
        RegistroNoEncontradoError: Si la plantilla no existe
        ValidationError: Si los datos son inválidos
    """
    plantilla = _obtener_plantilla(plantilla_id)

    validar_numero_dia(numero_dia)
    validar_valores_positivos(series, descanso_segundos)

    if not nombre_ejercicio or not nombre_ejercicio.strip():
        raise ValidationError("El nombre del ejercicio es obligatorio.")

    if not str(repeticiones or "").strip():
        raise ValidationError("Las repeticiones son obligatorias.")

    with transaction.atomic():
        if orden is None:
            orden = EjercicioRutina.objects.filter(
                PlantillaRutinaID=plantilla, NumeroDia=numero_dia
            ).count()

        ejercicio = EjercicioRutina.objects.create(
            PlantillaRutinaID=plantilla,
            NumeroDia=numero_dia,
            NombreDia=(nombre_dia or f"Día {numero_dia}").strip(),
            NombreEjercicio=nombre_ejercicio.strip(),
            Series=series,
            Repeticiones=str(repeticiones).strip(),
            DescansoSegundos=descanso_segundos,
            Notas=(notas or "").strip() or None,
            Orden=orden,
        )
    return ejercicio


def ejercicios_por_dia(plantilla_id):
    """
    Agrupa los ejercicios de la plantilla por día.

    Returns:
        list de dicts {numero_dia, nombre_dia, ejercicios}
    """
    _obtener_plantilla(plantilla_id)
    ejercicios = EjercicioRutina.objects.filter(PlantillaRutinaID_id=plantilla_id)

    dias = []
    for numero_dia, grupo in groupby(ejercicios, key=lambda e: e.NumeroDia):
        grupo = list(grupo)
        dias.append(
            {
                "numero_dia": numero_dia,
                "nombre_dia": grupo[0].NombreDia,
                "ejercicios": grupo,
            }
        )
    return dias


def ruta_foto_ejercicio(ejercicio, extension):
    return f"ejercicios/{ejercicio.id}.{extension}"


def url_foto_ejercicio(ejercicio):
    if not ejercicio.RutaFoto:
        return None
    return obtener_almacenamiento().url(ejercicio.RutaFoto)


def subir_foto_ejercicio(ejercicio_id, archivo) -> Resultado:
    """
    Sube (o reemplaza) la foto de referencia de un ejercicio.

    Igual que con las fotos de progreso, el objeto anterior se borra después
    de guardar el nuevo y un fallo al borrarlo queda como advertencia.

    Returns:
        Resultado con el EjercicioRutina en `valor`
    """
    ejercicio = _obtener_ejercicio(ejercicio_id)
    validar_imagen(
        archivo,
        settings.FOTOS_EJERCICIO_TIPOS_PERMITIDOS,
        settings.FOTOS_EJERCICIO_MAX_BYTES,
    )

    almacenamiento = obtener_almacenamiento()
    ruta_anterior = ejercicio.RutaFoto

    ejercicio.RutaFoto = almacenamiento.save(ruta_foto_ejercicio(ejercicio, extension_para(archivo)), archivo)
    ejercicio.save(update_fields=["RutaFoto"])

    resultado = Resultado(valor=ejercicio)
    if ruta_anterior and ruta_anterior != ejercicio.RutaFoto:
        advertencia = borrar_objeto(ruta_anterior, "reemplazar_foto_ejercicio", almacenamiento)
        if advertencia:
            resultado.advertencias.append(advertencia)

    logger.info("Foto del ejercicio %s guardada", ejercicio.id)
    return resultado


def eliminar_foto_ejercicio(ejercicio_id) -> Resultado:
    ejercicio = _obtener_ejercicio(ejercicio_id)
    resultado = Resultado(valor=ejercicio)
    if not ejercicio.RutaFoto:
        return resultado

    advertencia = borrar_objeto(ejercicio.RutaFoto, "eliminar_foto_ejercicio", obtener_almacenamiento())
    if advertencia:
        resultado.advertencias.append(advertencia)

    ejercicio.RutaFoto = None
    ejercicio.save(update_fields=["RutaFoto"])
    logger.info("Foto del ejercicio %s eliminada", ejercicio.id)
    return resultado
