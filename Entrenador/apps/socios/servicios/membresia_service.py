import logging
import re
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Q

from apps.socios.excepciones import (
    IdentidadDuplicadaError,
    RegistroNoEncontradoError,
    Resultado,
    ValidationError,
)
from apps.socios.models import CondicionMedica, FotoProgreso, Socio
from apps.socios.servicios.calendario import (
    ESTADO_ACTIVO,
    ESTADO_POR_VENCER,
    ESTADO_VENCIDO,
    clasificar_ventana,
    parsear_fecha_local,
    sumar_meses,
)

logger = logging.getLogger(__name__)

DURACION_MINIMA = 1
DURACION_MAXIMA = 12

TELEFONO_RE = re.compile(r"^\+?[\d\s\-()]+$")


def _dias_aviso():
    return getattr(settings, "SOCIOS_DIAS_AVISO_VENCIMIENTO", 3)


def derivar_estado(fecha_fin, hoy, dias_aviso=None):
    """
    Estado de la membresía a partir de FechaFin y la fecha actual.

    - expired: la fecha de fin ya pasó
    - expiring: faltan `dias_aviso` días o menos (incluye el mismo día)
    - active: en cualquier otro caso

    No se guarda nunca: el estado cambia con solo pasar el tiempo.
    """
    if dias_aviso is None:
        dias_aviso = _dias_aviso()
    return clasificar_ventana(fecha_fin, hoy, dias_aviso)


def _obtener_socio(socio_id):
    try:
        return Socio.objects.get(id=socio_id)
    except Socio.DoesNotExist:
        raise RegistroNoEncontradoError("Cliente", socio_id)


def _normalizar_numero(numero):
    return (numero or "").strip()


def verificar_identidad_duplicada(tipo_documento, numero, excluir_socio_id=None):
    """
    Busca otro cliente con el mismo (tipo de documento, número).

    Se usa como validación en vivo mientras se escribe y otra vez al guardar,
    porque otra sesión puede haber registrado el documento entre ambas
    comprobaciones.

    Returns:
        Socio en conflicto, o None si el documento está libre.
    """
    numero = _normalizar_numero(numero)
    if not numero:
        return None

    qs = Socio.objects.filter(TipoDocumento=tipo_documento, Cedula=numero)
    if excluir_socio_id is not None:
        qs = qs.exclude(id=excluir_socio_id)
    return qs.first()


def _validar_duracion(duracion):
    try:
        duracion = int(duracion)
    except (TypeError, ValueError):
        raise ValidationError("La duración debe ser un número de meses.")
    if duracion < DURACION_MINIMA or duracion > DURACION_MAXIMA:
        raise ValidationError(
            f"La duración debe estar entre {DURACION_MINIMA} y {DURACION_MAXIMA} meses."
        )
    return duracion


def _validar_telefono(telefono):
    telefono = (telefono or "").strip()
    if not telefono:
        raise ValidationError("El teléfono es obligatorio.")
    digitos = re.sub(r"\D", "", telefono)
    if not TELEFONO_RE.match(telefono) or not 7 <= len(digitos) <= 15:
        raise ValidationError("El teléfono debe contener entre 7 y 15 dígitos (ej: +58 412 1234567).")
    return telefono


def _decimal_opcional(valor, campo):
    if valor is None or valor == "":
        return None
    try:
        numero = Decimal(str(valor))
    except InvalidOperation:
        raise ValidationError(f"El campo {campo} debe ser numérico.")
    if numero <= 0:
        raise ValidationError(f"El campo {campo} debe ser un número positivo.")
    return numero


def _fecha_opcional(valor):
    if valor in (None, ""):
        return None
    return parsear_fecha_local(valor)


def validar_datos_socio(data: dict):
    errors = []

    tipo = data.get("document_type") or Socio.DOCUMENTO_VENEZOLANO
    if tipo not in dict(Socio.DOCUMENTO_CHOICES):
        errors.append("El tipo de documento debe ser V o E.")

    numero = _normalizar_numero(data.get("cedula"))
    if not numero.isdigit():
        errors.append("La cédula debe contener solo dígitos.")

    if not (data.get("full_name") or "").strip():
        errors.append("El nombre completo es obligatorio.")

    for validador, valor in (
        (_validar_telefono, data.get("phone")),
        (_validar_duracion, data.get("duration_months")),
        (parsear_fecha_local, data.get("start_date")),
    ):
        try:
            validador(valor)
        except ValidationError as e:
            errors.append(str(e))

    if errors:
        raise ValidationError("Por favor, corrige los siguientes errores: " + "; ".join(errors))


def guardar_condicion_medica(socio, datos):
    """
    Crea, actualiza o elimina la condición médica del socio.

    Solo existe un registro si al menos una de las banderas es verdadera.
    """
    datos = datos or {}
    banderas = {
        "TienePatologia": bool(datos.get("has_pathology")),
        "TieneLesion": bool(datos.get("has_injury")),
        "TieneAlergias": bool(datos.get("has_allergies")),
    }

    if not any(banderas.values()):
        CondicionMedica.objects.filter(SocioID=socio).delete()
        return None

    condicion, _ = CondicionMedica.objects.update_or_create(
        SocioID=socio,
        defaults={
            **banderas,
            "DetallePatologia": (datos.get("pathology_detail") or "") if banderas["TienePatologia"] else "",
            "DetalleLesion": (datos.get("injury_detail") or "") if banderas["TieneLesion"] else "",
            "DetalleAlergias": (datos.get("allergies_detail") or "") if banderas["TieneAlergias"] else "",
        },
    )
    return condicion


def registrar_socio(data: dict) -> Socio:
    """
    Registra un cliente nuevo.

    FechaFin se calcula siempre como FechaInicio + DuracionMeses.

    Raises:
        ValidationError: datos inválidos
        IdentidadDuplicadaError: ya existe el documento
    """
    validar_datos_socio(data)

    tipo = data.get("document_type") or Socio.DOCUMENTO_VENEZOLANO
    numero = _normalizar_numero(data.get("cedula"))

    if verificar_identidad_duplicada(tipo, numero):
        raise IdentidadDuplicadaError(tipo, numero)

    fecha_inicio = parsear_fecha_local(data.get("start_date"))
    duracion = _validar_duracion(data.get("duration_months"))

    try:
        with transaction.atomic():
            socio = Socio.objects.create(
                TipoDocumento=tipo,
                Cedula=numero,
                NombreCompleto=data["full_name"].strip(),
                Telefono=_validar_telefono(data.get("phone")),
                FechaInicio=fecha_inicio,
                DuracionMeses=duracion,
                FechaFin=sumar_meses(fecha_inicio, duracion),
                FechaNacimiento=_fecha_opcional(data.get("birth_date")),
                PesoInicial=_decimal_opcional(data.get("initial_weight"), "peso inicial"),
                Altura=_decimal_opcional(data.get("height"), "altura"),
            )
            guardar_condicion_medica(socio, data.get("medical_condition"))
    except IntegrityError:
        # La restricción única de la base de datos ganó la carrera
        raise IdentidadDuplicadaError(tipo, numero)

    logger.info("Cliente %s registrado (%s)", socio.id, socio.documento)
    return socio


def actualizar_socio(socio_id, data: dict) -> Socio:
    """Actualización parcial; recalcula FechaFin si cambia el inicio o la duración."""
    socio = _obtener_socio(socio_id)

    tipo = data.get("document_type") or socio.TipoDocumento
    numero = _normalizar_numero(data.get("cedula")) or socio.Cedula

    if tipo not in dict(Socio.DOCUMENTO_CHOICES):
        raise ValidationError("El tipo de documento debe ser V o E.")
    if not numero.isdigit():
        raise ValidationError("La cédula debe contener solo dígitos.")

    if verificar_identidad_duplicada(tipo, numero, excluir_socio_id=socio.id):
        raise IdentidadDuplicadaError(tipo, numero)

    socio.TipoDocumento = tipo
    socio.Cedula = numero

    if "full_name" in data:
        nombre = (data.get("full_name") or "").strip()
        if not nombre:
            raise ValidationError("El nombre completo es obligatorio.")
        socio.NombreCompleto = nombre
    if "phone" in data:
        socio.Telefono = _validar_telefono(data.get("phone"))
    if "birth_date" in data:
        socio.FechaNacimiento = _fecha_opcional(data.get("birth_date"))
    if "initial_weight" in data:
        socio.PesoInicial = _decimal_opcional(data.get("initial_weight"), "peso inicial")
    if "height" in data:
        socio.Altura = _decimal_opcional(data.get("height"), "altura")

    if "start_date" in data or "duration_months" in data:
        if "start_date" in data:
            socio.FechaInicio = parsear_fecha_local(data["start_date"])
        if "duration_months" in data:
            socio.DuracionMeses = _validar_duracion(data["duration_months"])
        socio.FechaFin = sumar_meses(socio.FechaInicio, socio.DuracionMeses)

    try:
        with transaction.atomic():
            socio.save()
            if "medical_condition" in data:
                guardar_condicion_medica(socio, data.get("medical_condition"))
    except IntegrityError:
        raise IdentidadDuplicadaError(tipo, numero)

    logger.info("Cliente %s actualizado", socio.id)
    return socio


def renovar_membresia(socio_id, meses, hoy, nueva_fecha_inicio=None) -> Socio:
    """
    Renueva la membresía reiniciando la ventana.

    La nueva ventana empieza en `nueva_fecha_inicio` (o `hoy`) y termina en
    inicio + meses. No se suma a la FechaFin anterior.
    """
    socio = _obtener_socio(socio_id)
    duracion = _validar_duracion(meses)

    inicio = parsear_fecha_local(nueva_fecha_inicio) if nueva_fecha_inicio else hoy

    socio.FechaInicio = inicio
    socio.DuracionMeses = duracion
    socio.FechaFin = sumar_meses(inicio, duracion)
    socio.save(update_fields=["FechaInicio", "DuracionMeses", "FechaFin", "ActualizadoEn"])

    logger.info("Cliente %s renovado hasta %s", socio.id, socio.FechaFin)
    return socio


def eliminar_socio(socio_id) -> Resultado:
    """
    Elimina el cliente y, en cascada, sus mediciones, fotos y asignaciones.

    Los objetos de almacenamiento de las fotos se borran primero; si alguno
    falla el cliente se elimina igual y el fallo se devuelve como advertencia.
    """
    from apps.socios.servicios.fotos_service import eliminar_objeto_foto

    socio = _obtener_socio(socio_id)
    resultado = Resultado(valor=socio_id)

    fotos = FotoProgreso.objects.filter(MedicionID__SocioID=socio)
    for foto in fotos:
        advertencia = eliminar_objeto_foto(foto)
        if advertencia:
            resultado.advertencias.append(advertencia)

    with transaction.atomic():
        socio.delete()

    if resultado.advertencias:
        logger.warning(
            "Cliente %s eliminado con %d fotos sin borrar del almacenamiento",
            socio_id,
            len(resultado.advertencias),
        )
    else:
        logger.info("Cliente %s eliminado", socio_id)
    return resultado


def listar_socios_con_estado(hoy, estado=None, busqueda=""):
    """
    Clientes (más recientes primero) con su estado derivado.

    Returns:
        list de tuplas (Socio, estado, dias_restantes)
    """
    socios = Socio.objects.all()

    busqueda = (busqueda or "").strip()
    if busqueda:
        socios = socios.filter(
            Q(NombreCompleto__icontains=busqueda) | Q(Cedula__icontains=busqueda)
        )

    filas = []
    for socio in socios:
        estado_socio = socio.estado(hoy)
        if estado and estado_socio != estado:
            continue
        filas.append((socio, estado_socio, socio.dias_restantes(hoy)))
    return filas


def resumen_estados(hoy):
    resumen = {ESTADO_ACTIVO: 0, ESTADO_POR_VENCER: 0, ESTADO_VENCIDO: 0}
    for socio in Socio.objects.only("FechaFin"):
        resumen[derivar_estado(socio.FechaFin, hoy)] += 1
    resumen["total"] = sum(resumen.values())
    return resumen
