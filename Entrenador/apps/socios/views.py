import json
import logging

from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from apps.socios.excepciones import (
    IdentidadDuplicadaError,
    RegistroNoEncontradoError,
    ValidationError,
)
from apps.socios.models import FotoProgreso, Socio
from apps.socios.servicios import (
    comparacion_service,
    exportacion_service,
    mediciones_service,
    membresia_service,
    mensajeria,
)
from apps.socios.servicios.calendario import fecha_a_texto

logger = logging.getLogger(__name__)


def respuesta_error(error):
    """Traduce los errores de los servicios a una respuesta JSON."""
    if isinstance(error, IdentidadDuplicadaError):
        return JsonResponse({"error": str(error), "campo": "cedula"}, status=409)
    if isinstance(error, RegistroNoEncontradoError):
        return JsonResponse({"error": str(error)}, status=404)
    return JsonResponse({"error": str(error)}, status=400)


def leer_json(request):
    try:
        return json.loads(request.body or b"{}")
    except json.JSONDecodeError:
        raise ValidationError("Formato inválido")


def leer_id(valor, campo):
    """Id entero recibido en el cuerpo de la petición (número o texto con dígitos)."""
    if isinstance(valor, int) and not isinstance(valor, bool):
        return valor
    if isinstance(valor, str) and valor.strip().isdigit():
        return int(valor)
    raise ValidationError(f"El campo {campo} debe ser un id numérico.")


def serializar_socio(socio, hoy):
    return {
        "id": socio.id,
        "documento": socio.documento,
        "tipo_documento": socio.TipoDocumento,
        "cedula": socio.Cedula,
        "nombre": socio.NombreCompleto,
        "telefono": socio.Telefono,
        "fecha_inicio": fecha_a_texto(socio.FechaInicio),
        "fecha_fin": fecha_a_texto(socio.FechaFin),
        "duracion_meses": socio.DuracionMeses,
        "estado": socio.estado(hoy),
        "dias_restantes": socio.dias_restantes(hoy),
    }


@require_http_methods(["GET", "POST"])
def clientes_view(request):
    hoy = timezone.localdate()

    if request.method == "POST":
        try:
            socio = membresia_service.registrar_socio(leer_json(request))
        except (ValidationError, RegistroNoEncontradoError) as e:
            return respuesta_error(e)
        return JsonResponse(serializar_socio(socio, hoy), status=201)

    filas = membresia_service.listar_socios_con_estado(
        hoy,
        estado=request.GET.get("estado") or None,
        busqueda=request.GET.get("q", ""),
    )
    return JsonResponse(
        {
            "clientes": [serializar_socio(socio, hoy) for socio, _, _ in filas],
            "resumen": membresia_service.resumen_estados(hoy),
        }
    )


@require_GET
def verificar_documento_view(request):
    excluir = request.GET.get("excluir")
    conflicto = membresia_service.verificar_identidad_duplicada(
        request.GET.get("tipo", Socio.DOCUMENTO_VENEZOLANO),
        request.GET.get("numero", ""),
        excluir_socio_id=int(excluir) if excluir and excluir.isdigit() else None,
    )
    if conflicto is None:
        return JsonResponse({"duplicado": False})
    return JsonResponse(
        {
            "duplicado": True,
            "mensaje": f"Ya existe un cliente con cédula {conflicto.documento}",
            "cliente": {"id": conflicto.id, "nombre": conflicto.NombreCompleto},
        }
    )


@require_http_methods(["POST", "DELETE"])
def cliente_detalle_view(request, socio_id):
    hoy = timezone.localdate()
    try:
        if request.method == "DELETE":
            resultado = membresia_service.eliminar_socio(socio_id)
            return JsonResponse(
                {
                    "success": True,
                    "advertencias": [a.como_dict() for a in resultado.advertencias],
                }
            )
        socio = membresia_service.actualizar_socio(socio_id, leer_json(request))
    except (ValidationError, RegistroNoEncontradoError) as e:
        return respuesta_error(e)
    return JsonResponse(serializar_socio(socio, hoy))


@require_POST
def renovar_view(request, socio_id):
    hoy = timezone.localdate()
    try:
        datos = leer_json(request)
        socio = membresia_service.renovar_membresia(
            socio_id,
            datos.get("meses"),
            hoy,
            nueva_fecha_inicio=datos.get("fecha_inicio") or None,
        )
    except (ValidationError, RegistroNoEncontradoError) as e:
        return respuesta_error(e)
    return JsonResponse(serializar_socio(socio, hoy))


@require_http_methods(["GET", "POST"])
def mediciones_view(request, socio_id):
    try:
        if request.method == "GET":
            return JsonResponse({"mediciones": mediciones_service.historial_mediciones(socio_id)})

        # multipart: campos en POST y fotos en FILES (frontal/lateral/posterior)
        medicion_id = request.POST.get("medicion_id") or None
        if medicion_id is not None:
            medicion_id = leer_id(medicion_id, "medicion_id")

        fotos = {tipo: request.FILES[tipo] for tipo in FotoProgreso.TIPOS if tipo in request.FILES}
        resultado = mediciones_service.guardar_medicion_con_fotos(
            socio_id,
            request.POST.dict(),
            fotos,
            medicion_id=medicion_id,
        )
    except (ValidationError, RegistroNoEncontradoError) as e:
        return respuesta_error(e)

    return JsonResponse(
        {
            "id": resultado.valor.id,
            "completo": resultado.completo,
            "advertencias": [a.como_dict() for a in resultado.advertencias],
        },
        status=201 if not request.POST.get("medicion_id") else 200,
    )


@require_http_methods(["DELETE"])
def medicion_detalle_view(request, medicion_id):
    try:
        resultado = mediciones_service.eliminar_medicion(medicion_id)
    except RegistroNoEncontradoError as e:
        return respuesta_error(e)
    return JsonResponse(
        {"success": True, "advertencias": [a.como_dict() for a in resultado.advertencias]}
    )


@require_GET
def comparar_view(request):
    inicio = request.GET.get("inicio")
    fin = request.GET.get("fin")
    if not (inicio and inicio.isdigit() and fin and fin.isdigit()):
        return JsonResponse({"error": "Debes indicar las dos mediciones a comparar."}, status=400)

    try:
        reporte = comparacion_service.comparar_mediciones(int(inicio), int(fin))
    except (ValidationError, RegistroNoEncontradoError) as e:
        return respuesta_error(e)

    datos = reporte.como_dict()
    datos["mensaje"] = mensajeria.datos_mensaje_progreso(reporte)
    return JsonResponse(datos)


@require_GET
def mensaje_membresia_view(request, socio_id):
    try:
        socio = Socio.objects.get(id=socio_id)
    except Socio.DoesNotExist:
        return respuesta_error(RegistroNoEncontradoError("Cliente", socio_id))
    return JsonResponse(mensajeria.datos_mensaje_membresia(socio, timezone.localdate()))


@require_GET
def exportar_view(request):
    return JsonResponse({"hojas": exportacion_service.filas_exportacion(timezone.localdate())})
