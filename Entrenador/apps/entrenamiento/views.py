from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from apps.entrenamiento.servicios import asignaciones_service, nutricion_service, rutinas_service
from apps.socios.excepciones import RegistroNoEncontradoError, ValidationError
from apps.socios.views import leer_id, leer_json, respuesta_error


def serializar_asignacion(asignacion, estado):
    return {
        "id": asignacion.id,
        "plantilla_id": asignacion.PlantillaID_id,
        "plantilla": asignacion.PlantillaID.Nombre,
        "fecha_asignacion": asignacion.FechaAsignacion.isoformat(),
        "fecha_inicio": asignacion.FechaInicio.isoformat(),
        "fecha_fin": asignacion.FechaFin.isoformat(),
        "notas": asignacion.Notas or "",
        "estado": estado,
    }


@require_GET
def asignaciones_cliente_view(request, socio_id, tipo):
    hoy = timezone.localdate()
    try:
        filas = asignaciones_service.listar_asignaciones(tipo, socio_id, hoy)
        vigente = asignaciones_service.asignacion_vigente(tipo, socio_id, hoy)
    except ValidationError as e:
        return respuesta_error(e)

    return JsonResponse(
        {
            "asignaciones": [serializar_asignacion(a, estado) for a, estado in filas],
            "vigente_id": vigente.id if vigente else None,
        }
    )


@require_POST
def asignar_view(request, tipo):
    try:
        datos = leer_json(request)
        asignacion = asignaciones_service.asignar_plantilla(
            tipo,
            leer_id(datos.get("socio_id"), "socio_id"),
            leer_id(datos.get("plantilla_id"), "plantilla_id"),
            datos.get("fecha_inicio"),
            datos.get("fecha_fin"),
            notas=datos.get("notas", ""),
        )
    except (ValidationError, RegistroNoEncontradoError) as e:
        return respuesta_error(e)

    return JsonResponse(
        serializar_asignacion(asignacion, asignacion.estado(timezone.localdate())),
        status=201,
    )


@require_POST
def accion_asignacion_view(request, tipo, asignacion_id, accion):
    acciones = {
        "pausar": asignaciones_service.pausar_asignacion,
        "reanudar": asignaciones_service.reanudar_asignacion,
        "desasignar": asignaciones_service.desasignar,
    }
    if accion not in acciones:
        return JsonResponse({"error": "Acción no permitida"}, status=400)

    try:
        asignacion = acciones[accion](tipo, asignacion_id)
    except (ValidationError, RegistroNoEncontradoError) as e:
        return respuesta_error(e)

    if asignacion is None:
        return JsonResponse({"success": True})
    return JsonResponse(serializar_asignacion(asignacion, asignacion.estado(timezone.localdate())))


@require_GET
def rutina_detalle_view(request, plantilla_id):
    try:
        dias = rutinas_service.ejercicios_por_dia(plantilla_id)
    except RegistroNoEncontradoError as e:
        return respuesta_error(e)

    return JsonResponse(
        {
            "dias": [
                {
                    "numero_dia": dia["numero_dia"],
                    "nombre_dia": dia["nombre_dia"],
                    "ejercicios": [
                        {
                            "id": e.id,
                            "nombre": e.NombreEjercicio,
                            "series": e.Series,
                            "repeticiones": e.Repeticiones,
                            "descanso_segundos": e.DescansoSegundos,
                            "notas": e.Notas or "",
                            "foto": rutinas_service.url_foto_ejercicio(e),
                        }
                        for e in dia["ejercicios"]
                    ],
                }
                for dia in dias
            ]
        }
    )


@require_POST
def foto_ejercicio_view(request, ejercicio_id):
    try:
        resultado = rutinas_service.subir_foto_ejercicio(ejercicio_id, request.FILES.get("foto"))
    except (ValidationError, RegistroNoEncontradoError) as e:
        return respuesta_error(e)

    ejercicio = resultado.valor
    return JsonResponse(
        {
            "id": ejercicio.id,
            "foto": rutinas_service.url_foto_ejercicio(ejercicio),
            "advertencias": [a.como_dict() for a in resultado.advertencias],
        }
    )


@require_GET
def plantillas_nutricionales_view(request):
    return JsonResponse({"plantillas": nutricion_service.listar_plantillas_nutricionales()})
