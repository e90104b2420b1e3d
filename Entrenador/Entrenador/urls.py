from apps.entrenamiento import views as entrenamiento_views
from apps.socios import views as socios_views
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path

urlpatterns = [
    path("admin/", admin.site.urls),
    # CLIENTES
    path("clientes/", socios_views.clientes_view, name="clientes"),
    path(
        "clientes/verificar-documento/",
        socios_views.verificar_documento_view,
        name="verificar_documento",
    ),
    path("clientes/<int:socio_id>/", socios_views.cliente_detalle_view, name="cliente_detalle"),
    path("clientes/<int:socio_id>/renovar/", socios_views.renovar_view, name="renovar"),
    path(
        "clientes/<int:socio_id>/mensaje/",
        socios_views.mensaje_membresia_view,
        name="mensaje_membresia",
    ),
    path("exportar/", socios_views.exportar_view, name="exportar"),
    # MEDICIONES
    path(
        "clientes/<int:socio_id>/mediciones/",
        socios_views.mediciones_view,
        name="mediciones",
    ),
    path(
        "mediciones/<int:medicion_id>/",
        socios_views.medicion_detalle_view,
        name="medicion_detalle",
    ),
    path("mediciones/comparar/", socios_views.comparar_view, name="comparar_mediciones"),
    # ASIGNACIONES
    path(
        "clientes/<int:socio_id>/asignaciones/<str:tipo>/",
        entrenamiento_views.asignaciones_cliente_view,
        name="asignaciones_cliente",
    ),
    path("asignaciones/<str:tipo>/", entrenamiento_views.asignar_view, name="asignar"),
    path(
        "asignaciones/<str:tipo>/<int:asignacion_id>/<str:accion>/",
        entrenamiento_views.accion_asignacion_view,
        name="accion_asignacion",
    ),
    # PLANTILLAS
    path(
        "rutinas/<int:plantilla_id>/",
        entrenamiento_views.rutina_detalle_view,
        name="rutina_detalle",
    ),
    path(
        "rutinas/ejercicios/<int:ejercicio_id>/foto/",
        entrenamiento_views.foto_ejercicio_view,
        name="foto_ejercicio",
    ),
    path(
        "nutricion/plantillas/",
        entrenamiento_views.plantillas_nutricionales_view,
        name="plantillas_nutricionales",
    ),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
