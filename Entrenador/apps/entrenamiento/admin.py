from django.contrib import admin
from django.utils import timezone

from .models import (
    EjercicioRutina,
    PlanNutricionalAsignado,
    PlantillaNutricional,
    PlantillaRutina,
    RutinaAsignada,
)


class EjercicioRutinaInline(admin.TabularInline):
    model = EjercicioRutina
    extra = 1
    fields = ["NumeroDia", "NombreDia", "NombreEjercicio", "Series", "Repeticiones", "DescansoSegundos", "Orden"]


@admin.register(PlantillaRutina)
class PlantillaRutinaAdmin(admin.ModelAdmin):
    list_display = ["Nombre", "Categoria", "Dificultad", "DuracionSemanas"]
    search_fields = ["Nombre"]
    list_filter = ["Categoria", "Dificultad"]
    inlines = [EjercicioRutinaInline]


@admin.register(PlantillaNutricional)
class PlantillaNutricionalAdmin(admin.ModelAdmin):
    list_display = ["Nombre", "Objetivo", "CaloriasDiarias", "ProteinaG", "CarbohidratosG", "GrasasG"]
    search_fields = ["Nombre"]
    list_filter = ["Objetivo"]


class AsignacionAdmin(admin.ModelAdmin):
    list_display = [
        "id",
        "get_socio_nombre",
        "PlantillaID",
        "FechaInicio",
        "FechaFin",
        "Pausada",
        "get_estado",
    ]
    list_filter = ["Pausada"]
    search_fields = ["SocioID__NombreCompleto", "PlantillaID__Nombre"]
    date_hierarchy = "FechaInicio"

    def get_socio_nombre(self, obj):
        return obj.SocioID.NombreCompleto

    get_socio_nombre.short_description = "Cliente"

    def get_estado(self, obj):
        return obj.estado(timezone.localdate())

    get_estado.short_description = "Estado"


admin.site.register(RutinaAsignada, AsignacionAdmin)
admin.site.register(PlanNutricionalAsignado, AsignacionAdmin)
