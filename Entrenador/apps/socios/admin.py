from django.contrib import admin
from django.utils import timezone

from .models import CondicionMedica, FotoProgreso, Medicion, Socio


class CondicionMedicaInline(admin.StackedInline):
    model = CondicionMedica
    extra = 0


@admin.register(Socio)
class SocioAdmin(admin.ModelAdmin):
    list_display = (
        "NombreCompleto",
        "get_documento",
        "Telefono",
        "FechaInicio",
        "FechaFin",
        "get_estado",
        "get_dias_restantes",
    )
    search_fields = ("NombreCompleto", "Cedula")
    list_filter = ("TipoDocumento",)
    inlines = [CondicionMedicaInline]

    def get_documento(self, obj):
        return obj.documento

    get_documento.short_description = "Cédula"

    def get_estado(self, obj):
        return obj.estado(timezone.localdate())

    get_estado.short_description = "Estado"

    def get_dias_restantes(self, obj):
        return obj.dias_restantes(timezone.localdate())

    get_dias_restantes.short_description = "Días restantes"


class FotoProgresoInline(admin.TabularInline):
    model = FotoProgreso
    extra = 0
    readonly_fields = ("RutaArchivo", "TipoContenido", "TamanoBytes")


@admin.register(Medicion)
class MedicionAdmin(admin.ModelAdmin):
    list_display = ("id", "get_socio_nombre", "Fecha", "Peso", "Cintura")
    search_fields = ("SocioID__NombreCompleto", "SocioID__Cedula")
    date_hierarchy = "Fecha"
    inlines = [FotoProgresoInline]

    def get_socio_nombre(self, obj):
        return obj.SocioID.NombreCompleto

    get_socio_nombre.short_description = "Cliente"
